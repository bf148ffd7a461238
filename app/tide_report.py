"""
Tide report pipeline.

Builds the "what is the tide doing now, and what will it do next" report for
a CO-OPS station:

1. Validate the station id and time zone
2. Fetch the latest prediction
3. Fetch the high/low extrema for the next 25 hours
4. Classify the current tide against the next extremum
5. Render current and upcoming tides in the requested zone

Every step either succeeds or raises a TideServiceError; no partial report is
ever returned. The service holds no per-request state.
"""
import logging
from datetime import datetime, timezone
from typing import Optional

from . import config
from .coops_client import CoopsClient
from .errors import InvalidStation, InvalidTimeZone, NoDataAvailable, UnknownTimeZone
from .formatting import TideReport, render_extremum, render_prediction
from .local_time import LocalCalendarTime, resolve_zone
from .tide_status import classify

logger = logging.getLogger(__name__)


def validate_station(station: Optional[str]) -> str:
    """Return the station id, or the default if none given. Must be ASCII digits."""
    if station is None:
        return config.DEFAULT_STATION
    if not station or not (station.isascii() and station.isdigit()):
        raise InvalidStation(f"Invalid NOAA tide station ID: {station!r}")
    return station


def validate_time_zone(tz_name: Optional[str]):
    """Resolve the display zone, or the default if none given."""
    if tz_name is None:
        tz_name = config.DEFAULT_TIMEZONE
    try:
        return resolve_zone(tz_name)
    except UnknownTimeZone:
        raise InvalidTimeZone(f"Invalid time zone: {tz_name!r}")


class TideReportService:
    """Assembles tide reports from CO-OPS predictions."""

    def __init__(self, client: Optional[CoopsClient] = None):
        self.client = client or CoopsClient()

    def build_report(
        self,
        station: Optional[str] = None,
        tz_name: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> TideReport:
        """
        Build the tide report for a station.

        Args:
            station: CO-OPS station id (digits only). Defaults to DEFAULT_STATION.
            tz_name: IANA zone for displayed times. Defaults to DEFAULT_TIMEZONE.
            now: Start of the high/low window. Defaults to the current time.

        Returns:
            TideReport with the current tide and the upcoming extrema

        Raises:
            InvalidStation, InvalidTimeZone: Bad caller input
            UpstreamUnavailable, UpstreamFormatError: CO-OPS failures
            NoDataAvailable: CO-OPS returned no predictions
            TimeZoneConversionError: Rendering failed
        """
        station = validate_station(station)
        zone = validate_time_zone(tz_name)

        latest = self.client.fetch_latest(station)
        if not latest:
            raise NoDataAvailable(f"No latest prediction available for station {station}")
        current = latest[-1]
        logger.debug(f"Station {station} latest prediction: {current.timestamp} GMT, {current.height} ft")

        # We perform all calculations in GMT and convert to the caller's zone on output
        if now is None:
            now = datetime.now(timezone.utc)
        begin = LocalCalendarTime.from_instant(now, timezone.utc)
        extrema = self.client.fetch_high_low(station, begin)
        if not extrema:
            raise NoDataAvailable(f"No high/low predictions available for station {station} from {begin} GMT")

        status = classify(current, extrema[0])
        logger.info(
            f"Station {station}: tide {status.value}, next {extrema[0].kind.name.lower()} "
            f"at {extrema[0].timestamp} GMT ({len(extrema)} extrema)"
        )

        return TideReport(
            current=render_prediction(current, status, zone),
            future=[render_extremum(extremum, zone) for extremum in extrema],
        )
