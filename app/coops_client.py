"""
NOAA CO-OPS data API client.

Fetches tide predictions for a station from the CO-OPS datagetter endpoint:
https://api.tidesandcurrents.noaa.gov/api/prod/

All requests ask for GMT timestamps, MLLW datum and English units.
"""
import http.client
import logging
import urllib.error
import urllib.request
from typing import Dict, List, Optional
from urllib.parse import urlencode

from . import config
from .coops_records import TideExtremum, TidePrediction, decode_high_low_payload, decode_latest_payload
from .errors import UpstreamUnavailable
from .local_time import LocalCalendarTime

logger = logging.getLogger(__name__)

# We specify a 25 hour range to guarantee that we get at least 4 tides.
HIGH_LOW_RANGE_HOURS = 25


def safe_read_response(response, max_size: int) -> bytes:
    """
    Safely read HTTP response with size limit to prevent memory exhaustion.

    Args:
        response: urllib response object
        max_size: Maximum allowed response size in bytes

    Returns:
        Response body as bytes

    Raises:
        UpstreamUnavailable: If response exceeds size limit
    """
    # Check Content-Length header if available
    content_length = response.headers.get('Content-Length')
    if content_length and content_length.isdigit() and int(content_length) > max_size:
        raise UpstreamUnavailable(f"Response too large: {content_length} bytes (max: {max_size})")

    # Read with size limit (read one extra byte to detect overflow)
    data = response.read(max_size + 1)
    if len(data) > max_size:
        raise UpstreamUnavailable(f"Response exceeded size limit of {max_size} bytes")

    return data


class CoopsClient:
    """Blocking client for the two prediction products the tide report needs."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        application: Optional[str] = None,
        timeout: Optional[float] = None,
        max_response_size: Optional[int] = None,
    ):
        self.base_url = base_url or config.COOPS_BASE_URL
        self.application = application or config.COOPS_APPLICATION
        self.timeout = timeout if timeout is not None else config.COOPS_TIMEOUT_SECONDS
        self.max_response_size = max_response_size or config.COOPS_MAX_RESPONSE_SIZE

    def _base_params(self, station: str) -> Dict[str, str]:
        return {
            "station": station,
            "product": "predictions",
            "datum": "MLLW",
            "time_zone": "gmt",
            "units": "english",
            "application": self.application,
            "format": "json",
        }

    def _url(self, params: Dict[str, str]) -> str:
        # CO-OPS expects begin_date as yyyyMMdd+HH:mm, so keep the colon literal
        return f"{self.base_url}?{urlencode(params, safe=':')}"

    def latest_url(self, station: str) -> str:
        params = self._base_params(station)
        params["date"] = "latest"
        return self._url(params)

    def high_low_url(self, station: str, begin: LocalCalendarTime) -> str:
        """URL for the high/low extrema in the window starting at ``begin`` (GMT)."""
        params = self._base_params(station)
        params["interval"] = "hilo"
        params["begin_date"] = begin.coops_date_time_string
        params["range"] = str(HIGH_LOW_RANGE_HOURS)
        return self._url(params)

    def _get(self, url: str) -> bytes:
        logger.debug(f"GET {url}")
        try:
            with urllib.request.urlopen(url, timeout=self.timeout) as response:
                return safe_read_response(response, self.max_response_size)
        except urllib.error.HTTPError as e:
            raise UpstreamUnavailable(f"CO-OPS returned HTTP {e.code}: {e.reason}")
        except urllib.error.URLError as e:
            raise UpstreamUnavailable(f"CO-OPS request failed: {e.reason}")
        except (OSError, http.client.HTTPException) as e:
            # Timeouts surface here as TimeoutError
            raise UpstreamUnavailable(f"CO-OPS request failed: {e!r}")

    def fetch_latest(self, station: str) -> List[TidePrediction]:
        """Fetch and decode the latest prediction(s) for a station."""
        return decode_latest_payload(self._get(self.latest_url(station)))

    def fetch_high_low(self, station: str, begin: LocalCalendarTime) -> List[TideExtremum]:
        """Fetch and decode the high/low extrema for a station starting at ``begin``."""
        return decode_high_low_payload(self._get(self.high_low_url(station, begin)))
