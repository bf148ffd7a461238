"""
Display formatting for the tide report.

The output is designed to make writing the TRMNL plugin as easy as possible,
so every value is pre-formatted as a string ready for display.
"""
from datetime import timezone
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import List

from pydantic import BaseModel

from .coops_records import TideExtremum, TidePrediction
from .local_time import LocalCalendarTime, ZoneLike
from .tide_status import TideStatus, status_for_extremum

ONE_DECIMAL = Decimal("0.1")

# Enough digits to quantize any finite float (up to ~1.8e308) to one decimal
HEIGHT_CONTEXT = Context(prec=400)


class RenderedTidePoint(BaseModel):
    time: str
    height: str
    type: TideStatus


class TideReport(BaseModel):
    current: RenderedTidePoint
    future: List[RenderedTidePoint]


def format_height(height: float) -> str:
    """
    Format a height to one decimal place.

    Rounds half away from zero on the shortest decimal representation of the
    value, so 4.45 gives "4.5" and -0.25 gives "-0.3".
    """
    return str(Decimal(repr(height)).quantize(ONE_DECIMAL, rounding=ROUND_HALF_UP, context=HEIGHT_CONTEXT))


def render(timestamp: LocalCalendarTime, height: float, status: TideStatus, zone: ZoneLike) -> RenderedTidePoint:
    """
    Render a GMT timestamp and height for display in ``zone``.

    Args:
        timestamp: Civil time in GMT, as reported by CO-OPS
        height: Height in feet above MLLW
        status: Tide status to attach
        zone: Display time zone

    Returns:
        RenderedTidePoint with 12-hour local time and one-decimal height

    Raises:
        TimeZoneConversionError: If the instant cannot be expressed in ``zone``
    """
    local = LocalCalendarTime.from_instant(timestamp.to_instant(timezone.utc), zone)
    return RenderedTidePoint(time=local.format_12_hour(), height=format_height(height), type=status)


def render_prediction(prediction: TidePrediction, status: TideStatus, zone: ZoneLike) -> RenderedTidePoint:
    return render(prediction.timestamp, prediction.height, status, zone)


def render_extremum(extremum: TideExtremum, zone: ZoneLike) -> RenderedTidePoint:
    return render(extremum.timestamp, extremum.height, status_for_extremum(extremum), zone)
