"""
Tide trend classification.

The tide is rising while the next extremum is a high and falling while it is
a low. Within 30 minutes of the next extremum (either side) the tide is
reported as that extremum.
"""
from datetime import timedelta, timezone
from enum import Enum

from .coops_records import TideExtremum, TidePrediction, TideType

# Window around an extremum in which the tide counts as standing at it
SLACK_WINDOW = timedelta(minutes=30)


class TideStatus(str, Enum):
    RISING = "rising"
    HIGH = "high"
    FALLING = "falling"
    LOW = "low"


def status_for_extremum(extremum: TideExtremum) -> TideStatus:
    return TideStatus.HIGH if extremum.kind == TideType.HIGH else TideStatus.LOW


def classify(latest: TidePrediction, next_extremum: TideExtremum) -> TideStatus:
    """
    Classify the current tide from the latest prediction and the next extremum.

    Both timestamps are GMT and are compared as instants.
    """
    latest_at = latest.timestamp.to_instant(timezone.utc)
    extremum_at = next_extremum.timestamp.to_instant(timezone.utc)

    if abs(latest_at - extremum_at) < SLACK_WINDOW:
        return status_for_extremum(next_extremum)
    return TideStatus.RISING if next_extremum.kind == TideType.HIGH else TideStatus.FALLING
