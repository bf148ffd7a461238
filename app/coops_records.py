"""
Decoders for NOAA CO-OPS prediction payloads.

CO-OPS encodes every value as a JSON string. The latest-prediction product
looks like:

    {"predictions": [{"t": "2025-01-02 08:48", "v": "4.415"}, ...]}

and the high/low product adds a type marker:

    {"predictions": [{"t": "2025-01-02 02:28", "v": "-0.342", "type": "L"}, ...]}

Timestamps are GMT because every request asks for time_zone=gmt.
"""
import json
import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List

from .errors import MalformedTimestamp, UpstreamFormatError
from .local_time import LocalCalendarTime


# Plain decimal numbers only: no whitespace, digit separators or nan/inf words
NUMBER_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


class TideType(str, Enum):
    """Kind of tidal extremum, using the CO-OPS type codes."""
    HIGH = "H"
    LOW = "L"


@dataclass(frozen=True)
class TidePrediction:
    timestamp: LocalCalendarTime
    height: float


@dataclass(frozen=True)
class TideExtremum:
    timestamp: LocalCalendarTime
    height: float
    kind: TideType


def _load_predictions(raw: bytes) -> List[Any]:
    try:
        data = json.loads(raw)
    except (ValueError, UnicodeDecodeError) as e:
        raise UpstreamFormatError(f"CO-OPS response is not valid JSON: {e}")

    if not isinstance(data, dict):
        raise UpstreamFormatError("CO-OPS response is not a JSON object")

    # CO-OPS reports request problems in the body with a 200 status
    if "predictions" not in data and isinstance(data.get("error"), dict):
        message = data["error"].get("message", "unknown error")
        raise UpstreamFormatError(f"CO-OPS returned an error: {message}")

    predictions = data.get("predictions")
    if not isinstance(predictions, list):
        raise UpstreamFormatError("CO-OPS response has no 'predictions' array")
    return predictions


def _string_field(entry: Dict[str, Any], key: str) -> str:
    value = entry.get(key)
    if not isinstance(value, str):
        raise UpstreamFormatError(f"Field '{key}' is missing or not a string: {value!r}")
    return value


def _parse_timestamp(entry: Dict[str, Any]) -> LocalCalendarTime:
    text = _string_field(entry, "t")
    try:
        return LocalCalendarTime.parse(text)
    except MalformedTimestamp as e:
        raise MalformedTimestamp(f"Field 't' does not match 'YYYY-MM-DD HH:MM': {text!r} ({e})")


def _parse_height(entry: Dict[str, Any]) -> float:
    text = _string_field(entry, "v")
    if not NUMBER_PATTERN.fullmatch(text):
        raise UpstreamFormatError(f"Field 'v' is not a number: {text!r}")
    value = float(text)
    if not math.isfinite(value):
        raise UpstreamFormatError(f"Field 'v' is not a finite number: {text!r}")
    return value


def _entries(raw: bytes):
    for entry in _load_predictions(raw):
        if not isinstance(entry, dict):
            raise UpstreamFormatError(f"Prediction entry is not an object: {entry!r}")
        yield entry


def decode_latest_payload(raw: bytes) -> List[TidePrediction]:
    """
    Decode a ``date=latest`` predictions response.

    Args:
        raw: Response body

    Returns:
        Predictions in the order CO-OPS returned them (possibly empty)

    Raises:
        UpstreamFormatError: If the body or any field cannot be decoded
    """
    return [
        TidePrediction(timestamp=_parse_timestamp(entry), height=_parse_height(entry))
        for entry in _entries(raw)
    ]


def decode_high_low_payload(raw: bytes) -> List[TideExtremum]:
    """
    Decode an ``interval=hilo`` predictions response.

    Raises:
        UpstreamFormatError: If the body or any field cannot be decoded,
            including a ``type`` other than "H" or "L"
    """
    extrema = []
    for entry in _entries(raw):
        timestamp = _parse_timestamp(entry)
        height = _parse_height(entry)
        type_code = _string_field(entry, "type")
        try:
            kind = TideType(type_code)
        except ValueError:
            raise UpstreamFormatError(f"Field 'type' must be 'H' or 'L': {type_code!r}")
        extrema.append(TideExtremum(timestamp=timestamp, height=height, kind=kind))
    return extrema
