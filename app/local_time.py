"""
Civil date/time values in the format used by NOAA CO-OPS.

CO-OPS reports every timestamp as a bare "YYYY-MM-DD HH:MM" string with no
offset; the zone is whatever ``time_zone`` the request asked for. This module
keeps such values as plain calendar fields and only attaches a zone when
converting to or from an absolute instant.

All calendar queries use the proleptic Gregorian calendar.
"""
import calendar
from dataclasses import dataclass
from datetime import MAXYEAR, MINYEAR, datetime, timezone, tzinfo
from typing import Tuple, Union

from zoneinfo import ZoneInfo

from .errors import MalformedTimestamp, TimeZoneConversionError, UnknownTimeZone

ZoneLike = Union[str, tzinfo]


def resolve_zone(zone: ZoneLike) -> tzinfo:
    """
    Look up an IANA time zone.

    Args:
        zone: Zone identifier such as "America/New_York", or a tzinfo

    Returns:
        The matching tzinfo

    Raises:
        UnknownTimeZone: If the identifier is not in the zone database
    """
    if isinstance(zone, tzinfo):
        return zone
    if not zone:
        raise UnknownTimeZone("Empty time zone identifier")
    try:
        return ZoneInfo(zone)
    except (ValueError, KeyError, OSError):
        # ZoneInfoNotFoundError is a KeyError, malformed keys raise ValueError
        # and zone database folders such as "America" raise IsADirectoryError
        raise UnknownTimeZone(f"Unknown time zone: {zone}")


def _parse_number(part: str, text: str) -> int:
    if not part or not (part.isascii() and part.isdigit()):
        raise MalformedTimestamp(f"Non-numeric component {part!r} in timestamp: {text!r}")
    return int(part)


@dataclass(frozen=True, order=True)
class LocalCalendarTime:
    """A zone-less civil date and time, ordered by (year, month, day, hour, minute)."""

    year: int
    month: int   # 1-based
    day: int     # 1-based
    hour: int    # 0-23
    minute: int

    def __post_init__(self):
        if not 1 <= self.month <= 12:
            raise ValueError(f"month out of range: {self.month}")
        if not 1 <= self.day <= calendar.monthrange(self.year, self.month)[1]:
            raise ValueError(f"day out of range for {self.year}-{self.month:02d}: {self.day}")
        if not 0 <= self.hour <= 23:
            raise ValueError(f"hour out of range: {self.hour}")
        if not 0 <= self.minute <= 59:
            raise ValueError(f"minute out of range: {self.minute}")

    @classmethod
    def parse(cls, text: str) -> "LocalCalendarTime":
        """
        Parse a string like "2025-01-02 21:58".

        Raises:
            MalformedTimestamp: If the string is not in canonical form or
                names a date/time that does not exist
        """
        if not isinstance(text, str):
            raise MalformedTimestamp(f"Timestamp is not a string: {text!r}")

        parts = text.split(" ")
        if len(parts) != 2:
            raise MalformedTimestamp(f"Expected 'YYYY-MM-DD HH:MM', got {text!r}")

        date_parts = parts[0].split("-")
        time_parts = parts[1].split(":")
        if len(date_parts) != 3 or len(time_parts) != 2:
            raise MalformedTimestamp(f"Expected 'YYYY-MM-DD HH:MM', got {text!r}")

        year, month, day = (_parse_number(p, text) for p in date_parts)
        hour, minute = (_parse_number(p, text) for p in time_parts)
        if not MINYEAR <= year <= MAXYEAR:
            raise MalformedTimestamp(f"Year out of range in timestamp: {text!r}")
        try:
            return cls(year=year, month=month, day=day, hour=hour, minute=minute)
        except ValueError as e:
            raise MalformedTimestamp(f"Invalid timestamp {text!r}: {e}")

    def format(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d} {self.hour:02d}:{self.minute:02d}"

    def __str__(self) -> str:
        return self.format()

    @classmethod
    def from_instant(cls, instant: datetime, zone: ZoneLike) -> "LocalCalendarTime":
        """
        Civil time of an absolute instant as seen in ``zone``.

        Naive datetimes are taken to be UTC.
        """
        tz = resolve_zone(zone)
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=timezone.utc)
        try:
            local = instant.astimezone(tz)
        except (OverflowError, ValueError) as e:
            raise TimeZoneConversionError(f"Cannot convert {instant.isoformat()} to {tz}: {e}")
        return cls(year=local.year, month=local.month, day=local.day,
                   hour=local.hour, minute=local.minute)

    def to_instant(self, zone: ZoneLike) -> datetime:
        """Aware datetime for this civil time in ``zone``."""
        tz = resolve_zone(zone)
        try:
            return datetime(self.year, self.month, self.day, self.hour, self.minute, tzinfo=tz)
        except ValueError as e:
            raise TimeZoneConversionError(f"Cannot convert {self} to an instant in {tz}: {e}")

    def to_12_hour_clock(self) -> Tuple[str, str, str]:
        """
        Split into (hour, minute, meridiem) for display.

        Hours after noon are shifted down by 12. Midnight is left as hour 0,
        so 00:05 displays as "0:05 AM" and 12:00 as "12:00 PM".
        """
        if self.hour > 12:
            return str(self.hour - 12), f"{self.minute:02d}", "PM"
        if self.hour == 12:
            return "12", f"{self.minute:02d}", "PM"
        return str(self.hour), f"{self.minute:02d}", "AM"

    def format_12_hour(self) -> str:
        hour, minute, meridiem = self.to_12_hour_clock()
        return f"{hour}:{minute} {meridiem}"

    @property
    def day_of_week(self) -> int:
        """Day of the week, 1 = Sunday through 7 = Saturday."""
        return (calendar.weekday(self.year, self.month, self.day) + 1) % 7 + 1

    @property
    def day_of_week_name(self) -> str:
        return calendar.day_name[calendar.weekday(self.year, self.month, self.day)]

    @property
    def days_in_month(self) -> int:
        return calendar.monthrange(self.year, self.month)[1]

    @property
    def days_in_year(self) -> int:
        return 366 if calendar.isleap(self.year) else 365

    def days_in_month_to_date(self) -> int:
        """Days of the month already elapsed before this one."""
        return self.day - 1

    def days_in_month_from(self) -> int:
        """Days of the month remaining after this one."""
        return self.days_in_month - self.day

    # The CO-OPS API accepts dates as yyyyMMdd and date/times as yyyyMMdd HH:mm.
    @property
    def coops_date_string(self) -> str:
        return f"{self.year:04d}{self.month:02d}{self.day:02d}"

    @property
    def coops_date_time_string(self) -> str:
        return f"{self.coops_date_string} {self.hour:02d}:{self.minute:02d}"
