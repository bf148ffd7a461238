"""
Error taxonomy for the tide report pipeline.

Every error is terminal for the request that raised it. The HTTP layer maps
each class to a status code via ``status_code``.
"""


class TideServiceError(Exception):
    """Base exception for tide report errors."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def code(self) -> str:
        return type(self).__name__


class InvalidStation(TideServiceError):
    """Raised when the station id is not a non-empty string of digits."""

    status_code = 400


class InvalidTimeZone(TideServiceError):
    """Raised when the requested time zone is not a known IANA zone."""

    status_code = 400


class UnknownTimeZone(TideServiceError):
    """Raised when a zone identifier cannot be found in the zone database."""

    status_code = 400


class UpstreamUnavailable(TideServiceError):
    """Raised when NOAA CO-OPS cannot be reached or answers with an error status."""
    pass


class UpstreamFormatError(TideServiceError):
    """Raised when a CO-OPS payload is not the JSON shape we expect."""
    pass


class MalformedTimestamp(UpstreamFormatError):
    """Raised when a timestamp is not in "YYYY-MM-DD HH:MM" form."""

    @property
    def code(self) -> str:
        return UpstreamFormatError.__name__


class NoDataAvailable(TideServiceError):
    """Raised when CO-OPS returns no predictions for the station."""

    status_code = 404


class TimeZoneConversionError(TideServiceError):
    """Raised when an instant cannot be converted to civil time in a zone."""
    pass
