"""
Runtime configuration.

Values come from environment variables, optionally loaded from a .env file
in the working directory.
"""
import logging
import os

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _get_float_env(key: str, default: float) -> float:
    """Get a float value from environment variable or use default."""
    value = os.environ.get(key)
    if value is not None:
        try:
            return float(value)
        except ValueError:
            pass
    return default


def _get_int_env(key: str, default: int) -> int:
    """Get an int value from environment variable or use default."""
    value = os.environ.get(key)
    if value is not None:
        try:
            return int(value)
        except ValueError:
            pass
    return default


# =============================================================================
# NOAA CO-OPS
# =============================================================================

COOPS_BASE_URL = os.environ.get(
    'COOPS_BASE_URL', 'https://api.tidesandcurrents.noaa.gov/api/prod/datagetter'
)

# CO-OPS asks callers to identify themselves with the application parameter
COOPS_APPLICATION = os.environ.get('COOPS_APPLICATION', 'trmnl-tides')

# Timeout for each upstream request (in seconds)
COOPS_TIMEOUT_SECONDS = _get_float_env('COOPS_TIMEOUT_SECONDS', 10.0)

# Maximum response size accepted from CO-OPS (1 MB)
COOPS_MAX_RESPONSE_SIZE = _get_int_env('COOPS_MAX_RESPONSE_SIZE', 1 * 1024 * 1024)


# =============================================================================
# Request defaults
# =============================================================================

DEFAULT_STATION = os.environ.get('DEFAULT_STATION', '8453767')
DEFAULT_TIMEZONE = os.environ.get('DEFAULT_TIMEZONE', 'America/New_York')


# =============================================================================
# Logging
# =============================================================================

LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()


def setup_logging(level: str = LOG_LEVEL) -> None:
    """Configure the root logger with a single console handler."""
    formatter = logging.Formatter(
        fmt="[%(levelname)s] %(asctime)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)

    root_logger.handlers.clear()
    root_logger.addHandler(console_handler)

    # Quiet the per-request access log lines
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
