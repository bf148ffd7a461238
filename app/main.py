import logging
import uuid

from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

from . import config
from .errors import TideServiceError
from .formatting import TideReport
from .tide_report import TideReportService


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Permissions-Policy"] = "geolocation=(), microphone=(), camera=()"
        return response


app = FastAPI(
    title="Current Tides API",
    description="Current tide status and upcoming high/low tides from NOAA CO-OPS, formatted for TRMNL displays",
    version="1.0.0",
)

# Add security headers middleware
app.add_middleware(SecurityHeadersMiddleware)

# Initialize services
report_service = TideReportService()


@app.exception_handler(TideServiceError)
async def tide_service_error_handler(request: Request, exc: TideServiceError):
    """Map pipeline errors to their HTTP status with a JSON body."""
    detail = exc.message
    if exc.status_code >= 500:
        error_id = uuid.uuid4().hex[:8]
        logger.error(f"Error {error_id} in {request.url.path}: {exc.code}: {exc.message}")
        detail = f"{exc.message} (ref: {error_id})"
    else:
        logger.info(f"Rejected {request.url.path}: {exc.code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.code, "detail": detail})


@app.get("/tides", response_model=TideReport)
async def get_tides(
    station: str = Query(config.DEFAULT_STATION, description="NOAA CO-OPS tide prediction station ID (digits only)"),
    tz: str = Query(config.DEFAULT_TIMEZONE, description="IANA time zone for displayed times, e.g. America/New_York"),
):
    """
    Get the current tide and the upcoming high/low tides for a station.

    The current tide is classified as rising or falling depending on whether
    the next extremum is a high or a low. Within 30 minutes of the next
    extremum it is reported as high or low.

    Times are formatted as "H:MM AM/PM" in the requested time zone and
    heights (feet above MLLW) to one decimal place.
    """
    try:
        # CO-OPS requests are blocking, keep them off the event loop
        return await run_in_threadpool(report_service.build_report, station, tz)
    except TideServiceError:
        raise
    except Exception:
        error_id = uuid.uuid4().hex[:8]
        logger.exception(f"Error {error_id} in get_tides")
        return JSONResponse(
            status_code=500,
            content={"error": "InternalError", "detail": f"Internal error (ref: {error_id})"},
        )


@app.get("/health")
async def health():
    return {"status": "healthy", "upstream": "NOAA CO-OPS"}
