"""
Observability middleware and logging setup.

Adds correlation IDs and one structured log line per request.
"""

import time
import uuid
import logging
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("parcel_delivery.requests")

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

REQUEST_LOG_FORMAT = (
    "%(method)s %(path)s %(status_code)s %(duration_ms).2fms "
    "correlation_id=%(correlation_id)s ip=%(ip)s caller=%(caller)s"
)


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once at startup."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


class ObservabilityMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        correlation_id = request.headers.get("X-Correlation-ID", str(uuid.uuid4()))
        request.state.correlation_id = correlation_id

        start_time = time.perf_counter()
        response = await call_next(request)
        process_time = (time.perf_counter() - start_time) * 1000  # ms

        response.headers["X-Correlation-ID"] = correlation_id
        response.headers["X-Process-Time"] = f"{process_time:.2f}"

        log_data = {
            "correlation_id": correlation_id,
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "duration_ms": round(process_time, 2),
            "ip": request.client.host if request.client else "unknown",
            "caller": "-",
        }
        identity = getattr(request.state, "identity", None)
        if identity is not None:
            log_data["caller"] = identity.email

        if response.status_code >= 500:
            logger.error("Request Failed: " + REQUEST_LOG_FORMAT, log_data, extra=log_data)
        elif response.status_code >= 400:
            logger.warning("Request Error: " + REQUEST_LOG_FORMAT, log_data, extra=log_data)
        else:
            logger.info("Request API: " + REQUEST_LOG_FORMAT, log_data, extra=log_data)

        return response
