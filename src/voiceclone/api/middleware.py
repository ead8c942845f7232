import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("voiceclone.api.middleware")


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log every request with its status code and elapsed time."""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        response: Response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        # Handler failures come back as 400s, so surface them above INFO
        level = logging.WARNING if response.status_code >= 400 else logging.INFO
        logger.log(
            level,
            f"{request.method} {request.url.path} | Status: {response.status_code} "
            f"| {elapsed_ms:.0f} ms",
        )
        return response
