from __future__ import annotations

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from app.core.config import settings

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    _SKIP_PREFIXES = ("/docs", "/openapi", "/redoc", "/favicon.ico")

    async def dispatch(self, request: Request, call_next):
        request_id = uuid.uuid4().hex
        request.state.request_id = request_id
        started_at = time.perf_counter()
        status_code = 500

        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers["X-Request-ID"] = request_id
            return response
        finally:
            if settings.REQUEST_LOGGING_ENABLED and not self._should_skip(request.url.path):
                duration_ms = int((time.perf_counter() - started_at) * 1000)
                logger.info(
                    "%s %s -> %s (%dms)",
                    request.method,
                    request.url.path,
                    status_code,
                    duration_ms,
                    extra={"request_id": request_id, "status_code": status_code, "duration_ms": duration_ms},
                )

    def _should_skip(self, path: str) -> bool:
        if not path.startswith("/api/"):
            return True
        return path.startswith(self._SKIP_PREFIXES)
