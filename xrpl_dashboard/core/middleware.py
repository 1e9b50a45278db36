"""
Request Logging Middleware

Logs every API request with its status code and duration.
"""

import time
from typing import Callable
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from xrpl_dashboard.utils.logger import get_logger

logger = get_logger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware logging ``API Request: METHOD path`` for API routes.

    Documentation and static routes are passed through without logging.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """
        Log request, call handler, log outcome.

        Args:
            request: FastAPI request object
            call_next: Next middleware/handler in chain

        Returns:
            Response: HTTP response
        """
        if not request.url.path.startswith("/api/") or self._should_skip_middleware(request.url.path):
            return await call_next(request)

        logger.info(f"API Request: {request.method} {request.url.path}")
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.error(
                f"API Request failed: {request.method} {request.url.path} "
                f"after {elapsed_ms:.1f}ms: {str(e)}"
            )
            raise

        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            f"API Response: {request.method} {request.url.path} "
            f"{response.status_code} ({elapsed_ms:.1f}ms)"
        )
        return response

    def _should_skip_middleware(self, path: str) -> bool:
        """Check if middleware should be skipped for this path."""
        skip_paths = [
            "/api/docs",
            "/api/redoc",
            "/api/openapi.json",
        ]
        return any(path.startswith(skip) for skip in skip_paths)
