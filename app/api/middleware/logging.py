# 📄 File: app/api/middleware/logging.py
# 🧭 Purpose (Layman Explanation):
# Writes one log line for every request the service receives and every response it
# sends back, and tags both with a request number so related log lines can be found.
#
# 🧪 Purpose (Technical Summary):
# Request logging middleware. Reuses an incoming X-Request-ID or generates one, binds it
# to the logging context for the duration of the request, logs method, path, status and
# timing, and echoes the id in the response header. Bodies and credentials are never
# logged.
#
# 🔗 Dependencies:
# - Starlette BaseHTTPMiddleware
# - app.shared.utils.logging (log_context)
#
# 🔄 Connected Modules / Calls From:
# - app/main.py (middleware registration)

import logging
import time
from typing import Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from app.shared.utils.logging import log_context

logger = logging.getLogger(__name__)

EXCLUDED_PATHS = {"/health", "/favicon.ico"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Request/response logging with request correlation.
    """

    def __init__(self, app: ASGIApp):
        super().__init__(app)
        self.request_id_header = "X-Request-ID"

    async def dispatch(self, request: Request, call_next) -> Response:
        """
        Process and log HTTP requests/responses.

        Args:
            request: HTTP request
            call_next: Next middleware or endpoint

        Returns:
            HTTP response
        """
        incoming_id = request.headers.get(self.request_id_header)

        with log_context(request_id=incoming_id) as context:
            request_id = context["request_id"]
            request.state.request_id = request_id

            if request.url.path in EXCLUDED_PATHS:
                response = await call_next(request)
                response.headers[self.request_id_header] = request_id
                return response

            start_time = time.perf_counter()
            logger.info(f"→ {request.method} {request.url.path}")

            try:
                response = await call_next(request)
            except Exception:
                processing_time = time.perf_counter() - start_time
                logger.error(
                    f"✗ {request.method} {request.url.path} failed after {processing_time:.3f}s",
                    exc_info=True,
                )
                raise

            processing_time = time.perf_counter() - start_time
            self._log_response(request, response.status_code, processing_time)

            response.headers[self.request_id_header] = request_id
            response.headers["X-Response-Time"] = f"{processing_time:.3f}s"
            return response

    def _log_response(self, request: Request, status_code: int, processing_time: float) -> None:
        message = f"← {request.method} {request.url.path} {status_code} ({processing_time:.3f}s)"
        if status_code >= 500:
            logger.error(message)
        elif status_code >= 400:
            logger.warning(message)
        else:
            logger.info(message)


def get_request_id(request: Request) -> Optional[str]:
    """
    Get request ID from request state.

    Args:
        request: HTTP request

    Returns:
        Request ID if available
    """
    return getattr(request.state, "request_id", None)
