"""HTTP middleware for the API server."""

from __future__ import annotations

import logging
import time
from typing import Optional

from service_template.server.app import Handler, MiddlewareFunc, Request, Response, json_response

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}


class Middleware:
    """Provides the standard middleware functions, sharing one logger."""

    def __init__(self, log: Optional[logging.Logger] = None):
        self.log = log or logger

    def recover(self, next_handler: Handler) -> Handler:
        """Turn an exception raised by a handler into a 500 response."""

        def handler(request: Request) -> Response:
            try:
                return next_handler(request)
            except Exception as e:
                self.log.error(
                    f"Recovered from handler error on {request.method} {request.path}: {e}",
                    exc_info=True,
                )
                return json_response(500, {"error": "An internal server error occurred"})

        return handler

    def log_requests(self, next_handler: Handler) -> Handler:
        """Log every request once it has been handled."""

        def handler(request: Request) -> Response:
            start = time.perf_counter()
            response = next_handler(request)
            duration_ms = (time.perf_counter() - start) * 1000

            self.log.info(
                f"Request processed method={request.method} path={request.path} "
                f"status={response.status} duration={duration_ms:.2f}ms "
                f"user_agent={request.user_agent!r} remote_ip={request.remote_addr}"
            )
            return response

        return handler

    def timeout(self, seconds: float) -> MiddlewareFunc:
        """Give each request a deadline ``seconds`` from now.

        An earlier deadline already on the request is kept.
        """

        def middleware(next_handler: Handler) -> Handler:
            def handler(request: Request) -> Response:
                deadline = time.monotonic() + seconds
                if request.deadline is None or deadline < request.deadline:
                    request.deadline = deadline
                return next_handler(request)

            return handler

        return middleware

    def cors(self, next_handler: Handler) -> Handler:
        """Add CORS headers and answer preflight requests directly.

        The headers are registered on the request before the next handler
        runs, so ``App.handle`` also applies them to a 500 built by
        ``recover`` when an inner handler raises.
        """

        def handler(request: Request) -> Response:
            request.response_headers.update(CORS_HEADERS)
            if request.method.upper() == "OPTIONS":
                response = Response(status=200)
            else:
                response = next_handler(request)
            response.headers.update(CORS_HEADERS)
            return response

        return handler
