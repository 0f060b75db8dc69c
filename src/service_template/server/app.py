"""
Routing application and HTTP server bridge.

Handlers are plain functions from Request to Response. Global
middleware wraps the router, so it also sees 404 and 405 responses.
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, field
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Callable, Iterable, Optional
from urllib.parse import urlsplit

from service_template.exceptions import ServerError

logger = logging.getLogger(__name__)


@dataclass
class Request:
    """An incoming HTTP request."""

    method: str
    path: str
    query: str = ""
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    remote_addr: str = ""
    # Monotonic time after which the request should be abandoned
    deadline: Optional[float] = None
    # Headers set by middleware before calling the next handler. They are
    # added to whatever response the chain produces, including error
    # responses built further out.
    response_headers: dict[str, str] = field(default_factory=dict)

    @property
    def user_agent(self) -> str:
        for key, value in self.headers.items():
            if key.lower() == "user-agent":
                return value
        return ""

    def time_remaining(self) -> Optional[float]:
        """Seconds until the deadline, or None if there is none.

        Part of the handler API: long-running handlers call this to stop
        work once the timeout middleware's deadline has passed.
        """
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())


@dataclass
class Response:
    """An outgoing HTTP response."""

    status: int = 200
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""

    def json(self) -> Any:
        """Decode a JSON body. Used when inspecting responses from ``App.handle``."""
        return json.loads(self.body)


Handler = Callable[[Request], Response]
MiddlewareFunc = Callable[[Handler], Handler]


def json_response(status: int, payload: Any) -> Response:
    """Build a JSON response."""
    return Response(
        status=status,
        headers={"Content-Type": "application/json"},
        body=json.dumps(payload).encode("utf-8"),
    )


@dataclass(frozen=True)
class Endpoint:
    """A route: HTTP method and path bound to a handler."""

    method: str
    path: str
    handler: Handler


def GET(path: str, handler: Handler) -> Endpoint:
    return Endpoint("GET", path, handler)


def POST(path: str, handler: Handler) -> Endpoint:
    """Route helper for endpoint groups added next to ``/health`` in routes.py."""
    return Endpoint("POST", path, handler)


class App:
    """Routes requests to endpoints through a chain of global middleware.

    Middleware added first runs outermost.
    """

    def __init__(self) -> None:
        self._routes: dict[str, dict[str, Handler]] = {}
        self._middlewares: list[MiddlewareFunc] = []

    def add_global_middleware(self, middleware: MiddlewareFunc) -> None:
        self._middlewares.append(middleware)

    def add_endpoints(self, endpoints: Iterable[Endpoint]) -> None:
        """Register endpoints.

        Raises:
            ServerError: If a method and path pair is already registered.
        """
        for endpoint in endpoints:
            methods = self._routes.setdefault(endpoint.path, {})
            method = endpoint.method.upper()
            if method in methods:
                raise ServerError(
                    "Duplicate route",
                    context={"method": method, "path": endpoint.path},
                )
            methods[method] = endpoint.handler

    def get_routes(self) -> dict[str, list[str]]:
        """Return registered paths with their methods, both sorted."""
        return {path: sorted(self._routes[path]) for path in sorted(self._routes)}

    def handle(self, request: Request) -> Response:
        """Run a request through the middleware chain and the router."""
        handler: Handler = self._route
        for middleware in reversed(self._middlewares):
            handler = middleware(handler)
        response = handler(request)
        for key, value in request.response_headers.items():
            response.headers.setdefault(key, value)
        return response

    def _route(self, request: Request) -> Response:
        methods = self._routes.get(request.path)
        if methods is None:
            return json_response(404, {"error": "Not found"})
        method = request.method.upper()
        handler = methods.get(method)
        if handler is None and method == "HEAD":
            # HEAD is answered by the GET handler; the body is dropped on write
            handler = methods.get("GET")
        if handler is None:
            response = json_response(405, {"error": "Method not allowed"})
            response.headers["Allow"] = ", ".join(sorted(methods))
            return response
        return handler(request)

    def make_server(
        self,
        host: str,
        port: int,
        read_timeout: float = 30.0,
        write_timeout: float = 30.0,
    ) -> ThreadingHTTPServer:
        """Create a threaded HTTP server that dispatches to this app.

        The socket timeout is the larger of the read and write timeouts.

        Raises:
            ServerError: If the address cannot be bound.
        """
        request_handler = _make_request_handler(self, max(read_timeout, write_timeout))
        try:
            return ThreadingHTTPServer((host, port), request_handler)
        except OSError as e:
            raise ServerError(
                "Cannot bind server socket",
                context={"host": host, "port": port, "reason": e.strerror or str(e)},
                suggestions=["Stop the process using the port", "Set PORT to a free port"],
            ) from e

    def run(self, server: ThreadingHTTPServer) -> None:
        """Serve until interrupted, then close the server."""
        host, port = server.server_address[:2]
        logger.info(f"Listening on {host or '0.0.0.0'}:{port}")
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            logger.info("Shutting down")
        finally:
            server.server_close()


def _make_request_handler(app: App, socket_timeout: float) -> type[BaseHTTPRequestHandler]:
    class _RequestHandler(BaseHTTPRequestHandler):
        timeout = socket_timeout

        def _dispatch(self) -> None:
            url = urlsplit(self.path)
            raw_length = self.headers.get("Content-Length") or "0"
            try:
                length = int(raw_length)
                if length < 0:
                    raise ValueError(raw_length)
            except ValueError:
                logger.warning(
                    f"Rejected {self.command} {url.path}: invalid Content-Length {raw_length!r}"
                )
                self.close_connection = True
                self._write(json_response(400, {"error": "Invalid Content-Length header"}))
                return

            request = Request(
                method=self.command,
                path=url.path,
                query=url.query,
                headers=dict(self.headers.items()),
                body=self.rfile.read(length) if length > 0 else b"",
                remote_addr=f"{self.client_address[0]}:{self.client_address[1]}",
            )
            self._write(app.handle(request))

        def _write(self, response: Response) -> None:
            self.send_response(response.status)
            for key, value in response.headers.items():
                self.send_header(key, value)
            self.send_header("Content-Length", str(len(response.body)))
            self.end_headers()
            if self.command != "HEAD":
                self.wfile.write(response.body)

        do_GET = _dispatch
        do_HEAD = _dispatch
        do_POST = _dispatch
        do_PUT = _dispatch
        do_PATCH = _dispatch
        do_DELETE = _dispatch
        do_OPTIONS = _dispatch

        def log_message(self, format: str, *args: Any) -> None:
            # Request logging is done by middleware
            logger.debug(format % args)

    return _RequestHandler
