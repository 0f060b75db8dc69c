"""
HTTP serving for service-template.

Provides a small routing application on top of the standard library
HTTP server, a middleware chain, and the health endpoint.

Example::

    from service_template.server import App, APIHandler, Middleware, get_endpoints

    app = App()
    mw = Middleware()
    app.add_global_middleware(mw.recover)
    app.add_endpoints(get_endpoints(APIHandler(), time.monotonic(), "2024-01-01", "dev"))
    app.run(app.make_server("", 3000))
"""

from service_template.server.app import (
    GET,
    POST,
    App,
    Endpoint,
    Handler,
    MiddlewareFunc,
    Request,
    Response,
    json_response,
)
from service_template.server.handlers import APIHandler
from service_template.server.middleware import Middleware
from service_template.server.routes import get_endpoints

__all__ = [
    "App",
    "APIHandler",
    "Endpoint",
    "GET",
    "POST",
    "Handler",
    "Middleware",
    "MiddlewareFunc",
    "Request",
    "Response",
    "get_endpoints",
    "json_response",
]
