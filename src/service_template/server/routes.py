"""Route definitions for the API server.

Endpoints are grouped by functional area and combined in
``get_endpoints``.
"""

from service_template.server.app import GET, Endpoint
from service_template.server.handlers import APIHandler


def get_endpoints(
    api_handler: APIHandler, up_time: float, build_date: str, build_tag: str
) -> list[Endpoint]:
    """Return all API endpoints."""
    health_endpoints = [
        GET("/health", api_handler.health(up_time, build_date, build_tag)),
    ]

    return health_endpoints
