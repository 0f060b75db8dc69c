"""API handlers for the application's endpoints."""

import logging
import time
from datetime import timedelta
from typing import Optional

from service_template.server.app import Handler, Request, Response, json_response

logger = logging.getLogger(__name__)


def format_uptime(seconds: float) -> str:
    """Format elapsed seconds as H:MM:SS."""
    return str(timedelta(seconds=int(max(seconds, 0))))


class APIHandler:
    """Builds the handler functions for the API endpoints."""

    def __init__(self, log: Optional[logging.Logger] = None):
        self.log = log or logger

    def health(self, up_time: float, build_date: str, build_tag: str) -> Handler:
        """Report uptime and build details.

        Args:
            up_time: ``time.monotonic()`` value taken when the server started.
            build_date: Build timestamp.
            build_tag: Build version or tag.
        """

        def handler(request: Request) -> Response:
            return json_response(
                200,
                {
                    "status": "ok",
                    "upTime": format_uptime(time.monotonic() - up_time),
                    "buildDate": build_date,
                    "buildTag": build_tag,
                },
            )

        return handler
