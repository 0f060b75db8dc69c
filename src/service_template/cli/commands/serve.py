"""Serve command: runs the API server."""

import logging
import time

from service_template.config import BuildInfo, Config
from service_template.exceptions import ConfigurationError, ServerError
from service_template.server import APIHandler, App, Middleware, get_endpoints

logger = logging.getLogger(__name__)


class ServeCommand:
    """Run the HTTP API server in the foreground."""

    name = "serve"

    def __init__(self, config: Config, build_info: BuildInfo):
        port = config.server.port
        if not isinstance(port, int) or not 0 <= port <= 65535:
            raise ConfigurationError(
                "Invalid server port",
                context={"port": port, "source": config.get_source("server.port")},
                suggestions=["Use a port between 0 and 65535"],
            )
        self.config = config
        self.build_info = build_info

    def help(self) -> str:
        return "service-template serve\n"

    def synopsis(self) -> str:
        return "Run the API server"

    def build_app(self, up_time: float) -> App:
        """Create the app with global middleware and all endpoints."""
        app = App()

        middlewares = Middleware(logger)
        app.add_global_middleware(middlewares.recover)
        app.add_global_middleware(middlewares.log_requests)
        app.add_global_middleware(middlewares.timeout(self.config.server.request_timeout))
        app.add_global_middleware(middlewares.cors)

        api_handler = APIHandler(logger)
        app.add_endpoints(
            get_endpoints(api_handler, up_time, self.build_info.date, self.build_info.tag)
        )
        return app

    def run(self, args: list[str]) -> int:
        server_config = self.config.server
        app = self.build_app(time.monotonic())

        logger.info("Registered routes:")
        for path, methods in app.get_routes().items():
            logger.info(f"{path}: {methods}")

        logger.info(
            f"Starting server on port {server_config.port} "
            f"({server_config.get_environment().value})"
        )
        try:
            server = app.make_server(
                "",
                server_config.port,
                read_timeout=server_config.read_timeout,
                write_timeout=server_config.write_timeout,
            )
        except ServerError as e:
            logger.error(f"Server failed to start: {e.message} ({e.context.get('reason')})")
            return 1

        app.run(server)
        return 0
