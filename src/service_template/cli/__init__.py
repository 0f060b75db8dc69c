"""
Command-line interface for service-template.

Provides the command dispatch framework and the ``service-template``
entry point:

    service-template serve             - Run the API server
    service-template config [paths]    - Show effective configuration
    service-template version           - Show version information
    service-template help <command>    - Show help for a command

Examples:
    PORT=8080 service-template serve
    service-template config paths
    service-template --help
"""

import logging
import os
import sys
from typing import List, Optional

from service_template import __version__
from service_template.cli.command_protocol import Command, CommandFactory, HelpFunc
from service_template.cli.dispatch import CLI
from service_template.cli.help import HelpCommand, default_help_func
from service_template.cli.registry import build_factories, discover_commands, validate_commands
from service_template.cli.utils import configure_logging, print_error
from service_template.config import BuildInfo, Config
from service_template.exceptions import ConfigurationError

__all__ = [
    "CLI",
    "Command",
    "CommandFactory",
    "HelpCommand",
    "HelpFunc",
    "PROG_NAME",
    "build_commands",
    "default_help_func",
    "main",
]

PROG_NAME = "service-template"

logger = logging.getLogger(__name__)


def build_commands(config: Config, build_info: BuildInfo) -> dict[str, CommandFactory]:
    """Assemble the registry of built-in commands."""
    commands = build_factories(
        discover_commands(),
        config=config,
        build_info=build_info,
        program=PROG_NAME,
        version=__version__,
    )
    validate_commands(commands)
    return commands


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for service-template CLI."""
    if argv is None:
        argv = sys.argv[1:]

    configure_logging(os.environ.get("LOG_LEVEL", "INFO"))

    try:
        config = Config.load()
    except ConfigurationError as e:
        logger.error(f"Error parsing config: {e.message}")
        print_error(e, verbose=os.environ.get("LOG_LEVEL", "").upper() == "DEBUG")
        return 1

    configure_logging(config.logging.level)

    cli = CLI(
        name=PROG_NAME,
        version=__version__,
        args=list(argv),
        commands=build_commands(config, BuildInfo()),
    )

    exit_code, err = cli.run()
    if err is not None:
        logger.error(f"Error running command: {err}")

    return exit_code
