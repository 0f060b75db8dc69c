"""
Config command for service-template CLI.

Usage:
    service-template config             Show effective configuration with sources
    service-template config paths       Show config file paths
    service-template config template    Print a documented config template
"""

import sys

from service_template.config import Config, generate_template, get_config_paths

HELP_TEXT = """\
service-template config [paths|template]

  Show the effective configuration as JSON, followed by the source of
  every value that is not a default.

Actions:
  paths       Show which config files would be loaded
  template    Print a documented template config file
"""


class ConfigCommand:
    """View the service configuration."""

    name = "config"

    def __init__(self, config: Config):
        self.config = config

    def help(self) -> str:
        return HELP_TEXT

    def synopsis(self) -> str:
        return "Show effective configuration"

    def run(self, args: list[str]) -> int:
        if not args:
            return self._show_config()

        action = args[0]
        if action == "paths":
            return self._show_paths()
        if action == "template":
            print(generate_template(), end="")
            return 0

        print(f"Unknown config action: {action}", file=sys.stderr)
        print(HELP_TEXT, end="")
        return 1

    def _show_config(self) -> int:
        print("# Effective service-template configuration")
        print(self.config.dump())

        overridden = [
            (f"{section}.{key}", self.config.get_source(f"{section}.{key}"))
            for section, values in self.config.to_dict().items()
            for key in values
        ]
        overridden = [(key, source) for key, source in overridden if source != "default"]
        if overridden:
            print()
            print("# Sources")
            for key, source in overridden:
                print(f"{key}: {source}")
        return 0

    def _show_paths(self) -> int:
        paths = get_config_paths()

        print("Config file paths:")
        for label in ("user", "project"):
            path = paths[label]
            print(f"  {label}: {path if path else '(not found)'}")
        return 0
