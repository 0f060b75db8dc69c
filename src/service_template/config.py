"""
Configuration support for service-template.

Provides hierarchical configuration loading from:
1. Environment variables: ENVIRONMENT, PORT, LOG_LEVEL
2. Project config: .service-template.toml or service-template.toml in project root
3. User config: ~/.config/service-template/config.toml

Environment variables override project config, and project config overrides user config.
"""

import json
import os
import sys
import warnings
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Mapping

from service_template import __version__
from service_template.exceptions import ConfigurationError

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

# Config file names to search for in project directories
CONFIG_FILENAMES = [".service-template.toml", "service-template.toml"]

# User-level config path
USER_CONFIG_PATH = Path.home() / ".config" / "service-template" / "config.toml"

# All known config keys for validation
KNOWN_KEYS = {
    "server": {
        "environment",
        "port",
        "read_timeout",
        "write_timeout",
        "request_timeout",
    },
    "logging": {"level"},
}

# Environment variable -> (section, key, converter)
ENV_VARS = {
    "ENVIRONMENT": ("server", "environment", str),
    "PORT": ("server", "port", int),
    "LOG_LEVEL": ("logging", "level", str),
}


class Environment(str, Enum):
    """Deployment environment."""

    LOCAL = "local"
    DEVELOPMENT = "development"
    PRODUCTION = "production"


@dataclass
class ServerConfig:
    """HTTP server settings."""

    environment: str = "local"
    port: int = 3000
    read_timeout: float = 30.0
    write_timeout: float = 30.0
    request_timeout: float = 5.0

    def get_environment(self) -> Environment:
        """Return the environment, treating unrecognised values as local."""
        try:
            return Environment(self.environment)
        except ValueError:
            return Environment.LOCAL

    def is_local(self) -> bool:
        return self.get_environment() is Environment.LOCAL

    def is_development(self) -> bool:
        return self.get_environment() is Environment.DEVELOPMENT

    def is_production(self) -> bool:
        return self.get_environment() is Environment.PRODUCTION


@dataclass
class LoggingConfig:
    """Logging settings."""

    level: str = "INFO"


@dataclass
class BuildInfo:
    """Build metadata handed to the commands that display it."""

    tag: str = __version__
    date: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat(timespec="seconds")
    )


@dataclass
class Config:
    """Merged configuration from all sources."""

    server: ServerConfig = field(default_factory=ServerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # Track which file or variable each setting came from
    _sources: dict = field(default_factory=dict, repr=False)

    @classmethod
    def load(
        cls,
        start_dir: Path | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> "Config":
        """
        Load configuration with precedence: environment > project > user > defaults.

        Args:
            start_dir: Directory to start searching from (default: current directory)
            environ: Environment mapping (default: os.environ)

        Returns:
            Merged configuration object

        Raises:
            ConfigurationError: If a config file or environment variable is invalid
        """
        if start_dir is None:
            start_dir = Path.cwd()
        if environ is None:
            environ = os.environ

        config = cls()
        sources: dict[str, str] = {}

        # Load user config first (lower precedence)
        if USER_CONFIG_PATH.exists():
            user_data = _load_toml_file(USER_CONFIG_PATH)
            _merge_config(config, user_data, str(USER_CONFIG_PATH), sources)

        # Load project config (higher precedence)
        project_config = _find_project_config(start_dir)
        if project_config:
            project_data = _load_toml_file(project_config)
            _merge_config(config, project_data, str(project_config), sources)

        _merge_environment(config, environ, sources)

        config._sources = sources
        return config

    def get_source(self, key: str) -> str:
        """Get the source file or variable for a config key."""
        return self._sources.get(key, "default")

    def to_dict(self) -> dict[str, Any]:
        return {"server": asdict(self.server), "logging": asdict(self.logging)}

    def dump(self) -> str:
        """Return an indented JSON representation of the configuration."""
        return json.dumps(self.to_dict(), indent=1)


def _find_project_config(start_dir: Path) -> Path | None:
    """
    Find project config by walking up the directory tree.

    Stops at .git directory or filesystem root.

    Args:
        start_dir: Directory to start searching from

    Returns:
        Path to config file if found, None otherwise
    """
    current = start_dir.resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        # Stop at .git directory (project root)
        if (current / ".git").exists():
            break

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def _load_toml_file(path: Path) -> dict[str, Any]:
    """
    Load a TOML file.

    Raises:
        ConfigurationError: If the file is unreadable or not valid TOML
    """
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(
            f"Invalid TOML in {path}: {e}",
            context={"file": str(path)},
            suggestions=["Check the file with a TOML validator"],
        ) from e
    except OSError as e:
        raise ConfigurationError(
            f"Cannot read config file {path}: {e}",
            context={"file": str(path)},
        ) from e


def _merge_config(
    config: Config, data: dict[str, Any], source: str, sources: dict[str, str]
) -> None:
    """
    Merge loaded config data into Config object.

    Args:
        config: Config object to update
        data: Raw config data from TOML
        source: Source file path (for tracking)
        sources: Dict to update with source info
    """
    for key in data:
        if key not in KNOWN_KEYS:
            warnings.warn(f"Unknown config key '{key}' in {source}", stacklevel=3)

    for section_name, known in KNOWN_KEYS.items():
        section_data = data.get(section_name)
        if not isinstance(section_data, dict):
            continue
        _warn_unknown_keys(section_data, known, section_name, source)

        section = getattr(config, section_name)
        for key in sorted(known):
            if key in section_data:
                setattr(section, key, section_data[key])
                sources[f"{section_name}.{key}"] = source


def _merge_environment(
    config: Config, environ: Mapping[str, str], sources: dict[str, str]
) -> None:
    """Apply environment variable overrides."""
    for var, (section_name, key, convert) in ENV_VARS.items():
        raw = environ.get(var)
        if raw is None or raw == "":
            continue
        try:
            value = convert(raw)
        except ValueError as e:
            raise ConfigurationError(
                f"Invalid value for {var}",
                context={"variable": var, "value": raw, "expected": convert.__name__},
                suggestions=[f"Set {var} to a valid {convert.__name__}"],
            ) from e
        setattr(getattr(config, section_name), key, value)
        sources[f"{section_name}.{key}"] = f"${var}"


def _warn_unknown_keys(data: dict[str, Any], known: set[str], section: str, source: str) -> None:
    """Warn about unknown keys in a config section."""
    for key in data:
        if key not in known:
            warnings.warn(f"Unknown config key '{section}.{key}' in {source}", stacklevel=4)


def generate_template() -> str:
    """
    Generate a template config file with all options documented.

    Returns:
        Template TOML string
    """
    return """# service-template configuration file
# Place as .service-template.toml in project root or
# ~/.config/service-template/config.toml for user defaults

[server]
# Deployment environment: local, development, production
# environment = "local"

# Port the server listens on (overridden by $PORT)
# port = 3000

# Socket read/write timeouts in seconds
# read_timeout = 30.0
# write_timeout = 30.0

# Per-request processing deadline in seconds
# request_timeout = 5.0

[logging]
# Log level: DEBUG, INFO, WARNING, ERROR (overridden by $LOG_LEVEL)
# level = "INFO"
"""


def get_config_paths() -> dict[str, Path | None]:
    """
    Get paths to config files that would be loaded.

    Returns:
        Dict with 'user' and 'project' keys
    """
    project_config = _find_project_config(Path.cwd())

    return {
        "user": USER_CONFIG_PATH if USER_CONFIG_PATH.exists() else None,
        "project": project_config,
    }
