"""
Custom exception hierarchy for service-template.

Provides consistent error handling with context and suggestions.
All exceptions include:
- Context information (command names, config files, ports, etc.)
- Suggestions for how to fix the issue

Example::

    from service_template.exceptions import ConfigurationError

    raise ConfigurationError(
        "Invalid port number",
        context={"port": 70000, "source": "PORT"},
        suggestions=["Use a port between 0 and 65535"],
    )
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional


class ServiceTemplateError(Exception):
    """
    Base exception for all service-template errors.

    Attributes:
        context: Dictionary of contextual information
        suggestions: List of actionable suggestions for fixing the error
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        self.message = message
        self.context = context or {}
        self.suggestions = suggestions or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context and suggestions."""
        parts = [self.message]

        if self.context:
            parts.append("\n\nContext:")
            for key, value in self.context.items():
                parts.append(f"\n  {key}: {value}")

        if self.suggestions:
            parts.append("\n\nSuggestions:")
            for suggestion in self.suggestions:
                parts.append(f"\n  - {suggestion}")

        return "".join(parts)

    def __str__(self) -> str:
        return self._format_message()


class ConfigurationError(ServiceTemplateError):
    """
    Configuration or settings error.

    Raised when a config file is unreadable, contains invalid TOML, or an
    environment variable cannot be converted to the expected type.

    Example::

        raise ConfigurationError(
            "Invalid value for PORT",
            context={"value": "http", "expected": "integer"},
            suggestions=["Set PORT to a number such as 3000"],
        )
    """

    pass


class CommandRegistryError(ServiceTemplateError):
    """
    The command registry is malformed.

    Raised before dispatch when a registered name is empty or not a
    string, or when a factory is not callable.
    """

    pass


class ServerError(ServiceTemplateError):
    """
    HTTP server could not be started.

    Example::

        raise ServerError(
            "Cannot bind server socket",
            context={"host": "", "port": 3000, "reason": "Address already in use"},
            suggestions=["Stop the process using the port", "Set PORT to a free port"],
        )
    """

    pass


__all__ = [
    "ServiceTemplateError",
    "ConfigurationError",
    "CommandRegistryError",
    "ServerError",
]
