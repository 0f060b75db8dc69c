"""Command registry for service-template CLI.

A registry is a plain mapping of command name to factory. This module
provides the helpers around it: ordering for display, validation before
dispatch, and auto-discovery of the built-in command classes.

Usage:
    from service_template.cli.registry import build_factories, discover_commands

    classes = discover_commands()
    commands = build_factories(classes, config=config, build_info=build_info)
"""

import importlib
import inspect
import logging
import pkgutil
from typing import Any, Mapping

from service_template.cli.command_protocol import Command, CommandFactory
from service_template.exceptions import CommandRegistryError

logger = logging.getLogger(__name__)

DEFAULT_COMMANDS_PACKAGE = "service_template.cli.commands"


def sorted_command_names(commands: Mapping[str, CommandFactory]) -> list[str]:
    """Return registered command names in lexicographic order."""
    return sorted(commands)


def validate_commands(commands: Mapping[str, CommandFactory]) -> None:
    """Check that every entry has a non-empty string name and a callable factory.

    Raises:
        CommandRegistryError: On the first malformed entry.
    """
    for name, factory in commands.items():
        if not isinstance(name, str) or not name:
            raise CommandRegistryError(
                "Command names must be non-empty strings",
                context={"name": repr(name)},
            )
        if not callable(factory):
            raise CommandRegistryError(
                f"Factory for command '{name}' is not callable",
                context={"command": name, "factory": repr(factory)},
                suggestions=["Register a function or class that returns a Command"],
            )


def discover_commands(package: str = DEFAULT_COMMANDS_PACKAGE) -> dict[str, type]:
    """Discover command classes in a commands subpackage.

    Scans the package for modules that export a class with a ``name``
    attribute that implements the Command protocol.

    Args:
        package: Dotted name of the package to scan.

    Returns:
        Dict mapping command names to command classes.
    """
    commands: dict[str, type] = {}

    pkg = importlib.import_module(package)
    for _importer, modname, _ispkg in pkgutil.iter_modules(pkg.__path__):
        if modname.startswith("_"):
            continue
        module = importlib.import_module(f"{package}.{modname}")

        for attr_name in dir(module):
            obj = getattr(module, attr_name)
            if (
                isinstance(obj, type)
                and obj.__module__ == module.__name__
                and isinstance(getattr(obj, "name", None), str)
                and all(callable(getattr(obj, m, None)) for m in ("help", "synopsis", "run"))
            ):
                logger.debug(f"Discovered command {obj.name!r} in {module.__name__}")
                commands[obj.name] = obj

    return commands


def build_factories(classes: Mapping[str, type], **deps: Any) -> dict[str, CommandFactory]:
    """Wrap command classes in lazy zero-argument factories.

    Each class is constructed only when its factory is called, receiving
    the subset of ``deps`` that its ``__init__`` accepts.

    Args:
        classes: Dict of command name -> command class.
        **deps: Dependencies available to command constructors.

    Returns:
        Dict of command name -> factory.
    """
    return {name: _make_factory(cls, deps) for name, cls in classes.items()}


def _make_factory(cls: type, deps: Mapping[str, Any]) -> CommandFactory:
    params = inspect.signature(cls).parameters
    if any(p.kind is inspect.Parameter.VAR_KEYWORD for p in params.values()):
        kwargs = dict(deps)
    else:
        kwargs = {k: v for k, v in deps.items() if k in params}

    def factory() -> Command:
        return cls(**kwargs)

    return factory
