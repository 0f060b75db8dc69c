"""Command protocol for service-template CLI.

Defines the interface that CLI commands must implement. A command owns
its help text and execution logic; the dispatcher only knows the three
methods below.

Usage:
    from service_template.cli.command_protocol import Command

    class BuildCommand:
        def help(self) -> str:
            return "Usage: app build [--fast]"

        def synopsis(self) -> str:
            return "Builds the project"

        def run(self, args: list[str]) -> int:
            print(f"building with {args}")
            return 0
"""

from typing import Callable, Mapping, Protocol, runtime_checkable


@runtime_checkable
class Command(Protocol):
    """Protocol for CLI commands.

    Methods:
        help: Long-form help text shown by ``help <command>``.
        synopsis: One-line description shown in the command listing.
        run: Execute with the arguments that follow the command name.
    """

    def help(self) -> str:
        """Return the long-form help text for the command."""
        ...

    def synopsis(self) -> str:
        """Return a one-line description of the command."""
        ...

    def run(self, args: list[str]) -> int:
        """Execute the command.

        Args:
            args: Arguments after the command name. Their meaning is
                  entirely up to the command.

        Returns:
            Exit code (0 for success, non-zero for errors).
        """
        ...


# Creates a Command on demand. Raising signals a construction failure.
CommandFactory = Callable[[], Command]

# Renders the command listing for a registry.
HelpFunc = Callable[[Mapping[str, CommandFactory]], str]
