"""Help rendering for service-template CLI.

Contains the default command listing and the built-in help command
that the dispatcher runs for ``help``, ``-h``, ``--help`` or an empty
argument list.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Mapping

from service_template.cli.command_protocol import CommandFactory
from service_template.cli.registry import sorted_command_names

if TYPE_CHECKING:
    from service_template.cli.dispatch import CLI

__all__ = ["default_help_func", "HelpCommand"]


def default_help_func(commands: Mapping[str, CommandFactory]) -> str:
    """Return the listing of all commands with their synopses.

    Every factory is called once to read the synopsis. A factory that
    fails only drops the synopsis for that entry.
    """
    lines = ["Available commands:\n\n"]

    for name in sorted_command_names(commands):
        try:
            cmd = commands[name]()
        except Exception:
            lines.append(f"  {name}\n")
            continue
        lines.append(f"  {name} - {cmd.synopsis()}\n")

    return "".join(lines)


class HelpCommand:
    """Shows the command listing or the help of a single command.

    Receives the full argument vector: ``args[0]`` is the help trigger
    and ``args[1]``, when present, names the command to describe.
    """

    def __init__(self, cli: CLI):
        self.cli = cli

    def help(self) -> str:
        return "Shows help for a command"

    def synopsis(self) -> str:
        return "Shows help"

    def run(self, args: list[str]) -> int:
        out = self.cli.help_writer

        if len(args) <= 1:
            out.write(self.cli.help_func(self.cli.commands))
            return 0

        name = args[1]
        factory = self.cli.commands.get(name)
        if factory is None:
            out.write(f"Unknown command: {name}\n\n")
            out.write(self.cli.help_func(self.cli.commands))
            return 1

        try:
            cmd = factory()
        except Exception as e:
            out.write(f"Error instantiating {name}: {e}\n")
            return 1

        out.write(f"Usage: {self.cli.name} {name}\n\n")
        out.write(cmd.help())
        return 0
