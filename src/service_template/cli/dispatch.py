"""
Command dispatch for service-template CLI.

The CLI object resolves the first argument to either the help command
or a registered command, runs it, and turns the outcome into an exit
code plus an optional error.
"""

from __future__ import annotations

import logging
import sys
import threading
from dataclasses import dataclass, field
from typing import Optional, TextIO

from service_template.cli.command_protocol import CommandFactory, HelpFunc
from service_template.cli.help import HelpCommand, default_help_func

logger = logging.getLogger(__name__)

HELP_TOKENS = frozenset(("-h", "--help", "help"))


@dataclass
class CLI:
    """Dispatcher for one invocation of the command line.

    Attributes:
        name: Program name, shown in usage headers.
        version: Program version. Display only.
        args: Arguments without the program name. ``args[0]`` is a
            command name or a help trigger.
        commands: Mapping of command name to factory. Never modified.
        help_func: Renders the command listing.
        help_writer: Destination for help and error text.
    """

    name: str = ""
    version: str = ""
    args: list[str] = field(default_factory=list)
    commands: dict[str, CommandFactory] = field(default_factory=dict)
    help_func: HelpFunc = default_help_func
    help_writer: TextIO = field(default_factory=lambda: sys.stdout)

    _is_help: Optional[bool] = field(default=None, init=False, repr=False)
    _help_lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )

    def is_help(self) -> bool:
        """Return whether this invocation asks for help.

        Computed on first call and fixed for the lifetime of the object,
        even if ``args`` changes afterwards.
        """
        if self._is_help is None:
            with self._help_lock:
                if self._is_help is None:
                    self._is_help = self._is_help_request()
        return self._is_help

    def _is_help_request(self) -> bool:
        if not self.args:
            return True
        return self.args[0] in HELP_TOKENS

    def run(self) -> tuple[int, Optional[Exception]]:
        """Run the selected command.

        Returns:
            ``(exit_code, error)``. ``error`` is set only when a command
            factory failed; unknown commands report exit code 1 with no
            error.
        """
        if self.is_help():
            logger.debug("Dispatching to help command")
            # The help command sees the trigger token too, so that
            # args[1] can name the target command.
            return HelpCommand(self).run(self.args), None

        name = self.args[0]
        factory = self.commands.get(name)
        if factory is None:
            logger.debug(f"Unknown command {name!r}")
            self.help_writer.write(f"Unknown command: {name}\n\n")
            self.help_writer.write(self.help_func(self.commands))
            return 1, None

        try:
            cmd = factory()
        except Exception as e:
            logger.debug(f"Factory for {name!r} failed: {e}")
            self.help_writer.write(f"Error instantiating {name}: {e}\n")
            return 1, e

        logger.debug(f"Running command {name!r} with {len(self.args) - 1} argument(s)")
        return cmd.run(self.args[1:]), None
