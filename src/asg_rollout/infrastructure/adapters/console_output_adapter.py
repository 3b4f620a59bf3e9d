"""Operator output adapter rendering rollout messages with rich."""

import os
from typing import Optional

from rich.console import Console
from rich.markup import escape

from asg_rollout.domain.base.ports.output_port import OutputPort

WARNING_PREFIX = "WARNING:"
CONSOLE_ENABLED_ENV = "ASG_ROLLOUT_CONSOLE_ENABLED"


class ConsoleOutputAdapter(OutputPort):
    """Prints rollout messages to the terminal.

    Termination warnings are yellow and notices cyan. The CLI also uses the
    adapter for the final summary (green) and for fatal errors (red, on
    stderr). Nothing is printed unless ``ASG_ROLLOUT_CONSOLE_ENABLED`` is
    unset or "true".
    """

    def __init__(
        self, console: Optional[Console] = None, error_console: Optional[Console] = None
    ) -> None:
        self._console = console or Console()
        self._error_console = error_console or Console(stderr=True)

    @property
    def enabled(self) -> bool:
        return os.environ.get(CONSOLE_ENABLED_ENV, "true").lower() == "true"

    def output(self, message: str) -> None:
        style = "yellow" if message.startswith(WARNING_PREFIX) else "cyan"
        self._print(self._console, message, style)

    def success(self, message: str) -> None:
        """Print the summary of a clean rollout."""
        self._print(self._console, message, "green")

    def error(self, message: str) -> None:
        """Print a fatal error to stderr."""
        self._print(self._error_console, message, "red")

    def _print(self, console: Console, message: str, style: str) -> None:
        if self.enabled:
            # rollout messages may contain brackets, e.g. from AWS error text
            console.print(f"[{style}]{escape(message)}[/{style}]")
