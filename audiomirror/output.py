"""Output formatting for audiomirror.

Log lines are timestamped and labelled. On a terminal they are coloured,
and warnings/errors go to stderr only. When stdout is not a terminal the
output stays plain and warnings/errors are written to both stdout and
stderr, so a log collector reading either stream sees them.
"""

from datetime import datetime
from typing import IO, Optional

from rich.console import Console
from rich.text import Text

from .utils import LOG_TIME_FORMAT


class OutputFormatter:
    """Formats and emits user-facing log lines."""

    LEVELS = {
        "info": ("INFO:", "bold green"),
        "warning": ("WARN:", "bold yellow"),
        "error": ("ERROR:", "bold red"),
    }

    def __init__(
        self,
        interactive: Optional[bool] = None,
        stdout: Optional[IO[str]] = None,
        stderr: Optional[IO[str]] = None,
    ):
        """Initialize output formatter.

        Args:
            interactive: Force interactive (terminal) behaviour on or off.
                Defaults to whether stdout is a terminal.
            stdout: Stream for regular output (defaults to sys.stdout)
            stderr: Stream for warnings and errors (defaults to sys.stderr)
        """
        # Forcing non-interactive also forces plain output
        force_terminal = False if interactive is False else None
        self.console = Console(
            file=stdout,
            force_terminal=force_terminal,
            highlight=False,
            soft_wrap=True,
        )
        self.err_console = Console(
            file=stderr,
            stderr=stderr is None,
            force_terminal=force_terminal,
            highlight=False,
            soft_wrap=True,
        )
        self.interactive = (
            self.console.is_terminal if interactive is None else interactive
        )

    def _line(self, level: str, message: str) -> Text:
        label, style = self.LEVELS[level]
        timestamp = datetime.now().strftime(LOG_TIME_FORMAT)
        return Text.assemble(f"{timestamp} ", (label, style), f" {message}")

    def info(self, message: str) -> None:
        """Print an informational line to stdout."""
        self.console.print(self._line("info", message))

    def warning(self, message: str) -> None:
        """Print a warning."""
        self._emit_problem(self._line("warning", message))

    def error(self, message: str) -> None:
        """Print a fatal error."""
        self._emit_problem(self._line("error", message))

    def _emit_problem(self, line: Text) -> None:
        if not self.interactive:
            self.console.print(line)
        self.err_console.print(line)

    def print(self, message: str = "") -> None:
        """Print a plain line to stdout."""
        self.console.print(Text(message))
