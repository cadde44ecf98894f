"""Console output formatting for syncutil.

Every user-visible line goes through :class:`OutputFormatter`. Messages carry
a ``[INFO]``, ``[WARN]`` or ``[ERROR]`` marker, colored when writing to a
terminal. Quiet mode hides everything except errors.
"""

import json
from typing import Any

from rich.console import Console
from rich.text import Text


class OutputFormatter:
    """Formats and prints messages for the command line."""

    def __init__(self, json_output: bool = False, quiet: bool = False):
        """Initialize the formatter.

        Args:
            json_output: If True, results are emitted as JSON and
                informational chatter is suppressed
            quiet: If True, only errors are printed
        """
        self.json_output = json_output
        self.quiet = quiet
        self.console = Console(highlight=False, soft_wrap=True)
        self.err_console = Console(stderr=True, highlight=False, soft_wrap=True)

    @property
    def silent(self) -> bool:
        """True when non-error messages must not be printed."""
        return self.quiet or self.json_output

    def _marked(self, marker: str, style: str, message: str) -> Text:
        return Text.assemble((marker, style), " ", message)

    def info(self, message: str) -> None:
        """Print an informational message."""
        if self.silent:
            return
        self.console.print(self._marked("[INFO]", "green", message))

    def success(self, message: str) -> None:
        """Print a success message."""
        if self.silent:
            return
        self.console.print(self._marked("[INFO]", "bold green", message))

    def warning(self, message: str) -> None:
        """Print a recoverable, non-fatal warning."""
        if self.silent:
            return
        self.console.print(self._marked("[WARN]", "yellow", message))

    def error(self, message: str) -> None:
        """Print an error. Errors are always shown, on stderr."""
        self.err_console.print(self._marked("[ERROR]", "bold red", message))

    def header(self, message: str) -> None:
        """Print a section header (always shown unless JSON output is on)."""
        if self.json_output:
            return
        self.console.print(Text(message, style="bold blue"))
        self.console.print(Text("-" * len(message), style="blue"))

    def items(self, title: str, items: list[str], always: bool = False) -> None:
        """Print a titled list of items followed by a blank line.

        Args:
            title: Heading printed in yellow
            items: One entry per line
            always: Print even in quiet mode (used before interactive prompts);
                with JSON output the list goes to stderr
        """
        if self.silent and not always:
            return
        console = self.err_console if self.json_output else self.console
        console.print(Text(title, style="yellow"))
        for item in items:
            console.print(Text(item))
        console.print()

    def echo(self, message: str = "") -> None:
        """Print requested data (shown in quiet mode, not with JSON output)."""
        if self.json_output:
            return
        self.console.print(Text(message))

    def print(self, message: str = "") -> None:
        """Print plain text, unless quiet."""
        if self.silent:
            return
        self.console.print(Text(message))

    def output_json(self, data: Any) -> None:
        """Print data as JSON."""
        self.console.out(json.dumps(data, indent=2), highlight=False)
