"""Output formatting with strict stdout/stderr discipline.

Follows `clig.dev <https://clig.dev/>`_ conventions:

* **stdout** -- primary data only: converted documents, resolved
  components, validation findings.
* **stderr** -- diagnostics (status, warnings, errors, debug).
* **TTY detection** -- Rich formatting when stdout is an interactive
  terminal, plain text when piped.
* **Colour control** -- respects ``NO_COLOR``, ``TERM=dumb``, and the
  ``--no-color`` CLI flag.

:class:`OutputManager` holds the preferences and consoles; it is created in
:func:`~oaspec.app.main_callback` and installed with :func:`set_output`.
The module-level helpers (:func:`info`, :func:`error`, ...) delegate to the
installed instance.
"""

from __future__ import annotations

import json
import os
import sys
from enum import Enum
from typing import Any, Optional

from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table


class OutputFormat(str, Enum):
    """Supported output formats.

    ``AUTO`` resolves to ``RICH`` on an interactive, colour-capable TTY and
    to ``PLAIN`` otherwise.
    """

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


class OutputManager:
    """Routes data to stdout and diagnostics to stderr in the active format.

    Args:
        format: Desired output format; ``AUTO`` is resolved immediately.
        no_color: Disable colour and Rich markup.
        quiet: Suppress informational and success messages.
        verbose: Show debug messages.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose

        if format == OutputFormat.AUTO:
            rich = _is_tty() and not self._no_color
            self._format = OutputFormat.RICH if rich else OutputFormat.PLAIN
        else:
            self._format = format

        self._stdout = Console(
            file=sys.stdout,
            no_color=self._no_color,
            force_terminal=(self._format == OutputFormat.RICH),
        )
        self._stderr = Console(file=sys.stderr, no_color=self._no_color, stderr=True)

    @property
    def format(self) -> OutputFormat:
        return self._format

    @property
    def is_quiet(self) -> bool:
        return self._quiet

    @property
    def is_verbose(self) -> bool:
        return self._verbose

    @property
    def stderr_console(self) -> Console:
        """Console bound to stderr, for log handlers."""
        return self._stderr

    # ------------------------------------------------------------------ #
    # Data output (stdout)
    # ------------------------------------------------------------------ #

    def print_data(self, text: str) -> None:
        """Write *text* to stdout unformatted."""
        print(text, file=sys.stdout, flush=True)

    def print_document(self, text: str, syntax: str = "json") -> None:
        """Print serialized document text, highlighted in Rich mode.

        Args:
            text: JSON or YAML text.
            syntax: Lexer name for highlighting (``"json"`` or ``"yaml"``).
        """
        if self._format == OutputFormat.RICH:
            self._stdout.print(Syntax(text, syntax, theme="monokai", word_wrap=True))
        else:
            self.print_data(text.rstrip("\n"))

    def print_records(self, records: list[dict[str, Any]], title: Optional[str] = None) -> None:
        """Print a list of flat records as a table (Rich), TSV (plain), or JSON array."""
        if self._format == OutputFormat.JSON:
            self.print_data(json.dumps(records, indent=2, ensure_ascii=False))
            return

        headers = list(records[0]) if records else []
        rows = [[str(record.get(header, "")) for header in headers] for record in records]
        if self._format == OutputFormat.PLAIN:
            if headers:
                self.print_data("\t".join(headers))
            for row in rows:
                self.print_data("\t".join(row))
            return

        table = Table(title=title, show_header=True, header_style="bold cyan")
        for header in headers:
            table.add_column(header)
        for row in rows:
            table.add_row(*row)
        self._stdout.print(table)

    # ------------------------------------------------------------------ #
    # Diagnostics (stderr)
    # ------------------------------------------------------------------ #

    def _diagnostic(self, plain: str, markup: str) -> None:
        if self._no_color:
            print(plain, file=sys.stderr, flush=True)
        else:
            self._stderr.print(markup)

    def info(self, message: str) -> None:
        """Informational message; suppressed by ``--quiet``."""
        if not self._quiet:
            self._diagnostic(message, message)

    def success(self, message: str) -> None:
        """Green success message; suppressed by ``--quiet``."""
        if not self._quiet:
            self._diagnostic(message, f"[green]{message}[/green]")

    def warning(self, message: str) -> None:
        """Yellow warning; never suppressed."""
        self._diagnostic(f"Warning: {message}", f"[yellow]Warning:[/yellow] {message}")

    def error(self, message: str) -> None:
        """Bold red error; never suppressed."""
        self._diagnostic(f"Error: {message}", f"[bold red]Error:[/bold red] {message}")

    def debug(self, message: str) -> None:
        """Debug message; shown only with ``--verbose``."""
        if self._verbose:
            self._diagnostic(f"[debug] {message}", f"[dim]\\[debug] {message}[/dim]")


def _is_tty() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _should_disable_color() -> bool:
    """True when ``NO_COLOR`` is set (any value) or ``TERM=dumb``."""
    return os.environ.get("NO_COLOR") is not None or os.environ.get("TERM") == "dumb"


# ------------------------------------------------------------------ #
# Global output instance (set during app startup)
# ------------------------------------------------------------------ #

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the installed :class:`OutputManager`, creating a default one lazily."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    """Forget the installed instance; used by the test suite."""
    global _output
    _output = None


def info(message: str) -> None:
    get_output().info(message)


def success(message: str) -> None:
    get_output().success(message)


def warning(message: str) -> None:
    get_output().warning(message)


def error(message: str) -> None:
    get_output().error(message)


def debug(message: str) -> None:
    get_output().debug(message)
