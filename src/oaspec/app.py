"""Typer application and CLI entry point for oaspec.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs a SIGINT handler, invokes the Typer app,
and maps :class:`~oaspec.exceptions.OaspecError` to its exit code.
Unexpected exceptions are written to a crash log under the data directory.

See Also:
    :mod:`oaspec.config`: Validation option resolution.
    :mod:`oaspec.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import logging
import signal
import sys
import traceback
from datetime import datetime
from typing import Any

import typer
from rich.logging import RichHandler

from oaspec import __version__
from oaspec.commands.convert import convert_command, resolve_command
from oaspec.commands.validate import validate_command
from oaspec.exit_codes import EXIT_GENERIC_FAILURE
from oaspec.output import OutputFormat

app = typer.Typer(
    name="oaspec",
    help="Validate, convert and inspect OpenAPI 3.1 documents.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command("validate")(validate_command)
app.command("convert")(convert_command)
app.command("resolve")(resolve_command)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"oaspec {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool, console: Any) -> None:
    """Send library log records to stderr through Rich when ``--verbose`` is set."""
    root = logging.getLogger("oaspec")
    for handler in list(root.handlers):
        if isinstance(handler, RichHandler):
            root.removeHandler(handler)
    if verbose:
        root.addHandler(RichHandler(console=console, show_path=False))
        root.setLevel(logging.DEBUG)
    else:
        root.setLevel(logging.WARNING)


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit."
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-essential output."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output."),
) -> None:
    """Root callback executed before every sub-command.

    Installs the global :class:`~oaspec.output.OutputManager` and, with
    ``--verbose``, a Rich log handler for the ``oaspec`` logger.
    """
    from oaspec.output import OutputManager, set_output

    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN
    else:
        fmt = _configured_format()

    output = OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose)
    set_output(output)
    _configure_logging(verbose, output.stderr_console)


def _configured_format() -> OutputFormat:
    """Default output format from the user config (``output.format``)."""
    from oaspec.config import load_global_config
    from oaspec.exceptions import ConfigError

    value = load_global_config().output.format
    try:
        return OutputFormat(value)
    except ValueError:
        raise ConfigError(f"Invalid output format in user config: {value!r}") from None


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log() -> str:
    """Write the current traceback to the data directory and return the log path."""
    from oaspec.config import get_data_dir

    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = get_data_dir() / f"crash-{timestamp}.log"
    log_path.write_text(traceback.format_exc(), encoding="utf-8")
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``oaspec`` console script.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from oaspec.exceptions import OaspecError
        from oaspec.output import error

        if isinstance(exc, OaspecError):
            error(str(exc))
            sys.exit(exc.exit_code)
        log_path = _write_crash_log()
        error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)
