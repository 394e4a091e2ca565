"""Built-in CLI commands.

Each module exposes a plain function that :mod:`oaspec.app` registers on
the root Typer application.
"""

from __future__ import annotations

from typing import NoReturn

import typer

from oaspec.exceptions import OaspecError
from oaspec.output import debug, error
from oaspec.parser import load_document
from oaspec.spec import Document


def fail(exc: OaspecError) -> NoReturn:
    """Report *exc* on stderr and exit with its exit code."""
    error(str(exc))
    raise typer.Exit(code=exc.exit_code)


def load_or_exit(source: str) -> Document:
    """Load *source*, turning library errors into a clean CLI exit.

    Raises:
        typer.Exit: With the error's exit code when loading or decoding fails.
    """
    debug(f"Loading {source}")
    try:
        return load_document(source)
    except OaspecError as exc:
        fail(exc)
