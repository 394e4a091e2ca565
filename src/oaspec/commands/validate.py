"""``oaspec validate`` -- report structural problems in a document."""

from __future__ import annotations

from typing import List, Optional

import typer

from oaspec.commands import fail, load_or_exit
from oaspec.config import resolve_options
from oaspec.exceptions import ConfigError, InvalidUsageError
from oaspec.exit_codes import EXIT_VALIDATION_FAILED
from oaspec.output import OutputFormat, error, get_output, success
from oaspec.validation import validate_document


def validate_command(
    source: str = typer.Argument(..., help="File path, URL, or '-' for stdin."),
    skip_examples: Optional[bool] = typer.Option(
        None, "--skip-examples/--check-examples", help="Do not check example values."
    ),
    skip_defaults: Optional[bool] = typer.Option(
        None, "--skip-defaults/--check-defaults", help="Do not check schema default values."
    ),
    allow_unprefixed_extensions: bool = typer.Option(
        False, "--allow-unprefixed-extensions", help="Accept extension names without 'x-'."
    ),
    allow_undefined_tags: bool = typer.Option(
        False, "--allow-undefined-tags", help="Accept operation tags missing from the root tag list."
    ),
    allow_unused_components: bool = typer.Option(
        False, "--allow-unused-components", help="Do not report unreferenced components."
    ),
    allow_body_for: Optional[List[str]] = typer.Option(
        None, "--allow-body-for", help="Allow a request body on GET, HEAD or DELETE (repeatable)."
    ),
) -> None:
    """Validate an OpenAPI 3.1 document.

    Prints one line (or table row) per finding on stdout and exits with
    code 6 when there is at least one. Options not given on the command line
    come from ``OASPEC_*`` environment variables, ``./oaspec.json``, and the
    user config file, in that order.
    """
    overrides = {
        "skip_example_validation": skip_examples,
        "skip_default_validation": skip_defaults,
        "allow_extension_name_without_prefix": allow_unprefixed_extensions or None,
        "allow_undefined_tags_in_operation": allow_undefined_tags or None,
        "allow_unused_components": allow_unused_components or None,
    }
    for method in allow_body_for or []:
        method = method.lower()
        if method not in ("get", "head", "delete"):
            fail(InvalidUsageError(
                f"--allow-body-for accepts GET, HEAD or DELETE, not {method.upper()!r}"
            ))
        overrides[f"allow_request_body_for_{method}"] = True

    try:
        options = resolve_options(overrides)
    except ConfigError as exc:
        fail(exc)

    document = load_or_exit(source)
    issues = validate_document(document, options)

    out = get_output()
    if out.format == OutputFormat.PLAIN:
        for issue in issues:
            out.print_data(str(issue))
    elif issues or out.format == OutputFormat.JSON:
        out.print_records([issue.model_dump() for issue in issues], title="Validation issues")

    if issues:
        error(f"{len(issues)} issue(s) found in {source}")
        raise typer.Exit(code=EXIT_VALIDATION_FAILED)
    success(f"{source} is valid")
