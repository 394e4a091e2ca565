"""``oaspec convert`` and ``oaspec resolve`` -- re-encode a document or one of its components."""

from __future__ import annotations

import json

import typer

from oaspec.commands import fail, load_or_exit
from oaspec.exceptions import InvalidUsageError, ResolveError
from oaspec.output import get_output
from oaspec.parser import encode, to_json, to_yaml
from oaspec.spec import Components, Ref, parse_component_ref


def convert_command(
    source: str = typer.Argument(..., help="File path, URL, or '-' for stdin."),
    to: str = typer.Option("yaml", "--to", "-t", help="Target format: json or yaml."),
) -> None:
    """Decode a document and print it re-encoded as JSON or YAML.

    Unknown fields and ``x-`` extensions are carried through unchanged.
    """
    target = to.lower()
    if target not in ("json", "yaml"):
        fail(InvalidUsageError(f"--to must be 'json' or 'yaml', not {to!r}"))

    document = load_or_exit(source)
    text = to_json(document) if target == "json" else to_yaml(document)
    get_output().print_document(text, syntax=target)


def resolve_command(
    source: str = typer.Argument(..., help="File path, URL, or '-' for stdin."),
    ref: str = typer.Argument(..., help="Component reference, e.g. '#/components/schemas/Pet'."),
) -> None:
    """Follow a ``#/components/...`` reference and print the component it ends at."""
    document = load_or_exit(source)
    root = document.spec
    components = root.components if root is not None else None
    try:
        category, _ = parse_component_ref(ref)
        cell = Components.cell_type(category)(Ref(ref=ref))
        value = cell.resolve(components)
    except ResolveError as exc:
        fail(exc)

    get_output().print_document(json.dumps(encode(value), indent=2, ensure_ascii=False))

