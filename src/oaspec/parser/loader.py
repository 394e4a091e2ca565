"""Read OpenAPI document text from a URL, a local file, or stdin.

The loader only deals with bytes and syntax: it returns the raw JSON/YAML
tree as plain dicts and lists. Turning that tree into typed objects is the
job of :mod:`oaspec.parser.codec`.

YAML is read with a safe loader that leaves timestamps as strings, and every
mapping key is converted to ``str`` (YAML reads ``200:`` as an integer), so
a YAML document produces the same tree as its JSON equivalent.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any

import httpx
import yaml

from oaspec.exceptions import LoadError

logger = logging.getLogger(__name__)

_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class _DocumentLoader(yaml.SafeLoader):
    """Safe loader that keeps dates and timestamps as plain strings."""


_DocumentLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def load_raw(source: str) -> dict[str, Any]:
    """Load a document tree from a URL, a file path, or ``-`` for stdin.

    Args:
        source: An ``http(s)://`` URL, a file path, or ``-``.

    Returns:
        The parsed top-level object.

    Raises:
        LoadError: If the source cannot be read or is not a JSON/YAML object.
    """
    logger.debug("Loading document from %s", source)
    if source == "-":
        return _read_stdin()
    if source.startswith(("http://", "https://")):
        return _fetch(source)
    return _read_file(source)


def _read_stdin() -> dict[str, Any]:
    try:
        content = sys.stdin.read()
    except OSError as exc:
        raise LoadError(f"Failed to read from stdin: {exc}") from exc
    if not content.strip():
        raise LoadError("No input received from stdin")
    return parse_text(content)


def _fetch(url: str) -> dict[str, Any]:
    """Download *url*; the response content type decides between JSON and YAML."""
    try:
        response = httpx.get(url, timeout=30.0, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise LoadError(f"HTTP {exc.response.status_code} fetching document from {url}") from exc
    except httpx.RequestError as exc:
        raise LoadError(f"Failed to fetch document from {url}: {exc}") from exc

    content_type = response.headers.get("content-type", "")
    if "json" in content_type:
        hint = "json"
    elif "yaml" in content_type or "yml" in content_type:
        hint = "yaml"
    else:
        hint = ""
    return parse_text(response.text, hint=hint)


def _read_file(path: str) -> dict[str, Any]:
    file_path = Path(path)
    if not file_path.is_file():
        raise LoadError(f"Document not found: {path}")
    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise LoadError(f"Failed to read {path}: {exc}") from exc
    if not content.strip():
        raise LoadError(f"Document is empty: {path}")

    suffix = file_path.suffix.lower()
    hint = {".json": "json", ".yaml": "yaml", ".yml": "yaml"}.get(suffix, "")
    return parse_text(content, hint=hint)


def parse_text(content: str, hint: str = "") -> dict[str, Any]:
    """Parse *content* as JSON or YAML.

    JSON is tried first unless *hint* is ``"yaml"``; a ``"json"`` hint
    disables the YAML fallback.

    Raises:
        LoadError: If the content is not a JSON/YAML object.
    """
    json_error: Exception | None = None

    if hint != "yaml":
        try:
            return _require_object(json.loads(content))
        except json.JSONDecodeError as exc:
            if hint == "json":
                raise LoadError(f"Invalid JSON: {exc}") from exc
            json_error = exc

    try:
        tree = yaml.load(content, Loader=_DocumentLoader)
    except yaml.YAMLError as exc:
        message = "Failed to parse document as JSON or YAML"
        if json_error is not None:
            message += f"\n  JSON error: {json_error}"
        message += f"\n  YAML error: {exc}"
        raise LoadError(message) from exc
    return _require_object(_stringify_keys(tree))


def _require_object(tree: Any) -> dict[str, Any]:
    if not isinstance(tree, dict):
        kind = "empty document" if tree is None else type(tree).__name__
        raise LoadError(f"Document must be a JSON/YAML object (got {kind})")
    return tree


def _stringify_keys(node: Any) -> Any:
    if isinstance(node, dict):
        return {_key(key): _stringify_keys(value) for key, value in node.items()}
    if isinstance(node, list):
        return [_stringify_keys(item) for item in node]
    return node


def _key(key: Any) -> str:
    if isinstance(key, bool):
        return "true" if key else "false"
    if key is None:
        return "null"
    return str(key)


def reject_swagger(tree: dict[str, Any]) -> None:
    """Refuse Swagger 2.x documents, which this model does not describe.

    Raises:
        LoadError: If *tree* declares a ``swagger`` version.
    """
    if "swagger" in tree:
        raise LoadError(
            f"Swagger {tree['swagger']} is not supported; only OpenAPI 3.1.x documents are. "
            "Consider converting with https://converter.swagger.io"
        )
