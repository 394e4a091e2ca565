"""Check concrete values (examples, defaults, runtime data) against schemas in the document.

Schemas are checked with ``jsonschema``'s Draft 2020-12 validator. The whole
encoded document is registered as one resource, and every ``#...``
reference in the schema under test is rewritten to point into it, so
``#/components/schemas/Pet`` resolves the same way it does in the document.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Optional

from jsonschema import Draft202012Validator
from jsonschema.exceptions import SchemaError, UnknownType, best_match
from pydantic import BaseModel
from referencing import Registry, Resource
from referencing.exceptions import Unresolvable
from referencing.jsonschema import DRAFT202012

from oaspec.exceptions import ResolveError, SpecNotFoundError
from oaspec.parser.codec import encode
from oaspec.spec.schema import Schema
from oaspec.validation.issues import ValidationIssue

logger = logging.getLogger(__name__)

DOCUMENT_URI = "urn:oaspec:document"

# Raised while a schema is applied rather than because the value is wrong.
_SCHEMA_FAILURES = (Unresolvable, UnknownType, SchemaError, re.error)


class DataValidator:
    """Validates values against schemas of one document.

    Args:
        document: The encoded (raw) document the schemas belong to.
        validate_data_as_json: Let :meth:`check_at` parse string values as
            JSON before checking them.
    """

    def __init__(self, document: dict[str, Any], validate_data_as_json: bool = False):
        resource = Resource.from_contents(document, default_specification=DRAFT202012)
        self._registry = Registry().with_resource(DOCUMENT_URI, resource)
        self._as_json = validate_data_as_json
        self._located: dict[str, Draft202012Validator] = {}

    def check(self, value: Any, schema: Schema) -> Optional[str]:
        """Return a description of why *value* does not match *schema*, or ``None``.

        A schema that cannot be applied (an unresolvable reference, an
        unknown ``type``, a broken ``pattern``) is reported the same way as a
        mismatch.
        """
        validator = Draft202012Validator(_anchor_refs(encode(schema)), registry=self._registry)
        try:
            error = best_match(validator.iter_errors(value))
        except _SCHEMA_FAILURES as exc:
            logger.debug("Schema could not be applied: %s", exc)
            return f"unable to apply schema: {_describe(exc)}"
        if error is None:
            return None
        return error.message

    def check_at(
        self, location: str, value: Any, as_json: Optional[bool] = None
    ) -> list[ValidationIssue]:
        """Validate *value* against the schema at *location* in the document.

        Args:
            location: JSON pointer into the document, e.g.
                ``#/components/schemas/Pet``; the leading ``#`` is optional.
            value: Plain data, or a pydantic model which is encoded first.
            as_json: Parse a string *value* as JSON first; strings that are
                not JSON are checked as they are. Defaults to the
                ``validate_data_as_json`` setting.

        Returns:
            One issue per mismatch, with paths relative to *value* (``""``
            for the value itself, ``[name][0]`` below it).

        Raises:
            SpecNotFoundError: Nothing in the document lives at *location*.
            ResolveError: The schema at *location* cannot be applied.
        """
        if not location.startswith("#"):
            location = "#" + location
        if isinstance(value, BaseModel):
            value = encode(value)
        if isinstance(value, str) and (self._as_json if as_json is None else as_json):
            try:
                value = json.loads(value)
            except json.JSONDecodeError:
                logger.debug("Value for %s is not JSON; checking it as a string", location)

        validator = self._located.get(location)
        if validator is None:
            validator = Draft202012Validator(
                {"$ref": DOCUMENT_URI + location}, registry=self._registry
            )
            self._located[location] = validator
        try:
            errors = sorted(validator.iter_errors(value), key=_error_path)
        except Unresolvable as exc:
            raise SpecNotFoundError(f"cannot resolve schema at '{location}': {exc}") from exc
        except _SCHEMA_FAILURES as exc:
            raise ResolveError(f"cannot apply schema at '{location}': {_describe(exc)}") from exc
        return [
            ValidationIssue(path=_error_path(error), message=error.message) for error in errors
        ]


def _error_path(error: Any) -> str:
    return "".join(f"[{key}]" for key in error.absolute_path)


def _describe(exc: Exception) -> str:
    if isinstance(exc, UnknownType):
        return f"unknown type {exc.type!r}"
    if isinstance(exc, SchemaError):
        return exc.message
    return str(exc)


# Keywords whose values are instance data, not schemas.
_DATA_KEYWORDS = frozenset({"const", "default", "enum", "example", "examples"})


def _anchor_refs(node: Any) -> Any:
    if isinstance(node, dict):
        anchored = {
            key: value if key in _DATA_KEYWORDS else _anchor_refs(value)
            for key, value in node.items()
        }
        ref = anchored.get("$ref")
        if isinstance(ref, str) and ref.startswith("#"):
            anchored["$ref"] = DOCUMENT_URI + ref
        return anchored
    if isinstance(node, list):
        return [_anchor_refs(item) for item in node]
    return node
