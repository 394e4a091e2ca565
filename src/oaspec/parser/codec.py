"""Decode raw JSON/YAML trees into the typed model and encode them back.

Encoding is driven by what was present on input: fields that were absent
stay absent, fields that were present are written even when they hold a
default value. Decoding a document and encoding it again therefore yields a
tree equal to the input (mapping order aside).
"""

from __future__ import annotations

import json
import logging
from typing import Any, TypeVar

import yaml
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from oaspec.exceptions import DecodeError
from oaspec.parser.loader import load_raw, parse_text, reject_swagger
from oaspec.spec.openapi import Document

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def decode(data: Any, target: type[ModelT] = Document) -> ModelT:
    """Decode a raw tree into *target* (the whole document by default).

    Raises:
        DecodeError: If *data* does not fit *target*. The error names the
            target type and wraps the underlying pydantic error.
    """
    try:
        return target.model_validate(data)
    except PydanticValidationError as exc:
        raise DecodeError(target.__name__, exc) from exc


def encode(obj: BaseModel) -> Any:
    """Encode a model into a raw tree of dicts, lists and scalars."""
    return obj.model_dump(mode="json", by_alias=True, exclude_unset=True)


def from_json(text: str, target: type[ModelT] = Document) -> ModelT:
    return decode(parse_text(text, hint="json"), target)


def from_yaml(text: str, target: type[ModelT] = Document) -> ModelT:
    return decode(parse_text(text, hint="yaml"), target)


def to_json(obj: BaseModel, indent: int | None = 2) -> str:
    return json.dumps(encode(obj), indent=indent, ensure_ascii=False)


def to_yaml(obj: BaseModel) -> str:
    return yaml.safe_dump(encode(obj), sort_keys=False, allow_unicode=True)


def load_document(source: str) -> Document:
    """Load and decode a whole document from a URL, a file path, or ``-``.

    Raises:
        LoadError: If the source cannot be read or parsed, or is Swagger 2.x.
        DecodeError: If the tree does not fit the document model.
    """
    tree = load_raw(source)
    reject_swagger(tree)
    document = decode(tree, Document)
    logger.debug("Decoded document from %s", source)
    return document
