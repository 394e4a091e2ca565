"""A list-valued field that may be written as a bare item when it has one element.

JSON Schema allows ``"type": "string"`` as shorthand for ``"type": ["string"]``.
:data:`SingleOrArray` accepts both spellings and always holds a list in memory.
"""

from __future__ import annotations

from typing import Annotated, Any, TypeVar

from pydantic import BeforeValidator, SerializerFunctionWrapHandler, WrapSerializer

T = TypeVar("T")


def _as_list(value: Any) -> Any:
    if value is None or isinstance(value, list):
        return value
    if isinstance(value, tuple):
        return list(value)
    return [value]


def _collapse(value: Any, handler: SerializerFunctionWrapHandler) -> Any:
    data = handler(value)
    if isinstance(data, list) and len(data) == 1:
        return data[0]
    return data


SingleOrArray = Annotated[
    list[T],
    BeforeValidator(_as_list),
    WrapSerializer(_collapse, when_used="always"),
]
"""``list[T]`` that decodes a bare ``T`` and encodes a one-element list as the bare item."""
