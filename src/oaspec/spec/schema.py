"""JSON Schema 2020-12 as used by OpenAPI 3.1.

:class:`Schema` is its own extensible envelope: any keyword that is not a
declared field (vocabulary extensions, ``x-`` keys, or simply unknown
keywords) is kept in ``model_extra`` and written back unchanged.
"""

from __future__ import annotations

from typing import Any, Optional, Union

from pydantic import ConfigDict, Field, RootModel, StrictBool, StrictFloat, StrictInt

from oaspec.spec.base import SpecModel, with_prefix
from oaspec.spec.extensions import Extendable
from oaspec.spec.info import ExternalDocs
from oaspec.spec.ref import RefOrSpec
from oaspec.spec.single_or_array import SingleOrArray

Number = Union[StrictInt, StrictFloat]


class Discriminator(SpecModel):
    """Hint for polymorphic payloads: the property whose value selects the subschema."""

    property_name: Optional[str] = Field(default=None, alias="propertyName")
    mapping: Optional[dict[str, str]] = None


class XML(SpecModel):
    name: Optional[str] = None
    namespace: Optional[str] = None
    prefix: Optional[str] = None
    attribute: StrictBool = False
    wrapped: StrictBool = False


class Schema(SpecModel):
    """A schema object. Keywords are grouped the way the 2020-12 vocabularies group them."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    # --- Core ---
    schema_: Optional[str] = Field(default=None, alias="$schema")
    id: Optional[str] = Field(default=None, alias="$id")
    defs: Optional[dict[str, RefOrSpec[Schema]]] = Field(default=None, alias="$defs")
    dynamic_ref: Optional[str] = Field(default=None, alias="$dynamicRef")
    dynamic_anchor: Optional[str] = Field(default=None, alias="$dynamicAnchor")
    anchor: Optional[str] = Field(default=None, alias="$anchor")
    vocabulary: Optional[dict[str, StrictBool]] = Field(default=None, alias="$vocabulary")
    comment: Optional[str] = Field(default=None, alias="$comment")

    # --- Metadata ---
    title: Optional[str] = None
    description: Optional[str] = None
    default: Any = None
    deprecated: Optional[StrictBool] = None
    read_only: Optional[StrictBool] = Field(default=None, alias="readOnly")
    write_only: Optional[StrictBool] = Field(default=None, alias="writeOnly")
    examples: Optional[list[Any]] = None

    # --- Validation: any type ---
    type: Optional[SingleOrArray[str]] = None
    enum: Optional[list[Any]] = None
    const: Any = None

    # --- Validation: numbers ---
    multiple_of: Optional[Number] = Field(default=None, alias="multipleOf")
    minimum: Optional[Number] = None
    exclusive_minimum: Optional[Number] = Field(default=None, alias="exclusiveMinimum")
    maximum: Optional[Number] = None
    exclusive_maximum: Optional[Number] = Field(default=None, alias="exclusiveMaximum")

    # --- Validation: strings ---
    min_length: Optional[StrictInt] = Field(default=None, alias="minLength")
    max_length: Optional[StrictInt] = Field(default=None, alias="maxLength")
    pattern: Optional[str] = None
    format: Optional[str] = None
    content_encoding: Optional[str] = Field(default=None, alias="contentEncoding")
    content_media_type: Optional[str] = Field(default=None, alias="contentMediaType")
    content_schema: Optional[RefOrSpec[Schema]] = Field(default=None, alias="contentSchema")

    # --- Validation: arrays ---
    items: Optional[BoolOrSchema] = None
    prefix_items: Optional[list[RefOrSpec[Schema]]] = Field(default=None, alias="prefixItems")
    unevaluated_items: Optional[BoolOrSchema] = Field(default=None, alias="unevaluatedItems")
    contains: Optional[RefOrSpec[Schema]] = None
    min_contains: Optional[StrictInt] = Field(default=None, alias="minContains")
    max_contains: Optional[StrictInt] = Field(default=None, alias="maxContains")
    min_items: Optional[StrictInt] = Field(default=None, alias="minItems")
    max_items: Optional[StrictInt] = Field(default=None, alias="maxItems")
    unique_items: Optional[StrictBool] = Field(default=None, alias="uniqueItems")

    # --- Validation: objects ---
    properties: Optional[dict[str, RefOrSpec[Schema]]] = None
    pattern_properties: Optional[dict[str, RefOrSpec[Schema]]] = Field(
        default=None, alias="patternProperties"
    )
    additional_properties: Optional[BoolOrSchema] = Field(default=None, alias="additionalProperties")
    unevaluated_properties: Optional[BoolOrSchema] = Field(
        default=None, alias="unevaluatedProperties"
    )
    property_names: Optional[RefOrSpec[Schema]] = Field(default=None, alias="propertyNames")
    min_properties: Optional[StrictInt] = Field(default=None, alias="minProperties")
    max_properties: Optional[StrictInt] = Field(default=None, alias="maxProperties")
    required: Optional[list[str]] = None
    dependent_required: Optional[dict[str, list[str]]] = Field(
        default=None, alias="dependentRequired"
    )
    dependent_schemas: Optional[dict[str, RefOrSpec[Schema]]] = Field(
        default=None, alias="dependentSchemas"
    )

    # --- Applicators ---
    all_of: Optional[list[RefOrSpec[Schema]]] = Field(default=None, alias="allOf")
    any_of: Optional[list[RefOrSpec[Schema]]] = Field(default=None, alias="anyOf")
    one_of: Optional[list[RefOrSpec[Schema]]] = Field(default=None, alias="oneOf")
    not_: Optional[RefOrSpec[Schema]] = Field(default=None, alias="not")
    if_: Optional[RefOrSpec[Schema]] = Field(default=None, alias="if")
    then: Optional[RefOrSpec[Schema]] = None
    else_: Optional[RefOrSpec[Schema]] = Field(default=None, alias="else")

    # --- OpenAPI vocabulary ---
    discriminator: Optional[Extendable[Discriminator]] = None
    xml: Optional[Extendable[XML]] = None
    external_docs: Optional[Extendable[ExternalDocs]] = Field(default=None, alias="externalDocs")
    example: Any = None

    @property
    def extensions(self) -> dict[str, Any]:
        """Every keyword that is not a declared field."""
        return self.model_extra

    def add_ext(self, name: str, value: Any) -> None:
        self.model_extra[with_prefix(name)] = value

    def get_ext(self, name: str) -> Any:
        return self.model_extra.get(with_prefix(name))

    @property
    def types(self) -> list[str]:
        return list(self.type or [])


class BoolOrSchema(RootModel):
    """``true``/``false`` or a schema, as allowed for ``additionalProperties`` and friends.

    Only the JSON literals ``true`` and ``false`` decode as the boolean form.
    A schema implies ``allowed``.
    """

    root: Union[StrictBool, RefOrSpec[Schema]] = True

    @classmethod
    def new(cls, value: Union[bool, Schema, RefOrSpec[Schema]]) -> BoolOrSchema:
        if isinstance(value, Schema):
            value = RefOrSpec[Schema](value)
        return cls(value)

    @property
    def allowed(self) -> bool:
        return self.root if isinstance(self.root, bool) else True

    @property
    def schema_(self) -> Optional[RefOrSpec[Schema]]:
        return None if isinstance(self.root, bool) else self.root


Schema.model_rebuild()
