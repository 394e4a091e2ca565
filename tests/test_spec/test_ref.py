"""Tests for oaspec.spec.ref -- reference cells and registry resolution."""

from __future__ import annotations

import pytest

from oaspec.exceptions import (
    ComponentsRequiredError,
    CycleDetectedError,
    ResolveError,
    SpecNotFoundError,
    UnexpectedComponentTypeError,
    UnsupportedReferenceError,
)
from oaspec.exit_codes import EXIT_RESOLVE_ERROR
from oaspec.parser import encode
from oaspec.spec import (
    Components,
    Extendable,
    Parameter,
    Ref,
    RefOrSpec,
    Schema,
    component_ref,
    parse_component_ref,
)

PET = "#/components/schemas/Pet"


@pytest.fixture
def registry() -> Components:
    components = Components()
    components.add_schema("Pet", {"type": "object"})
    components.add_schema("Alias", PET)
    components.add_schema("AliasOfAlias", "#/components/schemas/Alias")
    components.add_parameter("Limit", {"name": "limit", "in": "query", "schema": {"type": "integer"}})
    return components


# ---------------------------------------------------------------------------
# Identifiers
# ---------------------------------------------------------------------------


class TestComponentRef:
    def test_build(self) -> None:
        assert component_ref("schemas", "Pet") == PET

    def test_build_escapes_pointer_characters(self) -> None:
        assert component_ref("schemas", "a/b~c") == "#/components/schemas/a~1b~0c"

    def test_parse(self) -> None:
        assert parse_component_ref("#/components/requestBodies/NewPet") == ("requestBodies", "NewPet")

    def test_parse_unescapes(self) -> None:
        assert parse_component_ref("#/components/schemas/a~1b~0c") == ("schemas", "a/b~c")

    def test_parse_percent_encoded(self) -> None:
        assert parse_component_ref("#/components/schemas/My%20Pet") == ("schemas", "My Pet")

    @pytest.mark.parametrize(
        "ref",
        [
            "other.yaml#/components/schemas/Pet",
            "https://example.com/openapi.json#/components/schemas/Pet",
            "#/definitions/Pet",
            "#/components/schemas",
            "#/components/schemas/Pet/properties/name",
            "#/components/widgets/Pet",
        ],
    )
    def test_parse_rejects(self, ref: str) -> None:
        with pytest.raises(UnsupportedReferenceError):
            parse_component_ref(ref)


# ---------------------------------------------------------------------------
# Cells
# ---------------------------------------------------------------------------


class TestRefOrSpec:
    def test_decode_reference(self) -> None:
        cell = RefOrSpec[Schema].model_validate({"$ref": PET})
        assert cell.ref.ref == PET
        assert cell.spec is None

    def test_decode_inline(self) -> None:
        cell = RefOrSpec[Schema].model_validate({"type": "string"})
        assert cell.ref is None
        assert cell.spec.types == ["string"]

    def test_reference_siblings(self) -> None:
        cell = RefOrSpec[Schema].model_validate(
            {"$ref": PET, "description": "A pet", "type": "object"}
        )
        assert cell.ref.description == "A pet"
        assert encode(cell) == {"$ref": PET, "description": "A pet"}

    def test_empty_ref_is_not_a_reference(self) -> None:
        cell = RefOrSpec[Schema].model_validate({"$ref": ""})
        assert cell.ref is None
        assert cell.spec is not None

    def test_new_reference_wins(self) -> None:
        cell = RefOrSpec[Schema].new(ref=PET, spec=Schema(title="inline"))
        assert cell.ref == Ref(ref=PET)
        assert cell.spec is None

    def test_new_inline(self) -> None:
        cell = RefOrSpec[Schema].new(spec=Schema(title="inline"))
        assert cell.spec.title == "inline"

    def test_encode_reference(self) -> None:
        assert encode(RefOrSpec[Schema].new(ref=PET)) == {"$ref": PET}


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


class TestResolve:
    def test_inline_value_returned_as_is(self) -> None:
        schema = Schema(title="inline")
        assert RefOrSpec[Schema].new(spec=schema).resolve(None) is schema

    def test_direct_reference(self, registry: Components) -> None:
        schema = RefOrSpec[Schema].new(ref=PET).resolve(registry)
        assert schema.types == ["object"]

    def test_chain(self, registry: Components) -> None:
        visited: list[str] = []
        schema = RefOrSpec[Schema].new(ref="#/components/schemas/AliasOfAlias").resolve(
            registry, visited
        )
        assert schema.types == ["object"]
        assert visited == [
            "#/components/schemas/AliasOfAlias",
            "#/components/schemas/Alias",
            PET,
        ]

    def test_through_envelope(self, registry: Components) -> None:
        envelope = Extendable[Components].of(registry)
        assert RefOrSpec[Schema].new(ref=PET).resolve(envelope).types == ["object"]

    def test_empty_cell(self) -> None:
        with pytest.raises(SpecNotFoundError):
            RefOrSpec[Schema]().resolve(Components())

    def test_missing_entry(self, registry: Components) -> None:
        with pytest.raises(SpecNotFoundError, match="not found"):
            RefOrSpec[Schema].new(ref="#/components/schemas/Dog").resolve(registry)

    def test_no_registry(self) -> None:
        with pytest.raises(ComponentsRequiredError):
            RefOrSpec[Schema].new(ref=PET).resolve(None)

    def test_missing_table(self) -> None:
        with pytest.raises(ComponentsRequiredError, match="components.schemas"):
            RefOrSpec[Schema].new(ref=PET).resolve(Components())

    def test_unsupported_reference(self, registry: Components) -> None:
        with pytest.raises(UnsupportedReferenceError):
            RefOrSpec[Schema].new(ref="pet.yaml").resolve(registry)

    def test_wrong_category(self, registry: Components) -> None:
        with pytest.raises(UnexpectedComponentTypeError):
            RefOrSpec[Schema].new(ref="#/components/parameters/Limit").resolve(registry)

    def test_other_category_resolves(self, registry: Components) -> None:
        cell = RefOrSpec[Extendable[Parameter]].new(ref="#/components/parameters/Limit")
        assert cell.resolve(registry).spec.name == "limit"

    def test_two_step_cycle(self) -> None:
        components = Components()
        components.add_schema("A", "#/components/schemas/B")
        components.add_schema("B", "#/components/schemas/A")
        with pytest.raises(CycleDetectedError) as exc_info:
            RefOrSpec[Schema].new(ref="#/components/schemas/A").resolve(components)
        assert exc_info.value.ref == "#/components/schemas/A"
        assert exc_info.value.chain == ["#/components/schemas/A", "#/components/schemas/B"]

    def test_self_cycle(self) -> None:
        components = Components().add_schema("Self", "#/components/schemas/Self")
        with pytest.raises(CycleDetectedError):
            RefOrSpec[Schema].new(ref="#/components/schemas/Self").resolve(components)

    def test_resolve_errors_share_exit_code(self) -> None:
        with pytest.raises(ResolveError) as exc_info:
            RefOrSpec[Schema].new(ref=PET).resolve(None)
        assert exc_info.value.exit_code == EXIT_RESOLVE_ERROR
