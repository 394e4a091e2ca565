"""Structural validator for OpenAPI 3.1 documents.

The validator walks the typed document depth first and collects every
finding instead of stopping at the first one. All mutable bookkeeping for
one run lives in a :class:`ValidationState` that is passed explicitly
through the walk; the per-type rules are plain functions registered with
:func:`functools.singledispatch`.

Each ``$ref`` is followed and its target validated once per run. Findings
inside a shared component are therefore reported at the first place the
component is reached, and a broken reference is reported exactly once, at
the first reference site.
"""

from __future__ import annotations

import json
import logging
import re
from email.utils import parseaddr
from functools import singledispatch
from typing import Any, Optional, Union

import httpx

from oaspec.exceptions import ResolveError, ValidationError
from oaspec.parser.codec import encode
from oaspec.spec.base import EXTENSION_PREFIX
from oaspec.spec.components import Components
from oaspec.spec.extensions import Extendable
from oaspec.spec.info import Contact, ExternalDocs, Info, License, Server, ServerVariable, Tag
from oaspec.spec.openapi import Document, OpenAPI
from oaspec.spec.paths import (
    Callback,
    Encoding,
    Example,
    Header,
    Link,
    MediaType,
    Operation,
    Parameter,
    PathItem,
    Paths,
    RequestBody,
    Response,
    Responses,
)
from oaspec.spec.ref import RefOrSpec, component_ref
from oaspec.spec.schema import XML, BoolOrSchema, Discriminator, Schema
from oaspec.spec.security import (
    API_KEY_LOCATIONS,
    SECURITY_SCHEME_TYPES,
    OAuthFlow,
    OAuthFlows,
    SecurityRequirement,
    SecurityScheme,
)
from oaspec.validation.data import DataValidator
from oaspec.validation.issues import MUTUALLY_EXCLUSIVE, REQUIRED, UNUSED, ValidationIssue
from oaspec.validation.options import ValidationOptions

logger = logging.getLogger(__name__)

RESPONSE_CODE_PATTERN = r"^[1-5](?:[0-9]{2}|XX)$"
_RESPONSE_CODE = re.compile(RESPONSE_CODE_PATTERN)

SCHEMA_TYPES = ("string", "number", "integer", "boolean", "object", "array", "null")
CONTENT_ENCODINGS = ("7bit", "8bit", "binary", "quoted-printable", "base16", "base32", "base64")
ENCODING_STYLES = ("form", "spaceDelimited", "pipeDelimited", "deepObject")
PARAMETER_STYLES = {
    "path": ("matrix", "label", "simple"),
    "query": ("form", "spaceDelimited", "pipeDelimited", "deepObject"),
    "header": ("simple",),
    "cookie": ("form",),
}


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------


def field(path: str, name: str) -> str:
    """Path of field *name* below *path*."""
    return f"{path}.{name}" if path else name


def item(path: str, key: Union[str, int]) -> str:
    """Path of map key or list index *key* below *path*."""
    return f"{path}[{key}]"


# ---------------------------------------------------------------------------
# State
# ---------------------------------------------------------------------------


class ValidationState:
    """Everything one validation run accumulates.

    ``visited`` holds marker keys: reference ids whose target has been
    validated, ``tag:<name>`` / ``tag:<name>:used`` for declared and used
    tags, and ``operation:<id>`` for operation ids seen so far.
    ``referenced`` holds the ids of every component some reference points at.
    """

    def __init__(self, document: OpenAPI, options: ValidationOptions):
        self.document = document
        self.options = options
        self.components = document.components
        self.issues: list[ValidationIssue] = []
        self.visited: set[str] = set()
        self.referenced: set[str] = set()
        self.link_operation_ids: dict[str, str] = {}
        self.depth = 0
        self._data: Optional[DataValidator] = None

    def report(self, path: str, message: str) -> None:
        self.issues.append(ValidationIssue(path=path, message=message))

    def resolve(self, cell: Optional[RefOrSpec]) -> Any:
        """Resolve *cell* quietly; ``None`` when it is absent or broken.

        Broken references are reported where the cell itself is walked.
        """
        if cell is None:
            return None
        try:
            return cell.resolve(self.components)
        except ResolveError:
            return None

    def check_value(self, value: Any, schema: Schema, path: str) -> None:
        """Report *value* at *path* if it does not match *schema*."""
        if self._data is None:
            self._data = DataValidator(encode(self.document))
        problem = self._data.check(value, schema)
        if problem is not None:
            self.report(path, f"value does not match schema: {problem}")


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------


def validate_document(
    document: Union[Document, OpenAPI], options: Optional[ValidationOptions] = None
) -> list[ValidationIssue]:
    """Validate *document* and return every finding (empty when valid).

    Args:
        document: A decoded document, with or without its root envelope.
        options: Rule switches; strict defaults when omitted.
    """
    options = options or ValidationOptions()
    root = document.spec if isinstance(document, Extendable) else document
    if root is None:
        return [ValidationIssue(path="", message="document is empty")]

    state = ValidationState(root, options)
    walk(document, "", state)
    logger.debug("Validation finished with %d issue(s)", len(state.issues))
    return state.issues


def validate_data(
    document: Union[Document, OpenAPI],
    location: str,
    value: Any,
    options: Optional[ValidationOptions] = None,
    *,
    as_json: Optional[bool] = None,
) -> list[ValidationIssue]:
    """Validate a runtime *value* against the schema at *location* in *document*.

    Example::

        issues = validate_data(document, "#/components/schemas/Pet", {"id": "1"})

    Args:
        document: The decoded document holding the schema.
        location: JSON pointer to the schema, e.g. ``#/components/schemas/Pet``.
        value: Plain data or a pydantic model.
        options: Only ``validate_data_as_json`` is used here.
        as_json: Overrides ``validate_data_as_json`` for this call.

    Returns:
        One issue per mismatch, with paths relative to *value*; empty when
        the value matches.

    Raises:
        ResolveError: No usable schema lives at *location*.
    """
    options = options or ValidationOptions()
    data = DataValidator(encode(document), validate_data_as_json=options.validate_data_as_json)
    return data.check_at(location, value, as_json=as_json)


def ensure_valid(
    document: Union[Document, OpenAPI], options: Optional[ValidationOptions] = None
) -> None:
    """Like :func:`validate_document` but raise instead of returning findings.

    Raises:
        ValidationError: If there is at least one finding.
    """
    issues = validate_document(document, options)
    if issues:
        raise ValidationError(issues)


# ---------------------------------------------------------------------------
# Walker
# ---------------------------------------------------------------------------


def walk(node: Any, path: str, state: ValidationState, **context: Any) -> None:
    """Validate *node* and everything below it."""
    if node is None:
        return
    if state.depth >= state.options.max_depth:
        state.report(path, f"maximum nesting depth of {state.options.max_depth} exceeded")
        return
    state.depth += 1
    try:
        _rules(node, path, state, **context)
    finally:
        state.depth -= 1


@singledispatch
def _rules(node: Any, path: str, state: ValidationState, **context: Any) -> None:
    raise TypeError(f"no validation rules for {type(node).__name__}")


def _walk_map(mapping: Optional[dict], path: str, state: ValidationState) -> None:
    for key, value in (mapping or {}).items():
        walk(value, item(path, key), state)


def _walk_list(values: Optional[list], path: str, state: ValidationState) -> None:
    for index, value in enumerate(values or []):
        walk(value, item(path, index), state)


def _check_url(value: Optional[str], path: str, state: ValidationState) -> None:
    if not value:
        return
    try:
        httpx.URL(value)
    except httpx.InvalidURL as exc:
        state.report(path, f"invalid url: {exc}")


def _is_absolute_uri(value: str) -> bool:
    try:
        return httpx.URL(value).is_absolute_url
    except httpx.InvalidURL:
        return False


def _exclusive(path: str, state: ValidationState, first: str, second: str) -> None:
    state.report(path, f"{first} and {second}: {MUTUALLY_EXCLUSIVE}")


# ---------------------------------------------------------------------------
# Cells
# ---------------------------------------------------------------------------


@_rules.register(Extendable)
def _extendable(node: Extendable, path: str, state: ValidationState, **context: Any) -> None:
    if not state.options.allow_extension_name_without_prefix:
        for name in node.extensions:
            if not name.startswith(EXTENSION_PREFIX):
                state.report(field(path, name), f"extension name must start with '{EXTENSION_PREFIX}'")
    walk(node.spec, path, state, **context)


@_rules.register(RefOrSpec)
def _ref_or_spec(node: RefOrSpec, path: str, state: ValidationState, **context: Any) -> None:
    if node.spec is not None:
        walk(node.spec, path, state, **context)
        return
    if node.ref is None:
        state.report(path, "a reference or a value is required")
        return

    ref = node.ref.ref
    state.referenced.add(ref)
    if ref in state.visited:
        return
    state.visited.add(ref)

    chain: list[str] = []
    try:
        value = node.resolve(state.components, chain)
    except ResolveError as exc:
        state.report(path, str(exc))
        return
    finally:
        state.referenced.update(chain)
    state.visited.update(chain)
    walk(value, path, state, **context)


@_rules.register(BoolOrSchema)
def _bool_or_schema(node: BoolOrSchema, path: str, state: ValidationState) -> None:
    walk(node.schema_, path, state)


# ---------------------------------------------------------------------------
# Root and metadata
# ---------------------------------------------------------------------------


@_rules.register(OpenAPI)
def _openapi(node: OpenAPI, path: str, state: ValidationState) -> None:
    if not node.openapi:
        state.report(field(path, "openapi"), REQUIRED)
    elif not node.openapi.startswith("3.1."):
        state.report(field(path, "openapi"), f"unsupported version '{node.openapi}', expected 3.1.x")

    if node.info is None:
        state.report(field(path, "info"), REQUIRED)
    walk(node.info, field(path, "info"), state)

    # Tags first, so operations can check theirs against the declared set.
    _walk_list(node.tags, field(path, "tags"), state)

    _check_url(node.json_schema_dialect, field(path, "jsonSchemaDialect"), state)
    _walk_list(node.servers, field(path, "servers"), state)
    walk(node.paths, field(path, "paths"), state)
    _walk_map(node.webhooks, field(path, "webhooks"), state)
    walk(node.components, field(path, "components"), state)
    _security(node.security, field(path, "security"), state)
    walk(node.external_docs, field(path, "externalDocs"), state)

    if node.paths is None and node.webhooks is None and node.components is None:
        state.report(path, f"paths||webhooks||components: {REQUIRED}")

    for index, tag in enumerate(node.tags or []):
        name = tag.spec.name if tag.spec is not None else None
        if name and f"tag:{name}:used" not in state.visited:
            state.report(item(field(path, "tags"), index), f"'{name}' {UNUSED}")

    registry = node.components.spec if node.components is not None else None
    if registry is not None and not state.options.allow_unused_components:
        for category, name, _ in registry.entries():
            if component_ref(category, name) not in state.referenced:
                state.report(item(field(field(path, "components"), category), name), UNUSED)

    for link_path, operation_id in state.link_operation_ids.items():
        if f"operation:{operation_id}" not in state.visited:
            state.report(field(link_path, "operationId"), f"'{operation_id}' not found")


@_rules.register(Info)
def _info(node: Info, path: str, state: ValidationState) -> None:
    if not node.title:
        state.report(field(path, "title"), REQUIRED)
    if not node.version:
        state.report(field(path, "version"), REQUIRED)
    _check_url(node.terms_of_service, field(path, "termsOfService"), state)
    walk(node.contact, field(path, "contact"), state)
    walk(node.license, field(path, "license"), state)


@_rules.register(Contact)
def _contact(node: Contact, path: str, state: ValidationState) -> None:
    _check_url(node.url, field(path, "url"), state)
    if node.email and "@" not in parseaddr(node.email)[1]:
        state.report(field(path, "email"), f"invalid email '{node.email}'")


@_rules.register(License)
def _license(node: License, path: str, state: ValidationState) -> None:
    if not node.name:
        state.report(field(path, "name"), REQUIRED)
    if node.identifier and node.url:
        _exclusive(path, state, "identifier", "url")
    _check_url(node.url, field(path, "url"), state)


@_rules.register(ExternalDocs)
def _external_docs(node: ExternalDocs, path: str, state: ValidationState) -> None:
    if not node.url:
        state.report(field(path, "url"), REQUIRED)
    _check_url(node.url, field(path, "url"), state)


@_rules.register(Tag)
def _tag(node: Tag, path: str, state: ValidationState) -> None:
    if not node.name:
        state.report(field(path, "name"), REQUIRED)
    else:
        key = f"tag:{node.name}"
        if key in state.visited:
            state.report(field(path, "name"), f"'{node.name}' is not unique")
        state.visited.add(key)
    walk(node.external_docs, field(path, "externalDocs"), state)


@_rules.register(Server)
def _server(node: Server, path: str, state: ValidationState) -> None:
    if not node.url:
        state.report(field(path, "url"), REQUIRED)
        return
    _walk_map(node.variables, field(path, "variables"), state)
    _check_url(node.expanded_url(), field(path, "url"), state)


@_rules.register(ServerVariable)
def _server_variable(node: ServerVariable, path: str, state: ValidationState) -> None:
    if node.default is None:
        state.report(field(path, "default"), REQUIRED)
    if node.enum is not None:
        if not node.enum:
            state.report(field(path, "enum"), "must not be empty")
        elif node.default is not None and node.default not in node.enum:
            state.report(field(path, "default"), f"'{node.default}' is not one of enum values")


# ---------------------------------------------------------------------------
# Paths and operations
# ---------------------------------------------------------------------------


@_rules.register(Paths)
def _paths(node: Paths, path: str, state: ValidationState) -> None:
    for template, cell in node.root.items():
        entry_path = item(path, template)
        if not template.startswith("/"):
            state.report(entry_path, "path must start with '/'")
        if cell.root is None:
            state.report(entry_path, REQUIRED)
            continue
        walk(cell, entry_path, state)


@_rules.register(Callback)
def _callback(node: Callback, path: str, state: ValidationState) -> None:
    _walk_map(node.root, path, state)


@_rules.register(PathItem)
def _path_item(node: PathItem, path: str, state: ValidationState) -> None:
    _parameters(node.parameters, field(path, "parameters"), state)
    _walk_list(node.servers, field(path, "servers"), state)
    for method, operation in node.operations():
        walk(operation, field(path, method), state, method=method)


@_rules.register(Operation)
def _operation(
    node: Operation, path: str, state: ValidationState, method: Optional[str] = None
) -> None:
    if node.operation_id:
        key = f"operation:{node.operation_id}"
        if key in state.visited:
            state.report(field(path, "operationId"), f"'{node.operation_id}' is not unique")
        state.visited.add(key)

    if node.request_body is not None and method and not state.options.allows_request_body(method):
        state.report(field(path, "requestBody"), f"not allowed for {method.upper()}")
    walk(node.request_body, field(path, "requestBody"), state)

    walk(node.responses, field(path, "responses"), state)
    _walk_map(node.callbacks, field(path, "callbacks"), state)
    walk(node.external_docs, field(path, "externalDocs"), state)
    _parameters(node.parameters, field(path, "parameters"), state)

    for index, tag in enumerate(node.tags or []):
        if (
            not state.options.allow_undefined_tags_in_operation
            and f"tag:{tag}" not in state.visited
        ):
            state.report(item(field(path, "tags"), index), f"'{tag}' not found")
        state.visited.add(f"tag:{tag}:used")

    _security(node.security, field(path, "security"), state)
    _walk_list(node.servers, field(path, "servers"), state)


def _parameters(cells: Optional[list], path: str, state: ValidationState) -> None:
    seen: set[tuple[str, str]] = set()
    for index, cell in enumerate(cells or []):
        walk(cell, item(path, index), state)
        envelope = state.resolve(cell)
        parameter = envelope.spec if envelope is not None else None
        if parameter is None or not parameter.name or not parameter.in_:
            continue
        key = (parameter.name, parameter.in_)
        if key in seen:
            state.report(
                item(path, index), f"duplicate parameter '{parameter.name}' in {parameter.in_}"
            )
        seen.add(key)


def _security(
    requirements: Optional[list[SecurityRequirement]], path: str, state: ValidationState
) -> None:
    registry = state.components.spec if state.components is not None else None
    for index, requirement in enumerate(requirements or []):
        for name in requirement:
            state.referenced.add(component_ref("securitySchemes", name))
            if registry is None or registry.entry("securitySchemes", name) is None:
                state.report(item(item(path, index), name), f"security scheme '{name}' not found")


# ---------------------------------------------------------------------------
# Parameters, bodies and responses
# ---------------------------------------------------------------------------


def _check_examples(
    node: Union[MediaType, Parameter, Header], path: str, state: ValidationState
) -> None:
    """Check ``example``/``examples`` values of *node* against its schema."""
    if state.options.skip_example_validation:
        return
    if node.example is None and not node.examples:
        return
    if node.schema_ is None:
        # Parameters and headers described by content carry their schema there.
        if getattr(node, "content", None) is None:
            state.report(path, "unable to validate examples without schema")
        return

    schema = state.resolve(node.schema_)
    if schema is None:
        return
    if node.example is not None:
        state.check_value(node.example, schema, field(path, "example"))
    for name, cell in (node.examples or {}).items():
        envelope = state.resolve(cell)
        example = envelope.spec if envelope is not None else None
        if example is not None and example.value is not None:
            state.check_value(example.value, schema, field(item(field(path, "examples"), name), "value"))


def _content(content: Optional[dict], path: str, state: ValidationState, single: bool) -> None:
    if content is None:
        return
    if single and len(content) != 1:
        state.report(path, "must contain exactly one entry")
    _walk_map(content, path, state)


@_rules.register(Parameter)
def _parameter(node: Parameter, path: str, state: ValidationState) -> None:
    if not node.name:
        state.report(field(path, "name"), REQUIRED)
    if not node.in_:
        state.report(field(path, "in"), REQUIRED)
    elif node.in_ not in PARAMETER_STYLES:
        state.report(field(path, "in"), f"must be one of {', '.join(PARAMETER_STYLES)}")
    else:
        if node.in_ == "path" and not node.required:
            state.report(field(path, "required"), "must be true for path parameters")
        if node.style and node.style not in PARAMETER_STYLES[node.in_]:
            state.report(
                field(path, "style"), f"'{node.style}' is not allowed for {node.in_} parameters"
            )

    if node.schema_ is not None and node.content is not None:
        _exclusive(path, state, "schema", "content")
    elif node.schema_ is None and node.content is None:
        state.report(path, f"schema||content: {REQUIRED}")
    if node.example is not None and node.examples:
        _exclusive(path, state, "example", "examples")

    walk(node.schema_, field(path, "schema"), state)
    _content(node.content, field(path, "content"), state, single=True)
    _walk_map(node.examples, field(path, "examples"), state)
    _check_examples(node, path, state)


@_rules.register(Header)
def _header(node: Header, path: str, state: ValidationState) -> None:
    if node.schema_ is not None and node.content is not None:
        _exclusive(path, state, "schema", "content")
    if node.style and node.style != "simple":
        state.report(field(path, "style"), "must be 'simple'")
    if node.example is not None and node.examples:
        _exclusive(path, state, "example", "examples")

    walk(node.schema_, field(path, "schema"), state)
    _content(node.content, field(path, "content"), state, single=True)
    _walk_map(node.examples, field(path, "examples"), state)
    _check_examples(node, path, state)


@_rules.register(MediaType)
def _media_type(node: MediaType, path: str, state: ValidationState) -> None:
    walk(node.schema_, field(path, "schema"), state)
    _walk_map(node.encoding, field(path, "encoding"), state)
    if node.example is not None and node.examples:
        _exclusive(path, state, "example", "examples")
    _walk_map(node.examples, field(path, "examples"), state)
    _check_examples(node, path, state)


@_rules.register(Encoding)
def _encoding(node: Encoding, path: str, state: ValidationState) -> None:
    _walk_map(node.headers, field(path, "headers"), state)
    if node.style and node.style not in ENCODING_STYLES:
        state.report(field(path, "style"), f"must be one of {', '.join(ENCODING_STYLES)}")


@_rules.register(Example)
def _example(node: Example, path: str, state: ValidationState) -> None:
    if node.value is not None and node.external_value:
        _exclusive(path, state, "value", "externalValue")
    _check_url(node.external_value, field(path, "externalValue"), state)


@_rules.register(RequestBody)
def _request_body(node: RequestBody, path: str, state: ValidationState) -> None:
    if not node.content:
        state.report(field(path, "content"), REQUIRED)
    _walk_map(node.content, field(path, "content"), state)


@_rules.register(Responses)
def _responses(node: Responses, path: str, state: ValidationState) -> None:
    for code, cell in node.root.items():
        entry_path = item(path, code)
        if code != "default" and not _RESPONSE_CODE.match(code):
            state.report(entry_path, f"must match pattern '{RESPONSE_CODE_PATTERN}'")
        walk(cell, entry_path, state)


@_rules.register(Response)
def _response(node: Response, path: str, state: ValidationState) -> None:
    if not node.description:
        state.report(field(path, "description"), REQUIRED)
    _walk_map(node.headers, field(path, "headers"), state)
    _walk_map(node.content, field(path, "content"), state)
    _walk_map(node.links, field(path, "links"), state)


@_rules.register(Link)
def _link(node: Link, path: str, state: ValidationState) -> None:
    if node.operation_ref and node.operation_id:
        _exclusive(path, state, "operationRef", "operationId")
    elif not node.operation_ref and not node.operation_id:
        state.report(path, f"operationRef||operationId: {REQUIRED}")
    if node.operation_id:
        state.link_operation_ids[path] = node.operation_id
    walk(node.server, field(path, "server"), state)


# ---------------------------------------------------------------------------
# Components and security
# ---------------------------------------------------------------------------


@_rules.register(Components)
def _components(node: Components, path: str, state: ValidationState) -> None:
    for category, name, cell in node.entries():
        ref = component_ref(category, name)
        # Already validated through a reference.
        if ref in state.visited:
            continue
        state.visited.add(ref)
        walk(cell, item(field(path, category), name), state)


@_rules.register(SecurityScheme)
def _security_scheme(node: SecurityScheme, path: str, state: ValidationState) -> None:
    if not node.type:
        state.report(field(path, "type"), REQUIRED)
    elif node.type == "apiKey":
        if not node.name:
            state.report(field(path, "name"), REQUIRED)
        if not node.in_:
            state.report(field(path, "in"), REQUIRED)
        elif node.in_ not in API_KEY_LOCATIONS:
            state.report(field(path, "in"), f"must be one of {', '.join(API_KEY_LOCATIONS)}")
    elif node.type == "http":
        if not node.scheme:
            state.report(field(path, "scheme"), REQUIRED)
    elif node.type == "oauth2":
        if node.flows is None:
            state.report(field(path, "flows"), REQUIRED)
        walk(node.flows, field(path, "flows"), state)
    elif node.type == "openIdConnect":
        if not node.open_id_connect_url:
            state.report(field(path, "openIdConnectUrl"), REQUIRED)
        _check_url(node.open_id_connect_url, field(path, "openIdConnectUrl"), state)
    elif node.type not in SECURITY_SCHEME_TYPES:
        state.report(field(path, "type"), f"must be one of {', '.join(SECURITY_SCHEME_TYPES)}")


@_rules.register(OAuthFlows)
def _oauth_flows(node: OAuthFlows, path: str, state: ValidationState) -> None:
    needs = (
        ("implicit", node.implicit, True, False),
        ("password", node.password, False, True),
        ("clientCredentials", node.client_credentials, False, True),
        ("authorizationCode", node.authorization_code, True, True),
    )
    for name, envelope, needs_authorization, needs_token in needs:
        if envelope is None:
            continue
        flow_path = field(path, name)
        flow = envelope.spec
        if flow is not None:
            if needs_authorization and not flow.authorization_url:
                state.report(field(flow_path, "authorizationUrl"), REQUIRED)
            if needs_token and not flow.token_url:
                state.report(field(flow_path, "tokenUrl"), REQUIRED)
        walk(envelope, flow_path, state)


@_rules.register(OAuthFlow)
def _oauth_flow(node: OAuthFlow, path: str, state: ValidationState) -> None:
    if node.scopes is None:
        state.report(field(path, "scopes"), REQUIRED)
    _check_url(node.authorization_url, field(path, "authorizationUrl"), state)
    _check_url(node.token_url, field(path, "tokenUrl"), state)
    _check_url(node.refresh_url, field(path, "refreshUrl"), state)


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------


@_rules.register(Discriminator)
def _discriminator(node: Discriminator, path: str, state: ValidationState) -> None:
    if not node.property_name:
        state.report(field(path, "propertyName"), REQUIRED)


@_rules.register(XML)
def _xml(node: XML, path: str, state: ValidationState) -> None:
    if node.namespace and not _is_absolute_uri(node.namespace):
        state.report(field(path, "namespace"), "must be an absolute URI")


@_rules.register(Schema)
def _schema(node: Schema, path: str, state: ValidationState) -> None:
    walk(node.discriminator, field(path, "discriminator"), state)
    walk(node.xml, field(path, "xml"), state)
    walk(node.external_docs, field(path, "externalDocs"), state)

    if node.schema_ and not _is_absolute_uri(node.schema_):
        state.report(field(path, "$schema"), "must be an absolute URI")
    for name in node.types:
        if name not in SCHEMA_TYPES:
            state.report(field(path, "type"), f"unknown type '{name}'")
    if node.content_encoding and node.content_encoding not in CONTENT_ENCODINGS:
        state.report(
            field(path, "contentEncoding"), f"must be one of {', '.join(CONTENT_ENCODINGS)}"
        )

    _schema_values(node, path, state)
    _schema_bounds(node, path, state)
    _schema_children(node, path, state)


def _schema_values(node: Schema, path: str, state: ValidationState) -> None:
    """``enum``/``const``/``default``/``example(s)`` consistency and conformance."""
    # An unknown type is reported by _schema; the value checker cannot apply it.
    conformance = all(name in SCHEMA_TYPES for name in node.types)

    if node.enum is not None:
        seen: set[str] = set()
        for index, value in enumerate(node.enum):
            key = json.dumps(value, sort_keys=True)
            if key in seen:
                state.report(item(field(path, "enum"), index), "duplicate enum value")
            seen.add(key)
        if node.const is not None:
            _exclusive(path, state, "const", "enum")

    if node.default is not None:
        default_path = field(path, "default")
        if node.const is not None and node.default != node.const:
            state.report(default_path, "must be equal to const")
        if node.enum is not None and node.default not in node.enum:
            state.report(default_path, "must be one of enum values")
        if conformance and not state.options.skip_default_validation:
            state.check_value(node.default, node, default_path)

    if conformance and not state.options.skip_example_validation:
        if node.example is not None:
            state.check_value(node.example, node, field(path, "example"))
        for index, value in enumerate(node.examples or []):
            state.check_value(value, node, item(field(path, "examples"), index))


def _range(
    path: str,
    state: ValidationState,
    names: tuple[str, str],
    values: tuple[Any, Any],
    counts: bool = True,
) -> None:
    (low_name, high_name), (low, high) = names, values
    if counts:
        for name, value in ((low_name, low), (high_name, high)):
            if value is not None and value < 0:
                state.report(field(path, name), "must be >= 0")
    if low is not None and high is not None and high < low:
        state.report(field(path, high_name), f"must be >= {low_name}")


def _schema_bounds(node: Schema, path: str, state: ValidationState) -> None:
    # arrays
    _range(path, state, ("minItems", "maxItems"), (node.min_items, node.max_items))
    _range(path, state, ("minContains", "maxContains"), (node.min_contains, node.max_contains))
    if node.contains is None and (node.min_contains is not None or node.max_contains is not None):
        state.report(field(path, "contains"), REQUIRED)

    # objects
    _range(path, state, ("minProperties", "maxProperties"), (node.min_properties, node.max_properties))
    if node.required and node.properties is not None:
        for index, name in enumerate(node.required):
            if name not in node.properties:
                state.report(item(field(path, "required"), index), f"property '{name}' not found")

    # numbers
    if node.multiple_of is not None and node.multiple_of <= 0:
        state.report(field(path, "multipleOf"), "must be > 0")
    _range(path, state, ("minimum", "maximum"), (node.minimum, node.maximum), counts=False)
    if (
        node.exclusive_minimum is not None
        and node.exclusive_maximum is not None
        and node.exclusive_maximum <= node.exclusive_minimum
    ):
        state.report(field(path, "exclusiveMaximum"), "must be > exclusiveMinimum")
    if node.minimum is not None and node.exclusive_minimum is not None:
        _exclusive(path, state, "minimum", "exclusiveMinimum")
    if node.maximum is not None and node.exclusive_maximum is not None:
        _exclusive(path, state, "maximum", "exclusiveMaximum")

    # strings
    _range(path, state, ("minLength", "maxLength"), (node.min_length, node.max_length))
    if node.pattern is not None:
        _check_pattern(node.pattern, field(path, "pattern"), state)


def _check_pattern(pattern: str, path: str, state: ValidationState) -> None:
    try:
        re.compile(pattern)
    except re.error as exc:
        state.report(path, f"invalid pattern: {exc}")


def _schema_children(node: Schema, path: str, state: ValidationState) -> None:
    walk(node.not_, field(path, "not"), state)
    _walk_list(node.all_of, field(path, "allOf"), state)
    _walk_list(node.any_of, field(path, "anyOf"), state)
    _walk_list(node.one_of, field(path, "oneOf"), state)
    walk(node.if_, field(path, "if"), state)
    walk(node.then, field(path, "then"), state)
    walk(node.else_, field(path, "else"), state)
    _walk_map(node.defs, field(path, "$defs"), state)
    _walk_map(node.dependent_schemas, field(path, "dependentSchemas"), state)
    walk(node.content_schema, field(path, "contentSchema"), state)

    _walk_map(node.properties, field(path, "properties"), state)
    for pattern in node.pattern_properties or {}:
        _check_pattern(pattern, item(field(path, "patternProperties"), pattern), state)
    _walk_map(node.pattern_properties, field(path, "patternProperties"), state)
    walk(node.additional_properties, field(path, "additionalProperties"), state)
    walk(node.unevaluated_properties, field(path, "unevaluatedProperties"), state)
    walk(node.property_names, field(path, "propertyNames"), state)

    walk(node.items, field(path, "items"), state)
    _walk_list(node.prefix_items, field(path, "prefixItems"), state)
    walk(node.unevaluated_items, field(path, "unevaluatedItems"), state)
    walk(node.contains, field(path, "contains"), state)
