"""Typed OpenAPI 3.1 object model.

Every object is a pydantic model. Objects that may carry ``x-`` extensions
are wrapped in :class:`Extendable`; positions that accept ``$ref`` are typed
as :class:`RefOrSpec`.
"""

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
from oaspec.spec.ref import Ref, RefOrSpec, component_ref, parse_component_ref
from oaspec.spec.schema import XML, BoolOrSchema, Discriminator, Schema
from oaspec.spec.security import OAuthFlow, OAuthFlows, SecurityRequirement, SecurityScheme
from oaspec.spec.single_or_array import SingleOrArray

__all__ = [
    "EXTENSION_PREFIX",
    "XML",
    "BoolOrSchema",
    "Callback",
    "Components",
    "Contact",
    "Discriminator",
    "Document",
    "Encoding",
    "Example",
    "Extendable",
    "ExternalDocs",
    "Header",
    "Info",
    "License",
    "Link",
    "MediaType",
    "OAuthFlow",
    "OAuthFlows",
    "OpenAPI",
    "Operation",
    "Parameter",
    "PathItem",
    "Paths",
    "Ref",
    "RefOrSpec",
    "RequestBody",
    "Response",
    "Responses",
    "Schema",
    "SecurityRequirement",
    "SecurityScheme",
    "Server",
    "ServerVariable",
    "SingleOrArray",
    "Tag",
    "component_ref",
    "parse_component_ref",
]
