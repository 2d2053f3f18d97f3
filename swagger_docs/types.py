# =============================================================================
# swagger_docs/types.py - Metadata Fact Types
# =============================================================================
# Defines the facts that decorators record and the generator reads back.
# Every fact renders its own OpenAPI fragment via to_dict().
#
# A DTO reference inside any schema is the dict {"type": <class>}. The class
# object is kept as-is until the final assembly pass turns it into a $ref.
# =============================================================================

from __future__ import annotations

import copy
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable


# =============================================================================
# Enums
# =============================================================================

class HttpMethod(str, Enum):
    """HTTP verbs a controller method can be bound to."""
    GET = "get"
    POST = "post"
    PUT = "put"
    DELETE = "delete"
    PATCH = "patch"


SUPPORTED_METHODS = frozenset(m.value for m in HttpMethod)


class ParameterLocation(str, Enum):
    """Where an operation parameter lives."""
    PATH = "path"
    QUERY = "query"


class FactKind(str, Enum):
    """Kinds of facts held by the MetadataStore."""
    ROUTE = "route"
    OPERATION = "operation"
    PARAMETER = "parameter"
    REQUEST_BODY = "request_body"
    RESPONSE = "response"
    PROPERTY = "property"
    TAGS = "tags"


# =============================================================================
# Helpers
# =============================================================================

_PATH_PARAM_PATTERN = re.compile(r":([^/]+)")


def to_openapi_path(path: str) -> str:
    """
    Convert colon-style path parameters to brace style.

    Example:
        to_openapi_path("/:id/posts/:post_id")  # "/{id}/posts/{post_id}"
    """
    return _PATH_PARAM_PATTERN.sub(r"{\1}", path)


def strip_unset(values: dict[str, Any]) -> dict[str, Any]:
    """Drop keys whose value is None."""
    return {key: value for key, value in values.items() if value is not None}


def is_model_reference(schema: Any) -> bool:
    """True if schema is a {"type": <class>} DTO reference."""
    return isinstance(schema, dict) and isinstance(schema.get("type"), type)


# =============================================================================
# Route Fact
# =============================================================================

@dataclass(frozen=True)
class RouteFact:
    """
    The verb/path binding of one controller method.

    Created when a route decorator is applied; never modified afterwards.
    """
    owner: type
    method_name: str
    http_method: str
    path: str
    middlewares: tuple[Callable[..., Any], ...] = ()

    @property
    def verb(self) -> str:
        return self.http_method.lower()

    @property
    def has_supported_method(self) -> bool:
        return self.verb in SUPPORTED_METHODS


# =============================================================================
# Operation Fact
# =============================================================================

@dataclass
class OperationFact:
    """Summary, description, tags and deprecation of one operation."""
    summary: str | None = None
    description: str | None = None
    tags: list[str] = field(default_factory=list)
    deprecated: bool | None = None
    external_docs: dict[str, str] | None = None

    def to_dict(self) -> dict[str, Any]:
        return strip_unset({
            "summary": self.summary,
            "description": self.description,
            "tags": list(self.tags) or None,
            "deprecated": self.deprecated,
            "externalDocs": copy.deepcopy(self.external_docs),
        })


# =============================================================================
# Parameter Fact
# =============================================================================

@dataclass
class ParameterFact:
    """A single path or query parameter."""
    name: str
    location: ParameterLocation
    required: bool
    schema: dict[str, Any] = field(default_factory=lambda: {"type": "string"})
    description: str | None = None
    style: str | None = None
    explode: bool | None = None
    allow_empty_value: bool | None = None
    allow_reserved: bool | None = None

    def to_dict(self) -> dict[str, Any]:
        return strip_unset({
            "name": self.name,
            "in": self.location.value,
            "description": self.description,
            "required": self.required,
            "schema": copy.deepcopy(self.schema),
            "allowEmptyValue": self.allow_empty_value,
            "allowReserved": self.allow_reserved,
            "explode": self.explode,
            "style": self.style,
        })


# =============================================================================
# Request Body Fact
# =============================================================================

@dataclass
class RequestBodyFact:
    """Request body of one operation: content type -> media object."""
    content: dict[str, dict[str, Any]]
    required: bool = False
    description: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return strip_unset({
            "description": self.description,
            "required": self.required,
            "content": copy.deepcopy(self.content),
        })


# =============================================================================
# Response Fact
# =============================================================================

@dataclass
class ResponseFact:
    """One documented response, keyed by its status code."""
    status: int
    description: str
    content: dict[str, dict[str, Any]] | None = None
    headers: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return strip_unset({
            "description": self.description,
            "content": copy.deepcopy(self.content),
            "headers": copy.deepcopy(self.headers),
        })


# =============================================================================
# Property Fact
# =============================================================================

@dataclass
class PropertyFact:
    """A documented DTO field, keyed by its serialized name."""
    name: str
    schema: dict[str, Any]
    required: bool = False

    def to_dict(self) -> dict[str, Any]:
        return copy.deepcopy(self.schema)
