# =============================================================================
# swagger_docs/dto.py - Documented DTO Base Model
# =============================================================================
# DTOs are pydantic models. Fields declared with api_property() are both
# validated by pydantic and recorded as Property Facts, so the same class
# drives request validation and the component schema in the OpenAPI document.
#
# Usage:
#   class CreateUserDto(ApiModel):
#       email: str = api_property(description="User email", format="email")
#       name: str | None = api_property_optional(min_length=1, max_length=50)
#
# Fields are serialized in camelCase (is_active <-> isActive); the property
# facts are keyed by that serialized name.
# =============================================================================

from __future__ import annotations

import datetime as dt
import inspect
import logging
import types
import typing
import uuid
from decimal import Decimal
from enum import Enum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticUndefined

from swagger_docs import registry
from swagger_docs.registry import MetadataStore
from swagger_docs.types import PropertyFact, strip_unset

logger = logging.getLogger(__name__)

# Key under json_schema_extra that carries the documentation options
PROPERTY_OPTIONS_KEY = "x-api-property"


# =============================================================================
# Base Model
# =============================================================================

class ApiModel(BaseModel):
    """
    Base class for every documented DTO.

    Subclasses record one Property Fact per api_property() field declared on
    the subclass itself. Inherited fields stay recorded on the base that
    declared them and are merged back in by MetadataStore.get_properties().
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    metadata_store: ClassVar[MetadataStore] = registry.metadata_store

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        super().__pydantic_init_subclass__(**kwargs)
        register_properties(cls, cls.metadata_store)


def register_properties(cls: type[BaseModel], store: MetadataStore) -> int:
    """
    Record Property Facts for the api_property() fields declared on cls.

    Returns:
        Number of properties recorded
    """
    own_fields = inspect.get_annotations(cls)
    count = 0

    for name, field in cls.model_fields.items():
        if name not in own_fields:
            continue
        extra = field.json_schema_extra
        if not isinstance(extra, dict) or PROPERTY_OPTIONS_KEY not in extra:
            continue

        options = dict(extra[PROPERTY_OPTIONS_KEY])
        required = options.pop("required", None)
        if required is None:
            required = field.is_required()

        store.define_property(cls, PropertyFact(
            name=field.alias or name,
            schema=build_property_schema(field.annotation, options),
            required=bool(required),
        ))
        count += 1

    return count


# =============================================================================
# Field Declarations
# =============================================================================

def api_property(
    default: Any = PydanticUndefined,
    *,
    description: str | None = None,
    example: Any = None,
    required: bool | None = None,
    schema_type: str | None = None,
    format: str | None = None,
    enum: list[Any] | None = None,
    min_length: int | None = None,
    max_length: int | None = None,
    minimum: float | None = None,
    maximum: float | None = None,
    pattern: str | None = None,
    items: Any = None,
    additional_properties: bool | None = None,
    default_factory: Any = None,
) -> Any:
    """
    Declare a documented DTO field.

    Returns a pydantic Field, so length/range/pattern bounds are enforced on
    validation as well as published in the schema.

    Args:
        default: Field default (omit for a field without default)
        description: Human readable description
        example: Example value shown in the document
        required: Overrides the required flag; otherwise a field is required
            when it has no default
        schema_type: JSON type name; inferred from the annotation when unset
        items: Item schema (dict) or DTO class for array fields

    Example:
        email: str = api_property(description="User email", format="email")
    """
    options = strip_unset({
        "type": schema_type,
        "description": description,
        "example": example,
        "required": required,
        "format": format,
        "enum": list(enum) if enum is not None else None,
        "minLength": min_length,
        "maxLength": max_length,
        "minimum": minimum,
        "maximum": maximum,
        "pattern": pattern,
        "items": items,
        "additionalProperties": additional_properties,
    })

    field_kwargs: dict[str, Any] = strip_unset({
        "description": description,
        "examples": [example] if example is not None else None,
        "min_length": min_length,
        "max_length": max_length,
        "ge": minimum,
        "le": maximum,
        "pattern": pattern,
    })
    if default_factory is not None:
        field_kwargs["default_factory"] = default_factory
    else:
        field_kwargs["default"] = default

    return Field(json_schema_extra={PROPERTY_OPTIONS_KEY: options}, **field_kwargs)


def api_property_optional(default: Any = None, **options: Any) -> Any:
    """Same as api_property() with `required` forced to False."""
    options["required"] = False
    return api_property(default, **options)


# =============================================================================
# Schema Inference
# =============================================================================

_SCALAR_TYPES: list[tuple[type, str]] = [
    # bool before int: bool is an int subclass
    (bool, "boolean"),
    (int, "integer"),
    (float, "number"),
    (Decimal, "number"),
    (str, "string"),
    (dt.datetime, "string"),
    (dt.date, "string"),
    (dt.time, "string"),
    (uuid.UUID, "string"),
]

_ARRAY_ORIGINS = (list, tuple, set, frozenset)


def _unwrap_optional(annotation: Any) -> Any:
    origin = typing.get_origin(annotation)
    if origin is typing.Union or origin is types.UnionType:
        args = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def infer_schema(annotation: Any) -> dict[str, Any]:
    """
    Infer a property schema from a Python type annotation.

    DTO classes come back as {"type": <class>} references; anything that
    cannot be mapped is documented as a string.
    """
    annotation = _unwrap_optional(annotation)
    if annotation is Any:
        return {"type": "object"}
    origin = typing.get_origin(annotation)

    if origin in _ARRAY_ORIGINS:
        args = [arg for arg in typing.get_args(annotation) if arg is not Ellipsis]
        schema: dict[str, Any] = {"type": "array"}
        if args:
            schema["items"] = infer_schema(args[0])
        return schema
    if origin is dict:
        return {"type": "object"}
    if origin is typing.Literal:
        return {"type": "string", "enum": list(typing.get_args(annotation))}

    if inspect.isclass(annotation):
        if issubclass(annotation, Enum):
            return {"type": "string", "enum": [member.value for member in annotation]}
        if issubclass(annotation, BaseModel):
            return {"type": annotation}
        if annotation in _ARRAY_ORIGINS:
            return {"type": "array"}
        if annotation is dict:
            return {"type": "object"}
        for python_type, json_type in _SCALAR_TYPES:
            if issubclass(annotation, python_type):
                return {"type": json_type}

    return {"type": "string"}


def build_property_schema(annotation: Any, options: dict[str, Any]) -> dict[str, Any]:
    """
    Merge explicit api_property() options over the inferred schema.

    The required flag is never part of the property schema; it goes to the
    object's `required` list instead.
    """
    inferred = infer_schema(annotation)
    schema = dict(options)
    schema.pop("required", None)

    if "type" not in schema:
        schema["type"] = inferred["type"]
        if "enum" in inferred and "enum" not in schema:
            schema["enum"] = inferred["enum"]

    items = schema.get("items")
    if inspect.isclass(items):
        schema["items"] = {"type": items}
    elif items is None and schema["type"] == "array" and "items" in inferred:
        schema["items"] = inferred["items"]

    # Keep a stable key order: type first, then the declared options
    return {"type": schema.pop("type"), **schema}
