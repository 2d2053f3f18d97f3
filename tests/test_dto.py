# =============================================================================
# tests/test_dto.py - Tests for ApiModel and api_property()
# =============================================================================
# Tests that DTO fields declared with api_property() are:
# - validated by pydantic (bounds, patterns, required fields)
# - recorded as Property Facts keyed by their camelCase name
# - given a schema type inferred from the annotation when none is set
# =============================================================================

from datetime import datetime
from enum import Enum
from typing import Literal

import pytest
from pydantic import Field
from pydantic import ValidationError as PydanticValidationError

from swagger_docs import ApiModel, api_property, api_property_optional
from swagger_docs.dto import infer_schema


class Color(str, Enum):
    RED = "red"
    BLUE = "blue"


# =============================================================================
# Property registration
# =============================================================================

class TestPropertyRegistration:
    """Tests for the Property Facts recorded when a DTO class is defined."""

    def test_properties_keyed_by_alias(self, store):
        """Snake-case fields are documented under their camelCase alias."""
        class AccountDto(ApiModel):
            metadata_store = store

            is_active: bool = api_property(description="Active flag")
            display_name: str = api_property()

        assert list(store.get_own_properties(AccountDto)) == ["isActive", "displayName"]

    def test_required_follows_default(self, store):
        """Fields without a default are required; fields with one are not."""
        class AccountDto(ApiModel):
            metadata_store = store

            email: str = api_property()
            nickname: str | None = api_property(None)

        props = store.get_own_properties(AccountDto)
        assert props["email"].required is True
        assert props["nickname"].required is False

    def test_explicit_required_wins(self, store):
        """required=True documents a field as required even with a default."""
        class AccountDto(ApiModel):
            metadata_store = store

            role: str = api_property("member", required=True)

        assert store.get_own_properties(AccountDto)["role"].required is True

    def test_optional_helper_forces_not_required(self, store):
        """api_property_optional() is never required."""
        class AccountDto(ApiModel):
            metadata_store = store

            name: str | None = api_property_optional(description="Name")

        prop = store.get_own_properties(AccountDto)["name"]
        assert prop.required is False
        assert "required" not in prop.schema

    def test_plain_fields_are_not_documented(self, store):
        """Only api_property() fields produce Property Facts."""
        class AccountDto(ApiModel):
            metadata_store = store

            email: str = api_property()
            internal: str = Field("x")

        assert list(store.get_own_properties(AccountDto)) == ["email"]

    def test_inherited_properties_stay_on_base(self, store):
        """A subclass records only its own fields; the merge happens on read."""
        class BaseDto(ApiModel):
            metadata_store = store

            created_at: datetime = api_property(format="date-time")

        class ItemDto(BaseDto):
            id: str = api_property()

        assert list(store.get_own_properties(ItemDto)) == ["id"]
        assert list(store.get_properties(ItemDto)) == ["createdAt", "id"]

    def test_schema_carries_options(self, store):
        """Declared options appear in the property schema."""
        class AccountDto(ApiModel):
            metadata_store = store

            name: str = api_property(
                description="User name",
                example="John",
                min_length=1,
                max_length=50,
            )

        assert store.get_own_properties(AccountDto)["name"].schema == {
            "type": "string",
            "description": "User name",
            "example": "John",
            "minLength": 1,
            "maxLength": 50,
        }


# =============================================================================
# Type inference
# =============================================================================

class TestTypeInference:
    """Tests for the schema type inferred from annotations."""

    @pytest.mark.parametrize("annotation,expected", [
        (str, {"type": "string"}),
        (int, {"type": "integer"}),
        (float, {"type": "number"}),
        (bool, {"type": "boolean"}),
        (datetime, {"type": "string"}),
        (dict[str, int], {"type": "object"}),
        (list[str], {"type": "array", "items": {"type": "string"}}),
        (int | None, {"type": "integer"}),
        (Literal["a", "b"], {"type": "string", "enum": ["a", "b"]}),
        (Color, {"type": "string", "enum": ["red", "blue"]}),
        (bytes, {"type": "string"}),
    ])
    def test_infer_schema(self, annotation, expected):
        """Annotations map to JSON schema types."""
        assert infer_schema(annotation) == expected

    def test_nested_dto_becomes_reference(self, store):
        """A DTO-typed field is documented as a class reference."""
        class ChildDto(ApiModel):
            metadata_store = store
            value: int = api_property()

        class ParentDto(ApiModel):
            metadata_store = store
            child: ChildDto = api_property(description="Child")
            children: list[ChildDto] = api_property()

        props = store.get_own_properties(ParentDto)
        assert props["child"].schema == {"type": ChildDto, "description": "Child"}
        assert props["children"].schema == {"type": "array", "items": {"type": ChildDto}}

    def test_explicit_type_overrides_inference(self, store):
        """schema_type wins over the annotation."""
        class AccountDto(ApiModel):
            metadata_store = store

            balance: str = api_property(schema_type="number")

        assert store.get_own_properties(AccountDto)["balance"].schema == {"type": "number"}

    def test_items_class_wrapped(self, store):
        """A class passed as items becomes a reference."""
        class TagDto(ApiModel):
            metadata_store = store
            name: str = api_property()

        class AccountDto(ApiModel):
            metadata_store = store
            tags: list = api_property(items=TagDto)

        assert store.get_own_properties(AccountDto)["tags"].schema == {
            "type": "array",
            "items": {"type": TagDto},
        }


# =============================================================================
# Validation
# =============================================================================

class TestValidation:
    """Tests that documented bounds are also enforced."""

    def test_bounds_enforced(self, store):
        """min_length and maximum reject invalid input."""
        class AccountDto(ApiModel):
            metadata_store = store

            name: str = api_property(min_length=2)
            age: int | None = api_property_optional(maximum=150)

        with pytest.raises(PydanticValidationError):
            AccountDto(name="x")
        with pytest.raises(PydanticValidationError):
            AccountDto(name="ok", age=200)

    def test_accepts_alias_and_field_name(self, store):
        """Both isActive and is_active populate the field."""
        class AccountDto(ApiModel):
            metadata_store = store

            is_active: bool = api_property_optional(True)

        assert AccountDto.model_validate({"isActive": False}).is_active is False
        assert AccountDto(is_active=False).is_active is False

    def test_dumps_by_alias(self, store):
        """Serialization by alias produces camelCase keys."""
        class AccountDto(ApiModel):
            metadata_store = store

            display_name: str = api_property()

        assert AccountDto(display_name="Ann").model_dump(by_alias=True) == {"displayName": "Ann"}
