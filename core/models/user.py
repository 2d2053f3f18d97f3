# =============================================================================
# core/models/user.py - User DTOs
# =============================================================================
# Request and response shapes of the /users resource.
#
# Database columns are snake_case; the API speaks camelCase through the
# ApiModel alias generator (is_active <-> isActive).
# =============================================================================

from swagger_docs import ApiModel, api_property, api_property_optional

from core.models.common import PaginationMetaDto, TimestampDto

# Loose check: one "@" and a dot in the domain
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"

USER_ID_EXAMPLE = "123e4567-e89b-12d3-a456-426614174000"


# =============================================================================
# Requests
# =============================================================================

class CreateUserDto(ApiModel):
    """Body of POST /users."""

    email: str = api_property(
        description="User email",
        example="user@example.com",
        format="email",
        pattern=EMAIL_PATTERN,
    )
    name: str | None = api_property_optional(
        description="User name",
        example="John Doe",
        min_length=1,
        max_length=50,
    )
    password: str | None = api_property_optional(
        description="User password",
        example="password123",
        min_length=6,
        max_length=100,
    )
    age: int | None = api_property_optional(
        description="User age",
        example=25,
        minimum=0,
        maximum=150,
    )
    is_active: bool = api_property_optional(
        True,
        description="User activation status",
        example=True,
    )


class UpdateUserDto(ApiModel):
    """Body of PUT /users/{id}; every field is optional."""

    email: str | None = api_property_optional(
        description="User email",
        example="user@example.com",
        format="email",
        pattern=EMAIL_PATTERN,
    )
    name: str | None = api_property_optional(
        description="User name",
        example="John Doe",
        min_length=1,
        max_length=50,
    )
    is_active: bool | None = api_property_optional(
        description="User activation status",
        example=True,
    )


# =============================================================================
# Responses
# =============================================================================

class UserResponseDto(TimestampDto):
    """A user as returned by the API (never includes the password)."""

    id: str = api_property(description="User ID", example=USER_ID_EXAMPLE)
    email: str = api_property(description="User email", example="user@example.com")
    name: str | None = api_property(None, description="User name", example="John Doe")
    is_active: bool = api_property(description="User activation status", example=True)


class UserListResponseDto(ApiModel):
    """One page of users."""

    data: list[UserResponseDto] = api_property(description="User list")
    meta: PaginationMetaDto = api_property(description="Pagination information")
