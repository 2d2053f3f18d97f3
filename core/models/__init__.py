# =============================================================================
# core/models/ - DTOs
# =============================================================================
# This package contains the documented pydantic DTOs:
# - common.py: Timestamps, pagination and error envelopes
# - user.py: User create/update/response schemas
#
# These models define the "contract" between API and clients, and they are
# the component schemas of the generated OpenAPI document.
# =============================================================================

# -----------------------------------------------------------------------------
# Common Models
# -----------------------------------------------------------------------------
from .common import (
    ConflictErrorResponseDto,
    ErrorResponseDto,
    PaginationDto,
    PaginationMetaDto,
    TimestampDto,
    ValidationErrorResponseDto,
)

# -----------------------------------------------------------------------------
# User Models
# -----------------------------------------------------------------------------
from .user import (
    CreateUserDto,
    UpdateUserDto,
    UserListResponseDto,
    UserResponseDto,
)

__all__ = [
    # Common
    "ConflictErrorResponseDto",
    "ErrorResponseDto",
    "PaginationDto",
    "PaginationMetaDto",
    "TimestampDto",
    "ValidationErrorResponseDto",
    # User
    "CreateUserDto",
    "UpdateUserDto",
    "UserListResponseDto",
    "UserResponseDto",
]
