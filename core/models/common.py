# =============================================================================
# core/models/common.py - Shared DTOs
# =============================================================================
# DTOs reused across resources: timestamps, pagination query and meta, and
# the error envelopes documented on every endpoint.
# =============================================================================

from datetime import datetime
from typing import Any

from swagger_docs import ApiModel, api_property, api_property_optional


# =============================================================================
# Timestamps
# =============================================================================

class TimestampDto(ApiModel):
    """Creation and last-update times, inherited by resource DTOs."""

    created_at: datetime = api_property(
        description="Created time",
        example="2023-01-01T00:00:00.000Z",
        format="date-time",
    )
    updated_at: datetime = api_property(
        description="Updated time",
        example="2023-01-01T00:00:00.000Z",
        format="date-time",
    )


# =============================================================================
# Pagination
# =============================================================================

class PaginationDto(ApiModel):
    """Page-number pagination query."""

    page: int = api_property_optional(
        1,
        description="Page number",
        example=1,
        minimum=1,
    )
    limit: int = api_property_optional(
        10,
        description="Items per page",
        example=10,
        minimum=1,
        maximum=100,
    )


class PaginationMetaDto(ApiModel):
    """Meta block returned next to every paginated list."""

    total: int = api_property(description="Total number of records", example=100)
    last_page: int = api_property(description="Last page number", example=10)
    current_page: int = api_property(description="Current page number", example=1)
    per_page: int = api_property(description="Items per page", example=10)
    prev: int | None = api_property_optional(description="Previous page number", example=None)
    next: int | None = api_property_optional(description="Next page number", example=2)


# =============================================================================
# Error Envelopes
# =============================================================================

class ErrorResponseDto(ApiModel):
    error: str = api_property(description="Error code", example="NOT_FOUND")
    message: str = api_property(description="Error message", example="Resource not found")
    details: list[Any] | None = api_property_optional(
        description="Error details (optional)",
        example=[],
    )


class ValidationErrorResponseDto(ErrorResponseDto):
    error: str = api_property(description="Error code", example="VALIDATION_ERROR")
    details: list[Any] = api_property(
        description="Validation error details",
        example=[
            {
                "property": "email",
                "constraints": {"missing": "Field required"},
                "value": None,
            }
        ],
        required=True,
    )


class ConflictErrorResponseDto(ErrorResponseDto):
    error: str = api_property(description="Conflict error code", example="CONFLICT")
