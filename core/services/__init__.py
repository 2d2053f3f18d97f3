# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .pagination import PaginatedResult, PaginationMeta, create_paginator, paginate
from .user_service import USER_COLUMNS, UserService

__all__ = [
    "PaginatedResult",
    "PaginationMeta",
    "create_paginator",
    "paginate",
    "USER_COLUMNS",
    "UserService",
]
