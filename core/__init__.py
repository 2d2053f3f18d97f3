# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the business logic:
# - models/: Documented pydantic DTOs
# - services/: User service and pagination
#
# Code in this package should NOT import from FastAPI routing; controllers
# in app/routers/ call into it.
# =============================================================================
