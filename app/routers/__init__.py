# =============================================================================
# app/routers/ - API Controllers
# =============================================================================
# This package contains the decorator-routed controllers:
# - health.py: Health check endpoint
# - users.py: User CRUD endpoints
#
# Each controller is instantiated in main.py and its router mounted under
# API_PREFIX + the controller's base_path.
# =============================================================================

from .health import HealthController
from .users import UserController

__all__ = [
    "HealthController",
    "UserController",
]
