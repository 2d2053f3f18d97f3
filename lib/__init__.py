# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable infrastructure:
# - logger.py: Structured logging on top of the logging module
# - repository.py: Repository interface and the in-memory implementation
# - supabase_client.py: Supabase client singleton and SupabaseRepository
# - utils.py: Shared utilities (error base class, UUIDs, startup banner)
#
# These modules are self-contained and can be tested in isolation.
# supabase_client.py reads app.config, so it is imported explicitly rather
# than re-exported here.
# =============================================================================

from lib.logger import LoggerService, configure_logging
from lib.repository import InMemoryRepository, Repository, RepositoryError
from lib.utils import ApplicationError, banner, mask_database_url, normalize_uuid

__all__ = [
    # Logging
    "LoggerService",
    "configure_logging",
    # Persistence
    "Repository",
    "RepositoryError",
    "InMemoryRepository",
    # Utils
    "ApplicationError",
    "banner",
    "mask_database_url",
    "normalize_uuid",
]
