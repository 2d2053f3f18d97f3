# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application:
# - ApplicationError: base class for errors that carry a code and a hint
# - normalize_uuid: consistent string ids
# - mask_database_url / banner: startup diagnostics
# =============================================================================

from typing import Any
from urllib.parse import urlsplit
from uuid import UUID


# =============================================================================
# UUID Utilities
# =============================================================================

def normalize_uuid(value: str | UUID) -> str:
    """
    Normalize a UUID to string format.

    Args:
        value: UUID as string or UUID object

    Returns:
        String representation of the UUID

    Example:
        user_id = normalize_uuid(uuid_obj)  # "550e8400-..."
        user_id = normalize_uuid("550e8400-...")  # "550e8400-..."
    """
    return str(value) if isinstance(value, UUID) else value


# =============================================================================
# Startup Diagnostics
# =============================================================================

def mask_database_url(url: str | None) -> str:
    """
    Hide the password in a database URL before it is logged.

    Args:
        url: Connection URL, may be None

    Returns:
        The URL with the password replaced by "***", "N/A" when no URL is
        configured, or the input unchanged if it cannot be parsed

    Example:
        mask_database_url("postgresql://app:secret@db:5432/users")
        # "postgresql://app:***@db:5432/users"
    """
    if not url:
        return "N/A"
    if url.startswith("file:"):
        return url

    try:
        parts = urlsplit(url)
        host = parts.hostname or ""
        if parts.port:
            host = f"{host}:{parts.port}"
    except ValueError:
        return url

    if not parts.scheme or not host:
        return url

    user = f"{parts.username}:***@" if parts.username else ""
    query = f"?{parts.query}" if parts.query else ""
    return f"{parts.scheme}://{user}{host}{parts.path}{query}"


def banner(
    port: int,
    env: str,
    db_url_masked: str,
    python_version: str,
    api_prefix: str = "/api",
    host: str = "localhost",
) -> str:
    """Build the multi-line message logged once the server is up."""
    base = f"http://{host}:{port}{api_prefix}"
    rule = "-" * 40
    lines = [
        " ",
        "API server is up",
        rule,
        f"Env         : {env}",
        f"Python      : {python_version}",
        f"Port        : {port}",
        f"Health      : {base}/health",
        f"Swagger UI  : {base}/docs",
        f"Database    : {db_url_masked}",
        rule,
    ]
    return "\n".join(lines)


# =============================================================================
# Base Error Class
# =============================================================================

class ApplicationError(Exception):
    """
    Base error class for application-specific errors.

    Errors should tell HOW to fix, not just WHAT failed.

    Attributes:
        code: Error code for categorization
        message: Human-readable error message
        suggestion: Actionable suggestion for fixing the error
        details: Additional context for debugging

    Example:
        class RepositoryError(ApplicationError):
            def __init__(self, message: str, **kwargs):
                super().__init__(message, code="REPOSITORY_ERROR", **kwargs)
    """

    def __init__(
        self,
        message: str,
        code: str = "APPLICATION_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f"\n  Suggestion: {self.suggestion}"
        return result

    def to_dict(self) -> dict[str, Any]:
        """Convert error to a dictionary for logs and diagnostics."""
        return {
            "code": self.code,
            "message": self.message,
            "suggestion": self.suggestion,
            "details": self.details,
        }
