# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides:
# - SupabaseClient: the singleton supabase-py client
# - SupabaseRepository: a Repository backed by one PostgREST table
#
# supabase-py is synchronous, so every query runs in a worker thread to keep
# the event loop free.
#
# Usage:
#   from lib.supabase_client import SupabaseRepository
#   users = SupabaseRepository("users")
#   page = await users.find_many(order_by={"created_at": "desc"}, take=10)
# =============================================================================

from __future__ import annotations

import asyncio
import logging
import time
from datetime import datetime, timezone
from typing import Any, Callable

from supabase import Client, create_client

from app.config import settings
from lib.repository import OrderBy, Record, Repository, RepositoryError, project

# Set up logging for this module
logger = logging.getLogger(__name__)


class SupabaseClientError(RepositoryError):
    """
    Error during Supabase operations.

    Errors should tell HOW to fix, not just WHAT failed.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code=code, suggestion=suggestion, details=details)


class SupabaseClient:
    """
    Singleton holder for the Supabase client.

    Uses the service_role key, which bypasses Row Level Security; this is
    appropriate for server-side operations.
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Returns:
            Client: Supabase client instance

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                ) from e
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the cached client (the next call creates a new one)."""
        cls._instance = None


class SupabaseRepository(Repository):
    """
    Repository over one Supabase table.

    Args:
        table: Table name
        client_factory: Returns the supabase client (defaults to the singleton)
    """

    def __init__(self, table: str, client_factory: Callable[[], Client] | None = None):
        self.table = table
        self._client_factory = client_factory or SupabaseClient.get_client

    async def _run(self, operation: str, build: Callable[[Client], Any], **details: Any) -> Any:
        """Execute a query built by `build` in a worker thread."""
        started = time.perf_counter()

        def execute() -> Any:
            return build(self._client_factory()).execute()

        try:
            response = await asyncio.to_thread(execute)
        except SupabaseClientError:
            raise
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to {operation} on {self.table}: {e}",
                code=f"{operation.upper().replace(' ', '_')}_FAILED",
                suggestion=f"Check that the {self.table} table exists and is accessible",
                details={"table": self.table, **details},
            ) from e

        duration_ms = (time.perf_counter() - started) * 1000
        logger.debug(f"Database operation: {operation} on {self.table} ({duration_ms:.1f}ms)")
        return response

    @staticmethod
    def _columns(select: list[str] | None) -> str:
        return ", ".join(select) if select else "*"

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    async def find_many(
        self,
        where: Record | None = None,
        order_by: OrderBy | None = None,
        skip: int = 0,
        take: int | None = None,
        select: list[str] | None = None,
    ) -> list[Record]:
        def build(client: Client) -> Any:
            query = client.table(self.table).select(self._columns(select))
            if where:
                query = query.match(where)
            for column, direction in (order_by or {}).items():
                query = query.order(column, desc=(direction == "desc"))
            if take is not None:
                query = query.range(skip, skip + take - 1)
            elif skip:
                query = query.offset(skip)
            return query

        response = await self._run("find many", build, where=where, skip=skip, take=take)
        return response.data or []

    async def find_unique(self, where: Record, select: list[str] | None = None) -> Record | None:
        def build(client: Client) -> Any:
            return client.table(self.table).select(self._columns(select)).match(where).limit(1)

        response = await self._run("find unique", build, where=where)
        rows = response.data or []
        return rows[0] if rows else None

    async def count(self, where: Record | None = None) -> int:
        def build(client: Client) -> Any:
            query = client.table(self.table).select("id", count="exact")
            if where:
                query = query.match(where)
            return query.limit(1)

        response = await self._run("count", build, where=where)
        return response.count or 0

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    async def create(self, data: Record, select: list[str] | None = None) -> Record:
        response = await self._run(
            "create",
            lambda client: client.table(self.table).insert(data),
        )
        rows = response.data or []
        if not rows:
            raise SupabaseClientError(
                message=f"Insert into {self.table} returned no rows",
                code="CREATE_FAILED",
                suggestion="Check that the service key can read back inserted rows",
            )
        return project(rows[0], select)

    async def update(
        self,
        where: Record,
        data: Record,
        select: list[str] | None = None,
    ) -> Record | None:
        changes = {**data, "updated_at": datetime.now(timezone.utc).isoformat()}
        response = await self._run(
            "update",
            lambda client: client.table(self.table).update(changes).match(where),
            where=where,
        )
        rows = response.data or []
        return project(rows[0], select) if rows else None

    async def delete(self, where: Record) -> Record | None:
        response = await self._run(
            "delete",
            lambda client: client.table(self.table).delete().match(where),
            where=where,
        )
        rows = response.data or []
        return rows[0] if rows else None

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def connect(self) -> None:
        self._client_factory()

    async def health_check(self) -> tuple[bool, str]:
        try:
            await self.count()
        except SupabaseClientError as e:
            logger.warning(f"Database health check failed: {e.message}")
            return False, e.message
        return True, "connected"
