# =============================================================================
# lib/repository.py - Data Access Objects
# =============================================================================
# A Repository is the per-table data-access object the services talk to.
# It exposes find/create/update/delete/count plus connect/disconnect and a
# health check.
#
# Filters (`where`) are equality matches on column names. Ordering
# (`order_by`) maps a column to "asc" or "desc". `select` restricts the
# returned columns.
#
# Implementations:
# - SupabaseRepository (lib/supabase_client.py): production, PostgREST
# - InMemoryRepository (below): tests and local runs without a database
# =============================================================================

from __future__ import annotations

import copy
import logging
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Any, Literal

from lib.utils import ApplicationError

logger = logging.getLogger(__name__)

Record = dict[str, Any]
OrderBy = dict[str, Literal["asc", "desc"]]


class RepositoryError(ApplicationError):
    """Error raised by a repository implementation."""

    def __init__(self, message: str, code: str = "REPOSITORY_ERROR", **kwargs: Any):
        super().__init__(message, code=code, **kwargs)


# =============================================================================
# Interface
# =============================================================================

class Repository(ABC):
    """Async data-access object for one table."""

    table: str

    @abstractmethod
    async def find_many(
        self,
        where: Record | None = None,
        order_by: OrderBy | None = None,
        skip: int = 0,
        take: int | None = None,
        select: list[str] | None = None,
    ) -> list[Record]:
        ...

    @abstractmethod
    async def find_unique(self, where: Record, select: list[str] | None = None) -> Record | None:
        ...

    @abstractmethod
    async def create(self, data: Record, select: list[str] | None = None) -> Record:
        ...

    @abstractmethod
    async def update(
        self,
        where: Record,
        data: Record,
        select: list[str] | None = None,
    ) -> Record | None:
        """Update the matching record; None when nothing matched."""

    @abstractmethod
    async def delete(self, where: Record) -> Record | None:
        """Delete the matching record and return it; None when nothing matched."""

    @abstractmethod
    async def count(self, where: Record | None = None) -> int:
        ...

    async def connect(self) -> None:
        """Open connections; the default implementation does nothing."""

    async def disconnect(self) -> None:
        """Release connections; the default implementation does nothing."""

    @abstractmethod
    async def health_check(self) -> tuple[bool, str]:
        """Return (ok, message) describing the backing store."""


def project(record: Record, select: list[str] | None) -> Record:
    """Restrict a record to the selected columns."""
    if not select:
        return dict(record)
    return {column: record.get(column) for column in select}


# =============================================================================
# In-Memory Implementation
# =============================================================================

class InMemoryRepository(Repository):
    """
    Dict-backed repository.

    Assigns a UUID `id` when none is given and maintains `created_at` /
    `updated_at`. Timestamps strictly increase, so ordering by created_at
    always reflects insertion order.
    """

    def __init__(self, table: str = "users"):
        self.table = table
        self._records: dict[str, Record] = {}
        self._last_timestamp: datetime | None = None
        self.connected = False

    def _now(self) -> datetime:
        now = datetime.now(timezone.utc)
        if self._last_timestamp is not None and now <= self._last_timestamp:
            now = self._last_timestamp + timedelta(microseconds=1)
        self._last_timestamp = now
        return now

    def _matching(self, where: Record | None) -> list[Record]:
        where = where or {}
        return [
            record for record in self._records.values()
            if all(record.get(column) == value for column, value in where.items())
        ]

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
        records = self._matching(where)
        # Apply the least significant key first; sorts are stable
        for column, direction in reversed(list((order_by or {}).items())):
            records.sort(key=lambda record: record.get(column), reverse=direction == "desc")

        end = None if take is None else skip + take
        return [copy.deepcopy(project(record, select)) for record in records[skip:end]]

    async def find_unique(self, where: Record, select: list[str] | None = None) -> Record | None:
        records = self._matching(where)
        return copy.deepcopy(project(records[0], select)) if records else None

    async def count(self, where: Record | None = None) -> int:
        return len(self._matching(where))

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    async def create(self, data: Record, select: list[str] | None = None) -> Record:
        now = self._now()
        record = {
            "id": str(uuid.uuid4()),
            "created_at": now,
            "updated_at": now,
            **copy.deepcopy(data),
        }
        if record["id"] in self._records:
            raise RepositoryError(
                f"Record with id {record['id']} already exists in {self.table}",
                code="DUPLICATE_ID",
            )
        self._records[record["id"]] = record
        return copy.deepcopy(project(record, select))

    async def update(
        self,
        where: Record,
        data: Record,
        select: list[str] | None = None,
    ) -> Record | None:
        records = self._matching(where)
        if not records:
            return None
        record = records[0]
        record.update(copy.deepcopy(data))
        record["updated_at"] = self._now()
        return copy.deepcopy(project(record, select))

    async def delete(self, where: Record) -> Record | None:
        records = self._matching(where)
        if not records:
            return None
        return self._records.pop(records[0]["id"])

    def clean(self) -> None:
        """Remove every record."""
        self._records.clear()

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def connect(self) -> None:
        self.connected = True
        logger.debug(f"In-memory repository for {self.table} ready")

    async def disconnect(self) -> None:
        self.connected = False

    async def health_check(self) -> tuple[bool, str]:
        return True, "connected"
