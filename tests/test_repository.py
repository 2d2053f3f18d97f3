# =============================================================================
# tests/test_repository.py - Tests for the Repository Implementations
# =============================================================================
# InMemoryRepository is tested directly. SupabaseRepository is tested with a
# fake client that records the PostgREST query chain instead of sending it.
# =============================================================================

import asyncio
from types import SimpleNamespace

import pytest

from lib.repository import InMemoryRepository, RepositoryError, project
from lib.supabase_client import SupabaseClientError, SupabaseRepository


def run(coro):
    return asyncio.run(coro)


# =============================================================================
# InMemoryRepository
# =============================================================================

class TestInMemoryRepository:
    """Tests for the dict-backed repository."""

    def test_create_assigns_id_and_timestamps(self, repository):
        """New records get an id and equal created/updated times."""
        record = run(repository.create({"email": "a@example.com"}))

        assert record["id"]
        assert record["created_at"] == record["updated_at"]
        assert record["email"] == "a@example.com"

    def test_create_keeps_given_id(self, repository):
        """An explicit id is used as-is and cannot be reused."""
        run(repository.create({"id": "fixed", "email": "a@example.com"}))

        with pytest.raises(RepositoryError) as exc_info:
            run(repository.create({"id": "fixed", "email": "b@example.com"}))

        assert exc_info.value.code == "DUPLICATE_ID"

    def test_find_many_filter_order_slice(self, repository):
        """where, order_by, skip and take combine."""
        for index, team in enumerate(["red", "blue", "red", "red"]):
            run(repository.create({"n": index, "team": team}))

        records = run(repository.find_many(
            where={"team": "red"},
            order_by={"n": "desc"},
            skip=1,
            take=1,
        ))

        assert [r["n"] for r in records] == [2]

    def test_select_projects_columns(self, repository):
        """select limits the returned columns."""
        run(repository.create({"email": "a@example.com", "password": "x"}))

        record = run(repository.find_unique({"email": "a@example.com"}, select=["email"]))

        assert record == {"email": "a@example.com"}

    def test_returned_records_are_copies(self, repository):
        """Mutating a result does not change the stored record."""
        created = run(repository.create({"email": "a@example.com"}))
        created["email"] = "changed@example.com"

        assert run(repository.find_unique({"id": created["id"]}))["email"] == "a@example.com"

    def test_update_and_delete(self, repository):
        """update() refreshes updated_at; delete() returns the record."""
        created = run(repository.create({"email": "a@example.com"}))

        updated = run(repository.update({"id": created["id"]}, {"name": "Ann"}))
        assert updated["name"] == "Ann"
        assert updated["updated_at"] > created["updated_at"]

        deleted = run(repository.delete({"id": created["id"]}))
        assert deleted["id"] == created["id"]
        assert run(repository.count()) == 0

    def test_missing_records(self, repository):
        """Operations on missing records return None."""
        assert run(repository.find_unique({"id": "x"})) is None
        assert run(repository.update({"id": "x"}, {"name": "y"})) is None
        assert run(repository.delete({"id": "x"})) is None

    def test_project_without_select(self):
        """project() with no columns returns a shallow copy."""
        record = {"a": 1}

        assert project(record, None) == record
        assert project(record, None) is not record


# =============================================================================
# SupabaseRepository
# =============================================================================

class FakeQuery:
    """Records builder calls and returns a canned response on execute()."""

    def __init__(self, calls, response):
        self.calls = calls
        self.response = response

    def __getattr__(self, name):
        def method(*args, **kwargs):
            self.calls.append((name, args, kwargs))
            return self
        return method

    def execute(self):
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


class FakeClient:
    def __init__(self, response):
        self.calls = []
        self.response = response

    def table(self, name):
        self.calls.append(("table", (name,), {}))
        return FakeQuery(self.calls, self.response)


def supabase_repo(data=None, count=None, error=None):
    client = FakeClient(error or SimpleNamespace(data=data, count=count))
    return SupabaseRepository("users", client_factory=lambda: client), client


class TestSupabaseRepository:
    """Tests for the query chains built by SupabaseRepository."""

    def test_find_many_builds_query(self):
        """Filters, ordering and range are translated to PostgREST calls."""
        repo, client = supabase_repo(data=[{"id": "1"}])

        records = run(repo.find_many(
            where={"is_active": True},
            order_by={"created_at": "desc"},
            skip=10,
            take=5,
            select=["id", "email"],
        ))

        assert records == [{"id": "1"}]
        assert client.calls == [
            ("table", ("users",), {}),
            ("select", ("id, email",), {}),
            ("match", ({"is_active": True},), {}),
            ("order", ("created_at",), {"desc": True}),
            ("range", (10, 14), {}),
        ]

    def test_find_unique_none(self):
        """An empty result means no record."""
        repo, _ = supabase_repo(data=[])

        assert run(repo.find_unique({"id": "x"})) is None

    def test_count_uses_exact_count(self):
        """count() reads the exact count header."""
        repo, client = supabase_repo(data=[], count=42)

        assert run(repo.count()) == 42
        assert ("select", ("id",), {"count": "exact"}) in client.calls

    def test_create_projects_result(self):
        """Inserted rows are returned with the selected columns."""
        repo, client = supabase_repo(data=[{"id": "1", "email": "a@example.com", "password": "x"}])

        record = run(repo.create({"email": "a@example.com"}, select=["id", "email"]))

        assert record == {"id": "1", "email": "a@example.com"}
        assert ("insert", ({"email": "a@example.com"},), {}) in client.calls

    def test_create_without_rows_fails(self):
        """An insert that returns nothing is an error."""
        repo, _ = supabase_repo(data=[])

        with pytest.raises(SupabaseClientError) as exc_info:
            run(repo.create({"email": "a@example.com"}))

        assert exc_info.value.code == "CREATE_FAILED"

    def test_update_sets_timestamp(self):
        """update() stamps updated_at."""
        repo, client = supabase_repo(data=[{"id": "1", "name": "Ann"}])

        run(repo.update({"id": "1"}, {"name": "Ann"}))

        update_call = next(call for call in client.calls if call[0] == "update")
        assert update_call[1][0]["name"] == "Ann"
        assert "updated_at" in update_call[1][0]

    def test_driver_error_wrapped(self):
        """Driver exceptions become SupabaseClientError with an operation code."""
        repo, _ = supabase_repo(error=RuntimeError("network down"))

        with pytest.raises(SupabaseClientError) as exc_info:
            run(repo.find_many())

        assert exc_info.value.code == "FIND_MANY_FAILED"
        assert exc_info.value.details["table"] == "users"

    def test_health_check(self):
        """The health check reports driver failures instead of raising."""
        healthy, _ = supabase_repo(data=[], count=0)
        broken, _ = supabase_repo(error=RuntimeError("network down"))

        assert run(healthy.health_check()) == (True, "connected")
        ok, message = run(broken.health_check())
        assert ok is False
        assert "network down" in message
