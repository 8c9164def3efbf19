from __future__ import annotations

import os

# Settings are read at import time; seed the required values first.
os.environ["GEMINI_API_KEY"] = "test-gemini-key"
os.environ["APP_PASSWORD"] = "correct-horse"
os.environ["SESSION_SECRET"] = "test-session-secret"

from typing import Any  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from src.app.deps import get_extractor, get_session_store, get_supabase  # noqa: E402
from src.app.infra.sessions.memory_store import InMemorySessionStore  # noqa: E402
from src.app.main import app  # noqa: E402

APP_PASSWORD = os.environ["APP_PASSWORD"]


class FakeResult:
    def __init__(self, data: list[dict[str, Any]]) -> None:
        self.data = data


class FakeQuery:
    """Mimics the fluent postgrest builder for a single table."""

    def __init__(self, db: "FakeSupabase", table: str) -> None:
        self._db = db
        self._table = table
        self._op = "select"
        self._payload: dict[str, Any] | None = None
        self._filters: list[tuple[str, Any]] = []
        self._order: tuple[str, bool] | None = None
        self._limit: int | None = None

    def select(self, columns: str = "*") -> "FakeQuery":
        self._op = "select"
        return self

    def insert(self, payload: dict[str, Any]) -> "FakeQuery":
        self._op, self._payload = "insert", dict(payload)
        return self

    def update(self, payload: dict[str, Any]) -> "FakeQuery":
        self._op, self._payload = "update", dict(payload)
        return self

    def delete(self) -> "FakeQuery":
        self._op = "delete"
        return self

    def eq(self, column: str, value: Any) -> "FakeQuery":
        self._filters.append((column, value))
        return self

    def order(self, column: str, desc: bool = False) -> "FakeQuery":
        self._order = (column, desc)
        return self

    def limit(self, count: int) -> "FakeQuery":
        self._limit = count
        return self

    def _matches(self, row: dict[str, Any]) -> bool:
        return all(str(row.get(column)) == str(value) for column, value in self._filters)

    def execute(self) -> FakeResult:
        self._db.executed.append((self._table, self._op, self._payload))
        if self._db.fail_with is not None:
            raise self._db.fail_with

        rows = self._db.tables.setdefault(self._table, [])
        if self._op == "insert":
            row = {"id": str(self._db.next_id()), **self._payload}
            rows.append(row)
            return FakeResult([dict(row)])

        matched = [row for row in rows if self._matches(row)]
        if self._op == "update":
            for row in matched:
                row.update(self._payload)
            return FakeResult([dict(row) for row in matched])
        if self._op == "delete":
            for row in matched:
                rows.remove(row)
            return FakeResult([dict(row) for row in matched])

        if self._order:
            column, desc = self._order
            matched = sorted(matched, key=lambda row: row.get(column) or "", reverse=desc)
        if self._limit is not None:
            matched = matched[: self._limit]
        return FakeResult([dict(row) for row in matched])


class FakeSupabase:
    def __init__(self) -> None:
        self.tables: dict[str, list[dict[str, Any]]] = {}
        self.executed: list[tuple[str, str, dict[str, Any] | None]] = []
        self.fail_with: Exception | None = None
        self._next_id = 0

    def next_id(self) -> int:
        self._next_id += 1
        return self._next_id

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    @property
    def mutations(self) -> list[tuple[str, str, dict[str, Any] | None]]:
        return [entry for entry in self.executed if entry[1] != "select"]


class StubExtractor:
    def __init__(self, reply: str = "") -> None:
        self.reply = reply
        self.error: Exception | None = None
        self.calls: list[str] = []

    async def extract(self, content: str) -> str:
        self.calls.append(content)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def fake_supabase() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture
def stub_extractor() -> StubExtractor:
    return StubExtractor()


@pytest.fixture
def session_store() -> InMemorySessionStore:
    return InMemorySessionStore()


@pytest.fixture
def client(fake_supabase, stub_extractor, session_store):
    app.dependency_overrides[get_supabase] = lambda: fake_supabase
    app.dependency_overrides[get_extractor] = lambda: stub_extractor
    app.dependency_overrides[get_session_store] = lambda: session_store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def logged_in_client(client):
    response = client.post("/login", json={"password": APP_PASSWORD})
    assert response.status_code == 200
    return client
