"""
Shared fixtures: an in-memory stand-in for the Supabase table API and a
FastAPI test client whose caller identity is chosen per client.

Pattern:
    1. Override get_service_supabase / get_supabase -> FakeSupabase
    2. Override get_optional_user -> user named by the X-Test-User header
    3. Test hits the endpoint, asserts on HTTP response + fake table state
"""

from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional
from uuid import uuid4

import pytest
from fastapi import Request
from fastapi.testclient import TestClient

from app.core.dependencies import get_optional_user
from app.database.supabase_client import get_service_supabase, get_supabase
from app.main import app
from app.modules.auth.schemas import CurrentUser


# ---------------------------------------------------------------------------
# Fake Supabase client
# ---------------------------------------------------------------------------


class FakeResult:
    def __init__(self, data: List[Dict[str, Any]]):
        self.data = data


class FakeQuery:
    """Supports the subset of the postgrest builder the services use."""

    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table = table
        self.op = "select"
        self.payload: Optional[Dict[str, Any]] = None
        self.filters: List[Callable[[Dict[str, Any]], bool]] = []
        self._order = None
        self._limit = None
        self._offset = 0

    def select(self, columns: str = "*"):
        self.op = "select"
        return self

    def insert(self, payload: Dict[str, Any]):
        self.op = "insert"
        self.payload = payload
        return self

    def update(self, payload: Dict[str, Any]):
        self.op = "update"
        self.payload = payload
        return self

    def delete(self):
        self.op = "delete"
        return self

    def eq(self, column: str, value: Any):
        self.filters.append(lambda row: row.get(column) == value)
        return self

    def in_(self, column: str, values):
        values = list(values)
        self.filters.append(lambda row: row.get(column) in values)
        return self

    def order(self, column: str, desc: bool = False):
        self._order = (column, desc)
        return self

    def limit(self, count: int):
        self._limit = count
        return self

    def offset(self, count: int):
        self._offset = count
        return self

    def execute(self) -> FakeResult:
        if self.table in self.db.fail_tables:
            raise RuntimeError(f"connection reset while querying {self.table}")
        self.db.calls.append((self.table, self.op))
        rows = self.db.tables.setdefault(self.table, [])

        if self.op == "insert":
            row = self.db.make_row(self.payload)
            rows.append(row)
            return FakeResult([dict(row)])

        matched = [row for row in rows if all(f(row) for f in self.filters)]

        if self.op == "update":
            for row in matched:
                row.update(self.payload)
            return FakeResult([dict(row) for row in matched])

        if self.op == "delete":
            self.db.tables[self.table] = [row for row in rows if not any(row is m for m in matched)]
            return FakeResult([dict(row) for row in matched])

        if self._order:
            column, desc = self._order
            matched = sorted(matched, key=lambda row: str(row.get(column) or ""), reverse=desc)
        matched = matched[self._offset:]
        if self._limit is not None:
            matched = matched[:self._limit]
        return FakeResult([dict(row) for row in matched])


class FakeSupabase:
    def __init__(self):
        self.tables: Dict[str, List[Dict[str, Any]]] = {}
        self.fail_tables = set()
        self.calls = []

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    @staticmethod
    def make_row(payload: Dict[str, Any]) -> Dict[str, Any]:
        now = datetime.now(timezone.utc).isoformat()
        row = {"id": str(uuid4()), "created_at": now, "updated_at": now}
        row.update(payload)
        return row

    def seed(self, table: str, **fields) -> Dict[str, Any]:
        row = self.make_row(fields)
        self.tables.setdefault(table, []).append(row)
        return row

    def rows(self, table: str, **filters) -> List[Dict[str, Any]]:
        return [
            row for row in self.tables.get(table, [])
            if all(row.get(k) == v for k, v in filters.items())
        ]


# ---------------------------------------------------------------------------
# Scenario: project proj-1 created by A; B editor; C viewer; D not a member;
# E superuser without membership. D owns proj-2.
# ---------------------------------------------------------------------------

USERS = {
    "user-a": CurrentUser(id="user-a", email="a@example.com"),
    "user-b": CurrentUser(id="user-b", email="b@example.com"),
    "user-c": CurrentUser(id="user-c", email="c@example.com"),
    "user-d": CurrentUser(id="user-d", email="d@example.com"),
    "user-e": CurrentUser(id="user-e", email="e@example.com", is_superuser=True),
}


@pytest.fixture
def users() -> Dict[str, CurrentUser]:
    return USERS


@pytest.fixture
def db() -> FakeSupabase:
    fake = FakeSupabase()
    fake.seed("projects", id="proj-1", name="Commerce", description="Orders and customers",
              created_by="user-a", updated_at="2025-05-02T10:00:00+00:00")
    fake.seed("projects", id="proj-2", name="Side project", created_by="user-d",
              updated_at="2025-05-01T10:00:00+00:00")
    fake.seed("project_members", project_id="proj-1", user_id="user-b", role="editor", email="b@example.com")
    fake.seed("project_members", project_id="proj-1", user_id="user-c", role="viewer", email="c@example.com")
    fake.seed("data_models", id="model-1", project_id="proj-1", name="Sales", version="1.0", created_by="user-a")
    fake.seed("entities", id="entity-1", data_model_id="model-1", name="Customer", position_x=0, position_y=0)
    fake.seed("referentials", id="ref-1", data_model_id="model-1", name="Sales core", color="#6366F1",
              created_by="user-a")
    fake.seed("entities", id="entity-2", data_model_id="model-1", name="Order", position_x=200, position_y=0,
              referential_id="ref-1")
    fake.seed("attributes", id="attr-1", entity_id="entity-1", name="customer_id", data_type="uuid",
              is_primary_key=True, is_mandatory=True)
    fake.seed("attributes", id="attr-2", entity_id="entity-2", name="order_id", data_type="uuid",
              is_primary_key=True)
    fake.seed("relationships", id="rel-1", data_model_id="model-1", source_entity_id="entity-1",
              target_entity_id="entity-2", relationship_type="one-to-many", name="places")
    fake.calls.clear()
    return fake


@pytest.fixture
def client_as(db):
    """Build a TestClient that authenticates as the given user id (None for anonymous)."""

    def _current_user(request: Request) -> Optional[CurrentUser]:
        return USERS.get(request.headers.get("x-test-user", ""))

    app.dependency_overrides[get_optional_user] = _current_user
    app.dependency_overrides[get_service_supabase] = lambda: db
    app.dependency_overrides[get_supabase] = lambda: db

    def _make(user_id: Optional[str]) -> TestClient:
        headers = {"X-Test-User": user_id} if user_id else {}
        return TestClient(app, headers=headers)

    yield _make
    app.dependency_overrides.clear()
