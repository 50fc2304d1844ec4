"""Repository-wide pytest fixtures."""

from __future__ import annotations

import copy
import uuid
from collections.abc import Generator
from typing import Any, Dict, List, Optional

import pytest

from opstracker.config import reload_config
from opstracker.errors import StoreError

# base64 of "opstracker-test-webhook-secret"
TEST_WEBHOOK_SECRET = "whsec_b3BzdHJhY2tlci10ZXN0LXdlYmhvb2stc2VjcmV0"


class InMemoryDatabase:
    """Dict-backed stand-in for ``SupabaseDatabaseClient``.

    ``failures`` maps a table name to how many upcoming ``delete_rows`` calls
    on it should raise ``StoreError``; use ``-1`` to fail forever.
    """

    def __init__(self) -> None:
        self.tables: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self.failures: Dict[str, int] = {}
        self.calls: List[tuple] = []

    # helpers -----------------------------------------------------------
    def _table(self, table: str) -> Dict[str, Dict[str, Any]]:
        return self.tables.setdefault(table, {})

    @staticmethod
    def _matches(row: Dict[str, Any], filters: Optional[Dict[str, Any]]) -> bool:
        return all(row.get(column) == value for column, value in (filters or {}).items())

    def rows(self, table: str) -> List[Dict[str, Any]]:
        return [copy.deepcopy(row) for row in self._table(table).values()]

    # client interface ----------------------------------------------------
    def insert_row(self, table: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        self.calls.append(("insert", table))
        row = {"id": str(uuid.uuid4()), **copy.deepcopy(payload)}
        self._table(table)[row["id"]] = row
        return copy.deepcopy(row)

    def get_row(self, table: str, row_id: str) -> Optional[Dict[str, Any]]:
        row = self._table(table).get(row_id)
        return copy.deepcopy(row) if row else None

    def update_row(self, table: str, row_id: str, updates: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        self.calls.append(("update", table))
        row = self._table(table).get(row_id)
        if row is None:
            return None
        row.update(copy.deepcopy(updates))
        return copy.deepcopy(row)

    def delete_row(self, table: str, row_id: str) -> bool:
        self.calls.append(("delete", table))
        return self._table(table).pop(row_id, None) is not None

    def select_rows(
        self,
        table: str,
        filters=None,
        *,
        gte=None,
        lte=None,
        lt=None,
        in_=None,
        order_by=None,
        descending=False,
    ) -> List[Dict[str, Any]]:
        self.calls.append(("select", table))
        result = []
        for row in self._table(table).values():
            if not self._matches(row, filters):
                continue
            if any(row.get(column) is None or row.get(column) < value for column, value in (gte or {}).items()):
                continue
            if any(row.get(column) is None or row.get(column) > value for column, value in (lte or {}).items()):
                continue
            if any(row.get(column) is None or row.get(column) >= value for column, value in (lt or {}).items()):
                continue
            if in_ is not None and row.get(in_[0]) not in set(in_[1]):
                continue
            result.append(copy.deepcopy(row))
        if order_by:
            result.sort(key=lambda row: row.get(order_by), reverse=descending)
        return result

    def find_one(self, table: str, filters: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        for row in self._table(table).values():
            if self._matches(row, filters):
                return copy.deepcopy(row)
        return None

    def count_rows(self, table: str, filters: Dict[str, Any]) -> int:
        return sum(1 for row in self._table(table).values() if self._matches(row, filters))

    def delete_rows(self, table: str, filters: Dict[str, Any]) -> int:
        remaining = self.failures.get(table, 0)
        if remaining:
            self.failures[table] = remaining - 1 if remaining > 0 else remaining
            raise StoreError(f"Database request failed (delete_many {table})")
        doomed = [row_id for row_id, row in self._table(table).items() if self._matches(row, filters)]
        for row_id in doomed:
            del self._table(table)[row_id]
        return len(doomed)

    def get_user_by_clerk_id(self, clerk_id: str) -> Optional[Dict[str, Any]]:
        return self.find_one("users", {"clerk_id": clerk_id})

    def get_user_by_subscription_id(self, subscription_id: str) -> Optional[Dict[str, Any]]:
        return self.find_one("users", {"clerk_subscription_id": subscription_id})


@pytest.fixture(autouse=True)
def _set_default_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Give every test the same predictable configuration."""

    monkeypatch.setenv("ENV", "test")
    monkeypatch.setenv("SUPABASE_URL", "http://localhost:54321")
    monkeypatch.setenv("SUPABASE_SERVICE_ROLE_KEY", "service-role-test")
    monkeypatch.setenv("CLERK_JWKS_URL", "https://clerk.example.test/.well-known/jwks.json")
    monkeypatch.setenv("CLERK_WEBHOOK_SECRET", TEST_WEBHOOK_SECRET)
    monkeypatch.setenv("CLERK_BILLING_WEBHOOK_SECRET", TEST_WEBHOOK_SECRET)
    monkeypatch.setenv("CELERY_BROKER_URL", "memory://")
    monkeypatch.setenv("CELERY_RESULT_BACKEND", "cache+memory://")
    for name in (
        "FREE_PLAN_FINANCIAL_ENTRY_LIMIT",
        "FREE_PLAN_SCRIPT_LIMIT",
        "FREE_PLAN_HANDLER_LIMIT",
        "DELETION_MAX_ATTEMPTS",
        "DELETION_INITIAL_BACKOFF_MS",
        "CLERK_JWT_KEY",
        "CLERK_ISSUER",
    ):
        monkeypatch.delenv(name, raising=False)
    reload_config()
    yield
    reload_config()


@pytest.fixture
def db() -> InMemoryDatabase:
    return InMemoryDatabase()


@pytest.fixture
def webhook_secret() -> str:
    return TEST_WEBHOOK_SECRET


@pytest.fixture
def user_id(db: InMemoryDatabase) -> str:
    """A signed-up free-plan user with starter data."""

    from opstracker.services.users import create_user_with_data

    create_user_with_data(db, clerk_id="user_123", name="Test User", email="test@example.com")
    return "user_123"


@pytest.fixture
def other_user_id(db: InMemoryDatabase) -> str:
    from opstracker.services.users import create_user_with_data

    create_user_with_data(db, clerk_id="user_456", name="Other User", email="other@example.com")
    return "user_456"
