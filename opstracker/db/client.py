"""
Database client for the operations tracker.
Wraps the Supabase table API with the handful of row-level operations the
services need: insert, fetch by id, patch, delete, filtered selects, counts
and bulk deletes by owner.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from supabase import Client, create_client

from ..config import CONFIG
from ..errors import StoreError


logger = logging.getLogger(__name__)

Filters = Mapping[str, Any]


class SupabaseDatabaseClient:
    """Database client for Supabase operations."""

    def __init__(self, client: Optional[Client] = None):
        if client is not None:
            self.client = client
            self.using_service_role = True
            return

        self.supabase_url = CONFIG.supabase_url or os.getenv("SUPABASE_URL")

        # Prefer the service role key; ownership is enforced in the services,
        # not through row level security.
        service_key = CONFIG.supabase_service_role_key
        anon_key = CONFIG.supabase_anon_key

        if service_key:
            self.supabase_key = service_key
            self.using_service_role = True
        else:
            self.supabase_key = anon_key
            self.using_service_role = False
            logger.warning("SUPABASE_SERVICE_ROLE_KEY not set; falling back to anon key")

        if not self.supabase_url or not self.supabase_key:
            raise ValueError(
                "SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY (or SUPABASE_ANON_KEY) environment variables are required"
            )

        self.client = create_client(self.supabase_url, self.supabase_key)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _execute(query: Any, action: str, table: str) -> Any:
        try:
            return query.execute()
        except Exception as exc:
            logger.warning("Supabase %s on %s failed: %s", action, table, exc)
            raise StoreError(f"Database request failed ({action} {table})") from exc

    @staticmethod
    def _apply_filters(query: Any, filters: Optional[Filters]) -> Any:
        for column, value in (filters or {}).items():
            if value is None:
                query = query.is_(column, "null")
            else:
                query = query.eq(column, value)
        return query

    @staticmethod
    def _rows(result: Any) -> List[Dict[str, Any]]:
        data = getattr(result, "data", None)
        if not data:
            return []
        if isinstance(data, dict):
            return [data]
        return [row for row in data if isinstance(row, dict)]

    # ------------------------------------------------------------------
    # Single-row operations
    # ------------------------------------------------------------------
    def insert_row(self, table: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Insert one row and return it as stored (including its ``id``)."""
        result = self._execute(self.client.table(table).insert(payload), "insert", table)
        rows = self._rows(result)
        if not rows:
            raise StoreError(f"Database request failed (insert {table} returned no row)")
        return rows[0]

    def get_row(self, table: str, row_id: str) -> Optional[Dict[str, Any]]:
        query = self.client.table(table).select("*").eq("id", row_id).limit(1)
        rows = self._rows(self._execute(query, "get", table))
        return rows[0] if rows else None

    def update_row(self, table: str, row_id: str, updates: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        query = self.client.table(table).update(updates).eq("id", row_id)
        rows = self._rows(self._execute(query, "update", table))
        return rows[0] if rows else None

    def delete_row(self, table: str, row_id: str) -> bool:
        query = self.client.table(table).delete().eq("id", row_id)
        return bool(self._rows(self._execute(query, "delete", table)))

    # ------------------------------------------------------------------
    # Multi-row operations
    # ------------------------------------------------------------------
    def select_rows(
        self,
        table: str,
        filters: Optional[Filters] = None,
        *,
        gte: Optional[Filters] = None,
        lte: Optional[Filters] = None,
        lt: Optional[Filters] = None,
        in_: Optional[Tuple[str, Sequence[Any]]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> List[Dict[str, Any]]:
        """Return every row matching equality filters and optional range bounds."""
        if in_ is not None and not in_[1]:
            return []

        query = self._apply_filters(self.client.table(table).select("*"), filters)
        for column, value in (gte or {}).items():
            query = query.gte(column, value)
        for column, value in (lte or {}).items():
            query = query.lte(column, value)
        for column, value in (lt or {}).items():
            query = query.lt(column, value)
        if in_ is not None:
            column, values = in_
            query = query.in_(column, list(values))
        if order_by:
            query = query.order(order_by, desc=descending)
        return self._rows(self._execute(query, "select", table))

    def find_one(self, table: str, filters: Filters) -> Optional[Dict[str, Any]]:
        query = self._apply_filters(self.client.table(table).select("*"), filters).limit(1)
        rows = self._rows(self._execute(query, "find", table))
        return rows[0] if rows else None

    def count_rows(self, table: str, filters: Filters) -> int:
        query = self._apply_filters(self.client.table(table).select("id", count="exact"), filters)
        result = self._execute(query, "count", table)
        count = getattr(result, "count", None)
        if count is None:
            return len(self._rows(result))
        return int(count)

    def delete_rows(self, table: str, filters: Filters) -> int:
        """Delete every row matching ``filters`` and return how many went away."""
        if not filters:
            raise ValueError("delete_rows requires at least one filter")
        query = self._apply_filters(self.client.table(table).delete(), filters)
        return len(self._rows(self._execute(query, "delete_many", table)))

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------
    def get_user_by_clerk_id(self, clerk_id: str) -> Optional[Dict[str, Any]]:
        return self.find_one("users", {"clerk_id": clerk_id})

    def get_user_by_subscription_id(self, subscription_id: str) -> Optional[Dict[str, Any]]:
        return self.find_one("users", {"clerk_subscription_id": subscription_id})


DatabaseClient = SupabaseDatabaseClient


# Global database client instance
_database_client: Optional[DatabaseClient] = None


def get_database_client() -> DatabaseClient:
    """Get the global database client instance."""
    global _database_client
    if _database_client is None:
        _database_client = SupabaseDatabaseClient()
    return _database_client


def set_database_client(client: Optional[DatabaseClient]) -> None:
    """Replace the global client (used by the worker bootstrap and tests)."""
    global _database_client
    _database_client = client
