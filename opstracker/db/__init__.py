"""
Database module for the operations tracker.

This module provides:
- the Supabase-backed database client
- table metadata (owner columns, expected indexes, cascade order)
"""

from .client import (
    DatabaseClient,
    SupabaseDatabaseClient,
    get_database_client,
    set_database_client,
)
from .tables import OWNED_TABLES, TABLES, TableDef, get_table, index_statements

__all__ = [
    "DatabaseClient",
    "SupabaseDatabaseClient",
    "get_database_client",
    "set_database_client",
    "OWNED_TABLES",
    "TABLES",
    "TableDef",
    "get_table",
    "index_statements",
]
