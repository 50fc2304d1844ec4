"""Domain services. Every function takes a database client first."""

from . import (
    aggregation,
    business,
    dashboard,
    daily_logs,
    financials,
    ownership,
    pipeline,
    scripts,
    users,
    validation,
)

__all__ = [
    "aggregation",
    "business",
    "dashboard",
    "daily_logs",
    "financials",
    "ownership",
    "pipeline",
    "scripts",
    "users",
    "validation",
]
