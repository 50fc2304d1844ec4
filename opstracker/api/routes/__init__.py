from . import billing, business, daily_logs, dashboard, financials, pipeline, scripts, webhooks

__all__ = [
    "billing",
    "business",
    "daily_logs",
    "dashboard",
    "financials",
    "pipeline",
    "scripts",
    "webhooks",
]
