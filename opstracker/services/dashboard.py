"""Dashboard queries: weekly review stats and the monthly growth series."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from ..db import DatabaseClient
from ..errors import ValidationFailed
from .aggregation import monthly_growth, summarize_activity, summarize_financials
from .validation import parse_iso_date

logger = logging.getLogger(__name__)


def get_dashboard_data(
    db: DatabaseClient,
    user_id: Optional[str],
    start_date: str,
    end_date: str,
) -> Optional[Dict[str, Any]]:
    """Aggregate one inclusive date range.

    Outreach and job rows are fetched with one query per child table keyed
    by the set of log ids in range.
    """

    if not user_id:
        return None

    start = parse_iso_date(start_date, "start_date")
    end = parse_iso_date(end_date, "end_date")
    if start > end:
        raise ValidationFailed("start_date must not be after end_date")

    owner = {"user_id": user_id}
    goals = db.select_rows("user_goals", owner)
    entries = db.select_rows("financial_entries", owner, gte={"date": start}, lte={"date": end})
    logs = db.select_rows("daily_logs", owner, gte={"date": start}, lte={"date": end})

    log_ids = [log["id"] for log in logs]
    outreach = db.select_rows("outreach_entries", owner, in_=("daily_log_id", log_ids))
    jobs = db.select_rows("completed_jobs", owner, in_=("daily_log_id", log_ids))

    weekly_stats = {
        **summarize_financials(entries).to_dict(),
        **summarize_activity(logs, outreach, jobs).to_dict(),
    }
    logger.debug(
        "Dashboard for %s: %d entries, %d logs in %s..%s",
        user_id,
        len(entries),
        len(logs),
        start,
        end,
    )
    return {"weekly_stats": weekly_stats, "user_goals": goals}


def get_monthly_growth_data(db: DatabaseClient, user_id: Optional[str]) -> Optional[List[Dict[str, Any]]]:
    if not user_id:
        return None
    entries = db.select_rows("financial_entries", {"user_id": user_id}, order_by="date")
    return [bucket.to_dict() for bucket in monthly_growth(entries)]
