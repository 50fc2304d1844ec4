"""Pure reducers behind the dashboard and the monthly growth chart.

Nothing here touches the database; callers fetch rows and pass them in.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from typing import Any, Dict, Iterable, List, Mapping


def _amount(row: Mapping[str, Any]) -> float:
    try:
        return float(row.get("amount") or 0)
    except (TypeError, ValueError):
        return 0.0


def _percent(part: float, whole: float) -> float:
    if not whole:
        return 0.0
    return part / whole * 100


@dataclass
class FinancialSummary:
    total_revenue: float = 0.0
    total_expenses: float = 0.0
    net_profit: float = 0.0
    profit_margin: float = 0.0

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass
class ActivitySummary:
    total_approaches: int = 0
    total_jobs: int = 0
    conversion_rate: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class MonthBucket:
    key: str
    month: str
    revenue: float = 0.0
    expenses: float = 0.0

    @property
    def profit(self) -> float:
        return self.revenue - self.expenses

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "month": self.month,
            "revenue": self.revenue,
            "expenses": self.expenses,
            "profit": self.profit,
        }


def summarize_financials(entries: Iterable[Mapping[str, Any]]) -> FinancialSummary:
    """Sum revenue and expense entries. Margin is 0 when there is no revenue."""

    revenue = 0.0
    expenses = 0.0
    for entry in entries:
        if entry.get("type") == "revenue":
            revenue += _amount(entry)
        elif entry.get("type") == "expense":
            expenses += _amount(entry)

    profit = revenue - expenses
    return FinancialSummary(
        total_revenue=revenue,
        total_expenses=expenses,
        net_profit=profit,
        profit_margin=_percent(profit, revenue),
    )


def summarize_activity(
    logs: Iterable[Mapping[str, Any]],
    outreach: Iterable[Mapping[str, Any]],
    jobs: Iterable[Mapping[str, Any]],
) -> ActivitySummary:
    """Count approaches and jobs attached to ``logs``.

    Children whose ``daily_log_id`` is not one of the given logs are ignored,
    so the caller may pass over-fetched rows.
    """

    log_ids = {log.get("id") for log in logs}
    approaches = sum(1 for row in outreach if row.get("daily_log_id") in log_ids)
    job_count = sum(1 for row in jobs if row.get("daily_log_id") in log_ids)
    return ActivitySummary(
        total_approaches=approaches,
        total_jobs=job_count,
        conversion_rate=_percent(job_count, approaches),
    )


def _month_key(raw: Any) -> str:
    return str(raw or "")[:7]


def _month_label(key: str) -> str:
    year, month = key.split("-")
    return date(int(year), int(month), 1).strftime("%b %Y")


def monthly_growth(entries: Iterable[Mapping[str, Any]]) -> List[MonthBucket]:
    """Bucket entries by the month of their date, oldest month first."""

    buckets: Dict[str, MonthBucket] = {}
    for entry in entries:
        key = _month_key(entry.get("date"))
        if len(key) != 7:
            continue
        bucket = buckets.get(key)
        if bucket is None:
            bucket = buckets[key] = MonthBucket(key=key, month=_month_label(key))
        if entry.get("type") == "revenue":
            bucket.revenue += _amount(entry)
        elif entry.get("type") == "expense":
            bucket.expenses += _amount(entry)

    return [buckets[key] for key in sorted(buckets)]
