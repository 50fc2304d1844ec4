"""Tests for shared input checks."""

from __future__ import annotations

from datetime import date

import pytest

from opstracker.errors import ValidationFailed
from opstracker.services.validation import parse_iso_date, parse_month, pick_fields, require_non_negative


@pytest.mark.parametrize("value", ["2024-02-30", "2024-2-01", "", None, "yesterday"])
def test_parse_iso_date_rejects(value) -> None:
    with pytest.raises(ValidationFailed):
        parse_iso_date(value)


def test_parse_iso_date_accepts_dates() -> None:
    assert parse_iso_date("2024-02-29") == "2024-02-29"
    assert parse_iso_date(date(2024, 1, 5)) == "2024-01-05"


def test_parse_month_bounds() -> None:
    assert parse_month("2024-02") == ("2024-02-01", "2024-03-01")
    assert parse_month("2024-12") == ("2024-12-01", "2025-01-01")
    with pytest.raises(ValidationFailed):
        parse_month("2024-13")
    with pytest.raises(ValidationFailed):
        parse_month("24-1")


def test_require_non_negative() -> None:
    assert require_non_negative("12.5", "amount") == 12.5
    with pytest.raises(ValidationFailed):
        require_non_negative(-0.01, "amount")
    with pytest.raises(ValidationFailed):
        require_non_negative("abc", "amount")


def test_pick_fields_drops_unknown_and_none() -> None:
    picked = pick_fields({"title": "A", "user_id": "x", "content": None}, ("title", "content"))

    assert picked == {"title": "A"}


@pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan"), "Infinity", "nan"])
def test_require_non_negative_rejects_non_finite(value) -> None:
    with pytest.raises(ValidationFailed):
        require_non_negative(value, "amount")
