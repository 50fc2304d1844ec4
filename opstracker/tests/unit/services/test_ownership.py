"""Tests for identity and ownership checks."""

from __future__ import annotations

import uuid

import pytest

from opstracker.errors import AuthenticationRequired, NotFoundError
from opstracker.services.ownership import get_owned_or_raise, require_identity


def test_require_identity() -> None:
    assert require_identity("user_1") == "user_1"
    with pytest.raises(AuthenticationRequired):
        require_identity(None)
    with pytest.raises(AuthenticationRequired):
        require_identity("")


def test_absent_and_foreign_rows_raise_the_same_error(db) -> None:
    row = db.insert_row("leads", {"user_id": "owner", "name": "Jo"})

    with pytest.raises(NotFoundError) as foreign:
        get_owned_or_raise(db, "leads", row["id"], "intruder")
    with pytest.raises(NotFoundError) as absent:
        get_owned_or_raise(db, "leads", str(uuid.uuid4()), "intruder")

    assert foreign.value.message == absent.value.message == "Lead not found or unauthorized"


def test_malformed_id_is_not_found(db) -> None:
    with pytest.raises(NotFoundError):
        get_owned_or_raise(db, "scripts", "not-a-uuid", "owner")


def test_users_table_is_owned_by_clerk_id(db) -> None:
    row = db.insert_row("users", {"clerk_id": "user_1", "name": "A"})

    assert get_owned_or_raise(db, "users", row["id"], "user_1")["name"] == "A"
