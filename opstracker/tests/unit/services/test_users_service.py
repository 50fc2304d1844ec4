"""Tests for user creation and onboarding seed data."""

from __future__ import annotations

import pytest

from opstracker.errors import NotFoundError
from opstracker.services import users


def test_create_user_with_data_seeds_checklists(db) -> None:
    user = users.create_user_with_data(db, clerk_id="user_abc", name="Ana B", email="ana@example.com")

    assert user["plan"] == "free"
    assert user["clerk_id"] == "user_abc"

    goals = db.select_rows("user_goals", {"user_id": "user_abc"})
    tools = db.select_rows("user_tools", {"user_id": "user_abc"})
    assert len(goals) == len(users.GOAL_CHECKLIST) == 10
    assert len(tools) == len(users.TOOLS_STACK) == 9
    assert all(goal["is_achieved"] is False for goal in goals)
    assert db.find_one("business_info", {"user_id": "user_abc"})["business_name"] == "My New Business"


def test_create_user_with_data_is_idempotent(db) -> None:
    first = users.create_user_with_data(db, clerk_id="user_abc", name="Ana", email="ana@example.com")
    second = users.create_user_with_data(db, clerk_id="user_abc", name="Ana", email="ana@example.com")

    assert first["id"] == second["id"]
    assert len(db.rows("users")) == 1
    assert len(db.rows("user_goals")) == 10


def test_update_user(db, user_id) -> None:
    updated = users.update_user(db, clerk_id=user_id, name="New Name", email="new@example.com")

    assert updated["name"] == "New Name"
    assert users.get_user_by_clerk_id(db, user_id)["email"] == "new@example.com"


def test_update_unknown_user(db) -> None:
    with pytest.raises(NotFoundError):
        users.update_user(db, clerk_id="ghost", name="x", email="y")
