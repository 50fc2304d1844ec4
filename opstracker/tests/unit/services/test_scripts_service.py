"""Tests for scripts, objection handlers and their plan ceilings."""

from __future__ import annotations

import pytest

from opstracker.errors import NotFoundError, PlanLimitExceeded
from opstracker.services import scripts


def _make_pro(db, user_id: str) -> None:
    user = db.get_user_by_clerk_id(user_id)
    db.update_row("users", user["id"], {"plan": "pro"})


def test_fourth_script_is_rejected_on_free_plan(db, user_id) -> None:
    for index in range(3):
        scripts.add_script(db, user_id, title=f"Script {index}", content="Hi")

    with pytest.raises(PlanLimitExceeded) as excinfo:
        scripts.add_script(db, user_id, title="Script 4", content="Hi")

    assert excinfo.value.message == "Upgrade to Pro to add more than 3 scripts."
    assert excinfo.value.status_code == 402
    assert len(db.rows("scripts")) == 3


def test_pro_plan_has_no_script_ceiling(db, user_id) -> None:
    _make_pro(db, user_id)

    for index in range(6):
        scripts.add_script(db, user_id, title=f"Script {index}", content="Hi")

    assert len(db.rows("scripts")) == 6


def test_sixth_handler_is_rejected_on_free_plan(db, user_id) -> None:
    for index in range(5):
        scripts.add_handler(db, user_id, objection=f"Too pricey {index}", response="Value")

    with pytest.raises(PlanLimitExceeded) as excinfo:
        scripts.add_handler(db, user_id, objection="One more", response="No")

    assert excinfo.value.message == "Upgrade to Pro to add more than 5 objection handlers."


def test_ceiling_counts_only_own_rows(db, user_id, other_user_id) -> None:
    for index in range(3):
        scripts.add_script(db, other_user_id, title=f"Theirs {index}", content="")

    scripts.add_script(db, user_id, title="Mine", content="")

    assert len(db.rows("scripts")) == 4


def test_get_scripts_and_handlers_includes_plan(db, user_id) -> None:
    scripts.add_script(db, user_id, title="Opener", content="Hello")
    scripts.add_handler(db, user_id, objection="Busy", response="Two minutes")

    result = scripts.get_scripts_and_handlers(db, user_id)

    assert result["plan"] == "free"
    assert [script["title"] for script in result["scripts"]] == ["Opener"]
    assert len(result["objection_handlers"]) == 1
    assert scripts.get_scripts_and_handlers(db, None) is None


def test_update_and_delete_are_owner_checked(db, user_id, other_user_id) -> None:
    script = scripts.add_script(db, user_id, title="Opener", content="Hello")
    handler = scripts.add_handler(db, user_id, objection="Busy", response="Later")

    with pytest.raises(NotFoundError):
        scripts.update_script(db, other_user_id, script["id"], {"content": "Hijacked"})
    with pytest.raises(NotFoundError):
        scripts.delete_handler(db, other_user_id, handler["id"])

    assert scripts.update_script(db, user_id, script["id"], {"content": "Hey"})["content"] == "Hey"
    assert scripts.update_handler(db, user_id, handler["id"], {"response": "Now"})["response"] == "Now"
    scripts.delete_script(db, user_id, script["id"])
    scripts.delete_handler(db, user_id, handler["id"])
    assert db.rows("scripts") == []
    assert db.rows("objection_handlers") == []
