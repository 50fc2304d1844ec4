import pytest

from opstracker.billing import BillingManager, PlanKey, PlanLimits, normalize_plan
from opstracker.errors import NotFoundError, PlanLimitExceeded


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Pro Monthly", PlanKey.PRO),
        ("PRO", PlanKey.PRO),
        ("free", PlanKey.FREE),
        ("Starter", PlanKey.FREE),
        (None, PlanKey.FREE),
    ],
)
def test_normalize_plan(raw, expected):
    assert normalize_plan(raw) is expected


def test_plan_limits_follow_configuration(monkeypatch):
    from opstracker.config import reload_config

    monkeypatch.setenv("FREE_PLAN_SCRIPT_LIMIT", "7")
    reload_config()

    assert PlanLimits.for_plan(PlanKey.FREE).limit_for("scripts") == 7
    assert PlanLimits.for_plan(PlanKey.PRO).limit_for("scripts") is None
    assert PlanLimits.for_plan(PlanKey.FREE).limit_for("leads") is None


def test_ensure_can_create_unknown_user(db):
    with pytest.raises(NotFoundError):
        BillingManager(db).ensure_can_create("ghost", "scripts")


def test_ensure_can_create_raises_at_ceiling(db, user_id):
    for index in range(3):
        db.insert_row("scripts", {"user_id": user_id, "title": str(index)})

    with pytest.raises(PlanLimitExceeded) as excinfo:
        BillingManager(db).ensure_can_create(user_id, "scripts")

    assert excinfo.value.limit == 3
    assert excinfo.value.table == "scripts"


def test_unlimited_tables_are_never_counted(db, user_id):
    plan = BillingManager(db).ensure_can_create(user_id, "leads")

    assert plan.plan is PlanKey.FREE


def test_apply_subscription_upgrades_user(db, user_id):
    manager = BillingManager(db)

    assert manager.apply_subscription(
        clerk_id=user_id,
        subscription_id="sub_1",
        plan_name="Pro Plan",
        ends_at=1_700_000_000_000,
    )

    assert manager.get_subscription_status(user_id) == {"plan": "pro", "ends_at": 1_700_000_000_000}
    assert db.get_user_by_clerk_id(user_id)["clerk_subscription_id"] == "sub_1"


def test_apply_subscription_unknown_user_is_ignored(db):
    assert BillingManager(db).apply_subscription(
        clerk_id="ghost", subscription_id="sub_1", plan_name="pro", ends_at=None
    ) is False
    assert db.rows("users") == []


def test_cancel_subscription_resets_to_free(db, user_id):
    manager = BillingManager(db)
    manager.apply_subscription(clerk_id=user_id, subscription_id="sub_1", plan_name="pro", ends_at=123)

    assert manager.cancel_subscription("sub_1") is True

    user = db.get_user_by_clerk_id(user_id)
    assert user["plan"] == "free"
    assert user["clerk_subscription_id"] is None
    assert user["subscription_ends_at"] is None
    assert manager.cancel_subscription("sub_1") is False


def test_get_subscription_status_without_identity(db):
    assert BillingManager(db).get_subscription_status(None) is None
    assert BillingManager(db).get_subscription_status("ghost") is None
