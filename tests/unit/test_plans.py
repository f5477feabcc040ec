"""Unit tests for subscription tiers"""

import pytest
from expense_ai.domain.exceptions import UnknownPlanError
from expense_ai.domain.plans import get_plan, list_plans, request_upgrade


def test_list_plans_cheapest_first():
    plans = list_plans()

    assert [p.tier for p in plans] == ["gold", "diamond"]
    assert [p.monthly_price_usd for p in plans] == [9, 19]


def test_diamond_includes_gold():
    assert get_plan("diamond").features[0] == "Everything in Gold"


def test_get_plan_is_case_insensitive():
    assert get_plan(" GOLD ").name == "Gold Membership"


def test_request_upgrade_is_a_stub():
    """No payment is taken; the request is only acknowledged"""
    outcome = request_upgrade("gold")

    assert outcome.tier == "gold"
    assert outcome.status == "pending_payment"
    assert outcome.message == "Upgrading to GOLD plan! (Payment integration would go here)"


def test_request_upgrade_unknown_tier():
    with pytest.raises(UnknownPlanError):
        request_upgrade("platinum")
