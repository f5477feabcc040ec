"""Subscription upgrade tiers and the upgrade stub (no payment processing)"""

from dataclasses import dataclass
from typing import Dict, List, Tuple

from expense_ai.domain.exceptions import UnknownPlanError


@dataclass(frozen=True)
class SubscriptionPlan:
    """Paid tier offered in the upgrade dialog"""

    tier: str
    name: str
    monthly_price_usd: int
    tagline: str
    badge: str
    features: Tuple[str, ...]


@dataclass(frozen=True)
class UpgradeOutcome:
    """Result of an upgrade request"""

    tier: str
    status: str
    message: str


GOLD = SubscriptionPlan(
    tier="gold",
    name="Gold Membership",
    monthly_price_usd=9,
    tagline="Perfect for personal finance management",
    badge="Popular",
    features=(
        "AI-Powered Expense Insights",
        "Advanced Category Suggestions",
        "Monthly Spending Reports",
        "Custom Budget Alerts",
        "Export Data (CSV)",
        "24/7 Email Support",
    ),
)

DIAMOND = SubscriptionPlan(
    tier="diamond",
    name="Diamond Membership",
    monthly_price_usd=19,
    tagline="Complete financial management suite",
    badge="Premium",
    features=(
        "Everything in Gold",
        "Predictive Spending Analysis",
        "Investment Recommendations",
        "Multi-Currency Support",
        "Real-time Financial Dashboard",
        "Advanced Analytics & Charts",
        "Priority Support",
        "Personal Finance Advisor",
        "Unlimited Export Options",
    ),
)

PLANS: Dict[str, SubscriptionPlan] = {plan.tier: plan for plan in (GOLD, DIAMOND)}

GUARANTEE = "30-day money-back guarantee • Cancel anytime • No hidden fees"


def list_plans() -> List[SubscriptionPlan]:
    """Plans in display order (cheapest first)"""
    return sorted(PLANS.values(), key=lambda p: p.monthly_price_usd)


def get_plan(tier: str) -> SubscriptionPlan:
    """Look up a plan by tier name (case-insensitive)"""
    plan = PLANS.get(tier.strip().lower())
    if plan is None:
        raise UnknownPlanError(f"Unknown plan: {tier}")
    return plan


def request_upgrade(tier: str) -> UpgradeOutcome:
    """Acknowledge an upgrade request; payment is not collected"""
    plan = get_plan(tier)
    return UpgradeOutcome(
        tier=plan.tier,
        status="pending_payment",
        message=f"Upgrading to {plan.tier.upper()} plan! (Payment integration would go here)",
    )
