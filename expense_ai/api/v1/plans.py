"""GET /v1/plans and POST /v1/plans/upgrade - subscription upgrade tiers"""

import logging
from fastapi import APIRouter, HTTPException, Request

from expense_ai.api.v1.schemas import PlanSchema, PlansResponse, UpgradeRequest, UpgradeResponse
from expense_ai.api.dependencies import get_request_id
from expense_ai.domain.exceptions import UnknownPlanError
from expense_ai.domain.plans import GUARANTEE, list_plans, request_upgrade

router = APIRouter()


@router.get("/plans", response_model=PlansResponse)
def get_plans():
    """List upgrade tiers with prices and features"""
    plans = [
        PlanSchema(
            tier=plan.tier,
            name=plan.name,
            monthly_price_usd=plan.monthly_price_usd,
            tagline=plan.tagline,
            badge=plan.badge,
            features=list(plan.features),
        )
        for plan in list_plans()
    ]
    return PlansResponse(plans=plans, guarantee=GUARANTEE)


@router.post("/plans/upgrade", response_model=UpgradeResponse)
def upgrade(request_body: UpgradeRequest, request: Request):
    """
    Request an upgrade to a paid tier.

    Payment is not integrated: the request is only acknowledged.
    """
    try:
        outcome = request_upgrade(request_body.plan)
    except UnknownPlanError as e:
        raise HTTPException(status_code=404, detail=str(e))

    logging.info(
        f"Upgrading to {outcome.tier} plan",
        extra={"request_id": get_request_id(request), "plan": outcome.tier},
    )
    return UpgradeResponse(plan=outcome.tier, status=outcome.status, message=outcome.message)
