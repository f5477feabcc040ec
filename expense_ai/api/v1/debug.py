"""GET/POST /v1/test-ai - debug endpoints for checking the AI service wiring"""

import logging
from datetime import datetime, timezone
from decimal import Decimal

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from expense_ai.api.v1.schemas import DebugAIRequest, DebugInfo, InsightSchema
from expense_ai.api.dependencies import get_chat_client, get_request_id
from expense_ai.config import settings
from expense_ai.domain.interpretation import require_text
from expense_ai.domain.models import ExpenseRecord
from expense_ai.domain.prompts import build_connectivity_request
from expense_ai.infrastructure.clients.chat import ChatCompletionClient
from expense_ai.services.ai import categorize_expense, generate_expense_insights

router = APIRouter()


def _debug_info(chat_client: ChatCompletionClient) -> dict:
    return DebugInfo(
        has_api_key=chat_client.has_credential,
        api_key_prefix=chat_client.credential_prefix,
        base_url=chat_client.config.base_url,
        app_url=chat_client.config.app_url,
    ).model_dump()


def _sample_expenses() -> list[ExpenseRecord]:
    """Three fixed expenses used to exercise insight generation"""
    now = datetime.now(timezone.utc)
    return [
        ExpenseRecord(id="1", amount=Decimal("50"), category="Food", description="Coffee at Starbucks", date=now),
        ExpenseRecord(id="2", amount=Decimal("120"), category="Transportation", description="Uber ride", date=now),
        ExpenseRecord(id="3", amount=Decimal("80"), category="Shopping", description="New shirt", date=now),
    ]


@router.get("/test-ai")
async def test_connection(
    request: Request,
    chat_client: ChatCompletionClient = Depends(get_chat_client),
):
    """Send a fixed ping to the chat-completion service and report the reply"""
    request_id = get_request_id(request)
    logging.info("Testing AI service connection", extra={"request_id": request_id, "base_url": chat_client.config.base_url})

    try:
        reply = await chat_client.complete(build_connectivity_request(settings.categorization_model))
        message = require_text(reply)
    except Exception as e:
        logging.error(f"AI service connection test failed: {e}", extra={"request_id": request_id})
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": str(e), "debug": _debug_info(chat_client)},
        )

    return {"success": True, "message": message, "debug": _debug_info(chat_client)}


@router.post("/test-ai")
async def test_operations(
    request_body: DebugAIRequest,
    request: Request,
    chat_client: ChatCompletionClient = Depends(get_chat_client),
):
    """Run insight generation on sample data, or categorize the given description"""
    request_id = get_request_id(request)

    try:
        if request_body.test_insights:
            result = await generate_expense_insights(chat_client, _sample_expenses(), request_id=request_id)
            payload = {"insights": [InsightSchema.from_domain(i).model_dump(mode="json") for i in result.value]}
        else:
            result = await categorize_expense(chat_client, request_body.description, request_id=request_id)
            payload = {"category": result.value.value}
    except Exception as e:
        logging.error(f"Test AI endpoint error: {e}", extra={"request_id": request_id})
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": str(e), "debug": _debug_info(chat_client)},
        )

    return {"success": True, **payload, "degraded": result.degraded, "debug": _debug_info(chat_client)}
