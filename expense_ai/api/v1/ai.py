"""POST /v1/ai/* - expense categorization, insights and Q&A endpoints"""

from fastapi import APIRouter, Depends, Request

from expense_ai.api.v1.schemas import (
    AnswerRequest,
    AnswerResponse,
    CategorizeRequest,
    CategorizeResponse,
    InsightSchema,
    InsightsRequest,
    InsightsResponse,
)
from expense_ai.api.dependencies import get_chat_client, get_request_id
from expense_ai.infrastructure.clients.chat import ChatCompletionClient
from expense_ai.services.ai import categorize_expense, generate_ai_answer, generate_expense_insights

router = APIRouter()


@router.post("/ai/categorize", response_model=CategorizeResponse)
async def categorize(
    request_body: CategorizeRequest,
    request: Request,
    chat_client: ChatCompletionClient = Depends(get_chat_client),
):
    """
    Suggest a category for an expense description.

    Always answers 200; `degraded` is true when the catch-all was used
    because the model could not be reached or replied out of range.
    """
    result = await categorize_expense(
        chat_client, request_body.description, request_id=get_request_id(request)
    )
    return CategorizeResponse(category=result.value, degraded=result.degraded)


@router.post("/ai/insights", response_model=InsightsResponse)
async def insights(
    request_body: InsightsRequest,
    request: Request,
    chat_client: ChatCompletionClient = Depends(get_chat_client),
):
    """Generate spending insights for the supplied expenses"""
    expenses = [expense.to_domain() for expense in request_body.expenses]
    result = await generate_expense_insights(chat_client, expenses, request_id=get_request_id(request))
    return InsightsResponse(
        insights=[InsightSchema.from_domain(insight) for insight in result.value],
        degraded=result.degraded,
    )


@router.post("/ai/answer", response_model=AnswerResponse)
async def answer(
    request_body: AnswerRequest,
    request: Request,
    chat_client: ChatCompletionClient = Depends(get_chat_client),
):
    """Answer a question about the supplied expenses"""
    expenses = [expense.to_domain() for expense in request_body.expenses]
    result = await generate_ai_answer(
        chat_client, request_body.question, expenses, request_id=get_request_id(request)
    )
    return AnswerResponse(answer=result.value, degraded=result.degraded)
