"""
AI expense operations: categorization, insights and free-text answers.

Each operation makes exactly one chat-completion call and never raises.
Service failures and malformed replies are logged and turned into the
fixed fallback value, returned as a degraded AIResult.
"""

import logging
import time
from typing import List, Sequence

from expense_ai.config import settings
from expense_ai.domain.exceptions import AIServiceError, MalformedReplyError
from expense_ai.domain.interpretation import (
    FALLBACK_ANSWER,
    FALLBACK_CATEGORY,
    FALLBACK_INSIGHT,
    parse_category,
    parse_insights,
    require_text,
)
from expense_ai.domain.models import AIResult, ChatRequest, ExpenseCategory, ExpenseRecord, Insight
from expense_ai.domain.prompts import (
    build_answer_request,
    build_categorization_request,
    build_insights_request,
)
from expense_ai.infrastructure.clients.chat import ChatCompletionClient
from expense_ai.infrastructure.observability.logging import log_ai_outcome
from expense_ai.infrastructure.observability.metrics import (
    ai_request_latency_histogram,
    record_failure,
    record_outcome,
)

logger = logging.getLogger(__name__)

CATEGORIZE = "categorize"
INSIGHTS = "insights"
ANSWER = "answer"


async def _send(client: ChatCompletionClient, operation: str, request: ChatRequest) -> str:
    with ai_request_latency_histogram.labels(operation=operation).time():
        return await client.complete(request)


def _failure_kind(error: Exception) -> str:
    if isinstance(error, AIServiceError):
        return "service"
    if isinstance(error, MalformedReplyError):
        return "malformed"
    return "unexpected"


def _log_failure(operation: str, error: Exception) -> None:
    kind = _failure_kind(error)
    record_failure(operation, kind)
    if kind == "malformed":
        logger.warning(f"Malformed AI reply: {error}", extra={"operation": operation})
    else:
        logger.error(f"AI {operation} failed: {error}", extra={"operation": operation, "failure_kind": kind})


def _finish(operation: str, result: AIResult, start_time: float, request_id: str | None) -> AIResult:
    duration_ms = (time.time() - start_time) * 1000
    record_outcome(operation, result.degraded)
    log_ai_outcome(operation, result.degraded, duration_ms, reason=result.reason, request_id=request_id)
    return result


async def categorize_expense(
    client: ChatCompletionClient,
    description: str,
    model: str | None = None,
    request_id: str | None = None,
) -> AIResult[ExpenseCategory]:
    """
    Categorize one expense description.

    Returns:
        One of the seven categories; OTHER (degraded) on any failure or
        when the model answers with a label outside the enumeration
    """
    start_time = time.time()
    try:
        request = build_categorization_request(description, model or settings.categorization_model)
        reply = await _send(client, CATEGORIZE, request)
        result = AIResult.success(parse_category(reply))
    except Exception as e:
        _log_failure(CATEGORIZE, e)
        result = AIResult.fallback(FALLBACK_CATEGORY, reason=str(e))

    return _finish(CATEGORIZE, result, start_time, request_id)


async def generate_expense_insights(
    client: ChatCompletionClient,
    expenses: Sequence[ExpenseRecord],
    model: str | None = None,
    request_id: str | None = None,
) -> AIResult[List[Insight]]:
    """
    Generate 3-4 insights about the given expenses.

    Returns:
        Parsed insights, or the single fixed fallback insight (degraded)
        when the call fails or the reply is not a JSON array
    """
    start_time = time.time()
    batch_timestamp_ms = int(start_time * 1000)

    try:
        logger.info("Generating AI insights", extra={"expense_count": len(expenses), "request_id": request_id})
        request = build_insights_request(expenses, model or settings.insights_model)
        reply = await _send(client, INSIGHTS, request)
        result = AIResult.success(parse_insights(reply, batch_timestamp_ms))
    except Exception as e:
        _log_failure(INSIGHTS, e)
        result = AIResult.fallback([FALLBACK_INSIGHT], reason=str(e))

    return _finish(INSIGHTS, result, start_time, request_id)


async def generate_ai_answer(
    client: ChatCompletionClient,
    question: str,
    expenses: Sequence[ExpenseRecord],
    model: str | None = None,
    request_id: str | None = None,
) -> AIResult[str]:
    """Answer a question about the given expenses in 2-3 sentences"""
    start_time = time.time()
    try:
        request = build_answer_request(question, expenses, model or settings.answer_model)
        reply = await _send(client, ANSWER, request)
        result = AIResult.success(require_text(reply))
    except Exception as e:
        _log_failure(ANSWER, e)
        result = AIResult.fallback(FALLBACK_ANSWER, reason=str(e))

    return _finish(ANSWER, result, start_time, request_id)
