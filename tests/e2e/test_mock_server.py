"""
E2E tests against the mock chat-completion server.

These tests require the mock server to be running:
    uvicorn mock.chat_server.main:app --port 8001
    MOCK_CHAT_URL=http://localhost:8001 pytest -m integration
"""

import os
import pytest
from expense_ai.domain.models import ExpenseCategory, InsightType
from expense_ai.infrastructure.clients.chat import ChatClientConfig, ChatCompletionClient
from expense_ai.services.ai import categorize_expense, generate_ai_answer, generate_expense_insights

MOCK_CHAT_URL = os.getenv("MOCK_CHAT_URL")

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(not MOCK_CHAT_URL, reason="MOCK_CHAT_URL not set"),
]


@pytest.fixture
def live_client() -> ChatCompletionClient:
    return ChatCompletionClient(
        ChatClientConfig(
            base_url=MOCK_CHAT_URL or "",
            api_key="sk-mock",
            app_url="http://localhost:3000",
            app_title="ExpenseTracker AI",
            timeout_seconds=5.0,
        )
    )


@pytest.mark.parametrize(
    "description, expected",
    [
        ("coffee at starbucks", ExpenseCategory.FOOD),
        ("uber ride home", ExpenseCategory.TRANSPORTATION),
        ("xyz completely unrelated garbage", ExpenseCategory.OTHER),
    ],
)
async def test_categorize_round_trip(live_client, description, expected):
    result = await categorize_expense(live_client, description)

    assert result.value == expected
    assert result.degraded is False


async def test_insights_round_trip(live_client, sample_expenses):
    """Mock replies with a fenced array; it must parse without falling back"""
    result = await generate_expense_insights(live_client, sample_expenses)

    assert result.degraded is False
    assert len(result.value) == 3
    assert result.value[0].type == InsightType.WARNING


async def test_answer_round_trip(live_client, sample_expenses):
    result = await generate_ai_answer(live_client, "Where does my money go?", sample_expenses)

    assert result.degraded is False
    assert "Transportation" in result.value


async def test_missing_credential_against_live_server():
    client = ChatCompletionClient(
        ChatClientConfig(
            base_url=MOCK_CHAT_URL or "",
            api_key=None,
            app_url="http://localhost:3000",
            app_title="ExpenseTracker AI",
            timeout_seconds=5.0,
        )
    )

    result = await categorize_expense(client, "coffee")

    assert result.value == ExpenseCategory.OTHER
    assert result.degraded is True
