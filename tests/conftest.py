"""Pytest fixtures for testing"""

import pytest
from datetime import datetime, timedelta
from decimal import Decimal
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient
from expense_ai.api.main import create_app
from expense_ai.api.dependencies import get_chat_client
from expense_ai.domain.models import ExpenseRecord
from expense_ai.infrastructure.clients.chat import ChatClientConfig, ChatCompletionClient


TEST_API_KEY = "sk-or-v1-0123456789abcdef"


@pytest.fixture
def chat_config() -> ChatClientConfig:
    """Client configuration pointing at a fake endpoint"""
    return ChatClientConfig(
        base_url="https://openrouter.test/api/v1",
        api_key=TEST_API_KEY,
        app_url="http://localhost:3000",
        app_title="ExpenseTracker AI",
        timeout_seconds=5.0,
    )


@pytest.fixture
def chat_client(chat_config: ChatClientConfig) -> ChatCompletionClient:
    """Chat client whose network call is replaced by an AsyncMock"""
    client = ChatCompletionClient(chat_config)
    client.complete = AsyncMock(return_value="")
    return client


@pytest.fixture
def client(chat_client: ChatCompletionClient) -> TestClient:
    """Create FastAPI test client with the mocked chat client"""
    app = create_app(enable_debug_routes=True)
    app.dependency_overrides[get_chat_client] = lambda: chat_client
    return TestClient(app)


@pytest.fixture
def sample_expenses() -> list[ExpenseRecord]:
    """A week of everyday spending"""
    base_date = datetime(2025, 3, 3, 9, 30)
    return [
        ExpenseRecord(
            id="exp_1",
            amount=Decimal("4.75"),
            category="Food",
            description="Coffee at Starbucks",
            date=base_date,
        ),
        ExpenseRecord(
            id="exp_2",
            amount=Decimal("23.40"),
            category="Transportation",
            description="Uber ride home",
            date=base_date + timedelta(days=1),
        ),
        ExpenseRecord(
            id="exp_3",
            amount=Decimal("80"),
            category="Shopping",
            description="New shirt",
            date=base_date + timedelta(days=3),
        ),
        ExpenseRecord(
            id="exp_4",
            amount=Decimal("15.99"),
            category="Entertainment",
            description="Netflix subscription",
            date=base_date + timedelta(days=5),
        ),
    ]
