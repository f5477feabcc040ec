"""Dependency injection for FastAPI endpoints"""

from functools import lru_cache

from fastapi import Request
from expense_ai.infrastructure.clients.chat import ChatClientConfig, ChatCompletionClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


@lru_cache(maxsize=1)
def get_chat_client() -> ChatCompletionClient:
    """Provide the process-wide chat-completion client"""
    return ChatCompletionClient(ChatClientConfig.from_settings())
