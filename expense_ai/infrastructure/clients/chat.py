"""Chat-completion client for the hosted model (OpenRouter / OpenAI-compatible)"""

import logging
from dataclasses import dataclass

import httpx
import openai
from openai import AsyncOpenAI

from expense_ai.config import Settings, settings
from expense_ai.domain.exceptions import AIServiceError
from expense_ai.domain.models import ChatRequest

logger = logging.getLogger(__name__)

API_KEY_PREFIX_LENGTH = 15


@dataclass(frozen=True)
class ChatClientConfig:
    """Static configuration for the chat-completion client"""

    base_url: str
    api_key: str | None
    app_url: str
    app_title: str
    timeout_seconds: float

    @classmethod
    def from_settings(cls, source: Settings | None = None) -> "ChatClientConfig":
        source = source or settings
        return cls(
            base_url=source.ai_base_url,
            api_key=source.ai_api_key,
            app_url=source.app_url,
            app_title=source.app_title,
            timeout_seconds=source.http_timeout_seconds,
        )


class ChatCompletionClient:
    """Client for a hosted chat-completion API, one request per call and no retries"""

    def __init__(self, config: ChatClientConfig | None = None, http_client: httpx.AsyncClient | None = None):
        self.config = config or ChatClientConfig.from_settings()
        self._client: AsyncOpenAI | None = None
        # Owned by the SDK client once handed over; closed here only when no SDK client exists
        self._http_client = http_client

        # The SDK refuses to start without a key; calls fail with AIServiceError instead
        if self.config.api_key:
            self._client = AsyncOpenAI(
                base_url=self.config.base_url,
                api_key=self.config.api_key,
                default_headers={
                    "HTTP-Referer": self.config.app_url,
                    "X-Title": self.config.app_title,
                },
                max_retries=0,
                timeout=self.config.timeout_seconds,
                http_client=http_client or httpx.AsyncClient(timeout=self.config.timeout_seconds),
            )

    @property
    def has_credential(self) -> bool:
        return bool(self.config.api_key)

    @property
    def credential_prefix(self) -> str:
        """Leading characters of the key, for the debug route only"""
        if not self.config.api_key:
            return "N/A"
        return self.config.api_key[:API_KEY_PREFIX_LENGTH]

    async def complete(self, request: ChatRequest) -> str:
        """
        Send one chat-completion request and return the reply text.

        Returns:
            Text of the first choice (may be empty)

        Raises:
            AIServiceError: Missing credential, network failure, timeout,
                non-success status, or a response without choices
        """
        if self._client is None:
            raise AIServiceError("AI service credential is not configured")

        try:
            completion = await self._client.chat.completions.create(
                model=request.model,
                messages=request.as_payload(),
                temperature=request.temperature,
                max_tokens=request.max_tokens,
            )
        except openai.APITimeoutError as e:
            raise AIServiceError(f"AI service timeout after {self.config.timeout_seconds}s") from e
        except openai.APIStatusError as e:
            raise AIServiceError(f"AI service error: {e.status_code}") from e
        except (openai.OpenAIError, httpx.HTTPError) as e:
            raise AIServiceError(f"AI service unavailable: {e}") from e

        if not completion.choices:
            raise AIServiceError("AI service returned no choices")

        logger.debug(
            "Chat completion received",
            extra={"model": request.model, "finish_reason": completion.choices[0].finish_reason},
        )
        return completion.choices[0].message.content or ""

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.close()
        elif self._http_client is not None:
            await self._http_client.aclose()
