"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Hosted chat-completion service
    openrouter_api_key: str | None = None
    openai_api_key: str | None = None  # Used only when no OpenRouter key is set
    ai_base_url: str = "https://openrouter.ai/api/v1"

    # Request attribution
    app_url: str = "http://localhost:3000"
    app_title: str = "ExpenseTracker AI"

    # Models per operation
    categorization_model: str = "openai/gpt-3.5-turbo"
    insights_model: str = "openai/gpt-3.5-turbo"
    answer_model: str = "deepseek/deepseek-chat-v3-0324:free"

    # Service
    service_name: str = "expense-ai"
    log_level: str = "INFO"
    enable_debug_routes: bool = False  # Exposes the key prefix without auth

    # HTTP Client
    http_timeout_seconds: float = 30.0

    @property
    def ai_api_key(self) -> str | None:
        """Credential for the chat-completion service"""
        return self.openrouter_api_key or self.openai_api_key


settings = Settings()
