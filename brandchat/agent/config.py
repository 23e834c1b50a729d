"""Agent configuration with environment variable loading.

Pydantic-based configuration for the model behind the chat relay.
Gemini is the default provider; any OpenAI-compatible API can be used
by setting LLM_PROVIDER=openai (and optionally LLM_BASE_URL).
"""

import os
from typing import Literal

from pydantic import BaseModel, Field, field_validator

Provider = Literal["gemini", "openai"]

DEFAULT_MODELS: dict[str, str] = {
    "gemini": "gemini-2.0-flash",
    "openai": "gpt-4o-mini",
}


def _default_provider() -> str:
    return os.getenv("LLM_PROVIDER", "gemini").strip().lower()


def _default_api_key() -> str:
    if _default_provider() == "openai":
        return os.getenv("LLM_API_KEY", os.getenv("OPENAI_API_KEY", ""))
    return os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY") or ""


def _default_model() -> str:
    return os.getenv("LLM_MODEL") or DEFAULT_MODELS.get(_default_provider(), "gemini-2.0-flash")


class AgentConfig(BaseModel):
    """Configuration for the chat relay's model.

    A missing API key is not a validation error: the server must still
    start and answer chat requests with a configuration error.

    Attributes:
        provider: Model provider, "gemini" or "openai".
        api_key: API key for model access (may be empty).
        base_url: API base URL for OpenAI-compatible providers.
        model_name: Model identifier to use.
        temperature: Sampling temperature (0.0 = deterministic, 2.0 = creative).
        max_tokens: Maximum tokens in generated response.
        timeout: Upper bound, in seconds, for one upstream call.
    """

    provider: Provider = Field(
        default_factory=_default_provider,
        validate_default=True,
        description="Model provider",
    )
    api_key: str = Field(
        default_factory=_default_api_key,
        description="API key for LLM provider",
    )
    base_url: str | None = Field(
        default_factory=lambda: os.getenv("LLM_BASE_URL") or None,
        description="API base URL (None for the provider default)",
    )
    model_name: str = Field(
        default_factory=_default_model,
        description="Model to use",
    )
    temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for response generation",
    )
    max_tokens: int = Field(
        default=1024,
        ge=1,
        le=128000,
        description="Maximum tokens in generated response",
    )
    timeout: float = Field(
        default_factory=lambda: os.getenv("LLM_TIMEOUT", "60"),
        gt=0,
        validate_default=True,
        description="Seconds before an upstream call is abandoned",
    )

    @field_validator("api_key")
    @classmethod
    def strip_api_key(cls, v: str) -> str:
        """Strip surrounding whitespace from the API key."""
        return v.strip()

    @property
    def has_credentials(self) -> bool:
        """Whether an API key is configured."""
        return bool(self.api_key)


def get_agent_config() -> AgentConfig:
    """Create agent configuration from environment.

    Returns:
        Configured AgentConfig instance.
    """
    return AgentConfig()
