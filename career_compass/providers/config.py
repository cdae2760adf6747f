"""Provider configuration management.

Centralized configuration for the LLM providers behind the generation
service.
"""

import os
from dataclasses import dataclass


@dataclass
class ProviderConfig:
    """Centralized provider configuration.

    Attributes:
        llm_provider: Which LLM provider to use ("gemini", "openai").
        google_api_key: Google AI API key (loaded from environment).
        openai_api_key: OpenAI API key (loaded from environment).
        gemini_model_routing: Override model routing for Gemini.
        openai_model_routing: Override model routing for OpenAI.
        default_max_tokens: Default max output tokens.
        default_temperature: Default sampling temperature.
        max_retries: Max retry attempts for transient errors.
        retry_base_delay_ms: Base delay for exponential backoff.
        retry_max_delay_ms: Max delay cap for exponential backoff.
    """

    # Provider selection
    llm_provider: str = "gemini"

    # API keys (loaded from environment)
    google_api_key: str | None = None
    openai_api_key: str | None = None

    # Model routing (can override defaults)
    gemini_model_routing: dict[str, str] | None = None
    openai_model_routing: dict[str, str] | None = None

    # Defaults
    default_max_tokens: int = 4096
    default_temperature: float = 0.7

    # Retry policy
    max_retries: int = 2
    retry_base_delay_ms: int = 500
    retry_max_delay_ms: int = 8000

    @classmethod
    def from_env(cls) -> "ProviderConfig":
        """Load configuration from environment variables.

        Returns:
            ProviderConfig instance with values from environment.
        """
        return cls(
            llm_provider=os.getenv("LLM_PROVIDER", "gemini"),
            google_api_key=os.getenv("GOOGLE_API_KEY"),
            openai_api_key=os.getenv("OPENAI_API_KEY"),
            default_max_tokens=int(os.getenv("DEFAULT_MAX_TOKENS", "4096")),
            default_temperature=float(os.getenv("DEFAULT_TEMPERATURE", "0.7")),
            max_retries=int(os.getenv("LLM_MAX_RETRIES", "2")),
        )
