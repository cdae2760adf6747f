"""Application configuration loaded from environment variables.

Settings for the API surface, LLM providers, and wizard behaviour. Uses
pydantic-settings for validation and .env file support.
"""

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_KNOWN_LLM_PROVIDERS = frozenset({"gemini", "openai"})


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # API
    # 0.0.0.0 binds to all network interfaces (required for Docker containers)
    api_host: str = "0.0.0.0"  # nosec B104
    api_port: int = 8000

    # CORS
    # Default allows localhost:3000 for the browser frontend during development
    allowed_origins: list[str] = ["http://localhost:3000"]

    # LLM Providers
    llm_provider: str = "gemini"
    google_api_key: str = ""
    openai_api_key: str = ""

    # Application
    environment: str = "development"
    log_level: str = "INFO"

    # Wizard
    # Regenerate the personal statement whenever review-step data changes
    wizard_auto_statement: bool = True
    # Upper bound on concurrently open wizard sessions held in memory
    wizard_max_sessions: int = 1000
    # Idle minutes before an unused wizard session is dropped
    wizard_session_ttl_minutes: int = 60

    @model_validator(mode="after")
    def check_configuration(self) -> "Settings":
        """Validate cross-field configuration.

        Checks:
        - LLM provider must be one the factory knows how to build
        - CORS must not use wildcard origin (incompatible with credentials)
        - Session cap and TTL must be positive
        """
        if self.llm_provider not in _KNOWN_LLM_PROVIDERS:
            msg = (
                f"LLM_PROVIDER must be one of {sorted(_KNOWN_LLM_PROVIDERS)}. "
                f"Got: {self.llm_provider}"
            )
            raise ValueError(msg)

        if "*" in self.allowed_origins:
            msg = (
                "ALLOWED_ORIGINS must not contain '*' (wildcard). "
                "The API allows credentials, which are incompatible with "
                "wildcard CORS origins."
            )
            raise ValueError(msg)

        if self.wizard_max_sessions <= 0:
            msg = (
                "WIZARD_MAX_SESSIONS must be positive. "
                f"Got: {self.wizard_max_sessions}"
            )
            raise ValueError(msg)

        if self.wizard_session_ttl_minutes <= 0:
            msg = (
                "WIZARD_SESSION_TTL_MINUTES must be positive. "
                f"Got: {self.wizard_session_ttl_minutes}"
            )
            raise ValueError(msg)

        return self


settings = Settings()
