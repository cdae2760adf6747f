"""OpenAI GPT LLM adapter.

Alternative provider for deployments that hold OpenAI credits instead of
Google ones. Selected with LLM_PROVIDER=openai.
"""

import contextlib
import time
from typing import TYPE_CHECKING

import openai
import structlog
from openai import AsyncOpenAI

from career_compass.providers.errors import (
    AuthenticationError,
    ContentFilterError,
    ContextLengthError,
    ModelNotFoundError,
    ProviderError,
    RateLimitError,
    TransientError,
)
from career_compass.providers.llm.base import (
    LLMMessage,
    LLMProvider,
    LLMResponse,
    TaskType,
)

if TYPE_CHECKING:
    from career_compass.providers.config import ProviderConfig

logger = structlog.get_logger()


DEFAULT_OPENAI_MODEL = "gpt-4o-mini"

# Short list suggestions stay on the mini model; the free-text and
# whole-profile tasks benefit from the larger one.
DEFAULT_OPENAI_ROUTING: dict[str, str] = {
    TaskType.TASK_SUGGESTIONS.value: "gpt-4o-mini",
    TaskType.SKILL_SUGGESTIONS.value: "gpt-4o-mini",
    TaskType.EDUCATION_SKILLS.value: "gpt-4o-mini",
    TaskType.INTEREST_SUGGESTIONS.value: "gpt-4o-mini",
    TaskType.PERSONAL_STATEMENT.value: "gpt-4o",
    TaskType.CAREER_PROFILE.value: "gpt-4o",
    TaskType.CAREER_DETAIL.value: "gpt-4o",
    TaskType.LEARNING_PLAN.value: "gpt-4o",
}

_HANDLED_OPENAI_ERRORS = (
    openai.RateLimitError,
    openai.AuthenticationError,
    openai.NotFoundError,
    openai.BadRequestError,
    openai.APIConnectionError,
    openai.InternalServerError,
)


def _classify_openai_error(error: Exception) -> ProviderError:
    """Map OpenAI SDK exceptions to internal error taxonomy.

    Returns a ProviderError subclass instance (does not raise).
    """
    if isinstance(error, openai.RateLimitError):
        retry_after = None
        if getattr(error, "response", None) is not None:
            retry_header = error.response.headers.get("retry-after")
            if retry_header is not None:
                with contextlib.suppress(ValueError):
                    retry_after = float(retry_header)
        return RateLimitError(str(error), retry_after_seconds=retry_after)

    if isinstance(error, openai.AuthenticationError):
        return AuthenticationError(str(error))

    if isinstance(error, openai.NotFoundError):
        return ModelNotFoundError(str(error))

    if isinstance(error, openai.BadRequestError):
        error_msg = str(error).lower()
        if "context_length" in error_msg:
            return ContextLengthError(str(error))
        if "content_policy" in error_msg:
            return ContentFilterError(str(error))
        return ProviderError(str(error))

    if isinstance(error, (openai.APIConnectionError, openai.InternalServerError)):
        return TransientError(str(error))

    return ProviderError(str(error))


def _convert_openai_messages(messages: list[LLMMessage]) -> list[dict]:
    """Convert LLMMessages to OpenAI chat-completions message format."""
    return [{"role": msg.role, "content": msg.content} for msg in messages]


class OpenAIAdapter(LLMProvider):
    """OpenAI GPT adapter using OpenAI SDK."""

    @property
    def provider_name(self) -> str:
        """Return 'openai' for logging."""
        return "openai"

    def __init__(self, config: "ProviderConfig") -> None:
        """Initialize OpenAI adapter.

        Args:
            config: Provider configuration with OpenAI API key.
        """
        super().__init__(config)
        self.client = AsyncOpenAI(api_key=config.openai_api_key)
        self.model_routing = {**DEFAULT_OPENAI_ROUTING}
        if config.openai_model_routing:
            self.model_routing.update(config.openai_model_routing)

    def _resolve(self, max_tokens: int | None, temperature: float | None) -> tuple[int, float]:
        return (
            max_tokens if max_tokens is not None else self.config.default_max_tokens,
            temperature if temperature is not None else self.config.default_temperature,
        )

    async def complete(
        self,
        messages: list[LLMMessage],
        task: TaskType,
        max_tokens: int | None = None,
        temperature: float | None = None,
        json_mode: bool = False,
    ) -> LLMResponse:
        """Generate completion using OpenAI GPT.

        Args:
            messages: Conversation history as list of LLMMessage.
            task: Task type for model routing.
            max_tokens: Override default max tokens.
            temperature: Override default temperature.
            json_mode: If True, enforce JSON output format.

        Returns:
            LLMResponse with the generated content.
        """
        model = self.get_model_for_task(task)
        resolved_tokens, resolved_temperature = self._resolve(max_tokens, temperature)

        logger.info(
            "llm_request_start",
            provider="openai",
            model=model,
            task=task.value,
            message_count=len(messages),
        )

        start_time = time.monotonic()

        try:
            response = await self.client.chat.completions.create(
                model=model,
                max_tokens=resolved_tokens,
                temperature=resolved_temperature,
                messages=_convert_openai_messages(messages),  # type: ignore[arg-type]
                response_format={"type": "json_object"} if json_mode else None,  # type: ignore[arg-type]
            )
        except _HANDLED_OPENAI_ERRORS as e:
            logger.error(
                "llm_request_failed",
                provider="openai",
                model=model,
                task=task.value,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise _classify_openai_error(e) from e

        latency_ms = (time.monotonic() - start_time) * 1000
        choice = response.choices[0]
        input_tokens = response.usage.prompt_tokens if response.usage else 0
        output_tokens = response.usage.completion_tokens if response.usage else 0

        logger.info(
            "llm_request_complete",
            provider="openai",
            model=model,
            task=task.value,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            latency_ms=latency_ms,
        )

        return LLMResponse(
            content=choice.message.content,
            model=model,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            finish_reason=choice.finish_reason,
            latency_ms=latency_ms,
        )


    def get_model_for_task(self, task: TaskType) -> str:
        """Get model for task using routing table.

        Args:
            task: The task type to get the model for.

        Returns:
            Model identifier string (e.g., "gpt-4o-mini").
        """
        return self.model_routing.get(task.value, DEFAULT_OPENAI_MODEL)
