"""Abstract base class and types for LLM providers.

LLMProvider interface with the TaskType routing enum, message types,
and JSON mode.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from career_compass.providers.config import ProviderConfig


class TaskType(Enum):
    """Generation tasks, used for model routing.

    WHY ENUM: Explicit task types prevent typos. Each adapter's routing
    table maps these values to a concrete model.
    """

    TASK_SUGGESTIONS = "task_suggestions"
    SKILL_SUGGESTIONS = "skill_suggestions"
    EDUCATION_SKILLS = "education_skills"
    INTEREST_SUGGESTIONS = "interest_suggestions"
    PERSONAL_STATEMENT = "personal_statement"
    CAREER_PROFILE = "career_profile"
    CAREER_DETAIL = "career_detail"
    LEARNING_PLAN = "learning_plan"


@dataclass
class LLMMessage:
    """Provider-agnostic message format.

    Attributes:
        role: Message role ("system", "user", "assistant").
        content: Text content.
    """

    role: str
    content: str


@dataclass
class LLMResponse:
    """Provider-agnostic response format.

    Attributes:
        content: Text response (None when the model returned nothing).
        model: Actual model used (for logging).
        input_tokens: Number of input tokens used.
        output_tokens: Number of output tokens generated.
        finish_reason: Why generation stopped ("stop", "max_tokens", ...).
        latency_ms: Response time in milliseconds.
    """

    content: str | None
    model: str
    input_tokens: int
    output_tokens: int
    finish_reason: str
    latency_ms: float


class LLMProvider(ABC):
    """Abstract base class for LLM providers.

    WHY ABSTRACT CLASS:
    - Enforces consistent interface across providers
    - Makes testing via mock implementations trivial
    """

    def __init__(self, config: "ProviderConfig") -> None:
        """Initialize with provider configuration.

        Args:
            config: Provider configuration including API keys and defaults.
        """
        self.config = config

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the provider identifier (e.g., 'gemini', 'openai')."""
        ...

    @abstractmethod
    async def complete(
        self,
        messages: list[LLMMessage],
        task: TaskType,
        max_tokens: int | None = None,
        temperature: float | None = None,
        json_mode: bool = False,
    ) -> LLMResponse:
        """Generate a completion.

        Args:
            messages: Conversation history as list of LLMMessage.
            task: Task type for model routing.
            max_tokens: Override default max tokens.
            temperature: Override default temperature.
            json_mode: If True, enforce JSON output format.

        Returns:
            LLMResponse with the generated content.

        Raises:
            ProviderError: On API failure.

        JSON Mode:
            When json_mode=True:
            - Gemini: Sets response_mime_type="application/json"
            - OpenAI: Sets response_format={"type": "json_object"}
        """
        ...

    @abstractmethod
    def get_model_for_task(self, task: TaskType) -> str:
        """Return the model identifier for a given task.

        Args:
            task: The task type to get the model for.

        Returns:
            Model identifier string (e.g., "gemini-2.5-flash").
        """
        ...
