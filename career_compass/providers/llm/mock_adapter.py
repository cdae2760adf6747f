"""Mock LLM provider for testing.

MockLLMProvider lets the generation service and the wizard be unit tested
without hitting real LLM APIs.
"""

from collections import deque
from typing import Any

from career_compass.providers.llm.base import (
    LLMMessage,
    LLMProvider,
    LLMResponse,
    TaskType,
)


class MockLLMProvider(LLMProvider):
    """Mock provider for testing.

    WHY MOCK:
    - Unit tests shouldn't hit real APIs (cost, speed, flakiness)
    - Enables deterministic testing
    - Can simulate error conditions

    Attributes:
        responses: Pre-configured responses keyed by TaskType.
        queued: One-shot responses consumed before falling back to responses.
        errors: Exceptions raised instead of answering, keyed by TaskType.
        calls: Record of all method invocations for test assertions.
        last_task: The most recent TaskType used in a call.
    """

    @property
    def provider_name(self) -> str:
        """Return 'mock' for testing."""
        return "mock"

    def __init__(self, responses: dict[TaskType, str] | None = None) -> None:
        """Initialize mock provider with optional pre-configured responses.

        Args:
            responses: Dict mapping TaskType to response content. If not provided
                for a task, returns a default "Mock response for {task}" string.
        """
        # No config needed for the mock
        self.responses: dict[TaskType, str] = dict(responses) if responses else {}
        self.queued: dict[TaskType, deque[str]] = {}
        self.errors: dict[TaskType, Exception] = {}
        self.calls: list[dict[str, Any]] = []
        self.last_task: TaskType | None = None

    def set_response(self, task: TaskType, content: str) -> None:
        """Set or update the standing response for a specific task type."""
        self.responses[task] = content

    def queue_responses(self, task: TaskType, *contents: str) -> None:
        """Queue one-shot responses returned in order before the standing one.

        Args:
            task: The TaskType to configure.
            *contents: Response contents, consumed one per call.
        """
        self.queued.setdefault(task, deque()).extend(contents)

    def set_error(self, task: TaskType, error: Exception | None) -> None:
        """Make calls for ``task`` raise ``error`` (None clears it)."""
        if error is None:
            self.errors.pop(task, None)
        else:
            self.errors[task] = error

    def _content_for(self, task: TaskType) -> str:
        pending = self.queued.get(task)
        if pending:
            return pending.popleft()
        return self.responses.get(task, f"Mock response for {task.value}")

    async def complete(
        self,
        messages: list[LLMMessage],
        task: TaskType,
        max_tokens: int | None = None,
        temperature: float | None = None,
        json_mode: bool = False,
    ) -> LLMResponse:
        """Generate a mock completion.

        Records the call for test assertions and returns a pre-configured
        or default response.

        Raises:
            Exception: The error configured with set_error() for this task.
        """
        self.calls.append(
            {
                "method": "complete",
                "messages": messages,
                "task": task,
                "kwargs": {
                    "max_tokens": max_tokens,
                    "temperature": temperature,
                    "json_mode": json_mode,
                },
            }
        )
        self.last_task = task

        if task in self.errors:
            raise self.errors[task]

        return LLMResponse(
            content=self._content_for(task),
            model="mock-model",
            input_tokens=100,
            output_tokens=50,
            finish_reason="stop",
            latency_ms=10,
        )


    def get_model_for_task(self, _task: TaskType) -> str:
        """Return 'mock-model' for any task."""
        return "mock-model"

    def calls_for(self, task: TaskType) -> list[dict[str, Any]]:
        """Return the recorded calls made for ``task``."""
        return [c for c in self.calls if c["task"] == task]

    def assert_called_with_task(self, task: TaskType) -> None:
        """Test helper to verify a task was called.

        Raises:
            AssertionError: If the task was not called.
        """
        tasks_called = [c["task"] for c in self.calls]
        assert task in tasks_called, f"Expected {task}, got {tasks_called}"
