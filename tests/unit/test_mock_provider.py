"""Tests for MockLLMProvider."""

import pytest

from career_compass.providers.errors import TransientError
from career_compass.providers.config import ProviderConfig
from career_compass.providers.llm.base import (
    LLMMessage,
    LLMProvider,
    LLMResponse,
    TaskType,
)
from career_compass.providers.llm.mock_adapter import MockLLMProvider

_MESSAGES = [LLMMessage(role="user", content="Hello")]


class TestMockLLMProvider:
    """Tests for scripted responses and call recording."""

    @pytest.mark.asyncio
    async def test_default_response(self):
        """Unconfigured tasks get a placeholder response."""
        mock = MockLLMProvider()
        response = await mock.complete(_MESSAGES, TaskType.LEARNING_PLAN)
        assert response.content == "Mock response for learning_plan"
        assert mock.provider_name == "mock"

    @pytest.mark.asyncio
    async def test_queued_responses_consumed_in_order(self):
        """Queued replies come before the standing one."""
        mock = MockLLMProvider({TaskType.SKILL_SUGGESTIONS: "standing"})
        mock.queue_responses(TaskType.SKILL_SUGGESTIONS, "first", "second")
        contents = [
            (await mock.complete(_MESSAGES, TaskType.SKILL_SUGGESTIONS)).content
            for _ in range(3)
        ]
        assert contents == ["first", "second", "standing"]

    @pytest.mark.asyncio
    async def test_set_error(self):
        """Configured errors are raised, and can be cleared."""
        mock = MockLLMProvider()
        mock.set_error(TaskType.PERSONAL_STATEMENT, TransientError("down"))
        with pytest.raises(TransientError):
            await mock.complete(_MESSAGES, TaskType.PERSONAL_STATEMENT)
        mock.set_error(TaskType.PERSONAL_STATEMENT, None)
        await mock.complete(_MESSAGES, TaskType.PERSONAL_STATEMENT)

    @pytest.mark.asyncio
    async def test_records_calls(self):
        """Calls are recorded with their task and kwargs."""
        mock = MockLLMProvider()
        await mock.complete(_MESSAGES, TaskType.CAREER_PROFILE, json_mode=True)
        mock.assert_called_with_task(TaskType.CAREER_PROFILE)
        (call,) = mock.calls_for(TaskType.CAREER_PROFILE)
        assert call["kwargs"]["json_mode"] is True
        assert mock.last_task is TaskType.CAREER_PROFILE


class TestProviderInterface:
    """Tests for the LLMProvider abstract interface."""

    def test_abstract_methods(self):
        """Providers implement completion and model routing only."""
        assert LLMProvider.__abstractmethods__ == {
            "provider_name",
            "complete",
            "get_model_for_task",
        }

    @pytest.mark.asyncio
    async def test_minimal_provider_is_usable(self):
        """A provider with just complete() and routing can be built and called."""

        class EchoProvider(LLMProvider):
            @property
            def provider_name(self) -> str:
                return "echo"

            async def complete(self, messages, task, **kwargs):
                return LLMResponse(
                    content=messages[-1].content,
                    model=self.get_model_for_task(task),
                    input_tokens=0,
                    output_tokens=0,
                    finish_reason="stop",
                    latency_ms=0.0,
                )

            def get_model_for_task(self, task):
                return "echo-1"

        provider = EchoProvider(ProviderConfig())
        response = await provider.complete(_MESSAGES, TaskType.LEARNING_PLAN)
        assert response.content == "Hello"
        assert response.model == "echo-1"
