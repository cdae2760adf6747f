"""LLM provider module.

LLM provider interface and adapters.
"""

from career_compass.providers.llm.base import (
    LLMMessage,
    LLMProvider,
    LLMResponse,
    TaskType,
)
from career_compass.providers.llm.gemini_adapter import GeminiAdapter
from career_compass.providers.llm.mock_adapter import MockLLMProvider
from career_compass.providers.llm.openai_adapter import OpenAIAdapter

__all__ = [
    # Base types
    "LLMMessage",
    "LLMProvider",
    "LLMResponse",
    "TaskType",
    # Adapters
    "GeminiAdapter",
    "MockLLMProvider",
    "OpenAIAdapter",
]
