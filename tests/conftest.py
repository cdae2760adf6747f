import json
from collections.abc import AsyncGenerator, Iterator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from career_compass.main import create_app
from career_compass.providers import factory
from career_compass.providers.config import ProviderConfig
from career_compass.providers.llm.base import TaskType
from career_compass.providers.llm.mock_adapter import MockLLMProvider
from career_compass.services.generation_service import CareerGenerationService

CAREER_PROFILE_JSON = json.dumps(
    {
        "identity": {
            "statement": "You are a people-focused educator who turns complexity into clarity.",
            "transferableSkills": ["Communication", "Planning"],
        },
        "paths": [
            {
                "title": "Instructional Designer",
                "skillMatchPercentage": 85,
                "marketDemand": "High",
                "industry": "Education Technology",
                "relevanceTags": [
                    {"tag": "Teacher", "source": "experience"},
                    {"tag": "Curriculum Design", "source": "skill"},
                ],
            },
            {
                "title": "Corporate Trainer",
                "skillMatchPercentage": 70,
                "marketDemand": "Stable",
                "industry": "Human Resources",
                "relevanceTags": [{"tag": "Mentoring", "source": "interest"}],
            },
        ],
    }
)


@pytest.fixture
def mock_llm() -> Iterator[MockLLMProvider]:
    """Fixture that provides mock LLM and resets after test.

    Provides MockLLMProvider with pre-configured responses for the wizard
    and career tasks. Automatically injects into factory singleton and
    resets after test.

    Yields:
        MockLLMProvider instance with pre-configured responses.
    """
    mock = MockLLMProvider(
        {
            TaskType.TASK_SUGGESTIONS: '["Lesson Planning", "Grading", "Parent Meetings"]',
            TaskType.SKILL_SUGGESTIONS: '["Communication", "Public Speaking", "Curriculum Design"]',
            TaskType.INTEREST_SUGGESTIONS: '["Education", "Mentoring"]',
            TaskType.EDUCATION_SKILLS: '["Research", "Statistics"]',
            TaskType.PERSONAL_STATEMENT: '{"statement": "I help people learn."}',
            TaskType.CAREER_PROFILE: CAREER_PROFILE_JSON,
            TaskType.CAREER_DETAIL: json.dumps(
                {
                    "description": "Designs learning experiences.",
                    "requiredSkills": ["Storyboarding", "Articulate 360"],
                    "salaryRange": "$65,000 - $95,000",
                    "certifications": ["ATD CPTD"],
                    "experienceNeeded": "2+ years in teaching or training",
                }
            ),
            TaskType.LEARNING_PLAN: "## Week 1\n- Read the basics",
        }
    )

    # Inject mock into factory singleton
    factory._llm_provider = mock

    yield mock

    # Reset after test
    factory.reset_providers()


@pytest.fixture
def no_retry_config() -> ProviderConfig:
    """Retry policy without retries, so failure paths never sleep."""
    return ProviderConfig(max_retries=0)


@pytest.fixture
def generation_service(
    mock_llm: MockLLMProvider, no_retry_config: ProviderConfig
) -> CareerGenerationService:
    """Generation service backed by the mock provider."""
    return CareerGenerationService(provider=mock_llm, retry_config=no_retry_config)


# =============================================================================
# API Test Fixtures
# =============================================================================


@pytest.fixture
def app(generation_service: CareerGenerationService):
    """Create test application instance backed by the mock provider."""
    return create_app(generation_service=generation_service)


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client for testing."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
