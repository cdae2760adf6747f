"""Career generation service.

The single entry point the wizard and the career API use to talk to an
LLM. Every operation degrades to a fixed fallback instead of raising,
except whole-profile generation, which has no sensible fallback and
raises ProfileGenerationError for the caller to surface.

Pipeline per call:
1. Build prompts from sanitized profile data (prompts.generation)
2. Call the provider with retries on transient errors (providers.retry)
3. Strip markdown fences and decode JSON
4. Validate with pydantic (schemas.career)
5. On any failure in 2-4: log and return the fallback
"""

import json
from collections.abc import Iterable

import pydantic
import structlog

from career_compass.core.errors import ProfileGenerationError
from career_compass.models.profile import Experience, ProfileDraft
from career_compass.prompts import generation as prompts
from career_compass.providers import factory
from career_compass.providers.config import ProviderConfig
from career_compass.providers.errors import MalformedResponseError, ProviderError
from career_compass.providers.llm.base import LLMMessage, LLMProvider, TaskType
from career_compass.providers.retry import with_retries
from career_compass.schemas.career import (
    CareerDetail,
    CareerPath,
    CareerProfile,
    StatementResult,
    parse_string_list,
)

logger = structlog.get_logger()

_MD_FENCE = "```"
_MD_FENCE_JSON = "```json"

_LOG_EXCERPT_LENGTH = 200
"""Max characters of exception messages logged."""

# =============================================================================
# Fallbacks
# =============================================================================

FALLBACK_TASKS: tuple[str, ...] = (
    "General Administration",
    "Team Collaboration",
    "Project Planning",
    "Client Management",
    "Data Analysis",
    "Problem Solving",
)

FALLBACK_SKILLS: tuple[str, ...] = (
    "Communication",
    "Teamwork",
    "Problem Solving",
    "Leadership",
    "Data Analysis",
    "Project Management",
    "Adaptability",
    "Creativity",
    "Technical Proficiency",
    "Customer Service",
    "Time Management",
    "Critical Thinking",
)

FALLBACK_EDUCATION_SKILLS: tuple[str, ...] = (
    "Research",
    "Critical Thinking",
    "Analysis",
    "Writing",
    "Presentation Skills",
    "Time Management",
    "Collaboration",
    "Problem Solving",
    "Data Interpretation",
    "Communication",
)

FALLBACK_INTERESTS: tuple[str, ...] = (
    "Continuous Learning",
    "Team Collaboration",
    "Innovation",
    "Work-life Balance",
    "Customer Satisfaction",
    "Problem Solving",
    "Leadership",
    "Efficiency",
    "Data-Driven Decisions",
    "Creative Thinking",
    "Mentoring Others",
    "Autonomy",
    "Social Impact",
    "Fast-Paced Environment",
    "Strategic Planning",
)

FALLBACK_STATEMENT = (
    "Unable to generate a statement at this time. "
    "Please check your inputs and try again."
)

FALLBACK_LEARNING_PLAN = (
    "Unable to generate a learning plan at this time. Please try again later."
)

FALLBACK_DETAIL_DESCRIPTION = (
    "Sorry, we couldn't fetch the full details for this career right now. "
    "Please try again later."
)

_NOT_AVAILABLE = "N/A"

# =============================================================================
# Sampling temperatures
# =============================================================================

TASK_TEMPERATURES: dict[TaskType, float] = {
    TaskType.TASK_SUGGESTIONS: 0.4,
    TaskType.SKILL_SUGGESTIONS: 0.5,
    TaskType.EDUCATION_SKILLS: 0.4,
    TaskType.INTEREST_SUGGESTIONS: 0.8,
    TaskType.PERSONAL_STATEMENT: 0.6,
    TaskType.CAREER_PROFILE: 0.8,
    TaskType.CAREER_DETAIL: 0.5,
    TaskType.LEARNING_PLAN: 0.5,
}
"""Lower for list suggestions that should stay on-topic, higher for the
interest and whole-profile calls that should range widely."""


def _strip_markdown_fences(content: str) -> str:
    """Remove markdown code fences from LLM response."""
    text = content.strip()
    for fence in (_MD_FENCE_JSON, _MD_FENCE):
        if text.startswith(fence):
            text = text[len(fence) :].strip()
            if text.endswith(_MD_FENCE):
                text = text[: -len(_MD_FENCE)].strip()
            break
    return text


def _with_roles(experiences: Iterable[Experience]) -> list[Experience]:
    return [exp for exp in experiences if exp.role.strip()]


class CareerGenerationService:
    """Generates wizard suggestions and career content through an LLM.

    WHY ONE FACADE:
    - The wizard depends on a narrow request/response contract, not on a
      vendor SDK, so tests swap in MockLLMProvider or an AsyncMock
    - Fallback policy lives in one place

    Args:
        provider: LLM provider. Defaults to the factory singleton, resolved
            on first use.
        retry_config: Retry policy. Defaults to ProviderConfig.from_env().
    """

    def __init__(
        self,
        provider: LLMProvider | None = None,
        retry_config: ProviderConfig | None = None,
    ) -> None:
        self._provider = provider
        self._retry_config = retry_config or ProviderConfig.from_env()

    @property
    def provider(self) -> LLMProvider:
        """The provider in use, resolving the factory singleton lazily."""
        if self._provider is None:
            self._provider = factory.get_llm_provider()
        return self._provider

    # -------------------------------------------------------------------------
    # Provider plumbing
    # -------------------------------------------------------------------------

    async def _complete_text(
        self,
        task: TaskType,
        system_prompt: str,
        user_prompt: str,
        *,
        json_mode: bool,
    ) -> str:
        """Call the provider with retries and return non-empty content.

        Raises:
            ProviderError: On provider failure after retries.
            MalformedResponseError: If the provider returned no content.
        """
        messages = [
            LLMMessage(role="system", content=system_prompt),
            LLMMessage(role="user", content=user_prompt),
        ]

        async def _call():
            return await self.provider.complete(
                messages=messages,
                task=task,
                temperature=TASK_TEMPERATURES[task],
                json_mode=json_mode,
            )

        response = await with_retries(_call, self._retry_config)
        if not response.content or not response.content.strip():
            raise MalformedResponseError(f"Empty response for {task.value}")
        return response.content

    async def _complete_json(
        self, task: TaskType, system_prompt: str, user_prompt: str
    ) -> object:
        """Call the provider in JSON mode and decode the result.

        Raises:
            ProviderError: On provider failure or undecodable content.
        """
        content = await self._complete_text(
            task, system_prompt, user_prompt, json_mode=True
        )
        try:
            return json.loads(_strip_markdown_fences(content))
        except json.JSONDecodeError as exc:
            raise MalformedResponseError(
                f"Invalid JSON for {task.value}: {exc}"
            ) from exc

    async def _suggest_list(
        self,
        task: TaskType,
        user_prompt: str,
        fallback: tuple[str, ...],
    ) -> list[str]:
        try:
            data = await self._complete_json(
                task, prompts.SUGGESTION_SYSTEM_PROMPT, user_prompt
            )
            return parse_string_list(data)
        except (ProviderError, pydantic.ValidationError) as exc:
            logger.warning(
                "suggestion_generation_failed",
                task=task.value,
                error_type=type(exc).__name__,
                error=str(exc)[:_LOG_EXCERPT_LENGTH],
            )
            return list(fallback)

    # -------------------------------------------------------------------------
    # Wizard suggestions
    # -------------------------------------------------------------------------

    async def suggest_tasks(
        self,
        experiences: Iterable[Experience],
        excluding: Iterable[str] = (),
    ) -> list[str]:
        """Suggest tasks for the given experiences.

        Args:
            experiences: Experiences to synthesise from. Placeholders are ignored.
            excluding: Suggestions the user has already seen.

        Returns:
            Task suggestions, or FALLBACK_TASKS on failure.
        """
        prompt = prompts.build_tasks_prompt(_with_roles(experiences), list(excluding))
        return await self._suggest_list(TaskType.TASK_SUGGESTIONS, prompt, FALLBACK_TASKS)

    async def suggest_skills(
        self,
        experiences: Iterable[Experience],
        excluding: Iterable[str] = (),
    ) -> list[str]:
        """Suggest skills for the given experiences, or FALLBACK_SKILLS."""
        prompt = prompts.build_skills_prompt(_with_roles(experiences), list(excluding))
        return await self._suggest_list(
            TaskType.SKILL_SUGGESTIONS, prompt, FALLBACK_SKILLS
        )

    async def suggest_interests(
        self,
        experiences: Iterable[Experience],
        excluding: Iterable[str] = (),
    ) -> list[str]:
        """Suggest interests for the given experiences, or FALLBACK_INTERESTS."""
        prompt = prompts.build_interests_prompt(
            _with_roles(experiences), list(excluding)
        )
        return await self._suggest_list(
            TaskType.INTEREST_SUGGESTIONS, prompt, FALLBACK_INTERESTS
        )

    async def suggest_skills_for_education(self, level: str, subject: str) -> list[str]:
        """Suggest skills implied by an education entry.

        Returns:
            Skill suggestions, or FALLBACK_EDUCATION_SKILLS on failure.
        """
        prompt = prompts.build_education_skills_prompt(level, subject)
        return await self._suggest_list(
            TaskType.EDUCATION_SKILLS, prompt, FALLBACK_EDUCATION_SKILLS
        )

    async def suggest_statement(self, profile: ProfileDraft) -> str:
        """Generate the review-step personal statement.

        Returns:
            A 2-3 sentence first-person statement, or FALLBACK_STATEMENT.
        """
        try:
            data = await self._complete_json(
                TaskType.PERSONAL_STATEMENT,
                prompts.STATEMENT_SYSTEM_PROMPT,
                prompts.build_statement_prompt(profile),
            )
            return StatementResult.model_validate(data).statement.strip()
        except (ProviderError, pydantic.ValidationError) as exc:
            logger.warning(
                "statement_generation_failed",
                error_type=type(exc).__name__,
                error=str(exc)[:_LOG_EXCERPT_LENGTH],
            )
            return FALLBACK_STATEMENT

    # -------------------------------------------------------------------------
    # Career exploration
    # -------------------------------------------------------------------------

    async def suggest_career_profile(self, profile: ProfileDraft) -> CareerProfile:
        """Generate the identity statement and candidate career paths.

        Args:
            profile: The finalized profile.

        Returns:
            CareerProfile with identity and paths.

        Raises:
            ProfileGenerationError: If generation or validation fails.
        """
        try:
            data = await self._complete_json(
                TaskType.CAREER_PROFILE,
                prompts.CAREER_PROFILE_SYSTEM_PROMPT,
                prompts.build_career_profile_prompt(profile),
            )
            result = CareerProfile.model_validate(data)
        except (ProviderError, pydantic.ValidationError) as exc:
            logger.warning(
                "career_profile_generation_failed",
                error_type=type(exc).__name__,
                error=str(exc)[:_LOG_EXCERPT_LENGTH],
            )
            raise ProfileGenerationError() from exc

        logger.info("career_profile_generated", path_count=len(result.paths))
        return result

    async def suggest_career_detail(
        self, base_path: CareerPath, profile: ProfileDraft
    ) -> CareerPath:
        """Enrich a path with description, skills, salary, and requirements.

        Args:
            base_path: Path from the career profile.
            profile: The profile the path was generated for.

        Returns:
            A copy of base_path with the detail fields filled. On failure
            the detail fields hold the fallback message and "N/A" values.
        """
        try:
            data = await self._complete_json(
                TaskType.CAREER_DETAIL,
                prompts.CAREER_DETAIL_SYSTEM_PROMPT,
                prompts.build_career_detail_prompt(
                    base_path.title, base_path.industry, profile
                ),
            )
            detail = CareerDetail.model_validate(data)
        except (ProviderError, pydantic.ValidationError) as exc:
            logger.warning(
                "career_detail_generation_failed",
                error_type=type(exc).__name__,
                error=str(exc)[:_LOG_EXCERPT_LENGTH],
            )
            return base_path.model_copy(
                update={
                    "description": FALLBACK_DETAIL_DESCRIPTION,
                    "required_skills": [],
                    "salary_range": _NOT_AVAILABLE,
                    "certifications": [],
                    "experience_needed": _NOT_AVAILABLE,
                }
            )

        update = detail.model_dump(exclude_none=True)
        return base_path.model_copy(update=update)

    async def suggest_learning_plan(self, skill: str) -> str:
        """Generate a one-month Markdown learning plan for a skill.

        Returns:
            Markdown text, or FALLBACK_LEARNING_PLAN on failure.
        """
        try:
            return await self._complete_text(
                TaskType.LEARNING_PLAN,
                prompts.LEARNING_PLAN_SYSTEM_PROMPT,
                prompts.build_learning_plan_prompt(skill),
                json_mode=False,
            )
        except ProviderError as exc:
            logger.warning(
                "learning_plan_generation_failed",
                error_type=type(exc).__name__,
                error=str(exc)[:_LOG_EXCERPT_LENGTH],
            )
            return FALLBACK_LEARNING_PLAN
