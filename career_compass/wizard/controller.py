"""Wizard controller.

Orchestrates the profile wizard: applies user edits to the profile store,
gates forward navigation on the validation rules, fetches suggestions
when a step is entered, commits the add-experience sub-flow, stages
education entries, keeps the review-step personal statement current, and
hands the finished profile to the caller.

Concurrency model:
- Actions are synchronous. Generation runs in asyncio tasks scheduled on
  the running loop; the controller holds strong references to them.
- ``await settle()`` waits until no generation task is outstanding.
- Nothing is cancelled. A result is dropped if its cache was reset (or
  re-keyed) while it was in flight, or if the controller was closed.
"""

import asyncio
from collections.abc import Awaitable, Callable, Coroutine
from typing import Any

import structlog

from career_compass.core.errors import InvalidStateError
from career_compass.models.profile import Experience, ProfileDraft
from career_compass.services.comma_set import merge_for_display
from career_compass.services.generation_service import CareerGenerationService
from career_compass.wizard.position import (
    Direction,
    PrimaryPosition,
    PrimaryStep,
    SubFlowPosition,
    SubFlowStep,
    WizardMode,
    WizardPosition,
)
from career_compass.wizard.profile_store import EducationScratch, ProfileStore
from career_compass.wizard.sequencer import Signal, StepSequencer, Transition
from career_compass.wizard.suggestions import (
    GenerationKey,
    SuggestionCache,
    SuggestionCategory,
    SuggestionState,
    generation_key,
)
from career_compass.wizard.validation import is_step_valid

logger = structlog.get_logger()

_STEP_CATEGORIES: dict[PrimaryStep, SuggestionCategory] = {
    PrimaryStep.TASKS: SuggestionCategory.TASKS,
    PrimaryStep.SKILLS: SuggestionCategory.SKILLS,
    PrimaryStep.INTERESTS: SuggestionCategory.INTERESTS,
}

SuggestionFetcher = Callable[[list[Experience], tuple[str, ...]], Awaitable[list[str]]]


class WizardController:
    """Drives one interactive profile wizard.

    Args:
        service: Generation facade used for suggestions and the statement.
        initial: Previously completed profile to hydrate from.
        resume_at_review: Start on the review step instead of the role step.
        on_complete: Called once with the finalized profile.
        on_step_position_change: Called with the new index whenever the
            primary step changes.
        on_exit: Called when the user retreats from the first step.
        auto_statement: Regenerate the statement when review data changes.

    Note:
        Constructing with resume_at_review and a non-empty profile starts
        statement generation, which needs a running event loop.
    """

    def __init__(
        self,
        service: CareerGenerationService,
        *,
        initial: ProfileDraft | None = None,
        resume_at_review: bool = False,
        on_complete: Callable[[ProfileDraft], None] | None = None,
        on_step_position_change: Callable[[int], None] | None = None,
        on_exit: Callable[[], None] | None = None,
        auto_statement: bool = True,
    ) -> None:
        self._service = service
        self._store = ProfileStore(initial)
        start = PrimaryStep.REVIEW if resume_at_review else PrimaryStep.ROLE
        self._sequencer = StepSequencer(PrimaryPosition(start))
        self._cache = SuggestionCache()
        self._on_complete = on_complete
        self._on_step_position_change = on_step_position_change
        self._on_exit = on_exit
        self._auto_statement = auto_statement

        self._pending: set[asyncio.Task[Any]] = set()
        self._finalized = False
        self._closed = False

        self._statement: str | None = None
        self._statement_loading = False
        self._statement_dirty = False
        self._statement_source: ProfileDraft | None = None

        self._fetchers: dict[SuggestionCategory, SuggestionFetcher] = {
            SuggestionCategory.TASKS: service.suggest_tasks,
            SuggestionCategory.SKILLS: service.suggest_skills,
            SuggestionCategory.INTERESTS: service.suggest_interests,
            SuggestionCategory.SUB_FLOW_TASKS: service.suggest_tasks,
        }

        self._enter_current_step()

    # =========================================================================
    # Read-only state
    # =========================================================================

    @property
    def position(self) -> WizardPosition:
        return self._sequencer.position

    @property
    def mode(self) -> WizardMode:
        return self._sequencer.mode

    @property
    def direction(self) -> Direction:
        return self._sequencer.direction

    @property
    def primary_step(self) -> PrimaryStep:
        return self._sequencer.primary_step

    @property
    def profile(self) -> ProfileDraft:
        """The live draft. Treat as read-only; edit through the actions."""
        return self._store.draft

    @property
    def new_experience(self) -> Experience:
        return self._store.new_experience

    @property
    def education_scratch(self) -> EducationScratch:
        return self._store.education

    @property
    def statement(self) -> str | None:
        return self._statement

    @property
    def is_statement_loading(self) -> bool:
        return self._statement_loading

    @property
    def is_finalized(self) -> bool:
        return self._finalized

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def can_advance(self) -> bool:
        """Whether the current step passes its validation rule."""
        return is_step_valid(
            self._sequencer.position, self._store.draft, self._store.new_experience
        )

    def suggestions(self, category: SuggestionCategory) -> SuggestionState:
        return self._cache[category]

    def display_list(self, category: SuggestionCategory) -> list[str]:
        """Suggestions for a category followed by selections they lack."""
        return merge_for_display(
            self._cache[category].items, self._selected_for(category)
        )

    def _selected_for(self, category: SuggestionCategory) -> str:
        draft = self._store.draft
        if category is SuggestionCategory.TASKS:
            return draft.experiences[0].tasks if draft.experiences else ""
        if category is SuggestionCategory.SKILLS:
            return draft.skills
        if category is SuggestionCategory.INTERESTS:
            return draft.interests
        return self._store.new_experience.tasks

    # =========================================================================
    # Navigation
    # =========================================================================

    def advance(self) -> Transition | None:
        """Move forward if the current step is valid.

        Leaving the education step stages the composed education entry.
        At the review step this finalizes the wizard; at the last sub-flow
        step it commits the new experience.

        Returns:
            The transition, or None when validation blocked it.

        Raises:
            InvalidStateError: If the wizard is finalized or closed.
        """
        self._ensure_active()
        if not self.can_advance:
            return None

        previous = self._sequencer.position
        if isinstance(previous, PrimaryPosition) and previous.step == PrimaryStep.EDUCATION:
            self._store.stage_education_entry()

        transition = self._sequencer.advance()
        if transition.signal is Signal.FINALIZE:
            self._finalize()
        elif transition.signal is Signal.COMMIT_SUB_FLOW:
            self._commit_sub_flow()
        else:
            self._after_move(previous)
        return transition

    def retreat(self) -> Transition:
        """Move back one step, leave the sub-flow, or exit the wizard.

        Raises:
            InvalidStateError: If the wizard is finalized or closed.
        """
        self._ensure_active()
        previous = self._sequencer.position
        transition = self._sequencer.retreat()
        if transition.signal is Signal.EXIT:
            logger.info("wizard_exit_requested")
            if self._on_exit is not None:
                self._on_exit()
        elif transition.signal is Signal.CANCEL_SUB_FLOW:
            self._store.reset_new_experience()
            self._cache.reset(SuggestionCategory.SUB_FLOW_TASKS)
            self._enter_current_step()
        else:
            self._after_move(previous)
        return transition

    def enter_sub_flow(self) -> Transition:
        """Open the add-experience sub-flow with a fresh scratch experience.

        Raises:
            InvalidStateError: If finalized, closed, or already in the sub-flow.
        """
        self._ensure_active()
        transition = self._sequencer.enter_sub_flow()
        self._store.reset_new_experience()
        self._cache.reset(SuggestionCategory.SUB_FLOW_TASKS)
        return transition

    def jump_to(self, step: int) -> Transition:
        """Go directly to a primary step (review-step "edit" actions).

        Raises:
            InvalidStateError: If finalized, closed, or in the sub-flow.
            ValueError: If step is outside 0..6.
        """
        self._ensure_active()
        previous = self._sequencer.position
        transition = self._sequencer.jump_to(step)
        self._after_move(previous)
        return transition

    def add_education(self) -> Transition:
        """Stage another education entry: clear the scratch and jump there."""
        self._ensure_active()
        self._store.clear_education_scratch()
        return self.jump_to(PrimaryStep.EDUCATION)

    def regenerate(self) -> None:
        """Fetch more suggestions for the current step, or a new statement.

        New suggestions are unioned into the existing list; nothing is
        removed. Suppressed while a fetch for the category is outstanding.
        """
        self._ensure_active()
        position = self._sequencer.position
        if isinstance(position, PrimaryPosition) and position.step == PrimaryStep.REVIEW:
            self._request_statement(refresh=True)
            return

        category = self._category_for(position)
        if category is None:
            return
        state = self._cache[category]
        if state.is_loading:
            logger.debug("suggestion_regenerate_suppressed", category=category.value)
            return
        experiences = self._experiences_for(category)
        key = generation_key(experiences)
        if not key:
            return
        if state.needs_fetch(key):
            state.reset()
        self._start_fetch(category, key, experiences, tuple(state.items))

    # =========================================================================
    # Profile edits
    # =========================================================================

    def set_role(self, role: str) -> None:
        self._edit(self._store.set_role, role)

    def set_industry(self, industry: str) -> None:
        self._edit(self._store.set_industry, industry)

    def toggle_task(self, task: str) -> None:
        self._edit(self._store.toggle_task, task)

    def add_custom_task(self, text: str) -> None:
        self._edit(self._store.add_custom_task, text)

    def toggle_skill(self, skill: str) -> None:
        self._edit(self._store.toggle_skill, skill)

    def add_custom_skill(self, text: str) -> None:
        self._edit(self._store.add_custom_skill, text)

    def remove_skill(self, skill: str) -> None:
        self._ensure_on_review()
        self._edit(self._store.remove_skill, skill)

    def toggle_interest(self, interest: str) -> None:
        self._edit(self._store.toggle_interest, interest)

    def add_custom_interest(self, text: str) -> None:
        self._edit(self._store.add_custom_interest, text)

    def remove_interest(self, interest: str) -> None:
        self._ensure_on_review()
        self._edit(self._store.remove_interest, interest)

    def remove_education(self, index: int) -> None:
        """Remove an education entry by position.

        Raises:
            InvalidStateError: If not on the review step.
            NotFoundError: If index is out of range.
        """
        self._ensure_on_review()
        self._edit(self._store.remove_education, index)

    def remove_experience(self, index: int) -> None:
        """Remove an experience and forget suggestions derived from it.

        Raises:
            InvalidStateError: If not on the review step.
            NotFoundError: If index is out of range.
        """
        self._ensure_on_review()
        self._store.remove_experience(index)
        self._cache.reset_primary()
        self._profile_changed()

    def set_new_role(self, role: str) -> None:
        self._edit_scratch(self._store.set_new_role, role)

    def set_new_industry(self, industry: str) -> None:
        self._edit_scratch(self._store.set_new_industry, industry)

    def toggle_new_task(self, task: str) -> None:
        self._edit_scratch(self._store.toggle_new_task, task)

    def add_custom_new_task(self, text: str) -> None:
        self._edit_scratch(self._store.add_custom_new_task, text)

    def choose_education_level(self, level: str) -> None:
        self._edit_scratch(self._store.choose_education_level, level)

    def set_custom_education_level(self, level: str) -> None:
        self._edit_scratch(self._store.set_custom_education_level, level)

    def set_education_subject(self, subject: str) -> None:
        self._edit_scratch(self._store.set_education_subject, subject)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def close(self) -> None:
        """Stop accepting results. Outstanding requests finish but are ignored."""
        if not self._closed:
            self._closed = True
            logger.info("wizard_closed", pending=len(self._pending))

    async def settle(self) -> None:
        """Wait until no generation task is outstanding.

        Re-checks after each round, since a finishing statement request
        can schedule its own follow-up.
        """
        while self._pending:
            await asyncio.gather(*list(self._pending))

    # =========================================================================
    # Internals
    # =========================================================================

    def _ensure_active(self) -> None:
        if self._closed:
            raise InvalidStateError("This wizard session has been closed")
        if self._finalized:
            raise InvalidStateError("This profile has already been completed")

    def _ensure_on_review(self) -> None:
        """Removals are only offered on the review step."""
        self._ensure_active()
        position = self._sequencer.position
        if not (
            isinstance(position, PrimaryPosition) and position.step == PrimaryStep.REVIEW
        ):
            raise InvalidStateError("Entries can only be removed on the review step")

    def _edit(self, action: Callable[..., Any], *args: Any) -> None:
        self._ensure_active()
        action(*args)
        self._profile_changed()

    def _edit_scratch(self, action: Callable[..., Any], *args: Any) -> None:
        self._ensure_active()
        action(*args)

    def _spawn(self, coro: Coroutine[Any, Any, None]) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    def _after_move(self, previous: WizardPosition) -> None:
        current = self._sequencer.position
        if (
            isinstance(current, PrimaryPosition)
            and isinstance(previous, PrimaryPosition)
            and current.step != previous.step
            and self._on_step_position_change is not None
        ):
            self._on_step_position_change(int(current.step))
        self._enter_current_step()

    def _enter_current_step(self) -> None:
        position = self._sequencer.position
        if isinstance(position, PrimaryPosition) and position.step == PrimaryStep.REVIEW:
            self._request_statement()
            return
        category = self._category_for(position)
        if category is not None:
            self._fetch_if_stale(category)

    @staticmethod
    def _category_for(position: WizardPosition) -> SuggestionCategory | None:
        if isinstance(position, SubFlowPosition):
            if position.step == SubFlowStep.TASKS:
                return SuggestionCategory.SUB_FLOW_TASKS
            return None
        return _STEP_CATEGORIES.get(position.step)

    def _experiences_for(self, category: SuggestionCategory) -> list[Experience]:
        if category is SuggestionCategory.SUB_FLOW_TASKS:
            return [self._store.new_experience]
        return list(self._store.draft.experiences)

    def _fetch_if_stale(self, category: SuggestionCategory) -> None:
        experiences = self._experiences_for(category)
        key = generation_key(experiences)
        if not key:
            return
        state = self._cache[category]
        if not state.needs_fetch(key):
            return
        state.reset()
        self._start_fetch(category, key, experiences, ())

    def _start_fetch(
        self,
        category: SuggestionCategory,
        key: GenerationKey,
        experiences: list[Experience],
        excluding: tuple[str, ...],
    ) -> None:
        ticket = self._cache[category].begin(key)
        logger.debug(
            "suggestion_fetch_started",
            category=category.value,
            regenerate=bool(excluding),
        )
        self._spawn(self._fetch(category, ticket, experiences, excluding))

    async def _fetch(
        self,
        category: SuggestionCategory,
        ticket: int,
        experiences: list[Experience],
        excluding: tuple[str, ...],
    ) -> None:
        state = self._cache[category]
        try:
            items = await self._fetchers[category](experiences, excluding)
        finally:
            state.finish(ticket)

        if self._closed or not state.accept(ticket, items):
            logger.debug("suggestion_result_discarded", category=category.value)

    def _profile_changed(self) -> None:
        position = self._sequencer.position
        if (
            self._auto_statement
            and isinstance(position, PrimaryPosition)
            and position.step == PrimaryStep.REVIEW
        ):
            self._request_statement()

    def _request_statement(self, *, refresh: bool = False) -> None:
        """Start a statement request, or mark the running one dirty.

        At most one request is in flight. Changes made while it runs set
        the dirty flag, and the runner goes around once more with the
        latest profile.

        Args:
            refresh: Generate even if the statement matches the profile.
        """
        if not self._store.draft.has_content():
            return
        if not refresh and self._statement_source == self._store.finalized_profile():
            return
        if self._statement_loading:
            self._statement_dirty = True
            return
        self._statement_loading = True
        self._spawn(self._run_statement())

    async def _run_statement(self) -> None:
        try:
            while True:
                self._statement_dirty = False
                profile = self._store.finalized_profile()
                statement = await self._service.suggest_statement(profile)
                if self._closed:
                    return
                self._statement = statement
                self._statement_source = profile
                if not self._statement_dirty:
                    return
        finally:
            self._statement_loading = False

    def _commit_sub_flow(self) -> None:
        appended = self._store.commit_new_experience()
        self._cache.reset_primary()
        self._cache.reset(SuggestionCategory.SUB_FLOW_TASKS)
        if appended:
            logger.info(
                "experience_committed",
                experience_count=len(self._store.draft.experiences),
            )
        self._enter_current_step()

    def _finalize(self) -> None:
        self._finalized = True
        profile = self._store.finalized_profile()
        logger.info(
            "wizard_finalized",
            experience_count=len(profile.experiences),
            education_count=len(profile.education),
        )
        if self._on_complete is not None:
            self._on_complete(profile)
