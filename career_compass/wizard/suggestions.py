"""Suggestion cache.

Per-category suggestion lists with the generation key they were fetched
for. Each category carries an epoch counter: every reset bumps it, and a
fetch result is accepted only if the epoch it started under is still
current. That discards results for a cache that was cleared, or re-keyed,
while the request was in flight.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from career_compass.models.profile import Experience

GenerationKey = frozenset[tuple[str, str]]
"""Set of (role, industry) pairs a fetch was made for."""


class SuggestionCategory(str, Enum):
    """Suggestion lists kept by the wizard."""

    TASKS = "tasks"
    SKILLS = "skills"
    INTERESTS = "interests"
    SUB_FLOW_TASKS = "sub_flow_tasks"


PRIMARY_CATEGORIES: tuple[SuggestionCategory, ...] = (
    SuggestionCategory.TASKS,
    SuggestionCategory.SKILLS,
    SuggestionCategory.INTERESTS,
)


def generation_key(experiences: Iterable[Experience]) -> GenerationKey:
    """Key for the experiences that have a role.

    Roles and industries are trimmed, so whitespace-only edits do not
    trigger a refetch.
    """
    return frozenset(
        (exp.role.strip(), exp.industry.strip())
        for exp in experiences
        if exp.role.strip()
    )


@dataclass
class SuggestionState:
    """Suggestions for one category.

    Attributes:
        items: Suggestions in first-appearance order, no duplicates.
        is_loading: A fetch for this category is outstanding.
        key: Generation key of the last fetch started, None if never fetched.
        epoch: Bumped on every reset.
    """

    items: list[str] = field(default_factory=list)
    is_loading: bool = False
    key: GenerationKey | None = None
    epoch: int = 0

    def reset(self) -> None:
        """Forget items and key. Outstanding results will be discarded."""
        self.items = []
        self.is_loading = False
        self.key = None
        self.epoch += 1

    def needs_fetch(self, key: GenerationKey) -> bool:
        """True when no fetch has been made for ``key`` since the last reset."""
        return self.key != key

    def begin(self, key: GenerationKey) -> int:
        """Mark a fetch as started for ``key``.

        Returns:
            Ticket to pass to accept() and finish().
        """
        self.key = key
        self.is_loading = True
        return self.epoch

    def accept(self, ticket: int, items: Iterable[str]) -> bool:
        """Union a fetch result into the current items.

        Args:
            ticket: Value returned by begin().
            items: Fetched suggestions.

        Returns:
            False if the result is stale and was discarded.
        """
        if ticket != self.epoch:
            return False
        self.items = list(dict.fromkeys([*self.items, *items]))
        return True

    def finish(self, ticket: int) -> None:
        """Clear the loading flag if the fetch is still current."""
        if ticket == self.epoch:
            self.is_loading = False


class SuggestionCache:
    """All suggestion categories of one wizard."""

    def __init__(self) -> None:
        self._states = {category: SuggestionState() for category in SuggestionCategory}

    def __getitem__(self, category: SuggestionCategory) -> SuggestionState:
        return self._states[category]

    def reset(self, *categories: SuggestionCategory) -> None:
        """Reset the given categories."""
        for category in categories:
            self._states[category].reset()

    def reset_primary(self) -> None:
        """Reset tasks, skills, and interests."""
        self.reset(*PRIMARY_CATEGORIES)
