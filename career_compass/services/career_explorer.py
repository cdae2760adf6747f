"""Career explorer helpers.

Filtering, sorting, and detail loading for the career paths shown after
the wizard. Pure functions over CareerPath except the two loaders, which
delegate to the generation service (and inherit its fallbacks).
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from career_compass.models.profile import ProfileDraft
from career_compass.schemas.career import CareerPath, TagSource

if TYPE_CHECKING:
    from career_compass.services.generation_service import CareerGenerationService

# =============================================================================
# Filtering
# =============================================================================


class FilterCategory(str, Enum):
    """Explorer filter chips and the tag source each one selects."""

    EXPERIENCE = "experience"
    EDUCATION = "education"
    SKILLS = "skill"
    INTERESTS = "interest"


ALL_FILTERS: frozenset[FilterCategory] = frozenset(FilterCategory)

SOURCE_PRIORITY: tuple[TagSource, ...] = ("experience", "education", "skill", "interest")
"""Order in which tag sources are reported for colouring."""


def filter_paths(
    paths: Iterable[CareerPath], active: Iterable[FilterCategory]
) -> list[CareerPath]:
    """Keep the paths tagged with at least one active source.

    All categories active returns every path, untagged ones included.
    No categories active returns nothing.
    """
    active_set = frozenset(active)
    if active_set >= ALL_FILTERS:
        return list(paths)
    if not active_set:
        return []
    sources = {category.value for category in active_set}
    return [
        path
        for path in paths
        if any(tag.source in sources for tag in path.relevance_tags)
    ]


def path_sources(path: CareerPath) -> list[TagSource]:
    """Distinct tag sources on a path, in SOURCE_PRIORITY order."""
    present = {tag.source for tag in path.relevance_tags}
    return [source for source in SOURCE_PRIORITY if source in present]


# =============================================================================
# Sorting
# =============================================================================


class SortField(str, Enum):
    MATCH = "match"
    DEMAND = "demand"
    SALARY = "salary"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


DEMAND_RANK: dict[str, int] = {
    "high": 5,
    "growing": 4,
    "medium": 3,
    "stable": 3,
    "low": 2,
}
"""Market demand labels by strength. Unknown labels rank 0."""

_SALARY_NUMBER = re.compile(r"(\d[\d,]*(?:\.\d+)?)\s*([kKmM])?")


def demand_rank(market_demand: str | None) -> int:
    return DEMAND_RANK.get((market_demand or "").strip().lower(), 0)


def parse_salary_floor(salary_range: str | None) -> float:
    """Lower bound of a salary range such as "$60,000 - $80,000" or "$60k+".

    Returns:
        The first amount found, or 0 when there is none ("N/A", None).
    """
    if not salary_range:
        return 0
    match = _SALARY_NUMBER.search(salary_range)
    if match is None:
        return 0
    amount = float(match.group(1).replace(",", ""))
    suffix = (match.group(2) or "").lower()
    if suffix == "k":
        amount *= 1_000
    elif suffix == "m":
        amount *= 1_000_000
    return amount


def _sort_value(path: CareerPath, field: SortField) -> float:
    if field is SortField.MATCH:
        return path.skill_match_percentage
    if field is SortField.DEMAND:
        return demand_rank(path.market_demand)
    return parse_salary_floor(path.salary_range)


@dataclass(frozen=True)
class SortState:
    """Active sort field and order.

    Attributes:
        field: Field being sorted on.
        order: Direction; descending by default.
    """

    field: SortField = SortField.MATCH
    order: SortOrder = SortOrder.DESC

    def select(self, field: SortField) -> "SortState":
        """State after the user picks a sort field.

        Picking the active field flips the order; a new field starts
        descending.
        """
        if field is self.field:
            flipped = SortOrder.ASC if self.order is SortOrder.DESC else SortOrder.DESC
            return SortState(field=field, order=flipped)
        return SortState(field=field, order=SortOrder.DESC)


def sort_paths(paths: Iterable[CareerPath], state: SortState) -> list[CareerPath]:
    """Sort paths by the state's field. Stable for equal values."""
    return sorted(
        paths,
        key=lambda path: _sort_value(path, state.field),
        reverse=state.order is SortOrder.DESC,
    )


def arrange_paths(
    paths: Iterable[CareerPath],
    active: Iterable[FilterCategory],
    state: SortState,
) -> list[CareerPath]:
    """Filter, then sort, the paths shown by the explorer."""
    return sort_paths(filter_paths(paths, active), state)


# =============================================================================
# Detail loading
# =============================================================================


async def load_path_detail(
    service: "CareerGenerationService", path: CareerPath, profile: ProfileDraft
) -> CareerPath:
    """Path enriched with its detail fields. Already-loaded paths are returned as is."""
    if path.description is not None:
        return path
    return await service.suggest_career_detail(path, profile)


async def learning_plan(service: "CareerGenerationService", skill: str) -> str:
    return await service.suggest_learning_plan(skill.strip())
