"""Tests for career explorer filtering, sorting, and detail loading."""

from unittest.mock import AsyncMock

import pytest

from career_compass.models.profile import ProfileDraft
from career_compass.schemas.career import CareerPath, RelevanceTag
from career_compass.services.career_explorer import (
    ALL_FILTERS,
    FilterCategory,
    SortField,
    SortOrder,
    SortState,
    arrange_paths,
    demand_rank,
    filter_paths,
    learning_plan,
    load_path_detail,
    parse_salary_floor,
    path_sources,
    sort_paths,
)


def _path(title, match=50, demand="Medium", salary=None, sources=()):
    return CareerPath(
        title=title,
        skill_match_percentage=match,
        market_demand=demand,
        industry="Any",
        relevance_tags=[RelevanceTag(tag=title, source=s) for s in sources],
        salary_range=salary,
    )


@pytest.fixture
def paths():
    return [
        _path("Designer", match=85, demand="High", salary="$65,000 - $95,000",
              sources=("skill", "experience")),
        _path("Trainer", match=70, demand="stable", salary="£40k - £55k",
              sources=("interest",)),
        _path("Analyst", match=90, demand="Low", salary="N/A", sources=()),
        _path("Tutor", match=60, demand="Growing", sources=("education",)),
    ]


class TestFilter:
    """Tests for filter_paths()."""

    def test_all_active_returns_everything(self, paths):
        """Untagged paths are kept when every filter is on."""
        assert filter_paths(paths, ALL_FILTERS) == paths

    def test_none_active_returns_nothing(self, paths):
        """No active filter shows no paths."""
        assert filter_paths(paths, []) == []

    def test_any_active_source_matches(self, paths):
        """A path matches when any of its tag sources is active."""
        result = filter_paths(paths, [FilterCategory.SKILLS, FilterCategory.EDUCATION])
        assert [p.title for p in result] == ["Designer", "Tutor"]

    def test_path_sources_in_priority_order(self, paths):
        """Sources are reported experience, education, skill, interest."""
        assert path_sources(paths[0]) == ["experience", "skill"]
        assert path_sources(paths[2]) == []


class TestSort:
    """Tests for sort_paths() and SortState."""

    def test_default_is_match_descending(self, paths):
        """Best match first by default."""
        assert [p.title for p in sort_paths(paths, SortState())] == [
            "Analyst",
            "Designer",
            "Trainer",
            "Tutor",
        ]

    def test_demand_ranking(self, paths):
        """Demand sorts High > Growing > Stable > Low, case-insensitively."""
        state = SortState(field=SortField.DEMAND)
        assert [p.title for p in sort_paths(paths, state)] == [
            "Designer",
            "Tutor",
            "Trainer",
            "Analyst",
        ]
        assert demand_rank("MEDIUM") == demand_rank("stable") == 3
        assert demand_rank("Booming") == 0

    def test_salary_ascending_unknown_first(self, paths):
        """Unknown salaries rank as zero."""
        state = SortState(field=SortField.SALARY, order=SortOrder.ASC)
        assert [p.title for p in sort_paths(paths, state)] == [
            "Analyst",
            "Tutor",
            "Trainer",
            "Designer",
        ]

    def test_select_toggles_and_resets(self):
        """Re-selecting flips the order; a new field starts descending."""
        state = SortState().select(SortField.MATCH)
        assert state == SortState(SortField.MATCH, SortOrder.ASC)
        state = state.select(SortField.SALARY)
        assert state == SortState(SortField.SALARY, SortOrder.DESC)

    def test_arrange_filters_then_sorts(self, paths):
        """arrange_paths() applies the filter before sorting."""
        state = SortState(field=SortField.DEMAND)
        active = [FilterCategory.EDUCATION, FilterCategory.INTERESTS]
        assert [p.title for p in arrange_paths(paths, active, state)] == [
            "Tutor",
            "Trainer",
        ]

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("$60,000 - $80,000", 60000),
            ("£45k+", 45000),
            ("2.5M", 2_500_000),
            ("N/A", 0),
            (None, 0),
        ],
    )
    def test_parse_salary_floor(self, text, expected):
        """The first amount is the floor; k/M suffixes scale it."""
        assert parse_salary_floor(text) == expected


class TestDetailLoading:
    """Tests for load_path_detail() and learning_plan()."""

    @pytest.mark.asyncio
    async def test_loads_missing_detail(self, paths):
        """Paths without a description are enriched via the service."""
        enriched = paths[0].model_copy(update={"description": "Designs things."})
        service = AsyncMock()
        service.suggest_career_detail.return_value = enriched
        profile = ProfileDraft()

        assert await load_path_detail(service, paths[0], profile) is enriched
        service.suggest_career_detail.assert_awaited_once_with(paths[0], profile)

    @pytest.mark.asyncio
    async def test_loaded_detail_is_not_refetched(self, paths):
        """Already-enriched paths are returned unchanged."""
        loaded = paths[0].model_copy(update={"description": "Designs things."})
        service = AsyncMock()
        assert await load_path_detail(service, loaded, ProfileDraft()) is loaded
        service.suggest_career_detail.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_learning_plan_delegates(self):
        """The skill is trimmed and passed to the service."""
        service = AsyncMock()
        service.suggest_learning_plan.return_value = "## Plan"
        assert await learning_plan(service, " SQL ") == "## Plan"
        service.suggest_learning_plan.assert_awaited_once_with("SQL")
