"""Tests for the wizard validation gate."""

import pytest

from career_compass.models.profile import Experience, ProfileDraft
from career_compass.wizard.position import PrimaryPosition, PrimaryStep, SubFlowPosition
from career_compass.wizard.validation import is_step_valid

_EMPTY = Experience()


def _valid(step: int, profile: ProfileDraft, new: Experience = _EMPTY) -> bool:
    return is_step_valid(PrimaryPosition(step), profile, new)


class TestPrimarySteps:
    """Tests for the primary-sequence rules."""

    def test_role_requires_first_experience_role(self):
        """The role step needs a non-blank role on experiences[0]."""
        assert not _valid(PrimaryStep.ROLE, ProfileDraft())
        assert not _valid(
            PrimaryStep.ROLE, ProfileDraft(experiences=[Experience(role="   ")])
        )
        assert _valid(PrimaryStep.ROLE, ProfileDraft(experiences=[Experience(role="Teacher")]))

    def test_skills_threshold_is_three_distinct(self):
        """Three entries with a duplicate do not pass."""
        assert not _valid(PrimaryStep.SKILLS, ProfileDraft(skills="Excel, Excel, Teamwork"))
        assert _valid(
            PrimaryStep.SKILLS, ProfileDraft(skills="Excel, Teamwork, Leadership")
        )

    def test_skills_ignores_blank_entries(self):
        """Trailing commas and blanks do not count."""
        assert not _valid(PrimaryStep.SKILLS, ProfileDraft(skills="Excel, , Teamwork,"))

    def test_interests_requires_non_blank(self):
        """Whitespace-only interests do not pass."""
        assert not _valid(PrimaryStep.INTERESTS, ProfileDraft(interests="  "))
        assert _valid(PrimaryStep.INTERESTS, ProfileDraft(interests="Mentoring"))

    @pytest.mark.parametrize(
        "step", [PrimaryStep.INDUSTRY, PrimaryStep.TASKS, PrimaryStep.EDUCATION, PrimaryStep.REVIEW]
    )
    def test_optional_steps_always_valid(self, step):
        """Industry, tasks, education, and review never block."""
        assert _valid(step, ProfileDraft())


class TestSubFlowSteps:
    """Tests for the add-experience rules."""

    def test_role_requires_new_role(self):
        """Sub-flow role step checks the scratch experience, not the draft."""
        profile = ProfileDraft(experiences=[Experience(role="Teacher")])
        position = SubFlowPosition(0, PrimaryStep.REVIEW)
        assert not is_step_valid(position, profile, Experience(role=" "))
        assert is_step_valid(position, profile, Experience(role="Nurse"))

    def test_other_sub_steps_always_valid(self):
        """Industry and tasks in the sub-flow never block."""
        for step in (1, 2):
            assert is_step_valid(SubFlowPosition(step, 6), ProfileDraft(), _EMPTY)
