"""Tests for the profile store."""

import pytest

from career_compass.core.errors import NotFoundError
from career_compass.models.profile import Experience, ProfileDraft
from career_compass.wizard.profile_store import ProfileStore


class TestPrimaryExperience:
    """Tests for edits to experiences[0]."""

    def test_set_role_creates_placeholder_experience(self):
        """Editing on an empty profile creates the first experience."""
        store = ProfileStore()
        store.set_industry("Education")
        assert store.draft.experiences == [Experience(industry="Education")]
        store.set_role("Teacher")
        assert store.draft.experiences == [Experience(role="Teacher", industry="Education")]

    def test_toggle_task_round_trip(self):
        """Toggling a task on then off restores the exact prior string."""
        store = ProfileStore()
        store.set_role("Teacher")
        store.toggle_task("Grading")
        before = store.draft.experiences[0].tasks
        store.toggle_task("Lesson Planning")
        store.toggle_task("Lesson Planning")
        assert store.draft.experiences[0].tasks == before == "Grading"

    def test_custom_task_with_commas_adds_each(self):
        """Custom input "A, B" toggles both entries."""
        store = ProfileStore()
        store.set_role("Teacher")
        store.add_custom_task("Tutoring, Coaching")
        assert store.draft.experiences[0].tasks == "Tutoring, Coaching"

    def test_blank_custom_task_does_not_create_experience(self):
        """Blank input never creates a placeholder."""
        store = ProfileStore()
        store.add_custom_task("  ")
        assert store.draft.experiences == []

    def test_remove_experience_out_of_range(self):
        """Bad indexes raise NotFoundError."""
        with pytest.raises(NotFoundError):
            ProfileStore().remove_experience(0)


class TestSkillsAndInterests:
    """Tests for skill and interest edits."""

    def test_toggle_and_remove_skill(self):
        """Skills behave as a comma-joined set."""
        store = ProfileStore()
        store.toggle_skill("Excel")
        store.add_custom_skill("Python, SQL")
        store.remove_skill("Excel")
        assert store.draft.skills == "Python, SQL"

    def test_toggle_interest(self):
        """Interests behave as a comma-joined set."""
        store = ProfileStore()
        store.toggle_interest("Mentoring")
        store.toggle_interest("Education")
        store.remove_interest("Mentoring")
        assert store.draft.interests == "Education"


class TestNewExperience:
    """Tests for the add-experience scratch."""

    def test_commit_appends_trimmed_and_resets(self):
        """A committed experience is appended with trimmed values."""
        store = ProfileStore(ProfileDraft(experiences=[Experience(role="Teacher")]))
        store.set_new_role(" Nurse ")
        store.set_new_industry(" Healthcare")
        store.toggle_new_task("Patient Care")
        assert store.commit_new_experience() is True
        assert store.draft.experiences[-1] == Experience(
            role="Nurse", industry="Healthcare", tasks="Patient Care"
        )
        assert store.new_experience == Experience()

    def test_commit_without_role_is_dropped(self):
        """A role-less scratch is not appended."""
        store = ProfileStore()
        store.set_new_industry("Healthcare")
        assert store.commit_new_experience() is False
        assert store.draft.experiences == []
        assert store.new_experience == Experience()

    def test_commit_drops_placeholders(self):
        """Placeholder experiences are filtered when committing."""
        store = ProfileStore()
        store.set_industry("Education")
        store.set_new_role("Nurse")
        store.commit_new_experience()
        assert store.draft.experiences == [Experience(role="Nurse")]


class TestEducation:
    """Tests for education staging."""

    def test_stage_preset_with_subject(self):
        """A preset level with subject stages "<level> in <subject>"."""
        store = ProfileStore()
        store.choose_education_level("Bachelor's degree")
        store.set_education_subject("Education")
        assert store.stage_education_entry() == "Bachelor's degree in Education"
        assert store.draft.education == ["Bachelor's degree in Education"]
        assert store.education.level == ""

    def test_stage_custom_level(self):
        """The custom level is used once chosen."""
        store = ProfileStore()
        store.choose_education_level("custom")
        store.set_custom_education_level("Bootcamp")
        assert store.stage_education_entry() == "Bootcamp"

    def test_stage_without_level_keeps_scratch(self):
        """No level means nothing is staged and the subject stays."""
        store = ProfileStore()
        store.set_education_subject("History")
        assert store.stage_education_entry() is None
        assert store.draft.education == []
        assert store.education.subject == "History"

    def test_unknown_level_rejected(self):
        """Only presets and "custom" can be chosen."""
        with pytest.raises(NotFoundError):
            ProfileStore().choose_education_level("Wizardry")

    def test_remove_education(self):
        """Entries are removed by index."""
        store = ProfileStore(ProfileDraft(education=["GCSE", "Doctorate"]))
        assert store.remove_education(0) == "GCSE"
        assert store.draft.education == ["Doctorate"]
        with pytest.raises(NotFoundError):
            store.remove_education(5)


class TestHydrationAndOutput:
    """Tests for constructor hydration and finalized_profile()."""

    def test_hydration_canonicalizes_and_copies(self):
        """Hydrated strings are canonical and the input is not aliased."""
        initial = ProfileDraft(
            experiences=[Experience(role="Teacher", tasks="Grading,Grading , Planning")],
            skills="Excel ,Teamwork",
            education=["GCSE"],
        )
        store = ProfileStore(initial)
        assert store.draft.experiences[0].tasks == "Grading, Planning"
        assert store.draft.skills == "Excel, Teamwork"
        store.draft.education.append("Doctorate")
        assert initial.education == ["GCSE"]

    def test_finalized_profile_filters_placeholders(self):
        """The output never contains role-less experiences."""
        store = ProfileStore()
        store.set_industry("Education")
        assert store.finalized_profile().experiences == []

    def test_finalized_profile_is_a_copy(self):
        """Mutating the output does not touch the draft."""
        store = ProfileStore()
        store.set_role("Teacher")
        profile = store.finalized_profile()
        profile.education.append("GCSE")
        assert store.draft.education == []
