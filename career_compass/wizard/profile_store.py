"""Profile store.

Owns the profile draft and the two scratch areas the wizard stages data
in: the add-experience draft and the education fields. Every edit the
wizard makes goes through here; the store never talks to the generator.
"""

from dataclasses import dataclass, replace

from career_compass.core.errors import NotFoundError
from career_compass.models.profile import Experience, ProfileDraft
from career_compass.services.comma_set import (
    canonicalize,
    remove_entry,
    split_custom_input,
    toggle_entry,
)
from career_compass.services.education import EDUCATION_LEVELS, format_education_entry


@dataclass
class EducationScratch:
    """Staging fields of the education step.

    Attributes:
        level: Selected preset level, "" when none.
        custom_level: Free-text level, used when use_custom_level is set.
        subject: Free-text subject area.
        use_custom_level: The custom level input is the active choice.
    """

    level: str = ""
    custom_level: str = ""
    subject: str = ""
    use_custom_level: bool = False

    @property
    def effective_level(self) -> str:
        return (self.custom_level if self.use_custom_level else self.level).strip()

    def compose(self) -> str | None:
        """The entry these fields would append, or None if no level is set."""
        return format_education_entry(self.effective_level, self.subject)


def _toggle_custom(value: str, text: str) -> str:
    for entry in split_custom_input(text):
        value = toggle_entry(value, entry)
    return value


class ProfileStore:
    """Single source of truth for the wizard's profile data.

    Args:
        initial: Previously completed profile to hydrate from. Copied, and
            its comma-joined fields normalised to canonical form.
    """

    def __init__(self, initial: ProfileDraft | None = None) -> None:
        self.draft = ProfileDraft()
        if initial is not None:
            self.draft = ProfileDraft(
                experiences=[
                    replace(exp, tasks=canonicalize(exp.tasks))
                    for exp in initial.experiences
                ],
                skills=canonicalize(initial.skills),
                interests=canonicalize(initial.interests),
                education=list(initial.education),
            )
        self.new_experience = Experience()
        self.education = EducationScratch()

    # =========================================================================
    # Primary experience (experiences[0])
    # =========================================================================

    def _update_first(self, **changes: str) -> None:
        if self.draft.experiences:
            self.draft.experiences[0] = replace(self.draft.experiences[0], **changes)
        else:
            self.draft.experiences.append(Experience(**changes))

    def set_role(self, role: str) -> None:
        """Set the primary role, creating a placeholder experience if needed."""
        self._update_first(role=role)

    def set_industry(self, industry: str) -> None:
        """Set the primary industry, creating a placeholder experience if needed."""
        self._update_first(industry=industry)

    def _first_tasks(self) -> str:
        return self.draft.experiences[0].tasks if self.draft.experiences else ""

    def toggle_task(self, task: str) -> None:
        self._update_first(tasks=toggle_entry(self._first_tasks(), task))

    def add_custom_task(self, text: str) -> None:
        if split_custom_input(text):
            self._update_first(tasks=_toggle_custom(self._first_tasks(), text))

    def remove_experience(self, index: int) -> Experience:
        """Remove an experience by position.

        Raises:
            NotFoundError: If index is out of range.
        """
        if not 0 <= index < len(self.draft.experiences):
            raise NotFoundError("Experience", str(index))
        return self.draft.experiences.pop(index)

    # =========================================================================
    # Skills and interests
    # =========================================================================

    def toggle_skill(self, skill: str) -> None:
        self.draft.skills = toggle_entry(self.draft.skills, skill)

    def add_custom_skill(self, text: str) -> None:
        self.draft.skills = _toggle_custom(self.draft.skills, text)

    def remove_skill(self, skill: str) -> None:
        self.draft.skills = remove_entry(self.draft.skills, skill)

    def toggle_interest(self, interest: str) -> None:
        self.draft.interests = toggle_entry(self.draft.interests, interest)

    def add_custom_interest(self, text: str) -> None:
        self.draft.interests = _toggle_custom(self.draft.interests, text)

    def remove_interest(self, interest: str) -> None:
        self.draft.interests = remove_entry(self.draft.interests, interest)

    # =========================================================================
    # Add-experience scratch
    # =========================================================================

    def reset_new_experience(self) -> None:
        self.new_experience = Experience()

    def set_new_role(self, role: str) -> None:
        self.new_experience = replace(self.new_experience, role=role)

    def set_new_industry(self, industry: str) -> None:
        self.new_experience = replace(self.new_experience, industry=industry)

    def toggle_new_task(self, task: str) -> None:
        self.new_experience = replace(
            self.new_experience, tasks=toggle_entry(self.new_experience.tasks, task)
        )

    def add_custom_new_task(self, text: str) -> None:
        self.new_experience = replace(
            self.new_experience, tasks=_toggle_custom(self.new_experience.tasks, text)
        )

    def commit_new_experience(self) -> bool:
        """Append the scratch experience if it has a role.

        Placeholder experiences are dropped before appending. The scratch
        is reset either way.

        Returns:
            True if an experience was appended.
        """
        new = self.new_experience
        self.reset_new_experience()
        if new.is_placeholder:
            return False
        self.draft.experiences = [
            *self.draft.real_experiences(),
            replace(new, role=new.role.strip(), industry=new.industry.strip()),
        ]
        return True

    # =========================================================================
    # Education scratch
    # =========================================================================

    def choose_education_level(self, level: str) -> None:
        """Select a preset level, or the custom input when level is unknown.

        Raises:
            NotFoundError: If level is neither a preset nor "custom".
        """
        if level == "custom":
            self.education.use_custom_level = True
            return
        if level not in EDUCATION_LEVELS:
            raise NotFoundError("Education level", level)
        self.education.level = level
        self.education.use_custom_level = False
        self.education.custom_level = ""

    def set_custom_education_level(self, level: str) -> None:
        self.education.custom_level = level
        self.education.use_custom_level = True

    def set_education_subject(self, subject: str) -> None:
        self.education.subject = subject

    def clear_education_scratch(self) -> None:
        self.education = EducationScratch()

    def stage_education_entry(self) -> str | None:
        """Append the composed education entry and clear the scratch.

        Nothing is appended, and the scratch is kept, when no level is set.

        Returns:
            The appended entry, or None.
        """
        entry = self.education.compose()
        if entry is None:
            return None
        self.draft.education.append(entry)
        self.clear_education_scratch()
        return entry

    def remove_education(self, index: int) -> str:
        """Remove an education entry by position.

        Raises:
            NotFoundError: If index is out of range.
        """
        if not 0 <= index < len(self.draft.education):
            raise NotFoundError("Education entry", str(index))
        return self.draft.education.pop(index)

    # =========================================================================
    # Output
    # =========================================================================

    def finalized_profile(self) -> ProfileDraft:
        """Deep copy of the draft with placeholder experiences removed."""
        profile = self.draft.copy()
        profile.experiences = profile.real_experiences()
        return profile
