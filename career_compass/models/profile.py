"""Profile draft data model.

The wizard's working state: experiences, the comma-joined skill and
interest sets, and formatted education entries.

WHY DATACLASSES (not pydantic):
- The draft lives in process memory and is mutated on every keystroke;
  validation happens in the Validation Gate, not on assignment
- Experience is frozen so edits go through dataclasses.replace and a
  finalized copy can never alias the live draft
"""

import copy
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Experience:
    """One professional experience.

    Attributes:
        role: Job title. Empty marks a placeholder that is never emitted.
        industry: Free-text industry, may be empty.
        tasks: Canonical comma-joined set of task strings.
    """

    role: str = ""
    industry: str = ""
    tasks: str = ""

    @property
    def is_placeholder(self) -> bool:
        """True when the experience has no role yet."""
        return not self.role.strip()


@dataclass
class ProfileDraft:
    """Authoritative draft of the user's profile.

    Attributes:
        experiences: Experiences in entry order. experiences[0] is the one
            edited by the primary role/industry/tasks steps.
        skills: Comma-joined skill set.
        interests: Comma-joined interest set.
        education: Formatted entries, "<level>" or "<level> in <subject>".
    """

    experiences: list[Experience] = field(default_factory=list)
    skills: str = ""
    interests: str = ""
    education: list[str] = field(default_factory=list)

    def real_experiences(self) -> list[Experience]:
        """Experiences with a non-empty role, in order."""
        return [exp for exp in self.experiences if not exp.is_placeholder]

    def has_content(self) -> bool:
        """True when any field would give a generator something to work with."""
        return bool(
            self.real_experiences()
            or self.skills.strip()
            or self.interests.strip()
            or self.education
        )

    def copy(self) -> "ProfileDraft":
        """Deep copy, safe to hand to callers."""
        return copy.deepcopy(self)
