"""Validation gate: may the wizard move forward from here?"""

from career_compass.models.profile import Experience, ProfileDraft
from career_compass.services.comma_set import count_distinct
from career_compass.wizard.position import (
    PrimaryPosition,
    PrimaryStep,
    SubFlowStep,
    WizardPosition,
)

MIN_SKILLS = 3
"""Distinct skills required to leave the skills step."""


def _first_role(profile: ProfileDraft) -> str:
    return profile.experiences[0].role.strip() if profile.experiences else ""


def is_step_valid(
    position: WizardPosition,
    profile: ProfileDraft,
    new_experience: Experience,
) -> bool:
    """Evaluate the forward-navigation rule for the current step.

    Rules:
    - role: experiences[0] has a non-empty trimmed role
    - skills: at least MIN_SKILLS distinct entries
    - interests: non-empty trimmed interests
    - add-experience role: non-empty trimmed new role
    - every other step is always valid

    Args:
        position: Current wizard position.
        profile: Current profile draft.
        new_experience: Sub-flow scratch experience.

    Returns:
        True when advance() may proceed.
    """
    if isinstance(position, PrimaryPosition):
        if position.step == PrimaryStep.ROLE:
            return bool(_first_role(profile))
        if position.step == PrimaryStep.SKILLS:
            return count_distinct(profile.skills) >= MIN_SKILLS
        if position.step == PrimaryStep.INTERESTS:
            return bool(profile.interests.strip())
        return True

    if position.step == SubFlowStep.ROLE:
        return bool(new_experience.role.strip())
    return True
