"""Wizard positions.

A position is either in the primary sequence (role → review) or in the
nested add-experience sub-flow (role → tasks). The two are separate frozen
dataclasses, so a position can never hold both counters or neither.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum


class PrimaryStep(IntEnum):
    """Steps of the primary sequence, in order."""

    ROLE = 0
    INDUSTRY = 1
    TASKS = 2
    SKILLS = 3
    INTERESTS = 4
    EDUCATION = 5
    REVIEW = 6


class SubFlowStep(IntEnum):
    """Steps of the add-experience sub-flow, in order."""

    ROLE = 0
    INDUSTRY = 1
    TASKS = 2


FIRST_STEP = PrimaryStep.ROLE
LAST_STEP = PrimaryStep.REVIEW
LAST_SUB_FLOW_STEP = SubFlowStep.TASKS

STEP_LABELS: dict[PrimaryStep, str] = {
    PrimaryStep.ROLE: "Your Role",
    PrimaryStep.INDUSTRY: "Industry",
    PrimaryStep.TASKS: "Tasks",
    PrimaryStep.SKILLS: "Skills",
    PrimaryStep.INTERESTS: "Interests",
    PrimaryStep.EDUCATION: "Education",
    PrimaryStep.REVIEW: "Review",
}
"""Journey labels shown above the wizard."""

SUB_FLOW_LABELS: dict[SubFlowStep, str] = {
    SubFlowStep.ROLE: "New Role",
    SubFlowStep.INDUSTRY: "New Industry",
    SubFlowStep.TASKS: "New Tasks",
}


class WizardMode(str, Enum):
    """Which sequence the wizard is in."""

    PRIMARY = "primary"
    ADD_EXPERIENCE = "addExperience"


class Direction(str, Enum):
    """Navigation direction of the last transition (presentation only)."""

    FORWARD = "forward"
    BACKWARD = "backward"


@dataclass(frozen=True)
class PrimaryPosition:
    """Position in the primary sequence.

    Raises:
        ValueError: If step is outside 0..6.
    """

    step: PrimaryStep

    def __post_init__(self) -> None:
        object.__setattr__(self, "step", PrimaryStep(self.step))

    @property
    def mode(self) -> WizardMode:
        return WizardMode.PRIMARY


@dataclass(frozen=True)
class SubFlowPosition:
    """Position in the add-experience sub-flow.

    Attributes:
        step: Sub-flow step, 0..2.
        return_step: Primary step to resume when the sub-flow ends.

    Raises:
        ValueError: If either step is out of range.
    """

    step: SubFlowStep
    return_step: PrimaryStep

    def __post_init__(self) -> None:
        object.__setattr__(self, "step", SubFlowStep(self.step))
        object.__setattr__(self, "return_step", PrimaryStep(self.return_step))

    @property
    def mode(self) -> WizardMode:
        return WizardMode.ADD_EXPERIENCE


WizardPosition = PrimaryPosition | SubFlowPosition
