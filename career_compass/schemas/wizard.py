"""Wizard API schemas.

Request bodies for creating sessions and applying actions, and the
session view returned after every call. Actions are a discriminated union
on "type" so a malformed action fails request validation (400) before it
reaches the controller.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from career_compass.models.profile import Experience, ProfileDraft
from career_compass.schemas.career import CareerPath, IdentityData, TagSource
from career_compass.services.career_explorer import (
    FilterCategory,
    SortField,
    SortOrder,
    SortState,
)

_MAX_TEXT_LENGTH = 500
"""Longest free-text value an action may carry."""

_MAX_LIST_ENTRIES = 50

# =============================================================================
# Profile
# =============================================================================


class ExperienceSchema(BaseModel):
    """One experience as sent and returned by the API."""

    model_config = ConfigDict(extra="forbid")

    role: str = Field(default="", max_length=_MAX_TEXT_LENGTH)
    industry: str = Field(default="", max_length=_MAX_TEXT_LENGTH)
    tasks: str = Field(default="", max_length=5000)

    @classmethod
    def from_experience(cls, experience: Experience) -> "ExperienceSchema":
        return cls(
            role=experience.role,
            industry=experience.industry,
            tasks=experience.tasks,
        )

    def to_experience(self) -> Experience:
        return Experience(role=self.role, industry=self.industry, tasks=self.tasks)


class ProfileSchema(BaseModel):
    """A career profile as sent and returned by the API."""

    model_config = ConfigDict(extra="forbid")

    experiences: list[ExperienceSchema] = Field(
        default_factory=list, max_length=_MAX_LIST_ENTRIES
    )
    skills: str = Field(default="", max_length=5000)
    interests: str = Field(default="", max_length=5000)
    education: list[str] = Field(default_factory=list, max_length=_MAX_LIST_ENTRIES)

    @classmethod
    def from_draft(cls, draft: ProfileDraft) -> "ProfileSchema":
        return cls(
            experiences=[ExperienceSchema.from_experience(e) for e in draft.experiences],
            skills=draft.skills,
            interests=draft.interests,
            education=list(draft.education),
        )

    def to_draft(self) -> ProfileDraft:
        return ProfileDraft(
            experiences=[e.to_experience() for e in self.experiences],
            skills=self.skills,
            interests=self.interests,
            education=list(self.education),
        )


# =============================================================================
# Requests
# =============================================================================


class CreateSessionRequest(BaseModel):
    """Body of POST /wizard/sessions.

    Attributes:
        initial_profile: Previously completed profile to edit.
        resume_at_review: Open on the review step instead of the first step.
    """

    model_config = ConfigDict(extra="forbid")

    initial_profile: ProfileSchema | None = None
    resume_at_review: bool = False


class SimpleAction(BaseModel):
    """Navigation and refresh actions that take no argument."""

    model_config = ConfigDict(extra="forbid")

    type: Literal["advance", "retreat", "enter_sub_flow", "regenerate", "add_education"]


class JumpAction(BaseModel):
    model_config = ConfigDict(extra="forbid")

    type: Literal["jump_to"]
    step: int = Field(ge=0, le=6)


class TextAction(BaseModel):
    """Field edits, toggles, custom entries, and removals by value."""

    model_config = ConfigDict(extra="forbid")

    type: Literal[
        "set_role",
        "set_industry",
        "toggle_task",
        "add_custom_task",
        "toggle_skill",
        "add_custom_skill",
        "remove_skill",
        "toggle_interest",
        "add_custom_interest",
        "remove_interest",
        "set_new_role",
        "set_new_industry",
        "toggle_new_task",
        "add_custom_new_task",
        "choose_education_level",
        "set_custom_education_level",
        "set_education_subject",
    ]
    value: str = Field(max_length=_MAX_TEXT_LENGTH)


class IndexAction(BaseModel):
    model_config = ConfigDict(extra="forbid")

    type: Literal["remove_experience", "remove_education"]
    index: int = Field(ge=0)


WizardAction = Annotated[
    SimpleAction | JumpAction | TextAction | IndexAction,
    Field(discriminator="type"),
]


class PathArrangement(BaseModel):
    """Explorer filter chips and sort controls.

    Attributes:
        filters: Active filter categories. All are active by default.
        sort: Active sort field.
        order: Active sort direction.
        select: Sort field the user just picked. Picking the active field
            flips the order; a new field starts descending.
    """

    filters: list[FilterCategory] = Field(default_factory=lambda: list(FilterCategory))
    sort: SortField = SortField.MATCH
    order: SortOrder = SortOrder.DESC
    select: SortField | None = None

    def sort_state(self) -> SortState:
        state = SortState(field=self.sort, order=self.order)
        return state.select(self.select) if self.select is not None else state


class CareerProfileRequest(PathArrangement):
    profile: ProfileSchema


class ArrangePathsRequest(PathArrangement):
    """Body of POST /careers/paths: re-filter and re-sort loaded paths."""

    paths: list[CareerPath] = Field(max_length=_MAX_LIST_ENTRIES)


class CareerDetailRequest(BaseModel):
    path: CareerPath
    profile: ProfileSchema


class LearningPlanRequest(BaseModel):
    skill: str = Field(min_length=1, max_length=200)


class EducationSkillsRequest(BaseModel):
    level: str = Field(min_length=1, max_length=_MAX_TEXT_LENGTH)
    subject: str = Field(default="", max_length=_MAX_TEXT_LENGTH)


# =============================================================================
# Responses
# =============================================================================


class PositionView(BaseModel):
    """Where the wizard is.

    Attributes:
        mode: "primary" or "addExperience".
        step: Step index within the current mode's sequence.
        label: Display label of the step.
        return_step: Primary step the sub-flow returns to, None in primary mode.
    """

    mode: str
    step: int
    label: str
    return_step: int | None = None


class SuggestionView(BaseModel):
    """Display list for one category: suggestions, then extra selections."""

    items: list[str]
    is_loading: bool


class EducationScratchView(BaseModel):
    level: str
    custom_level: str
    subject: str
    use_custom_level: bool


class WizardView(BaseModel):
    """Full session state returned after every call."""

    session_id: str
    position: PositionView
    direction: str
    can_advance: bool
    profile: ProfileSchema
    new_experience: ExperienceSchema
    education_scratch: EducationScratchView
    suggestions: dict[str, SuggestionView]
    statement: str | None
    is_statement_loading: bool
    finalized: bool
    exited: bool
    completed_profile: ProfileSchema | None = None


class LearningPlanResponse(BaseModel):
    skill: str
    plan: str


class ExploredPath(BaseModel):
    """A career path with the tag sources used to colour it."""

    path: CareerPath
    sources: list[TagSource]


class ArrangedPathsView(BaseModel):
    """Filtered and sorted paths, and the sort state that produced them."""

    paths: list[ExploredPath]
    total_paths: int
    sort: SortField
    order: SortOrder


class CareerProfileView(ArrangedPathsView):
    identity: IdentityData
