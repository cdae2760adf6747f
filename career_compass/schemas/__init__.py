"""Pydantic request/response schemas for API endpoints."""

from career_compass.schemas.career import (
    CareerDetail,
    CareerPath,
    CareerProfile,
    IdentityData,
    RelevanceTag,
    StatementResult,
)
from career_compass.schemas.wizard import (
    ArrangePathsRequest,
    CareerDetailRequest,
    CareerProfileRequest,
    CareerProfileView,
    CreateSessionRequest,
    EducationSkillsRequest,
    ExperienceSchema,
    LearningPlanRequest,
    LearningPlanResponse,
    ProfileSchema,
    WizardAction,
    WizardView,
)

__all__ = [
    # Career generation
    "CareerDetail",
    "CareerPath",
    "CareerProfile",
    "IdentityData",
    "RelevanceTag",
    "StatementResult",
    # Wizard API
    "ArrangePathsRequest",
    "CareerDetailRequest",
    "CareerProfileRequest",
    "CareerProfileView",
    "CreateSessionRequest",
    "EducationSkillsRequest",
    "ExperienceSchema",
    "LearningPlanRequest",
    "LearningPlanResponse",
    "ProfileSchema",
    "WizardAction",
    "WizardView",
]
