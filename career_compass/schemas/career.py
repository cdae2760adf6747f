"""Career suggestion schemas.

Shapes of the generated career profile, shared by the generation service
(validating LLM JSON) and the API (serialising responses).

Field names are snake_case in Python and camelCase on the wire, matching
what the prompts ask the model to produce and what chart consumers read.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator
from pydantic.alias_generators import to_camel

TagSource = Literal["experience", "skill", "interest", "education"]

_MAX_PATHS = 30
"""Safety cap on career paths accepted from one generation."""

_MAX_LIST_ITEMS = 40
"""Safety cap on any generated string list."""


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class RelevanceTag(_CamelModel):
    """A profile keyword that explains why a path was suggested.

    Attributes:
        tag: The keyword taken from the user's profile.
        source: Which part of the profile it came from.
    """

    tag: str
    source: TagSource

    @field_validator("source", mode="before")
    @classmethod
    def normalise_source(cls, value: object) -> object:
        """Accept 'Skill' or ' skill ' from the model."""
        return value.strip().lower() if isinstance(value, str) else value


class CareerPath(_CamelModel):
    """One suggested career path.

    The detail fields stay None until the path's detail view is loaded.
    """

    title: str
    skill_match_percentage: int = Field(ge=0, le=100)
    market_demand: str
    industry: str
    relevance_tags: list[RelevanceTag] = Field(default_factory=list)
    description: str | None = None
    required_skills: list[str] | None = None
    salary_range: str | None = None
    certifications: list[str] | None = None
    experience_needed: str | None = None

    @field_validator("skill_match_percentage", mode="before")
    @classmethod
    def clamp_match(cls, value: object) -> object:
        """Clamp numeric match scores into 0..100 instead of rejecting them."""
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return max(0, min(100, round(value)))
        return value


class IdentityData(_CamelModel):
    """Career identity statement plus headline transferable skills."""

    statement: str = Field(min_length=1)
    transferable_skills: list[str] = Field(default_factory=list)


class CareerProfile(_CamelModel):
    """Whole-profile generation result: identity and candidate paths."""

    identity: IdentityData
    paths: list[CareerPath] = Field(default_factory=list)

    @field_validator("paths")
    @classmethod
    def cap_paths(cls, value: list[CareerPath]) -> list[CareerPath]:
        """Keep at most _MAX_PATHS paths."""
        return value[:_MAX_PATHS]


class CareerDetail(_CamelModel):
    """Detail fields generated for a single path."""

    description: str = Field(min_length=1)
    required_skills: list[str] = Field(default_factory=list)
    salary_range: str
    market_demand: str | None = None
    certifications: list[str] = Field(default_factory=list)
    experience_needed: str


class StatementResult(BaseModel):
    """Personal statement generation result."""

    statement: str = Field(min_length=1)


def _cap_strings(items: list[str]) -> list[str]:
    return [item for item in (s.strip() for s in items) if item][:_MAX_LIST_ITEMS]


string_list_adapter: TypeAdapter[list[str]] = TypeAdapter(list[str])
"""Validates suggestion arrays (tasks, skills, interests)."""


def parse_string_list(data: object) -> list[str]:
    """Validate a decoded JSON value as a list of non-empty strings.

    Some models wrap the array in an object (e.g. {"skills": [...]}); a
    single-key object whose value is a list is unwrapped first.

    Raises:
        pydantic.ValidationError: If the value is not a list of strings.
    """
    if isinstance(data, dict) and len(data) == 1:
        (data,) = data.values()
    return _cap_strings(string_list_adapter.validate_python(data))
