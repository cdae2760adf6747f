"""In-memory domain models for the profile wizard."""

from career_compass.models.profile import Experience, ProfileDraft

__all__ = [
    "Experience",
    "ProfileDraft",
]
