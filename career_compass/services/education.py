"""Education entry formatting.

Entries are stored as display strings: "<level>" or "<level> in <subject>".
Parsing splits on the first " in " only, so subjects such as
"Studies in Education" survive a round trip.
"""

from dataclasses import dataclass

EDUCATION_LEVELS: tuple[str, ...] = (
    "High School diploma",
    "GCSE",
    "Associate's degree",
    "Bachelor's degree",
    "Master's degree",
    "Doctorate",
    "Professional certificate",
    "Technical certificate",
)
"""Preset levels offered by the education step, in display order."""

_SUBJECT_SEPARATOR = " in "


@dataclass(frozen=True)
class EducationEntry:
    """Parsed education entry.

    Attributes:
        level: Qualification level, preset or custom.
        subject: Subject area, None when the entry has none.
    """

    level: str
    subject: str | None = None

    @property
    def is_preset_level(self) -> bool:
        """True when the level is one of EDUCATION_LEVELS."""
        return self.level in EDUCATION_LEVELS


def format_education_entry(level: str, subject: str = "") -> str | None:
    """Compose the stored string for a level and optional subject.

    Args:
        level: Qualification level. Trimmed; blank means no entry.
        subject: Subject area. Trimmed; blank is omitted.

    Returns:
        The formatted entry, or None when level is blank.
    """
    level = level.strip()
    if not level:
        return None
    subject = subject.strip()
    return f"{level}{_SUBJECT_SEPARATOR}{subject}" if subject else level


def parse_education_entry(entry: str) -> EducationEntry:
    """Split a stored entry back into level and subject.

    Only the first " in " separates; the rest belongs to the subject.

    Example:
        >>> parse_education_entry("Master's degree in Studies in Education")
        EducationEntry(level="Master's degree", subject='Studies in Education')
    """
    level, sep, subject = entry.partition(_SUBJECT_SEPARATOR)
    return EducationEntry(level=level, subject=subject if sep else None)
