"""LLM input sanitization for profile text embedded in prompts.

Security: Every role, industry, task, skill, interest, and education entry
is free text typed by the user. It is normalised and filtered here before
the generation service interpolates it into a prompt.
"""

import re
import unicodedata

# =============================================================================
# Unicode Stripping Patterns
# =============================================================================

# Invisible characters that can split a keyword so filters miss it.
_ZERO_WIDTH_PATTERN = re.compile(
    "["
    "\u00ad"  # Soft hyphen
    "\u200b-\u200f"  # Zero-width space, non-joiner, joiner, LRM, RLM
    "\u202a-\u202e"  # BiDi embedding controls
    "\u2060-\u2064"  # Word joiner, invisible operators
    "\u2066-\u2069"  # BiDi isolate controls
    "\ufeff"  # BOM / zero-width no-break space
    "]"
)

# Control characters to remove (keeps \t, \n, \r)
_CONTROL_CHAR_PATTERN = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")

_REPLACEMENT_TAG = "[TAG]"
_REPLACEMENT_FILTERED = "[FILTERED]"

_INJECTION_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"^\s*SYSTEM\s*:", re.IGNORECASE | re.MULTILINE), _REPLACEMENT_FILTERED),
    (re.compile(r"<\s*/?\s*(system|user|assistant)\s*>", re.IGNORECASE), _REPLACEMENT_TAG),
    (re.compile(r"<\|(system|user|assistant|im_start|im_end)\|>", re.IGNORECASE), _REPLACEMENT_TAG),
    (
        re.compile(r"ignore\s+(all\s+)?previous\s+instructions?", re.IGNORECASE),
        _REPLACEMENT_FILTERED,
    ),
    (
        re.compile(r"disregard\s+(all\s+)?(prior|previous)", re.IGNORECASE),
        _REPLACEMENT_FILTERED,
    ),
    (re.compile(r"\[/?INST\]", re.IGNORECASE), _REPLACEMENT_FILTERED),
]

MAX_FIELD_LENGTH = 2_000
"""Safety cap on a single profile field once sanitized (chars)."""


def sanitize_llm_input(text: str, max_length: int = MAX_FIELD_LENGTH) -> str:
    """Sanitize user-provided profile text before embedding in LLM prompts.

    WHY FILTER VS ESCAPE:
    - Escaping doesn't work well with LLMs (they understand meaning, not syntax)
    - Filtering removes suspicious patterns while preserving legitimate content

    Args:
        text: Raw user-provided text (e.g., a role title or skills list).
        max_length: Characters kept after sanitization.

    Returns:
        Sanitized text with injection patterns neutralized.
    """
    if not text:
        return text

    # NFKC folds fullwidth and styled variants (e.g., Ａ → A)
    result = unicodedata.normalize("NFKC", text)
    result = _ZERO_WIDTH_PATTERN.sub("", result)
    result = _CONTROL_CHAR_PATTERN.sub("", result)

    for pattern, replacement in _INJECTION_PATTERNS:
        result = pattern.sub(replacement, result)

    return result[:max_length]


def sanitize_all(values: list[str]) -> list[str]:
    """Sanitize each entry of a list, dropping entries left empty."""
    cleaned = (sanitize_llm_input(value).strip() for value in values)
    return [value for value in cleaned if value]
