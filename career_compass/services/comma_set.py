"""Comma-joined set helpers.

Tasks, skills, and interests are stored as one string joined with ", ".
These helpers treat such a string as an ordered set: entries are trimmed,
empty entries dropped, duplicates collapsed to their first appearance.
"""

_SEPARATOR = ", "


def parse_comma_set(value: str) -> list[str]:
    """Split a comma-joined string into distinct, trimmed entries.

    Args:
        value: e.g. "Excel, Excel , Teamwork,".

    Returns:
        Entries in first-appearance order, e.g. ["Excel", "Teamwork"].
    """
    seen: set[str] = set()
    entries: list[str] = []
    for raw in value.split(","):
        entry = raw.strip()
        if entry and entry not in seen:
            seen.add(entry)
            entries.append(entry)
    return entries


def join_comma_set(entries: list[str]) -> str:
    """Join entries back into the canonical comma-joined form."""
    return _SEPARATOR.join(entries)


def canonicalize(value: str) -> str:
    """Normalise any comma-joined string to its canonical form."""
    return join_comma_set(parse_comma_set(value))


def count_distinct(value: str) -> int:
    """Number of distinct non-empty entries."""
    return len(parse_comma_set(value))


def toggle_entry(value: str, entry: str) -> str:
    """Symmetric difference of the set with {entry}.

    Removing keeps the order of the remaining entries; adding appends.
    Blank entries leave the value unchanged.

    Args:
        value: Current comma-joined set.
        entry: Entry to add or remove (trimmed before comparison).

    Returns:
        The new canonical comma-joined set.
    """
    entry = entry.strip()
    entries = parse_comma_set(value)
    if not entry:
        return join_comma_set(entries)
    if entry in entries:
        entries.remove(entry)
    else:
        entries.append(entry)
    return join_comma_set(entries)


def remove_entry(value: str, entry: str) -> str:
    """Set difference with {entry}. Missing entries are ignored."""
    entry = entry.strip()
    return join_comma_set([e for e in parse_comma_set(value) if e != entry])


def split_custom_input(text: str) -> list[str]:
    """Split a free-text custom entry into the entries it names.

    "Python, SQL" names two entries; blank input names none.
    """
    return parse_comma_set(text)


def merge_for_display(suggestions: list[str], selected: str) -> list[str]:
    """Suggestions followed by selected entries the suggestions lack.

    Duplicates collapse by string identity. Nothing outside the two
    inputs is ever shown, so a removed selection cannot reappear unless
    the current suggestions still contain it.
    """
    merged = list(dict.fromkeys(suggestions))
    present = set(merged)
    merged.extend(e for e in parse_comma_set(selected) if e not in present)
    return merged
