"""Splitting of GEDCOM personal names."""

from dataclasses import dataclass
import re

# Surname is the first non-empty /.../ group, e.g. "John /Doe/ Jr"
SURNAME_PATTERN = re.compile(r"/([^/]+)/")


@dataclass(frozen=True)
class ParsedName:
    full_name: str
    first_name: str | None = None
    last_name: str | None = None


def parse_name(name_value: str | None) -> ParsedName:
    """
    Split a raw NAME value into display, given and surname parts.

    The text before and after the surname group are joined as the given part,
    so "John /Doe/ Jr" gives first_name "John Jr" and last_name "Doe".
    Without a surname group the whole value is the given part.
    """
    if not name_value:
        return ParsedName("")

    first_name = ""
    last_name = ""

    match = SURNAME_PATTERN.search(name_value)
    if match:
        last_name = match.group(1).strip()
        before = name_value[: match.start()].strip()
        after = name_value[match.end() :].strip()
        first_name = " ".join(part for part in (before, after) if part)
    else:
        first_name = name_value.strip()

    if first_name and last_name:
        full_name = f"{first_name} {last_name}"
    else:
        full_name = first_name or last_name

    return ParsedName(
        full_name=full_name or name_value,
        first_name=first_name or None,
        last_name=last_name or None,
    )
