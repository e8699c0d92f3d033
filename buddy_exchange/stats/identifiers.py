"""Certificate identifier extraction and allocation.

Titles look like "Jane Doe | 2025-042". Identifier numbers are taken from
the strongest pattern that occurs in a title: year-dash forms before bare
numbers, longer suffixes before shorter ones.
"""

import re
from collections.abc import Callable, Iterable

MAX_IDENTIFIER = 10000


def _dash_suffix(match: str) -> str:
    return match.split("-", 1)[1]


def _whole(match: str) -> str:
    return match


# Evaluated in order; the first pattern found in a title is the only one used.
IDENTIFIER_PATTERNS: tuple[tuple[re.Pattern[str], Callable[[str], str]], ...] = (
    (re.compile(r"\d{4}-\d{3}", re.ASCII), _dash_suffix),
    (re.compile(r"\d{4}-\d{2}", re.ASCII), _dash_suffix),
    (re.compile(r"\d{4}-\d{1}", re.ASCII), _dash_suffix),
    (re.compile(r"\d{3}", re.ASCII), _whole),
    (re.compile(r"\d{2}", re.ASCII), _whole),
    (re.compile(r"\d{1}", re.ASCII), _whole),
)


def identifiers_in_title(title: str) -> list[int]:
    """Identifier numbers found in one title."""
    for pattern, extract in IDENTIFIER_PATTERNS:
        matches = pattern.findall(title)
        if not matches:
            continue
        numbers = []
        for match in matches:
            try:
                number = int(extract(match))
            except ValueError:
                continue
            if 0 < number < MAX_IDENTIFIER:
                numbers.append(number)
        return numbers
    return []


def extract_identifiers(titles: Iterable[str]) -> tuple[int, ...]:
    """Collect used identifiers across titles, deduplicated and ascending."""
    used: set[int] = set()
    for title in titles:
        used.update(identifiers_in_title(title))
    return tuple(sorted(used))


def next_identifier(identifiers: Iterable[int]) -> int:
    """Lowest positive integer not already used."""
    used = set(identifiers)
    candidate = 1
    while candidate in used:
        candidate += 1
    return candidate


def format_identifier(number: int, year: int, padding: int = 3) -> str:
    """Format an identifier as YEAR-NUMBER, e.g. 2025-003."""
    return f"{year}-{number:0{padding}d}"


def suggested_title(identifier: str, author_name: str | None = None) -> str:
    """Issue title for a new certificate request."""
    return f"{author_name or '[Author Name]'} | {identifier}"
