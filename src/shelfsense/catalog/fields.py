# ABOUTME: Type-checked field readers shared by the Google Books and Open Library parsers.
# ABOUTME: Wrongly-typed JSON values read as missing instead of raising or leaking through.

import re
from typing import Any

_YEAR_RE = re.compile(r"\d{4}")


def text(value: Any) -> str | None:
    """A stripped, non-empty string, or None for anything else."""
    if not isinstance(value, str):
        return None
    return value.strip() or None


def text_list(value: Any) -> list[str]:
    """The non-empty strings of a JSON array. A bare string is not a list."""
    if not isinstance(value, list):
        return []
    return [item for item in (text(v) for v in value) if item]


def mapping(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def parse_year(value: Any) -> int | None:
    """Extract the first four-digit run from a date like '2008-08-01' or 2008."""
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        return None
    match = _YEAR_RE.search(str(value))
    return int(match.group(0)) if match else None


def count(value: Any) -> int:
    """A non-negative integer count such as a page count; 0 when unusable."""
    if isinstance(value, bool) or not isinstance(value, int):
        return 0
    return max(value, 0)
