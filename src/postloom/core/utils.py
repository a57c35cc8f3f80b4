"""Small string and date helpers shared across the pipeline."""

import re
from datetime import date

_WHITESPACE_RE = re.compile(r"\s+")


def kebab_case(name: str) -> str:
    """Convert a taxonomy name into its URL path segment.

    Whitespace runs become a single hyphen and the result is lowercased.
    Nothing else is stripped, so distinct names may share a path.

    Examples:
        >>> kebab_case("Spring Boot")
        'spring-boot'
        >>> kebab_case("C#  Tips")
        'c#-tips'

    """
    return _WHITESPACE_RE.sub("-", name).lower()


def ordinal(day: int) -> str:
    """Return ``day`` with its English ordinal suffix (1st, 2nd, 11th, 23rd)."""
    if 11 <= day % 100 <= 13:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
    return f"{day}{suffix}"


def format_long_date(value: date) -> str:
    """Format a date the way social cards show it, e.g. ``March 5th, 2024``."""
    return f"{value.strftime('%B')} {ordinal(value.day)}, {value.year}"
