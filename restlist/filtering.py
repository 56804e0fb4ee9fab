"""Regex post-filter for extracted values."""

from __future__ import annotations

import re
from collections.abc import Iterable

from restlist.errors import InvalidPatternError
from restlist.models import DEFAULT_FILTER


def compile_filter(pattern: str | None) -> re.Pattern[str]:
    """
    Compile a filter pattern. Blank patterns mean ".*".

    Compiled with DOTALL so ".*" also keeps multi-line values.

    Raises:
        InvalidPatternError: If the pattern is not a valid regex
    """
    if not pattern or not pattern.strip():
        pattern = DEFAULT_FILTER

    try:
        return re.compile(pattern, re.DOTALL)
    except re.error as e:
        raise InvalidPatternError(
            f"Invalid filter pattern '{pattern}': {e}",
            pattern=pattern,
            detail=str(e),
        ) from e


def filter_values(values: Iterable[str], pattern: str | None) -> list[str]:
    """
    Keep the values the pattern matches in full.

    Order and duplicates are preserved.
    """
    compiled = compile_filter(pattern)
    return [value for value in values if compiled.fullmatch(value)]
