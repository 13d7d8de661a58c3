"""Ant-style glob matching for bucket names and object keys.

Patterns are split on ``/`` into segments. ``*`` matches any run of
characters inside one segment, ``?`` matches exactly one character, and a
segment that is exactly ``**`` matches zero or more whole segments. Empty
segments are significant, so ``a//b`` never matches ``a/*``.
"""

from __future__ import annotations

from functools import lru_cache
import re
from typing import Protocol, Sequence

from core.constants import PATH_DELIMITER, RECURSIVE_WILDCARD, WILDCARD_CHARACTERS


class GlobMatcher(Protocol):
    """Pluggable wildcard matcher used by the pattern resolver."""

    def is_pattern(self, path: str) -> bool:
        """Return whether the path contains wildcard characters."""
        ...

    def match(self, pattern: str, path: str) -> bool:
        """Return whether the full path matches the pattern."""
        ...


class AntPathMatcher:
    """Default matcher with ``*``, ``**`` and ``?`` support."""

    def is_pattern(self, path: str) -> bool:
        return any(char in path for char in WILDCARD_CHARACTERS)

    def match(self, pattern: str, path: str) -> bool:
        pattern_segments = pattern.split(PATH_DELIMITER)
        path_segments = path.split(PATH_DELIMITER)
        return _match_segments(pattern_segments, path_segments)


def literal_prefix(pattern: str) -> str:
    """Return the pattern text preceding its first wildcard character.

    One trailing separator is dropped because a ``**`` segment may match
    zero segments: ``logs/**`` matches ``logs``. Every path matched by the
    pattern starts with the returned prefix, which makes it safe for
    scoping listings.
    """
    positions = [pattern.find(char) for char in WILDCARD_CHARACTERS if char in pattern]
    if not positions:
        return pattern
    return pattern[:min(positions)].removesuffix(PATH_DELIMITER)


def _match_segments(pattern_segments: Sequence[str], path_segments: Sequence[str]) -> bool:
    """Match segment lists, backtracking to the last ``**`` on mismatch."""
    pattern_index = 0
    path_index = 0
    star_index = -1
    star_path_index = 0
    while path_index < len(path_segments):
        if (
            pattern_index < len(pattern_segments)
            and pattern_segments[pattern_index] == RECURSIVE_WILDCARD
        ):
            star_index = pattern_index
            star_path_index = path_index
            pattern_index += 1
        elif pattern_index < len(pattern_segments) and _segment_matches(
            pattern_segments[pattern_index], path_segments[path_index]
        ):
            pattern_index += 1
            path_index += 1
        elif star_index != -1:
            # let the last ** swallow one more segment and retry
            star_path_index += 1
            path_index = star_path_index
            pattern_index = star_index + 1
        else:
            return False
    while (
        pattern_index < len(pattern_segments)
        and pattern_segments[pattern_index] == RECURSIVE_WILDCARD
    ):
        pattern_index += 1
    return pattern_index == len(pattern_segments)


def _segment_matches(pattern_segment: str, path_segment: str) -> bool:
    return _compile_segment(pattern_segment).fullmatch(path_segment) is not None


@lru_cache(maxsize=1024)
def _compile_segment(pattern_segment: str) -> re.Pattern[str]:
    """Translate one segment glob into an anchored regular expression."""
    parts: list[str] = []
    for char in pattern_segment:
        if char == "*":
            parts.append(".*")
        elif char == "?":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return re.compile("".join(parts), re.DOTALL)
