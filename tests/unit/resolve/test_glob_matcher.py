"""Unit tests for Ant-style glob matching."""

from __future__ import annotations

import pytest

from resolve.glob_matcher import AntPathMatcher, literal_prefix


@pytest.mark.parametrize(
    ("pattern", "path", "expected"),
    [
        ("*.txt", "a.txt", True),
        ("*.txt", "dir/a.txt", False),
        ("dir/*.txt", "dir/a.txt", True),
        ("dir/*.txt", "dir/sub/a.txt", False),
        ("**/*.txt", "a.txt", True),
        ("**/*.txt", "x/y/z/a.txt", True),
        ("**/*.txt", "x/y/z/a.csv", False),
        ("dir/**", "dir", True),
        ("dir/**", "dir/a/b", True),
        ("dir/**/end", "dir/end", True),
        ("dir/**/end", "dir/a/b/end", True),
        ("dir/**/end", "dir/a/b/end/more", False),
        ("**", "", True),
        ("?.log", "a.log", True),
        ("?.log", "ab.log", False),
        ("file[1].txt", "file[1].txt", True),
        ("file[1].txt", "file1.txt", False),
        ("a/*", "a//b", False),
        ("logs-*", "logs-2024", True),
        ("logs-*", "data-2024", False),
    ],
)
def test_match(pattern: str, path: str, expected: bool) -> None:
    """Matcher should follow segment-aware glob semantics."""
    assert AntPathMatcher().match(pattern, path) is expected


def test_is_pattern_detects_wildcards() -> None:
    """Only star and question mark should mark a pattern."""
    matcher = AntPathMatcher()

    assert matcher.is_pattern("bucket/*.txt")
    assert matcher.is_pattern("file?.txt")
    assert not matcher.is_pattern("bucket/file[1].txt")


def test_literal_prefix_stops_at_first_wildcard() -> None:
    """Literal prefix should cover text before the first wildcard."""
    assert literal_prefix("dir/sub/*.txt") == "dir/sub"
    assert literal_prefix("logs/**") == "logs"
    assert literal_prefix("dir/file?.txt") == "dir/file"
    assert literal_prefix("**/x") == ""
    assert literal_prefix("plain/key") == "plain/key"
