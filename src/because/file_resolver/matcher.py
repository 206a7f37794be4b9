"""
Path matching behind a small `PathMatcher` capability, with a `pathspec`
implementation for root-anchored, case-insensitive globs.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

import pathspec


class PathMatcher(Protocol):
    """Anything that can tell whether a relative POSIX path is matched."""

    def matches(self, path: str) -> bool: ...


def _anchor(pattern: str) -> str:
    """
    Anchor a glob at the root so `*.md` means top-level files only, the way
    shell globs behave (gitignore syntax would otherwise match at any depth).
    """
    while pattern.startswith("./"):
        pattern = pattern[2:]
    if not pattern.startswith("/"):
        pattern = "/" + pattern
    return pattern


class GlobMatcher:
    """
    Glob matcher over a list of patterns (no negation markers).

    `*` and `?` stay within one path segment, `**` spans segments, and a
    pattern naming a directory covers everything below it. Case is folded on
    both sides so matching is case-insensitive on every platform.
    """

    def __init__(self, patterns: Iterable[str]) -> None:
        self._patterns: list[str] = [_anchor(p.strip()).lower() for p in patterns if p.strip()]
        self._spec: pathspec.PathSpec = pathspec.PathSpec.from_lines("gitignore", self._patterns)

    def __bool__(self) -> bool:
        return bool(self._patterns)

    def matches(self, path: str) -> bool:
        return self._spec.match_file(path.lower())

    def covers_directory(self, path: str) -> bool:
        """True if the directory itself is matched, so nothing below it can escape."""
        return self._spec.match_file(path.lower().rstrip("/") + "/")
