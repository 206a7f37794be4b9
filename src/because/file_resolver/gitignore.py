"""Gitignore handling using pathspec."""

from __future__ import annotations

from pathlib import Path

import pathspec


def _read_ignore_file(path: Path) -> list[str] | None:
    """
    Return the meaningful lines of an ignore file, or `None` if it is missing,
    unreadable, or not valid UTF-8.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None
    return [line for line in text.splitlines() if line.strip() and not line.strip().startswith("#")]


def load_gitignore(directory: Path) -> pathspec.PathSpec | None:
    """
    Read `.gitignore` in the given directory and return a compiled `PathSpec`,
    or `None` if the file doesn't exist or is empty.
    """
    lines = _read_ignore_file(directory / ".gitignore")
    if not lines:
        return None
    return pathspec.PathSpec.from_lines("gitignore", lines)
