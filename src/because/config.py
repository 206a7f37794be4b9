"""
Search pattern configuration.

Patterns come from a `.becauserc` file in the project root: one glob per line,
`#` starts a comment, blank lines are ignored, and a leading `!` excludes.
Without a readable config the built-in defaults apply.
"""

from __future__ import annotations

from pathlib import Path

from because.file_resolver.defaults import DEFAULT_PATTERNS
from because.output import Reporter

CONFIG_FILENAME = ".becauserc"


def parse_patterns(text: str) -> list[str]:
    """Parse config text into an ordered pattern list."""
    patterns: list[str] = []
    for line in text.splitlines():
        item = line.split("#", 1)[0].strip()
        if item:
            patterns.append(item)
    return patterns


def resolve_patterns(config_text: str | None) -> list[str]:
    """
    Return the active pattern set. `None` (no readable config) means the
    defaults; an existing config that yields no patterns means no files.
    """
    if config_text is None:
        return list(DEFAULT_PATTERNS)
    return parse_patterns(config_text)


def read_config_text(project_dir: Path) -> str | None:
    """Read `.becauserc` from `project_dir`, or `None` if missing or unreadable."""
    try:
        return (project_dir / CONFIG_FILENAME).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None


def load_patterns(project_dir: Path, reporter: Reporter) -> list[str]:
    """Load the pattern set for `project_dir`, falling back to the defaults."""
    config_text = read_config_text(project_dir)
    if config_text is None:
        reporter.verbose("Using default glob patterns for searching in files")
    return resolve_patterns(config_text)
