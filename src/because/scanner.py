"""
Substring scanning over a list of discovered files.

All reads are issued at once as tasks in one task group; results are folded
into the report after the group completes, so match order always follows
discovery order no matter which read finishes first.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class MatchReport:
    """Files that mention the target, in discovery order."""

    matches: list[str] = field(default_factory=list)
    searched: int = 0
    list_only: bool = False

    @property
    def count(self) -> int:
        return len(self.matches)


def _file_contains(path: Path, target: str) -> bool:
    """Plain substring test. Unreadable files count as no match."""
    try:
        content = path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return False
    return target in content


async def scan_async(
    paths: Sequence[str],
    target: str,
    root: str | Path = ".",
    *,
    list_only: bool = False,
) -> MatchReport:
    """Async scan; see `scan`."""
    if list_only:
        return MatchReport(matches=list(paths), searched=len(paths), list_only=True)

    root_path = Path(root)
    async with asyncio.TaskGroup() as group:
        tasks = [
            group.create_task(asyncio.to_thread(_file_contains, root_path / p, target))
            for p in paths
        ]

    matches = [p for p, task in zip(paths, tasks, strict=True) if task.result()]
    return MatchReport(matches=matches, searched=len(paths))


def scan(
    paths: Sequence[str],
    target: str,
    root: str | Path = ".",
    *,
    list_only: bool = False,
) -> MatchReport:
    """
    Report which of `paths` (relative to `root`) contain `target`.

    With `list_only`, nothing is read and the report simply lists `paths`,
    which shows what a search would cover.
    """
    return asyncio.run(scan_async(paths, target, root, list_only=list_only))
