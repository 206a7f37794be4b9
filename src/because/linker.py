"""
Idempotent symbolic-link setup.

Every entry directly under the project's source folder (`because/` by default)
gets a relative symlink in the link root (`node_modules/because/` by default).
Existing correct links are left alone. Anything else already sitting at a
link's path stops the run: user content is never replaced.
"""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from because.output import Reporter


class LinkOutcome(str, Enum):
    ALREADY_CORRECT = "already_correct"
    CONFLICTING_LINK = "conflicting_link"
    CONFLICTING_NON_LINK = "conflicting_non_link"
    CREATED = "created"
    CREATION_FAILED = "creation_failed"

    @property
    def is_failure(self) -> bool:
        return self not in (LinkOutcome.ALREADY_CORRECT, LinkOutcome.CREATED)


@dataclass(frozen=True)
class LinkSpec:
    """A desired link: `link_path` should be a symlink whose text is `points_to`."""

    name: str
    link_path: Path
    points_to: str

    @property
    def intended_target(self) -> str:
        """Absolute, canonical path the link should resolve to."""
        return os.path.realpath(self.link_path.parent / self.points_to)


LinkResult = tuple[LinkSpec, LinkOutcome]


def list_link_specs(source_folder: Path, link_root: Path) -> list[LinkSpec]:
    """One spec per entry directly under `source_folder`, sorted by name."""
    specs: list[LinkSpec] = []
    for name in sorted(os.listdir(source_folder)):
        # Relative from the link's directory, e.g. `../../because/<name>`
        points_to = os.path.relpath(source_folder / name, link_root)
        specs.append(LinkSpec(name=name, link_path=link_root / name, points_to=points_to))
    return specs


def _display(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


def check_link(spec: LinkSpec) -> LinkOutcome | None:
    """
    Inspect the link's path without following it. Returns `None` when nothing
    is there yet and the link should be created.
    """
    try:
        st = os.lstat(spec.link_path)
    except FileNotFoundError:
        return None
    except OSError:
        # Link root is a file, or can't be searched
        return LinkOutcome.CREATION_FAILED
    if not stat.S_ISLNK(st.st_mode):
        return LinkOutcome.CONFLICTING_NON_LINK
    if os.path.realpath(spec.link_path) == spec.intended_target:
        return LinkOutcome.ALREADY_CORRECT
    return LinkOutcome.CONFLICTING_LINK


def create_link(spec: LinkSpec) -> LinkOutcome:
    try:
        os.symlink(spec.points_to, spec.link_path)
    except OSError:
        return LinkOutcome.CREATION_FAILED
    return LinkOutcome.CREATED


def _report(spec: LinkSpec, outcome: LinkOutcome, source_folder: Path, reporter: Reporter) -> None:
    shown = _display(spec.link_path)
    if outcome is LinkOutcome.CREATED:
        reporter.success(f" ✓ {shown} (Created a new symbolic link)")
    elif outcome is LinkOutcome.ALREADY_CORRECT:
        reporter.info(f" ✓ {shown} (The required symbolic link already exists there)")
    elif outcome is LinkOutcome.CONFLICTING_LINK:
        reporter.error(f" ✗ {shown} (Error: A different symbolic link already exists there)")
        reporter.warn(
            f"   Rename or delete the corresponding symbolic link in your "
            f"{_display(spec.link_path.parent)}/ directory and try again"
        )
    elif outcome is LinkOutcome.CONFLICTING_NON_LINK:
        reporter.error(f" ✗ {shown} (Error: A file/directory already exists there)")
        reporter.warn(
            f"   Rename or delete the corresponding file/directory in your "
            f"{_display(source_folder)}/ directory and try again"
        )
    else:
        reporter.error(f" ✗ {shown} (Error: Unable to create the symbolic link there)")
        reporter.warn("   Ensure that you have right permissions for that path")


def reconcile(
    source_folder: str | Path,
    link_root: str | Path,
    allowed: bool,
    reporter: Reporter,
    note: str | None = None,
) -> list[LinkResult]:
    """
    Bring `link_root` in line with the entries of `source_folder`.

    Returns the outcome for each entry processed. Processing stops at the first
    failure, which is then the last element of the result.
    """
    if not allowed:
        if note:
            reporter.info(note)
        return []

    source_path = Path(source_folder)
    link_root_path = Path(link_root)
    if not source_path.is_dir():
        reporter.info(f"Nothing to link: {_display(source_path)}/ does not exist")
        return []

    results: list[LinkResult] = []
    for spec in list_link_specs(source_path, link_root_path):
        outcome = check_link(spec)
        if outcome is None:
            outcome = create_link(spec)
        _report(spec, outcome, source_path, reporter)
        results.append((spec, outcome))
        if outcome.is_failure:
            break
    return results


def reconcile_failed(results: list[LinkResult]) -> bool:
    return bool(results) and results[-1][1].is_failure
