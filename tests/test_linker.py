"""Tests for symbolic-link reconciliation."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from because.linker import (
    LinkOutcome,
    check_link,
    list_link_specs,
    reconcile,
    reconcile_failed,
)
from because.output import Reporter


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A project with `because/` docs and an installed `node_modules/because/`."""
    because = tmp_path / "because"
    because.mkdir()
    (because / "a.md").write_text("# A")
    (because / "b.md").write_text("# B")
    (because / "project").mkdir()
    (because / "project" / "deployment.md").write_text("# Deploy")
    (tmp_path / "node_modules" / "because").mkdir(parents=True)
    return tmp_path


def _run(project: Path, allowed: bool = True, note: str | None = None):
    return reconcile(
        project / "because", project / "node_modules" / "because", allowed, Reporter(), note
    )


def test_outcome_failure_classification():
    assert not LinkOutcome.CREATED.is_failure
    assert not LinkOutcome.ALREADY_CORRECT.is_failure
    assert LinkOutcome.CONFLICTING_LINK.is_failure
    assert LinkOutcome.CONFLICTING_NON_LINK.is_failure
    assert LinkOutcome.CREATION_FAILED.is_failure


def test_link_specs_point_back_relatively(project: Path):
    specs = list_link_specs(project / "because", project / "node_modules" / "because")
    assert [s.name for s in specs] == ["a.md", "b.md", "project"]
    assert specs[0].points_to == os.path.join("..", "..", "because", "a.md")
    assert specs[0].link_path == project / "node_modules" / "because" / "a.md"
    assert specs[0].intended_target == os.path.realpath(project / "because" / "a.md")


def test_creates_links_for_files_and_directories(project: Path, capsys: pytest.CaptureFixture[str]):
    results = _run(project)
    assert [outcome for _, outcome in results] == [LinkOutcome.CREATED] * 3
    assert not reconcile_failed(results)

    link_root = project / "node_modules" / "because"
    assert os.readlink(link_root / "a.md") == "../../because/a.md"
    assert (link_root / "project" / "deployment.md").read_text() == "# Deploy"
    assert "Created a new symbolic link" in capsys.readouterr().out


def test_second_run_is_a_no_op(project: Path, capsys: pytest.CaptureFixture[str]):
    _run(project)
    link = project / "node_modules" / "because" / "a.md"
    before = os.lstat(link)

    results = _run(project)
    assert [outcome for _, outcome in results] == [LinkOutcome.ALREADY_CORRECT] * 3
    after = os.lstat(link)
    assert (before.st_ino, before.st_mtime_ns) == (after.st_ino, after.st_mtime_ns)
    assert "already exists there" in capsys.readouterr().out


def test_absolute_link_to_the_right_place_is_accepted(project: Path):
    link = project / "node_modules" / "because" / "a.md"
    link.symlink_to(project / "because" / "a.md")
    results = _run(project)
    assert results[0][1] is LinkOutcome.ALREADY_CORRECT
    assert os.readlink(link) == str(project / "because" / "a.md")


def test_conflicting_non_link_halts(project: Path, capsys: pytest.CaptureFixture[str]):
    blocker = project / "node_modules" / "because" / "a.md"
    blocker.write_text("user content")

    results = _run(project)
    assert [(spec.name, outcome) for spec, outcome in results] == [
        ("a.md", LinkOutcome.CONFLICTING_NON_LINK)
    ]
    assert reconcile_failed(results)
    assert blocker.read_text() == "user content"
    assert not blocker.is_symlink()
    # Later entries were never processed
    assert not (project / "node_modules" / "because" / "b.md").exists()

    err = capsys.readouterr().err
    assert "A file/directory already exists there" in err
    assert "Rename or delete" in err


def test_conflicting_directory_halts(project: Path):
    (project / "node_modules" / "because" / "project").mkdir()
    results = _run(project)
    assert [outcome for _, outcome in results] == [
        LinkOutcome.CREATED,
        LinkOutcome.CREATED,
        LinkOutcome.CONFLICTING_NON_LINK,
    ]


def test_conflicting_link_halts(project: Path, capsys: pytest.CaptureFixture[str]):
    elsewhere = project / "elsewhere.md"
    elsewhere.write_text("other")
    link = project / "node_modules" / "because" / "a.md"
    link.symlink_to(elsewhere)

    results = _run(project)
    assert [outcome for _, outcome in results] == [LinkOutcome.CONFLICTING_LINK]
    assert os.readlink(link) == str(elsewhere)
    assert not (project / "node_modules" / "because" / "b.md").exists()
    assert "A different symbolic link already exists there" in capsys.readouterr().err


def test_dangling_link_is_a_conflict(project: Path):
    link = project / "node_modules" / "because" / "a.md"
    link.symlink_to(project / "missing.md")
    assert check_link(list_link_specs(project / "because", link.parent)[0]) is (
        LinkOutcome.CONFLICTING_LINK
    )


def test_creation_failure_halts(project: Path, capsys: pytest.CaptureFixture[str]):
    # No link root folder to create links in
    results = reconcile(project / "because", project / "missing" / "because", True, Reporter())
    assert [outcome for _, outcome in results] == [LinkOutcome.CREATION_FAILED]
    assert reconcile_failed(results)
    err = capsys.readouterr().err
    assert "Unable to create the symbolic link there" in err
    assert "permissions" in err


def test_not_allowed_touches_nothing(project: Path, capsys: pytest.CaptureFixture[str]):
    results = _run(project, allowed=False, note="Note: linking skipped")
    assert results == []
    assert not reconcile_failed(results)
    assert os.listdir(project / "node_modules" / "because") == []
    assert "Note: linking skipped" in capsys.readouterr().out


def test_missing_source_folder(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    results = reconcile(tmp_path / "because", tmp_path / "node_modules" / "because", True, Reporter())
    assert results == []
    assert "Nothing to link" in capsys.readouterr().out


def test_link_root_is_a_file_fails_per_entry(project: Path, capsys: pytest.CaptureFixture[str]):
    link_root = project / "node_modules" / "because"
    link_root.rmdir()
    link_root.write_text("not a directory")

    results = _run(project)
    assert [(spec.name, outcome) for spec, outcome in results] == [
        ("a.md", LinkOutcome.CREATION_FAILED)
    ]
    assert reconcile_failed(results)
    assert link_root.read_text() == "not a directory"
    err = capsys.readouterr().err
    assert "a.md (Error: Unable to create the symbolic link there)" in err
    assert "permissions" in err
