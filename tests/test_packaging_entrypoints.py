"""Packaging entrypoint tests."""

from __future__ import annotations

import tomllib
from pathlib import Path


def test_because_entrypoint() -> None:
    """The `because` command should point to the CLI entrypoint."""
    pyproject = Path(__file__).resolve().parents[1] / "pyproject.toml"
    data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
    assert data["project"]["scripts"]["because"] == "because.cli:main"
