"""
Decide whether `--setup` should link anything.

Linking only makes sense for a local install into a project. A global install
has no project to link into, and running setup while working on this package
itself would link the package into its own dependency folder.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from enum import Enum
from pathlib import Path


class InstallContext(str, Enum):
    GLOBAL = "global"
    PACKAGE_ITSELF = "package_itself"
    LOCAL = "local"


def detect_install_context(environ: Mapping[str, str] | None = None) -> InstallContext:
    """Infer the install context from the package manager's environment variables."""
    env = os.environ if environ is None else environ
    if env.get("npm_config_global"):
        return InstallContext.GLOBAL
    init_cwd = env.get("INIT_CWD")
    if init_cwd is not None and init_cwd == env.get("PWD"):
        return InstallContext.PACKAGE_ITSELF
    return InstallContext.LOCAL


def project_directory(environ: Mapping[str, str] | None = None) -> Path:
    """The directory the install was started from, else the current directory."""
    env = os.environ if environ is None else environ
    init_cwd = env.get("INIT_CWD")
    return Path(init_cwd) if init_cwd else Path.cwd()


def linking_note(context: InstallContext) -> str | None:
    """Explain why linking is skipped, or `None` if it is allowed."""
    if context is InstallContext.GLOBAL:
        return (
            "Note: Since this package is being installed globally, the \"because/\" paths "
            "are not linked. Install the package locally to make use of symbolic links."
        )
    if context is InstallContext.PACKAGE_ITSELF:
        return (
            "Note: It appears that you are working on the package code since the install "
            "is running inside the package itself. The \"because/\" paths are not linked. "
            "Install the package locally to make use of symbolic links."
        )
    return None
