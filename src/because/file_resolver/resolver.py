"""
FileResolver: main entry point for file discovery.

Expands a pattern set against a directory tree into a deduplicated list of
relative file paths, sorted case-insensitively, applying all configured filters.
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from pathlib import Path

import pathspec

from because.file_resolver.gitignore import load_gitignore
from because.file_resolver.matcher import GlobMatcher
from because.file_resolver.types import FileResolverConfig

_GitignoreChain = list[tuple[Path, pathspec.PathSpec]]


def case_insensitive_key(path: str) -> tuple[str, str]:
    """Sort key: lowercase first, original spelling to break ties."""
    return (path.lower(), path)


def _join(rel_dir: Path, name: str) -> str:
    if rel_dir == Path("."):
        return name
    return f"{rel_dir.as_posix()}/{name}"


class FileResolver:
    """
    Discovers files matching the configured inclusion patterns, minus anything
    matched by an exclusion pattern or ignored by a `.gitignore` in the tree.

    Directories are never returned, only the files they contain.
    """

    def __init__(self, config: FileResolverConfig) -> None:
        self._config: FileResolverConfig = config
        self._include: GlobMatcher = GlobMatcher(config.inclusions)
        self._exclude: GlobMatcher = GlobMatcher(config.exclusions)
        # Cache gitignore specs per directory to avoid re-reading from disk.
        self._gitignore_cache: dict[Path, pathspec.PathSpec | None] = {}

    def discover(self, root: str | Path = ".") -> list[str]:
        """
        Walk `root` and return matching files as POSIX paths relative to it.

        The result is sorted case-insensitively; callers rely on that order for
        display and search.
        """
        if not self._include:
            return []

        root_path = Path(root)
        found: set[str] = set()
        visited: set[str] = set()

        for dirpath, dirnames, filenames in os.walk(
            root_path, followlinks=self._config.follow_symlinks
        ):
            current = Path(dirpath)
            rel_dir = current.relative_to(root_path)

            if self._config.follow_symlinks:
                # A symlink back up the tree would otherwise walk forever
                real = os.path.realpath(current)
                if real in visited:
                    dirnames[:] = []
                    continue
                visited.add(real)

            chain: _GitignoreChain = []
            if self._config.respect_gitignore:
                chain = self._get_gitignore_chain(current, root_path)

            # Prune excluded directories in-place (prevents descent)
            dirnames[:] = [
                d
                for d in dirnames
                if not self._is_dir_excluded(_join(rel_dir, d), current / d, chain)
            ]

            for filename in filenames:
                filepath = current / filename
                rel = _join(rel_dir, filename)
                # Follows symlinks: links to files count, dangling links don't
                if not filepath.is_file():
                    continue
                if not self._include.matches(rel) or self._exclude.matches(rel):
                    continue
                if self._is_gitignored(filepath, chain, is_dir=False):
                    continue
                found.add(rel)

        return sorted(found, key=case_insensitive_key)

    def _is_dir_excluded(self, rel: str, path: Path, chain: _GitignoreChain) -> bool:
        """Check if a directory should be pruned during traversal."""
        if self._exclude.covers_directory(rel):
            return True
        return self._is_gitignored(path, chain, is_dir=True)

    def _is_gitignored(self, path: Path, chain: _GitignoreChain, is_dir: bool) -> bool:
        """
        Each `.gitignore` matches paths relative to its own directory. The deepest
        file with a matching rule decides, so a nested `!pattern` can re-include.
        """
        for directory, spec in reversed(chain):
            rel = path.relative_to(directory).as_posix()
            if is_dir:
                rel += "/"
            result = spec.check_file(rel)
            if result.include is not None:
                return result.include
        return False

    def _get_gitignore(self, directory: Path) -> pathspec.PathSpec | None:
        """Load and cache gitignore for a directory."""
        if directory not in self._gitignore_cache:
            self._gitignore_cache[directory] = load_gitignore(directory)
        return self._gitignore_cache[directory]

    def _get_gitignore_chain(self, directory: Path, walk_root: Path) -> _GitignoreChain:
        """Collect all gitignore specs from walk_root down to directory (inclusive)."""
        chain: _GitignoreChain = []
        current = walk_root
        for part in (None, *directory.relative_to(walk_root).parts):
            if part is not None:
                current = current / part
            spec = self._get_gitignore(current)
            if spec is not None:
                chain.append((current, spec))
        return chain


def discover_files(
    patterns: Sequence[str],
    root: str | Path = ".",
    *,
    respect_gitignore: bool = True,
    follow_symlinks: bool = False,
) -> list[str]:
    """Convenience wrapper: build a resolver for `patterns` and walk `root`."""
    config = FileResolverConfig(
        patterns=list(patterns),
        respect_gitignore=respect_gitignore,
        follow_symlinks=follow_symlinks,
    )
    return FileResolver(config).discover(root)
