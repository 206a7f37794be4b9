"""Configuration types for file resolution."""

from __future__ import annotations

from dataclasses import dataclass, field

from because.file_resolver.defaults import DEFAULT_PATTERNS, NEGATION_MARKER


@dataclass
class FileResolverConfig:
    """
    Configuration for file discovery and filtering.

    `patterns` is the full pattern set: plain entries include, `!`-prefixed
    entries exclude. An empty list discovers nothing.
    `follow_symlinks=False` keeps symlinked directories out of the walk.
    """

    patterns: list[str] = field(default_factory=lambda: list(DEFAULT_PATTERNS))
    respect_gitignore: bool = True
    follow_symlinks: bool = False

    @property
    def inclusions(self) -> list[str]:
        """Patterns without the negation marker."""
        return [p for p in self.patterns if not p.startswith(NEGATION_MARKER)]

    @property
    def exclusions(self) -> list[str]:
        """Negated patterns, with the marker stripped."""
        return [
            p[len(NEGATION_MARKER) :]
            for p in self.patterns
            if p.startswith(NEGATION_MARKER) and len(p) > len(NEGATION_MARKER)
        ]
