"""
Self-contained file discovery module with gitignore-aware globbing
and `!`-negated exclusion patterns.

No imports from `because` outside this package.

Usage::

    from because.file_resolver import FileResolver, FileResolverConfig

    config = FileResolverConfig(patterns=["**", "!.git/**", "!node_modules/**"])
    files = FileResolver(config).discover(".")
"""

from because.file_resolver.defaults import DEFAULT_PATTERNS, NEGATION_MARKER
from because.file_resolver.matcher import GlobMatcher, PathMatcher
from because.file_resolver.resolver import FileResolver, discover_files
from because.file_resolver.types import FileResolverConfig

__all__ = [
    "DEFAULT_PATTERNS",
    "NEGATION_MARKER",
    "FileResolver",
    "FileResolverConfig",
    "GlobMatcher",
    "PathMatcher",
    "discover_files",
]
