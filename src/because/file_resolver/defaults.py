"""
Default search patterns for file discovery.

Patterns use glob syntax anchored at the project root. A leading `!` marks
an exclusion.
"""

from __future__ import annotations

NEGATION_MARKER = "!"

# Everything, except version control and dependency manager directories.
DEFAULT_PATTERNS: list[str] = [
    "**",
    "!.git/**",
    "!node_modules/**",
]
