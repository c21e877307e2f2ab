"""Path exclusion filtering for indexed files."""

from .patterns import (
    DEFAULT_EXCLUSIONS,
    ExclusionPattern,
    PatternFilter,
    read_ignore_file,
)

__all__ = [
    "DEFAULT_EXCLUSIONS",
    "ExclusionPattern",
    "PatternFilter",
    "read_ignore_file",
]
