"""Gitignore-style exclusion patterns for indexed paths."""

import hashlib
import logging
import posixpath
import re
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)


# Patterns that are always excluded, ahead of the project's ignore rules
DEFAULT_EXCLUSIONS: tuple[str, ...] = (
    # === Tool scripts ===
    "project-intel.mjs",
    "project-intel.js",
    "project_intel.py",

    # === Archives ===
    "**/archive/**",
    "**/archived/**",
    "**/.archive/**",
    "**/.archived/**",
    "Archive*.zip",
    "archive.zip",

    # === Dependencies / VCS / build output ===
    "node_modules/**",
    ".next/**",
    ".git/**",
    "coverage/**",
    ".vercel/**",
    "*.tsbuildinfo",

    # === Editor and backup files ===
    ".DS_Store",
    "*.backup",
    "*.bak",
    "*.old",
    ".backups/**",
)


def read_ignore_file(path: Path) -> list[str]:
    """Read exclusion patterns from an ignore file.

    Blank lines and ``#`` comments are skipped. A missing file yields no
    patterns.

    Args:
        path: Path to the ignore file (usually ``.gitignore``)

    Returns:
        Patterns in file order
    """
    if not path.is_file():
        return []

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Could not read ignore file {path}: {e}")
        return []

    patterns = []
    for line in content.splitlines():
        line = line.strip()
        if line and not line.startswith("#"):
            patterns.append(line)
    return patterns


def _glob_to_regex(pattern: str) -> re.Pattern[str]:
    """Compile a glob with ``*`` and ``**`` wildcards to an anchored regex."""
    parts: list[str] = []
    i = 0
    n = len(pattern)
    while i < n:
        if pattern.startswith("**", i):
            at_segment_start = i == 0 or pattern[i - 1] == "/"
            followed_by_slash = i + 2 < n and pattern[i + 2] == "/"
            if at_segment_start and followed_by_slash:
                # "**/" spans zero or more leading segments
                parts.append("(?:.*/)?")
                i += 3
                continue
            if parts and parts[-1] == "/" and i + 2 == n:
                # "/**" spans zero or more trailing segments
                parts[-1] = "(?:/.*)?"
                i += 2
                continue
            parts.append(".*")
            i += 2
        elif pattern[i] == "*":
            parts.append("[^/]*")
            i += 1
        else:
            parts.append(re.escape(pattern[i]))
            i += 1
    return re.compile("^" + "".join(parts) + "$")


class ExclusionPattern:
    """A single compiled exclusion rule."""

    def __init__(self, pattern: str):
        self.pattern = pattern
        body = pattern[1:] if pattern.startswith("/") else pattern

        self._directory: str | None = None
        self._regex: re.Pattern[str] | None = None
        self._match_basename = False
        self._literal = body

        if body.endswith("/"):
            self._directory = body[:-1]
        elif "**" in body:
            self._regex = _glob_to_regex(body)
        elif "*" in body:
            self._regex = _glob_to_regex(body)
            self._match_basename = True

    def matches(self, path: str) -> bool:
        """Check whether a path is matched by this rule."""
        if self._directory is not None:
            directory = self._directory
            return (
                path == directory
                or path.startswith(f"{directory}/")
                or f"/{directory}/" in path
            )

        if self._regex is not None:
            if self._regex.match(path):
                return True
            return self._match_basename and bool(
                self._regex.match(posixpath.basename(path))
            )

        literal = self._literal
        return (
            path == literal
            or path.endswith(f"/{literal}")
            or posixpath.basename(path) == literal
        )

    def __repr__(self) -> str:
        return f"ExclusionPattern({self.pattern!r})"


class PatternFilter:
    """Ordered set of exclusion patterns compiled into a path matcher.

    Matching is a pure OR over all patterns: there is no precedence and no
    negation, so pattern order never changes the outcome.
    """

    def __init__(self, patterns: Iterable[str] = DEFAULT_EXCLUSIONS):
        self._patterns = tuple(patterns)
        self._compiled = [ExclusionPattern(p) for p in self._patterns]
        self._cache_key = hashlib.sha256(
            "\n".join(self._patterns).encode()
        ).hexdigest()

    @classmethod
    def from_project(
        cls,
        project_root: Path,
        ignore_file: str | None = ".gitignore",
        extra_patterns: Iterable[str] = (),
    ) -> "PatternFilter":
        """Build a filter from the defaults plus the project's ignore file.

        Args:
            project_root: Root directory of the project
            ignore_file: Ignore file name relative to the root (None to skip)
            extra_patterns: Additional patterns appended last

        Returns:
            PatternFilter instance
        """
        patterns = list(DEFAULT_EXCLUSIONS)
        if ignore_file:
            ignore_patterns = read_ignore_file(project_root / ignore_file)
            logger.debug(f"Loaded {len(ignore_patterns)} patterns from {ignore_file}")
            patterns.extend(ignore_patterns)
        patterns.extend(extra_patterns)
        return cls(patterns)

    @property
    def patterns(self) -> tuple[str, ...]:
        """The pattern list in evaluation order."""
        return self._patterns

    @property
    def cache_key(self) -> str:
        """Content-derived key: equal pattern lists share a key."""
        return self._cache_key

    def exclude(self, path: str) -> bool:
        """Check whether a path is dropped by any pattern.

        Args:
            path: Project-relative path using ``/`` separators

        Returns:
            True if at least one pattern matches
        """
        return any(pattern.matches(path) for pattern in self._compiled)

    def filter_paths(self, paths: Iterable[str]) -> list[str]:
        """Return the paths that are not excluded, preserving order."""
        return [path for path in paths if not self.exclude(path)]

    def __len__(self) -> int:
        return len(self._patterns)
