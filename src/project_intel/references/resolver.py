"""Extraction and resolution of ``@path`` references in documentation."""

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

# Fenced code blocks are stripped before matching to skip example snippets
CODE_BLOCK_RE = re.compile(r"```.*?```", re.DOTALL)

REFERENCE_RE = re.compile(
    r"@((?:\.\.?/|~/|\.claude/|docs/|planning|todo|workbook|event-stream)"
    r"[^\s)>\]]*\.md)"
)


def extract_references(content: str) -> list[str]:
    """Extract ``@path`` references from markdown content.

    Args:
        content: Document text

    Returns:
        Unique reference strings (without ``@``) in first-occurrence order
    """
    without_code = CODE_BLOCK_RE.sub("", content)
    return list(dict.fromkeys(REFERENCE_RE.findall(without_code)))


@dataclass
class ResolvedReference:
    """Result of resolving a documentation reference."""

    original: str  # Reference as written, without "@"
    resolved_path: str  # Absolute, normalised path
    is_external: bool  # True for home-directory references
    exists: bool  # True if the resolved path is an existing file


class ReferenceResolver:
    """Resolves references against the referencing document or the project root."""

    def __init__(self, project_root: Path, home_dir: Path | None = None):
        """Initialize the resolver.

        Args:
            project_root: Root directory of the project
            home_dir: Directory that ``~/`` expands to (defaults to the user's home)
        """
        self.project_root = Path(os.path.abspath(project_root))
        self.home_dir = Path(os.path.abspath(home_dir or Path.home()))

    def resolve(self, reference: str, context_file: str | Path) -> ResolvedReference:
        """Resolve a reference to an absolute path.

        Handles:
        - ``~/...``: user-level document, external to the project
        - ``./...`` and ``../...``: relative to the referencing document
        - anything else: relative to the project root

        Args:
            reference: Reference string without ``@``
            context_file: Absolute path of the referencing document

        Returns:
            ResolvedReference with resolution details
        """
        if reference.startswith("~"):
            resolved = os.path.join(self.home_dir, reference[1:].lstrip("/"))
            return self._build(reference, resolved, is_external=True)

        if reference.startswith("./") or reference.startswith("../"):
            base = os.path.dirname(os.fspath(context_file))
            resolved = os.path.join(base, reference)
            return self._build(reference, resolved, is_external=False)

        resolved = os.path.join(self.project_root, reference)
        return self._build(reference, resolved, is_external=False)

    def _build(self, reference: str, resolved: str, is_external: bool) -> ResolvedReference:
        resolved = os.path.normpath(os.path.abspath(resolved))
        return ResolvedReference(
            original=reference,
            resolved_path=resolved,
            is_external=is_external,
            exists=os.path.isfile(resolved),
        )

    def display_path(self, path: str) -> str:
        """Path relative to the project root when inside it, else absolute."""
        root = os.fspath(self.project_root)
        if path.startswith(root + os.sep):
            return path[len(root) + 1:]
        return path
