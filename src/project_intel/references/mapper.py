"""Recursive mapping of documentation ``@path`` references into import trees."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .models import (
    ComponentImportMap,
    ComponentTree,
    ImportMap,
    ImportTreeNode,
    ImportTreeStats,
    ReferenceKind,
)
from .resolver import ReferenceResolver, extract_references

logger = logging.getLogger(__name__)

MEMORY_DOCUMENT = "CLAUDE.md"
COMPONENT_KINDS = ("memory", "skills", "commands", "agents")


@dataclass(frozen=True)
class _Ancestry:
    """Immutable chain of documents from the root to the current node.

    Each branch extends its parent's chain without copying it, so sibling
    branches never see each other's documents.
    """

    path: str
    parent: "_Ancestry | None" = None

    def __contains__(self, path: object) -> bool:
        node: _Ancestry | None = self
        while node is not None:
            if node.path == path:
                return True
            node = node.parent
        return False

    def extend(self, path: str) -> "_Ancestry":
        return _Ancestry(path, self)


class ImportTreeMapper:
    """Builds import trees by following ``@path`` references between documents."""

    def __init__(self, project_root: Path, home_dir: Path | None = None):
        """Initialize the mapper.

        Args:
            project_root: Root directory of the project
            home_dir: Directory that ``~/`` references expand to
        """
        self._resolver = ReferenceResolver(project_root, home_dir)

    def map_document(self, document: str | Path) -> ImportTreeNode:
        """Build the import tree rooted at a document.

        Args:
            document: Path of the root document (relative paths are taken
                      from the project root)

        Returns:
            Root ImportTreeNode (a missing marker if the root does not exist)
        """
        root_path = Path(document)
        if not root_path.is_absolute():
            root_path = self._resolver.project_root / root_path
        path = os.path.normpath(os.path.abspath(root_path))

        if not os.path.isfile(path):
            return ImportTreeNode(
                file=self._resolver.display_path(path),
                path=path,
                kind=ReferenceKind.MISSING,
                depth=0,
            )
        return self._map(path, depth=0, ancestry=None)

    def _map(self, path: str, depth: int, ancestry: _Ancestry | None) -> ImportTreeNode:
        display = self._resolver.display_path(path)
        try:
            content = Path(path).read_bytes()
        except OSError as e:
            logger.warning(f"Could not read {path}: {e}")
            return ImportTreeNode(file=display, path=path, kind=ReferenceKind.MISSING, depth=depth)

        ancestry = ancestry.extend(path) if ancestry else _Ancestry(path)
        node = ImportTreeNode(file=display, path=path, size=len(content), depth=depth)

        text = content.decode("utf-8", errors="replace")
        for reference in extract_references(text):
            resolved = self._resolver.resolve(reference, path)

            if resolved.is_external:
                node.imports.append(ImportTreeNode(
                    file=reference,
                    path=resolved.resolved_path,
                    kind=ReferenceKind.EXTERNAL,
                    depth=depth + 1,
                    exists=resolved.exists,
                ))
            elif not resolved.exists:
                node.imports.append(ImportTreeNode(
                    file=reference,
                    path=resolved.resolved_path,
                    kind=ReferenceKind.MISSING,
                    depth=depth + 1,
                ))
            elif resolved.resolved_path in ancestry:
                logger.debug(f"Circular reference {display} -> {reference}")
                node.imports.append(ImportTreeNode(
                    file=self._resolver.display_path(resolved.resolved_path),
                    path=resolved.resolved_path,
                    kind=ReferenceKind.CIRCULAR,
                    depth=depth + 1,
                ))
            else:
                node.imports.append(self._map(resolved.resolved_path, depth + 1, ancestry))

        return node


def compute_import_stats(trees: list[ImportTreeNode]) -> ImportTreeStats:
    """Aggregate statistics over import trees, visiting every node once.

    Args:
        trees: Root nodes

    Returns:
        ImportTreeStats
    """
    stats = ImportTreeStats()
    stack = list(reversed(trees))
    while stack:
        node = stack.pop()
        stats.total_files += 1
        stats.max_depth = max(stats.max_depth, node.depth)
        stats.total_size += node.size
        if node.kind == ReferenceKind.EXTERNAL:
            stats.external_files += 1
        else:
            stats.internal_files += 1
        if node.kind == ReferenceKind.CIRCULAR:
            stats.circular_references += 1
        elif node.kind == ReferenceKind.MISSING:
            stats.missing_files += 1
        stack.extend(reversed(node.imports))
    return stats


def map_imports(
    root_document: str | Path,
    project_root: Path,
    home_dir: Path | None = None,
) -> ImportMap:
    """Map the import tree of a root document with summary statistics.

    Args:
        root_document: Document to start from
        project_root: Root directory of the project
        home_dir: Directory that ``~/`` references expand to

    Returns:
        ImportMap
    """
    mapper = ImportTreeMapper(project_root, home_dir)
    tree = mapper.map_document(root_document)
    return ImportMap(root=str(root_document), tree=tree, summary=compute_import_stats([tree]))


def _component_documents(kind: str, project_root: Path) -> list[tuple[str, Path]] | str:
    """Find the root documents of a component kind, or an error message."""
    if kind == "memory":
        memory = project_root / MEMORY_DOCUMENT
        if not memory.is_file():
            return f"{MEMORY_DOCUMENT} not found"
        return [(MEMORY_DOCUMENT, memory)]

    directory = project_root / ".claude" / kind
    if not directory.is_dir():
        return f".claude/{kind} directory not found"

    if kind == "skills":
        return [
            (skill.name, skill / "SKILL.md")
            for skill in sorted(directory.iterdir())
            if skill.is_dir() and (skill / "SKILL.md").is_file()
        ]
    return [
        (document.stem, document)
        for document in sorted(directory.iterdir())
        if document.is_file() and document.suffix == ".md"
    ]


def map_component_imports(
    kind: str,
    project_root: Path,
    home_dir: Path | None = None,
) -> ComponentImportMap:
    """Map the import trees of every document of a component kind.

    Kinds:
    - ``memory``: the project's CLAUDE.md
    - ``skills``: ``.claude/skills/<name>/SKILL.md``
    - ``commands``: ``.claude/commands/*.md``
    - ``agents``: ``.claude/agents/*.md``

    Args:
        kind: Component kind
        project_root: Root directory of the project
        home_dir: Directory that ``~/`` references expand to

    Returns:
        ComponentImportMap (with ``error`` set if the documents are absent)

    Raises:
        ValueError: If the kind is unknown
    """
    if kind not in COMPONENT_KINDS:
        raise ValueError(f"Unknown component kind: {kind}. Must be one of {COMPONENT_KINDS}")

    documents = _component_documents(kind, project_root)
    if isinstance(documents, str):
        logger.info(f"No {kind} documents: {documents}")
        return ComponentImportMap(kind=kind, error=documents)

    mapper = ImportTreeMapper(project_root, home_dir)
    components = [
        ComponentTree(name=name, tree=mapper.map_document(path))
        for name, path in documents
    ]
    return ComponentImportMap(
        kind=kind,
        components=components,
        summary=compute_import_stats([c.tree for c in components]),
    )
