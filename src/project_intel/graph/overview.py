"""Repository-level overviews: directory tree, report and test file listing."""

import logging
from dataclasses import dataclass, field
from typing import Any

from ..filters import PatternFilter
from ..index import RawIndex
from .queries import get_hotspots, get_top_modules
from .storage import DerivedGraph
from .summary import TEST_FILE_RE

logger = logging.getLogger(__name__)


@dataclass
class DirectoryNode:
    """A directory (or file) in the tree built from indexed paths."""

    name: str
    file_count: int = 0
    children: dict[str, "DirectoryNode"] = field(default_factory=dict)

    @property
    def is_directory(self) -> bool:
        return bool(self.children)

    def to_dict(
        self,
        max_depth: int | None = None,
        include_files: bool = False,
        depth: int = 0,
    ) -> dict[str, Any]:
        """Convert to nested dictionaries, children sorted by name.

        Args:
            max_depth: Directory levels to expand below this node
            include_files: Include leaf files as children
            depth: Current depth (internal)
        """
        result: dict[str, Any] = {"name": self.name, "files": self.file_count}
        if not self.is_directory:
            return result

        children = []
        if max_depth is None or depth < max_depth:
            for name in sorted(self.children):
                child = self.children[name]
                if child.is_directory:
                    children.append(child.to_dict(max_depth, include_files, depth + 1))
                elif include_files:
                    children.append({"name": child.name})
        result["children"] = children
        return result


def build_directory_tree(paths: list[str]) -> DirectoryNode:
    """Build a directory tree with per-directory file counts.

    Args:
        paths: File paths using ``/`` separators

    Returns:
        Root node named ``.``
    """
    root = DirectoryNode(name=".")
    for path in paths:
        node = root
        for part in path.split("/"):
            if part not in node.children:
                node.children[part] = DirectoryNode(name=part)
            node = node.children[part]
            node.file_count += 1
    root.file_count = len(paths)
    return root


def list_project_files(raw: RawIndex, pattern_filter: PatternFilter) -> list[str]:
    """Non-excluded code and documentation paths."""
    return pattern_filter.filter_paths(raw.all_paths())


def find_test_files(raw: RawIndex, pattern_filter: PatternFilter) -> list[str]:
    """Non-excluded code files whose name follows a test naming convention."""
    return [f for f in pattern_filter.filter_paths(raw.f) if TEST_FILE_RE.search(f)]


def build_report(
    raw: RawIndex,
    graph: DerivedGraph,
    pattern_filter: PatternFilter,
    focus: str | None = None,
    top: int = 10,
) -> dict[str, Any]:
    """Aggregate statistics, hotspots and most-imported modules.

    Args:
        raw: Loaded index document
        graph: Derived graph
        pattern_filter: Excluded file paths are not counted
        focus: Optional path prefix restricting the file statistics
        top: Entries per ranking

    Returns:
        Report dictionary
    """
    files = [
        f for f in pattern_filter.filter_paths(raw.f)
        if not focus or f.startswith(focus)
    ]

    languages: dict[str, int] = {}
    docs = 0
    tests = 0
    for file_path in files:
        language = raw.language_of(file_path)
        languages[language] = languages.get(language, 0) + 1
        if TEST_FILE_RE.search(file_path):
            tests += 1
        if file_path.lower().endswith(".md"):
            docs += 1

    inbound, outbound = get_hotspots(graph, top)
    logger.debug(f"Report over {len(files)} files (focus={focus!r})")

    return {
        "focus": focus,
        "stats": {
            "total_files": len(files),
            "languages": languages,
            "docs": docs,
            "tests": tests,
        },
        "top_inbound": [{"name": h.name, "count": h.count} for h in inbound],
        "top_outbound": [{"name": h.name, "count": h.count} for h in outbound],
        "top_modules": [
            {"module": h.name, "count": h.count} for h in get_top_modules(graph, top)
        ],
    }
