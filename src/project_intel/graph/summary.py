"""Human-oriented summaries of one indexed file or one directory."""

import logging
import posixpath
import re

from pydantic import BaseModel, Field

from ..index import RawIndex, SymbolDescriptor
from .storage import DerivedGraph

logger = logging.getLogger(__name__)

MAX_EXAMPLES = 3

TEST_FILE_RE = re.compile(r"__tests__|\.test\.|\.spec\.", re.IGNORECASE)

# Classification rules, first match wins
_CATEGORY_RULES: list[tuple[str, re.Pattern[str]]] = [
    ("pages", re.compile(r"page\.tsx$", re.IGNORECASE)),
    ("layouts", re.compile(r"layout\.tsx$", re.IGNORECASE)),
    ("routes", re.compile(r"route\.(ts|tsx)$", re.IGNORECASE)),
    ("tests", TEST_FILE_RE),
    ("docs", re.compile(r"\.md$", re.IGNORECASE)),
]
_COMPONENT_DIR_RE = re.compile(r"components?/", re.IGNORECASE)
_COMPONENT_FILE_RE = re.compile(r"components", re.IGNORECASE)

# Order in which categories are reported
CATEGORY_ORDER = ("pages", "layouts", "routes", "components", "tests", "docs", "others")
CATEGORY_LABELS = {"others": "other files"}


class FileSummary(BaseModel):
    """Summary of a single indexed file."""

    kind: str = "file"
    path: str = Field(..., description="Indexed path")
    language: str = Field(..., description="Language tag, 'unknown' for documentation-only paths")
    imports: list[str] = Field(default_factory=list, description="Imported module specifiers")
    symbols: list[SymbolDescriptor] = Field(default_factory=list, description="Exported symbols")
    documentation: list[str] | None = Field(
        default=None, description="Documentation excerpt lines, if indexed"
    )


class CategorySummary(BaseModel):
    """File count and example names for one category of a directory."""

    name: str
    label: str
    count: int
    examples: list[str] = Field(default_factory=list)


class DirectorySummary(BaseModel):
    """Summary of the files directly inside a directory prefix."""

    kind: str = "directory"
    path: str = Field(..., description="Directory prefix")
    categories: list[CategorySummary] = Field(default_factory=list)

    @property
    def total_files(self) -> int:
        """Number of files directly inside the directory."""
        return sum(category.count for category in self.categories)


PathSummary = FileSummary | DirectorySummary


def classify_file(file_path: str, target: str = "") -> str:
    """Assign a file to exactly one directory category.

    Args:
        file_path: Indexed file path
        target: The directory prefix being summarised

    Returns:
        Category name from CATEGORY_ORDER
    """
    for name, pattern in _CATEGORY_RULES:
        if pattern.search(file_path):
            return name
    if _COMPONENT_DIR_RE.search(target) or _COMPONENT_FILE_RE.search(file_path):
        return "components"
    return "others"


def summarize_file(raw: RawIndex, graph: DerivedGraph, file_path: str) -> FileSummary:
    """Summarise one indexed file."""
    entry = raw.f.get(file_path)
    return FileSummary(
        path=file_path,
        language=entry.language if entry else "unknown",
        imports=graph.imports_of(file_path),
        symbols=list(entry.symbols) if entry else [],
        documentation=raw.d.get(file_path),
    )


def summarize_directory(raw: RawIndex, target: str) -> DirectorySummary:
    """Summarise the files one segment below a directory prefix.

    Deeper nesting is not included. A prefix with no files yields an empty
    summary.
    """
    if target in ("", ".", "./"):
        prefix = ""
    else:
        prefix = target if target.endswith("/") else f"{target}/"

    buckets: dict[str, list[str]] = {name: [] for name in CATEGORY_ORDER}
    for file_path in raw.all_paths():
        if not file_path.startswith(prefix):
            continue
        if "/" in file_path[len(prefix):]:
            continue
        buckets[classify_file(file_path, target)].append(file_path)

    categories = [
        CategorySummary(
            name=name,
            label=CATEGORY_LABELS.get(name, name),
            count=len(files),
            examples=[posixpath.basename(f) for f in files[:MAX_EXAMPLES]],
        )
        for name, files in buckets.items()
        if files
    ]
    if not categories:
        logger.debug(f"No indexed files directly under {target!r}")
    return DirectorySummary(path=target, categories=categories)


def summarize_path(raw: RawIndex, graph: DerivedGraph, target: str) -> PathSummary:
    """Summarise a file (exact indexed path) or a directory prefix.

    Args:
        raw: Loaded index document
        graph: Derived graph
        target: File path or directory prefix

    Returns:
        FileSummary or DirectorySummary
    """
    if target in raw.f or target in raw.d:
        return summarize_file(raw, graph, target)
    return summarize_directory(raw, target)
