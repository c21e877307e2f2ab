"""Loading and caching of the project index and its derived graphs."""

import logging
from pathlib import Path

from pydantic import ValidationError

from .exceptions import IndexNotFoundError, InvalidIndexError
from .filters import PatternFilter
from .graph.builder import GraphBuilder
from .graph.storage import DerivedGraph
from .index import RawIndex

logger = logging.getLogger(__name__)

DEFAULT_INDEX_NAME = "PROJECT_INDEX.json"


def find_project_root(start: Path | None = None, index_name: str = DEFAULT_INDEX_NAME) -> Path:
    """Find the project root by walking up to the first directory holding the index.

    Args:
        start: Directory to start from (defaults to the working directory)
        index_name: File name of the index

    Returns:
        The directory containing the index, or ``start`` when none is found
    """
    start = (start or Path.cwd()).resolve()
    for directory in (start, *start.parents):
        if (directory / index_name).is_file():
            return directory
    return start


def resolve_index_path(index_path: str | Path, project_root: Path) -> Path:
    """Resolve where the index file lives.

    The default index name is looked up in the project root; any other path is
    taken relative to the working directory.
    """
    if str(index_path) == DEFAULT_INDEX_NAME:
        return (project_root / DEFAULT_INDEX_NAME).resolve()
    return Path(index_path).expanduser().resolve()


def _describe_validation_error(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ())) or "<document>"
    summary = f"{location}: {first.get('msg', 'invalid value')}"
    if error.error_count() > 1:
        summary += f" (and {error.error_count() - 1} more errors)"
    return summary


def load_index(path: Path) -> RawIndex:
    """Load and structurally validate an index document.

    Args:
        path: Absolute path to the index file

    Returns:
        Parsed RawIndex

    Raises:
        IndexNotFoundError: If the file does not exist
        InvalidIndexError: If the content is not a valid index document
    """
    if not path.is_file():
        raise IndexNotFoundError(str(path))

    try:
        content = path.read_bytes()
    except OSError as e:
        raise InvalidIndexError(str(path), str(e)) from e

    try:
        raw = RawIndex.model_validate_json(content)
    except ValidationError as e:
        raise InvalidIndexError(str(path), _describe_validation_error(e)) from e

    logger.info(
        f"Loaded index {path}: {len(raw.f)} files, {len(raw.d)} docs, "
        f"{len(raw.g)} call edges"
    )
    return raw


class IndexStore:
    """Owns the loaded index documents and the graphs derived from them.

    Documents are cached by absolute path. Derived graphs are cached by
    ``(index path, pattern_filter.cache_key)``, so two filters built from the
    same pattern list share one graph.
    """

    def __init__(self, project_root: Path | None = None):
        """Initialize the store.

        Args:
            project_root: Root directory of the project (discovered if omitted)
        """
        self._project_root = (project_root or find_project_root()).resolve()
        self._documents: dict[Path, RawIndex] = {}
        self._graphs: dict[tuple[Path, str], DerivedGraph] = {}
        self._current: Path | None = None

    @property
    def project_root(self) -> Path:
        """Root directory of the project."""
        return self._project_root

    @property
    def index_file(self) -> Path | None:
        """Path of the most recently loaded index."""
        return self._current

    @property
    def raw(self) -> RawIndex:
        """The most recently loaded index document."""
        if self._current is None:
            raise RuntimeError("No index loaded; call load() first")
        return self._documents[self._current]

    def load(self, index_path: str | Path = DEFAULT_INDEX_NAME) -> RawIndex:
        """Load an index, reusing the cached document for the same path.

        Args:
            index_path: Index location (see resolve_index_path)

        Returns:
            The loaded RawIndex
        """
        path = resolve_index_path(index_path, self._project_root)
        if path not in self._documents:
            self._documents[path] = load_index(path)
        self._current = path
        return self._documents[path]

    def reload(self) -> RawIndex:
        """Re-read the current index from disk, dropping its derived graphs."""
        if self._current is None:
            raise RuntimeError("No index loaded; call load() first")

        path = self._current
        raw = load_index(path)
        self._documents[path] = raw
        for key in [key for key in self._graphs if key[0] == path]:
            del self._graphs[key]
        return raw

    def graph(self, pattern_filter: PatternFilter) -> DerivedGraph:
        """Get the derived graph of the current index under a filter.

        Args:
            pattern_filter: Exclusion filter applied while deriving

        Returns:
            Cached or freshly built DerivedGraph
        """
        raw = self.raw
        key = (self._current, pattern_filter.cache_key)
        if key not in self._graphs:
            self._graphs[key] = GraphBuilder(pattern_filter).build(raw)
        else:
            logger.debug(f"Reusing derived graph for {self._current}")
        return self._graphs[key]
