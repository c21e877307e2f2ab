"""Graph builder for deriving the symbol/call/import graph from a raw index."""

import logging

from ..filters import PatternFilter
from ..index import RawIndex
from .storage import DerivedGraph

logger = logging.getLogger(__name__)


class GraphBuilder:
    """Builds a DerivedGraph from a raw index under an exclusion filter."""

    def __init__(self, pattern_filter: PatternFilter | None = None):
        """Initialize the graph builder.

        Args:
            pattern_filter: Paths it excludes contribute no symbols or import
                            rows (defaults to an empty filter)
        """
        self._filter = pattern_filter or PatternFilter(())

    @property
    def pattern_filter(self) -> PatternFilter:
        """The exclusion filter applied while building."""
        return self._filter

    def build(self, raw: RawIndex) -> DerivedGraph:
        """Build the derived graph in one pass per index section.

        1. Files: register each symbol against its defining file
        2. Call edges: add caller -> callee edges by name
        3. Dependencies: record import rows and module importers

        Args:
            raw: Loaded index document

        Returns:
            Freshly built DerivedGraph
        """
        logger.info(
            f"Building graph from {len(raw.f)} files and {len(raw.g)} call edges "
            f"({len(self._filter)} exclusion patterns)"
        )
        graph = DerivedGraph()
        excluded = 0

        for file_path, entry in raw.f.items():
            if self._filter.exclude(file_path):
                excluded += 1
                continue
            graph.add_file(file_path, entry.language)
            for symbol in entry.symbols:
                graph.add_definition(file_path, symbol.name)

        # Call edges carry no file, so they are never path-filtered
        for caller, callee in raw.g:
            graph.add_call(caller, callee)

        for file_path, modules in raw.deps.items():
            if self._filter.exclude(file_path):
                continue
            graph.set_imports(file_path, modules)

        stats = graph.get_statistics()
        logger.info(
            f"Graph built: {stats['symbols']} symbols, {stats['calls']} calls, "
            f"{stats['files']} files, {stats['modules']} modules "
            f"({excluded} files excluded)"
        )
        return graph


def derive_graph(raw: RawIndex, pattern_filter: PatternFilter | None = None) -> DerivedGraph:
    """Derive a fresh graph from a raw index (uncached).

    Args:
        raw: Loaded index document
        pattern_filter: Exclusion filter to apply

    Returns:
        DerivedGraph
    """
    return GraphBuilder(pattern_filter).build(raw)
