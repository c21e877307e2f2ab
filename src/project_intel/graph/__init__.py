"""Graph module for call and import analysis using NetworkX."""

from .builder import GraphBuilder, derive_graph
from .overview import (
    DirectoryNode,
    build_directory_tree,
    build_report,
    find_test_files,
    list_project_files,
)
from .queries import (
    Hotspot,
    describe_file,
    describe_symbol,
    find_call_path,
    find_dead_symbols,
    get_callees,
    get_callers,
    get_file_imports,
    get_hotspots,
    get_module_importers,
    get_top_modules,
)
from .search import compile_term, investigate, search_docs, search_index
from .storage import DerivedGraph, EdgeType, NodeType
from .summary import (
    CategorySummary,
    DirectorySummary,
    FileSummary,
    classify_file,
    summarize_path,
)

__all__ = [
    # Storage
    "DerivedGraph",
    "EdgeType",
    "NodeType",
    # Builder
    "GraphBuilder",
    "derive_graph",
    # Queries
    "Hotspot",
    "describe_file",
    "describe_symbol",
    "find_call_path",
    "find_dead_symbols",
    "get_callees",
    "get_callers",
    "get_file_imports",
    "get_hotspots",
    "get_module_importers",
    "get_top_modules",
    # Summaries
    "CategorySummary",
    "DirectorySummary",
    "FileSummary",
    "classify_file",
    "summarize_path",
    # Search and overviews
    "DirectoryNode",
    "build_directory_tree",
    "build_report",
    "compile_term",
    "find_test_files",
    "investigate",
    "list_project_files",
    "search_docs",
    "search_index",
]
