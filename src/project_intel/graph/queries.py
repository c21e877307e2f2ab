"""Query functions for traversing the derived call and import graph.

All queries treat unknown symbols, files and modules as absent data and
return empty results instead of raising.
"""

import logging
from collections import deque
from dataclasses import dataclass
from typing import Any

from ..index import RawIndex
from .storage import DerivedGraph

logger = logging.getLogger(__name__)


@dataclass
class Hotspot:
    """A symbol ranked by the size of one of its adjacency sets."""

    name: str
    count: int


def find_call_path(graph: DerivedGraph, start: str, target: str) -> list[str] | None:
    """Find a shortest call path between two symbols.

    Breadth-first search over callees, expanding neighbours in adjacency
    order; the first path that reaches ``target`` is returned, which is a
    shortest path in edge count.

    Args:
        graph: Derived graph
        start: Symbol to start from
        target: Symbol to reach

    Returns:
        Symbol names from start to target, or None if unreachable
    """
    if start == target:
        return [start]

    queue: deque[list[str]] = deque([[start]])
    visited = {start}

    while queue:
        path = queue.popleft()
        for neighbour in graph.callees(path[-1]):
            if neighbour in visited:
                continue
            new_path = path + [neighbour]
            if neighbour == target:
                return new_path
            visited.add(neighbour)
            queue.append(new_path)

    return None


def get_callers(graph: DerivedGraph, symbol: str, limit: int | None = None) -> list[str]:
    """Get the symbols that call a given symbol.

    Args:
        graph: Derived graph
        symbol: Symbol name
        limit: Maximum number of results (None for all)

    Returns:
        Caller names in adjacency order
    """
    return graph.callers(symbol)[:limit]


def get_callees(graph: DerivedGraph, symbol: str, limit: int | None = None) -> list[str]:
    """Get the symbols that a given symbol calls.

    Args:
        graph: Derived graph
        symbol: Symbol name
        limit: Maximum number of results (None for all)

    Returns:
        Callee names in adjacency order
    """
    return graph.callees(symbol)[:limit]


def find_dead_symbols(graph: DerivedGraph, limit: int | None = None) -> list[str]:
    """List defined symbols with no recorded inbound call.

    This is an advisory heuristic, not a soundness guarantee: entry points,
    framework callbacks and dynamically dispatched calls look exactly like
    unused code.

    Args:
        graph: Derived graph
        limit: Maximum number of results (None for all)

    Returns:
        Symbol names in definition order
    """
    dead: list[str] = []
    for symbol in graph.symbols():
        if limit is not None and len(dead) >= limit:
            break
        if not graph.has_callers(symbol):
            dead.append(symbol)
    return dead


def _rank(counts: list[Hotspot], top: int | None) -> list[Hotspot]:
    # sorted() is stable, so equal counts keep enumeration order
    return sorted(counts, key=lambda h: h.count, reverse=True)[:top]


def get_hotspots(
    graph: DerivedGraph, top: int | None = 10
) -> tuple[list[Hotspot], list[Hotspot]]:
    """Rank symbols by inbound and outbound call counts.

    Args:
        graph: Derived graph
        top: Entries per ranking (None for all)

    Returns:
        (inbound ranking, outbound ranking), each ranked independently
    """
    inbound = [Hotspot(name, len(graph.callers(name))) for name in graph.call_targets()]
    outbound = [Hotspot(name, len(graph.callees(name))) for name in graph.call_sources()]
    return _rank(inbound, top), _rank(outbound, top)


def get_file_imports(graph: DerivedGraph, file_path: str) -> list[str]:
    """Get the module specifiers a file imports, in index order."""
    return graph.imports_of(file_path)


def get_module_importers(
    graph: DerivedGraph, module: str, limit: int | None = None
) -> list[str]:
    """Get the files importing a module specifier.

    Args:
        graph: Derived graph
        module: Module specifier, verbatim as recorded in the index
        limit: Maximum number of results (None for all)

    Returns:
        Importing file paths
    """
    return graph.importers_of(module)[:limit]


def get_top_modules(graph: DerivedGraph, top: int | None = 10) -> list[Hotspot]:
    """Rank module specifiers by number of importing files."""
    counts = [Hotspot(module, len(graph.importers_of(module))) for module in graph.modules()]
    return _rank(counts, top)


def describe_symbol(graph: DerivedGraph, name: str) -> dict[str, Any]:
    """Get the defining files, callers and callees of a symbol.

    Args:
        graph: Derived graph
        name: Symbol name

    Returns:
        Symbol details (all lists empty for unknown symbols)
    """
    return {
        "type": "symbol",
        "name": name,
        "files": graph.defining_files(name),
        "callers": graph.callers(name),
        "callees": graph.callees(name),
    }


def describe_file(raw: RawIndex, graph: DerivedGraph, file_path: str) -> dict[str, Any]:
    """Get the symbols of a file along with their callers and callees.

    Args:
        raw: Loaded index document
        graph: Derived graph
        file_path: Indexed file path

    Returns:
        File details
    """
    entry = raw.f.get(file_path)
    symbols = []
    if entry:
        for symbol in entry.symbols:
            symbols.append({
                "name": symbol.name,
                "callers": graph.callers(symbol.name),
                "callees": graph.callees(symbol.name),
            })

    return {
        "type": "file",
        "file": file_path,
        "language": raw.language_of(file_path),
        "imports": graph.imports_of(file_path),
        "symbols": symbols,
    }
