"""Derived graph storage using NetworkX for the in-memory symbol/import graph."""

import logging
from enum import Enum
from typing import Any

import networkx as nx

logger = logging.getLogger(__name__)


class EdgeType(str, Enum):
    """Types of edges in the derived graph."""

    DEFINES = "defines"  # File defines Symbol
    CALLS = "calls"  # Symbol A calls Symbol B
    IMPORTS = "imports"  # File imports Module


class NodeType(str, Enum):
    """Types of nodes in the derived graph."""

    SYMBOL = "symbol"
    FILE = "file"
    MODULE = "module"


def node_id(node_type: NodeType, name: str) -> str:
    """Build a node ID in format type:name."""
    return f"{node_type.value}:{name}"


class DerivedGraph:
    """Queryable structures derived from a raw index, backed by a NetworkX DiGraph.

    Symbols are identified by name alone: two files defining ``foo`` share a
    single ``symbol:foo`` node, so call edges cannot tell them apart. This
    mirrors the index format and is intentionally not disambiguated.

    Logical views:
    - SymbolIndex: symbol -> defining files (DEFINES edges)
    - CallGraph / ReverseCallGraph: symbol -> callees / callers (CALLS edges)
    - ImportGraph: file -> module specifiers, verbatim and ordered
    - ModuleImporters: module -> importing files (IMPORTS edges)

    Adjacency lists are returned in edge insertion order.
    """

    def __init__(self):
        """Initialize an empty directed graph."""
        self._graph = nx.DiGraph()
        # Symbols in order of first appearance on either end of a call edge
        self._call_sources: dict[str, None] = {}
        self._call_targets: dict[str, None] = {}

    @property
    def graph(self) -> nx.DiGraph:
        """Access the underlying NetworkX graph."""
        return self._graph

    def _add_node(self, node_type: NodeType, name: str) -> str:
        nid = node_id(node_type, name)
        if nid not in self._graph:
            self._graph.add_node(nid, type=node_type.value, name=name)
        return nid

    def add_file(self, file_path: str, language: str | None = None) -> None:
        """Add a file node, recording its language tag if given."""
        file_id = self._add_node(NodeType.FILE, file_path)
        if language is not None:
            self._graph.nodes[file_id]["language"] = language

    def add_definition(self, file_path: str, symbol: str) -> None:
        """Record that a file defines a symbol."""
        file_id = self._add_node(NodeType.FILE, file_path)
        symbol_id = self._add_node(NodeType.SYMBOL, symbol)
        self._graph.add_edge(file_id, symbol_id, type=EdgeType.DEFINES.value)

    def add_call(self, caller: str, callee: str) -> None:
        """Record a call edge; repeated edges collapse, self-loops are kept."""
        caller_id = self._add_node(NodeType.SYMBOL, caller)
        callee_id = self._add_node(NodeType.SYMBOL, callee)
        self._graph.add_edge(caller_id, callee_id, type=EdgeType.CALLS.value)
        self._call_sources.setdefault(caller)
        self._call_targets.setdefault(callee)

    def set_imports(self, file_path: str, modules: list[str]) -> None:
        """Record the import row of a file.

        Args:
            file_path: Importing file
            modules: Module specifiers in index order
        """
        file_id = self._add_node(NodeType.FILE, file_path)
        self._graph.nodes[file_id]["imports"] = list(modules)
        for module in modules:
            module_id = self._add_node(NodeType.MODULE, module)
            self._graph.add_edge(file_id, module_id, type=EdgeType.IMPORTS.value)

    def _successors(self, nid: str, edge_type: EdgeType) -> list[str]:
        if nid not in self._graph:
            return []
        return [
            self._graph.nodes[target]["name"]
            for _, target, data in self._graph.out_edges(nid, data=True)
            if data.get("type") == edge_type.value
        ]

    def _predecessors(self, nid: str, edge_type: EdgeType) -> list[str]:
        if nid not in self._graph:
            return []
        return [
            self._graph.nodes[source]["name"]
            for source, _, data in self._graph.in_edges(nid, data=True)
            if data.get("type") == edge_type.value
        ]

    def _names(self, node_type: NodeType) -> list[str]:
        return [
            data["name"]
            for _, data in self._graph.nodes(data=True)
            if data.get("type") == node_type.value
        ]

    # === SymbolIndex ===

    def symbols(self) -> list[str]:
        """Defined symbol names, in the order they were first defined."""
        return [
            data["name"]
            for nid, data in self._graph.nodes(data=True)
            if data.get("type") == NodeType.SYMBOL.value
            and self._predecessors(nid, EdgeType.DEFINES)
        ]

    def defining_files(self, symbol: str) -> list[str]:
        """Files defining a symbol (empty if the symbol is not defined)."""
        return self._predecessors(node_id(NodeType.SYMBOL, symbol), EdgeType.DEFINES)

    def is_defined(self, symbol: str) -> bool:
        """Check whether any non-excluded file defines the symbol."""
        return bool(self.defining_files(symbol))

    # === CallGraph / ReverseCallGraph ===

    def callees(self, symbol: str) -> list[str]:
        """Symbols called by ``symbol``."""
        return self._successors(node_id(NodeType.SYMBOL, symbol), EdgeType.CALLS)

    def callers(self, symbol: str) -> list[str]:
        """Symbols calling ``symbol``."""
        return self._predecessors(node_id(NodeType.SYMBOL, symbol), EdgeType.CALLS)

    def has_callers(self, symbol: str) -> bool:
        """Check whether ``symbol`` has at least one recorded inbound call."""
        return bool(self.callers(symbol))

    def call_sources(self) -> list[str]:
        """Symbols with at least one outbound call edge, in first-call order."""
        return list(self._call_sources)

    def call_targets(self) -> list[str]:
        """Symbols with at least one inbound call edge, in first-called order."""
        return list(self._call_targets)

    # === ImportGraph / ModuleImporters ===

    def files(self) -> list[str]:
        """All non-excluded file paths known to the graph."""
        return self._names(NodeType.FILE)

    def language_of(self, file_path: str) -> str | None:
        """Language tag recorded for a file."""
        nid = node_id(NodeType.FILE, file_path)
        if nid not in self._graph:
            return None
        return self._graph.nodes[nid].get("language")

    def has_imports(self, file_path: str) -> bool:
        """Check whether the file has an import row."""
        nid = node_id(NodeType.FILE, file_path)
        return nid in self._graph and "imports" in self._graph.nodes[nid]

    def imports_of(self, file_path: str) -> list[str]:
        """Module specifiers imported by a file, verbatim and in index order."""
        nid = node_id(NodeType.FILE, file_path)
        if nid not in self._graph:
            return []
        return list(self._graph.nodes[nid].get("imports", []))

    def modules(self) -> list[str]:
        """All imported module specifiers."""
        return self._names(NodeType.MODULE)

    def importers_of(self, module: str) -> list[str]:
        """Files importing a module specifier."""
        return self._predecessors(node_id(NodeType.MODULE, module), EdgeType.IMPORTS)

    def get_statistics(self) -> dict[str, Any]:
        """Get graph statistics.

        Returns:
            Dictionary with node, edge and per-type counts
        """
        stats: dict[str, Any] = {
            "nodes": self._graph.number_of_nodes(),
            "edges": self._graph.number_of_edges(),
            "symbols": 0,
            "files": 0,
            "modules": 0,
            "calls": 0,
            "imports": 0,
        }

        for _, data in self._graph.nodes(data=True):
            node_type = data.get("type", "")
            if node_type == NodeType.SYMBOL.value:
                stats["symbols"] += 1
            elif node_type == NodeType.FILE.value:
                stats["files"] += 1
            elif node_type == NodeType.MODULE.value:
                stats["modules"] += 1

        for _, _, data in self._graph.edges(data=True):
            edge_type = data.get("type")
            if edge_type == EdgeType.CALLS.value:
                stats["calls"] += 1
            elif edge_type == EdgeType.IMPORTS.value:
                stats["imports"] += 1

        return stats
