"""MCP tools for call graph and import graph queries."""

from typing import Any

from fastmcp import Context

from ..config import Settings, resolve_limit
from ..filters import PatternFilter
from ..graph import (
    describe_file,
    describe_symbol,
    find_call_path,
    find_dead_symbols,
    find_test_files,
    get_callees,
    get_callers,
    get_file_imports,
    get_hotspots,
    get_module_importers,
)
from ..store import IndexStore


def register_graph_tools(mcp) -> None:
    """Register graph tools with the MCP server.

    Args:
        mcp: FastMCP server instance
    """

    @mcp.tool()
    def find_callers(
        ctx: Context,
        symbol: str,
        limit: int | None = None,
    ) -> dict[str, Any]:
        """List the functions that call a symbol.

        Symbols are matched by name only: same-named functions in different
        files share callers.

        Args:
            symbol: Function or export name
            limit: Max results (default from settings)

        Returns:
            Callers with the files defining them
        """
        config: Settings = ctx.request_context.lifespan_context["config"]
        store: IndexStore = ctx.request_context.lifespan_context["store"]
        pattern_filter: PatternFilter = ctx.request_context.lifespan_context["filter"]
        graph = store.graph(pattern_filter)

        callers = get_callers(graph, symbol, resolve_limit(limit, config.callers_limit))
        return {
            "symbol": symbol,
            "callers": [
                {"name": name, "files": graph.defining_files(name)} for name in callers
            ],
            "count": len(callers),
        }

    @mcp.tool()
    def find_callees(
        ctx: Context,
        symbol: str,
        limit: int | None = None,
    ) -> dict[str, Any]:
        """List the functions a symbol calls.

        Args:
            symbol: Function or export name
            limit: Max results (default from settings)

        Returns:
            Callees with the files defining them
        """
        config: Settings = ctx.request_context.lifespan_context["config"]
        store: IndexStore = ctx.request_context.lifespan_context["store"]
        pattern_filter: PatternFilter = ctx.request_context.lifespan_context["filter"]
        graph = store.graph(pattern_filter)

        callees = get_callees(graph, symbol, resolve_limit(limit, config.callers_limit))
        return {
            "symbol": symbol,
            "callees": [
                {"name": name, "files": graph.defining_files(name)} for name in callees
            ],
            "count": len(callees),
        }

    @mcp.tool()
    def trace_call_path(
        ctx: Context,
        start: str,
        target: str,
    ) -> dict[str, Any]:
        """Find a shortest call path from one function to another.

        Args:
            start: Function to start from
            target: Function to reach

        Returns:
            The path as a list of names, or null when no path exists
        """
        store: IndexStore = ctx.request_context.lifespan_context["store"]
        pattern_filter: PatternFilter = ctx.request_context.lifespan_context["filter"]
        path = find_call_path(store.graph(pattern_filter), start, target)
        return {"start": start, "target": target, "path": path}

    @mcp.tool()
    def find_dead_code(
        ctx: Context,
        limit: int | None = None,
        include_tests: bool = False,
    ) -> dict[str, Any]:
        """List exported functions that no indexed function calls.

        This is a heuristic: entry points, framework callbacks and dynamic
        calls also show up here. Verify before deleting anything.

        Args:
            limit: Max results (default from settings)
            include_tests: Also list test files so their relevance can be reviewed

        Returns:
            Unreferenced symbols with their files
        """
        config: Settings = ctx.request_context.lifespan_context["config"]
        store: IndexStore = ctx.request_context.lifespan_context["store"]
        pattern_filter: PatternFilter = ctx.request_context.lifespan_context["filter"]
        graph = store.graph(pattern_filter)

        dead = find_dead_symbols(graph, resolve_limit(limit, config.dead_limit))
        result: dict[str, Any] = {
            "dead": [{"name": name, "files": graph.defining_files(name)} for name in dead],
            "count": len(dead),
            "advisory": True,
        }
        if include_tests:
            result["tests"] = find_test_files(store.raw, pattern_filter)
        return result

    @mcp.tool()
    def get_metrics(
        ctx: Context,
        top: int | None = None,
    ) -> dict[str, Any]:
        """Show the functions with the most callers and the most callees.

        Args:
            top: Entries per ranking (default from settings)

        Returns:
            Inbound and outbound hotspot rankings
        """
        config: Settings = ctx.request_context.lifespan_context["config"]
        store: IndexStore = ctx.request_context.lifespan_context["store"]
        pattern_filter: PatternFilter = ctx.request_context.lifespan_context["filter"]

        inbound, outbound = get_hotspots(
            store.graph(pattern_filter), resolve_limit(top, config.hotspot_count)
        )
        return {
            "top_inbound": [{"name": h.name, "count": h.count} for h in inbound],
            "top_outbound": [{"name": h.name, "count": h.count} for h in outbound],
        }

    @mcp.tool()
    def get_imports(
        ctx: Context,
        file_path: str,
    ) -> dict[str, Any]:
        """List the modules a file imports.

        Args:
            file_path: Path of the file relative to the project root

        Returns:
            Module specifiers as recorded in the index
        """
        store: IndexStore = ctx.request_context.lifespan_context["store"]
        pattern_filter: PatternFilter = ctx.request_context.lifespan_context["filter"]
        imports = get_file_imports(store.graph(pattern_filter), file_path)
        return {"file_path": file_path, "imports": imports, "count": len(imports)}

    @mcp.tool()
    def get_importers(
        ctx: Context,
        module: str,
        limit: int | None = None,
    ) -> dict[str, Any]:
        """List the files that import a module.

        Args:
            module: Module specifier exactly as written in the import
            limit: Max results (default from settings)

        Returns:
            Importing file paths
        """
        config: Settings = ctx.request_context.lifespan_context["config"]
        store: IndexStore = ctx.request_context.lifespan_context["store"]
        pattern_filter: PatternFilter = ctx.request_context.lifespan_context["filter"]

        files = get_module_importers(
            store.graph(pattern_filter), module, resolve_limit(limit, config.importers_limit)
        )
        return {"module": module, "importers": files, "count": len(files)}

    @mcp.tool()
    def debug_target(
        ctx: Context,
        target: str,
    ) -> dict[str, Any]:
        """Show callers, callees and imports around a file or a function.

        Args:
            target: An indexed file path or a function name

        Returns:
            File details with per-symbol callers/callees, or symbol details
        """
        store: IndexStore = ctx.request_context.lifespan_context["store"]
        pattern_filter: PatternFilter = ctx.request_context.lifespan_context["filter"]
        raw = store.raw
        graph = store.graph(pattern_filter)

        if target in raw.f or target in raw.d:
            return describe_file(raw, graph, target)
        return describe_symbol(graph, target)
