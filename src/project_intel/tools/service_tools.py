"""MCP tools for index status, repository overviews and documentation imports."""

import logging
from typing import Any

from fastmcp import Context

from ..config import Settings
from ..exceptions import ProjectIntelError
from ..filters import PatternFilter
from ..graph import build_directory_tree, build_report, list_project_files
from ..references import COMPONENT_KINDS, map_component_imports, map_imports
from ..store import IndexStore

logger = logging.getLogger(__name__)


def register_service_tools(mcp) -> None:
    """Register service tools with the MCP server.

    Args:
        mcp: FastMCP server instance
    """

    @mcp.tool()
    def get_index_status(ctx: Context) -> dict[str, Any]:
        """Get the current status of the loaded index.

        Returns the generator's own statistics along with counts from the
        derived graph and the active exclusion patterns.

        Returns:
            Index statistics and status information
        """
        store: IndexStore = ctx.request_context.lifespan_context["store"]
        pattern_filter: PatternFilter = ctx.request_context.lifespan_context["filter"]
        raw = store.raw
        graph_stats = store.graph(pattern_filter).get_statistics()

        return {
            "status": "ready",
            "project_root": str(store.project_root),
            "index_file": str(store.index_file),
            "index": {
                "files": len(raw.f),
                "docs": len(raw.d),
                "call_edges": len(raw.g),
                "dependency_rows": len(raw.deps),
            },
            "graph": {
                "symbols": graph_stats["symbols"],
                "calls": graph_stats["calls"],
                "files": graph_stats["files"],
                "modules": graph_stats["modules"],
                "imports": graph_stats["imports"],
            },
            "exclusion_patterns": len(pattern_filter),
            "stats": raw.stats,
        }

    @mcp.tool()
    def reload_index(ctx: Context) -> dict[str, Any]:
        """Re-read the index from disk.

        Use this after regenerating PROJECT_INDEX.json. On failure the
        previously loaded index stays active.

        Returns:
            File and edge counts of the reloaded index
        """
        store: IndexStore = ctx.request_context.lifespan_context["store"]

        try:
            raw = store.reload()
        except ProjectIntelError as e:
            logger.error(f"Reload failed: {e}")
            return {"error": str(e), "index_file": str(store.index_file)}

        logger.info(f"Reloaded index {store.index_file}")
        return {
            "index_file": str(store.index_file),
            "files": len(raw.f),
            "docs": len(raw.d),
            "call_edges": len(raw.g),
        }

    @mcp.tool()
    def get_directory_tree(
        ctx: Context,
        max_depth: int | None = None,
        include_files: bool = False,
    ) -> dict[str, Any]:
        """Get the directory tree of indexed files with per-directory counts.

        Args:
            max_depth: Directory levels to expand (default: all)
            include_files: Also list individual files

        Returns:
            Nested tree starting at the project root
        """
        store: IndexStore = ctx.request_context.lifespan_context["store"]
        pattern_filter: PatternFilter = ctx.request_context.lifespan_context["filter"]
        tree = build_directory_tree(list_project_files(store.raw, pattern_filter))
        return tree.to_dict(max_depth=max_depth, include_files=include_files)

    @mcp.tool()
    def get_report(
        ctx: Context,
        focus: str | None = None,
    ) -> dict[str, Any]:
        """Generate a repository report.

        Aggregates language counts, documentation and test file counts,
        call hotspots and the most imported modules.

        Args:
            focus: Optional directory prefix to restrict file statistics

        Returns:
            Report data
        """
        config: Settings = ctx.request_context.lifespan_context["config"]
        store: IndexStore = ctx.request_context.lifespan_context["store"]
        pattern_filter: PatternFilter = ctx.request_context.lifespan_context["filter"]
        return build_report(
            store.raw,
            store.graph(pattern_filter),
            pattern_filter,
            focus=focus,
            top=config.hotspot_count,
        )

    @mcp.tool()
    def map_doc_imports(
        ctx: Context,
        kind: str | None = None,
        document: str | None = None,
    ) -> dict[str, Any]:
        """Map ``@path`` imports between documentation files recursively.

        Args:
            kind: One of "memory", "skills", "commands", "agents"
            document: Alternatively, a single root document (relative to the
                      project root)

        Returns:
            Import tree(s) with circular and missing references flagged,
            plus summary statistics
        """
        store: IndexStore = ctx.request_context.lifespan_context["store"]

        if document:
            return map_imports(document, store.project_root).model_dump(mode="json")

        if kind not in COMPONENT_KINDS:
            return {"error": f"kind must be one of {', '.join(COMPONENT_KINDS)}"}

        result = map_component_imports(kind, store.project_root)
        return {**result.model_dump(mode="json"), "count": result.count}
