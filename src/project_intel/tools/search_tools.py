"""MCP tools for searching and summarising the index."""

import re
from typing import Any

from fastmcp import Context

from ..config import Settings, resolve_limit
from ..filters import PatternFilter
from ..graph import investigate, search_docs, search_index, summarize_path
from ..store import IndexStore


def register_search_tools(mcp) -> None:
    """Register search tools with the MCP server.

    Args:
        mcp: FastMCP server instance
    """

    @mcp.tool()
    def search(
        ctx: Context,
        term: str,
        limit: int | None = None,
        regex: bool = False,
    ) -> dict[str, Any]:
        """Search file paths and symbol names.

        Args:
            term: Text to look for (case-insensitive unless regex is set)
            limit: Max results (default from settings)
            regex: Treat the term as a regular expression

        Returns:
            File matches followed by symbol matches
        """
        config: Settings = ctx.request_context.lifespan_context["config"]
        store: IndexStore = ctx.request_context.lifespan_context["store"]
        pattern_filter: PatternFilter = ctx.request_context.lifespan_context["filter"]

        try:
            results = search_index(
                store.raw,
                store.graph(pattern_filter),
                pattern_filter,
                term,
                resolve_limit(limit, config.search_limit),
                regex,
            )
        except re.error as e:
            return {"error": f"Invalid regular expression: {e}", "term": term}

        return {"term": term, "results": results, "count": len(results)}

    @mcp.tool()
    def search_documentation(
        ctx: Context,
        term: str,
        limit: int | None = None,
    ) -> dict[str, Any]:
        """Preview a documentation file or search documentation excerpts.

        Args:
            term: A documentation path for a preview, or text to search for
            limit: Max results (default from settings)

        Returns:
            A preview, or matching documentation files
        """
        config: Settings = ctx.request_context.lifespan_context["config"]
        store: IndexStore = ctx.request_context.lifespan_context["store"]
        return search_docs(store.raw, term, resolve_limit(limit, config.docs_limit))

    @mcp.tool()
    def investigate_terms(
        ctx: Context,
        terms: list[str],
        limit: int | None = None,
    ) -> dict[str, Any]:
        """Gather starting context for one or more terms.

        For each term, finds matching files (with summaries), symbols (with
        caller/callee counts) and documentation.

        Args:
            terms: Terms to investigate
            limit: Max matches per category per term (default from settings)

        Returns:
            One result per term
        """
        config: Settings = ctx.request_context.lifespan_context["config"]
        store: IndexStore = ctx.request_context.lifespan_context["store"]
        pattern_filter: PatternFilter = ctx.request_context.lifespan_context["filter"]

        results = investigate(
            store.raw,
            store.graph(pattern_filter),
            pattern_filter,
            terms,
            resolve_limit(limit, config.investigate_limit),
        )
        return {"results": results}

    @mcp.tool()
    def summarize(
        ctx: Context,
        path: str,
    ) -> dict[str, Any]:
        """Summarise a file or a directory.

        Args:
            path: An indexed file path, or a directory prefix

        Returns:
            File details (language, imports, symbols, docs) or per-category
            counts of the files directly inside the directory
        """
        store: IndexStore = ctx.request_context.lifespan_context["store"]
        pattern_filter: PatternFilter = ctx.request_context.lifespan_context["filter"]
        summary = summarize_path(store.raw, store.graph(pattern_filter), path)
        return summary.model_dump(mode="json")
