"""FastMCP server for Project Intel - call graph and documentation analysis of a project index."""

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastmcp import FastMCP

from .config import Settings, setup_logging
from .exceptions import ProjectIntelError
from .filters import PatternFilter
from .store import IndexStore
from .tools import register_all_tools

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(server: FastMCP):
    """Manage server lifecycle - load the index and derive the default graph."""
    # Load configuration
    try:
        config = Settings()
    except Exception as e:
        logger.error(f"Failed to load configuration: {e}")
        raise

    setup_logging(config.log_level)
    project_root = config.effective_project_root
    logger.info(f"Starting Project Intel for: {project_root}")

    pattern_filter = PatternFilter.from_project(
        project_root,
        ignore_file=config.ignore_file if config.use_ignore_file else None,
        extra_patterns=config.extra_exclusions,
    )
    logger.info(f"Using {len(pattern_filter)} exclusion patterns")

    store = IndexStore(project_root)
    try:
        store.load(config.index_path)
    except ProjectIntelError as e:
        logger.error(f"Failed to load index: {e}")
        raise

    # Derive once up front so the first tool call is fast
    stats = store.graph(pattern_filter).get_statistics()
    logger.info(f"Graph ready: {stats['symbols']} symbols, {stats['calls']} calls")

    context: dict[str, Any] = {
        "config": config,
        "store": store,
        "filter": pattern_filter,
    }

    yield context

    logger.info("Shutdown complete")


# Create the MCP server
mcp = FastMCP("Project Intel", lifespan=lifespan)

# Register all tools
register_all_tools(mcp)


def main():
    """Entry point for the Project Intel MCP server."""
    mcp.run()


if __name__ == "__main__":
    main()
