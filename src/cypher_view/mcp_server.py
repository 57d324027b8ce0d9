"""
MCP Server implementation for cypher-view

This module is the entrypoint used when running the MCP server process.
It imports the shared `mcp` instance and all MCP tools so they are
registered on the same FastMCP server.
"""

from __future__ import annotations

import logging

from .config import Config

logging.basicConfig(
    level=Config().log_level.upper(),
    handlers=[logging.FileHandler("/tmp/cypher_view_mcp_server.log")]
)

# Import tools so their @tool decorators run and register them on `mcp`.
from .tools import query as query_tools  # noqa: E402,F401
from .mcp_instance import mcp  # noqa: E402  shared FastMCP instance


logger = logging.getLogger(__name__)


def main() -> None:
    """Main entry point for the MCP server."""
    logger.info("Starting cypher-view MCP server...")
    # Run the shared FastMCP instance; this will block the current process.
    mcp.run(transport="streamable-http")


if __name__ == "__main__":
    main()
