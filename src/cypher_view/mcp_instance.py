"""Shared MCP server and Neo4j wiring for cypher-view MCP tools.

All MCP tools and the server entrypoint must import and use this module
so that there is exactly one FastMCP, one Neo4j client and one
QueryExecutor per process.
"""

from mcp.server.fastmcp import FastMCP

from .config import Config
from .executor import QueryExecutor
from .graph.coercer import ValueCoercer
from .neo4j import Neo4jClient

# Single shared MCP server instance
mcp = FastMCP(
    "cypher-view",
    host="0.0.0.0",
    streamable_http_path="/",
    port=8000,
)

# Shared Neo4j wiring for all tools
config = Config()
neo4j_client = Neo4jClient(config=config)
executor = QueryExecutor(neo4j_client, ValueCoercer(config.large_integer_mode))

# Convenience alias for defining tools bound to this server
tool = mcp.tool

__all__ = ["mcp", "tool", "config", "neo4j_client", "executor"]
