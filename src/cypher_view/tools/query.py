"""MCP tools for running Cypher queries.

These tools expose the shared `QueryExecutor` and `Neo4jClient` via the
shared MCP server instance.
"""

from __future__ import annotations

import time
from typing import Any, Dict

from ..errors import ConnectionError, CypherViewError
from ..mcp_instance import executor, neo4j_client, tool
from .utils import error_payload, log_mcp_tool


@tool()
async def run_cypher_query(query: str) -> Dict[str, Any]:
    """Run a Cypher query and return the result as a graph plus table.

    Every node, relationship and path in the result is flattened into one
    graph: nodes are unique by id (first occurrence wins) and relationships
    are listed once per occurrence. Fields that are not graph entities end
    up in `rows`, one row per record; `rows` is omitted when there are none.

    Args:
        query: Cypher query text, sent to the database verbatim.

    Returns:
        A JSON-serializable dict:
            {
              "graph": {
                "nodes": [{"id": <str>, "label": <str>, "properties": {...}}, ...],
                "relationships": [
                  {"id": <str>, "source": <node id>, "target": <node id>,
                   "type": <str>, "properties": {...}},
                  ...
                ]
              },
              "rows": [{<column>: <value>, ...}, ...],
              "summary": {
                "query": <str>,
                "executionTimeMs": <int>,
                "nodeCount": <int>,
                "relationshipCount": <int>
              }
            }

        On failure:
            {"error": {"type": "connection" | "query", "message": <str>, ...}}

      Example:
        run_cypher_query(query="MATCH (n:Person {name: 'Ann'}) RETURN n, n.age AS age")
        {
          "graph": {
            "nodes": [
              {"id": "4:7f7c...:4", "label": "Person", "properties": {"name": "Ann", "age": 41}}
            ],
            "relationships": []
          },
          "rows": [{"age": 41}],
          "summary": {"query": "...", "executionTimeMs": 12, "nodeCount": 1, "relationshipCount": 0}
        }
    """
    start_time = time.time()
    log_mcp_tool("run_cypher_query", "called", {"query": query})

    try:
        outcome = await executor.execute(query)
    except CypherViewError as e:
        log_mcp_tool("run_cypher_query", "failed", {
            "query": query,
            "error": e.message,
        }, duration=time.time() - start_time)
        return error_payload(e)

    duration = time.time() - start_time
    log_mcp_tool("run_cypher_query", "completed", {
        "query": query,
        "node_count": outcome.summary.node_count,
        "relationship_count": outcome.summary.relationship_count,
        "row_count": len(outcome.rows or ()),
    }, duration=duration)

    return outcome.to_dict()


@tool()
async def test_connection() -> Dict[str, Any]:
    """Check whether the configured Neo4j server is reachable.

    Returns:
        {"success": <bool>, "message": <str>}
    """
    start_time = time.time()
    log_mcp_tool("test_connection", "called", {})

    try:
        await neo4j_client.test_connection()
    except (ConnectionError, ValueError) as e:
        message = e.message if isinstance(e, ConnectionError) else str(e)
        log_mcp_tool("test_connection", "failed", {"error": message}, duration=time.time() - start_time)
        return {"success": False, "message": f"Connection failed: {message}"}

    log_mcp_tool("test_connection", "completed", {}, duration=time.time() - start_time)
    return {"success": True, "message": "Connection successful!"}
