"""Utility functions for MCP tools."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from ..errors import ConnectionError, CypherViewError, QueryError

mcp_tools_logger = logging.getLogger("cypher_view.mcp.tools")


def log_mcp_tool(function_name: str, phase: str, extra: Dict[str, Any], duration: Optional[float] = None) -> None:
    """Helper function to log MCP tool calls and completions.

    Args:
        function_name: Name of the MCP tool function.
        phase: One of "called", "completed" or "failed".
        extra: Dictionary of additional data to log.
        duration: Optional duration in seconds (for "completed"/"failed" phases).
    """
    if duration is not None:
        extra["duration_seconds"] = duration
    mcp_tools_logger.info(
        f"{function_name} {phase}",
        extra=extra
    )


def error_payload(error: CypherViewError) -> Dict[str, Any]:
    """Build the JSON error body returned to MCP clients.

    Only the displayable message is exposed; the original cause stays in the
    server log.
    """
    if isinstance(error, ConnectionError):
        body: Dict[str, Any] = {"type": "connection", "message": error.message}
    elif isinstance(error, QueryError):
        body = {"type": "query", "kind": error.kind.value, "message": error.message}
        if error.code:
            body["code"] = error.code
    else:
        body = {"type": "error", "message": error.message}
    return {"error": body}
