"""
Neo4j connection management.

This package should contain ONLY Neo4j-specific connection logic:
- Driver setup and connectivity checks
- Handing out sessions to the query executor

Result normalization lives in the `graph` package and the execution
lifecycle in `executor`.
"""

from .client import ConnectionStatus, Neo4jClient

__all__ = [
    "ConnectionStatus",
    "Neo4jClient",
]
