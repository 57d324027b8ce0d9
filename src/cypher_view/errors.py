"""Error taxonomy for query execution.

Two user-facing categories are raised out of the core:

- ``ConnectionError``: the database cannot be reached, credentials are
  rejected, or no connection exists yet.
- ``QueryError``: the query ran (or was about to run) and failed.

Every error carries a short ``message`` that is safe to show to a user and an
optional ``cause`` holding the original exception for diagnostic logging.
"""

from __future__ import annotations

import builtins
import enum
from typing import Optional

from neo4j.exceptions import AuthError, ServiceUnavailable


class CypherViewError(Exception):
    """Base class for errors raised by cypher-view."""

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


class ConnectionError(CypherViewError, builtins.ConnectionError):  # noqa: A001
    """Raised when the database is unreachable or no session can be opened."""


# Alias for callers that would rather not shadow the builtin name.
DatabaseConnectionError = ConnectionError


class QueryErrorKind(str, enum.Enum):
    SYNTAX = "syntax"
    AUTHORIZATION = "authorization"
    DATABASE = "database"
    UNCLASSIFIED = "unclassified"
    INVALID = "invalid"


class QueryError(CypherViewError):
    """Raised when a query fails while running or draining its results."""

    def __init__(
        self,
        message: str,
        cause: Optional[BaseException] = None,
        *,
        kind: QueryErrorKind = QueryErrorKind.UNCLASSIFIED,
        code: Optional[str] = None,
    ) -> None:
        super().__init__(message, cause)
        self.kind = kind
        self.code = code


UNCLASSIFIED_QUERY_MESSAGE = "Query execution failed. Check logs for details."
UNAUTHORIZED_QUERY_MESSAGE = (
    "Database session is no longer authorized. Please check connection settings."
)

UNREACHABLE_MESSAGE = "Cannot reach database server. Check URL and ensure Neo4j is running."
BAD_CREDENTIALS_MESSAGE = "Invalid username or password."
CONNECT_FAILED_MESSAGE = "Failed to establish connection. Check logs for details."
NOT_CONNECTED_MESSAGE = "Not connected to database. Call connect() first."


def _error_code(exc: BaseException) -> Optional[str]:
    code = getattr(exc, "code", None)
    return code if isinstance(code, str) and code else None


def _error_text(exc: BaseException) -> str:
    message = getattr(exc, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(exc)


def _is_syntax_code(code: str) -> bool:
    return code.endswith("SyntaxError")


def _is_security_code(code: str) -> bool:
    # Neo4j status codes look like Neo.<Classification>.<Category>.<Title>
    parts = code.split(".")
    return "Security" in parts[:-1] or code.endswith("Unauthorized")


def classify_query_failure(exc: BaseException) -> CypherViewError:
    """Map a failure raised while a query was running to a cypher-view error.

    Errors that are already classified are returned unchanged. Failures
    carrying a Neo4j status code are sub-classified by that code; anything
    else becomes an unclassified ``QueryError`` that keeps the original
    exception as its cause.
    """
    if isinstance(exc, CypherViewError):
        return exc

    code = _error_code(exc)
    if code is None:
        return QueryError(UNCLASSIFIED_QUERY_MESSAGE, exc, kind=QueryErrorKind.UNCLASSIFIED)

    if _is_syntax_code(code):
        return QueryError(
            f"Syntax error in query: {_error_text(exc)}",
            exc,
            kind=QueryErrorKind.SYNTAX,
            code=code,
        )
    if _is_security_code(code):
        return QueryError(
            UNAUTHORIZED_QUERY_MESSAGE,
            exc,
            kind=QueryErrorKind.AUTHORIZATION,
            code=code,
        )
    return QueryError(
        f"Neo4j error: {_error_text(exc)}",
        exc,
        kind=QueryErrorKind.DATABASE,
        code=code,
    )


def classify_connection_failure(exc: BaseException) -> ConnectionError:
    """Map a failure raised while connecting to a ``ConnectionError``."""
    if isinstance(exc, ConnectionError):
        return exc
    if isinstance(exc, ServiceUnavailable):
        return ConnectionError(UNREACHABLE_MESSAGE, exc)

    code = _error_code(exc)
    if isinstance(exc, AuthError) or (code is not None and code.endswith("Unauthorized")):
        return ConnectionError(BAD_CREDENTIALS_MESSAGE, exc)
    return ConnectionError(CONNECT_FAILED_MESSAGE, exc)
