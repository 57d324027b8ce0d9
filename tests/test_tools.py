import pytest
from neo4j.exceptions import ServiceUnavailable

from fakes import FakeNeo4jError, FakeNode, FakeProvider, FakeSession

from cypher_view.errors import ConnectionError, QueryError, QueryErrorKind
from cypher_view.executor import QueryExecutor
from cypher_view.tools import query as query_tools
from cypher_view.tools.utils import error_payload


def _use_session(monkeypatch, session=None, error=None):
    provider = FakeProvider(session, error=error)
    monkeypatch.setattr(query_tools, "executor", QueryExecutor(provider))
    return provider


@pytest.mark.asyncio
async def test_run_cypher_query_returns_outcome_dict(monkeypatch):
    _use_session(monkeypatch, FakeSession([{"n": FakeNode("4", ["Person"], {"name": "Ann"})}]))

    result = await query_tools.run_cypher_query("MATCH (n) RETURN n")

    assert result["graph"]["nodes"] == [{"id": "4", "label": "Person", "properties": {"name": "Ann"}}]
    assert result["summary"]["nodeCount"] == 1
    assert "rows" not in result


@pytest.mark.asyncio
async def test_run_cypher_query_reports_syntax_errors(monkeypatch):
    syntax = FakeNeo4jError("Neo.ClientError.Statement.SyntaxError", "Invalid input")
    _use_session(monkeypatch, FakeSession(run_error=syntax))

    result = await query_tools.run_cypher_query("MATCH (n RETURN n")

    assert result["error"]["type"] == "query"
    assert result["error"]["kind"] == "syntax"
    assert result["error"]["code"] == "Neo.ClientError.Statement.SyntaxError"


@pytest.mark.asyncio
async def test_run_cypher_query_reports_connection_errors(monkeypatch):
    _use_session(monkeypatch, error=ConnectionError("Cannot reach database server."))

    result = await query_tools.run_cypher_query("RETURN 1")

    assert result == {"error": {"type": "connection", "message": "Cannot reach database server."}}


@pytest.mark.asyncio
async def test_test_connection_tool_reports_failure(monkeypatch):
    async def unreachable():
        raise ConnectionError("Cannot reach database server.", ServiceUnavailable("no route"))

    monkeypatch.setattr(query_tools.neo4j_client, "test_connection", unreachable)

    result = await query_tools.test_connection()

    assert result == {"success": False, "message": "Connection failed: Cannot reach database server."}


def test_error_payload_hides_cause():
    payload = error_payload(QueryError("Query execution failed.", RuntimeError("secret internals")))
    assert payload == {"error": {"type": "query", "kind": QueryErrorKind.UNCLASSIFIED.value, "message": "Query execution failed."}}
