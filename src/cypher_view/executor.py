"""End-to-end execution of one Cypher query.

``QueryExecutor.execute`` is the only entry point. One call walks through

    IDLE -> ACQUIRING -> RUNNING -> DRAINING -> RELEASED

or ends in FAILED. Every record is routed field by field through the
classifier into a fresh ``GraphAccumulator`` / ``RowBuilder`` pair, and the
session is closed on every exit path once it exists.
"""

from __future__ import annotations

import enum
import logging
import time
from typing import Any, Optional, Protocol

from .errors import (
    ConnectionError,
    QueryError,
    QueryErrorKind,
    classify_connection_failure,
    classify_query_failure,
)
from .graph.accumulator import GraphAccumulator
from .graph.classifier import (
    EntityKind,
    classify,
    path_segments,
    to_graph_node,
    to_graph_relationship,
)
from .graph.coercer import ValueCoercer
from .graph.models import ExecutionSummary, QueryOutcome, ScalarRow
from .graph.rows import RowBuilder

logger = logging.getLogger(__name__)

EMPTY_QUERY_MESSAGE = "No Cypher query found. Please write a valid Cypher query."


class SessionProvider(Protocol):
    """What the executor needs from the connection layer.

    The returned session must provide ``await session.run(query)`` yielding
    an async-iterable of records (each exposing ``items()``) and
    ``await session.close()``.
    """

    async def acquire_session(self) -> Any:
        ...


class ExecutionState(enum.Enum):
    IDLE = "idle"
    ACQUIRING = "acquiring"
    RUNNING = "running"
    DRAINING = "draining"
    RELEASED = "released"
    FAILED = "failed"


class _Execution:
    """Mutable state of a single execution. Never reused."""

    def __init__(self, query: str, coercer: ValueCoercer) -> None:
        self.query = query
        self.state = ExecutionState.IDLE
        self.records = 0
        self._coercer = coercer
        self._graph = GraphAccumulator()
        self._rows = RowBuilder()
        self._started: Optional[float] = None

    def enter(self, state: ExecutionState) -> None:
        logger.debug("Execution %s -> %s", self.state.value, state.value)
        self.state = state

    def start_timer(self) -> None:
        self._started = time.monotonic()

    def consume(self, record: Any) -> None:
        scalars: ScalarRow = {}
        has_graph = False

        for key, value in record.items():
            kind = classify(value)
            if kind is EntityKind.NODE:
                self._graph.add_node(to_graph_node(value))
                has_graph = True
            elif kind is EntityKind.RELATIONSHIP:
                self._graph.add_relationship(to_graph_relationship(value))
                has_graph = True
            elif kind is EntityKind.PATH:
                self._graph.add_path(
                    (to_graph_node(start), to_graph_relationship(rel), to_graph_node(end))
                    for start, rel, end in path_segments(value)
                )
                has_graph = True
            else:
                scalars[key] = self._coercer.coerce(value)

        self._rows.add_record(scalars, has_graph)
        self.records += 1

    def finish(self) -> QueryOutcome:
        elapsed = 0.0 if self._started is None else time.monotonic() - self._started
        graph = self._graph.snapshot()
        return QueryOutcome(
            graph=graph,
            rows=self._rows.rows(),
            summary=ExecutionSummary(
                query=self.query,
                execution_time_ms=max(0, int(elapsed * 1000)),
                node_count=len(graph.nodes),
                relationship_count=len(graph.relationships),
            ),
        )


class QueryExecutor:
    """Runs Cypher queries and normalizes their results.

    Holds no per-query state: each ``execute`` call acquires its own session
    and builds its own accumulator, so one executor can serve concurrent
    callers.
    """

    def __init__(self, provider: SessionProvider, coercer: Optional[ValueCoercer] = None) -> None:
        self.provider = provider
        self.coercer = coercer or ValueCoercer()

    async def execute(self, query: str) -> QueryOutcome:
        """Execute ``query`` and return its canonical graph, rows and summary.

        Raises:
            ConnectionError: no session could be acquired.
            QueryError: the query failed while running or draining results.
        """
        if not query or not query.strip():
            raise QueryError(EMPTY_QUERY_MESSAGE, kind=QueryErrorKind.INVALID)

        logger.info("Executing query: %s", query)
        execution = _Execution(query, self.coercer)

        execution.enter(ExecutionState.ACQUIRING)
        try:
            session = await self.provider.acquire_session()
        except ConnectionError as e:
            execution.enter(ExecutionState.FAILED)
            logger.error("Could not acquire a session: %s", e.message)
            raise
        except Exception as e:
            execution.enter(ExecutionState.FAILED)
            logger.error("Could not acquire a session: %s", e, exc_info=True)
            raise classify_connection_failure(e) from e

        try:
            try:
                outcome = await self._run(session, execution)
            except Exception as e:
                execution.enter(ExecutionState.FAILED)
                logger.error("Query execution failed: %s", e, exc_info=True)
                error = classify_query_failure(e)
                if error is e:
                    raise
                raise error from e
        finally:
            await self._release(session)

        execution.enter(ExecutionState.RELEASED)
        logger.info(
            "Query executed successfully",
            extra={
                "records": execution.records,
                "nodes": outcome.summary.node_count,
                "relationships": outcome.summary.relationship_count,
                "execution_time_ms": outcome.summary.execution_time_ms,
            },
        )
        return outcome

    async def _run(self, session: Any, execution: _Execution) -> QueryOutcome:
        execution.enter(ExecutionState.RUNNING)
        execution.start_timer()
        result = await session.run(execution.query)
        async for record in result:
            execution.consume(record)

        execution.enter(ExecutionState.DRAINING)
        return execution.finish()

    @staticmethod
    async def _release(session: Any) -> None:
        try:
            await session.close()
        except Exception as e:
            logger.warning("Failed to close Neo4j session: %s", e, exc_info=True)
