"""In-memory stand-ins shaped like the neo4j driver's graph, result and session objects."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional


class FakeNode:
    def __init__(self, element_id: str, labels: Iterable[str] = (), properties: Optional[Dict[str, Any]] = None):
        self.element_id = element_id
        self.labels = frozenset(labels)
        self._properties = dict(properties or {})

    def items(self):
        return self._properties.items()


class FakeRelationship:
    def __init__(
        self,
        element_id: str,
        start_node: Any,
        end_node: Any,
        type: str,
        properties: Optional[Dict[str, Any]] = None,
    ):
        self.element_id = element_id
        self.start_node = start_node
        self.end_node = end_node
        self.type = type
        self._properties = dict(properties or {})

    def items(self):
        return self._properties.items()


class FakePath:
    def __init__(self, nodes: List[FakeNode], relationships: List[FakeRelationship]):
        self.nodes = tuple(nodes)
        self.relationships = tuple(relationships)

    @property
    def start_node(self):
        return self.nodes[0]

    @property
    def end_node(self):
        return self.nodes[-1]


class FakeBoxedInt:
    def __init__(self, high: int, low: int):
        self.high = high
        self.low = low


class FakeNeo4jError(Exception):
    """Carries a status code the way ``neo4j.exceptions.Neo4jError`` does."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


class FakeResult:
    def __init__(self, records: List[Any], error: Optional[BaseException] = None, fail_after: int = 0):
        self._records = records
        self._error = error
        self._fail_after = fail_after

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for index, record in enumerate(self._records):
            if self._error is not None and index == self._fail_after:
                raise self._error
            yield record
        if self._error is not None and self._fail_after >= len(self._records):
            raise self._error


class FakeSession:
    def __init__(
        self,
        records: Optional[List[Any]] = None,
        *,
        run_error: Optional[BaseException] = None,
        stream_error: Optional[BaseException] = None,
        fail_after: int = 0,
        close_error: Optional[BaseException] = None,
    ):
        self.records = records or []
        self.run_error = run_error
        self.stream_error = stream_error
        self.fail_after = fail_after
        self.close_error = close_error
        self.queries: List[str] = []
        self.close_calls = 0

    async def run(self, query: str):
        self.queries.append(query)
        if self.run_error is not None:
            raise self.run_error
        return FakeResult(self.records, self.stream_error, self.fail_after)

    async def close(self):
        self.close_calls += 1
        if self.close_error is not None:
            raise self.close_error


class FakeProvider:
    def __init__(self, session: Optional[FakeSession] = None, error: Optional[BaseException] = None):
        self.session = session or FakeSession()
        self.error = error
        self.acquired = 0

    async def acquire_session(self):
        if self.error is not None:
            raise self.error
        self.acquired += 1
        return self.session
