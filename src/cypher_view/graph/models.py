"""Canonical result model produced by one query execution.

All models are frozen and serialize with camelCase aliases so the output can
be handed to a JavaScript renderer as-is.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

ScalarRow = Dict[str, Any]


class _Frozen(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class GraphNode(_Frozen):
    id: str
    label: str
    properties: Dict[str, Any] = Field(default_factory=dict)


class GraphRelationship(_Frozen):
    id: str
    source: str
    target: str
    type: str
    properties: Dict[str, Any] = Field(default_factory=dict)


class GraphData(_Frozen):
    """Deduplicated nodes (first-seen order) plus every relationship (append order)."""

    nodes: Tuple[GraphNode, ...] = ()
    relationships: Tuple[GraphRelationship, ...] = ()


class ExecutionSummary(_Frozen):
    query: str
    execution_time_ms: int = Field(ge=0)
    node_count: int = Field(ge=0)
    relationship_count: int = Field(ge=0)


class QueryOutcome(_Frozen):
    """Result of one successful execution.

    ``rows`` is ``None`` when the query produced no tabular data, which is
    different from a query that produced an empty table.

    The freeze is shallow: fields cannot be reassigned, but property maps and
    rows are plain dicts. Property maps, row dicts and list values are copies
    made for this outcome. Map values inside a row are kept as the driver
    returned them.
    """

    graph: GraphData
    rows: Optional[Tuple[ScalarRow, ...]] = None
    summary: ExecutionSummary

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-ready dict with camelCase keys, omitting absent rows."""
        data = self.model_dump(by_alias=True)
        if self.rows is None:
            data.pop("rows")
        return data
