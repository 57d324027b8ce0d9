"""Classify raw record field values into graph entities or scalars.

This is the only place that inspects the shape of values coming out of the
driver. Everything downstream works on the ``EntityKind`` decided here and on
the canonical ``GraphNode`` / ``GraphRelationship`` models built here.

Shapes follow the ``neo4j`` Python driver (``neo4j.graph.Node``,
``neo4j.graph.Relationship`` and ``neo4j.graph.Path``), checked
structurally so that any object exposing the same attributes is accepted.
"""

from __future__ import annotations

import enum
from typing import Any, Iterator, Sequence, Tuple

from .models import GraphNode, GraphRelationship

DEFAULT_NODE_LABEL = "Node"
DEFAULT_RELATIONSHIP_TYPE = "RELATES_TO"


class EntityKind(enum.Enum):
    NODE = "node"
    RELATIONSHIP = "relationship"
    PATH = "path"
    SCALAR = "scalar"


Segment = Tuple[Any, Any, Any]


def _has_property_map(value: Any) -> bool:
    return callable(getattr(value, "items", None))


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def is_node(value: Any) -> bool:
    """Labels plus a property map, and no relationship endpoints."""
    if value is None or isinstance(value, (str, bytes, dict)):
        return False
    return (
        hasattr(value, "labels")
        and _has_property_map(value)
        and not hasattr(value, "start_node")
        and not hasattr(value, "end_node")
    )


def is_relationship(value: Any) -> bool:
    """A type tag plus both endpoint references."""
    if value is None or isinstance(value, (str, bytes, dict)):
        return False
    return (
        isinstance(getattr(value, "type", None), str)
        and getattr(value, "start_node", None) is not None
        and getattr(value, "end_node", None) is not None
    )


def is_path(value: Any) -> bool:
    """Alternating nodes and relationships where every segment is well formed."""
    if value is None or isinstance(value, (str, bytes, dict)):
        return False
    nodes = getattr(value, "nodes", None)
    relationships = getattr(value, "relationships", None)
    if not _is_sequence(nodes) or not _is_sequence(relationships):
        return False
    if len(nodes) != len(relationships) + 1:
        return False
    return all(is_node(n) for n in nodes) and all(is_relationship(r) for r in relationships)


def classify(value: Any) -> EntityKind:
    """Decide the kind of one field value.

    The order matters: Node, then Relationship, then Path. Values that match
    none of the graph shapes are scalars, including malformed look-alikes.
    """
    if is_node(value):
        return EntityKind.NODE
    if is_relationship(value):
        return EntityKind.RELATIONSHIP
    if is_path(value):
        return EntityKind.PATH
    return EntityKind.SCALAR


def entity_id(value: Any) -> str:
    """Render the database identity of a node or relationship as a string.

    Neo4j 5 exposes ``element_id``; older servers only have the integer ``id``.
    """
    element_id = getattr(value, "element_id", None)
    if element_id is not None and element_id != "":
        return str(element_id)
    return str(getattr(value, "id"))


def _reference_id(ref: Any) -> str:
    # Endpoints are usually node objects, but bare identifiers are accepted.
    if isinstance(ref, (str, int)):
        return str(ref)
    return entity_id(ref)


def path_segments(path: Any) -> Iterator[Segment]:
    """Yield ``(start_node, relationship, end_node)`` for each hop in path order."""
    nodes: Sequence[Any] = path.nodes
    for index, relationship in enumerate(path.relationships):
        yield nodes[index], relationship, nodes[index + 1]


def to_graph_node(value: Any) -> GraphNode:
    labels = sorted(str(label) for label in (value.labels or ()))
    return GraphNode(
        id=entity_id(value),
        label=":".join(labels) or DEFAULT_NODE_LABEL,
        properties=dict(value.items()),
    )


def to_graph_relationship(value: Any) -> GraphRelationship:
    return GraphRelationship(
        id=entity_id(value),
        source=_reference_id(value.start_node),
        target=_reference_id(value.end_node),
        type=value.type or DEFAULT_RELATIONSHIP_TYPE,
        properties=dict(value.items()) if _has_property_map(value) else {},
    )
