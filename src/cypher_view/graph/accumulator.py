"""Per-execution accumulation of the canonical graph."""

from __future__ import annotations

from typing import Dict, Iterable, List, Tuple

from .models import GraphData, GraphNode, GraphRelationship

PathSegment = Tuple[GraphNode, GraphRelationship, GraphNode]


class GraphAccumulator:
    """Collects nodes and relationships for one query execution.

    Nodes are deduplicated by id through ``_index`` while ``_nodes`` keeps
    first-seen order; both are only written by ``add_node``. Relationships
    are appended as they come, duplicates included.
    """

    def __init__(self) -> None:
        self._index: Dict[str, GraphNode] = {}
        self._nodes: List[GraphNode] = []
        self._relationships: List[GraphRelationship] = []

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    @property
    def relationship_count(self) -> int:
        return len(self._relationships)

    def add_node(self, node: GraphNode) -> bool:
        """Insert ``node`` unless its id was already seen. First write wins."""
        if node.id in self._index:
            return False
        self._index[node.id] = node
        self._nodes.append(node)
        return True

    def add_relationship(self, relationship: GraphRelationship) -> None:
        self._relationships.append(relationship)

    def add_path(self, segments: Iterable[PathSegment]) -> None:
        for start, relationship, end in segments:
            self.add_node(start)
            self.add_node(end)
            self.add_relationship(relationship)

    def snapshot(self) -> GraphData:
        return GraphData(nodes=tuple(self._nodes), relationships=tuple(self._relationships))
