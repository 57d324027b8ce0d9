"""
Result normalization: turn raw Neo4j records into a canonical graph plus rows.

This package has no I/O. It only knows the shape of driver values
(classifier), how to make scalars portable (coercer), and how to collect the
graph and table for one execution (accumulator, rows).
"""

from .accumulator import GraphAccumulator
from .classifier import EntityKind, classify
from .coercer import ValueCoercer
from .models import (
    ExecutionSummary,
    GraphData,
    GraphNode,
    GraphRelationship,
    QueryOutcome,
    ScalarRow,
)
from .rows import RowBuilder

__all__ = [
    "EntityKind",
    "ExecutionSummary",
    "GraphAccumulator",
    "GraphData",
    "GraphNode",
    "GraphRelationship",
    "QueryOutcome",
    "RowBuilder",
    "ScalarRow",
    "ValueCoercer",
    "classify",
]
