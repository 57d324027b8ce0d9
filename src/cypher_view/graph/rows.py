"""Tabular projection of query records."""

from __future__ import annotations

from typing import List, Optional, Tuple

from .models import ScalarRow


class RowBuilder:
    """Collects one row per record that has something to show in a table.

    A record made only of graph entities adds nothing here; it is fully
    represented by the graph. A record with no graph entity at all always
    adds a row, even when it has no fields.
    """

    def __init__(self) -> None:
        self._rows: List[ScalarRow] = []

    def add_record(self, scalars: ScalarRow, has_graph: bool) -> None:
        if scalars or not has_graph:
            self._rows.append(dict(scalars))

    def rows(self) -> Optional[Tuple[ScalarRow, ...]]:
        if not self._rows:
            return None
        return tuple(self._rows)
