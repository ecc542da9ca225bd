from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Optional, Tuple

from .tables import Table


@dataclass(frozen=True)
class SelectionSet:
    """Row and column indices chosen by the user. Empty means "all".

    Row indices count data rows only; the header row is always kept.
    """

    rows: FrozenSet[int] = field(default_factory=frozenset)
    columns: FrozenSet[int] = field(default_factory=frozenset)

    @classmethod
    def of(cls, rows: Optional[Iterable[int]] = None, columns: Optional[Iterable[int]] = None) -> 'SelectionSet':
        return cls(frozenset(int(r) for r in rows or ()), frozenset(int(c) for c in columns or ()))

    def row_allowed(self, idx: int) -> bool:
        return not self.rows or idx in self.rows

    def column_allowed(self, idx: int) -> bool:
        return not self.columns or idx in self.columns


def filter_table(table: Table, selection: Optional[SelectionSet] = None) -> Table:
    if not table:
        return []
    selection = selection or SelectionSet()

    def project(row):
        return [cell for c_idx, cell in enumerate(row) if selection.column_allowed(c_idx)]

    body = [project(row) for r_idx, row in enumerate(table[1:]) if selection.row_allowed(r_idx)]
    return [project(table[0])] + body


def selection_counts(table: Table, selection: Optional[SelectionSet] = None) -> Tuple[int, int]:
    """Number of selected (rows, columns); an empty axis counts everything."""
    selection = selection or SelectionSet()
    total_rows = max(0, len(table) - 1)
    total_cols = len(table[0]) if table else 0
    rows = len([r for r in selection.rows if 0 <= r < total_rows]) if selection.rows else total_rows
    cols = len([c for c in selection.columns if 0 <= c < total_cols]) if selection.columns else total_cols
    return rows, cols


def table_to_tsv(table: Table) -> str:
    """Tab-separated text for pasting into a spreadsheet."""
    return ''.join('\t'.join(row) + '\n' for row in table)
