from __future__ import annotations

from typing import Any, Iterable, List, Optional

from .tables import Table


def header_names(columns: Optional[Iterable[Any]]) -> List[str]:
    """Extract header names from template/history column records.

    Accepts `{"name": ...}` records or plain strings; blank names are dropped.
    """
    if not columns:
        return []
    names: List[str] = []
    for col in columns:
        if isinstance(col, dict):
            name = col.get('name')
        else:
            name = col
        name = '' if name is None else str(name).strip()
        if name:
            names.append(name)
    return names


def reconcile_headers(table: Table, override: Optional[List[str]]) -> Table:
    """Replace the header row with `override`, length-matched to the table."""
    rows = [list(row) for row in table]
    if not override or not rows:
        return rows

    base_headers = rows[0]
    target = len(base_headers)
    adjusted = list(override)

    if len(adjusted) < target:
        last_is_remarks = 'remarks' in str(base_headers[-1]).lower()
        while len(adjusted) < target:
            if last_is_remarks and len(adjusted) == target - 1:
                adjusted.append('remarks')
            else:
                adjusted.append(f"column_{len(adjusted) + 1}")
    elif len(adjusted) > target:
        adjusted = adjusted[:target]

    return [adjusted] + rows[1:]
