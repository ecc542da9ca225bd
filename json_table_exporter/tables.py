from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, List, Optional

from .shapes import Classified, Shape, classify

logger = logging.getLogger(__name__)

Row = List[str]
Table = List[Row]


def to_cell(value: Any) -> str:
    """Render a JSON value as a table cell."""
    if value is None:
        return ''
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list)):
        try:
            return json.dumps(value, ensure_ascii=False, separators=(',', ':'))
        except TypeError:
            return str(value)
    return str(value)


def natural_key(text: str):
    """Sort key that orders 'column_2' before 'column_10'."""
    parts = re.split(r'(\d+)', str(text))
    return tuple((0, int(p), '') if p.isdigit() else (1, 0, p.lower()) for p in parts if p != '')


def column_names(columns: Any) -> List[str]:
    """Display names of a `columns` map, ordered by their numbered keys."""
    if not isinstance(columns, dict):
        return []
    names = [to_cell(columns[key]) for key in sorted(columns, key=natural_key)]
    return [name for name in names if name]


def _lookup(record: Any, name: Optional[str], position: int) -> Any:
    if isinstance(record, dict):
        for key in (name, f"column_{position + 1}", position, str(position)):
            if key is None:
                continue
            val = record.get(key)
            if val is not None:
                return val
        return None
    if isinstance(record, (list, tuple)) and position < len(record):
        return record[position]
    return None


def table_from_column_map(records: List[Any], names: List[str]) -> Table:
    """Build rows from positionally-keyed records using a column-name map.

    Each cell resolves by display name, then `column_{i+1}`, then index `i`.
    When the map yields no names the first record's keys stand in for them.
    """
    first = records[0] if isinstance(records[0], dict) else {}
    headers = names or [str(k) for k in first.keys()]
    rows = [[to_cell(_lookup(record, headers[i], i)) for i in range(len(headers))] for record in records]
    return [headers] + rows


def _rows_table(items: List[Any]) -> Table:
    return [[to_cell(cell) for cell in row] if isinstance(row, list) else [to_cell(row)] for row in items]


def _objects_table(items: List[Any]) -> Table:
    headers: List[str] = []
    seen = set()
    for record in items:
        if not isinstance(record, dict):
            continue
        for key in record:
            if key not in seen:
                seen.add(key)
                headers.append(key)

    rows = []
    for record in items:
        record = record if isinstance(record, dict) else {}
        rows.append([to_cell(record.get(h)) for h in headers])
    return [[str(h) for h in headers]] + rows


def _key_value_table(mapping: Dict[str, Any]) -> Table:
    return [['Key', 'Value']] + [[str(k), to_cell(v)] for k, v in mapping.items()]


def build_table(classified: Classified) -> Optional[Table]:
    """Build headers + rows for a classified payload, or None when it is not tabular."""
    shape = classified.shape
    logger.debug("Building table for shape %s", shape.value)

    if shape is Shape.ARRAY_OF_ARRAYS:
        return _rows_table(classified.items)
    if shape is Shape.ARRAY_OF_OBJECTS:
        return _objects_table(classified.items)
    if shape is Shape.ARRAY_OF_PRIMITIVES:
        return [['Value']] + [[to_cell(v)] for v in classified.items]
    if shape is Shape.WRAPPED_ARRAY:
        records = classified.items
        if isinstance(classified.columns, dict) and records:
            return table_from_column_map(records, column_names(classified.columns))
        return build_table(classify(records))
    if shape is Shape.KEY_VALUE_OBJECT:
        return _key_value_table(classified.mapping)
    return None


def fallback_table(value: Any) -> Table:
    """Display form for payloads with no tabular interpretation."""
    if isinstance(value, dict):
        return _key_value_table(value)
    if isinstance(value, str):
        return [['Result'], [value]]
    try:
        return [['Result'], [json.dumps(value, indent=2, ensure_ascii=False)]]
    except TypeError:
        return [['Result'], [str(value)]]
