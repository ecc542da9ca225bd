from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from .contacts import is_contact_directory, remap_contact_rows
from .headers import header_names, reconcile_headers
from .normalize import normalize_rows
from .selection import SelectionSet, filter_table
from .shapes import classify
from .tables import Table, build_table, fallback_table

logger = logging.getLogger(__name__)


def _tabulate(raw: Any):
    classified = classify(raw)
    table = build_table(classified)
    if table is not None and not table[0]:
        logger.debug("Discarding table with an empty header row")
        table = None
    if table is None:
        logger.debug("No tabular shape for %s payload", classified.shape.value)
    return classified, table


def table_from_payload(raw: Any) -> Optional[Table]:
    """Coerce, classify and tabulate a webhook payload. None when not tabular."""
    if raw is None:
        return None
    return _tabulate(raw)[1]


def display_table(raw: Any) -> Optional[Table]:
    """Like `table_from_payload` but falls back to a key/value or raw-result table."""
    if raw is None:
        return None
    classified, table = _tabulate(raw)
    if table is None:
        table = fallback_table(classified.value)
    return table


def finalize_table(table: Table) -> Table:
    """Make every data row as wide as the header."""
    if not table:
        return []
    if is_contact_directory(table[0]):
        logger.debug("Remapping %d rows to the contact-directory layout", len(table) - 1)
        return remap_contact_rows(table)
    return normalize_rows(table)


def run_pipeline(
    raw: Any,
    header_override: Optional[Iterable[Any]] = None,
    selection: Optional[SelectionSet] = None,
) -> Optional[Table]:
    """Full path from payload to the filtered table that gets displayed and exported.

    `header_override` takes template/history column records or plain names.
    Returns None only when there is no payload at all.
    """
    table = display_table(raw)
    if table is None:
        return None
    table = reconcile_headers(table, header_names(header_override))
    table = finalize_table(table)
    return filter_table(table, selection)
