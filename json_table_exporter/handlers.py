from __future__ import annotations

import csv
import json
import logging
import os
from typing import List, Optional

import gradio as gr
import pandas as pd

from . import config
from .io_utils import parse_header_text, parse_payload_text, read_payload
from .pipeline import run_pipeline
from .selection import SelectionSet, selection_counts, table_to_tsv
from .spreadsheet import ExportError, default_policy, export_spreadsheet, is_numeric, is_unclear
from .tables import Table

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ["Excel", "CSV", "JSON"]


def load_payload(file_obj, pasted_text):
    """Return (payload, status message); an uploaded file wins over pasted text."""
    if file_obj is not None:
        try:
            return read_payload(file_obj), "Payload loaded from file."
        except (OSError, UnicodeDecodeError, ValueError) as e:
            return None, f"Error reading payload: {str(e)}"

    payload = parse_payload_text(pasted_text)
    if payload is None:
        return None, "No payload provided."
    return payload, "Payload loaded from text."


def _unique_headers(headers: List[str]) -> List[str]:
    seen = {}
    out = []
    for h in headers:
        name = h or "(blank)"
        if name in seen:
            seen[name] += 1
            name = f"{name} ({seen[name]})"
        else:
            seen[name] = 1
        out.append(name)
    return out


def _highlight(value):
    if is_numeric(value, default_policy()):
        return "text-align: right"
    if is_unclear(value):
        return "color: #FFC107; font-weight: bold"
    return ""


def table_to_dataframe(table: Optional[Table], limit: int = config.PREVIEW_ROW_LIMIT):
    if not table or not table[0]:
        return None
    headers = _unique_headers(table[0])
    return pd.DataFrame(table[1:limit + 1], columns=headers)


def preview(table: Optional[Table]):
    df = table_to_dataframe(table)
    if df is None or df.empty:
        return df
    return df.style.map(_highlight)


def _selection(rows, cols) -> SelectionSet:
    return SelectionSet.of(rows or [], cols or [])


def count_text(table: Optional[Table], selection: Optional[SelectionSet] = None) -> str:
    if not table:
        return ""
    rows, cols = selection_counts(table, selection)
    return f"Rows selected: {rows} | Columns selected: {cols}"


def payload_loaded_handler(file_obj, pasted_text, header_text):
    raw, message = load_payload(file_obj, pasted_text)
    table = run_pipeline(raw, parse_header_text(header_text))
    if table is None:
        empty = gr.update(choices=[], value=[])
        return raw, message, None, empty, empty, ""

    logger.info("Loaded payload as %d x %d table", len(table) - 1, len(table[0]))
    row_choices = [f"Row {i + 1}" for i in range(len(table) - 1)]
    col_choices = [f"{i + 1}. {name}" for i, name in enumerate(table[0])]
    return (
        raw,
        f"{message} Found {len(table) - 1} rows and {len(table[0])} columns.",
        preview(table),
        gr.update(choices=row_choices, value=[]),
        gr.update(choices=col_choices, value=[]),
        count_text(table),
    )


def headers_changed_handler(raw, header_text):
    table = run_pipeline(raw, parse_header_text(header_text))
    if table is None:
        return None, gr.update(choices=[], value=[])
    col_choices = [f"{i + 1}. {name}" for i, name in enumerate(table[0])]
    return preview(table), gr.update(choices=col_choices, value=[])


def selection_changed_handler(raw, header_text, rows, cols):
    full = run_pipeline(raw, parse_header_text(header_text))
    selection = _selection(rows, cols)
    table = run_pipeline(raw, parse_header_text(header_text), selection)
    return preview(table), count_text(full, selection)


def copy_handler(raw, header_text, rows, cols):
    table = run_pipeline(raw, parse_header_text(header_text), _selection(rows, cols))
    if not table:
        return ""
    return table_to_tsv(table)


def _write_csv(table: Table, path: str) -> None:
    with open(path, 'w', newline='', encoding='utf-8') as f:
        writer = csv.writer(f)
        writer.writerows(table)


def _write_json(table: Table, path: str) -> None:
    headers = table[0]
    records = [dict(zip(headers, row)) for row in table[1:]]
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(records, f, indent=2, ensure_ascii=False)


def export_data_handler(raw, header_text, rows, cols, output_format, output_dir: Optional[str] = None):
    if raw is None:
        return None, "No data loaded."

    table = run_pipeline(raw, parse_header_text(header_text), _selection(rows, cols))
    if not table or not table[0]:
        return None, "Nothing to export."

    output_dir = output_dir or config.EXPORT_DIR
    try:
        if output_format == "CSV":
            path = os.path.join(output_dir, "extracted-data.csv")
            _write_csv(table, path)
        elif output_format == "JSON":
            path = os.path.join(output_dir, "extracted-data.json")
            _write_json(table, path)
        else:
            path = export_spreadsheet(table, output_dir)
        return path, f"Export successful! Saved to {path}"
    except (ExportError, OSError) as e:
        logger.exception("Export failed")
        return None, f"Error during export: {str(e)}"

