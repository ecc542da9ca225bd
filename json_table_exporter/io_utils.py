from __future__ import annotations

import json
from typing import Any


def _read_text(file_obj) -> str:
    if hasattr(file_obj, 'read'):
        if hasattr(file_obj, 'seek'):
            file_obj.seek(0)
        content = file_obj.read()
        if isinstance(content, bytes):
            content = content.decode('utf-8')
        return content

    path = file_obj.name if hasattr(file_obj, 'name') else file_obj
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def read_payload(file_obj) -> Any:
    """Read a webhook payload from an uploaded file or file path.

    Valid JSON is decoded; anything else is returned as text and left to
    `safe_parse` to repair.
    """
    if file_obj is None:
        raise ValueError("No file uploaded.")
    return parse_payload_text(_read_text(file_obj))


def parse_payload_text(text: str) -> Any:
    if text is None or not text.strip():
        return None
    try:
        return json.loads(text)
    except ValueError:
        return text


def parse_header_text(text: str):
    """Comma- or newline-separated column names as `{"name": ...}` records."""
    if not text:
        return []
    names = [part.strip() for line in text.splitlines() for part in line.split(',')]
    return [{'name': name} for name in names if name]
