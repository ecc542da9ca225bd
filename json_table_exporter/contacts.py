"""Contact-directory layout: coverage, locality, four phone columns, remarks.

Extraction output for this layout often arrives as one run-on line per
entry. Rows are re-derived from their text with a phone pattern instead of
delimiter splitting.
"""
from __future__ import annotations

import re
from typing import Callable, List, Optional, Sequence, Tuple

from .normalize import first_success, normalize_row
from .tables import Row, Table

CONTACT_DIRECTORY_HEADERS = ('coverage', 'locality', 'apnany', 'narone', 'primafone', 'second', 'remarks')

MAX_PHONES = 4

PHONE_PATTERN = re.compile(r'(?<!\d)(?:\+?91[\s-]*)?(\d(?:[\s-]*\d){9,11})(?!\d)')

Split = Tuple[str, str]


def is_contact_directory(headers: Sequence[str]) -> bool:
    names = tuple(str(h).strip().lower() for h in headers)
    return names == CONTACT_DIRECTORY_HEADERS


def extract_phones(text: str) -> Tuple[List[str], str]:
    """Pull up to four phone numbers out of `text`.

    Returns the digit-only numbers and the text with their spans removed.
    """
    phones: List[str] = []
    remainder: List[str] = []
    last = 0
    for match in PHONE_PATTERN.finditer(text):
        if len(phones) >= MAX_PHONES:
            break
        phones.append(re.sub(r'\D', '', match.group(1)))
        remainder.append(text[last:match.start()])
        last = match.end()
    remainder.append(text[last:])
    return phones, re.sub(r'\s+', ' ', ''.join(remainder)).strip()


def _split_at(text: str, idx: int, width: int) -> Split:
    return text[:idx].strip(), text[idx + width:].strip()


def _split_colon(text: str) -> Optional[Split]:
    idx = text.find(':')
    return _split_at(text, idx, 1) if idx >= 0 else None


def _split_dash(text: str) -> Optional[Split]:
    idx = text.find(' - ')
    return _split_at(text, idx, 3) if idx >= 0 else None


def _split_pipe_or_semicolon(text: str) -> Optional[Split]:
    found = [i for i in (text.find('|'), text.find(';')) if i >= 0]
    return _split_at(text, min(found), 1) if found else None


def _split_commas(text: str) -> Optional[Split]:
    parts = [p.strip() for p in text.split(',') if p.strip()]
    if len(parts) > 1:
        return parts[0], ', '.join(parts[1:])
    return None


def _whole_text(text: str) -> Split:
    return text, ''


LOCATION_SPLITTERS: Tuple[Callable[[str], Optional[Split]], ...] = (
    _split_colon,
    _split_dash,
    _split_pipe_or_semicolon,
    _split_commas,
    _whole_text,
)


def remap_contact_row(row: Sequence[str]) -> Row:
    cells = ['' if c is None else str(c) for c in row]
    source = (cells[0] if len(cells) == 1 else ' '.join(cells)).strip()

    phones, text = extract_phones(source)
    coverage, locality = first_success(LOCATION_SPLITTERS, text)
    phones += [''] * (MAX_PHONES - len(phones))

    mapped = [coverage, locality] + phones + ['']
    if len(mapped) != len(CONTACT_DIRECTORY_HEADERS):
        return normalize_row(CONTACT_DIRECTORY_HEADERS, mapped)
    return mapped


def remap_contact_rows(table: Table) -> Table:
    headers = list(table[0])
    return [headers] + [remap_contact_row(row) for row in table[1:]]
