from __future__ import annotations

import re
from typing import Any, Callable, Iterable, List, Optional, Sequence

from .tables import Row, Table

DELIMITERS = ('\t', ',', ';', '|', ' | ', ' : ', ':', ' - ')

_WHITESPACE_RUN = re.compile(r'\s{2,}')


def first_success(strategies: Iterable[Callable[..., Any]], *args) -> Any:
    """Return the result of the first strategy that does not return None."""
    for strategy in strategies:
        result = strategy(*args)
        if result is not None:
            return result
    return None


def _ends_with_remarks(headers: Sequence[str]) -> bool:
    return bool(headers) and str(headers[-1]).strip().lower() == 'remarks'


def _split_fitting(pieces: List[str], joiner: str, headers: Sequence[str]) -> Optional[Row]:
    """Fit raw split pieces to the header width.

    Empty tokens are dropped. When the last header is `remarks` the overflow
    keeps its original text in the final cell.
    """
    width = len(headers)
    kept = [i for i, piece in enumerate(pieces) if piece.strip()]
    if len(kept) < width:
        return None

    tokens = [pieces[i].strip() for i in kept]
    if _ends_with_remarks(headers) and len(tokens) > width:
        tail = joiner.join(pieces[kept[width - 1]:]).strip()
        return tokens[:width - 1] + [tail]
    return tokens[:width]


def _delimiter_strategy(delimiter: str):
    def split(raw: str, headers: Sequence[str]) -> Optional[Row]:
        return _split_fitting(raw.split(delimiter), delimiter, headers)
    return split


def _whitespace_strategy(raw: str, headers: Sequence[str]) -> Optional[Row]:
    pieces = _WHITESPACE_RUN.split(raw)
    return _split_fitting(pieces, '  ', headers)


SINGLE_CELL_STRATEGIES = tuple(_delimiter_strategy(d) for d in DELIMITERS) + (_whitespace_strategy,)


def normalize_row(headers: Sequence[str], row: Sequence[str]) -> Row:
    """Return a copy of `row` with exactly `len(headers)` cells."""
    width = len(headers)
    cells = ['' if c is None else str(c) for c in row]
    if width == 0:
        return []
    if len(cells) == width:
        return cells

    if len(cells) == 1:
        raw = cells[0]
        split = first_success(SINGLE_CELL_STRATEGIES, raw, headers)
        if split is not None:
            return split
        return [raw] + [''] * (width - 1)

    if len(cells) > width:
        if _ends_with_remarks(headers):
            return cells[:width - 1] + [' '.join(cells[width - 1:])]
        return cells[:width]

    return cells + [''] * (width - len(cells))


def normalize_rows(table: Table) -> Table:
    if not table:
        return []
    headers = list(table[0])
    return [headers] + [normalize_row(headers, row) for row in table[1:]]
