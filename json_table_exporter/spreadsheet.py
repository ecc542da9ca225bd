"""SpreadsheetML 2003 export of finalized tables.

Excel opens the XML workbook directly when it is saved with an `.xls`
extension. Style decisions live in `classify_cell`; `SpreadsheetBuilder`
only accumulates typed rows and serializes them once.
"""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Union
from xml.sax.saxutils import escape

from . import config
from .tables import Table

logger = logging.getLogger(__name__)

_NON_NUMERIC = re.compile(r'[^0-9.\-]')
_SIGNED_DECIMAL = re.compile(r'^[-+]?\d+(?:\.\d+)?$')
_LEADING_ZERO = re.compile(r'^0\d+$')
_UNCLEAR = re.compile(r'not\s*clear|unclear|notclear', re.IGNORECASE)

_XML_ENTITIES = {'"': '&quot;', "'": '&apos;'}

_BOTTOM_BORDER = (
    '<Borders>'
    '<Border ss:Position="Bottom" ss:LineStyle="Continuous" ss:Weight="1" ss:Color="#333333"/>'
    '</Borders>'
)

STYLES_XML = (
    '<Styles>'
    '<Style ss:ID="Header">'
    '<Font ss:Bold="1" ss:Color="#000000"/>'
    '<Alignment ss:Horizontal="Center" ss:Vertical="Center"/>'
    '<Interior ss:Color="#FFC107" ss:Pattern="Solid"/>'
    '</Style>'
    '<Style ss:ID="CellText">'
    '<Alignment ss:Horizontal="Left" ss:Vertical="Center"/>'
    + _BOTTOM_BORDER +
    '</Style>'
    '<Style ss:ID="CellWarnText">'
    '<Font ss:Color="#FFC107" ss:Bold="1"/>'
    '<Alignment ss:Horizontal="Left" ss:Vertical="Center"/>'
    + _BOTTOM_BORDER +
    '</Style>'
    '<Style ss:ID="CellNumber">'
    '<Alignment ss:Horizontal="Right" ss:Vertical="Center"/>'
    + _BOTTOM_BORDER +
    '</Style>'
    '</Styles>'
)

WORKBOOK_OPEN = (
    '<?xml version="1.0"?>\n'
    '<?mso-application progid="Excel.Sheet"?>\n'
    '<Workbook xmlns="urn:schemas-microsoft-com:office:spreadsheet"'
    ' xmlns:o="urn:schemas-microsoft-com:office:office"'
    ' xmlns:x="urn:schemas-microsoft-com:office:excel"'
    ' xmlns:ss="urn:schemas-microsoft-com:office:spreadsheet">'
)


class ExportError(RuntimeError):
    """The spreadsheet could not be written."""


class CellStyle(Enum):
    HEADER = 'Header'
    NUMBER = 'CellNumber'
    TEXT = 'CellText'
    WARNING = 'CellWarnText'


@dataclass(frozen=True)
class NumberPolicy:
    """When a text cell is exported as a number.

    `max_digits` is exclusive: cells with that many digits stay text so
    phone numbers and IDs are not turned into floats.
    """

    max_digits: int = 10
    reject_leading_zero: bool = True


def default_policy() -> NumberPolicy:
    return NumberPolicy(max_digits=config.NUMBER_MAX_DIGITS)


def is_numeric(value: str, policy: Optional[NumberPolicy] = None) -> bool:
    policy = policy or NumberPolicy()
    cleaned = _NON_NUMERIC.sub('', str(value).strip())
    if not cleaned:
        return False
    digits = re.sub(r'\D', '', cleaned)
    if len(digits) >= policy.max_digits:
        return False
    if policy.reject_leading_zero and _LEADING_ZERO.match(cleaned):
        return False
    return bool(_SIGNED_DECIMAL.match(cleaned))


def is_unclear(value: str) -> bool:
    return bool(_UNCLEAR.search(str(value)))


def classify_cell(value: str, policy: Optional[NumberPolicy] = None) -> CellStyle:
    if is_numeric(value, policy):
        return CellStyle.NUMBER
    if is_unclear(value):
        return CellStyle.WARNING
    return CellStyle.TEXT


def parse_number(value: str) -> float:
    try:
        return float(_NON_NUMERIC.sub('', str(value)))
    except ValueError:
        return 0.0


def format_number(num: float) -> str:
    if num.is_integer():
        return str(int(num))
    return repr(num)


@dataclass(frozen=True)
class StyledCell:
    style: CellStyle
    value: Union[str, float]


@dataclass
class SpreadsheetBuilder:
    sheet_name: str = config.SHEET_NAME
    policy: NumberPolicy = field(default_factory=NumberPolicy)
    rows: List[List[StyledCell]] = field(default_factory=list)
    column_count: int = 0

    def add_header(self, headers: Sequence[str]) -> None:
        self.column_count = max(self.column_count, len(headers))
        self.rows.append([StyledCell(CellStyle.HEADER, str(h)) for h in headers])

    def add_row(self, row: Sequence[str]) -> None:
        self.column_count = max(self.column_count, len(row))
        cells = []
        for raw in row:
            text = '' if raw is None else str(raw)
            style = classify_cell(text, self.policy)
            value = parse_number(text) if style is CellStyle.NUMBER else text
            cells.append(StyledCell(style, value))
        self.rows.append(cells)

    @staticmethod
    def _cell_xml(cell: StyledCell) -> str:
        if cell.style is CellStyle.NUMBER:
            data = f'<Data ss:Type="Number">{format_number(cell.value)}</Data>'
        else:
            data = f'<Data ss:Type="String">{escape(cell.value, _XML_ENTITIES)}</Data>'
        return f'<Cell ss:StyleID="{cell.style.value}">{data}</Cell>'

    def to_xml(self) -> str:
        columns_xml = '<Column ss:AutoFitWidth="1" />' * self.column_count
        rows_xml = ''.join(
            '<Row>' + ''.join(self._cell_xml(c) for c in row) + '</Row>' for row in self.rows
        )
        return (
            WORKBOOK_OPEN
            + STYLES_XML
            + f'<Worksheet ss:Name="{escape(self.sheet_name, _XML_ENTITIES)}">'
            + f'<Table ss:ExpandedColumnCount="{self.column_count}" ss:ExpandedRowCount="{len(self.rows)}">'
            + columns_xml
            + rows_xml
            + '</Table>'
            + '</Worksheet>'
            + '</Workbook>'
        )


def render_spreadsheet(table: Table, policy: Optional[NumberPolicy] = None) -> str:
    """Serialize a filtered table into a single-sheet SpreadsheetML document."""
    builder = SpreadsheetBuilder(policy=policy or default_policy())
    if table:
        builder.add_header(table[0])
        for row in table[1:]:
            builder.add_row(row)
    return builder.to_xml()


def export_spreadsheet(
    table: Table,
    directory: Optional[str] = None,
    file_name: str = config.EXPORT_FILE_NAME,
    policy: Optional[NumberPolicy] = None,
) -> str:
    """Write the workbook for `table` and return its path."""
    xml = render_spreadsheet(table, policy)
    path = os.path.join(directory or config.EXPORT_DIR, file_name)
    try:
        with open(path, 'w', encoding='utf-8') as f:
            f.write(xml)
    except OSError as exc:
        logger.exception("Failed to write spreadsheet to %s", path)
        raise ExportError(f"Could not write {path}: {exc}") from exc
    logger.info("Exported %d rows to %s", max(0, len(table) - 1), path)
    return path
