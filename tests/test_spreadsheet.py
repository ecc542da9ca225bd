from pathlib import Path
from xml.etree import ElementTree

import pytest

from json_table_exporter.spreadsheet import (
    CellStyle,
    ExportError,
    NumberPolicy,
    SpreadsheetBuilder,
    classify_cell,
    export_spreadsheet,
    is_numeric,
    render_spreadsheet,
)

SS = "{urn:schemas-microsoft-com:office:spreadsheet}"


def test_numeric_boundary_guards_phone_numbers() -> None:
    assert classify_cell("9876543210") is CellStyle.TEXT
    assert classify_cell("45.5") is CellStyle.NUMBER
    assert classify_cell("-12") is CellStyle.NUMBER
    assert classify_cell("$45,000") is CellStyle.NUMBER
    assert classify_cell("007") is CellStyle.TEXT
    assert classify_cell("0.75") is CellStyle.NUMBER
    assert classify_cell("1.2.3") is CellStyle.TEXT
    assert classify_cell("") is CellStyle.TEXT


def test_number_policy_is_configurable() -> None:
    assert is_numeric("123456789012", NumberPolicy(max_digits=13))
    assert not is_numeric("12345", NumberPolicy(max_digits=5))
    assert is_numeric("007", NumberPolicy(reject_leading_zero=False))


def test_warning_cells() -> None:
    assert classify_cell("Name not clear") is CellStyle.WARNING
    assert classify_cell("NOTCLEAR") is CellStyle.WARNING
    assert classify_cell("unclear scan") is CellStyle.WARNING
    assert classify_cell("clear") is CellStyle.TEXT


def test_builder_tracks_styles_and_width() -> None:
    builder = SpreadsheetBuilder()
    builder.add_header(["A", "B"])
    builder.add_row(["1.50", "x"])
    assert builder.column_count == 2
    assert [c.style for c in builder.rows[0]] == [CellStyle.HEADER, CellStyle.HEADER]
    assert builder.rows[1][0].value == 1.5
    assert builder.rows[1][1].style is CellStyle.TEXT


def test_rendered_document_is_well_formed_spreadsheetml() -> None:
    table = [["Item", "Qty", "Note"], ["Pens & <ink>", "12", "not clear"], ["Pad", "9876543210", "ok"]]
    xml = render_spreadsheet(table)
    assert xml.startswith('<?xml version="1.0"?>\n<?mso-application progid="Excel.Sheet"?>')

    root = ElementTree.fromstring(xml.split("\n", 2)[2])
    worksheet = root.find(f"{SS}Worksheet")
    assert worksheet.get(f"{SS}Name") == "Extracted"

    sheet = worksheet.find(f"{SS}Table")
    assert sheet.get(f"{SS}ExpandedColumnCount") == "3"
    assert sheet.get(f"{SS}ExpandedRowCount") == "3"
    columns = sheet.findall(f"{SS}Column")
    assert len(columns) == 3
    assert all(c.get(f"{SS}AutoFitWidth") == "1" for c in columns)

    rows = sheet.findall(f"{SS}Row")
    styles = [[c.get(f"{SS}StyleID") for c in row.findall(f"{SS}Cell")] for row in rows]
    assert styles == [
        ["Header", "Header", "Header"],
        ["CellText", "CellNumber", "CellWarnText"],
        ["CellText", "CellText", "CellText"],
    ]
    first = rows[1].findall(f"{SS}Cell")
    assert first[0].find(f"{SS}Data").text == "Pens & <ink>"
    assert first[1].find(f"{SS}Data").get(f"{SS}Type") == "Number"
    assert first[1].find(f"{SS}Data").text == "12"

    style_ids = {s.get(f"{SS}ID") for s in root.find(f"{SS}Styles")}
    assert style_ids == {"Header", "CellText", "CellWarnText", "CellNumber"}


def test_render_is_deterministic() -> None:
    table = [["a"], ["1"]]
    assert render_spreadsheet(table) == render_spreadsheet(table)


def test_export_writes_named_file(tmp_path: Path) -> None:
    path = export_spreadsheet([["a"], ["1"]], str(tmp_path))
    assert Path(path) == tmp_path / "extracted-data.xls"
    assert "<Worksheet" in Path(path).read_text(encoding="utf-8")


def test_export_failure_raises_export_error(tmp_path: Path) -> None:
    with pytest.raises(ExportError):
        export_spreadsheet([["a"]], str(tmp_path / "missing" / "dir"))
