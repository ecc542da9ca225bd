import io
import json
from pathlib import Path

from json_table_exporter import config
from json_table_exporter.handlers import (
    _highlight,
    copy_handler,
    export_data_handler,
    load_payload,
    payload_loaded_handler,
    table_to_dataframe,
)
from json_table_exporter.io_utils import parse_header_text, parse_payload_text, read_payload

RAW = [{"Item": "Pen", "Qty": 2}, {"Item": "Ink", "Qty": "not clear"}]


def test_read_payload_from_file_like_and_path(tmp_path: Path) -> None:
    assert read_payload(io.BytesIO(b'{"a": 1}')) == {"a": 1}
    path = tmp_path / "payload.txt"
    path.write_text("label: [1, 2,]", encoding="utf-8")
    assert read_payload(str(path)) == "label: [1, 2,]"


def test_parse_helpers() -> None:
    assert parse_payload_text("  ") is None
    assert parse_payload_text("[1]") == [1]
    assert parse_header_text("Name, Phone\nRemarks,") == [{"name": "Name"}, {"name": "Phone"}, {"name": "Remarks"}]
    assert parse_header_text("") == []


def test_load_payload_prefers_file() -> None:
    payload, message = load_payload(io.BytesIO(b"[1]"), "[2]")
    assert payload == [1]
    assert "file" in message
    assert load_payload(None, "") == (None, "No payload provided.")


def test_copy_handler_uses_selection() -> None:
    assert copy_handler(RAW, "", [1], [0]) == "Item\nInk\n"


def test_dataframe_preview_deduplicates_headers() -> None:
    df = table_to_dataframe([["a", "a", ""], ["1", "2", "3"]])
    assert list(df.columns) == ["a", "a (2)", "(blank)"]
    assert table_to_dataframe(None) is None


def test_export_formats(tmp_path: Path) -> None:
    path, message = export_data_handler(RAW, "", [], [], "Excel", str(tmp_path))
    assert path.endswith("extracted-data.xls")
    assert "Export successful" in message
    assert 'ss:StyleID="CellWarnText"' in Path(path).read_text(encoding="utf-8")

    path, _ = export_data_handler(RAW, "Product", [], [], "CSV", str(tmp_path))
    assert Path(path).read_text(encoding="utf-8").splitlines() == ["Product,column_2", "Pen,2", "Ink,not clear"]

    path, _ = export_data_handler(RAW, "", [0], [], "JSON", str(tmp_path))
    assert json.loads(Path(path).read_text(encoding="utf-8")) == [{"Item": "Pen", "Qty": "2"}]


def test_export_reports_failures(tmp_path: Path) -> None:
    assert export_data_handler(None, "", [], [], "Excel") == (None, "No data loaded.")
    path, message = export_data_handler(RAW, "", [], [], "Excel", str(tmp_path / "nope"))
    assert path is None
    assert message.startswith("Error during export:")


def test_empty_header_payload_loads_as_raw_result() -> None:
    raw, message, _, _, _, counts = payload_loaded_handler(None, '[[], ["a", "b"]]', "")
    assert raw == [[], ["a", "b"]]
    assert "Found 1 rows and 1 columns" in message
    assert counts == "Rows selected: 1 | Columns selected: 1"
    assert table_to_dataframe([[], []]) is None


def test_preview_highlight_uses_configured_digit_limit(monkeypatch) -> None:
    assert _highlight("123456789012") == ""
    monkeypatch.setattr(config, "NUMBER_MAX_DIGITS", 13)
    assert _highlight("123456789012") == "text-align: right"
