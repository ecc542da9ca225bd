import json

from json_table_exporter.contacts import CONTACT_DIRECTORY_HEADERS
from json_table_exporter.pipeline import display_table, finalize_table, run_pipeline, table_from_payload
from json_table_exporter.selection import SelectionSet


def test_pipeline_is_idempotent() -> None:
    raw = 'result: [{"name": "Ann", "phone": "9876543210"}, {"name": "Bo"},]'
    override = [{"name": "Name"}, {"name": "Phone"}]
    selection = SelectionSet.of(rows=[1], columns=[0, 1])
    first = run_pipeline(raw, override, selection)
    second = run_pipeline(raw, override, selection)
    assert first == second
    assert json.dumps(first) == json.dumps(second)
    assert first == [["Name", "Phone"], ["Bo", ""]]


def test_every_row_matches_header_width() -> None:
    raw = [["A", "B", "remarks"], ["1"], ["1, 2, 3, 4"], ["1", "2", "3", "4", "5"], []]
    table = run_pipeline(raw)
    assert all(len(row) == len(table[0]) for row in table)
    assert table[2] == ["1", "2", "3, 4"]
    assert table[3] == ["1", "2", "3 4 5"]


def test_template_headers_trigger_contact_remap() -> None:
    raw = [
        [f"column_{i}" for i in range(1, 8)],
        ["Zone A: Downtown +91 9876543210 9123456789"],
        ["Zone B - Riverside 9988776655"],
    ]
    override = [{"name": n} for n in CONTACT_DIRECTORY_HEADERS]
    table = run_pipeline(raw, override)
    assert table[0] == list(CONTACT_DIRECTORY_HEADERS)
    assert table[1] == ["Zone A", "Downtown", "9876543210", "9123456789", "", "", ""]
    assert table[2] == ["Zone B", "Riverside", "9988776655", "", "", "", ""]


def test_other_headers_use_generic_normalizer() -> None:
    table = finalize_table([["a", "b"], ["x: y"]])
    assert table == [["a", "b"], ["x", "y"]]
    assert finalize_table([]) == []


def test_fallbacks_for_non_tabular_payloads() -> None:
    assert table_from_payload(12) is None
    assert display_table(12) == [["Result"], ["12"]]
    assert display_table("not json at all") == [["Result"], ["not json at all"]]
    assert display_table({"records": []}) == [["Key", "Value"], ["records", "[]"]]
    assert run_pipeline(None) is None


def test_header_override_applies_before_selection() -> None:
    raw = [{"a": 1, "b": 2, "c": 3}]
    table = run_pipeline(raw, ["First"], SelectionSet.of(columns=[0, 2]))
    assert table == [["First", "column_3"], ["1", "3"]]


def test_empty_header_row_falls_back_to_raw_result() -> None:
    raw = [[], ["a", "b"]]
    table = run_pipeline(raw)
    assert table == [["Result"], [json.dumps(raw, indent=2)]]
    assert all(len(row) == len(table[0]) for row in table)
    assert table_from_payload(raw) is None
