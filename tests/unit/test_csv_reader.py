from __future__ import annotations
from pathlib import Path

import pytest

from yard_recon.csvio.reader import (
    DUPLICATE_HEADERS_MESSAGE,
    EMPTY_FILE_MESSAGE,
    load_csv,
    parse_csv,
    read_csv_text,
)
from yard_recon.errors import CsvParseError, CsvReadError


def test_parse_single_row_round_trip():
    ds = parse_csv("A,B,C\n1,2,3")
    assert len(ds) == 1
    assert dict(ds.records[0]) == {"A": "1", "B": "2", "C": "3"}
    assert ds.records[0] == {"A": "1", "B": "2", "C": "3"}
    assert ds.headers == ("A", "B", "C")


def test_parse_is_deterministic():
    text = "A,B\n1,2\n3,4\n"
    assert parse_csv(text) == parse_csv(text)


def test_duplicate_headers_refused():
    ds = parse_csv("A,A,B\n1,2,3\n")
    assert ds.is_empty
    assert ds.problem == DUPLICATE_HEADERS_MESSAGE


def test_duplicate_headers_after_normalization_refused():
    # 大文字化・引用符除去後に重複
    ds = parse_csv('vrid,"VRID "\n1,2\n')
    assert ds.is_empty
    assert ds.problem == DUPLICATE_HEADERS_MESSAGE


def test_wrong_field_count_row_dropped():
    ds = parse_csv("A,B\n1,2\n1\n")
    assert len(ds) == 1
    assert ds.records[0] == {"A": "1", "B": "2"}
    assert ds.skipped_rows == (3,)


def test_header_only_or_empty_text_gives_empty_dataset():
    assert parse_csv("").is_empty
    assert parse_csv("A,B\n").is_empty
    assert parse_csv("\n\n  \n").is_empty
    assert parse_csv("A,B\n").problem is None


def test_blank_lines_and_crlf_ignored():
    ds = parse_csv("A,B\r\n\r\n1,2\r\n   \r\n3,4\r\n\r\n")
    assert [dict(r) for r in ds] == [{"A": "1", "B": "2"}, {"A": "3", "B": "4"}]
    # 行番号は元ファイル基準
    assert [r.row_number for r in ds] == [3, 5]


def test_header_normalization_strips_all_quotes_and_uppercases():
    ds = parse_csv("\"carrier load type\", 'Yard Dwell' ,un\"its\nDROP,5hrs,3\n")
    assert ds.headers == ("CARRIER LOAD TYPE", "YARD DWELL", "UNITS")


def test_value_strips_one_layer_of_double_quotes_then_whitespace():
    ds = parse_csv('A,B,C\n"x",""y"", z \n')
    rec = ds.records[0]
    assert rec["A"] == "x"
    assert rec["B"] == '"y"'
    assert rec["C"] == "z"


def test_value_quote_inside_whitespace_is_kept():
    # 先に引用符除去、その後 trim するため空白の内側の引用符は残る
    ds = parse_csv('A,B\n "x" ,1\n')
    assert ds.records[0]["A"] == '"x"'


def test_embedded_comma_row_is_dropped():
    ds = parse_csv('A,B\n"1,5",2\n3,4\n')
    assert len(ds) == 1
    assert ds.records[0] == {"A": "3", "B": "4"}


def test_duplicate_rows_are_kept_in_order():
    ds = parse_csv("A\nx\nx\ny\n")
    assert [r["A"] for r in ds] == ["x", "x", "y"]


def test_records_are_read_only():
    ds = parse_csv("A\n1\n")
    with pytest.raises(TypeError):
        ds.records[0].cells["A"] = "2"  # type: ignore[index]


def test_load_csv_success(tmp_path: Path):
    p = tmp_path / "yms.CSV"
    p.write_text("\ufeffVRID,ISA\nv1,i1\n", encoding="utf-8")
    ds = load_csv(p)
    assert ds.headers == ("VRID", "ISA")
    assert ds.source == str(p)


def test_load_csv_rejects_non_csv(tmp_path: Path):
    p = tmp_path / "yms.txt"
    p.write_text("A\n1\n", encoding="utf-8")
    with pytest.raises(CsvParseError, match="not a CSV"):
        load_csv(p)


def test_load_csv_empty_file(tmp_path: Path):
    p = tmp_path / "empty.csv"
    p.write_text("A,B\n", encoding="utf-8")
    with pytest.raises(CsvParseError) as e:
        load_csv(p)
    assert str(e.value) == EMPTY_FILE_MESSAGE


def test_load_csv_duplicate_headers_message(tmp_path: Path):
    p = tmp_path / "dup.csv"
    p.write_text("A,A\n1,2\n", encoding="utf-8")
    with pytest.raises(CsvParseError) as e:
        load_csv(p)
    assert str(e.value) == DUPLICATE_HEADERS_MESSAGE


def test_read_csv_text_missing_file(tmp_path: Path):
    with pytest.raises(CsvReadError, match="Failed to read file"):
        read_csv_text(tmp_path / "nope.csv")


def test_read_csv_text_not_utf8(tmp_path: Path):
    p = tmp_path / "bin.csv"
    p.write_bytes(b"A,B\n\xff\xfe\xfa,1\n")
    with pytest.raises(CsvParseError):
        read_csv_text(p)


def test_parse_csv_strips_leading_bom():
    ds = parse_csv("\ufeffVRID,B\nv1,2\n")
    assert ds.headers == ("VRID", "B")
    assert ds.records[0]["VRID"] == "v1"
