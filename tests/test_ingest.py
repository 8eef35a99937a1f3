"""
Tests for CSV record ingestion and amount parsing.
"""

import csv
import logging

import pytest

from bidtree.ingest import ColumnMap, iter_records, load_records, parse_amount
from bidtree.models import Record, RecordLoadError
from helpers import CSV_HEADER


class TestParseAmount:
    """Tests for lenient currency parsing."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("$27.00", 27.0),
            ("$1,225.50", 1225.5),
            ("  $3 ", 3.0),
            ("15", 15.0),
            ("", 0.0),
            ("n/a", 0.0),
            ("$", 0.0),
            (None, 0.0),
        ],
    )
    def test_parse_amount(self, text, expected):
        assert parse_amount(text) == expected

    def test_custom_strip_character(self):
        assert parse_amount("€12.5", strip="€") == 12.5
        assert parse_amount("€12.5") == 0.0


class TestLoadRecords:
    """Tests for reading the auction export."""

    def test_maps_columns_in_file_order(self, bids_csv):
        records = load_records(bids_csv)

        assert [r.key for r in records] == ["98109", "97990", "98223", "98001"]
        assert records[0] == Record(
            key="98109", title="Hoover Steam Vac", category="General Fund", amount=27.0
        )
        assert records[1].amount == 1225.5

    def test_malformed_amount_is_zero(self, bids_csv):
        records = load_records(bids_csv)
        assert records[3].title == "Antique Desk"
        assert records[3].amount == 0.0

    def test_short_rows_are_skipped(self, tmp_path, caplog):
        path = tmp_path / "short.csv"
        path.write_text(
            CSV_HEADER + "\n"
            "Chair,1,Parks,1/1/2017,$5,I,,R,General Fund\n"
            "Broken,2,Parks\n"
            "\n"
            "Desk,3,Parks,1/2/2017,$6,I,,R,Enterprise\n",
            encoding="utf-8",
        )

        with caplog.at_level(logging.WARNING, logger="bidtree.ingest.csv_loader"):
            records = load_records(path)

        assert [r.key for r in records] == ["1", "3"]
        assert "Skipping row 3" in caplog.text

    def test_header_only_file(self, tmp_path):
        path = tmp_path / "empty.csv"
        path.write_text(CSV_HEADER + "\n", encoding="utf-8")
        assert load_records(path) == []

    def test_empty_file(self, tmp_path):
        path = tmp_path / "blank.csv"
        path.write_text("", encoding="utf-8")
        assert load_records(path) == []

    def test_custom_columns(self, tmp_path):
        path = tmp_path / "custom.csv"
        path.write_text("id,name,price,fund\n42,Lamp,£8,Grants\n", encoding="utf-8")

        columns = ColumnMap(key=0, title=1, amount=2, category=3)
        records = load_records(path, columns=columns, amount_strip="£")

        assert records == [Record(key="42", title="Lamp", category="Grants", amount=8.0)]

    def test_iter_records_is_lazy(self, bids_csv):
        records = iter_records(bids_csv)
        assert next(records).key == "98109"
        records.close()

    def test_missing_file(self, tmp_path):
        missing = tmp_path / "missing.csv"
        with pytest.raises(RecordLoadError) as exc_info:
            load_records(missing)
        assert exc_info.value.path == str(missing)

    def test_malformed_csv(self, tmp_path):
        path = tmp_path / "bad.csv"
        oversized = "x" * (csv.field_size_limit() + 1)
        path.write_text(f"a,b\nok,1\n{oversized},2\n", encoding="utf-8")

        with pytest.raises(RecordLoadError) as exc_info:
            load_records(path, columns=ColumnMap(title=0, key=1, amount=1, category=1))
        assert exc_info.value.line is not None

    def test_undecodable_file(self, tmp_path):
        path = tmp_path / "cp1252.csv"
        path.write_bytes(
            f"{CSV_HEADER}\n"
            "Caf\xe9 Table,98109,Parks,11/6/2016,$27.00,IN-1,,R1,General Fund\n".encode("cp1252")
        )

        with pytest.raises(RecordLoadError) as exc_info:
            load_records(path)
        assert exc_info.value.path == str(path)
        assert "utf-8-sig" in str(exc_info.value)

    def test_explicit_encoding(self, tmp_path):
        path = tmp_path / "cp1252.csv"
        path.write_bytes(
            f"{CSV_HEADER}\n"
            "Caf\xe9 Table,98109,Parks,11/6/2016,$27.00,IN-1,,R1,General Fund\n".encode("cp1252")
        )

        records = load_records(path, encoding="cp1252")

        assert [r.title for r in records] == ["Caf\xe9 Table"]

    def test_unknown_encoding(self, bids_csv):
        with pytest.raises(RecordLoadError, match="no-such-codec"):
            load_records(bids_csv, encoding="no-such-codec")


class TestColumnMap:
    def test_width(self):
        assert ColumnMap().width == 9
        assert ColumnMap(title=0, key=1, amount=2, category=3).width == 4

    def test_negative_index_rejected(self):
        with pytest.raises(ValueError):
            ColumnMap(key=-1)
