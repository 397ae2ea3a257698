"""Tests for reading interval records from files."""

import csv
from pathlib import Path

import pytest

from teamline.config import ColumnMapping, DetailColumns
from teamline.exceptions import InputError
from teamline.loader import (
    merge_details,
    read_csv_records,
    read_details,
    read_records,
    read_yaml_records,
)

HEADER = ["Project", "Person", "Summary", "Start Date", "End Date", "Epic Name", "Status"]


def write_csv(
    path: Path, header: list[str], rows: list[list[str]], encoding: str = "utf-8"
) -> Path:
    with path.open("w", newline="", encoding=encoding) as f:
        writer = csv.writer(f)
        writer.writerow(header)
        writer.writerows(rows)
    return path


class TestReadCsv:
    """Test CSV interval rows."""

    def test_default_columns(self, tmp_path: Path) -> None:
        path = write_csv(
            tmp_path / "rows.csv",
            HEADER,
            [["P1", "Alice", "Build", "2025-01-06", "2025-01-10", "Epic A", "Open"]],
        )
        assert read_csv_records(path) == [
            {
                "id": "P1",
                "group": "Alice",
                "label": "Build",
                "start": "2025-01-06",
                "end": "2025-01-10",
                "color_key": "Epic A",
                "status": "Open",
            }
        ]

    def test_optional_columns_may_be_absent(self, tmp_path: Path) -> None:
        path = write_csv(
            tmp_path / "rows.csv",
            ["Project", "Person", "Start Date", "End Date"],
            [["P1", "Alice", "2025-01-06", "2025-01-10"]],
        )
        assert read_csv_records(path) == [
            {"id": "P1", "group": "Alice", "start": "2025-01-06", "end": "2025-01-10"}
        ]

    def test_custom_columns(self, tmp_path: Path) -> None:
        path = write_csv(
            tmp_path / "rows.csv",
            ["Key", "Owner", "From", "To", "Summary"],
            [["P1", "Alice", "2025-01-06", "2025-01-10", "ignored"]],
        )
        columns = ColumnMapping(id="Key", group="Owner", start="From", end="To", label=None)
        records = read_csv_records(path, columns)
        assert records == [
            {"id": "P1", "group": "Alice", "start": "2025-01-06", "end": "2025-01-10"}
        ]

    def test_byte_order_mark_ignored(self, tmp_path: Path) -> None:
        path = write_csv(
            tmp_path / "rows.csv",
            HEADER,
            [["P1", "Alice", "Build", "2025-01-06", "2025-01-10", "", ""]],
            encoding="utf-8-sig",
        )
        assert read_csv_records(path)[0]["id"] == "P1"

    def test_missing_required_column(self, tmp_path: Path) -> None:
        path = write_csv(tmp_path / "rows.csv", ["Project", "Person"], [["P1", "Alice"]])
        with pytest.raises(InputError, match="Start Date, End Date"):
            read_csv_records(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(InputError, match="Cannot read"):
            read_csv_records(tmp_path / "missing.csv")

    def test_invalid_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "rows.csv"
        path.write_bytes(b"Project,Person,Start Date,End Date\n\xff,Alice,2025-01-06,2025-01-07\n")
        with pytest.raises(InputError, match="not UTF-8"):
            read_csv_records(path)


class TestReadYaml:
    """Test YAML interval lists."""

    def test_list_of_records(self, tmp_path: Path) -> None:
        path = tmp_path / "rows.yaml"
        path.write_text(
            "- {id: P1, group: Alice, start: 2025-01-06, end: 2025-01-10, owner: extra}\n"
        )
        records = read_yaml_records(path)
        assert len(records) == 1
        assert set(records[0]) == {"id", "group", "start", "end"}

    def test_intervals_key(self, tmp_path: Path) -> None:
        path = tmp_path / "rows.yaml"
        path.write_text("intervals:\n  - {id: P1, group: Alice}\n  - {id: P2, group: Bob}\n")
        assert [r["id"] for r in read_yaml_records(path)] == ["P1", "P2"]

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "rows.yaml"
        path.write_text("")
        assert read_yaml_records(path) == []

    def test_not_a_list(self, tmp_path: Path) -> None:
        path = tmp_path / "rows.yaml"
        path.write_text("intervals: 42\n")
        with pytest.raises(InputError, match="list of intervals"):
            read_yaml_records(path)

    def test_item_not_a_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "rows.yaml"
        path.write_text("- P1\n")
        with pytest.raises(InputError, match="#1 is not a mapping"):
            read_yaml_records(path)

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "rows.yaml"
        path.write_text("- {id: [\n")
        with pytest.raises(InputError, match="not valid YAML"):
            read_yaml_records(path)

    def test_invalid_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "rows.yaml"
        path.write_bytes(b"- {id: \xff}\n")
        with pytest.raises(InputError):
            read_yaml_records(path)

    def test_read_records_dispatches_on_suffix(self, tmp_path: Path) -> None:
        yaml_path = tmp_path / "rows.yml"
        yaml_path.write_text("- {id: Y1}\n")
        csv_path = write_csv(
            tmp_path / "rows.csv",
            ["Project", "Person", "Start Date", "End Date"],
            [["C1", "Alice", "2025-01-06", "2025-01-06"]],
        )
        assert read_records(yaml_path)[0]["id"] == "Y1"
        assert read_records(csv_path)[0]["id"] == "C1"


class TestDetails:
    """Test filling blanks from a details table."""

    def test_read_details(self, tmp_path: Path) -> None:
        path = write_csv(
            tmp_path / "details.csv",
            ["Key", "Summary", "Start Date", "Due Date", "Epic Name", "Status"],
            [
                ["P1", "Build it", "2025-01-06", "2025-01-31", "Epic A", "Open"],
                ["", "orphan", "", "", "", ""],
            ],
        )
        details = read_details(path)
        assert list(details) == ["P1"]
        assert details["P1"]["end"] == "2025-01-31"
        assert details["P1"]["label"] == "Build it"

    def test_custom_detail_columns(self, tmp_path: Path) -> None:
        path = write_csv(tmp_path / "details.csv", ["Id", "Title"], [["P1", "Build it"]])
        details = read_details(path, DetailColumns(id="Id", label="Title"))
        assert details == {"P1": {"label": "Build it"}}

    def test_merge_fills_only_blanks(self) -> None:
        records = [
            {"id": "P1", "group": "Alice", "label": "Mine", "start": "2025-01-06", "end": ""},
            {"id": "P2", "group": "Bob", "start": "2025-01-06", "end": "2025-01-07"},
        ]
        details = {"P1": {"label": "Theirs", "end": "2025-01-31", "status": "Open"}}

        merged = merge_details(records, details)

        assert merged[0] == {
            "id": "P1",
            "group": "Alice",
            "label": "Mine",
            "start": "2025-01-06",
            "end": "2025-01-31",
            "status": "Open",
        }
        assert merged[1] == records[1]
        assert records[0]["end"] == ""
