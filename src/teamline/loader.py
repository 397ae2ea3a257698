"""Reading interval records from CSV and YAML files."""

from __future__ import annotations

import csv
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

import yaml

from .config import ColumnMapping, DetailColumns
from .exceptions import InputError
from .logger import get_logger

RECORD_FIELDS = ("id", "group", "label", "start", "end", "color_key", "status")


def _read_csv_rows(path: Path, required: Iterable[str]) -> list[dict[str, str]]:
    """Read a CSV file with a header row, checking required columns exist."""
    try:
        with path.open(newline="", encoding="utf-8-sig") as f:
            reader = csv.DictReader(f)
            header = reader.fieldnames or []
            missing = [name for name in required if name not in header]
            if missing:
                raise InputError(
                    f"{path} is missing required column(s): {', '.join(missing)}"
                )
            return list(reader)
    except OSError as e:
        raise InputError(f"Cannot read {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise InputError(f"{path} is not UTF-8 text: {e}") from e
    except csv.Error as e:
        raise InputError(f"{path} is not valid CSV: {e}") from e


def _select(row: Mapping[str, Any], mapping: Mapping[str, str | None]) -> dict[str, Any]:
    """Pick record fields out of a row using a field -> column name mapping."""
    record: dict[str, Any] = {}
    for field_name, column in mapping.items():
        if column is not None and column in row:
            record[field_name] = row[column]
    return record


def read_csv_records(
    path: Path | str, columns: ColumnMapping | None = None
) -> list[dict[str, Any]]:
    """Read interval records from a CSV file.

    Args:
        path: CSV file with a header row
        columns: Column names for each record field

    Returns:
        Raw records keyed by record field name

    Raises:
        InputError: If the file cannot be read or lacks a required column
    """
    columns = columns or ColumnMapping()
    rows = _read_csv_rows(Path(path), columns.required())
    mapping = columns.model_dump()
    return [_select(row, mapping) for row in rows]


def read_yaml_records(path: Path | str) -> list[dict[str, Any]]:
    """Read interval records from YAML.

    The file holds either a list of records or a mapping with an
    ``intervals`` list. Record keys are the record field names.
    """
    path = Path(path)
    try:
        with path.open(encoding="utf-8") as f:
            data: Any = yaml.safe_load(f)
    except OSError as e:
        raise InputError(f"Cannot read {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise InputError(f"{path} is not UTF-8 text: {e}") from e
    except yaml.YAMLError as e:
        raise InputError(f"{path} is not valid YAML: {e}") from e

    if isinstance(data, dict):
        data = data.get("intervals", [])
    if data is None:
        return []
    if not isinstance(data, list):
        raise InputError(f"{path} must contain a list of intervals")

    records: list[dict[str, Any]] = []
    for position, item in enumerate(data, start=1):
        if not isinstance(item, dict):
            raise InputError(f"{path}: interval #{position} is not a mapping")
        records.append({k: v for k, v in item.items() if k in RECORD_FIELDS})
    return records


def read_records(path: Path | str, columns: ColumnMapping | None = None) -> list[dict[str, Any]]:
    """Read records from a CSV or YAML file, chosen by extension."""
    path = Path(path)
    if path.suffix.lower() in (".yaml", ".yml"):
        return read_yaml_records(path)
    return read_csv_records(path, columns)


def read_details(
    path: Path | str, columns: DetailColumns | None = None
) -> dict[str, dict[str, Any]]:
    """Read a details table (e.g. a project list) keyed by interval id."""
    columns = columns or DetailColumns()
    rows = _read_csv_rows(Path(path), [columns.id])
    mapping = columns.model_dump(exclude={"id"})

    details: dict[str, dict[str, Any]] = {}
    for row in rows:
        key = (row.get(columns.id) or "").strip()
        if key:
            details[key] = _select(row, mapping)
    return details


def merge_details(
    records: Iterable[Mapping[str, Any]], details: Mapping[str, Mapping[str, Any]]
) -> list[dict[str, Any]]:
    """Fill blank record fields from the details of the record's id."""
    logger = get_logger()
    merged: list[dict[str, Any]] = []
    for record in records:
        result = dict(record)
        detail = details.get(str(record.get("id") or "").strip(), {})
        for field_name, value in detail.items():
            if value in (None, "") or str(result.get(field_name) or "").strip():
                continue
            result[field_name] = value
            if field_name in ("start", "end"):
                logger.adjustment(
                    f"'{record.get('id')}' for '{record.get('group')}' has no {field_name} "
                    f"date; using details value {value}"
                )
        merged.append(result)
    return merged
