"""CSV adapter: one ``<collection>.csv`` file per record type in a directory.

Dotted column names (``created_by_user.full_name``) become embedded
relations; empty cells are treated as missing values.
"""

from __future__ import annotations

import csv
from pathlib import Path

from progress_engine.adapters.json_adapter import COLLECTIONS
from progress_engine.schema import ProjectRecords

_NUMERIC_FIELDS = {
    "progress_percentage",
    "duration_hours",
    "overall_score",
    "views_count",
    "likes_count",
}
_LIST_FIELDS = {"photo_urls"}


def _convert(name: str, raw: str, label: str, row_number: int):
    if name in _NUMERIC_FIELDS:
        try:
            return float(raw)
        except ValueError as exc:
            raise ValueError(f"{label} row {row_number}: invalid {name}") from exc
    if name in _LIST_FIELDS:
        return [part.strip() for part in raw.split("|") if part.strip()]
    return raw


def _parse_row(row: dict, label: str, row_number: int) -> dict:
    if not (row.get("id") or "").strip():
        raise ValueError(f"{label} row {row_number}: missing required field 'id'")

    record: dict = {}
    for column, raw in row.items():
        if column is None:
            raise ValueError(f"{label} row {row_number}: more cells than header columns")
        if raw is None or raw.strip() == "":
            continue
        value = raw.strip()
        if "." in column:
            relation, name = column.split(".", maxsplit=1)
            record.setdefault(relation, {})[name] = _convert(name, value, label, row_number)
        else:
            record[column] = _convert(column, value, label, row_number)
    return record


def _parse_file(path: Path) -> list[dict]:
    with open(path, newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            return []
        return [_parse_row(row, path.name, row_number) for row_number, row in enumerate(reader, start=2)]


def parse(directory: str) -> ProjectRecords:
    """Parse every ``<collection>.csv`` in ``directory``; absent files are empty collections."""

    root = Path(directory)
    if not root.is_dir():
        raise ValueError(f"{directory}: expected a directory of CSV files")

    records = {}
    for collection in COLLECTIONS:
        path = root / f"{collection}.csv"
        records[collection] = _parse_file(path) if path.exists() else []
    return ProjectRecords(**records)
