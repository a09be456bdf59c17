"""JSON adapter for project record bundles."""

from __future__ import annotations

import json
from dataclasses import fields

from progress_engine.schema import ProjectRecords

COLLECTIONS = tuple(f.name for f in fields(ProjectRecords))


def _parse_item(item: object, collection: str, index: int) -> dict:
    if not isinstance(item, dict):
        raise ValueError(f"{collection} item {index}: expected an object")
    if item.get("id") in (None, ""):
        raise ValueError(f"{collection} item {index}: missing required field 'id'")
    return dict(item)


def parse_payload(payload: object) -> ProjectRecords:
    """Validate a decoded bundle and return its records."""

    if not isinstance(payload, dict):
        raise ValueError("JSON payload must be an object keyed by collection name")

    unknown = sorted(set(payload) - set(COLLECTIONS))
    if unknown:
        raise ValueError(f"Unknown collections {unknown}")

    records = {}
    for collection in COLLECTIONS:
        items = payload.get(collection) or []
        if not isinstance(items, list):
            raise ValueError(f"{collection}: expected a list of objects")
        records[collection] = [_parse_item(item, collection, i) for i, item in enumerate(items, start=1)]
    return ProjectRecords(**records)


def parse(file_path: str) -> ProjectRecords:
    """Parse a JSON bundle file into project records."""

    with open(file_path, encoding="utf-8") as handle:
        try:
            payload = json.load(handle)
        except json.JSONDecodeError as exc:
            raise ValueError(f"{file_path}: malformed JSON") from exc

    return parse_payload(payload)
