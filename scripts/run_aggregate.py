"""Aggregate a project record bundle (JSON file or CSV directory) into a progress report."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from progress_engine.adapters import csv_adapter, json_adapter
from progress_engine.assembler import assemble_records
from progress_engine.config import DEFAULT_CONFIG, load_config
from progress_engine.dates import parse_timestamp
from progress_engine.serialize import to_payload

logger = logging.getLogger("run_aggregate")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _load_records(path: Path):
    if path.is_dir():
        return csv_adapter.parse(str(path))
    if path.suffix.lower() == ".json":
        return json_adapter.parse(str(path))
    raise ValueError("Unsupported input, expected a .json bundle or a directory of CSV files")


def _parse_now(value: str | None) -> datetime:
    if value is None:
        return datetime.now(timezone.utc)
    now = parse_timestamp(value)
    if now is None:
        raise ValueError(f"Invalid --now timestamp '{value}'")
    return now


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the project progress aggregation engine")
    parser.add_argument("--data", required=True, help="Path to a JSON bundle or a directory of CSV files")
    parser.add_argument("--now", help="Reference time (ISO-8601); defaults to the current UTC time")
    parser.add_argument("--config", help="Path to a JSON file overriding engine thresholds")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Logging level (default: WARNING)",
    )
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    try:
        config = load_config(args.config) if args.config else DEFAULT_CONFIG
        now = _parse_now(args.now)
        records = _load_records(Path(args.data))
    except (OSError, ValueError) as exc:
        logger.error("Input error: %s", exc)
        raise SystemExit(2) from exc

    report = to_payload(assemble_records(records, now, config))
    report["generatedAt"] = now.isoformat()

    print(json.dumps(report, indent=2, sort_keys=True))

    outputs_dir = Path("outputs")
    outputs_dir.mkdir(parents=True, exist_ok=True)
    out_path = outputs_dir / "progress_report.json"
    out_path.write_text(json.dumps(report, indent=2, sort_keys=True), encoding="utf-8")
    logger.info("Saved progress report to %s", out_path)


if __name__ == "__main__":
    main()
