"""Demo script for progress-engine."""

import sys
from datetime import datetime, timezone
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from progress_engine.adapters.json_adapter import parse
from progress_engine.assembler import assemble_records

DEMO_NOW = datetime(2025, 3, 15, 12, 0, tzinfo=timezone.utc)


def main() -> None:
    records = parse(str(Path(__file__).with_name("sample_project.json")))
    result = assemble_records(records, now=DEMO_NOW)
    stats = result.stats
    print(f"Items: {stats.total_items} (completed {stats.completed_items}, overdue {stats.overdue_items})")
    print(f"Progress: {stats.overall_progress}%  Health: {stats.schedule_health}")
    for entry in result.daily_timeline:
        print(f"{entry.date_formatted}: {entry.activities_count} activities")
        for activity in entry.activities:
            print(f"  - [{activity.type}] {activity.title} ({activity.author})")


if __name__ == "__main__":
    main()
