"""Schedule completion metrics over normalized timeline items."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

import numpy as np

from progress_engine.config import DEFAULT_CONFIG, EngineConfig
from progress_engine.dates import as_utc, is_overdue, is_upcoming
from progress_engine.health import classify_health
from progress_engine.schema import SCHEDULE_TYPES, ScheduleStats, StatusBreakdown, TimelineItem

# Raw status -> canonical bucket. Statuses not listed count toward totals only.
STATUS_BUCKETS = {
    "completed": "completed",
    "in_progress": "in_progress",
    "active": "in_progress",
    "not_started": "not_started",
    "pending": "not_started",
}
DELAYED_STATUS = "delayed"


def count_statuses(items: list[TimelineItem], now: datetime, config: EngineConfig = DEFAULT_CONFIG) -> StatusBreakdown:
    """Count bucketed statuses plus overdue/upcoming items."""

    breakdown = StatusBreakdown(total=len(items))
    for item in items:
        bucket = STATUS_BUCKETS.get(item.status)
        if bucket == "completed":
            breakdown.completed += 1
        elif bucket == "in_progress":
            breakdown.in_progress += 1
        elif bucket == "not_started":
            breakdown.not_started += 1

        if item.status == DELAYED_STATUS:
            breakdown.delayed += 1
        if is_overdue(item, now):
            breakdown.overdue += 1
        if is_upcoming(item, now, config.upcoming_horizon_days):
            breakdown.upcoming += 1
    return breakdown


def average_progress(items: list[TimelineItem]) -> int:
    """Rounded mean progress over items that report it; 0 when none do."""

    values = [item.progress_percentage for item in items if item.progress_percentage is not None]
    if not values:
        return 0
    # Half rounds up.
    return int(np.floor(np.mean(values) + 0.5))


def compute_stats(
    items: list[TimelineItem],
    now: datetime,
    config: Optional[EngineConfig] = None,
) -> ScheduleStats:
    """Compute combined and per-type schedule stats, including health."""

    config = config or DEFAULT_CONFIG
    now = as_utc(now)

    combined = count_statuses(items, now, config)
    stats = ScheduleStats(
        total_items=combined.total,
        completed_items=combined.completed,
        in_progress_items=combined.in_progress,
        not_started_items=combined.not_started,
        overdue_items=combined.overdue,
        upcoming_items=combined.upcoming,
        delayed_count=combined.delayed,
        overall_progress=average_progress(items),
        by_type={
            source_type: count_statuses([i for i in items if i.source_type == source_type], now, config)
            for source_type in SCHEDULE_TYPES
        },
    )
    stats.schedule_health = classify_health(stats, stats.delayed_count, config)
    return stats
