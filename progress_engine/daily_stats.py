"""Headline counts for recent site activity."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from progress_engine.config import DEFAULT_CONFIG, EngineConfig
from progress_engine.dates import days_between, parse_timestamp
from progress_engine.schema import DailyStats


def _within(value, now: datetime, window_days: int) -> bool:
    elapsed = days_between(parse_timestamp(value), now)
    return elapsed is not None and elapsed <= window_days


def compute_daily_stats(
    updates: list[dict],
    photos: list[dict],
    sessions: list[dict],
    inspections: list[dict],
    incidents: list[dict],
    now: datetime,
    config: Optional[EngineConfig] = None,
    total_activities: Optional[int] = None,
) -> DailyStats:
    """Count recent photos, sessions and incidents plus pending inspections.

    ``total_activities`` is the number of records that made it into the feed;
    when omitted every record is counted.
    """

    config = config or DEFAULT_CONFIG
    if total_activities is None:
        total_activities = len(updates) + len(photos) + len(sessions) + len(inspections) + len(incidents)

    return DailyStats(
        total_daily_updates=total_activities,
        recent_photos=sum(1 for p in photos if _within(p.get("date_taken"), now, config.recent_window_days)),
        recent_work_sessions=sum(
            1
            for s in sessions
            if _within(s.get("session_date") or s.get("created_at"), now, config.recent_window_days)
        ),
        pending_quality_inspections=sum(1 for q in inspections if q.get("inspection_status") == "pending"),
        safety_incidents_this_month=sum(
            1 for s in incidents if _within(s.get("incident_date"), now, config.incident_window_days)
        ),
    )
