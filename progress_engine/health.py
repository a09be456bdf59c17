"""Schedule health classification from overdue ratios."""

from __future__ import annotations

from typing import Optional

from progress_engine.config import DEFAULT_CONFIG, EngineConfig
from progress_engine.schema import HEALTH_AT_RISK, HEALTH_DELAYED, HEALTH_ON_TRACK, ScheduleStats


def overdue_ratio(stats: ScheduleStats) -> float:
    if stats.total_items <= 0:
        return 0.0
    return stats.overdue_items / stats.total_items


def classify_health(
    stats: ScheduleStats,
    explicit_delayed_count: int = 0,
    config: Optional[EngineConfig] = None,
) -> str:
    """Return ``delayed``, ``at_risk`` or ``on_track``; first matching rule wins."""

    config = config or DEFAULT_CONFIG
    ratio = overdue_ratio(stats)

    if explicit_delayed_count > 0 or ratio > config.delayed_overdue_ratio:
        return HEALTH_DELAYED
    if ratio > config.at_risk_overdue_ratio:
        return HEALTH_AT_RISK
    return HEALTH_ON_TRACK
