"""Portfolio overview across project schedules."""

from __future__ import annotations

from typing import Iterable

import numpy as np

from progress_engine.schema import HEALTH_DELAYED, HEALTH_ON_TRACK, PortfolioStats


def _project(schedule: dict) -> dict:
    project = schedule.get("projects") or schedule.get("project")
    return project if isinstance(project, dict) else {}


def _completion(schedule: dict) -> float:
    value = schedule.get("completion_percentage")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    return float(value)


def summarize_portfolio(
    schedules: list[dict],
    tasks: Iterable[dict] = (),
    phases: Iterable[dict] = (),
) -> PortfolioStats:
    """Summarize active project schedules; schedules without a completion count as 0%."""

    tasks = list(tasks)
    phases = list(phases)

    overall = 0
    if schedules:
        overall = int(np.floor(np.mean([_completion(s) for s in schedules]) + 0.5))

    return PortfolioStats(
        total_projects=len(schedules),
        active_projects=sum(1 for s in schedules if _project(s).get("status") == "in_progress"),
        completed_projects=sum(1 for s in schedules if _project(s).get("status") == "completed"),
        delayed_projects=sum(1 for s in schedules if s.get("schedule_health") == HEALTH_DELAYED),
        projects_on_schedule=sum(1 for s in schedules if s.get("schedule_health") == HEALTH_ON_TRACK),
        overall_completion=overall,
        total_tasks=len(tasks),
        completed_tasks=sum(1 for t in tasks if t.get("status") == "completed"),
        total_phases=len(phases),
        completed_phases=sum(1 for p in phases if p.get("status") == "completed"),
    )
