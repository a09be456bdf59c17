"""Engine thresholds and their loading from plain mappings or JSON files."""

from __future__ import annotations

import json
from dataclasses import dataclass, fields


@dataclass(frozen=True)
class EngineConfig:
    """Named thresholds used across the aggregation engine."""

    upcoming_horizon_days: int = 7
    delayed_overdue_ratio: float = 0.20
    at_risk_overdue_ratio: float = 0.10
    max_activities_per_day: int = 10
    max_timeline_days: int = 30
    recent_window_days: int = 7
    incident_window_days: int = 30

    @classmethod
    def from_mapping(cls, mapping: dict) -> "EngineConfig":
        """Build a validated config, raising ``ValueError`` on bad keys or values."""

        if not isinstance(mapping, dict):
            raise ValueError("Config payload must be an object")

        known = {f.name: f for f in fields(cls)}
        unknown = sorted(set(mapping) - set(known))
        if unknown:
            raise ValueError(f"Unknown config keys {unknown}")

        values = {}
        for name, value in mapping.items():
            if isinstance(value, bool):
                raise ValueError(f"Config '{name}' must be a number")
            if known[name].type == "int":
                if not isinstance(value, int) or value <= 0:
                    raise ValueError(f"Config '{name}' must be a positive integer")
            else:
                if not isinstance(value, (int, float)) or not 0.0 <= value <= 1.0:
                    raise ValueError(f"Config '{name}' must be a ratio between 0 and 1")
                value = float(value)
            values[name] = value

        config = cls(**values)
        if config.at_risk_overdue_ratio > config.delayed_overdue_ratio:
            raise ValueError("at_risk_overdue_ratio cannot exceed delayed_overdue_ratio")
        return config


DEFAULT_CONFIG = EngineConfig()


def load_config(file_path: str) -> EngineConfig:
    """Load an engine config from a JSON object file."""

    with open(file_path, encoding="utf-8") as handle:
        try:
            payload = json.load(handle)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Config file {file_path} is not valid JSON") from exc

    return EngineConfig.from_mapping(payload)
