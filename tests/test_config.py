import json

import pytest

from progress_engine.config import DEFAULT_CONFIG, EngineConfig, load_config


def test_defaults():
    assert DEFAULT_CONFIG.upcoming_horizon_days == 7
    assert DEFAULT_CONFIG.delayed_overdue_ratio == 0.20
    assert DEFAULT_CONFIG.at_risk_overdue_ratio == 0.10
    assert DEFAULT_CONFIG.max_activities_per_day == 10
    assert DEFAULT_CONFIG.max_timeline_days == 30


def test_from_mapping_overrides():
    config = EngineConfig.from_mapping({"upcoming_horizon_days": 14, "delayed_overdue_ratio": 1})
    assert config.upcoming_horizon_days == 14
    assert config.delayed_overdue_ratio == 1.0
    assert config.max_timeline_days == 30


@pytest.mark.parametrize(
    "mapping",
    [
        {"unknown": 1},
        {"max_timeline_days": 0},
        {"max_timeline_days": 2.5},
        {"delayed_overdue_ratio": 1.5},
        {"upcoming_horizon_days": True},
        {"delayed_overdue_ratio": 0.05},
    ],
)
def test_from_mapping_rejects_bad_values(mapping):
    with pytest.raises(ValueError):
        EngineConfig.from_mapping(mapping)


def test_load_config(tmp_path):
    path = tmp_path / "engine.json"
    path.write_text(json.dumps({"max_activities_per_day": 5}), encoding="utf-8")
    assert load_config(str(path)).max_activities_per_day == 5


def test_load_config_malformed(tmp_path):
    path = tmp_path / "engine.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(str(path))
