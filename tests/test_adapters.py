import json

import pytest

from progress_engine.adapters.csv_adapter import parse as parse_csv
from progress_engine.adapters.json_adapter import parse as parse_json


def test_json_parse_success(tmp_path):
    path = tmp_path / "project.json"
    payload = {
        "tasks": [{"id": "t1", "status": "completed", "progress_percentage": 100}],
        "updates": [{"id": "u1", "title": "Slab poured", "created_at": "2025-01-01T10:00:00Z"}],
    }
    path.write_text(json.dumps(payload), encoding="utf-8")
    records = parse_json(str(path))
    assert len(records.tasks) == 1
    assert len(records.updates) == 1
    assert records.phases == []


def test_json_parse_malformed(tmp_path):
    path = tmp_path / "project.json"
    path.write_text("[1, 2", encoding="utf-8")
    with pytest.raises(ValueError):
        parse_json(str(path))


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {"tasks": {"id": "t1"}},
        {"tasks": ["t1"]},
        {"tasks": [{"status": "completed"}]},
        {"invoices": []},
    ],
)
def test_json_parse_invalid_structure(tmp_path, payload):
    path = tmp_path / "project.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    with pytest.raises(ValueError):
        parse_json(str(path))


def test_csv_parse_success(tmp_path):
    (tmp_path / "tasks.csv").write_text(
        "id,status,planned_end_date,progress_percentage\n"
        "t1,in_progress,2025-01-10,40\n"
        "t2,pending,,\n",
        encoding="utf-8",
    )
    (tmp_path / "sessions.csv").write_text(
        "id,created_at,crew_member.crew_lead_name,task.task_name\n"
        "w1,2025-01-09T08:00:00Z,Johan,Wall framing\n",
        encoding="utf-8",
    )
    records = parse_csv(str(tmp_path))
    assert records.tasks[0]["progress_percentage"] == 40.0
    assert "planned_end_date" not in records.tasks[1]
    assert records.sessions[0]["crew_member"] == {"crew_lead_name": "Johan"}
    assert records.sessions[0]["task"]["task_name"] == "Wall framing"
    assert records.photos == []


def test_csv_parse_invalid_row(tmp_path):
    (tmp_path / "tasks.csv").write_text("id,progress_percentage\nt1,lots\n", encoding="utf-8")
    with pytest.raises(ValueError):
        parse_csv(str(tmp_path))


def test_csv_parse_missing_id(tmp_path):
    (tmp_path / "phases.csv").write_text("id,status\n,completed\n", encoding="utf-8")
    with pytest.raises(ValueError):
        parse_csv(str(tmp_path))


def test_csv_requires_directory(tmp_path):
    with pytest.raises(ValueError):
        parse_csv(str(tmp_path / "missing"))
