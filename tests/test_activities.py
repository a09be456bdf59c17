from datetime import date, datetime, timedelta, timezone

from progress_engine.activities import (
    collect_activities,
    compile_daily_activities,
    format_day,
    from_incident,
    from_inspection,
    from_photo,
    from_update,
    from_work_session,
)
from progress_engine.config import EngineConfig

BASE = datetime(2025, 3, 15, 9, 0, tzinfo=timezone.utc)


def sample_lists():
    updates = [{"id": "u1", "title": "Slab poured", "created_at": "2025-03-15T10:00:00Z"}]
    photos = [{"id": "p1", "phase_category": "framing", "date_taken": "2025-03-14T08:00:00Z"}]
    sessions = [{"id": "w1", "created_at": "2025-03-15T16:00:00Z"}]
    inspections = [{"id": "q1", "inspection_type": "Structural", "inspection_status": "passed", "inspection_date": "2025-03-13T12:00:00Z"}]
    incidents = [{"id": "s1", "incident_type": "Near miss", "description": "Ladder", "incident_date": "2025-03-15T10:00:00Z"}]
    return updates, photos, sessions, inspections, incidents


def test_update_mapping_and_fallback_author():
    activity = from_update(
        {"id": "u1", "title": "Slab poured", "created_at": "2025-03-15T10:00:00Z", "photo_urls": ["a", "b"]}
    )
    assert activity.type == "project_update"
    assert activity.author == "System"
    assert activity.metadata["photos"] == 2
    assert activity.metadata["milestone"] is None


def test_photo_defaults_from_phase_category():
    activity = from_photo({"id": "p1", "phase_category": "framing", "date_taken": "2025-03-14"})
    assert activity.title == "framing Photo"
    assert activity.description == "Photo taken for framing phase"
    assert activity.author == "Site Team"


def test_work_session_author_chain():
    record = {
        "id": "w1",
        "created_at": "2025-03-15T16:00:00Z",
        "crew_member": {"crew_name": "Crew A", "crew_lead_name": "Johan"},
        "created_by_user": {"full_name": "Admin"},
        "task": {"task_name": "Wall framing"},
    }
    assert from_work_session(record).author == "Johan"
    assert from_work_session(record).title == "Work Session: Wall framing"

    record["crew_member"] = None
    assert from_work_session(record).author == "Admin"

    record["created_by_user"] = {}
    session = from_work_session(record)
    assert session.author == "Crew"
    assert session.metadata["crew"] is None


def test_work_session_defaults():
    session = from_work_session({"id": "w2", "session_date": "2025-03-10"})
    assert session.title == "Work Session: General Work"
    assert session.description == "Work session completed"
    assert session.date == datetime(2025, 3, 10, tzinfo=timezone.utc)


def test_inspection_and_incident_templates():
    inspection = from_inspection({"id": "q1", "inspection_type": "Structural", "inspection_status": "passed"})
    assert inspection.title == "Quality Inspection: Structural"
    assert inspection.description == "Inspection completed with status: passed"
    assert inspection.author == "Quality Inspector"

    incident = from_incident({"id": "s1", "incident_type": "Near miss", "reported_by_user": {"full_name": "Lerato"}})
    assert incident.title == "Safety Report: Near miss"
    assert incident.author == "Lerato"


def test_activities_sorted_newest_first():
    activities = collect_activities(*sample_lists())
    dates = [a.date for a in activities]
    assert dates == sorted(dates, reverse=True)
    assert activities[0].id == "w1"


def test_records_without_timestamp_are_dropped():
    activities = collect_activities(updates=[{"id": "u1", "title": "No date"}])
    assert activities == []


def test_grouping_by_day():
    timeline = compile_daily_activities(*sample_lists())
    assert [entry.date for entry in timeline] == ["2025-03-15", "2025-03-14", "2025-03-13"]
    assert timeline[0].activities_count == 3
    assert timeline[0].date_formatted == "Saturday, 15 March 2025"
    assert [a.id for a in timeline[0].activities] == ["w1", "u1", "s1"]


def test_list_order_does_not_change_output():
    updates, photos, sessions, inspections, incidents = sample_lists()
    updates = updates + [{"id": "u2", "title": "Second", "created_at": "2025-03-15T10:00:00Z"}]
    first = compile_daily_activities(updates, photos, sessions, inspections, incidents)
    second = compile_daily_activities(list(reversed(updates)), photos, sessions, inspections, incidents)
    assert first == second


def test_per_day_cap():
    updates = [
        {"id": f"u{i:02d}", "title": "Update", "created_at": (BASE + timedelta(minutes=i)).isoformat()} for i in range(15)
    ]
    timeline = compile_daily_activities(updates=updates)
    assert len(timeline) == 1
    assert timeline[0].activities_count == 15
    assert len(timeline[0].activities) == 10
    assert timeline[0].activities[0].id == "u14"


def test_day_cap_keeps_most_recent_days():
    updates = [
        {"id": f"u{i}", "title": "Update", "created_at": (BASE - timedelta(days=i)).isoformat()} for i in range(40)
    ]
    timeline = compile_daily_activities(updates=updates)
    assert len(timeline) == 30
    assert timeline[0].date == "2025-03-15"
    assert timeline[-1].date == (BASE - timedelta(days=29)).date().isoformat()


def test_caps_are_configurable():
    updates = [
        {"id": f"u{i}", "title": "Update", "created_at": (BASE - timedelta(days=i)).isoformat()} for i in range(5)
    ]
    config = EngineConfig(max_timeline_days=2)
    assert len(compile_daily_activities(updates=updates, config=config)) == 2


def test_empty_inputs():
    assert compile_daily_activities() == []


def test_format_day():
    assert format_day(date(2025, 1, 10)) == "Friday, 10 January 2025"


def test_fractional_timestamp_is_kept_in_feed():
    timeline = compile_daily_activities(
        updates=[{"id": "u1", "title": "Update", "created_at": "2025-03-15T10:00:00.12345+00:00"}]
    )
    assert len(timeline) == 1
    assert timeline[0].activities[0].id == "u1"


def test_list_relation_resolves_first_element():
    update = from_update(
        {"id": "u1", "title": "Update", "created_at": "2025-03-15T10:00:00Z", "created_by_user": [{"full_name": "Thandi"}]}
    )
    assert update.author == "Thandi"

    incident = from_incident({"id": "s1", "incident_date": "2025-03-15T10:00:00Z", "reported_by_user": []})
    assert incident.author == "Safety Officer"
