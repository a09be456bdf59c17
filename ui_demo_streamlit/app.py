"""Streamlit dashboard for progress-engine."""

from __future__ import annotations

import json
from datetime import datetime, time, timezone
from typing import Any

from progress_engine.adapters import json_adapter
from progress_engine.assembler import assemble_records
from progress_engine.config import EngineConfig
from progress_engine.schema import ProjectRecords
from progress_engine.serialize import to_payload

DEMO_DATASET = "examples/sample_project.json"
HEALTH_LABELS = {"on_track": "On track", "at_risk": "At risk", "delayed": "Delayed"}


def _parse_uploaded(uploaded_file) -> ProjectRecords:
    try:
        payload = json.loads(uploaded_file.getvalue().decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ValueError(f"{uploaded_file.name}: malformed JSON") from exc
    return json_adapter.parse_payload(payload)


def run_engine(records: ProjectRecords, now: datetime, config: EngineConfig) -> dict[str, Any]:
    """Run the aggregation and return a UI-friendly payload."""

    result = assemble_records(records, now=now, config=config)
    payload = to_payload(result)
    payload["breakdownRows"] = [
        {"type": source_type, **counts} for source_type, counts in payload["stats"]["byType"].items()
    ]
    return payload


def main() -> None:
    import streamlit as st

    st.set_page_config(page_title="Project Progress Dashboard", layout="wide")
    st.title("Project Progress Dashboard")

    with st.sidebar:
        st.header("Controls")
        uploaded = st.file_uploader("Upload project bundle", type=["json"])
        use_demo = st.checkbox("Load demo dataset", value=True)
        now_date = st.date_input("Reference date", value=datetime(2025, 3, 15).date())
        now_time = st.time_input("Reference time (UTC)", value=time(12, 0))
        horizon = st.slider("Upcoming horizon (days)", min_value=1, max_value=30, value=7)
        delayed_ratio = st.slider("Delayed overdue ratio", min_value=0.0, max_value=1.0, value=0.20, step=0.01)
        at_risk_ratio = st.slider("At-risk overdue ratio", min_value=0.0, max_value=1.0, value=0.10, step=0.01)
        if at_risk_ratio > delayed_ratio:
            st.warning("At-risk ratio was above the delayed ratio; it will be lowered to match.")
            at_risk_ratio = delayed_ratio
        run = st.button("Run engine", type="primary")

    if not run:
        st.info("Configure inputs in the sidebar and click **Run engine**.")
        return

    try:
        if use_demo:
            records = json_adapter.parse(DEMO_DATASET)
            data_source = f"demo dataset ({DEMO_DATASET})"
        elif uploaded is not None:
            records = _parse_uploaded(uploaded)
            data_source = f"uploaded file ({uploaded.name})"
        else:
            st.error("Please upload a JSON bundle or enable 'Load demo dataset'.")
            return

        config = EngineConfig.from_mapping(
            {
                "upcoming_horizon_days": int(horizon),
                "delayed_overdue_ratio": float(delayed_ratio),
                "at_risk_overdue_ratio": float(at_risk_ratio),
            }
        )
        now = datetime.combine(now_date, now_time).replace(tzinfo=timezone.utc)
        result = run_engine(records, now, config)

        st.success(f"Aggregated records from {data_source}.")

        st.subheader("A) Schedule Summary")
        stats = result["stats"]
        c1, c2, c3, c4, c5 = st.columns(5)
        c1.metric("Total items", stats["totalItems"])
        c2.metric("Completed", stats["completedItems"])
        c3.metric("Overdue", stats["overdueItems"])
        c4.metric("Progress", f"{stats['overallProgress']}%")
        c5.metric("Health", HEALTH_LABELS.get(stats["scheduleHealth"], stats["scheduleHealth"]))
        st.table(result["breakdownRows"])

        st.subheader("B) Site Activity")
        daily = result["dailyStats"]
        d1, d2, d3, d4 = st.columns(4)
        d1.metric("Recent photos", daily["recentPhotos"])
        d2.metric("Recent work sessions", daily["recentWorkSessions"])
        d3.metric("Pending inspections", daily["pendingQualityInspections"])
        d4.metric("Incidents (30 days)", daily["safetyIncidentsThisMonth"])

        st.subheader("C) Daily Timeline")
        if not result["dailyTimeline"]:
            st.write("No site activity recorded.")
        for entry in result["dailyTimeline"]:
            with st.expander(f"{entry['dateFormatted']} ({entry['activitiesCount']} activities)"):
                st.table(
                    [
                        {"type": a["type"], "title": a["title"], "author": a["author"], "time": a["date"]}
                        for a in entry["activities"]
                    ]
                )

    except ValueError as exc:
        st.error(f"Input error: {exc}")
    except Exception:
        st.error("Something went wrong while running the dashboard. Please verify the input format.")


if __name__ == "__main__":
    main()
