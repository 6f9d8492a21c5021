from __future__ import annotations

import streamlit as st

from ironguide.services.tracker import WorkoutTracker

st.set_page_config(page_title="Stats", page_icon="📊")

st.title("This week")

tracker: WorkoutTracker | None = st.session_state.get("tracker")
if tracker is None:
    tracker = WorkoutTracker.from_settings()
    st.session_state["tracker"] = tracker

stats = tracker.dashboard()

if stats.missed_muscles:
    st.warning("Attention needed: " + ", ".join(stats.missed_muscles))

st.subheader("Sets per muscle group")
cols = st.columns(4)
for i, (muscle, sets) in enumerate(stats.weekly_volume.items()):
    cols[i % 4].metric(muscle, sets)

c1, c2 = st.columns(2)
c1.metric("Calories (est.)", f"{stats.total_calories} kcal")
adherence = tracker.supplement_stats()
c2.metric("Creatine this week", f"{adherence.this_week}/7", f"{adherence.this_month} this month", delta_color="off")

st.subheader("Hall of fame")
if not stats.personal_records:
    st.info("No weighted sets logged yet.")
else:
    rows = sorted(stats.personal_records.values(), key=lambda pr: pr.weight, reverse=True)
    st.table([{"Exercise": pr.exercise_name, "Best (kg)": pr.weight, "Date": pr.date} for pr in rows])
