from __future__ import annotations

import streamlit as st

from ironguide.services.export import history_to_csv, history_to_markdown
from ironguide.services.tracker import WorkoutTracker

st.set_page_config(page_title="Export History", page_icon="📤")

st.title("Export")

tracker: WorkoutTracker | None = st.session_state.get("tracker")
if tracker is None:
    tracker = WorkoutTracker.from_settings()
    st.session_state["tracker"] = tracker

history = tracker.repo.load_history()
if not history:
    st.info("No sets logged yet. Finish a workout on the main page first.")
else:
    custom = tracker.custom_exercises()
    csv_bytes = history_to_csv(history, custom)
    md_text = history_to_markdown(history, custom)
    st.download_button("Download CSV", data=csv_bytes, file_name="training_history.csv", mime="text/csv")
    st.download_button("Download Markdown", data=md_text, file_name="training_history.md", mime="text/markdown")
