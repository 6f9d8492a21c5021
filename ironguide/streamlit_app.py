from __future__ import annotations

# Ensure the repository root is on sys.path so that absolute imports like `ironguide.*` work
# when Streamlit runs this file from within the ironguide/ directory on cloud runtimes.
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

import re

import streamlit as st

from ironguide.config import configure_logging, get_settings
from ironguide.models import DAYS_OF_WEEK, Exercise, WorkoutPlan
from ironguide.services.catalog import all_workouts, get_workout, plan_for_date, sunday_index
from ironguide.services.session import is_exercise_complete, session_exercises
from ironguide.services.timer import format_clock, progress
from ironguide.services.tracker import WorkoutTracker

st.set_page_config(page_title="Iron Guide", page_icon="🏋️", layout="centered")
configure_logging()
settings = get_settings()


def get_tracker() -> WorkoutTracker:
    if "tracker" not in st.session_state:
        st.session_state["tracker"] = WorkoutTracker.from_settings()
    return st.session_state["tracker"]


def slugify(s: str) -> str:
    return re.sub(r"[^a-z0-9]+", "_", s.lower()).strip("_") or "exercise"


tracker = get_tracker()

if "plan_override" not in st.session_state:
    st.session_state["plan_override"] = None

with st.sidebar:
    st.header("Iron Guide")
    bw = st.number_input(
        "Body weight (kg)",
        min_value=0.0,
        max_value=300.0,
        value=float(tracker.stats.body_weight),
        step=0.5,
        help="Used for calorie estimates; 0 falls back to a default.",
    )
    if bw != tracker.stats.body_weight:
        tracker.set_body_weight(bw)
    st.divider()
    with st.expander("Danger zone", expanded=False):
        confirm = st.checkbox("I understand this deletes all history")
        if st.button("Reset all data", disabled=not confirm, use_container_width=True):
            tracker.reset_all()
            st.session_state["plan_override"] = None
            st.toast("All data cleared.")
            st.rerun()


@st.fragment(run_every=settings.TIMER_POLL_MS / 1000)
def rest_timer() -> None:
    session = tracker.session
    if session is None or session.active_timer is None:
        return
    left = tracker.tick()
    if left == 0:
        st.toast("Rest over. Next set!")
        st.rerun()
    with st.container(border=True):
        c1, c2 = st.columns([4, 1])
        c1.markdown(f"**Rest** · {format_clock(left)}")
        c1.progress(progress(session.active_timer, tracker.now_ms()))
        if c2.button("Skip", key="timer-skip", use_container_width=True):
            tracker.cancel_timer()
            st.rerun()


def render_exercise(plan: WorkoutPlan | None, exercise: Exercise) -> None:
    session = tracker.session
    sets = session.sets_for(exercise.id)
    if st.button("← Exercises", key="back-to-list"):
        tracker.return_to_list()
        st.rerun()

    st.subheader(exercise.name)
    st.caption(f"{exercise.muscle_focus} · {exercise.sets} sets × {exercise.reps} · rest {exercise.rest_seconds}s")

    with st.expander("Form cues & tempo", expanded=False):
        if exercise.cues:
            st.write(exercise.cues)
        if exercise.feeling:
            st.caption(f"How it should feel: {exercise.feeling}")
        if exercise.pacer.phases:
            st.write(" · ".join(f"{p.duration:g}s {p.action} ({p.breathing})" for p in exercise.pacer.phases))

    hist = tracker.exercise_history(exercise.id)
    last = hist.last_session if hist else None
    if last:
        unit = ("km", "min") if exercise.is_cardio else ("kg", "reps")
        st.info(
            f"Last time ({last.date}): {last.set_count} sets, top set "
            f"{last.top_set.weight:g} {unit[0]} × {last.top_set.reps:g} {unit[1]}"
        )

    for s in sets:
        tags = [t for t, on in (("drop", s.is_drop_set), ("monster", s.is_monster_set)) if on]
        label = f"Set {s.set_number}: {s.weight:g} × {s.reps:g}"
        if s.calories is not None:
            label += f" · {s.calories:g} kcal"
        if tags:
            label += f" · {', '.join(tags)}"
        st.write(label)

    if len(sets) >= exercise.sets:
        st.success("All sets done.")
        return

    default_weight = float(last.top_set.weight) if (last and not sets) else (float(sets[-1].weight) if sets else 0.0)
    with st.form(key=f"log-{exercise.id}-{len(sets)}"):
        c1, c2 = st.columns(2)
        m1 = c1.number_input("Distance (km)" if exercise.is_cardio else "Weight (kg)", min_value=0.0, value=default_weight, step=0.5)
        m2 = c2.number_input("Time (min)" if exercise.is_cardio else "Reps", min_value=0.0, value=0.0, step=1.0)
        c3, c4 = st.columns(2)
        drop = c3.checkbox("Drop set", help="Skip the rest timer and go again right away.")
        monster = c4.checkbox("Monster set", help="Skip rest and move straight to another exercise.")
        submitted = st.form_submit_button(f"Log set {len(sets) + 1}/{exercise.sets}", use_container_width=True)
    if submitted:
        t = tracker.log_set(exercise.id, m1, m2, is_drop_set=drop, is_monster_set=monster)
        if not t.applied:
            st.warning(t.reason)
        else:
            if t.rest_skip_reason == "monster_set":
                tracker.return_to_list()
                st.toast("Monster set: pick the next exercise.")
            st.rerun()


def render_exercise_list(plan: WorkoutPlan | None) -> None:
    session = tracker.session
    st.subheader(plan.name if plan else "Workout")
    if plan and plan.focus:
        st.caption(plan.focus)
    for ex in session_exercises(session, plan):
        done = len(session.sets_for(ex.id))
        mark = "✅" if is_exercise_complete(session, ex) else ("🔸" if done else "▫️")
        if st.button(f"{mark} {ex.name} · {done}/{ex.sets}", key=f"open-{ex.id}", use_container_width=True):
            tracker.select_exercise(ex.id)
            st.rerun()

    with st.expander("Add exercise", expanded=False):
        with st.form("custom-exercise"):
            name = st.text_input("Name")
            kind = st.selectbox("Type", ["weighted", "cardio"])
            group = st.selectbox("Muscle group", ["Chest", "Back", "Legs", "Shoulders", "Triceps", "Biceps", "Abs", "Cardio", "Other"])
            c1, c2 = st.columns(2)
            n_sets = c1.number_input("Sets", min_value=1, max_value=10, value=3)
            rest = c2.number_input("Rest (s)", min_value=0, max_value=600, value=90, step=15)
            added = st.form_submit_button("Add")
        if added and name.strip():
            ex = Exercise(
                id=f"custom_{slugify(name)}",
                name=name.strip(),
                type=kind,
                sets=int(n_sets),
                reps="8-12" if kind == "weighted" else "10 mins",
                rest_seconds=int(rest),
                muscle_focus=group,
                target_group=group,
                met_value=6.0 if kind == "cardio" else 4.0,
            )
            t = tracker.add_custom_exercise(ex)
            if t.applied:
                st.rerun()
            st.warning(t.reason)

    st.divider()
    c1, c2 = st.columns(2)
    if c1.button("Finish workout", type="primary", use_container_width=True):
        tracker.finish_workout()
        st.rerun()
    if c2.button("Abandon", use_container_width=True):
        tracker.complete_and_clear()
        st.rerun()


def render_summary(plan: WorkoutPlan | None) -> None:
    session = tracker.session
    total_sets = sum(len(v) for v in session.completed_exercises.values())
    kcal = sum(s.calories or 0 for v in session.completed_exercises.values() for s in v)
    minutes = max(0, (tracker.now_ms() - session.start_time) // 60000)
    st.header("Workout complete 💪")
    c1, c2, c3 = st.columns(3)
    c1.metric("Sets", total_sets)
    c2.metric("Minutes", minutes)
    c3.metric("kcal (est.)", f"{kcal:.0f}")
    st.markdown("**Post-workout checklist**\n- Protein within 2 hours\n- Drink 500 ml of water\n- Log body weight weekly")
    if st.button("Back to dashboard", type="primary", use_container_width=True):
        tracker.complete_and_clear()
        st.rerun()


def render_dashboard() -> None:
    today = tracker.today()
    best = tracker.dashboard().best_lift
    if best:
        st.metric("Best lift", f"{best.weight:g} kg", best.exercise_name)

    plans = all_workouts()
    options = ["(scheduled)"] + [w.id for w in plans]
    names = {w.id: w.name for w in plans}
    choice = st.selectbox(
        "Workout",
        options,
        index=options.index(st.session_state["plan_override"] or "(scheduled)"),
        format_func=lambda o: f"{DAYS_OF_WEEK[sunday_index(today)]} schedule" if o == "(scheduled)" else names[o],
    )
    st.session_state["plan_override"] = None if choice == "(scheduled)" else choice
    plan = get_workout(choice) if st.session_state["plan_override"] else plan_for_date(today)

    if plan is None:
        st.info("Rest day. Pick a workout above to train anyway.")
    else:
        with st.container(border=True):
            st.subheader(plan.name)
            st.caption(plan.focus)
            if st.button("Start workout →", type="primary", use_container_width=True):
                t = tracker.start_workout(plan)
                if t.applied:
                    st.rerun()
                st.warning(t.reason)

    c1, c2 = st.columns(2)
    with c1:
        stats = tracker.stats
        st.markdown(f"**Water** · {stats.water_intake} ml")
        st.progress(min(stats.water_intake / settings.WATER_GOAL_ML, 1.0))
        b1, b2, b3 = st.columns(3)
        for col, (label, ml) in zip((b1, b2, b3), (("Sip", 30), ("Gulp", 100), ("Glass", 250))):
            if col.button(label, key=f"water-{ml}", use_container_width=True):
                tracker.add_water(ml)
                st.rerun()
    with c2:
        stats = tracker.stats
        adherence = tracker.supplement_stats()
        st.markdown(f"**Creatine** · {'taken ✅' if stats.supplement_taken else 'not yet'}")
        st.caption(f"This week {adherence.this_week}/7 · this month {adherence.this_month} · streak {tracker.supplement_streak()}")
        if st.button("Untake" if stats.supplement_taken else "Mark taken", key="supplement", use_container_width=True):
            tracker.toggle_supplement()
            st.rerun()


session = tracker.session
if session is None:
    render_dashboard()
else:
    active_plan = tracker.plan
    if session.is_finished:
        render_summary(active_plan)
    else:
        rest_timer()
        current = None
        if session.active_exercise_id:
            current = next((e for e in session_exercises(session, active_plan) if e.id == session.active_exercise_id), None)
        if current is not None:
            render_exercise(active_plan, current)
        else:
            render_exercise_list(active_plan)
