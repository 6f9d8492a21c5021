from .catalog import load_catalog, all_workouts, all_exercises, get_workout, plan_for_date, resolve_exercise
from .store import KeyValueStore, MemoryStore, JsonFileStore
from .repository import Repository
from .history import append_log, get_exercise_history
from .analytics import calculate_calories, dashboard_stats, week_start
from .export import history_to_csv, history_to_markdown
from .tracker import WorkoutTracker

__all__ = [
    "load_catalog",
    "all_workouts",
    "all_exercises",
    "get_workout",
    "plan_for_date",
    "resolve_exercise",
    "KeyValueStore",
    "MemoryStore",
    "JsonFileStore",
    "Repository",
    "append_log",
    "get_exercise_history",
    "calculate_calories",
    "dashboard_stats",
    "week_start",
    "history_to_csv",
    "history_to_markdown",
    "WorkoutTracker",
]
