from .exercise import (
    DAYS_OF_WEEK,
    Breathing,
    Catalog,
    Exercise,
    ExerciseType,
    MuscleGroup,
    PacerConfig,
    PacerPhase,
    WorkoutPlan,
)
from .session import ActiveTimer, RestSkipReason, SessionData, SetLog, Status, Transition
from .history import ExerciseHistory, History, HistoryLog, LastSession, TopSet
from .user_stats import UserStats
from .analytics import BestLift, DashboardStats, PersonalRecord, SupplementStats

__all__ = [
    "DAYS_OF_WEEK",
    "Breathing",
    "Catalog",
    "Exercise",
    "ExerciseType",
    "MuscleGroup",
    "PacerConfig",
    "PacerPhase",
    "WorkoutPlan",
    "ActiveTimer",
    "RestSkipReason",
    "SessionData",
    "SetLog",
    "Status",
    "Transition",
    "ExerciseHistory",
    "History",
    "HistoryLog",
    "LastSession",
    "TopSet",
    "UserStats",
    "BestLift",
    "DashboardStats",
    "PersonalRecord",
    "SupplementStats",
]
