from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Dict, Optional

from ironguide.config import get_settings
from ironguide.models.analytics import DashboardStats, SupplementStats
from ironguide.models.exercise import Exercise, WorkoutPlan
from ironguide.models.history import ExerciseHistory
from ironguide.models.session import SessionData, Transition
from ironguide.models.user_stats import UserStats
from . import analytics, history, session as machine, timer, trackers
from .catalog import get_workout
from .repository import Repository
from .store import JsonFileStore

logger = logging.getLogger(__name__)


class WorkoutTracker:
    """Binds the session state machine, history log and daily trackers to a Repository.

    Every applied session transition is persisted in full before returning.
    """

    def __init__(
        self,
        repo: Repository,
        clock: Callable[[], datetime] | None = None,
        plans: Callable[[str], Optional[WorkoutPlan]] | None = None,
    ) -> None:
        self.settings = get_settings()
        self.repo = repo
        self._clock = clock or datetime.now
        # Static configuration provider: plan id -> plan
        self._plans = plans or get_workout
        self.session: Optional[SessionData] = repo.load_session()
        self._stats: UserStats = repo.load_stats(self.today())

    @classmethod
    def from_settings(cls) -> "WorkoutTracker":
        return cls(Repository(JsonFileStore(get_settings().DATA_DIR)))

    # ---- clock -------------------------------------------------------------

    def now(self) -> datetime:
        return self._clock()

    def today(self) -> date:
        return self.now().date()

    def now_ms(self) -> int:
        return timer.now_ms(self.now())

    # ---- session -----------------------------------------------------------

    @property
    def plan(self) -> Optional[WorkoutPlan]:
        return self._plans(self.session.workout_id) if self.session else None

    def _commit(self, t: Transition) -> Transition:
        if t.applied:
            self.session = t.session
            self.repo.save_session(self.session)
        return t

    def start_workout(self, plan: WorkoutPlan | str | None) -> Transition:
        if isinstance(plan, str):
            plan = self._plans(plan)
        return self._commit(machine.start_workout(self.session, plan, self.now_ms()))

    def select_exercise(self, exercise_id: str) -> Transition:
        return self._commit(machine.select_exercise(self.session, exercise_id))

    def return_to_list(self) -> Transition:
        return self._commit(machine.return_to_list(self.session))

    def log_set(
        self,
        exercise_id: str,
        weight: float,
        reps: float,
        is_drop_set: bool = False,
        is_monster_set: bool = False,
    ) -> Transition:
        t = machine.log_set(
            self.session,
            self.plan,
            exercise_id,
            weight,
            reps,
            now_ms=self.now_ms(),
            is_drop_set=is_drop_set,
            is_monster_set=is_monster_set,
            body_weight=self.stats.body_weight,
        )
        if t.applied and t.entry is not None:
            history.append_log(self.repo, exercise_id, t.entry.weight, t.entry.reps, t.entry.set_number, self.today())
        return self._commit(t)

    def cancel_timer(self) -> Transition:
        return self._commit(machine.cancel_timer(self.session))

    def finish_workout(self) -> Transition:
        return self._commit(machine.finish_workout(self.session))

    def complete_and_clear(self) -> Transition:
        return self._commit(machine.complete_and_clear(self.session))

    def add_custom_exercise(self, exercise: Exercise) -> Transition:
        t = self._commit(machine.add_custom_exercise(self.session, self.plan, exercise))
        if t.applied:
            # Keep the definition so history and analytics can resolve it later
            self.repo.save_custom_exercise(exercise)
        return t

    # ---- rest timer --------------------------------------------------------

    def remaining_seconds(self) -> int:
        if self.session is None or self.session.active_timer is None:
            return 0
        return timer.remaining_seconds(self.session.active_timer, self.now_ms())

    def tick(self) -> int:
        """Poll the rest timer; cancels it once it reaches zero. Returns seconds left."""
        if self.session is None or self.session.active_timer is None:
            return 0
        left = self.remaining_seconds()
        if left == 0:
            self.cancel_timer()
        return left

    # ---- daily trackers ----------------------------------------------------

    @property
    def stats(self) -> UserStats:
        rolled = trackers.roll_over(self._stats, self.today())
        if rolled is not self._stats:
            self._save_stats(rolled)
        return self._stats

    def _save_stats(self, stats: UserStats) -> UserStats:
        self._stats = stats
        self.repo.save_stats(stats)
        return stats

    def add_water(self, amount: int) -> UserStats:
        return self._save_stats(trackers.add_water(self.stats, amount))

    def toggle_supplement(self) -> UserStats:
        return self._save_stats(trackers.toggle_supplement(self.stats, self.today()))

    def set_body_weight(self, kg: float) -> UserStats:
        return self._save_stats(trackers.set_body_weight(self.stats, kg))

    def supplement_stats(self) -> SupplementStats:
        return trackers.supplement_stats(self.stats.supplement_history, self.today())

    def supplement_streak(self) -> int:
        return trackers.supplement_streak(self.stats.supplement_history, self.today())

    # ---- read side ---------------------------------------------------------

    def custom_exercises(self) -> Dict[str, Exercise]:
        defs = self.repo.load_custom_exercises()
        if self.session is not None:
            for ex in self.session.custom_exercises:
                defs.setdefault(ex.id, ex)
        return defs

    def exercise_history(self, exercise_id: str) -> Optional[ExerciseHistory]:
        return history.get_exercise_history(self.repo, exercise_id, self.today())

    def dashboard(self) -> DashboardStats:
        return analytics.dashboard_stats(
            self.repo.load_history(),
            self.stats,
            self.custom_exercises(),
            self.today(),
        )

    def reset_all(self) -> None:
        self.repo.clear_all()
        self.session = None
        self._stats = self.repo.load_stats(self.today())
        logger.info("Tracker reset")
