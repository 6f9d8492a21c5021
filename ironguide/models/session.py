from __future__ import annotations

from typing import Dict, List, Literal, Optional
from pydantic import BaseModel, Field, model_validator

from .exercise import Exercise


class SetLog(BaseModel):
    """One completed set. For cardio, weight is distance and reps is minutes."""

    weight: float
    reps: float
    completed: bool = True
    timestamp: int = Field(..., description="Epoch milliseconds")
    set_number: int = Field(..., ge=1)
    is_drop_set: bool = False
    is_monster_set: bool = False
    calories: Optional[float] = None

    model_config = {"frozen": True}


class ActiveTimer(BaseModel):
    start_time: int = Field(..., description="Epoch milliseconds")
    duration: int = Field(..., gt=0, description="Seconds")
    end_time: int = Field(..., description="Epoch milliseconds")
    exercise_id: str

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_end_time(self) -> "ActiveTimer":
        if self.end_time != self.start_time + self.duration * 1000:
            raise ValueError("end_time must equal start_time + duration * 1000")
        return self

    @classmethod
    def starting_at(cls, now_ms: int, duration: int, exercise_id: str) -> "ActiveTimer":
        return cls(
            start_time=now_ms,
            duration=duration,
            end_time=now_ms + duration * 1000,
            exercise_id=exercise_id,
        )


class SessionData(BaseModel):
    workout_id: str
    start_time: int
    completed_exercises: Dict[str, List[SetLog]] = Field(default_factory=dict)
    custom_exercises: List[Exercise] = Field(default_factory=list)
    active_exercise_id: Optional[str] = None
    active_timer: Optional[ActiveTimer] = None
    is_finished: bool = False

    def sets_for(self, exercise_id: str) -> List[SetLog]:
        return self.completed_exercises.get(exercise_id, [])

    def get_custom_exercise(self, exercise_id: str) -> Optional[Exercise]:
        return next((ex for ex in self.custom_exercises if ex.id == exercise_id), None)


Status = Literal["applied", "ignored"]

RestSkipReason = Literal["final_set", "drop_set", "monster_set", "no_rest"]


class Transition(BaseModel):
    """Result of one session operation.

    ``session`` is the session after the operation (``None`` means no active
    workout). Ignored operations carry the unchanged session and a reason.
    """

    status: Status
    session: Optional[SessionData] = None
    reason: str = ""
    entry: Optional[SetLog] = None
    rest_skip_reason: Optional[RestSkipReason] = None

    @property
    def applied(self) -> bool:
        return self.status == "applied"
