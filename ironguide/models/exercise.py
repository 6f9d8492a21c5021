from __future__ import annotations

from pydantic import BaseModel, Field
from typing import Dict, List, Literal, Optional


MuscleGroup = Literal[
    "Chest",
    "Back",
    "Legs",
    "Shoulders",
    "Triceps",
    "Biceps",
    "Abs",
    "Warmup",
    "Cardio",
    "Other",
]

ExerciseType = Literal["weighted", "cardio"]

Breathing = Literal["Inhale", "Exhale", "Hold"]


class PacerPhase(BaseModel):
    action: str = Field(..., description="Display text, e.g. LOWER, PRESS")
    duration: float = Field(..., gt=0, description="Seconds")
    voice_cue: str = ""
    breathing: Breathing


class PacerConfig(BaseModel):
    phases: List[PacerPhase] = Field(default_factory=list)
    start_delay: int = Field(0, ge=0)

    @property
    def rep_seconds(self) -> float:
        return sum(p.duration for p in self.phases)


class Exercise(BaseModel):
    id: str
    name: str
    type: ExerciseType = "weighted"
    sets: int = Field(..., ge=1)
    reps: str = Field(..., description='Target range for display, e.g. "8-10" or "10 mins"')
    rest_seconds: int = Field(..., ge=0)
    cues: str = ""
    muscle_focus: str = ""
    target_group: MuscleGroup = "Other"
    feeling: str = ""
    is_warmup: bool = False
    pacer: PacerConfig = Field(default_factory=PacerConfig)
    met_value: float = Field(4.0, gt=0)

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "examples": [
                {
                    "id": "p_1",
                    "name": "Incline Dumbbell Press",
                    "type": "weighted",
                    "sets": 3,
                    "reps": "8-10",
                    "rest_seconds": 180,
                    "target_group": "Chest",
                    "met_value": 5.0,
                }
            ]
        },
    }

    @property
    def is_cardio(self) -> bool:
        return self.type == "cardio"


class WorkoutPlan(BaseModel):
    id: str
    name: str
    focus: str = ""
    exercises: List[Exercise]

    model_config = {"frozen": True}

    def get_exercise(self, exercise_id: str) -> Optional[Exercise]:
        return next((ex for ex in self.exercises if ex.id == exercise_id), None)


class Catalog(BaseModel):
    """Static configuration: plans plus the weekday schedule (0 = Sunday)."""

    workouts: List[WorkoutPlan]
    schedule: Dict[int, Optional[str]] = Field(default_factory=dict)


DAYS_OF_WEEK: List[str] = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]
