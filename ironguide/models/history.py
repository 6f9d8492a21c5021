from __future__ import annotations

from typing import Dict, List, Optional
from pydantic import BaseModel, Field


class HistoryLog(BaseModel):
    date: str = Field(..., description="ISO date, YYYY-MM-DD")
    weight: float
    reps: float
    set_number: int

    model_config = {"frozen": True}


class TopSet(BaseModel):
    weight: float
    reps: float


class LastSession(BaseModel):
    date: str
    top_set: TopSet
    set_count: int


class ExerciseHistory(BaseModel):
    logs: List[HistoryLog]
    last_session: Optional[LastSession] = None


# exercise id -> append-only log
History = Dict[str, List[HistoryLog]]
