from __future__ import annotations

from typing import Dict, List, Optional
from pydantic import BaseModel, Field


class PersonalRecord(BaseModel):
    weight: float
    exercise_name: str
    date: str


class BestLift(BaseModel):
    weight: float
    exercise_name: str


class DashboardStats(BaseModel):
    weekly_volume: Dict[str, int] = Field(default_factory=dict, description="muscle group -> sets this week")
    missed_muscles: List[str] = Field(default_factory=list)
    personal_records: Dict[str, PersonalRecord] = Field(default_factory=dict)
    best_lift: Optional[BestLift] = None
    total_calories: int = 0


class SupplementStats(BaseModel):
    this_week: int = 0
    this_month: int = 0
