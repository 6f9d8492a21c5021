from __future__ import annotations

from typing import List
from pydantic import BaseModel, Field


class UserStats(BaseModel):
    body_weight: float = Field(0.0, ge=0, description="kg; 0 means unset")
    water_intake: int = Field(0, ge=0, description="ml, resets daily")
    supplement_taken: bool = False
    supplement_history: List[str] = Field(default_factory=list, description="ISO dates the supplement was taken")
    last_updated: str = Field(..., description="ISO date of the last daily reset")
