# -*- coding: utf-8 -*-
"""Stats — Pydantic models."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class TrainingHistoryItem(BaseModel):
    date: str = Field(..., description="YYYY-MM-DD")
    id: str
    name: str
    category: str
    details: str
    calories_burned: Optional[int] = None


class StatsResponse(BaseModel):
    day_count: int = Field(0, ge=0)
    bmr_kcal: int
    calories_in: int
    calories_out: int
    balance: int
    training_minutes: int = Field(0, ge=0)
    training_hours: int = Field(0, ge=0)
    training_remainder_min: int = Field(0, ge=0)
    history: List[TrainingHistoryItem] = Field(default_factory=list)
