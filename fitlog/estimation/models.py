# -*- coding: utf-8 -*-
"""Estimation — Pydantic models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from ..logs.models import Training


class MealEstimateRequest(BaseModel):
    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1, max_length=2000)


class CalorieEstimateResponse(BaseModel):
    calories: Optional[int] = Field(None, description="null when the estimate is unavailable")
    description: Optional[str] = None


class TrainingEstimateRequest(BaseModel):
    training: Training
