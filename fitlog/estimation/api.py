# -*- coding: utf-8 -*-
"""Estimation — API endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from .calories import describe_training, estimate_meal_calories, estimate_training_calories
from .models import CalorieEstimateResponse, MealEstimateRequest, TrainingEstimateRequest

router = APIRouter(prefix="/api/estimate", tags=["Estimation"])


@router.post("/meal", response_model=CalorieEstimateResponse, summary="Estimate meal calories")
def estimate_meal(request: MealEstimateRequest):
    return CalorieEstimateResponse(calories=estimate_meal_calories(request.name, request.description))


@router.post("/training", response_model=CalorieEstimateResponse, summary="Estimate calories burned")
def estimate_training(request: TrainingEstimateRequest):
    training = request.training
    return CalorieEstimateResponse(
        calories=estimate_training_calories(training),
        description=describe_training(training),
    )
