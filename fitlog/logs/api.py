# -*- coding: utf-8 -*-
"""Daily logs — API endpoints."""

from __future__ import annotations

import logging
from typing import Optional, Set

from fastapi import APIRouter, BackgroundTasks, HTTPException, Query

from ..estimation.calories import estimate_meal_calories, estimate_training_calories
from .models import (
    TRAINING_OPTIONS,
    DailyLog,
    DailyLogListResponse,
    DailyLogUpsertRequest,
    TrainingOptionsResponse,
    new_id,
)
from .storage import filter_logs, find_log, load_logs, new_item_ids, save_logs, upsert_log

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/logs", tags=["Logs"])


# Write-back reloads the collection and changes only the matching item. No lock
# is held: a PUT saved between this load and the save below is overwritten.
def _apply_training_calories(training_id: str, calories: int) -> None:
    logs = load_logs()
    for log in logs:
        for training in log.trainings:
            if training.id == training_id:
                training.calories_burned = calories
                save_logs(logs)
                return
    logger.info("Training %s vanished before its estimate arrived", training_id)


def _apply_meal_calories(meal_id: str, calories: int) -> None:
    logs = load_logs()
    for log in logs:
        for meal in log.meals:
            if meal.id == meal_id:
                meal.calories = calories
                save_logs(logs)
                return
    logger.info("Meal %s vanished before its estimate arrived", meal_id)


def estimate_new_items(log: DailyLog, training_ids: Set[str], meal_ids: Set[str]) -> None:
    """Estimate calories for freshly added items and write each result back by id."""
    for training in log.trainings:
        if training.id in training_ids and training.calories_burned is None:
            calories = estimate_training_calories(training)
            if calories is not None:
                _apply_training_calories(training.id, calories)
    for meal in log.meals:
        if meal.id in meal_ids and meal.calories is None:
            calories = estimate_meal_calories(meal.name, meal.description)
            if calories is not None:
                _apply_meal_calories(meal.id, calories)


@router.get("", response_model=DailyLogListResponse, summary="List daily logs")
def list_logs(
    start: Optional[str] = Query(default=None, description="YYYY-MM-DD"),
    end: Optional[str] = Query(default=None, description="YYYY-MM-DD"),
):
    logs = filter_logs(load_logs(), start=start, end=end)
    return DailyLogListResponse(count=len(logs), logs=logs)


@router.get("/options", response_model=TrainingOptionsResponse, summary="Suggested exercises per category")
def training_options():
    return TrainingOptionsResponse(
        categories=[category.value for category in TRAINING_OPTIONS],
        options={category.value: list(names) for category, names in TRAINING_OPTIONS.items()},
    )


@router.get("/{date}", response_model=DailyLog, summary="Daily log for a date")
def get_log(date: str):
    log = find_log(load_logs(), date)
    if log is None:
        raise HTTPException(status_code=404, detail=f"No log for {date}")
    return log


@router.put("", response_model=DailyLog, summary="Create or replace a daily log")
def put_log(request: DailyLogUpsertRequest, background_tasks: BackgroundTasks):
    logs = load_logs()
    previous = next((l for l in logs if l.id == request.id), None) if request.id else None
    if previous is None:
        previous = find_log(logs, request.date)

    log = DailyLog(
        id=request.id or new_id(),
        date=request.date,
        body_weight=request.body_weight,
        trainings=request.trainings,
        meals=request.meals,
    )
    updated, stored = upsert_log(logs, log)
    save_logs(updated)

    training_ids, meal_ids = new_item_ids(previous, stored)
    if training_ids or meal_ids:
        background_tasks.add_task(estimate_new_items, stored, training_ids, meal_ids)
    return stored
