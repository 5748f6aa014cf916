# -*- coding: utf-8 -*-
"""Stats domain aggregation (calorie balance + training time + history)."""

from __future__ import annotations

from typing import Iterable, List

from ..logs.models import (
    CardioTraining,
    CombatTraining,
    DailyLog,
    StrengthEnduranceTraining,
    StrengthTraining,
    Training,
    WEIGHTED_ENDURANCE_EXERCISE,
    WeightType,
    format_quantity,
)
from .models import StatsResponse, TrainingHistoryItem


def training_details(training: Training) -> str:
    """Short summary line, e.g. ``3s x 10r @ 20kg`` or ``30 min / 5 km``."""
    if isinstance(training, StrengthTraining):
        if training.weight_type is WeightType.kg:
            load = f"@ {format_quantity(training.weight or 0)}kg"
        else:
            load = "bodyweight"
        return f"{training.sets}s x {training.reps}r {load}"
    if isinstance(training, CombatTraining):
        return f"{training.duration} min"
    if isinstance(training, CardioTraining):
        details = f"{training.duration} min"
        if training.distance:
            details += f" / {format_quantity(training.distance)} km"
        if training.weight:
            details += f" / {format_quantity(training.weight)} kg"
        return details
    if isinstance(training, StrengthEnduranceTraining):
        details = f"{training.sets}s x {training.reps}r"
        if training.name == WEIGHTED_ENDURANCE_EXERCISE and training.weight:
            details += f" @ {format_quantity(training.weight)}kg"
        return details
    raise TypeError(f"Unhandled training variant: {type(training).__name__}")


def _training_minutes(training: Training) -> int:
    if isinstance(training, (CombatTraining, CardioTraining)):
        return training.duration
    if isinstance(training, (StrengthTraining, StrengthEnduranceTraining)):
        return 0
    raise TypeError(f"Unhandled training variant: {type(training).__name__}")


def compute_stats(logs: Iterable[DailyLog], *, bmr_kcal: int) -> StatsResponse:
    logs = list(logs)
    calories_in = 0
    burned = 0
    minutes = 0
    history: List[TrainingHistoryItem] = []

    for log in logs:
        calories_in += sum(m.calories or 0 for m in log.meals)
        for training in log.trainings:
            burned += training.calories_burned or 0
            minutes += _training_minutes(training)
            history.append(
                TrainingHistoryItem(
                    date=log.date,
                    id=training.id,
                    name=training.name,
                    category=training.category,
                    details=training_details(training),
                    calories_burned=training.calories_burned,
                )
            )

    # Newest first; same-day entries keep their logged order.
    history.sort(key=lambda item: item.date, reverse=True)

    calories_out = len(logs) * bmr_kcal + burned
    return StatsResponse(
        day_count=len(logs),
        bmr_kcal=bmr_kcal,
        calories_in=calories_in,
        calories_out=calories_out,
        balance=calories_in - calories_out,
        training_minutes=minutes,
        training_hours=minutes // 60,
        training_remainder_min=minutes % 60,
        history=history,
    )
