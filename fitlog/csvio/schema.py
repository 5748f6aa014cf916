# -*- coding: utf-8 -*-
"""CSV — mapping between flat header-keyed rows and daily log records."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date as date_cls
from typing import Dict, List, Optional, Sequence, Union

from ..logs.models import (
    CardioTraining,
    CombatTraining,
    DailyLog,
    Meal,
    StrengthEnduranceTraining,
    StrengthTraining,
    Training,
    TrainingCategory,
    WeightType,
    format_quantity,
)

COLUMNS = (
    "date",
    "type",
    "category",
    "name",
    "description",
    "sets",
    "reps",
    "weight_type",
    "weight_kg",
    "duration_min",
    "distance_km",
    "calories",
)
REQUIRED_HEADERS = ("date", "type", "name")

ROW_TYPE_TRAINING = "training"
ROW_TYPE_MEAL = "meal"

_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")
_INT_PREFIX_RE = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX_RE = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

_CATEGORY_VALUES = {c.value: c for c in TrainingCategory}


class RowSkipped(ValueError):
    """A single CSV row that cannot be imported; the rest of the file still is."""


@dataclass
class ImportedRow:
    date: str
    item: Union[Training, Meal]


def normalize_headers(row: Sequence[str]) -> List[str]:
    return [h.lower().strip() for h in row]


def missing_headers(headers: Sequence[str]) -> List[str]:
    return [h for h in REQUIRED_HEADERS if h not in headers]


def parse_int(value: str) -> Optional[int]:
    """Leading-integer parse: ``"12abc"`` → 12, ``"3.7"`` → 3, ``"abc"`` → None."""
    m = _INT_PREFIX_RE.match(value or "")
    return int(m.group(1)) if m else None


def parse_float(value: str) -> Optional[float]:
    m = _FLOAT_PREFIX_RE.match(value or "")
    return float(m.group(1)) if m else None


def _count(value: str) -> int:
    parsed = parse_int(value)
    return max(parsed, 0) if parsed is not None else 0


def _calories(value: str) -> Optional[int]:
    return parse_int(value) if value else None


def _decimal(value: str) -> Optional[float]:
    if not value:
        return None
    parsed = parse_float(value)
    if parsed is None or parsed < 0:
        return None
    return parsed


def _weight_type(value: str) -> WeightType:
    normalized = (value or "").strip().lower()
    if normalized == WeightType.kg.value:
        return WeightType.kg
    return WeightType.bodyweight


def is_valid_date(value: str) -> bool:
    if not value or not _DATE_RE.fullmatch(value):
        return False
    try:
        date_cls.fromisoformat(value)
    except ValueError:
        return False
    return True


def _training_from_row(data: Dict[str, str]) -> Training:
    category = _CATEGORY_VALUES.get(data.get("category", "").strip())
    name = data.get("name", "")
    if not data.get("category", "").strip() or not name.strip():
        raise RowSkipped("training row without category or name")
    if category is None:
        raise RowSkipped(f"unknown training category {data.get('category')!r}")

    base = {"name": name, "calories_burned": _calories(data.get("calories", ""))}
    if category is TrainingCategory.strength:
        return StrengthTraining(
            **base,
            sets=_count(data.get("sets", "")),
            reps=_count(data.get("reps", "")),
            weight_type=_weight_type(data.get("weight_type", "")),
            weight=_decimal(data.get("weight_kg", "")),
        )
    if category is TrainingCategory.combat:
        return CombatTraining(**base, duration=_count(data.get("duration_min", "")))
    if category is TrainingCategory.cardio:
        return CardioTraining(
            **base,
            duration=_count(data.get("duration_min", "")),
            distance=_decimal(data.get("distance_km", "")),
            weight=_decimal(data.get("weight_kg", "")),
        )
    if category is TrainingCategory.strength_endurance:
        return StrengthEnduranceTraining(
            **base,
            sets=_count(data.get("sets", "")),
            reps=_count(data.get("reps", "")),
            weight=_decimal(data.get("weight_kg", "")),
        )
    raise TypeError(f"Unhandled training category: {category}")


def _meal_from_row(data: Dict[str, str]) -> Meal:
    name = data.get("name", "")
    description = data.get("description", "")
    if not name.strip() or not description.strip():
        raise RowSkipped("meal row without name or description")
    return Meal(name=name, description=description, calories=_calories(data.get("calories", "")))


def row_to_entry(headers: Sequence[str], fields: Sequence[str]) -> ImportedRow:
    """Map one data row to a dated training or meal, raising RowSkipped if unusable.

    ``headers`` must already be normalized. Rows shorter than the header row
    are rejected even when the missing columns are optional.
    """
    if len(fields) < len(headers):
        raise RowSkipped(f"row has {len(fields)} fields, expected {len(headers)}")

    data = {header: fields[idx] or "" for idx, header in enumerate(headers)}

    date = data.get("date", "")
    if not is_valid_date(date):
        raise RowSkipped(f"invalid date {date!r}")

    row_type = data.get("type", "").strip().lower()
    if row_type == ROW_TYPE_TRAINING:
        return ImportedRow(date=date, item=_training_from_row(data))
    if row_type == ROW_TYPE_MEAL:
        return ImportedRow(date=date, item=_meal_from_row(data))
    raise RowSkipped(f"unknown or missing type {row_type!r}")


def _empty_row(date: str, row_type: str) -> Dict[str, str]:
    row = {column: "" for column in COLUMNS}
    row["date"] = date
    row["type"] = row_type
    return row


def training_to_row(date: str, training: Training) -> Dict[str, str]:
    row = _empty_row(date, ROW_TYPE_TRAINING)
    row["category"] = training.category
    row["name"] = training.name
    row["calories"] = format_quantity(training.calories_burned)

    if isinstance(training, StrengthTraining):
        row["sets"] = str(training.sets)
        row["reps"] = str(training.reps)
        row["weight_type"] = training.weight_type.value
        row["weight_kg"] = format_quantity(training.weight)
    elif isinstance(training, CombatTraining):
        row["duration_min"] = str(training.duration)
    elif isinstance(training, CardioTraining):
        row["duration_min"] = str(training.duration)
        row["distance_km"] = format_quantity(training.distance)
        row["weight_kg"] = format_quantity(training.weight)
    elif isinstance(training, StrengthEnduranceTraining):
        row["sets"] = str(training.sets)
        row["reps"] = str(training.reps)
        row["weight_kg"] = format_quantity(training.weight)
    else:
        raise TypeError(f"Unhandled training variant: {type(training).__name__}")
    return row


def meal_to_row(date: str, meal: Meal) -> Dict[str, str]:
    row = _empty_row(date, ROW_TYPE_MEAL)
    row["name"] = meal.name
    row["description"] = meal.description
    row["calories"] = format_quantity(meal.calories)
    return row


def log_to_rows(log: DailyLog) -> List[Dict[str, str]]:
    """All trainings in list order, then all meals."""
    rows = [training_to_row(log.date, t) for t in log.trainings]
    rows.extend(meal_to_row(log.date, m) for m in log.meals)
    return rows
