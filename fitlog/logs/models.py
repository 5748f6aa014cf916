# -*- coding: utf-8 -*-
"""Daily logs — Pydantic models."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Dict, List, Literal, Optional, Union
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


def new_id() -> str:
    return str(uuid4())


def _require_text(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


class TrainingCategory(str, Enum):
    strength = "Fuerza"
    combat = "Lucha"
    cardio = "Cardio"
    strength_endurance = "Fuerza-Resistencia"


class WeightType(str, Enum):
    bodyweight = "bodyweight"
    kg = "kg"


# Suggested exercise names per category (free text is still accepted).
TRAINING_OPTIONS = {
    TrainingCategory.strength: [
        "Dominadas",
        "Flexiones",
        "Fondos",
        "Sentadillas",
        "Remo barra baja",
        "Zancadas",
        "Dominadas australianas",
        "Flexiones pino",
        "Pies Barra",
    ],
    TrainingCategory.combat: ["BJJ", "Wrestling", "Kickboxing", "MMA"],
    TrainingCategory.cardio: ["Rucking", "Correr", "Bicicleta", "Comba"],
    TrainingCategory.strength_endurance: ["Thrusters", "Burpees", "Sprints", "Battle Rope", "Assault Bike"],
}

# Strength-endurance weight only means something for this exercise.
WEIGHTED_ENDURANCE_EXERCISE = "Thrusters"


class _TrainingBase(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: str = Field(default_factory=new_id)
    name: str = Field(..., min_length=1)
    calories_burned: Optional[int] = Field(None, description="Estimated kcal, null when unknown")

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        return _require_text(value)


class StrengthTraining(_TrainingBase):
    category: Literal["Fuerza"] = "Fuerza"
    sets: int = Field(0, ge=0)
    reps: int = Field(0, ge=0)
    weight_type: WeightType = WeightType.bodyweight
    weight: Optional[float] = Field(None, ge=0, description="kg, only with weight_type=kg")

    @model_validator(mode="after")
    def _drop_weight_for_bodyweight(self) -> "StrengthTraining":
        if self.weight_type is WeightType.bodyweight and self.weight is not None:
            self.weight = None
        return self


class CombatTraining(_TrainingBase):
    category: Literal["Lucha"] = "Lucha"
    duration: int = Field(0, ge=0, description="minutes")


class CardioTraining(_TrainingBase):
    category: Literal["Cardio"] = "Cardio"
    duration: int = Field(0, ge=0, description="minutes")
    distance: Optional[float] = Field(None, ge=0, description="km")
    weight: Optional[float] = Field(None, ge=0, description="kg carried (rucking)")


class StrengthEnduranceTraining(_TrainingBase):
    category: Literal["Fuerza-Resistencia"] = "Fuerza-Resistencia"
    sets: int = Field(0, ge=0)
    reps: int = Field(0, ge=0)
    weight: Optional[float] = Field(None, ge=0, description="kg (Thrusters)")


Training = Annotated[
    Union[StrengthTraining, CombatTraining, CardioTraining, StrengthEnduranceTraining],
    Field(discriminator="category"),
]

TRAINING_MODELS = {
    TrainingCategory.strength: StrengthTraining,
    TrainingCategory.combat: CombatTraining,
    TrainingCategory.cardio: CardioTraining,
    TrainingCategory.strength_endurance: StrengthEnduranceTraining,
}


class Meal(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: str = Field(default_factory=new_id)
    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    calories: Optional[int] = Field(None, description="Estimated kcal, null when unknown")

    @field_validator("name", "description")
    @classmethod
    def _text_not_blank(cls, value: str) -> str:
        """Both must hold visible text, as CSV import requires."""
        return _require_text(value)


class DailyLog(BaseModel):
    id: str = Field(default_factory=new_id)
    date: str = Field(..., pattern=DATE_PATTERN, description="YYYY-MM-DD")
    body_weight: Optional[float] = Field(None, ge=0, description="kg")
    trainings: List[Training] = Field(default_factory=list)
    meals: List[Meal] = Field(default_factory=list)


class DailyLogUpsertRequest(BaseModel):
    id: Optional[str] = Field(None, description="Existing log id; omitted for a new day")
    date: str = Field(..., pattern=DATE_PATTERN, description="YYYY-MM-DD")
    body_weight: Optional[float] = Field(None, ge=0)
    trainings: List[Training] = Field(default_factory=list)
    meals: List[Meal] = Field(default_factory=list)


class DailyLogListResponse(BaseModel):
    count: int
    logs: List[DailyLog]


class TrainingOptionsResponse(BaseModel):
    categories: List[str]
    options: Dict[str, List[str]]


def format_quantity(value: Optional[float]) -> str:
    """Render a number the way it is typed: ``20.0`` -> ``"20"``, ``None`` -> ``""``."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
