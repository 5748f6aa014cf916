# -*- coding: utf-8 -*-
"""Estimation — calorie estimates via an OpenAI-compatible chat completions API.

Every call is best-effort: a missing key, a transport error or an unusable
reply all yield ``None`` so callers can keep the value as "unknown".
"""

from __future__ import annotations

import json
import logging
import math
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from ..config import settings
from ..logs.models import (
    CardioTraining,
    CombatTraining,
    StrengthEnduranceTraining,
    StrengthTraining,
    Training,
    WEIGHTED_ENDURANCE_EXERCISE,
    WeightType,
    format_quantity,
)

logger = logging.getLogger(__name__)

_SYSTEM_PROMPT = (
    "You are a nutrition and exercise assistant. Return STRICT JSON only. "
    "Do NOT wrap in markdown or code fences. "
    "Output MUST be a single JSON object with one numeric field."
)


@dataclass(frozen=True)
class EstimationSettings:
    base_url: str
    api_key: Optional[str]
    model: str
    timeout: float
    temperature: float
    max_tokens: int


def resolve_estimation_settings() -> EstimationSettings:
    return EstimationSettings(
        base_url=settings.qwen_base_url.rstrip("/"),
        api_key=settings.qwen_api_key,
        model=settings.qwen_model,
        timeout=settings.qwen_timeout,
        temperature=settings.qwen_temperature,
        max_tokens=settings.qwen_max_tokens,
    )


def _completions_url(base_url: str) -> str:
    if base_url.endswith("/chat/completions"):
        return base_url
    return f"{base_url}/chat/completions"


def describe_training(training: Training) -> str:
    """Plain-English description of a session, used in the estimation prompt."""
    if isinstance(training, StrengthTraining):
        if training.weight_type is WeightType.kg:
            load = f"at {format_quantity(training.weight or 0)}kg"
        else:
            load = "using bodyweight"
        details = f"{training.sets} sets of {training.reps} reps {load}"
    elif isinstance(training, CombatTraining):
        details = f"for {training.duration} minutes"
    elif isinstance(training, CardioTraining):
        details = f"for {training.duration} minutes"
        if training.distance:
            details += f" covering {format_quantity(training.distance)}km"
        if training.weight:
            details += f" with a {format_quantity(training.weight)}kg pack"
    elif isinstance(training, StrengthEnduranceTraining):
        details = f"{training.sets} sets of {training.reps} reps"
        if training.name == WEIGHTED_ENDURANCE_EXERCISE and training.weight:
            details += f" with {format_quantity(training.weight)}kg"
    else:
        raise TypeError(f"Unhandled training variant: {type(training).__name__}")
    return f"Exercise: {training.name} ({training.category}). Details: {details}"


def _extract_json_object(text: str) -> Dict[str, Any]:
    cleaned = text.strip()
    cleaned = re.sub(r"^```(?:json)?\s*", "", cleaned, flags=re.IGNORECASE)
    cleaned = re.sub(r"\s*```$", "", cleaned)
    start = cleaned.find("{")
    end = cleaned.rfind("}")
    if start == -1 or end == -1 or end <= start:
        raise ValueError("Model output does not contain a JSON object")
    parsed = json.loads(cleaned[start : end + 1])
    if not isinstance(parsed, dict):
        raise ValueError("Model output is not a JSON object")
    return parsed


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _calories_from_reply(data: Dict[str, Any], key: str) -> Optional[int]:
    choices = data.get("choices") or []
    if not choices:
        raise ValueError("Response has no choices")
    content = (choices[0].get("message") or {}).get("content") or ""
    parsed = _extract_json_object(content)
    raw = parsed.get(key)
    if raw is None:
        return None
    value = float(raw)
    if not math.isfinite(value) or value <= 0:
        return None
    return _round_half_up(value)


def _request_calories(prompt: str, key: str, client: Optional[httpx.Client] = None) -> Optional[int]:
    cfg = resolve_estimation_settings()
    if not cfg.api_key:
        logger.info("QWEN_API_KEY not set, skipping calorie estimation")
        return None

    payload = {
        "model": cfg.model,
        "messages": [
            {"role": "system", "content": _SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ],
        "temperature": cfg.temperature,
        "max_tokens": cfg.max_tokens,
    }
    headers = {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {cfg.api_key}",
    }
    owns_client = client is None
    http = client or httpx.Client(timeout=cfg.timeout)
    try:
        resp = http.post(_completions_url(cfg.base_url), headers=headers, json=payload)
        resp.raise_for_status()
        return _calories_from_reply(resp.json(), key)
    except httpx.HTTPError as exc:
        logger.warning("Calorie estimation request failed: %s", exc)
    except (ValueError, TypeError, AttributeError) as exc:
        logger.warning("Calorie estimation reply unusable: %s", exc)
    finally:
        if owns_client:
            http.close()
    return None


def estimate_meal_calories(name: str, description: str, *, client: Optional[httpx.Client] = None) -> Optional[int]:
    prompt = (
        "Estimate the calories for the following meal. "
        'Reply as {"calories": number}.\n'
        f"Meal: {name}\nDescription: {description}"
    )
    return _request_calories(prompt, "calories", client)


def estimate_training_calories(training: Training, *, client: Optional[httpx.Client] = None) -> Optional[int]:
    prompt = (
        "Estimate the calories burned for the following workout session for an average adult. "
        'Reply as {"calories_burned": number}.\n'
        f"{describe_training(training)}"
    )
    return _request_calories(prompt, "calories_burned", client)
