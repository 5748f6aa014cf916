# -*- coding: utf-8 -*-
"""Stats — API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Query

from ..config import settings
from ..logs.storage import filter_logs, load_logs
from .models import StatsResponse
from .storage import compute_stats

router = APIRouter(prefix="/api/stats", tags=["Stats"])


@router.get("", response_model=StatsResponse, summary="Calorie balance, training time and history")
def get_stats(
    start: str | None = Query(default=None, description="YYYY-MM-DD"),
    end: str | None = Query(default=None, description="YYYY-MM-DD"),
):
    logs = filter_logs(load_logs(), start=start, end=end)
    return compute_stats(logs, bmr_kcal=settings.bmr_kcal)
