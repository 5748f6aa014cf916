# -*- coding: utf-8 -*-
"""CSV — export the whole collection."""

from __future__ import annotations

from typing import Iterable, List

from ..logs.models import DailyLog
from .codec import format_csv
from .schema import COLUMNS, log_to_rows

EXPORT_FILENAME = "fitlog_data.csv"
EXPORT_MEDIA_TYPE = "text/csv; charset=utf-8"


def export_rows(logs: Iterable[DailyLog]) -> List[List[str]]:
    """Header row first, then one row per training and meal in caller order."""
    rows: List[List[str]] = [list(COLUMNS)]
    for log in logs:
        for row in log_to_rows(log):
            rows.append([row[column] for column in COLUMNS])
    return rows


def export_csv(logs: Iterable[DailyLog]) -> str:
    return format_csv(export_rows(logs))
