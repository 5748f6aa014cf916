# -*- coding: utf-8 -*-
"""Daily logs — JSON file storage (whole collection in one file)."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Iterable, List, Optional, Set, Tuple

from pydantic import ValidationError

from .models import DailyLog

from ..config import settings

logger = logging.getLogger(__name__)


def _logs_path(path: Path | None = None) -> Path:
    return path or settings.logs_path


def _ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def load_logs(path: Path | None = None) -> List[DailyLog]:
    """Load the whole collection; missing or corrupt data yields an empty list."""
    fp = _logs_path(path)
    if not fp.exists():
        return []
    try:
        raw: Any = json.loads(fp.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning("Could not load logs from %s: %s", fp, exc)
        return []
    if isinstance(raw, dict):
        raw = raw.get("logs")
    if not isinstance(raw, list):
        logger.warning("Unexpected logs payload in %s, starting empty", fp)
        return []

    logs: List[DailyLog] = []
    for item in raw:
        try:
            logs.append(DailyLog.model_validate(item))
        except ValidationError as exc:
            logger.warning("Dropping invalid log entry in %s: %s", fp, exc.errors()[:1])
    return logs


def save_logs(logs: Iterable[DailyLog], path: Path | None = None) -> bool:
    """Persist the whole collection. Failures are logged, never raised."""
    fp = _logs_path(path)
    payload = [log.model_dump(mode="json") for log in logs]
    tmp = fp.with_name(fp.name + ".tmp")
    try:
        _ensure_dir(fp.parent)
        tmp.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
        os.replace(tmp, fp)
    except OSError as exc:
        logger.error("Could not save logs to %s: %s", fp, exc)
        return False
    return True


def find_log(logs: Iterable[DailyLog], date: str) -> Optional[DailyLog]:
    for log in logs:
        if log.date == date:
            return log
    return None


def filter_logs(logs: Iterable[DailyLog], *, start: Optional[str] = None, end: Optional[str] = None) -> List[DailyLog]:
    start_date = start or "0000-01-01"
    end_date = end or "9999-12-31"
    return [log for log in logs if start_date <= log.date <= end_date]


def upsert_log(logs: List[DailyLog], log: DailyLog) -> Tuple[List[DailyLog], DailyLog]:
    """Replace by id, else take over the log holding the same date, else append.

    Returns the new collection and the log as stored (its id may have been
    replaced by the existing one for that date).
    """
    for idx, existing in enumerate(logs):
        if existing.id == log.id:
            out = list(logs)
            out[idx] = log
            # A changed date must not collide with another day.
            return [l for i, l in enumerate(out) if i == idx or l.date != log.date], log

    for idx, existing in enumerate(logs):
        if existing.date == log.date:
            stored = log.model_copy(update={"id": existing.id})
            out = list(logs)
            out[idx] = stored
            return out, stored

    return [*logs, log], log


def new_item_ids(previous: Optional[DailyLog], updated: DailyLog) -> Tuple[Set[str], Set[str]]:
    """Training and meal ids present in ``updated`` but not in ``previous``."""
    old_trainings = {t.id for t in previous.trainings} if previous else set()
    old_meals = {m.id for m in previous.meals} if previous else set()
    return (
        {t.id for t in updated.trainings if t.id not in old_trainings},
        {m.id for m in updated.meals if m.id not in old_meals},
    )
