# -*- coding: utf-8 -*-
"""CSV — import merge: reconcile imported rows with the stored collection by date."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Sequence, Tuple

from pydantic import ValidationError

from ..logs.models import DailyLog, Meal, new_id
from .codec import parse_csv
from .schema import RowSkipped, missing_headers, normalize_headers, row_to_entry

logger = logging.getLogger(__name__)


class MergeMode(str, Enum):
    # Imported items replace the whole day.
    replace = "replace"
    # Imported items are appended after the day's existing items.
    append = "append"


class ImportStatus(str, Enum):
    ok = "ok"
    no_changes = "no_changes"
    rejected = "rejected"


class CsvImportError(ValueError):
    """The file as a whole cannot be imported."""


@dataclass
class SkippedRow:
    row_number: int
    reason: str


@dataclass
class ImportResult:
    status: ImportStatus
    message: str
    logs: List[DailyLog]
    imported_dates: List[str] = field(default_factory=list)
    rows_total: int = 0
    rows_imported: int = 0
    skipped: List[SkippedRow] = field(default_factory=list)

    @property
    def applied(self) -> bool:
        return self.status is ImportStatus.ok


def _seed(existing: DailyLog | None, date: str, mode: MergeMode) -> DailyLog:
    if existing is None:
        return DailyLog(id=new_id(), date=date)
    seeded = existing.model_copy(deep=True)
    if mode is MergeMode.replace:
        seeded.trainings = []
        seeded.meals = []
    return seeded


def merge_rows(
    headers: Sequence[str],
    data_rows: Sequence[Sequence[str]],
    logs: Sequence[DailyLog],
    *,
    mode: MergeMode = MergeMode.replace,
) -> ImportResult:
    """Group valid rows by date and replace those dates in ``logs``.

    Each date is seeded once per run, on its first valid row; later rows for
    the same date append to that same accumulator. The input collection and
    its logs are never mutated.
    """
    existing_by_date: Dict[str, DailyLog] = {}
    for log in logs:
        existing_by_date[log.date] = log

    working: Dict[str, DailyLog] = {}
    skipped: List[SkippedRow] = []
    imported = 0

    # Row numbers are 1-based and count the header row.
    for row_number, fields in enumerate(data_rows, start=2):
        try:
            entry = row_to_entry(headers, fields)
        except (RowSkipped, ValidationError) as exc:
            reason = str(exc) if isinstance(exc, RowSkipped) else f"invalid values: {exc.errors()[:1]}"
            logger.warning("Skipping CSV row %d: %s", row_number, reason)
            skipped.append(SkippedRow(row_number=row_number, reason=reason))
            continue

        acc = working.get(entry.date)
        if acc is None:
            acc = _seed(existing_by_date.get(entry.date), entry.date, mode)
            working[entry.date] = acc

        if isinstance(entry.item, Meal):
            acc.meals.append(entry.item)
        else:
            acc.trainings.append(entry.item)
        imported += 1

    if not working:
        return ImportResult(
            status=ImportStatus.no_changes,
            message="No valid rows found; nothing was changed.",
            logs=list(logs),
            rows_total=len(data_rows),
            skipped=skipped,
        )

    merged = dict(existing_by_date)
    merged.update(working)
    return ImportResult(
        status=ImportStatus.ok,
        message=f"Imported {imported} rows into {len(working)} days.",
        logs=list(merged.values()),
        imported_dates=list(working.keys()),
        rows_total=len(data_rows),
        rows_imported=imported,
        skipped=skipped,
    )


def _split_header(text: str) -> Tuple[List[str], List[List[str]]]:
    rows = parse_csv(text)
    if len(rows) < 2:
        raise CsvImportError("The file is empty or is not valid CSV.")
    headers = normalize_headers(rows[0])
    missing = missing_headers(headers)
    if missing:
        raise CsvImportError(
            "The CSV file must contain at least the columns 'date', 'type' and 'name' "
            f"(missing: {', '.join(missing)})."
        )
    return headers, rows[1:]


def import_csv(text: str, logs: Sequence[DailyLog], *, mode: MergeMode = MergeMode.replace) -> ImportResult:
    """Import CSV text into ``logs``. Never raises; failures come back as ``rejected``."""
    try:
        headers, data_rows = _split_header(text)
        result = merge_rows(headers, data_rows, logs, mode=mode)
    except CsvImportError as exc:
        logger.warning("CSV import rejected: %s", exc)
        return ImportResult(status=ImportStatus.rejected, message=str(exc), logs=list(logs))
    except Exception:
        logger.exception("Unexpected error importing CSV")
        return ImportResult(
            status=ImportStatus.rejected,
            message="There was an error importing the file. Check its format and content.",
            logs=list(logs),
        )

    logger.info(
        "CSV import %s: %d/%d rows, %d skipped, dates=%s",
        result.status.value,
        result.rows_imported,
        result.rows_total,
        len(result.skipped),
        result.imported_dates,
    )
    return result
