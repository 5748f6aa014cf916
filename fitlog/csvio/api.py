# -*- coding: utf-8 -*-
"""CSV — API endpoints (import upload + export download)."""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, File, HTTPException, Query, UploadFile
from fastapi.responses import Response
from pydantic import BaseModel

from ..logs.storage import load_logs, save_logs
from .export import EXPORT_FILENAME, EXPORT_MEDIA_TYPE, export_csv
from .merge import ImportStatus, MergeMode, import_csv

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/csv", tags=["CSV"])


class CsvImportResponse(BaseModel):
    status: ImportStatus
    message: str
    applied: bool
    imported_dates: List[str] = []
    rows_imported: int = 0
    rows_skipped: int = 0


def _decode_upload(raw: bytes) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return raw.decode("latin-1")


@router.get("/export", summary="Download every log as CSV")
def export_all():
    try:
        content = export_csv(load_logs())
    except Exception as exc:
        logger.exception("CSV export failed")
        raise HTTPException(status_code=500, detail=f"Failed to export CSV: {exc}") from exc
    return Response(
        content=content,
        media_type=EXPORT_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
    )


@router.post("/import", response_model=CsvImportResponse, summary="Import logs from a CSV file")
def import_file(
    file: UploadFile = File(...),
    mode: MergeMode = Query(default=MergeMode.replace, description="replace | append"),
):
    text = _decode_upload(file.file.read())
    result = import_csv(text, load_logs(), mode=mode)
    if result.status is ImportStatus.rejected:
        raise HTTPException(status_code=400, detail=result.message)
    if result.applied:
        save_logs(result.logs)
    return CsvImportResponse(
        status=result.status,
        message=result.message,
        applied=result.applied,
        imported_dates=result.imported_dates,
        rows_imported=result.rows_imported,
        rows_skipped=len(result.skipped),
    )
