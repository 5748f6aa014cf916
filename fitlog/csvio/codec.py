# -*- coding: utf-8 -*-
"""CSV — minimal reader/writer for the import/export format.

The reader is a single left-to-right scan with an "inside quotes" flag. It is
deliberately tolerant: a quote in the middle of an unquoted field is kept as a
literal character, and short rows are returned as-is for the schema layer to
judge.
"""

from __future__ import annotations

from typing import Any, Iterable, List

BOM = "\ufeff"
_NEEDS_QUOTING = (",", '"', "\n", "\r")


def _normalize(text: str) -> str:
    if text.startswith(BOM):
        text = text[1:]
    return text.replace("\r\n", "\n").replace("\r", "\n").strip()


def parse_csv(text: str) -> List[List[str]]:
    """Split CSV text into rows of string fields."""
    rows: List[List[str]] = []
    if not text:
        return rows

    csv = _normalize(text)
    row: List[str] = []
    field: List[str] = []
    in_quotes = False
    i = 0
    n = len(csv)
    while i < n:
        ch = csv[i]
        if in_quotes:
            if ch == '"':
                if i + 1 < n and csv[i + 1] == '"':
                    field.append('"')
                    i += 1
                else:
                    in_quotes = False
            else:
                field.append(ch)
        elif ch == '"':
            if field:
                field.append(ch)
            else:
                in_quotes = True
        elif ch == ",":
            row.append("".join(field))
            field = []
        elif ch == "\n":
            row.append("".join(field))
            rows.append(row)
            row = []
            field = []
        else:
            field.append(ch)
        i += 1

    row.append("".join(field))
    rows.append(row)

    # Blank lines come out as a single empty field.
    return [r for r in rows if len(r) > 1 or (len(r) == 1 and r[0] != "")]


def escape_cell(value: Any) -> str:
    text = "" if value is None else str(value)
    if any(token in text for token in _NEEDS_QUOTING):
        return '"' + text.replace('"', '""') + '"'
    return text


def format_row(cells: Iterable[Any]) -> str:
    return ",".join(escape_cell(cell) for cell in cells)


def format_csv(rows: Iterable[Iterable[Any]]) -> str:
    return "\n".join(format_row(row) for row in rows)
