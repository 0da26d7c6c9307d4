"""Spreadsheet import/export for the pool and the draw results."""

from __future__ import annotations

import io
import zipfile
from collections.abc import Iterable, Sequence
from datetime import datetime
from typing import Any, BinaryIO

from openpyxl import Workbook, load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from luckydraw.errors import InvalidPoolError, ValidationError
from luckydraw.models import WinnerRecord
from luckydraw.services.number_pool import parse_number, sort_identifiers

TEMPLATE_HEADER = "number"
# Header labels accepted on import besides TEMPLATE_HEADER.
LOCALIZED_HEADERS = frozenset({"number", "号码"})

RESULTS_HEADER = ["award", "number", "drawn_at"]
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def _first_cell(row: Any) -> str | None:
    if row is None:
        return None
    if isinstance(row, (str, bytes)) or not isinstance(row, Sequence):
        value = row
    elif len(row) == 0:
        return None
    else:
        value = row[0]
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    text = str(value).strip()
    return text or None


def _is_header(value: str) -> bool:
    return value.lower() in LOCALIZED_HEADERS or parse_number(value) is None


def identifiers_from_rows(rows: Iterable[Any]) -> list[str]:
    """Extract sorted candidate identifiers from the first column of ``rows``.

    The first row is dropped as a header when it reads "number" or is not
    numeric. Duplicates are kept here; the pool collapses them.
    """

    identifiers: list[str] = []
    for index, row in enumerate(rows):
        value = _first_cell(row)
        if value is None:
            continue
        if index == 0 and _is_header(value):
            continue
        if value.lower() in LOCALIZED_HEADERS:
            continue
        identifiers.append(value)
    return sort_identifiers(identifiers)


def template_rows(start: int, end: int, width: int, header: str = TEMPLATE_HEADER) -> list[list[str]]:
    if start < 0 or end < start:
        raise ValidationError(
            message="Invalid template range",
            details={"range": [f"Need 0 <= start <= end, got start={start} end={end}"]},
        )
    if width < 1:
        raise ValidationError(
            message="Invalid template width",
            details={"width": ["Must be >= 1"]},
        )
    return [[header], *([str(n).zfill(width)] for n in range(start, end + 1))]


def default_identifiers(start: int, end: int, width: int) -> list[str]:
    return [row[0] for row in template_rows(start, end, width)[1:]]


def result_rows(records: Iterable[WinnerRecord]) -> list[list[str]]:
    rows = [list(RESULTS_HEADER)]
    for record in records:
        rows.append([record.award_name, record.identifier, format_timestamp(record.timestamp)])
    return rows


def format_timestamp(value: datetime) -> str:
    return value.astimezone().strftime(TIMESTAMP_FORMAT)


def read_rows(stream: BinaryIO) -> list[tuple]:
    """Read every row of the first worksheet of an xlsx upload."""

    try:
        workbook = load_workbook(stream, read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError, ValueError) as exc:
        raise InvalidPoolError(message="Could not read spreadsheet", details=str(exc)) from exc

    try:
        sheet = workbook.worksheets[0]
        return [tuple(row) for row in sheet.iter_rows(values_only=True)]
    finally:
        workbook.close()


def write_workbook(rows: Sequence[Sequence[Any]], sheet_title: str, column_width: int = 15) -> bytes:
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = sheet_title
    for row in rows:
        sheet.append(list(row))
    for column in sheet.iter_cols(min_row=1, max_row=1):
        sheet.column_dimensions[column[0].column_letter].width = column_width

    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()
