"""
Workbook access and header binding.

A job names its columns by role (name, type, remark). The first row of the
worksheet is matched against those names once per job and turned into an
explicit role -> column index mapping, so the physical column order of the
sheet never decides which value plays which role.
"""

from __future__ import annotations

import logging
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Sequence, Tuple

from openpyxl import load_workbook
from openpyxl.utils import get_column_letter
from openpyxl.utils.exceptions import InvalidFileException

from sheetgen.errors import SheetNotFoundError, ValidationError, WorkbookOpenError
from sheetgen.jobs.types import Job

log = logging.getLogger(__name__)

ROLES = ("name", "type", "remark")

Row = Sequence[Any]


@dataclass(frozen=True)
class HeaderBinding:
    """Role -> zero-based column index, resolved from the header row."""

    name: int
    type: int
    remark: int

    def columns(self) -> Tuple[int, int, int]:
        """Column indices in role order (name, type, remark)."""
        return (self.name, self.type, self.remark)

    @property
    def matched_columns(self) -> List[int]:
        """Matched positions in left-to-right sheet order."""
        return sorted(self.columns())

    def describe(self) -> str:
        return ", ".join(
            f"{role}={get_column_letter(idx + 1)}"
            for role, idx in zip(ROLES, self.columns())
        )


# ---------------------------------------------------------------------------
# Workbook
# ---------------------------------------------------------------------------

def open_workbook(path: str | Path):
    """Open an xlsx workbook read-only with cached cell values."""
    path = Path(path).expanduser()
    try:
        return load_workbook(filename=str(path), read_only=True, data_only=True)
    except (OSError, zipfile.BadZipFile, InvalidFileException, KeyError, ValueError) as e:
        raise WorkbookOpenError(f"Cannot open workbook {path}: {e}") from e
    except Exception as e:
        # broken part XML surfaces as the XML parser's own error type
        raise WorkbookOpenError(f"Cannot parse workbook {path}: {e}") from e


def get_worksheet(workbook, name: str):
    if name not in workbook.sheetnames:
        raise SheetNotFoundError(
            f"Worksheet {name!r} not found; available: {workbook.sheetnames}"
        )
    return workbook[name]


def read_rows(worksheet) -> List[Tuple[Any, ...]]:
    """All rows of the worksheet as value tuples, in sheet order."""
    try:
        return [tuple(row) for row in worksheet.iter_rows(values_only=True)]
    except Exception as e:
        # read-only sheets are parsed lazily, so corrupt XML shows up here
        raise WorkbookOpenError(f"Cannot read worksheet {worksheet.title!r}: {e}") from e


# ---------------------------------------------------------------------------
# Header binding
# ---------------------------------------------------------------------------

def _header_text(value: Any) -> str:
    return "" if value is None else str(value)


def bind_headers(job: Job, header_row: Row) -> HeaderBinding:
    """
    Resolve each declared header name to exactly one sheet column.

    Raises ValidationError (row 1) when a declared name is missing from the
    header row or appears in more than one column.
    """
    positions: Dict[str, List[int]] = {h: [] for h in job.headers}
    for idx, value in enumerate(header_row):
        text = _header_text(value)
        if text in positions:
            positions[text].append(idx)

    missing = [h for h, cols in positions.items() if not cols]
    if missing:
        raise ValidationError(
            f"header row is missing declared column(s) {missing}",
            job=job.label,
            row=1,
        )

    duplicated = {
        h: [get_column_letter(c + 1) for c in cols]
        for h, cols in positions.items()
        if len(cols) > 1
    }
    if duplicated:
        raise ValidationError(
            f"declared column(s) appear more than once in the header row: {duplicated}",
            job=job.label,
            row=1,
        )

    return HeaderBinding(
        name=positions[job.name_header][0],
        type=positions[job.type_header][0],
        remark=positions[job.remark_header][0],
    )


def extract_sheet(job: Job) -> Tuple[HeaderBinding, List[Tuple[Any, ...]]]:
    """
    Open the job's workbook, bind its headers and return the data rows
    (every row after the header row).
    """
    wb = open_workbook(job.in_path)
    try:
        ws = get_worksheet(wb, job.work_sheet_name)
        rows = read_rows(ws)
    finally:
        wb.close()

    if not rows or all(v is None for v in rows[0]):
        raise ValidationError("worksheet is empty; expected a header row", job=job.label)

    binding = bind_headers(job, rows[0])
    log.debug("%s: bound columns %s", job.label, binding.describe())
    return binding, rows[1:]
