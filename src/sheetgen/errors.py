# sheetgen/errors.py

from __future__ import annotations

from typing import Optional


class SheetGenError(Exception):
    """Base class for every error raised by sheetgen."""

    kind = "error"


class ConfigError(SheetGenError):
    """Job list missing, unreadable or malformed. Fatal for the whole run."""

    kind = "config"


class WorkbookOpenError(SheetGenError):
    kind = "workbook-open"


class SheetNotFoundError(SheetGenError):
    kind = "sheet-not-found"


class ValidationError(SheetGenError):
    """
    Sheet content does not fit the job.

    Carries the job label and, when known, the 1-based sheet row index.
    """

    kind = "validation"

    def __init__(self, message: str, *, job: str, row: Optional[int] = None):
        self.job = job
        self.row = row
        where = f"job {job!r}" if row is None else f"job {job!r}, row {row}"
        super().__init__(f"{where}: {message}")


class RenderError(SheetGenError):
    kind = "render"


class OutputIOError(SheetGenError):
    kind = "output-io"


# Errors caught at the job boundary; anything else propagates.
JOB_ERRORS = (
    WorkbookOpenError,
    SheetNotFoundError,
    ValidationError,
    RenderError,
    OutputIOError,
)
