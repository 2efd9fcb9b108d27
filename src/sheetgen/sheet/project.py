from __future__ import annotations

import datetime
import logging
from typing import Any, Iterable, List, NamedTuple, Sequence

from sheetgen.config import NAME_TOKEN, REMARK_CONTINUATION, SENTINEL, TRIPLE_ARITY
from sheetgen.errors import ValidationError
from sheetgen.jobs.types import Job
from sheetgen.sheet.extract import HeaderBinding

log = logging.getLogger(__name__)


class FieldTriple(NamedTuple):
    name: str
    type: str
    remark: str


def cell_text(value: Any) -> str:
    """Stringify a cell value the way it reads in the sheet."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (datetime.datetime, datetime.date, datetime.time)):
        return value.isoformat()
    return str(value)


def continue_lines(text: str) -> str:
    """Turn embedded line breaks into doc-comment continuation lines."""
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    return text.replace("\n", REMARK_CONTINUATION)


def is_sentinel(text: str) -> bool:
    return text.startswith(SENTINEL)


def _collect(row: Sequence[Any], binding: HeaderBinding) -> List[str] | None:
    """
    Collected values for one row, or None for a sentinel row.

    The name column only decides whether the row is data; its value is
    always replaced by the fixed name token.
    """
    name_col, *other_cols = binding.columns()

    if all(
        col >= len(row) or cell_text(row[col]) == ""
        for col in binding.columns()
    ):
        return []

    collected: List[str] = []
    if name_col < len(row):
        if is_sentinel(cell_text(row[name_col])):
            return None
        collected.append(NAME_TOKEN)

    for col in other_cols:
        if col >= len(row):
            continue
        collected.append(continue_lines(cell_text(row[col])))
    return collected


def project_rows(
    job: Job,
    binding: HeaderBinding,
    rows: Iterable[Sequence[Any]],
    *,
    start_row: int = 2,
) -> List[FieldTriple]:
    """
    Turn data rows into field triples, preserving sheet order.

    start_row is the sheet row number of the first data row, used in
    diagnostics only.
    """
    triples: List[FieldTriple] = []
    for row_index, row in enumerate(rows, start=start_row):
        collected = _collect(row, binding)
        if collected is None:
            log.debug("%s: row %d skipped (sentinel)", job.label, row_index)
            continue
        if not collected:
            continue
        if len(collected) != TRIPLE_ARITY:
            raise ValidationError(
                f"expected {TRIPLE_ARITY} values, collected {len(collected)}: {collected}",
                job=job.label,
                row=row_index,
            )
        triples.append(FieldTriple(*collected))
    return triples
