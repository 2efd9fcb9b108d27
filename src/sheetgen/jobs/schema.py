# sheetgen/jobs/schema.py

from __future__ import annotations

from typing import Any, Dict

from sheetgen.config import TRIPLE_ARITY
from sheetgen.errors import ConfigError

REQUIRED_STRING_FIELDS = (
    "work_sheet_name",
    "class_name",
    "in_path",
    "out_path",
    "namespace",
)


def validate_job_dict(d: Dict[str, Any]) -> None:
    """
    Structural validation for one job object of the job list.

    Raises ConfigError with the offending field in the message.
    """

    if not isinstance(d, dict):
        raise ConfigError("Job payload must be an object")

    # -------------------------
    # Scalar string fields
    # -------------------------
    for key in REQUIRED_STRING_FIELDS:
        if key not in d:
            raise ConfigError(f"Missing job field: '{key}'")
        if not isinstance(d[key], str):
            raise ConfigError(f"Field '{key}' must be a string")
        if not d[key].strip():
            raise ConfigError(f"Field '{key}' must not be empty")

    # -------------------------
    # Headers
    # -------------------------
    if "headers" not in d:
        raise ConfigError("Missing job field: 'headers'")
    headers = d["headers"]
    if not isinstance(headers, list) or not all(isinstance(h, str) for h in headers):
        raise ConfigError("headers must be a list of strings")
    if len(headers) != TRIPLE_ARITY:
        raise ConfigError(
            f"headers must name exactly {TRIPLE_ARITY} columns "
            f"(name, type, remark); got {len(headers)}"
        )
    if any(not h.strip() for h in headers):
        raise ConfigError("headers must not contain empty names")
    if len(set(headers)) != len(headers):
        raise ConfigError(f"headers must be distinct; got {headers}")
