from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Job:
    """
    One generation task: a worksheet inside a workbook rendered into one
    output file.

    Invariants:
    - every field is a non-empty string
    - headers holds exactly three names, read by role: (name, type, remark)
    """

    headers: Tuple[str, str, str]
    work_sheet_name: str
    class_name: str
    in_path: str
    out_path: str
    namespace: str

    @property
    def label(self) -> str:
        """Short identifier used in diagnostics."""
        return f"{self.class_name}@{self.work_sheet_name}"

    @property
    def name_header(self) -> str:
        return self.headers[0]

    @property
    def type_header(self) -> str:
        return self.headers[1]

    @property
    def remark_header(self) -> str:
        return self.headers[2]
