from __future__ import annotations
from typing import List, Optional
from pydantic import BaseModel, Field

class JobOutcome(BaseModel):
    # Result of one job: ok | failed | skipped
    schema_version: str = Field(default='0.1.0')
    index: int
    job: str
    status: str
    out_path: Optional[str] = None
    fields: Optional[int] = None
    error_kind: Optional[str] = None
    detail: Optional[str] = None

class RunSummary(BaseModel):
    # Per-run report collected over all jobs in configuration order
    schema_version: str = Field(default='0.1.0')
    jobs_file: Optional[str] = None
    outcomes: List[JobOutcome] = Field(default_factory=list)

    @property
    def failed(self) -> List[JobOutcome]:
        return [o for o in self.outcomes if o.status == "failed"]

    @property
    def ok(self) -> bool:
        return not self.failed
