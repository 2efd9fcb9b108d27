"""
sheetgen | pipeline.py

Sequential job runner. Each job goes through

    extract_sheet -> project_rows -> TemplateRenderer.render -> write_output

Jobs share no state; a failing job is recorded and, depending on the run
policy, the remaining jobs still run.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Sequence

from sheetgen.codegen.render import TemplateRenderer
from sheetgen.codegen.write import write_output
from sheetgen.config import RunPolicy
from sheetgen.errors import JOB_ERRORS
from sheetgen.jobs.types import Job
from sheetgen.schemas.models import JobOutcome, RunSummary
from sheetgen.sheet.extract import extract_sheet
from sheetgen.sheet.project import FieldTriple, project_rows

log = logging.getLogger(__name__)


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Attach a single stream handler to the package logger."""
    logger = logging.getLogger("sheetgen")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("[sheetgen] %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    return logger


# ---------------------------------------------------------------------------
# Single job
# ---------------------------------------------------------------------------

def collect_fields(job: Job) -> List[FieldTriple]:
    """Read the job's worksheet and return its field triples."""
    binding, rows = extract_sheet(job)
    return project_rows(job, binding, rows)


def process_job(job: Job, renderer: TemplateRenderer, index: int = 0) -> JobOutcome:
    triples = collect_fields(job)
    text = renderer.render(job.namespace, job.class_name, triples)
    written = write_output(job.out_path, text)
    return JobOutcome(
        index=index,
        job=job.label,
        status="ok",
        out_path=str(written),
        fields=len(triples),
    )


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------

def run_jobs(
    jobs: Sequence[Job],
    renderer: Optional[TemplateRenderer] = None,
    policy: Optional[RunPolicy] = None,
    *,
    jobs_file: Optional[Path] = None,
) -> RunSummary:
    """
    Run every job in order and collect one outcome per job.

    With no jobs nothing is touched, not even the template.
    """
    policy = policy or RunPolicy()
    summary = RunSummary(jobs_file=str(jobs_file) if jobs_file else None)
    if not jobs:
        log.info("no jobs configured")
        return summary

    renderer = renderer or TemplateRenderer()
    stopped = False

    for i, job in enumerate(jobs):
        if stopped:
            summary.outcomes.append(
                JobOutcome(index=i, job=job.label, status="skipped")
            )
            continue

        try:
            outcome = process_job(job, renderer, index=i)
        except JOB_ERRORS as e:
            log.error("[%s] %s failed: %s", e.kind, job.label, e)
            summary.outcomes.append(
                JobOutcome(
                    index=i,
                    job=job.label,
                    status="failed",
                    error_kind=e.kind,
                    detail=str(e),
                )
            )
            stopped = policy.stop_on_error
            continue

        log.info("generated %s (%d fields): %s", job.label, outcome.fields, outcome.out_path)
        summary.outcomes.append(outcome)

    return summary
