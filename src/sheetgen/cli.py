from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from sheetgen.codegen.render import TemplateRenderer, default_search_path
from sheetgen.config import DEFAULT_JOBS_FILE, DEFAULT_TEMPLATE, RunPolicy
from sheetgen.errors import JOB_ERRORS, ConfigError
from sheetgen.jobs.load import load_job_document
from sheetgen.pipeline import collect_fields, configure_logging, run_jobs

app = typer.Typer(help="sheetgen: generate source files from spreadsheet schemas")

EXIT_JOB_FAILED = 1
EXIT_CONFIG = 2


def _load_jobs_or_exit(jobs: Path):
    try:
        return load_job_document(jobs)
    except ConfigError as e:
        typer.secho(f"Config error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=EXIT_CONFIG)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Run every configured job when no command is given."""
    configure_logging(verbose)
    if ctx.invoked_subcommand is None:
        generate(
            jobs=Path(DEFAULT_JOBS_FILE),
            template=DEFAULT_TEMPLATE,
            templates_dir=None,
            keep_going=None,
            report=None,
        )


@app.command()
def generate(
    jobs: Path = typer.Option(Path(DEFAULT_JOBS_FILE), "--jobs", "-j", help="Job list (JSON or YAML)"),
    template: str = typer.Option(DEFAULT_TEMPLATE, "--template", "-t", help="Template file name"),
    templates_dir: Optional[Path] = typer.Option(None, "--templates-dir", help="Directory searched before the packaged templates"),
    keep_going: Optional[bool] = typer.Option(None, "--keep-going/--fail-fast", help="Override the job list's policy.on_error"),
    report: Optional[Path] = typer.Option(None, "--report", help="Write the run summary as JSON"),
):
    """Render every job of the job list into its output file."""
    job_list, policy = _load_jobs_or_exit(jobs)
    if keep_going is not None:
        policy = RunPolicy(on_error="continue" if keep_going else "stop")

    renderer = TemplateRenderer(template, search_path=default_search_path(templates_dir))
    summary = run_jobs(job_list, renderer, policy, jobs_file=jobs)

    for o in summary.outcomes:
        if o.status == "ok":
            typer.secho(f"Wrote {o.out_path} ({o.fields} fields)", fg=typer.colors.GREEN)
        elif o.status == "failed":
            typer.secho(f"FAILED {o.job} [{o.error_kind}]: {o.detail}", fg=typer.colors.RED)
        else:
            typer.secho(f"Skipped {o.job}", fg=typer.colors.YELLOW)

    if report:
        report.parent.mkdir(parents=True, exist_ok=True)
        report.write_text(summary.model_dump_json(indent=2), encoding="utf-8")
        typer.echo(f"Report: {report}")

    typer.echo(f"Done. {len(summary.outcomes) - len(summary.failed)}/{len(summary.outcomes)} job(s) succeeded")
    if not summary.ok:
        raise typer.Exit(code=EXIT_JOB_FAILED)


@app.command()
def check(
    jobs: Path = typer.Option(Path(DEFAULT_JOBS_FILE), "--jobs", "-j", help="Job list (JSON or YAML)"),
):
    """Validate jobs against their worksheets without rendering or writing."""
    job_list, _ = _load_jobs_or_exit(jobs)

    failed = 0
    for job in job_list:
        try:
            triples = collect_fields(job)
        except JOB_ERRORS as e:
            failed += 1
            typer.secho(f"FAILED {job.label} [{e.kind}]: {e}", fg=typer.colors.RED)
            continue
        typer.secho(f"OK {job.label}: {len(triples)} fields", fg=typer.colors.GREEN)

    if failed:
        raise typer.Exit(code=EXIT_JOB_FAILED)


if __name__ == "__main__":
    app()
