from pathlib import Path

import pytest

from sheetgen.codegen.render import PACKAGE_TEMPLATES, TemplateRenderer
from sheetgen.config import RunPolicy
from sheetgen.errors import ConfigError
from sheetgen.jobs.load import job_from_dict
from sheetgen.pipeline import run_jobs

ROWS = [
    ["##var", "type", "remark"],
    ["##legend", "legend row", "ignored"],
    ["id", "int", "the identifier"],
    ["name", "string", "display name\nshown in the HUD"],
]


@pytest.fixture
def renderer():
    return TemplateRenderer(search_path=[PACKAGE_TEMPLATES])


def test_zero_jobs_touches_nothing(tmp_path: Path, monkeypatch):
    class _ExplodingRenderer:
        def render(self, *a, **kw):
            raise AssertionError("renderer must not be used")

    def _no_io(*a, **kw):
        raise AssertionError("no file I/O expected")

    monkeypatch.setattr("sheetgen.pipeline.extract_sheet", _no_io)
    monkeypatch.setattr("sheetgen.pipeline.write_output", _no_io)
    monkeypatch.setattr("sheetgen.pipeline.TemplateRenderer", _no_io)

    summary = run_jobs([], _ExplodingRenderer())
    assert run_jobs([]).outcomes == []

    assert summary.ok
    assert summary.outcomes == []
    assert list(tmp_path.iterdir()) == []


def test_single_job_generates_fields(make_workbook, job_dict, renderer):
    make_workbook({"Sheet1": ROWS})
    job = job_from_dict(job_dict())

    summary = run_jobs([job], renderer)

    assert summary.ok
    outcome = summary.outcomes[0]
    assert outcome.status == "ok"
    assert outcome.fields == 2
    text = Path(outcome.out_path).read_text(encoding="utf-8")
    assert "public int string;" in text
    assert "/// display name\n        /// shown in the HUD" in text
    assert "legend row" not in text


def test_failed_job_does_not_stop_the_run(make_workbook, job_dict, renderer, tmp_path):
    make_workbook({"Sheet1": ROWS})
    jobs = [
        job_from_dict(job_dict(work_sheet_name="Missing", class_name="Bad")),
        job_from_dict(job_dict(out_path=str(tmp_path / "Good.cs"))),
    ]

    summary = run_jobs(jobs, renderer)

    assert not summary.ok
    assert [o.status for o in summary.outcomes] == ["failed", "ok"]
    assert summary.outcomes[0].error_kind == "sheet-not-found"
    assert summary.outcomes[0].index == 0
    assert summary.outcomes[1].index == 1
    assert (tmp_path / "Good.cs").is_file()


def test_stop_policy_skips_remaining_jobs(make_workbook, job_dict, renderer, tmp_path):
    make_workbook({"Sheet1": ROWS})
    jobs = [
        job_from_dict(job_dict(in_path=str(tmp_path / "missing.xlsx"))),
        job_from_dict(job_dict(out_path=str(tmp_path / "Good.cs"))),
    ]

    summary = run_jobs(jobs, renderer, RunPolicy(on_error="stop"))

    assert [o.status for o in summary.outcomes] == ["failed", "skipped"]
    assert summary.outcomes[0].error_kind == "workbook-open"
    assert not (tmp_path / "Good.cs").exists()


def test_rerun_is_byte_identical(make_workbook, job_dict, renderer):
    make_workbook({"Sheet1": ROWS})
    job = job_from_dict(job_dict())

    first = Path(run_jobs([job], renderer).outcomes[0].out_path).read_bytes()
    second = Path(run_jobs([job], renderer).outcomes[0].out_path).read_bytes()

    assert first == second


def test_missing_header_fails_before_rows(make_workbook, job_dict, renderer):
    make_workbook({"Sheet1": [["##var", "type", "note"], ["id", "int", "a"]]})
    job = job_from_dict(job_dict())

    summary = run_jobs([job], renderer)

    outcome = summary.outcomes[0]
    assert outcome.status == "failed"
    assert outcome.error_kind == "validation"
    assert "row 1" in outcome.detail
    assert not Path(job.out_path).exists()


def test_policy_from_config():
    assert RunPolicy.from_config(None).on_error == "continue"
    assert RunPolicy.from_config({"on_error": "STOP"}).stop_on_error
    with pytest.raises(ConfigError, match="on_error"):
        RunPolicy.from_config({"on_error": "retry"})
    with pytest.raises(ConfigError, match="Unknown policy keys"):
        RunPolicy.from_config({"on_error": "stop", "retries": 3})


def test_corrupt_workbook_does_not_stop_the_run(
    make_workbook, truncate_sheet_xml, job_dict, renderer, tmp_path
):
    bad = truncate_sheet_xml(make_workbook({"Sheet1": ROWS}, name="bad.xlsx"))
    make_workbook({"Sheet1": ROWS})
    jobs = [
        job_from_dict(job_dict(in_path=str(bad), class_name="Bad", out_path=str(tmp_path / "Bad.cs"))),
        job_from_dict(job_dict(out_path=str(tmp_path / "Good.cs"))),
    ]

    summary = run_jobs(jobs, renderer)

    assert [o.status for o in summary.outcomes] == ["failed", "ok"]
    assert summary.outcomes[0].error_kind == "workbook-open"
    assert not (tmp_path / "Bad.cs").exists()
    assert (tmp_path / "Good.cs").is_file()
