from __future__ import annotations

import json
import zipfile
from pathlib import Path

import pytest
from openpyxl import Workbook


HEADERS = ["##var", "type", "remark"]


@pytest.fixture
def make_workbook(tmp_path: Path):
    """Build an xlsx file from {sheet_name: [rows]} and return its path."""

    def _make(sheets, name: str = "schema.xlsx") -> Path:
        wb = Workbook()
        wb.remove(wb.active)
        for sheet_name, rows in sheets.items():
            ws = wb.create_sheet(sheet_name)
            for row in rows:
                ws.append(list(row))
        path = tmp_path / name
        wb.save(path)
        return path

    return _make


@pytest.fixture
def job_dict(tmp_path: Path):
    def _job(**overrides) -> dict:
        base = {
            "headers": list(HEADERS),
            "work_sheet_name": "Sheet1",
            "class_name": "Player",
            "in_path": str(tmp_path / "schema.xlsx"),
            "out_path": str(tmp_path / "out" / "Player.cs"),
            "namespace": "Game.Config",
        }
        base.update(overrides)
        return base

    return _job


@pytest.fixture
def write_jobs(tmp_path: Path):
    def _write(jobs, name: str = "inputs.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(jobs), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def truncate_sheet_xml():
    """Cut every worksheet part of an xlsx short, leaving the zip itself valid."""

    def _truncate(path: Path, keep: int = 40) -> Path:
        with zipfile.ZipFile(path) as src:
            parts = [(info, src.read(info.filename)) for info in src.infolist()]
        with zipfile.ZipFile(path, "w", zipfile.ZIP_DEFLATED) as dst:
            for info, data in parts:
                if info.filename.startswith("xl/worksheets/sheet"):
                    data = data[:keep]
                dst.writestr(info.filename, data)
        return path

    return _truncate
