from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, List, Tuple

import yaml

from sheetgen.config import RunPolicy
from sheetgen.errors import ConfigError
from sheetgen.jobs.schema import validate_job_dict
from sheetgen.jobs.types import Job

log = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")


def job_from_dict(d: dict) -> Job:
    validate_job_dict(d)
    return Job(
        headers=tuple(d["headers"]),
        work_sheet_name=d["work_sheet_name"],
        class_name=d["class_name"],
        in_path=d["in_path"],
        out_path=d["out_path"],
        namespace=d["namespace"],
    )


def _parse_document(path: Path, text: str) -> Any:
    if path.suffix.lower() in YAML_SUFFIXES:
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ConfigError(f"{path}: invalid YAML: {e}") from e
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigError(f"{path}:{e.lineno}: invalid JSON: {e.msg}") from e


def load_job_document(path: Path) -> Tuple[List[Job], RunPolicy]:
    """
    Load the ordered job list.

    The document is a JSON (or YAML, by file suffix) array of job objects:

    [
      {
        "headers": ["##var", "type", "remark"],
        "work_sheet_name": "Sheet1",
        "class_name": "Player",
        "in_path": "player.xlsx",
        "out_path": "Player.cs",
        "namespace": "Game.Config"
      }
    ]

    The document may also be an object holding the array under "jobs" and
    a run policy under "policy":

    {"policy": {"on_error": "stop"}, "jobs": [...]}

    An empty array is valid and yields no jobs.
    """
    path = Path(path).expanduser()
    if not path.is_file():
        raise ConfigError(f"Job list not found: {path}")

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"{path}: cannot read job list: {e}") from e

    doc = _parse_document(path, text)
    if doc is None:
        doc = []

    policy_cfg = None
    if isinstance(doc, dict):
        unknown = sorted(set(doc) - {"jobs", "policy"})
        if unknown:
            raise ConfigError(f"{path}: unknown top-level keys {unknown}")
        policy_cfg = doc.get("policy")
        if policy_cfg is not None and not isinstance(policy_cfg, dict):
            raise ConfigError(f"{path}: policy must be an object")
        doc = doc.get("jobs", [])

    try:
        policy = RunPolicy.from_config(policy_cfg)
    except ConfigError as e:
        raise ConfigError(f"{path}: {e}") from e

    if not isinstance(doc, list):
        raise ConfigError(f"{path}: job list must be an array, got {type(doc).__name__}")

    jobs: List[Job] = []
    for i, d in enumerate(doc):
        try:
            jobs.append(job_from_dict(d))
        except ConfigError as e:
            raise ConfigError(f"{path}: job #{i}: {e}") from e

    log.debug("loaded %d job(s) from %s (on_error=%s)", len(jobs), path, policy.on_error)
    return jobs, policy


def load_jobs(path: Path) -> List[Job]:
    """Load the ordered job list, ignoring any run policy."""
    jobs, _ = load_job_document(path)
    return jobs
