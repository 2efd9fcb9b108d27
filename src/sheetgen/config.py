# sheetgen/config.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from sheetgen.errors import ConfigError

# ---------------------------------------------------------------------------
# Conventional locations (relative to the invocation directory)
# ---------------------------------------------------------------------------

DEFAULT_JOBS_FILE = "inputs.json"
DEFAULT_TEMPLATES_DIR = "templates"
DEFAULT_TEMPLATE = "code.txt.j2"

# ---------------------------------------------------------------------------
# Row projection constants
# ---------------------------------------------------------------------------

SENTINEL = "##"
NAME_TOKEN = "string"
REMARK_CONTINUATION = "\n        /// "
TRIPLE_ARITY = 3

ON_ERROR_MODES = ("continue", "stop")


@dataclass(frozen=True)
class RunPolicy:
    """
    What to do after a job fails.

      continue: report the failure and go on with the next job
      stop:     report the failure and skip the remaining jobs
    """

    on_error: str = "continue"

    @classmethod
    def from_config(cls, cfg: Optional[Dict[str, Any]]) -> "RunPolicy":
        """
        Build from a mapping such as:

        policy:
          on_error: stop
        """
        if cfg is None:
            return cls()

        cfg = dict(cfg)
        mode = str(cfg.pop("on_error", "continue")).strip().lower()
        if mode not in ON_ERROR_MODES:
            raise ConfigError(
                f"policy.on_error must be one of {list(ON_ERROR_MODES)}, got {mode!r}"
            )
        if cfg:
            raise ConfigError(f"Unknown policy keys: {sorted(cfg)}")
        return cls(on_error=mode)

    @property
    def stop_on_error(self) -> bool:
        return self.on_error == "stop"
