from __future__ import annotations

import logging
import os
import stat
import tempfile
from pathlib import Path

from sheetgen.errors import OutputIOError

log = logging.getLogger(__name__)


def _target_mode(path: Path) -> int:
    """Mode of the file being replaced, or the umask default for a new file."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_output(path: str | Path, text: str, *, encoding: str = "utf-8") -> Path:
    """
    Replace the file at path with text.

    The content goes to a temporary file next to the destination and is
    renamed into place, so readers see either the old file or the complete
    new one. The temporary file is removed on failure.
    """
    path = Path(path).expanduser().resolve()

    try:
        data = text.encode(encoding)
    except (UnicodeEncodeError, LookupError) as e:
        raise OutputIOError(f"Cannot encode output for {path} as {encoding}: {e}") from e

    tmp_name = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent))
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.chmod(tmp_name, _target_mode(path))
        os.replace(tmp_name, path)
        tmp_name = None
    except OSError as e:
        raise OutputIOError(f"Cannot write {path}: {e}") from e
    finally:
        if tmp_name is not None:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass

    log.debug("wrote %d bytes to %s", len(data), path)
    return path
