from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


# ---------- reading ----------
def read_text_exact(path: Path, encoding: str = "utf-8") -> str:
    """Read a file without newline translation ('\\r\\n' stays '\\r\\n')."""
    with path.open("r", encoding=encoding, newline="") as f:
        return f.read()


# ---------- writing (atomic) ----------
def write_text_atomic(path: Path, content: str, encoding: str = "utf-8") -> None:
    """
    Replace `path` with `content` in one step: the text goes to a uniquely
    named temp file in the same directory first, so a failure never leaves a
    half-written config behind. An existing file keeps its permission bits.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    tmp = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as f:
            f.write(content)
        if path.exists():
            shutil.copymode(path, tmp)
        tmp.replace(path)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise
    logger.debug("Wrote %s (%d chars)", path, len(content))


__all__ = ["read_text_exact", "write_text_atomic"]
