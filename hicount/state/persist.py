from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Union

log = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


def tmp_path_for(path: PathLike) -> Path:
    p = Path(path)
    return p.with_name(p.name + ".tmp")


def load_count(path: PathLike) -> int:
    """Read the persisted hello count.

    A missing file or content that is not a non-negative decimal integer
    gives 0. Any other I/O error (permissions, directory in the way, ...)
    is raised to the caller.
    """
    try:
        txt = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        return 0
    except UnicodeDecodeError:
        log.warning("ignoring undecodable count in %s", path)
        return 0
    txt = txt.strip()
    if not txt.isdigit() or not txt.isascii():
        if txt:
            log.warning("ignoring malformed count in %s: %r", path, txt[:32])
        return 0
    return int(txt)


def save_count(path: PathLike, value: int) -> None:
    """Write value to a sibling temp file, then atomically replace path."""
    dst = Path(path)
    tmp = tmp_path_for(dst)
    try:
        with open(tmp, "w", encoding="utf-8") as f:
            f.write(str(int(value)))
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp, dst)
    except OSError:
        try:
            tmp.unlink()
        except OSError:
            pass
        raise
