import os
from pathlib import Path
from typing import Union

def to_abs_path(p: Union[str, os.PathLike]) -> Path:
    """Absolute path for p: '~' expanded, relative paths taken from the CWD.

    The file itself need not exist yet; the state file is created on the
    first save.
    """
    pp = Path(p).expanduser()
    if pp.is_absolute():
        return pp.resolve()
    return (Path.cwd() / pp).resolve()
