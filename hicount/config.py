from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from .utils.path import to_abs_path

DEFAULT_STATE_FILE = "hi_count.txt"
DEFAULT_INTERFACE = "wlan0"
DEFAULT_MAX_AGE = 300.0        # seconds between counted hellos per address
DEFAULT_REFRESH_INTERVAL = 15.0
DEFAULT_SWEEP_FACTOR = 2.0
DEFAULT_THREADS = 4

@dataclass(frozen=True)
class CFG:
    state_path: Path = Path(DEFAULT_STATE_FILE)
    interface: str = DEFAULT_INTERFACE
    max_age: float = DEFAULT_MAX_AGE
    refresh_interval: float = DEFAULT_REFRESH_INTERVAL
    sweep_factor: float = DEFAULT_SWEEP_FACTOR
    threads: int = DEFAULT_THREADS
    host: str = "0.0.0.0"
    port: int = 8080

    def __post_init__(self):
        if self.max_age < 0:
            raise ValueError(f"max_age must be >= 0, got {self.max_age}")
        if self.refresh_interval <= 0:
            raise ValueError(f"refresh_interval must be > 0, got {self.refresh_interval}")
        if self.sweep_factor < 1:
            raise ValueError(f"sweep_factor must be >= 1, got {self.sweep_factor}")
        if self.threads < 1:
            raise ValueError(f"threads must be >= 1, got {self.threads}")

def init_cfg_from_args(args) -> CFG:
    return CFG(
        state_path=to_abs_path(getattr(args, "state_file", None) or DEFAULT_STATE_FILE),
        interface=getattr(args, "interface", None) or DEFAULT_INTERFACE,
        max_age=float(getattr(args, "max_age", DEFAULT_MAX_AGE)),
        refresh_interval=float(getattr(args, "interval", DEFAULT_REFRESH_INTERVAL)),
        sweep_factor=float(getattr(args, "sweep_factor", DEFAULT_SWEEP_FACTOR)),
        threads=int(getattr(args, "threads", DEFAULT_THREADS)),
        host=getattr(args, "host", None) or "0.0.0.0",
        port=int(getattr(args, "port", 8080)),
    )
