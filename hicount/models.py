from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional

@dataclass(frozen=True)
class Memory:
    total: int
    free: int

@dataclass(frozen=True)
class Uname:
    sysname: str = "?"
    nodename: str = "?"
    release: str = "?"
    machine: str = "?"

@dataclass(frozen=True)
class HostSnapshot:
    ip: Optional[str] = None
    os_name: str = "Unknown"
    uname: Uname = field(default_factory=Uname)
    memory: Optional[Memory] = None
    uptime: int = 0  # seconds

@dataclass(frozen=True)
class View:
    """What the renderers get: the count plus the host facts of the moment."""
    hi_count: int
    host: HostSnapshot
