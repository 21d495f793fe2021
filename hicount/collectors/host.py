from __future__ import annotations
import logging
import platform
import socket
import time
from typing import Optional

import psutil

from ..models import HostSnapshot, Memory, Uname

log = logging.getLogger(__name__)

OS_RELEASE_PATHS = ("/etc/os-release", "/usr/lib/os-release")

def read_os_name(paths=OS_RELEASE_PATHS) -> str:
    for p in paths:
        try:
            with open(p, encoding="utf-8") as f:
                for line in f:
                    key, _, value = line.strip().partition("=")
                    if key == "NAME" and value:
                        return value.strip().strip('"').strip("'")
        except (OSError, UnicodeDecodeError):
            continue
    return platform.system() or "Unknown"

def read_uname() -> Uname:
    u = platform.uname()
    return Uname(sysname=u.system or "?", nodename=u.node or "?",
                 release=u.release or "?", machine=u.machine or "?")

def interface_ip(interface: str) -> Optional[str]:
    try:
        addrs = psutil.net_if_addrs().get(interface) or []
    except Exception as e:
        log.warning("net_if_addrs failed: %s", e)
        return None
    for a in addrs:
        if a.family == socket.AF_INET and a.address:
            return a.address
    return None

def read_memory() -> Optional[Memory]:
    try:
        vm = psutil.virtual_memory()
    except Exception as e:
        log.warning("virtual_memory failed: %s", e)
        return None
    return Memory(total=int(vm.total), free=int(vm.available))

def read_uptime() -> int:
    try:
        return max(0, int(time.time() - psutil.boot_time()))
    except Exception as e:
        log.warning("boot_time failed: %s", e)
        return 0

def collect_host(interface: str, os_name: Optional[str] = None,
                 uname: Optional[Uname] = None) -> HostSnapshot:
    """Sample the host facts shown next to the counter.

    os name and uname do not change while we run, so callers pass the
    values from the first sample back in.
    """
    return HostSnapshot(
        ip=interface_ip(interface),
        os_name=os_name if os_name is not None else read_os_name(),
        uname=uname if uname is not None else read_uname(),
        memory=read_memory(),
        uptime=read_uptime(),
    )
