from __future__ import annotations
import logging
import threading
from typing import Callable, Optional

from ..config import CFG
from ..models import HostSnapshot
from ..state import Store, save_count
from .host import collect_host

log = logging.getLogger(__name__)

Collector = Callable[[CFG, Optional[HostSnapshot]], HostSnapshot]

def default_collector(cfg: CFG, prev: Optional[HostSnapshot]) -> HostSnapshot:
    if prev is None:
        return collect_host(cfg.interface)
    return collect_host(cfg.interface, os_name=prev.os_name, uname=prev.uname)

def refresh_host(cfg: CFG, store: Store, collect: Collector = default_collector,
                 first: bool = False) -> bool:
    """Replace the host snapshot; False if collection failed and the old one stays."""
    try:
        host = collect(cfg, None if first else store.host())
    except Exception:
        log.warning("host fact collection failed; keeping previous snapshot", exc_info=True)
        return False
    store.replace_host(host)
    return True

def sweep_and_save(cfg: CFG, store: Store, last_saved: int) -> int:
    """Drop stale visitors and save the count if it moved.

    Returns the count now known to be on disk.
    """
    dropped = store.sweep(cfg.max_age * cfg.sweep_factor)
    if dropped:
        log.debug("swept %d stale visitor(s)", dropped)

    count = store.hi_count()
    if count == last_saved:
        return last_saved
    try:
        save_count(cfg.state_path, count)
    except OSError:
        log.exception("saving hi count %d to %s failed; retrying next tick", count, cfg.state_path)
        return last_saved
    log.info("saved hi count %d", count)
    return count

def refresh_once(cfg: CFG, store: Store, last_saved: int,
                 collect: Collector = default_collector,
                 first: bool = False) -> int:
    """One tick: new host facts, stale visitors out, count saved if it moved."""
    refresh_host(cfg, store, collect=collect, first=first)
    return sweep_and_save(cfg, store, last_saved)

def refresh_loop(cfg: CFG, store: Store, last_saved: int,
                 stop: Optional[threading.Event] = None,
                 collect: Collector = default_collector) -> int:
    stop = stop or threading.Event()
    first = True
    while not stop.is_set():
        # os name and uname are re-read until one collection succeeds
        if refresh_host(cfg, store, collect=collect, first=first):
            first = False
        last_saved = sweep_and_save(cfg, store, last_saved)
        stop.wait(cfg.refresh_interval)
    return last_saved
