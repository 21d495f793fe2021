from __future__ import annotations
import threading
import time
from contextlib import contextmanager
from typing import Callable, Hashable, Iterator, Tuple

from ..models import HostSnapshot, View
from .dedup import HelloDedup


class RWLock:
    """Many readers or one writer. Waiting writers block new readers."""

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if not self._readers:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class Store:
    """Owns the hello count, the last-seen map and the host snapshot.

    One instance is created in ``main`` and handed to the web app and the
    refresh thread. Write sections only touch in-memory dicts and ints; no
    I/O ever happens while the write lock is held.
    """

    def __init__(self, hi_count: int, max_age: float, host: HostSnapshot | None = None,
                 clock: Callable[[], float] = time.monotonic):
        if hi_count < 0:
            raise ValueError(f"hi_count must be >= 0, got {hi_count}")
        self.lock = RWLock()
        self.clock = clock
        self._hi_count = int(hi_count)
        self._dedup = HelloDedup(max_age)
        self._host = host or HostSnapshot()

    @property
    def max_age(self) -> float:
        return self._dedup.max_age

    def hi_count(self) -> int:
        with self.lock.read():
            return self._hi_count

    def host(self) -> HostSnapshot:
        with self.lock.read():
            return self._host

    def view(self) -> View:
        with self.lock.read():
            return View(hi_count=self._hi_count, host=self._host)

    def visitors(self) -> int:
        with self.lock.read():
            return len(self._dedup)

    def say_hello(self, address: Hashable) -> Tuple[bool, int]:
        """Register a hello; returns (counted, hi count after the call)."""
        now = self.clock()
        with self.lock.write():
            counted = self._dedup.accept(address, now)
            if counted:
                self._hi_count += 1
            return counted, self._hi_count

    def replace_host(self, host: HostSnapshot) -> None:
        with self.lock.write():
            self._host = host

    def sweep(self, max_age: float) -> int:
        now = self.clock()
        with self.lock.write():
            return self._dedup.sweep(now, max_age)
