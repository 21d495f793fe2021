from __future__ import annotations
from typing import Dict, Hashable


class HelloDedup:
    """Decides whether a hello from an address should be counted.

    Keeps the last accepted timestamp per address. A repeat hello is only
    accepted once strictly more than ``max_age`` seconds have passed.
    """

    def __init__(self, max_age: float):
        self.max_age = float(max_age)
        self.last_seen: Dict[Hashable, float] = {}

    def accept(self, address: Hashable, now: float) -> bool:
        seen = self.last_seen.get(address)
        if seen is not None and now - seen <= self.max_age:
            return False
        self.last_seen[address] = now
        return True

    def sweep(self, now: float, max_age: float) -> int:
        # entries older than max_age are dropped; returns how many went
        stale = [a for a, t in self.last_seen.items() if now - t > max_age]
        for a in stale:
            del self.last_seen[a]
        return len(stale)

    def __len__(self) -> int:
        return len(self.last_seen)
