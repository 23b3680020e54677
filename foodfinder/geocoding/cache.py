from __future__ import annotations

import threading
import time
from collections import OrderedDict
from typing import Callable

from .models import GeocodeResult


class GeocodeCache:
    """
    Thread-safe memo of resolved addresses.

    Entries never expire by default. ``max_entries`` evicts the oldest entry
    once the bound is reached and ``ttl_seconds`` drops entries older than
    the given age on lookup.
    """

    def __init__(
        self,
        max_entries: int | None = None,
        ttl_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._entries: OrderedDict[str, tuple[GeocodeResult, float]] = OrderedDict()
        self._lock = threading.Lock()
        self._max_entries = max_entries
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._hits = 0
        self._misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get(self, address: str) -> GeocodeResult | None:
        with self._lock:
            entry = self._entries.get(address)
            if entry is not None:
                value, created_at = entry
                if self._ttl_seconds is None or self._clock() - created_at < self._ttl_seconds:
                    self._hits += 1
                    return value
                del self._entries[address]
            self._misses += 1
            return None

    def set(self, address: str, value: GeocodeResult) -> None:
        with self._lock:
            self._entries[address] = (value, self._clock())
            self._entries.move_to_end(address)
            if self._max_entries is not None:
                while len(self._entries) > self._max_entries:
                    self._entries.popitem(last=False)

    def stats(self) -> dict:
        with self._lock:
            total = self._hits + self._misses
            return {
                "size": len(self._entries),
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": round(self._hits / total * 100, 1) if total > 0 else 0.0,
            }

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0
