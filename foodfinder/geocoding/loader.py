from __future__ import annotations

import logging
import threading
from typing import Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SingleFlightLoader(Generic[T]):
    """
    Build a client dependency once per process.

    Concurrent callers block on the same build instead of starting their own.
    A successful build is kept for the process lifetime; a failed build is
    not remembered, so the next caller tries again.
    """

    def __init__(self, name: str, factory: Callable[[], T]) -> None:
        self.name = name
        self._factory = factory
        self._lock = threading.Lock()
        self._value: T | None = None
        self._loaded = False

    @property
    def loaded(self) -> bool:
        return self._loaded

    def get(self) -> T:
        if self._loaded:
            return self._value  # type: ignore[return-value]
        with self._lock:
            if not self._loaded:
                logger.info("Loading %s", self.name)
                self._value = self._factory()
                self._loaded = True
        return self._value  # type: ignore[return-value]
