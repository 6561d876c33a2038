"""
Published key derivation.

Two strategies:

- ``timestamp``: ``<prefix><epoch-millis>.mp3``. Keys are strictly increasing
  within one process, so two records converted in the same millisecond still
  get distinct keys. There is no mapping back to the source key.
- ``source``: ``<prefix><source-key-without-extension>.mp3``. Deterministic;
  re-converting the same object overwrites the previous result.
"""
import posixpath
import threading
import time
from typing import Callable, Optional

from ..models.object_reference import ObjectReference

OUTPUT_EXTENSION = ".mp3"


def _epoch_millis() -> int:
    return time.time_ns() // 1_000_000


class OutputKeyGenerator:
    """Derives the key a converted recording is published under."""

    STRATEGIES = ("timestamp", "source")

    def __init__(self, prefix: str = "mp3/", strategy: str = "timestamp",
                 clock: Optional[Callable[[], int]] = None):
        if strategy not in self.STRATEGIES:
            raise ValueError(f"Unknown output key strategy: {strategy}")
        self.prefix = prefix
        self.strategy = strategy
        self._clock = clock or _epoch_millis
        self._last_millis = 0
        self._lock = threading.Lock()

    def next_key(self, reference: ObjectReference) -> str:
        if self.strategy == "source":
            return self._source_key(reference)
        return f"{self.prefix}{self._next_millis()}{OUTPUT_EXTENSION}"

    def _next_millis(self) -> int:
        with self._lock:
            millis = max(self._clock(), self._last_millis + 1)
            self._last_millis = millis
            return millis

    def _source_key(self, reference: ObjectReference) -> str:
        stem, _ = posixpath.splitext(reference.key.lstrip("/"))
        return f"{self.prefix}{stem}{OUTPUT_EXTENSION}"
