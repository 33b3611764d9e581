from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Generic, Optional, TypeVar

from fichajes.infrastructure.config import SETTINGS

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

Clock = Callable[[], float]


@dataclass(slots=True)
class CacheEntry(Generic[T]):
    key: str
    created: float
    ttl: float
    payload: T

    def expired(self, now: float) -> bool:
        return now - self.created > self.ttl


class ResultCache(Generic[T]):
    """In-process key -> payload store where every entry carries its own TTL.

    Expired entries are treated as absent and dropped lazily on ``get``. There
    is no size bound; the key space is the set of supported competitions.
    """

    def __init__(
        self, *, default_ttl: float | None = None, clock: Clock | None = None
    ) -> None:
        self.default_ttl = (
            SETTINGS.CACHE_TTL_SECONDS if default_ttl is None else float(default_ttl)
        )
        self._clock: Clock = clock or time.monotonic
        self._entries: Dict[str, CacheEntry[T]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[T]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.expired(self._clock()):
                del self._entries[key]
                LOGGER.debug("Cache entry %s expired", key)
                return None
            return entry.payload

    def put(self, key: str, payload: T, ttl: float | None = None) -> None:
        ttl_s = self.default_ttl if ttl is None else float(ttl)
        with self._lock:
            self._entries[key] = CacheEntry(
                key=key, created=self._clock(), ttl=ttl_s, payload=payload
            )

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


__all__ = ["CacheEntry", "Clock", "ResultCache"]
