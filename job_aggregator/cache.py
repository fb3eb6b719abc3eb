"""Per-(source, query) TTL memoization of fetch results.

Entries are evicted purely by age; there is no size bound. Concurrent
identical requests are not coalesced, so two threads missing the same key
will both hit the upstream and the later write wins.
"""

from __future__ import annotations

import threading
import time
from typing import Callable, Dict, List, Optional, Tuple

from .config import CACHE_TTL_SECONDS
from .models import Job

CacheKey = Tuple[str, str]


class FetchCache:
    """Thread-safe TTL cache keyed by (source name, raw query string)."""

    def __init__(
        self,
        ttl_seconds: float = CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: Dict[CacheKey, Tuple[float, List[Job]]] = {}
        self._lock = threading.Lock()

    def get(self, source: str, query: str) -> Optional[List[Job]]:
        key = (source, query)
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, jobs = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                return None
            return list(jobs)

    def set(self, source: str, query: str, jobs: List[Job]) -> None:
        with self._lock:
            self._entries[(source, query)] = (self._clock() + self._ttl, list(jobs))

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        now = self._clock()
        with self._lock:
            return sum(1 for expires_at, _ in self._entries.values() if now < expires_at)
