"""
TTL cache for finished recommendation lists, used by the HTTP host.
"""
import threading
import time
from typing import Callable, Dict, FrozenSet, List, Optional, Tuple

from .schema.candidate import Candidate
from .schema.profile import Role

CacheKey = Tuple[str, int, FrozenSet[Role]]


class RecommendationCache:
    """
    Maps (subject, top_k, target roles) to a candidate list.

    Entries older than ``stale_after`` seconds are treated as missing.
    A ``stale_after`` of 0 disables caching.
    """

    def __init__(self, stale_after: float, clock: Callable[[], float] = time.monotonic):
        self.stale_after = stale_after
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: Dict[CacheKey, Tuple[float, List[Candidate]]] = {}

    @staticmethod
    def key(subject_id: str, top_k: int, target_roles=()) -> CacheKey:
        return (subject_id, top_k, frozenset(target_roles or ()))

    def is_stale(self, stored_at: float) -> bool:
        return self._clock() - stored_at >= self.stale_after

    def get(self, key: CacheKey) -> Optional[List[Candidate]]:
        if self.stale_after <= 0:
            return None
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            stored_at, candidates = entry
            if self.is_stale(stored_at):
                del self._entries[key]
                return None
            return list(candidates)

    def put(self, key: CacheKey, candidates: List[Candidate]) -> None:
        """Store a list and drop every entry that has gone stale."""
        if self.stale_after <= 0:
            return
        with self._lock:
            for stale in [k for k, (stored_at, _) in self._entries.items() if self.is_stale(stored_at)]:
                del self._entries[stale]
            self._entries[key] = (self._clock(), list(candidates))

    def invalidate(self, subject_id: Optional[str] = None) -> None:
        """Drop one subject's entries, or everything."""
        with self._lock:
            if subject_id is None:
                self._entries.clear()
                return
            for key in [k for k in self._entries if k[0] == subject_id]:
                del self._entries[key]

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
