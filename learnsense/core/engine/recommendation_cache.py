"""Short-lived cache of recommendation results per (user, subject)."""

import time
from threading import Lock
from typing import Callable, Dict, Optional, Tuple

from learnsense.core.engine.schemas import RecommendationResult

CacheKey = Tuple[str, Optional[str]]


def _normalize_subject(subject: Optional[str]) -> Optional[str]:
    if subject is None:
        return None
    subject = subject.strip().lower()
    return subject or None


class RecommendationCache:
    """Thread-safe TTL cache. A ttl of 0 disables it."""

    def __init__(self, ttl_seconds: float = 300, clock: Callable[[], float] = time.monotonic):
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: Dict[CacheKey, Tuple[float, RecommendationResult]] = {}
        self._lock = Lock()

    @property
    def enabled(self) -> bool:
        return self._ttl > 0

    @staticmethod
    def _make_key(user_id: str, subject: Optional[str]) -> CacheKey:
        return (str(user_id), _normalize_subject(subject))

    def get(self, user_id: str, subject: Optional[str]) -> Optional[RecommendationResult]:
        """Return a live entry, dropping it if expired."""
        if not self.enabled:
            return None
        key = self._make_key(user_id, subject)
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, result = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                return None
            return result

    def put(self, user_id: str, subject: Optional[str], result: RecommendationResult) -> None:
        if not self.enabled:
            return
        key = self._make_key(user_id, subject)
        with self._lock:
            self._entries[key] = (self._clock() + self._ttl, result)

    def invalidate(self, user_id: str, subject: Optional[str] = None) -> None:
        """Drop the entry for the subject and the user's all-subjects entry."""
        with self._lock:
            self._entries.pop(self._make_key(user_id, subject), None)
            self._entries.pop(self._make_key(user_id, None), None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
