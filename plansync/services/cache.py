import logging
import threading
from datetime import datetime
from typing import Any, Optional
from cachelib import SimpleCache
from plansync.core.parsing_schemas import to_naive_utc

logger = logging.getLogger(__name__)


class PlanCache:
    """
    Search and stats cache on top of the Flask-Caching SimpleCache backend.

    The backend owns storage and per-entry expiry. This wrapper adds the key
    scheme, whole-cache invalidation after a sync, and `sweep`, which the
    scheduler runs to drop entries the backend only hides once expired. Every
    operation holds the instance lock, so request threads and scheduler jobs
    can share one instance.
    """

    STATS_KEY = "stats:general"

    def __init__(self, backend: SimpleCache):
        self.backend = backend
        self._lock = threading.RLock()

    @staticmethod
    def search_key(starts_at: datetime, ends_at: datetime) -> str:
        return (
            f"search:{to_naive_utc(starts_at).isoformat()}"
            f":{to_naive_utc(ends_at).isoformat()}"
        )

    def _stored_keys(self) -> list:
        # SimpleCache has no key listing; its store is a plain dict
        return list(self.backend._cache)

    def get(self, key: str) -> Optional[Any]:
        """Returns the cached value, or None on a miss or an expired entry."""
        with self._lock:
            value = self.backend.get(key)
            if value is None:
                self.backend.delete(key)
            return value

    def set(self, key: str, value: Any, timeout: Optional[int] = None) -> None:
        with self._lock:
            self.backend.set(key, value, timeout=timeout)

    def delete(self, key: str) -> bool:
        with self._lock:
            return self.backend.delete(key)

    def invalidate_all(self) -> None:
        with self._lock:
            count = len(self._stored_keys())
            self.backend.clear()
        logger.info(f"Cache cleared ({count} entries dropped)")

    def sweep(self) -> int:
        with self._lock:
            expired = [key for key in self._stored_keys() if not self.backend.has(key)]
            for key in expired:
                self.backend.delete(key)
        if expired:
            logger.debug(f"Cleaned {len(expired)} expired cache entries")
        return len(expired)

    def size(self) -> int:
        with self._lock:
            return sum(1 for key in self._stored_keys() if self.backend.has(key))
