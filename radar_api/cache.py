"""Single-slot, TTL-bounded cache for the latest radar response."""

import threading
import time
from typing import Callable, Optional, Tuple

from radar_api.app_types import CacheEntry
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="cache")

DEFAULT_TTL_SECONDS = 300


def epoch_millis() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return time.time_ns() // 1_000_000


class RadarCache:
    """
    Thread-safe holder for one CacheEntry.

    An entry is fresh while `now - fetched_at_ms < ttl_ms` and stale from the
    TTL boundary on. Refreshes are single-flight: callers that find the entry
    stale while another refresh is running wait for it and reuse its result.
    """

    def __init__(self, ttl_seconds: int = DEFAULT_TTL_SECONDS, clock: Callable[[], int] = epoch_millis) -> None:
        """Initialize with a TTL in seconds and an epoch-millisecond clock."""
        self.ttl_ms = int(ttl_seconds * 1000)
        self._clock = clock
        self._entry: Optional[CacheEntry] = None
        self._lock = threading.Lock()
        self._refresh_lock = threading.Lock()

    def now(self) -> int:
        """Read the injected clock."""
        return self._clock()

    def is_fresh(self, entry: Optional[CacheEntry], now_ms: int) -> bool:
        """True if `entry` exists and is younger than the TTL."""
        if entry is None:
            return False
        return now_ms - entry.fetched_at_ms < self.ttl_ms

    def expires_at(self, fetched_at_ms: int) -> int:
        """Epoch millis at which an entry fetched at `fetched_at_ms` goes stale."""
        return fetched_at_ms + self.ttl_ms

    def get(self, now_ms: Optional[int] = None) -> Optional[CacheEntry]:
        """Return the stored entry if fresh, else None."""
        now_ms = self.now() if now_ms is None else now_ms
        with self._lock:
            entry = self._entry
        return entry if self.is_fresh(entry, now_ms) else None

    def put(self, entry: CacheEntry) -> None:
        """Replace the stored entry."""
        with self._lock:
            self._entry = entry

    def get_or_refresh(self, refresh: Callable[[int], CacheEntry]) -> Tuple[CacheEntry, bool]:
        """
        Return (entry, hit).

        On a miss, `refresh(now_ms)` builds the replacement entry, which is
        stored before returning. If `refresh` raises, nothing is stored.
        """
        entry = self.get()
        if entry is not None:
            logger.debug("Returning cached radar data")
            return entry, True

        with self._refresh_lock:
            # Another caller may have refreshed while we waited.
            now_ms = self.now()
            entry = self.get(now_ms)
            if entry is not None:
                logger.debug("Joined in-flight refresh")
                return entry, True

            logger.info("Cache stale; refreshing radar data")
            entry = refresh(now_ms)
            self.put(entry)
            return entry, False
