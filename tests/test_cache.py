import datetime as dt
import threading
import time
import unittest

from radar_api.app_types import CacheEntry
from radar_api.cache import RadarCache


class FakeClock:
    def __init__(self, now_ms: int = 1_700_000_000_000):
        self.now_ms = now_ms

    def __call__(self) -> int:
        return self.now_ms


def _entry(fetched_at_ms: int, payload="payload") -> CacheEntry:
    # payload type is irrelevant to the cache
    return CacheEntry(payload=payload, fetched_at_ms=fetched_at_ms)  # type: ignore[arg-type]


class TestRadarCache(unittest.TestCase):
    def setUp(self):
        self.clock = FakeClock()
        self.cache = RadarCache(ttl_seconds=300, clock=self.clock)

    def test_empty_cache_is_stale(self):
        self.assertIsNone(self.cache.get())

    def test_fresh_until_ttl_boundary(self):
        start = self.clock.now_ms
        self.cache.put(_entry(start))

        self.clock.now_ms = start + 299_999
        self.assertIsNotNone(self.cache.get())

        self.clock.now_ms = start + 300_000
        self.assertIsNone(self.cache.get())

    def test_expires_at(self):
        self.assertEqual(self.cache.expires_at(1000), 301_000)

    def test_put_replaces_entry(self):
        self.cache.put(_entry(self.clock.now_ms, "old"))
        self.cache.put(_entry(self.clock.now_ms, "new"))
        self.assertEqual(self.cache.get().payload, "new")

    def test_get_or_refresh_hit_and_miss(self):
        calls = []

        def refresh(now_ms):
            calls.append(now_ms)
            return _entry(now_ms, f"v{len(calls)}")

        first, hit = self.cache.get_or_refresh(refresh)
        self.assertFalse(hit)
        self.assertEqual(first.payload, "v1")

        self.clock.now_ms += 120_000
        second, hit = self.cache.get_or_refresh(refresh)
        self.assertTrue(hit)
        self.assertIs(second, first)

        self.clock.now_ms += 180_000
        third, hit = self.cache.get_or_refresh(refresh)
        self.assertFalse(hit)
        self.assertEqual(third.payload, "v2")
        self.assertEqual(third.fetched_at_ms, self.clock.now_ms)

    def test_failed_refresh_leaves_cache_empty(self):
        def refresh(now_ms):
            raise RuntimeError("upstream exploded")

        with self.assertRaises(RuntimeError):
            self.cache.get_or_refresh(refresh)
        self.assertIsNone(self.cache.get())

    def test_concurrent_stale_readers_share_one_refresh(self):
        cache = RadarCache(ttl_seconds=300)
        release = threading.Event()
        calls = {"refresh": 0}
        results = []

        def slow_refresh(now_ms):
            calls["refresh"] += 1
            release.wait(timeout=5)
            return _entry(now_ms, "shared")

        def reader():
            entry, _hit = cache.get_or_refresh(slow_refresh)
            results.append(entry)

        threads = [threading.Thread(target=reader) for _ in range(4)]
        for t in threads:
            t.start()
        time.sleep(0.1)
        release.set()
        for t in threads:
            t.join(timeout=5)

        self.assertEqual(calls["refresh"], 1)
        self.assertEqual(len(results), 4)
        self.assertTrue(all(r is results[0] for r in results))

    def test_real_clock_is_epoch_millis(self):
        cache = RadarCache()
        now = dt.datetime.now(dt.timezone.utc).timestamp() * 1000
        self.assertLess(abs(cache.now() - now), 5_000)


if __name__ == "__main__":
    unittest.main()
