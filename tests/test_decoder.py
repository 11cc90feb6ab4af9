import gzip
import random
import unittest

from radar_api.decoder import SnapshotDecoder
from radar_api.domain import DatasetKind, FailureKind
from radar_api.generators import RadarDataset


class _Generators:
    def __init__(self):
        self.grid_calls = 0
        self.random_calls = 0

    def grid(self):
        self.grid_calls += 1
        return RadarDataset(kind=DatasetKind.GRID)

    def random(self):
        self.random_calls += 1
        return RadarDataset(kind=DatasetKind.RANDOM)


class _RecordingDecoder(SnapshotDecoder):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.decompress_calls = 0
        self.resolved_payloads = []

    def decompress(self, buffer):
        self.decompress_calls += 1
        return super().decompress(buffer)

    def resolve(self, payload):
        self.resolved_payloads.append(payload)
        return super().resolve(payload)


class TestSnapshotDecoder(unittest.TestCase):
    def setUp(self):
        self.gens = _Generators()
        self.decoder = _RecordingDecoder(self.gens.grid, self.gens.random)

    def test_arbitrary_bytes_fall_through_to_grid(self):
        buffer = bytes(range(256)) * 8  # 2048 bytes, not gzip
        result = self.decoder.decode(buffer)
        self.assertIsNone(result.failure)
        self.assertFalse(result.decompressed)
        self.assertEqual(result.dataset.kind, DatasetKind.GRID)
        self.assertEqual(self.decoder.decompress_calls, 1)
        self.assertEqual(self.decoder.resolved_payloads, [buffer])
        self.assertEqual(self.gens.random_calls, 0)

    def test_gzip_payload_is_decompressed_before_resolve(self):
        raw = random.Random(3).randbytes(4000)
        result = self.decoder.decode(gzip.compress(raw))
        self.assertTrue(result.decompressed)
        self.assertEqual(result.payload_size, len(raw))
        self.assertEqual(self.decoder.resolved_payloads, [raw])
        self.assertEqual(result.dataset.kind, DatasetKind.GRID)

    def test_empty_buffer_skips_decompression(self):
        result = self.decoder.decode(b"")
        self.assertEqual(self.decoder.decompress_calls, 0)
        self.assertEqual(self.gens.grid_calls, 1)
        self.assertIsNone(result.failure)

    def test_missing_buffer_skips_decompression(self):
        result = self.decoder.decode(None)
        self.assertEqual(self.decoder.decompress_calls, 0)
        self.assertEqual(result.dataset.kind, DatasetKind.GRID)

    def test_small_buffer_is_not_decompressed(self):
        small = gzip.compress(b"x" * 10)
        self.assertLessEqual(len(small), 1000)
        self.decoder.decode(small)
        self.assertEqual(self.decoder.decompress_calls, 0)

    def test_resolution_error_uses_random_fallback(self):
        def broken_grid():
            raise RuntimeError("boom")

        decoder = SnapshotDecoder(broken_grid, self.gens.random)
        result = decoder.decode(b"\x00" * 2000)
        self.assertEqual(result.failure, FailureKind.DECODE)
        self.assertEqual(result.dataset.kind, DatasetKind.RANDOM)
        self.assertEqual(self.gens.random_calls, 1)

    def test_decompress_returns_raw_on_truncated_gzip(self):
        truncated = gzip.compress(random.Random(5).randbytes(3000))[:1500]
        payload, ok = self.decoder.decompress(truncated)
        self.assertFalse(ok)
        self.assertEqual(payload, truncated)


if __name__ == "__main__":
    unittest.main()
