"""Turn an acquired MRMS snapshot buffer into a radar dataset.

Real GRIB2 parsing is not implemented. `SnapshotDecoder.resolve` is the one
step a GRIB2 reader would replace; today it ignores the payload and returns
the procedural grid dataset.
"""
from __future__ import annotations

import gzip
import zlib
from dataclasses import dataclass
from typing import Optional, Tuple

from radar_api.domain import FailureKind
from radar_api.generators import DatasetFactory, RadarDataset
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="decoder")

DEFAULT_MIN_COMPRESSED_BYTES = 1000


@dataclass
class DecodeResult:
    """Outcome of decoding one buffer."""
    dataset: RadarDataset
    payload_size: int = 0
    decompressed: bool = False
    failure: Optional[FailureKind] = None


class SnapshotDecoder:
    """Decompress (when possible) and resolve a snapshot into points."""

    def __init__(
        self,
        grid_generator: DatasetFactory,
        fallback_generator: DatasetFactory,
        *,
        min_compressed_bytes: int = DEFAULT_MIN_COMPRESSED_BYTES,
    ) -> None:
        self.grid_generator = grid_generator
        self.fallback_generator = fallback_generator
        self.min_compressed_bytes = min_compressed_bytes

    def decompress(self, buffer: bytes) -> Tuple[bytes, bool]:
        """Gunzip `buffer`; on malformed input return it unchanged."""
        try:
            data = gzip.decompress(buffer)
        except (OSError, EOFError, zlib.error) as exc:
            logger.debug("Snapshot is not gzip data; using raw bytes", extra={"error": str(exc)})
            return buffer, False
        logger.debug("Decompressed snapshot", extra={"compressed": len(buffer), "decompressed": len(data)})
        return data, True

    def resolve(self, payload: bytes) -> RadarDataset:
        """Produce points for a (decompressed) payload."""
        return self.grid_generator()

    def decode(self, buffer: Optional[bytes]) -> DecodeResult:
        """Decode `buffer`, falling back to the random dataset on any error."""
        try:
            if buffer is not None and len(buffer) > self.min_compressed_bytes:
                logger.info("Processing snapshot", extra={"bytes": len(buffer)})
                payload, decompressed = self.decompress(buffer)
            else:
                logger.info("No usable snapshot payload; resolving from the grid model")
                payload, decompressed = buffer or b"", False
            dataset = self.resolve(payload)
            return DecodeResult(dataset=dataset, payload_size=len(payload), decompressed=decompressed)
        except Exception:
            logger.exception("Snapshot decode failed; using random fallback dataset")
            return DecodeResult(dataset=self.fallback_generator(), failure=FailureKind.DECODE)
