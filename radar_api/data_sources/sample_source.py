"""Offline snapshot source that always serves the generated sample."""

from __future__ import annotations

from dataclasses import dataclass

from radar_api.data_sources.base import DatasetFactory, FetchResult, SnapshotSource, fallback_result
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="sample_source")


@dataclass
class SampleSnapshotSource(SnapshotSource):
    """Skip the network and return the fallback sample every time (dev/offline)."""

    fallback: DatasetFactory

    def fetch_latest(self) -> FetchResult:
        logger.info("Serving generated sample instead of fetching MRMS")
        return fallback_result(self.fallback)
