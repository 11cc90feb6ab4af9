"""Factory helpers for choosing a snapshot source at startup."""

from __future__ import annotations

from radar_api import config
from radar_api.data_sources.base import DatasetFactory, SnapshotSource
from radar_api.data_sources.mrms_client import MrmsSnapshotSource
from radar_api.data_sources.sample_source import SampleSnapshotSource
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="data_sources/factory")


DEFAULT_SOURCE_NAME = "mrms"


def build_data_source(fallback: DatasetFactory, settings: config.Settings | None = None) -> SnapshotSource:
    """Instantiate the configured snapshot source."""
    settings = settings or config.settings
    source = (settings.data_source or DEFAULT_SOURCE_NAME).lower()

    if source == "mrms":
        url = settings.latest_snapshot_url
        logger.info("Using MRMS data source", extra={"url": url})
        return MrmsSnapshotSource(fallback=fallback, url=url, timeout=settings.fetch_timeout_seconds)

    if source == "sample":
        logger.info("Using generated sample data source")
        return SampleSnapshotSource(fallback=fallback)

    raise ValueError(f"Unknown data source '{source}'")
