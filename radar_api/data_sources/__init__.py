"""Snapshot sources for the radar pipeline."""

from .base import FALLBACK_SAMPLE_URL, FetchResult, SnapshotSource, fallback_result
from .factory import build_data_source
from .mrms_client import MrmsSnapshotSource, fetch_latest_snapshot
from .sample_source import SampleSnapshotSource

__all__ = [
    "build_data_source",
    "fallback_result",
    "fetch_latest_snapshot",
    "FALLBACK_SAMPLE_URL",
    "FetchResult",
    "MrmsSnapshotSource",
    "SampleSnapshotSource",
    "SnapshotSource",
]
