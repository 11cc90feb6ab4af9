"""Interfaces and result types for radar snapshot sources."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

from radar_api.domain import FailureKind
from radar_api.generators import DatasetFactory, RadarDataset

FALLBACK_SAMPLE_URL = "fallback-sample"


@dataclass
class FetchResult:
    """
    Outcome of one acquisition attempt.

    A successful fetch carries the raw snapshot in `data`. A fallback carries
    an already-built `dataset` instead and must not be fed to the decoder.
    """
    url: str
    data: Optional[bytes] = None
    dataset: Optional[RadarDataset] = None
    failure: Optional[FailureKind] = None

    @property
    def has_payload(self) -> bool:
        """True when `data` holds raw bytes that still need decoding."""
        return self.data is not None

    @property
    def file_name(self) -> str:
        """Last path segment of the source URL."""
        return self.url.rstrip("/").split("/")[-1]


def fallback_result(fallback: DatasetFactory, failure: Optional[FailureKind] = None) -> FetchResult:
    """Build the sentinel result that substitutes a generated dataset."""
    return FetchResult(url=FALLBACK_SAMPLE_URL, dataset=fallback(), failure=failure)


class SnapshotSource(Protocol):
    """Anything that can hand back the latest reflectivity snapshot."""

    def fetch_latest(self) -> FetchResult:
        """Return the newest snapshot, or a fallback result; never raise for I/O errors."""
        ...
