"""Fetch, decode and cache radar data for the HTTP layer."""
from __future__ import annotations

import random
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional
from urllib.parse import urlparse

from radar_api.app_types import CacheEntry
from radar_api.cache import RadarCache
from radar_api.config import Settings
from radar_api.data_sources import FetchResult, SnapshotSource, build_data_source
from radar_api.decoder import SnapshotDecoder
from radar_api.domain import (
    DataSource,
    FailureKind,
    FallbackResponse,
    PointGeometry,
    PointProperties,
    RadarDataResponse,
    RadarFeature,
    RadarFeatureCollection,
    ResponseMetadata,
)
from radar_api.generators import RadarDataset, generate_grid_dataset, generate_random_dataset
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="radar_service")

FALLBACK_ERROR_MESSAGE = "Failed to fetch radar data"


@dataclass
class QueryResult:
    """Either a (possibly cached) payload or a fallback body with its failure kind."""
    payload: Optional[RadarDataResponse] = None
    fallback: Optional[FallbackResponse] = None
    failure: Optional[FailureKind] = None
    cache_hit: bool = False

    @property
    def ok(self) -> bool:
        return self.failure is None and self.payload is not None


def _millis_to_datetime(ms: int) -> datetime:
    return datetime.fromtimestamp(ms / 1000, tz=timezone.utc)


def to_feature_collection(dataset: RadarDataset) -> RadarFeatureCollection:
    """Convert a dataset into the GeoJSON shape the client renders."""
    return RadarFeatureCollection(
        features=[
            RadarFeature(
                geometry=PointGeometry(coordinates=(p.longitude, p.latitude)),
                properties=PointProperties(reflectivity=p.reflectivity, timestamp=p.observed_at),
            )
            for p in dataset.points
        ]
    )


def classify_source(source_url: str, mrms_host: str) -> DataSource:
    """MRMS when the URL points at the MRMS host, otherwise Sample."""
    host = urlparse(source_url).hostname or ""
    if mrms_host and host == mrms_host:
        return DataSource.MRMS
    return DataSource.SAMPLE


class RadarService:
    """Fetcher -> Decoder -> Cache pipeline behind GET /api/radar-data."""

    def __init__(
        self,
        settings: Settings,
        *,
        data_source: Optional[SnapshotSource] = None,
        cache: Optional[RadarCache] = None,
        rng: Optional[random.Random] = None,
        time_source: Optional[Callable[[datetime], float]] = None,
    ) -> None:
        """
        Wire the pipeline from settings.

        `rng` feeds every generator's noise and `time_source` maps an
        observation instant to model time; tests pin both.
        """
        self.settings = settings
        self.rng = rng or random.Random()
        self.time_source = time_source
        self.cache = cache or RadarCache(ttl_seconds=settings.cache_ttl_seconds)
        self.decoder = SnapshotDecoder(
            self.grid_dataset,
            self.random_dataset,
            min_compressed_bytes=settings.min_compressed_bytes,
        )
        self.data_source = data_source or build_data_source(self.grid_dataset, settings)

    def grid_dataset(self) -> RadarDataset:
        """Fresh grid-model dataset observed now."""
        observed_at = datetime.now(timezone.utc)
        t = self.time_source(observed_at) if self.time_source else None
        return generate_grid_dataset(t=t, rng=self.rng, stride=self.settings.grid_stride, observed_at=observed_at)

    def random_dataset(self) -> RadarDataset:
        """Fresh uniform-random dataset (last-resort fallback)."""
        return generate_random_dataset(rng=self.rng, count=self.settings.random_point_count)

    def build_metadata(self, dataset: RadarDataset, fetched: FetchResult, now_ms: int) -> ResponseMetadata:
        return ResponseMetadata(
            data_source=classify_source(fetched.url, self.settings.mrms_host),
            source_url=fetched.url,
            source_file_name=fetched.file_name,
            generated_at=_millis_to_datetime(now_ms),
            cache_expires_at=_millis_to_datetime(self.cache.expires_at(now_ms)),
            total_points=len(dataset.points),
        )

    def build_response(self, dataset: RadarDataset, fetched: FetchResult, now_ms: int) -> RadarDataResponse:
        """Attach provenance metadata to a dataset."""
        collection = to_feature_collection(dataset)
        return RadarDataResponse(
            features=collection.features,
            metadata=self.build_metadata(dataset, fetched, now_ms),
        )

    def resolve_dataset(self, fetched: FetchResult) -> RadarDataset:
        """Decode raw bytes, or pass a fallback dataset straight through."""
        if fetched.has_payload:
            decoded = self.decoder.decode(fetched.data)
            if decoded.failure:
                logger.warning("Decoder fell back", extra={"failure": decoded.failure.value})
            return decoded.dataset
        if fetched.failure:
            logger.info("Serving fallback sample", extra={"failure": fetched.failure.value})
        return fetched.dataset

    def refresh(self, now_ms: int) -> CacheEntry:
        """Run one acquisition and build the entry that replaces the cache."""
        fetched = self.data_source.fetch_latest()
        dataset = self.resolve_dataset(fetched)
        payload = self.build_response(dataset, fetched, now_ms)
        logger.info(
            "Latest file processed",
            extra={
                "file_name": fetched.file_name,
                "url": fetched.url,
                "bytes": len(fetched.data) if fetched.data else 0,
                "points": payload.metadata.total_points,
            },
        )
        return CacheEntry(payload=payload, fetched_at_ms=now_ms)

    def fallback_response(self) -> FallbackResponse:
        """Uncached best-effort body for a failed query."""
        dataset = self.grid_dataset()
        return FallbackResponse(error=FALLBACK_ERROR_MESSAGE, data=to_feature_collection(dataset))

    def query(self) -> QueryResult:
        """Serve the cached payload, refreshing it first when stale."""
        try:
            entry, hit = self.cache.get_or_refresh(self.refresh)
        except Exception:
            logger.exception("Error processing radar data")
            return QueryResult(fallback=self.fallback_response(), failure=FailureKind.HANDLER)
        return QueryResult(payload=entry.payload, cache_hit=hit)
