"""Shared dataclasses and lightweight types used across modules."""

from dataclasses import dataclass

from radar_api.domain import RadarDataResponse


@dataclass(frozen=True)
class CacheEntry:
    """Response payload with the epoch-millisecond time it was produced."""
    payload: RadarDataResponse
    fetched_at_ms: int
