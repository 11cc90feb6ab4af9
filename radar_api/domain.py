"""Vocabulary and wire schemas for the radar API.

Enums shared by the pipeline plus the Pydantic models that define what the
visualization client receives. Field names on the wire are camelCase; Python
code uses snake_case and relies on the alias generator.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class DatasetKind(str, Enum):
    """Which generator produced a dataset."""
    GRID = "grid"
    RANDOM = "random"


class DataSource(str, Enum):
    """Where a served dataset ultimately came from."""
    MRMS = "MRMS"
    SAMPLE = "Sample"


class FailureKind(str, Enum):
    """Pipeline tier that failed and fell back."""
    ACQUISITION = "acquisition"
    DECODE = "decode"
    HANDLER = "handler"


class _CamelModel(BaseModel):
    """Base model emitting camelCase keys while accepting either spelling."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PointGeometry(BaseModel):
    """GeoJSON point; coordinates are [longitude, latitude]."""
    type: Literal["Point"] = "Point"
    coordinates: Tuple[float, float]


class PointProperties(BaseModel):
    """Per-point values."""
    reflectivity: float
    timestamp: datetime


class RadarFeature(BaseModel):
    """One reflectivity sample as a GeoJSON feature."""
    type: Literal["Feature"] = "Feature"
    geometry: PointGeometry
    properties: PointProperties


class RadarFeatureCollection(BaseModel):
    """GeoJSON FeatureCollection of reflectivity samples."""
    type: Literal["FeatureCollection"] = "FeatureCollection"
    features: List[RadarFeature] = Field(default_factory=list)


class ResponseMetadata(_CamelModel):
    """Provenance and cache timing attached to every successful response."""
    data_source: DataSource
    source_url: str
    source_file_name: str
    generated_at: datetime
    cache_expires_at: datetime
    total_points: int


class RadarDataResponse(RadarFeatureCollection):
    """Body of GET /api/radar-data."""
    metadata: ResponseMetadata


class FallbackResponse(BaseModel):
    """Body returned with HTTP 500 when the pipeline itself fails."""
    error: str
    fallback: bool = True
    data: RadarFeatureCollection


class HealthResponse(BaseModel):
    """Liveness payload."""
    status: str = "OK"
    timestamp: datetime


class LegendBand(_CamelModel):
    """One color band of the reflectivity legend."""
    index: int
    lower_dbz: Optional[float] = None  # None means unbounded below
    upper_dbz: Optional[float] = None  # None means unbounded above
    color: str
    label: str


class LegendResponse(BaseModel):
    """Body of GET /api/legend."""
    unit: str = "dBZ"
    bands: List[LegendBand]
