"""Dataset generators built on the grid and reflectivity model."""
from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, List, Optional

from radar_api.domain import DatasetKind
from radar_api.grid import DEFAULT_STRIDE, MRMS_GRID, GridDescriptor, iter_grid_points
from radar_api.reflectivity import MIN_DBZ, model_time, reflectivity, storm_cells
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="generators")

RANDOM_POINT_COUNT = 1000
RANDOM_LAT_RANGE = (25.0, 50.0)
RANDOM_LON_RANGE = (-125.0, -75.0)
RANDOM_DBZ_RANGE = (-10.0, 60.0)


@dataclass(frozen=True)
class RadarPoint:
    """A single reflectivity observation."""
    longitude: float
    latitude: float
    reflectivity: float  # dBZ
    observed_at: datetime  # timezone-aware


@dataclass
class RadarDataset:
    """Points in generation order plus the generator that produced them."""
    kind: DatasetKind
    points: List[RadarPoint] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.points)


DatasetFactory = Callable[[], RadarDataset]


def generate_grid_dataset(
    *,
    t: Optional[float] = None,
    rng: Optional[random.Random] = None,
    stride: int = DEFAULT_STRIDE,
    grid: GridDescriptor = MRMS_GRID,
    observed_at: Optional[datetime] = None,
) -> RadarDataset:
    """
    Sample the grid and keep points with measurable reflectivity.

    `t` defaults to the model time of `observed_at` (itself defaulting to
    now), so pinning `t` and `rng` gives a repeatable dataset.
    """
    observed_at = observed_at or datetime.now(timezone.utc)
    if t is None:
        t = model_time(observed_at)
    rng = rng or random.Random()

    cells = storm_cells(t)
    points: List[RadarPoint] = []
    for lat, lon in iter_grid_points(grid, stride):
        dbz = reflectivity(lat, lon, t, rng, cells)
        if dbz > MIN_DBZ:
            points.append(RadarPoint(longitude=lon, latitude=lat, reflectivity=dbz, observed_at=observed_at))

    logger.debug("Generated grid dataset", extra={"points": len(points), "stride": stride})
    return RadarDataset(kind=DatasetKind.GRID, points=points)


def _uniform(rng: random.Random, low: float, high: float) -> float:
    """Uniform draw in [low, high); rng.uniform may return `high`."""
    value = low + rng.random() * (high - low)
    # float rounding can still land on `high`
    return min(value, math.nextafter(high, low))


def generate_random_dataset(
    *,
    rng: Optional[random.Random] = None,
    count: int = RANDOM_POINT_COUNT,
    observed_at: Optional[datetime] = None,
) -> RadarDataset:
    """Scatter `count` uniformly random points over the central US."""
    observed_at = observed_at or datetime.now(timezone.utc)
    rng = rng or random.Random()

    points: List[RadarPoint] = []
    for _ in range(count):
        lat = _uniform(rng, *RANDOM_LAT_RANGE)
        lon = _uniform(rng, *RANDOM_LON_RANGE)
        # floor keeps the value one-decimal and below the open upper bound
        dbz = math.floor(_uniform(rng, *RANDOM_DBZ_RANGE) * 10) / 10
        points.append(RadarPoint(longitude=lon, latitude=lat, reflectivity=dbz, observed_at=observed_at))

    logger.debug("Generated random dataset", extra={"points": len(points)})
    return RadarDataset(kind=DatasetKind.RANDOM, points=points)
