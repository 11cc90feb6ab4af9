"""Static description of the MRMS reflectivity grid and how it is sampled."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Tuple


@dataclass(frozen=True)
class GridDescriptor:
    """Regular lat/lon lattice; first point is the north-west corner."""
    nx: int
    ny: int
    dx: float  # degrees per cell, eastward
    dy: float  # degrees per cell, southward
    la1: float
    lo1: float
    la2: float
    lo2: float

    @property
    def bounding_box(self) -> Tuple[float, float, float, float]:
        """Return (min_lat, max_lat, min_lon, max_lon)."""
        return (
            min(self.la1, self.la2),
            max(self.la1, self.la2),
            min(self.lo1, self.lo2),
            max(self.lo1, self.lo2),
        )

    def contains(self, lat: float, lon: float) -> bool:
        """True when the point lies inside the closed bounding box."""
        min_lat, max_lat, min_lon, max_lon = self.bounding_box
        return min_lat <= lat <= max_lat and min_lon <= lon <= max_lon


# Approximate CONUS grid for MRMS products.
MRMS_GRID = GridDescriptor(
    nx=3500,
    ny=700,
    dx=0.01,
    dy=0.01,
    la1=54.0,
    lo1=-130.0,
    la2=20.0,
    lo2=-60.0,
)

DEFAULT_STRIDE = 10


def iter_grid_points(
    grid: GridDescriptor = MRMS_GRID,
    stride: int = DEFAULT_STRIDE,
) -> Iterator[Tuple[float, float]]:
    """
    Yield (lat, lon) for every `stride`-th row and column of the grid.

    Rows walk south from `la1`, columns walk east from `lo1`. Points that fall
    outside the grid's bounding box are skipped.
    """
    if stride < 1:
        raise ValueError(f"stride must be >= 1, got {stride}")

    for y in range(0, grid.ny, stride):
        lat = grid.la1 - y * grid.dy
        for x in range(0, grid.nx, stride):
            lon = grid.lo1 + x * grid.dx
            if not grid.contains(lat, lon):
                continue
            yield lat, lon
