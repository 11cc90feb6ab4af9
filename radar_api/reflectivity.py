"""Procedural reflectivity field with drifting storm cells.

The field stands in for decoded MRMS values. It is a pure function of
position, the time parameter `t` and whatever the noise source returns, so
callers that pin both get repeatable output.
"""
from __future__ import annotations

import math
import random
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import List, Sequence

CLEAR_AIR_DBZ = -25.0
MIN_DBZ = -10.0
MAX_DBZ = 70.0
NOISE_AMPLITUDE = 7.5

# Epoch milliseconds are divided by this to get the model time parameter.
TIME_SCALE_MS = 1_000_000


class StormCategory(str, Enum):
    """Kinds of convective/stratiform cells the model knows about."""
    SUPERCELL = "supercell"
    THUNDERSTORM = "thunderstorm"
    RAIN = "rain"
    SQUALL = "squall"


PEAK_DBZ = {
    StormCategory.SUPERCELL: 65.0,
    StormCategory.THUNDERSTORM: 45.0,
    StormCategory.SQUALL: 35.0,
    StormCategory.RAIN: 25.0,
}


@dataclass(frozen=True)
class StormCell:
    """A storm at one instant; rebuilt for every `t`."""
    center_lat: float
    center_lon: float
    intensity: float
    size: float  # radius in degrees
    category: StormCategory

    def contribution(self, lat: float, lon: float) -> float:
        """dBZ this cell adds at (lat, lon); zero outside its radius."""
        dist = math.hypot(lat - self.center_lat, lon - self.center_lon)
        if dist >= self.size:
            return 0.0
        falloff = (self.size - dist) / self.size
        return falloff * PEAK_DBZ[self.category] * self.intensity


@dataclass(frozen=True)
class _StormTrack:
    anchor_lat: float
    anchor_lon: float
    amplitude: float
    frequency: float
    intensity: float
    size: float
    category: StormCategory

    def at(self, t: float) -> StormCell:
        phase = t * self.frequency
        return StormCell(
            center_lat=self.anchor_lat + math.sin(phase) * self.amplitude,
            center_lon=self.anchor_lon + math.cos(phase) * self.amplitude,
            intensity=self.intensity,
            size=self.size,
            category=self.category,
        )


STORM_TRACKS = (
    _StormTrack(35.0, -95.0, 4.0, 1.0, 1.0, 3.5, StormCategory.SUPERCELL),
    _StormTrack(40.0, -80.0, 2.5, 0.7, 0.7, 2.5, StormCategory.THUNDERSTORM),
    _StormTrack(28.0, -100.0, 3.0, 1.3, 0.5, 4.0, StormCategory.RAIN),
    _StormTrack(45.0, -70.0, 1.5, 0.5, 0.8, 2.0, StormCategory.SQUALL),
)


def model_time(now: datetime) -> float:
    """Convert a wall-clock instant into the model's time parameter."""
    return now.timestamp() * 1000 / TIME_SCALE_MS


def storm_cells(t: float) -> List[StormCell]:
    """Positions of every tracked storm at time `t`."""
    return [track.at(t) for track in STORM_TRACKS]


def _in_open_box(lat: float, lon: float, lat_min: float, lat_max: float,
                 lon_min: float, lon_max: float) -> bool:
    return lat_min < lat < lat_max and lon_min < lon < lon_max


def frontal_perturbation(lat: float, lon: float) -> float:
    """Two crossed sinusoidal bands; zero outside the frontal region."""
    if not _in_open_box(lat, lon, 25, 50, -125, -65):
        return 0.0
    front1 = math.sin((lat - 30) * 0.2) * math.cos((lon + 100) * 0.15) * 8
    front2 = math.sin((lat - 40) * 0.15) * math.cos((lon + 80) * 0.2) * 6
    return front1 + front2


def regional_bonus(lat: float, lon: float) -> float:
    """Fixed orographic (mountain) and coastal enhancements."""
    bonus = 0.0
    if _in_open_box(lat, lon, 35, 45, -120, -110):
        bonus += 5.0
    if _in_open_box(lat, lon, 25, 35, -85, -75):
        bonus += 3.0
    return bonus


def clamp_dbz(value: float) -> float:
    """Clamp to the displayable dBZ range and round to one decimal, halves up."""
    return math.floor(max(MIN_DBZ, min(MAX_DBZ, value)) * 10 + 0.5) / 10


def reflectivity(
    lat: float,
    lon: float,
    t: float,
    rng: random.Random | None = None,
    cells: Sequence[StormCell] | None = None,
) -> float:
    """
    Simulated reflectivity in dBZ at (lat, lon) for model time `t`.

    Pass `cells` (from `storm_cells(t)`) when evaluating many points at the
    same instant.
    """
    rng = rng or random
    if cells is None:
        cells = storm_cells(t)
    value = CLEAR_AIR_DBZ
    for cell in cells:
        value += cell.contribution(lat, lon)
    value += frontal_perturbation(lat, lon)
    value += regional_bonus(lat, lon)
    value += rng.random() * (2 * NOISE_AMPLITUDE) - NOISE_AMPLITUDE
    return clamp_dbz(value)
