"""Reflectivity color scale shared with the map client."""

from typing import List

from radar_api.domain import LegendBand

# Upper edges of bands 0..6; anything at or above the last edge is band 7.
BAND_EDGES_DBZ = (0.0, 10.0, 20.0, 30.0, 40.0, 50.0, 60.0)

BAND_COLORS = (
    "#000080",  # dark blue
    "#0000FF",
    "#00FFFF",
    "#00FF00",
    "#FFFF00",
    "#FF8000",
    "#FF0000",
    "#800080",  # purple
)


def classify_reflectivity(dbz: float) -> int:
    """Return the legend band index (0-7) for a dBZ value."""
    for index, edge in enumerate(BAND_EDGES_DBZ):
        if dbz < edge:
            return index
    return len(BAND_EDGES_DBZ)


def legend_bands() -> List[LegendBand]:
    """Describe every band with its bounds, color and display label."""
    bands: List[LegendBand] = []
    lower = None
    for index, color in enumerate(BAND_COLORS):
        upper = BAND_EDGES_DBZ[index] if index < len(BAND_EDGES_DBZ) else None
        if lower is None:
            label = f"< {upper:g}"
        elif upper is None:
            label = f"> {lower:g}"
        else:
            label = f"{lower:g}-{upper:g}"
        bands.append(LegendBand(index=index, lower_dbz=lower, upper_dbz=upper, color=color, label=label))
        lower = upper
    return bands
