"""Scalar elevation from terrain tags."""
from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from rpg_atlas.models.terrain import ElevationValue, TerrainTag

# Applied in order with max(); the first present tag does not stop the pass.
RAISE_PASS: List[Tuple[TerrainTag, float]] = [
    (TerrainTag.MOUNTAIN, 0.9),
    (TerrainTag.HILLS, 0.4),
    (TerrainTag.CASTLE, 0.3),
    (TerrainTag.CHURCH, 0.2),
    (TerrainTag.FOREST, 0.15),
    (TerrainTag.DESERT, 0.1),
    (TerrainTag.GRASS, 0.05),
    (TerrainTag.BUILDING, 0.05),
    (TerrainTag.ROAD, 0.0),
]

# Applied after RAISE_PASS with min() on the same value.
LOWER_PASS: List[Tuple[TerrainTag, float]] = [
    (TerrainTag.SWAMP, -0.1),
    (TerrainTag.COAST, 0.0),
    (TerrainTag.RIVER, -0.2),
    (TerrainTag.STREAM, -0.1),
    (TerrainTag.LAKE, -0.4),
    (TerrainTag.PORT, -0.1),
]

ELEVATION_LABELS: List[Tuple[float, str]] = [
    (0.8, "Mountain Peak"),
    (0.5, "High Hills"),
    (0.3, "Hills"),
    (0.1, "Gentle Rise"),
    (-0.1, "Flat/Sea Level"),
    (-0.3, "Low Ground"),
    (-0.5, "Lake Basin"),
]


def clamp_elevation(value: float) -> ElevationValue:
    return max(-1.0, min(1.0, float(value)))


def elevation(tags: Iterable[TerrainTag], override: Optional[float] = None) -> ElevationValue:
    """Elevation in [-1, 1] for a terrain profile.

    A manual override wins outright and is only clamped. WATER on its own has
    no effect.
    """
    if override is not None:
        return clamp_elevation(override)

    present = set(tags)
    value = 0.0
    for tag, raised in RAISE_PASS:
        if tag in present:
            value = max(value, raised)
    for tag, lowered in LOWER_PASS:
        if tag in present:
            value = min(value, lowered)
    return value


def elevation_label(value: ElevationValue) -> str:
    for threshold, label in ELEVATION_LABELS:
        if value >= threshold:
            return label
    return "Deep Water"
