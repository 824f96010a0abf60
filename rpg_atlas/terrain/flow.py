"""Downhill flow direction for water tiles."""
from __future__ import annotations

import math
from typing import Optional

from rpg_atlas.models.terrain import FlowVector, NeighborElevations

MIN_FLOW_MAGNITUDE = 0.01
DEFAULT_FLOW = FlowVector(0.0, 1.0)


def _axis_gradient(own: float, low_side: Optional[float], high_side: Optional[float]) -> float:
    # low_side is west/north, high_side is east/south
    if low_side is not None and high_side is not None:
        return (high_side - low_side) / 2.0
    if high_side is not None:
        return high_side - own
    if low_side is not None:
        return own - low_side
    return 0.0


def flow_direction(elevation: float, neighbors: Optional[NeighborElevations] = None) -> FlowVector:
    """Unit vector pointing downhill, defaulting to south on flat ground."""
    if neighbors is None:
        neighbors = NeighborElevations()
    gradient_x = _axis_gradient(elevation, neighbors.west, neighbors.east)
    gradient_y = _axis_gradient(elevation, neighbors.north, neighbors.south)

    dx, dy = -gradient_x, -gradient_y
    magnitude = math.hypot(dx, dy)
    if magnitude < MIN_FLOW_MAGNITUDE:
        return DEFAULT_FLOW
    return FlowVector(dx / magnitude, dy / magnitude)
