"""Terrain value types derived per tile."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Optional

from rpg_atlas.models.location import ExitDirection


class TerrainTag(str, Enum):
    ROAD = "ROAD"
    FOREST = "FOREST"
    STREAM = "STREAM"
    RIVER = "RIVER"
    LAKE = "LAKE"
    WATER = "WATER"
    MOUNTAIN = "MOUNTAIN"
    HILLS = "HILLS"
    GRASS = "GRASS"
    BUILDING = "BUILDING"
    CASTLE = "CASTLE"
    CHURCH = "CHURCH"
    CAVE = "CAVE"
    DESERT = "DESERT"
    COAST = "COAST"
    SWAMP = "SWAMP"
    PORT = "PORT"
    RUINS = "RUINS"


TerrainProfile = FrozenSet[TerrainTag]

# -1 deepest water, 0 sea level, 1 mountain peak
ElevationValue = float


@dataclass(frozen=True)
class NeighborElevations:
    north: Optional[float] = None
    south: Optional[float] = None
    east: Optional[float] = None
    west: Optional[float] = None


@dataclass(frozen=True)
class NeighborRivers:
    north: bool = False
    south: bool = False
    east: bool = False
    west: bool = False

    def any(self) -> bool:
        return self.north or self.south or self.east or self.west


@dataclass(frozen=True)
class FlowVector:
    """Unit downhill direction; +x east, +y south."""

    x: float
    y: float


@dataclass(frozen=True)
class PassThroughFeatures:
    """Directions in which a feature continues beyond a tile that lacks it."""

    directions: Dict[TerrainTag, FrozenSet[ExitDirection]] = field(default_factory=dict)

    def directions_for(self, tag: TerrainTag) -> FrozenSet[ExitDirection]:
        return self.directions.get(tag, frozenset())

    def has_pass_through(self, tag: TerrainTag) -> bool:
        return len(self.directions_for(tag)) >= 2
