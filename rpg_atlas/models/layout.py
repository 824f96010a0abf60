"""Grid and normalized layout value types."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict


@dataclass(frozen=True, order=True)
class GridCoordinate:
    """Integer grid cell. +x is east, +y is south."""

    x: int
    y: int

    def shifted(self, dx: int, dy: int) -> "GridCoordinate":
        return GridCoordinate(self.x + dx, self.y + dy)


@dataclass(frozen=True)
class NormalizedPosition:
    x: float
    y: float


@dataclass(frozen=True)
class GridBounds:
    min_x: int = 0
    max_x: int = 0
    min_y: int = 0
    max_y: int = 0
    padding: float = 0.15

    @property
    def width(self) -> int:
        return self.max_x - self.min_x

    @property
    def height(self) -> int:
        return self.max_y - self.min_y


@dataclass(frozen=True)
class LayoutResult:
    positions: Dict[str, NormalizedPosition] = field(default_factory=dict)
    grid_positions: Dict[str, GridCoordinate] = field(default_factory=dict)
    bounds: GridBounds = field(default_factory=GridBounds)

    def to_dict(self) -> Dict:
        return {
            "positions": {loc_id: [pos.x, pos.y] for loc_id, pos in self.positions.items()},
            "grid_positions": {loc_id: [cell.x, cell.y] for loc_id, cell in self.grid_positions.items()},
            "bounds": {
                "min_x": self.bounds.min_x,
                "max_x": self.bounds.max_x,
                "min_y": self.bounds.min_y,
                "max_y": self.bounds.max_y,
                "padding": self.bounds.padding,
            },
        }
