"""Exit direction to grid offset tables."""
from __future__ import annotations

from typing import Dict, Tuple

from rpg_atlas.models.location import ExitDirection

GRID_OFFSETS: Dict[ExitDirection, Tuple[int, int]] = {
    ExitDirection.NORTH: (0, -1),
    ExitDirection.NORTHEAST: (1, -1),
    ExitDirection.EAST: (1, 0),
    ExitDirection.SOUTHEAST: (1, 1),
    ExitDirection.SOUTH: (0, 1),
    ExitDirection.SOUTHWEST: (-1, 1),
    ExitDirection.WEST: (-1, 0),
    ExitDirection.NORTHWEST: (-1, -1),
    # vertical and portal exits share the cell; collision search moves them aside
    ExitDirection.UP: (0, 0),
    ExitDirection.DOWN: (0, 0),
    ExitDirection.ENTER: (0, 0),
    ExitDirection.UNKNOWN: (0, 1),
}

COMPASS_DIRECTIONS = [
    ExitDirection.NORTH,
    ExitDirection.NORTHEAST,
    ExitDirection.EAST,
    ExitDirection.SOUTHEAST,
    ExitDirection.SOUTH,
    ExitDirection.SOUTHWEST,
    ExitDirection.WEST,
    ExitDirection.NORTHWEST,
]

_OFFSET_TO_DIRECTION: Dict[Tuple[int, int], ExitDirection] = {
    GRID_OFFSETS[direction]: direction for direction in COMPASS_DIRECTIONS
}


def grid_offset(direction: ExitDirection) -> Tuple[int, int]:
    return GRID_OFFSETS.get(direction, GRID_OFFSETS[ExitDirection.UNKNOWN])


def direction_from_offset(dx: int, dy: int) -> ExitDirection:
    return _OFFSET_TO_DIRECTION.get((dx, dy), ExitDirection.UNKNOWN)


def compass_direction_of(dx: int, dy: int) -> ExitDirection | None:
    """General compass heading of an arbitrary offset, None for (0, 0)."""
    if dx == 0 and dy == 0:
        return None
    sign_x = (dx > 0) - (dx < 0)
    sign_y = (dy > 0) - (dy < 0)
    return _OFFSET_TO_DIRECTION[(sign_x, sign_y)]
