"""Grid helpers: free-cell search, bounds and normalization."""
from __future__ import annotations

from typing import AbstractSet, Callable, Dict, Iterable, Iterator, Optional

from rpg_atlas.models.layout import GridBounds, GridCoordinate, NormalizedPosition

DEFAULT_PADDING = 0.15
MAX_SEARCH_RADIUS = 10
FALLBACK_OFFSET = 10


def ring_cells(center: GridCoordinate, radius: int) -> Iterator[GridCoordinate]:
    """Cells at Chebyshev distance `radius`, x-major then y ascending."""
    for dx in range(-radius, radius + 1):
        for dy in range(-radius, radius + 1):
            if abs(dx) == radius or abs(dy) == radius:
                yield center.shifted(dx, dy)


def search_free_cell(
    target: GridCoordinate,
    occupied: AbstractSet[GridCoordinate],
    *,
    max_radius: int = MAX_SEARCH_RADIUS,
) -> Optional[GridCoordinate]:
    """First free cell at or around target, or None when every ring is full."""
    if target not in occupied:
        return target
    for radius in range(1, max_radius + 1):
        for cell in ring_cells(target, radius):
            if cell not in occupied:
                return cell
    return None


def find_free_cell(
    target: GridCoordinate,
    occupied: AbstractSet[GridCoordinate],
    *,
    max_radius: int = MAX_SEARCH_RADIUS,
    fallback_offset: int = FALLBACK_OFFSET,
    on_fallback: Optional[Callable[[GridCoordinate, GridCoordinate], None]] = None,
) -> GridCoordinate:
    """Free cell for target; when every ring is full, the cell fallback_offset east.

    on_fallback(target, fallback) is called only in the exhausted case.
    """
    cell = search_free_cell(target, occupied, max_radius=max_radius)
    if cell is not None:
        return cell
    fallback = target.shifted(fallback_offset, 0)
    if on_fallback is not None:
        on_fallback(target, fallback)
    return fallback


def compute_bounds(cells: Iterable[GridCoordinate], padding: float = DEFAULT_PADDING) -> GridBounds:
    cells = list(cells)
    if not cells:
        return GridBounds(padding=padding)
    return GridBounds(
        min_x=min(cell.x for cell in cells),
        max_x=max(cell.x for cell in cells),
        min_y=min(cell.y for cell in cells),
        max_y=max(cell.y for cell in cells),
        padding=padding,
    )


def _normalize_axis(value: int, low: int, high: int, padding: float) -> float:
    span = high - low
    if span == 0:
        return 0.5
    return padding + (1.0 - 2.0 * padding) * (value - low) / span


def normalize_positions(
    grid_positions: Dict[str, GridCoordinate], bounds: GridBounds
) -> Dict[str, NormalizedPosition]:
    return {
        loc_id: NormalizedPosition(
            x=_normalize_axis(cell.x, bounds.min_x, bounds.max_x, bounds.padding),
            y=_normalize_axis(cell.y, bounds.min_y, bounds.max_y, bounds.padding),
        )
        for loc_id, cell in grid_positions.items()
    }
