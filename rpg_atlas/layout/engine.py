"""Place a location graph on a stable 2D grid.

Stored coordinates are trusted as-is. Everything else is reached by a
breadth-first walk over exits, so a SOUTH exit puts its target one cell south
of the current tile. Cells that are already taken are resolved with a ring
search around the intended cell. Locations that no walk reaches are stacked
in a row below the placed graph.

Placement is fully deterministic: the queue follows input order, exits are
walked in their stored order and rings are scanned in a fixed order.
"""
from __future__ import annotations

from collections import deque
from typing import Dict, List, Optional, Sequence

import structlog

from rpg_atlas.config import AtlasConfig, LayoutSection, default_config
from rpg_atlas.layout.directions import grid_offset
from rpg_atlas.layout.grid import compute_bounds, find_free_cell, normalize_positions
from rpg_atlas.models.layout import GridBounds, GridCoordinate, LayoutResult, NormalizedPosition
from rpg_atlas.models.location import Location

logger = structlog.get_logger()


class _Placement:
    """Grid cells assigned so far, with an occupancy index."""

    def __init__(self, settings: LayoutSection) -> None:
        self.settings = settings
        self.cells: Dict[str, GridCoordinate] = {}
        self._occupants: Dict[GridCoordinate, str] = {}

    def __contains__(self, loc_id: str) -> bool:
        return loc_id in self.cells

    def put(self, loc_id: str, cell: GridCoordinate) -> None:
        self.cells[loc_id] = cell
        self._occupants.setdefault(cell, loc_id)

    def max_y(self) -> int:
        return max((cell.y for cell in self.cells.values()), default=0)

    def free_cell_near(self, target: GridCoordinate, loc_id: str) -> GridCoordinate:
        def _warn_exhausted(candidate: GridCoordinate, fallback: GridCoordinate) -> None:
            logger.warning(
                "Ring search exhausted, using fallback cell",
                location_id=loc_id,
                target=(candidate.x, candidate.y),
                fallback=(fallback.x, fallback.y),
                max_radius=self.settings.max_search_radius,
            )

        return find_free_cell(
            target,
            self._occupants.keys(),
            max_radius=self.settings.max_search_radius,
            fallback_offset=self.settings.fallback_offset,
            on_fallback=_warn_exhausted,
        )


def _seed(locations: List[Location], placement: _Placement) -> List[str]:
    seeds: List[str] = []
    for loc in locations:
        stored = loc.stored_coordinate
        if stored is not None and loc.id not in placement:
            placement.put(loc.id, stored)
            seeds.append(loc.id)
    if not seeds:
        first = locations[0]
        placement.put(first.id, GridCoordinate(0, 0))
        seeds.append(first.id)
    return seeds


def _expand(seeds: List[str], by_id: Dict[str, Location], placement: _Placement) -> None:
    queue = deque(seeds)
    while queue:
        current_id = queue.popleft()
        current = by_id[current_id]
        current_cell = placement.cells[current_id]
        for exit_ in current.exits:
            target_id = exit_.target_location_id
            target = by_id.get(target_id)
            if target is None:
                logger.debug("Skipping exit to unknown location", location_id=current_id, target_id=target_id)
                continue
            if target_id in placement:
                continue
            stored = target.stored_coordinate
            if stored is not None:
                cell = stored
            else:
                dx, dy = grid_offset(exit_.direction)
                candidate = current_cell.shifted(dx, dy)
                cell = placement.free_cell_near(candidate, target_id)
            placement.put(target_id, cell)
            queue.append(target_id)


def _place_disconnected(locations: List[Location], placement: _Placement) -> int:
    unplaced = [loc for loc in locations if loc.id not in placement]
    for index, loc in enumerate(unplaced):
        stored = loc.stored_coordinate
        if stored is not None:
            placement.put(loc.id, stored)
            continue
        start = GridCoordinate(index, placement.max_y() + placement.settings.disconnected_row_gap)
        placement.put(loc.id, placement.free_cell_near(start, loc.id))
    return len(unplaced)


def compute_layout(
    locations: Sequence[Location],
    config: Optional[AtlasConfig] = None,
) -> LayoutResult:
    """Assign every location a grid cell and a normalized [0, 1] position."""
    settings = (config or default_config()).layout
    padding = settings.padding

    if not locations:
        return LayoutResult(bounds=GridBounds(padding=padding))

    if len(locations) == 1:
        only = locations[0]
        cell = only.stored_coordinate or GridCoordinate(0, 0)
        return LayoutResult(
            positions={only.id: NormalizedPosition(0.5, 0.5)},
            grid_positions={only.id: cell},
            bounds=compute_bounds([cell], padding),
        )

    by_id: Dict[str, Location] = {}
    for loc in locations:
        by_id.setdefault(loc.id, loc)

    placement = _Placement(settings)
    unique = list(by_id.values())
    seeds = _seed(unique, placement)
    _expand(seeds, by_id, placement)
    disconnected = _place_disconnected(unique, placement)

    # Positions are reported in input order.
    grid_positions = {loc_id: placement.cells[loc_id] for loc_id in by_id}
    bounds = compute_bounds(grid_positions.values(), padding)
    positions = normalize_positions(grid_positions, bounds)

    logger.debug(
        "Layout computed",
        locations=len(grid_positions),
        seeds=len(seeds),
        disconnected=disconnected,
        bounds=(bounds.min_x, bounds.max_x, bounds.min_y, bounds.max_y),
    )
    return LayoutResult(positions=positions, grid_positions=grid_positions, bounds=bounds)
