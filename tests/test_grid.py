from __future__ import annotations

from rpg_atlas.layout.directions import compass_direction_of, direction_from_offset, grid_offset
from rpg_atlas.layout.grid import compute_bounds, find_free_cell, ring_cells, search_free_cell
from rpg_atlas.models.layout import GridCoordinate
from rpg_atlas.models.location import ExitDirection


def make_filled_square(center: GridCoordinate, radius: int) -> set[GridCoordinate]:
    return {
        GridCoordinate(center.x + dx, center.y + dy)
        for dx in range(-radius, radius + 1)
        for dy in range(-radius, radius + 1)
    }


def test_free_target_is_returned_unchanged():
    target = GridCoordinate(2, 3)
    assert find_free_cell(target, set()) == target


def test_ring_scan_order_is_x_major():
    ring = list(ring_cells(GridCoordinate(0, 0), 1))
    assert ring[:3] == [GridCoordinate(-1, -1), GridCoordinate(-1, 0), GridCoordinate(-1, 1)]
    assert ring[3] == GridCoordinate(0, -1)
    assert len(ring) == 8


def test_second_choice_in_first_ring():
    occupied = {GridCoordinate(0, 0), GridCoordinate(-1, -1)}
    assert find_free_cell(GridCoordinate(0, 0), occupied) == GridCoordinate(-1, 0)


def test_moves_to_second_ring_when_first_is_full():
    occupied = make_filled_square(GridCoordinate(0, 0), 1)
    assert find_free_cell(GridCoordinate(0, 0), occupied) == GridCoordinate(-2, -2)


def test_exhausted_search_falls_back_to_offset_cell():
    target = GridCoordinate(4, -1)
    occupied = make_filled_square(target, 10)
    assert search_free_cell(target, occupied) is None
    assert find_free_cell(target, occupied) == GridCoordinate(14, -1)


def test_bounds_of_no_cells():
    bounds = compute_bounds([])
    assert (bounds.min_x, bounds.max_x, bounds.min_y, bounds.max_y) == (0, 0, 0, 0)


def test_direction_tables():
    assert grid_offset(ExitDirection.SOUTH) == (0, 1)
    assert grid_offset(ExitDirection.UNKNOWN) == (0, 1)
    assert grid_offset(ExitDirection.UP) == (0, 0)
    assert direction_from_offset(-1, 1) == ExitDirection.SOUTHWEST
    assert direction_from_offset(2, 0) == ExitDirection.UNKNOWN
    assert compass_direction_of(3, -2) == ExitDirection.NORTHEAST
    assert compass_direction_of(0, 5) == ExitDirection.SOUTH
    assert compass_direction_of(0, 0) is None


def test_fallback_hook_only_fires_when_rings_are_full():
    calls = []
    target = GridCoordinate(0, 0)

    find_free_cell(target, {target}, on_fallback=lambda *args: calls.append(args))
    assert calls == []

    occupied = make_filled_square(target, 2)
    cell = find_free_cell(
        target,
        occupied,
        max_radius=2,
        fallback_offset=3,
        on_fallback=lambda *args: calls.append(args),
    )
    assert cell == GridCoordinate(3, 0)
    assert calls == [(target, GridCoordinate(3, 0))]
