"""Per-tile neighbor lookups built from a location's own exits."""
from __future__ import annotations

from collections import deque
from typing import Dict, FrozenSet, List, Mapping, Optional, Set, Tuple

from rpg_atlas.layout.directions import compass_direction_of, grid_offset
from rpg_atlas.models.location import ExitDirection, Location
from rpg_atlas.models.terrain import (
    NeighborElevations,
    NeighborRivers,
    PassThroughFeatures,
    TerrainProfile,
    TerrainTag,
)

# Diagonal exits stand in for a cardinal side when no straight exit exists.
CARDINAL_SOURCES: Dict[str, List[ExitDirection]] = {
    "north": [ExitDirection.NORTH, ExitDirection.NORTHEAST, ExitDirection.NORTHWEST],
    "south": [ExitDirection.SOUTH, ExitDirection.SOUTHEAST, ExitDirection.SOUTHWEST],
    "east": [ExitDirection.EAST, ExitDirection.NORTHEAST, ExitDirection.SOUTHEAST],
    "west": [ExitDirection.WEST, ExitDirection.NORTHWEST, ExitDirection.SOUTHWEST],
}

PASS_THROUGH_TAGS = [
    TerrainTag.RIVER,
    TerrainTag.FOREST,
    TerrainTag.MOUNTAIN,
    TerrainTag.HILLS,
    TerrainTag.LAKE,
    TerrainTag.SWAMP,
]

DEFAULT_FEATURE_DEPTH = 4


def cardinal_neighbor_ids(location: Location) -> Dict[str, Optional[str]]:
    result: Dict[str, Optional[str]] = {}
    for side, directions in CARDINAL_SOURCES.items():
        result[side] = None
        for direction in directions:
            exit_ = location.exit_toward(direction)
            if exit_ is not None:
                result[side] = exit_.target_location_id
                break
    return result


def neighbor_elevations(location: Location, elevations: Mapping[str, float]) -> NeighborElevations:
    ids = cardinal_neighbor_ids(location)
    return NeighborElevations(
        **{side: (elevations.get(loc_id) if loc_id is not None else None) for side, loc_id in ids.items()}
    )


def has_river(profile: TerrainProfile) -> bool:
    return TerrainTag.RIVER in profile or TerrainTag.STREAM in profile


def neighbor_rivers(location: Location, profiles: Mapping[str, TerrainProfile]) -> NeighborRivers:
    ids = cardinal_neighbor_ids(location)
    return NeighborRivers(
        **{
            side: bool(loc_id is not None and loc_id in profiles and has_river(profiles[loc_id]))
            for side, loc_id in ids.items()
        }
    )


def _has_feature(profile: TerrainProfile, tag: TerrainTag) -> bool:
    if tag == TerrainTag.RIVER:
        return has_river(profile)
    return tag in profile


def feature_directions(
    start_id: str,
    tag: TerrainTag,
    locations_by_id: Mapping[str, Location],
    profiles: Mapping[str, TerrainProfile],
    max_depth: int = DEFAULT_FEATURE_DEPTH,
) -> FrozenSet[ExitDirection]:
    """Compass directions, within max_depth exits, of tiles carrying tag."""
    start = locations_by_id.get(start_id)
    if start is None:
        return frozenset()

    found: Set[ExitDirection] = set()
    visited = {start_id}
    queue: deque[Tuple[str, int, int, int]] = deque()
    for exit_ in start.exits:
        dx, dy = _step(exit_.direction)
        queue.append((exit_.target_location_id, dx, dy, 1))

    while queue:
        current_id, cx, cy, depth = queue.popleft()
        if current_id in visited:
            continue
        visited.add(current_id)

        if _has_feature(profiles.get(current_id, frozenset()), tag):
            direction = compass_direction_of(cx, cy)
            if direction is not None:
                found.add(direction)

        if depth >= max_depth:
            continue
        current = locations_by_id.get(current_id)
        if current is None:
            continue
        for exit_ in current.exits:
            if exit_.target_location_id not in visited:
                dx, dy = _step(exit_.direction)
                queue.append((exit_.target_location_id, cx + dx, cy + dy, depth + 1))

    return frozenset(found)


def _step(direction: ExitDirection) -> Tuple[int, int]:
    # non-compass exits do not move the running offset
    if direction in (ExitDirection.UP, ExitDirection.DOWN, ExitDirection.ENTER, ExitDirection.UNKNOWN):
        return 0, 0
    return grid_offset(direction)


def pass_through_features(
    location: Location,
    locations_by_id: Mapping[str, Location],
    profiles: Mapping[str, TerrainProfile],
    max_depth: int = DEFAULT_FEATURE_DEPTH,
) -> PassThroughFeatures:
    own = profiles.get(location.id, frozenset())
    directions: Dict[TerrainTag, FrozenSet[ExitDirection]] = {}
    for tag in PASS_THROUGH_TAGS:
        if _has_feature(own, tag):
            continue
        found = feature_directions(location.id, tag, locations_by_id, profiles, max_depth)
        if found:
            directions[tag] = found
    return PassThroughFeatures(directions=directions)
