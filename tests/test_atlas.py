from __future__ import annotations

import json

from structlog.testing import capture_logs

from rpg_atlas.atlas.builder import AtlasCache, build_atlas, content_digest
from rpg_atlas.atlas.consistency import find_layout_issues
from rpg_atlas.config import default_config
from rpg_atlas.models.location import Location
from rpg_atlas.models.terrain import TerrainTag


def make_valley() -> list[Location]:
    return [
        Location.from_dict(
            {
                "id": "peak",
                "name": "Frostfang Summit",
                "desc": "Wind howls across the bare rock.",
                "gridX": 0,
                "gridY": 0,
                "exits": [{"direction": "SOUTH", "targetLocationId": "ford"}],
            }
        ),
        Location.from_dict(
            {
                "id": "ford",
                "name": "Stony Ford",
                "desc": "A cold river crosses the old road.",
                "exits": [
                    {"direction": "NORTH", "targetLocationId": "peak"},
                    {"direction": "SOUTH", "targetLocationId": "lake"},
                ],
            }
        ),
        Location.from_dict(
            {
                "id": "lake",
                "name": "Mirror Lake",
                "desc": "Still water reflects the sky.",
                "exits": [{"direction": "NORTH", "targetLocationId": "ford"}],
            }
        ),
    ]


def test_build_atlas_combines_terrain_and_layout():
    atlas = build_atlas(make_valley())
    assert set(atlas.tiles) == {"peak", "ford", "lake"}
    assert atlas.layout.grid_positions["lake"].y == 2

    peak = atlas.tiles["peak"]
    assert TerrainTag.MOUNTAIN in peak.terrain
    assert peak.elevation == 0.9
    assert peak.elevation_label == "Mountain Peak"

    ford = atlas.tiles["ford"]
    assert TerrainTag.RIVER in ford.terrain
    assert ford.neighbor_elevations.north == 0.9
    assert ford.neighbor_elevations.south == -0.4
    # downhill is toward the lake
    assert ford.flow.y > 0

    lake = atlas.tiles["lake"]
    assert lake.neighbor_rivers.north is True
    # the ford above is higher, so the lake drains south
    assert lake.flow.y == 1.0


def test_elevation_override_applies_per_location():
    atlas = build_atlas(make_valley(), elevation_overrides={"ford": 0.25})
    assert atlas.tiles["ford"].elevation == 0.25
    assert atlas.tiles["lake"].neighbor_elevations.north == 0.25


def test_atlas_dict_is_json_ready():
    data = build_atlas(make_valley(), version=3).to_dict()
    text = json.dumps(data)
    assert '"version": 3' in text
    assert data["tiles"]["ford"]["terrain"] == sorted(data["tiles"]["ford"]["terrain"])
    assert data["positions"]["peak"] == [0.5, 0.15]
    assert set(data["bounds"]) == {"min_x", "max_x", "min_y", "max_y", "padding"}


def test_empty_atlas():
    atlas = build_atlas([])
    assert atlas.tiles == {}
    assert atlas.layout.positions == {}


def test_cache_returns_same_atlas_until_version_bumps():
    cache = AtlasCache(max_entries=4)
    locs = make_valley()
    first = cache.get(locs, version=1)
    assert cache.get(make_valley(), version=1) is first
    bumped = cache.get(locs, version=2)
    assert bumped is not first
    assert bumped.version == 2
    assert len(cache) == 2


def test_cache_evicts_oldest_entry():
    cache = AtlasCache.from_config(default_config())
    small = AtlasCache(max_entries=1)
    locs = make_valley()
    small.get(locs, version=1)
    small.get(locs, version=2)
    assert len(small) == 1
    assert cache.max_entries == 32


def test_digest_tracks_order_and_overrides():
    locs = make_valley()
    assert content_digest(locs) == content_digest(make_valley())
    assert content_digest(locs) != content_digest(list(reversed(locs)))
    assert content_digest(locs) != content_digest(locs, {"peak": 0.1})


def test_find_layout_issues_reports_without_raising():
    locs = [
        Location(id="a", exits=[{"direction": "N", "target_location_id": "b"}, {"direction": "N", "target_location_id": "c"}]),
        Location(id="b", grid_x=1, grid_y=1),
        Location(id="c", grid_x=1, grid_y=1, exits=[{"direction": "E", "target_location_id": "nowhere"}]),
        Location(id="b"),
    ]
    kinds = sorted(issue["kind"] for issue in find_layout_issues(locs))
    assert kinds == ["dangling_exit", "duplicate_direction", "duplicate_id", "shared_coordinate"]


def test_build_atlas_logs_data_issues():
    locs = [Location(id="a", exits=[{"direction": "EAST", "target_location_id": "gone"}])]
    with capture_logs() as logs:
        build_atlas(locs)
    warnings = [entry for entry in logs if entry["log_level"] == "warning"]
    assert warnings[0]["kind"] == "dangling_exit"
    assert warnings[0]["location_id"] == "a"
