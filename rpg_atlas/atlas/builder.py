"""Combine layout and terrain into the per-tile data a renderer draws."""
from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple
import hashlib
import json
import threading

import structlog

from rpg_atlas.atlas.consistency import find_layout_issues
from rpg_atlas.config import AtlasConfig, default_config
from rpg_atlas.layout.engine import compute_layout
from rpg_atlas.models.layout import LayoutResult
from rpg_atlas.models.location import Location
from rpg_atlas.models.terrain import (
    FlowVector,
    NeighborElevations,
    NeighborRivers,
    PassThroughFeatures,
    TerrainProfile,
)
from rpg_atlas.terrain.classifier import classify_location
from rpg_atlas.terrain.elevation import elevation, elevation_label
from rpg_atlas.terrain.flow import flow_direction
from rpg_atlas.terrain.neighbors import (
    neighbor_elevations,
    neighbor_rivers,
    pass_through_features,
)

logger = structlog.get_logger()


@dataclass(frozen=True)
class AtlasTile:
    location_id: str
    terrain: TerrainProfile
    elevation: float
    elevation_label: str
    flow: FlowVector
    neighbor_elevations: NeighborElevations
    neighbor_rivers: NeighborRivers
    pass_through: PassThroughFeatures

    def to_dict(self) -> Dict[str, Any]:
        return {
            "location_id": self.location_id,
            "terrain": sorted(tag.value for tag in self.terrain),
            "elevation": self.elevation,
            "elevation_label": self.elevation_label,
            "flow": [self.flow.x, self.flow.y],
            "neighbor_elevations": {
                "north": self.neighbor_elevations.north,
                "south": self.neighbor_elevations.south,
                "east": self.neighbor_elevations.east,
                "west": self.neighbor_elevations.west,
            },
            "neighbor_rivers": {
                "north": self.neighbor_rivers.north,
                "south": self.neighbor_rivers.south,
                "east": self.neighbor_rivers.east,
                "west": self.neighbor_rivers.west,
            },
            "pass_through": {
                tag.value: sorted(direction.value for direction in directions)
                for tag, directions in sorted(self.pass_through.directions.items(), key=lambda item: item[0].value)
            },
        }


@dataclass(frozen=True)
class Atlas:
    layout: LayoutResult
    tiles: Dict[str, AtlasTile] = field(default_factory=dict)
    version: int = 0

    def to_dict(self) -> Dict[str, Any]:
        data = self.layout.to_dict()
        data["version"] = self.version
        data["tiles"] = {loc_id: tile.to_dict() for loc_id, tile in self.tiles.items()}
        return data


def build_atlas(
    locations: Sequence[Location],
    *,
    elevation_overrides: Optional[Mapping[str, float]] = None,
    config: Optional[AtlasConfig] = None,
    version: int = 0,
) -> Atlas:
    cfg = config or default_config()
    overrides = elevation_overrides or {}

    for issue in find_layout_issues(locations):
        logger.warning("Location data issue", **issue)

    by_id: Dict[str, Location] = {}
    for loc in locations:
        by_id.setdefault(loc.id, loc)

    profiles = {loc_id: classify_location(loc) for loc_id, loc in by_id.items()}
    elevations = {loc_id: elevation(profiles[loc_id], overrides.get(loc_id)) for loc_id in by_id}

    tiles: Dict[str, AtlasTile] = {}
    for loc_id, loc in by_id.items():
        around = neighbor_elevations(loc, elevations)
        tiles[loc_id] = AtlasTile(
            location_id=loc_id,
            terrain=profiles[loc_id],
            elevation=elevations[loc_id],
            elevation_label=elevation_label(elevations[loc_id]),
            flow=flow_direction(elevations[loc_id], around),
            neighbor_elevations=around,
            neighbor_rivers=neighbor_rivers(loc, profiles),
            pass_through=pass_through_features(loc, by_id, profiles, cfg.terrain.pass_through_depth),
        )

    layout = compute_layout(list(by_id.values()), cfg)
    logger.info("Atlas built", locations=len(tiles), version=version)
    return Atlas(layout=layout, tiles=tiles, version=version)


def content_digest(
    locations: Sequence[Location],
    elevation_overrides: Optional[Mapping[str, float]] = None,
) -> str:
    """Stable digest of the ordered location records and overrides."""
    payload = {
        "locations": [loc.model_dump(mode="json") for loc in locations],
        "overrides": sorted((elevation_overrides or {}).items()),
    }
    text = json.dumps(payload, sort_keys=True, separators=(",", ":"))
    return hashlib.sha1(text.encode("utf-8")).hexdigest()


class AtlasCache:
    """Memoizes atlases by (caller version, content digest).

    The caller owns `version` and bumps it to force a rebuild after an edit.
    """

    def __init__(self, max_entries: int = 32, config: Optional[AtlasConfig] = None) -> None:
        self.config = config or default_config()
        self.max_entries = max(1, max_entries)
        self._entries: "OrderedDict[Tuple[int, str], Atlas]" = OrderedDict()
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: AtlasConfig) -> "AtlasCache":
        return cls(max_entries=config.cache.max_entries, config=config)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get(
        self,
        locations: Sequence[Location],
        *,
        version: int = 0,
        elevation_overrides: Optional[Mapping[str, float]] = None,
    ) -> Atlas:
        key = (version, content_digest(locations, elevation_overrides))
        with self._lock:
            cached = self._entries.get(key)
            if cached is not None:
                self._entries.move_to_end(key)
                logger.debug("Atlas cache hit", version=version, digest=key[1][:8])
                return cached

        atlas = build_atlas(
            locations,
            elevation_overrides=elevation_overrides,
            config=self.config,
            version=version,
        )
        with self._lock:
            self._entries[key] = atlas
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)
        return atlas

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
