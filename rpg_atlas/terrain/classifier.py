"""Keyword rules that turn location text into terrain tags."""
from __future__ import annotations

from functools import lru_cache
from typing import Dict, List
import re

from rpg_atlas.models.location import Location
from rpg_atlas.models.terrain import TerrainProfile, TerrainTag

# Substring keywords per tag. LAKE is matched separately by _is_lake.
TERRAIN_KEYWORDS: Dict[TerrainTag, List[str]] = {
    TerrainTag.ROAD: ["road", "path", "trail", "highway", "street", "lane", "way"],
    TerrainTag.FOREST: ["forest", "tree", "wood", "grove", "copse", "timber", "oak", "pine", "jungle"],
    TerrainTag.STREAM: ["stream", "creek", "brook"],
    TerrainTag.RIVER: ["river"],
    TerrainTag.WATER: ["water", "falls", "fountain"],
    TerrainTag.MOUNTAIN: ["mountain", "peak", "summit", "alpine"],
    TerrainTag.HILLS: ["hill", "cliff", "ridge", "highland", "slope", "knoll", "mound"],
    TerrainTag.GRASS: ["grass", "meadow", "field", "plain", "pasture", "clearing", "prairie"],
    TerrainTag.BUILDING: ["town", "village", "inn", "tavern", "house", "building", "shop", "market", "hamlet"],
    TerrainTag.CASTLE: ["castle", "fortress", "citadel", "stronghold", "keep", "palace"],
    TerrainTag.CHURCH: ["church", "temple", "cathedral", "shrine", "chapel", "monastery", "abbey"],
    TerrainTag.CAVE: ["cave", "cavern", "underground", "tunnel", "grotto", "mine", "dungeon"],
    TerrainTag.DESERT: ["desert", "sand", "dune", "arid", "wasteland", "barren"],
    TerrainTag.COAST: ["coast", "shore", "beach", "sea", "ocean", "bay", "harbor", "cove"],
    TerrainTag.SWAMP: ["swamp", "marsh", "bog", "wetland", "fen", "mire", "bayou"],
    TerrainTag.PORT: ["port", "dock", "pier", "wharf", "marina", "shipyard", "quay"],
    TerrainTag.RUINS: ["ruin", "ancient", "crumbl", "decay", "abandon", "forgotten", "lost"],
}

_LAKE_PHRASE_RE = re.compile(r"\b(the|a|this|in the|on the|of the|into the|across the) (lake|pond)\b")
_LAKE_LITERALS = ["on the lake", "in the lake", "across the lake", "middle of the lake"]
_LAKE_NAME_RE = re.compile(r"\b(lake|pond)")
# "Lake Rainier Pass" names something else; "Lake of Shadows" is still a lake
_LAKE_PROPER_NAME_RE = re.compile(r"^(lake|pond)s? (?!of\b)\w+ \w+")


def _contains_any(text: str, keywords: List[str]) -> bool:
    return any(keyword in text for keyword in keywords)


def _is_lake_name(name: str) -> bool:
    name = name.strip()
    return bool(_LAKE_NAME_RE.search(name)) and not _LAKE_PROPER_NAME_RE.match(name)


def _is_lake(text: str, name: str) -> bool:
    if _is_lake_name(name):
        return True
    if _LAKE_PHRASE_RE.search(text):
        return True
    return _contains_any(text, _LAKE_LITERALS)


@lru_cache(maxsize=4096)
def classify(name: str, description: str) -> TerrainProfile:
    """Return the terrain tags mentioned by a location's description and name."""
    text = f"{description or ''} {name or ''}".lower()
    name_lower = (name or "").lower()

    tags = {tag for tag, keywords in TERRAIN_KEYWORDS.items() if _contains_any(text, keywords)}
    if _is_lake(text, name_lower):
        tags.add(TerrainTag.LAKE)
    return frozenset(tags)


def classify_location(location: Location) -> TerrainProfile:
    return classify(location.name, location.description)
