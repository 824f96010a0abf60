from __future__ import annotations

import pytest

from rpg_atlas.models.terrain import TerrainTag
from rpg_atlas.terrain.classifier import TERRAIN_KEYWORDS, classify


def test_lake_in_a_proper_name_is_not_a_lake():
    tags = classify(name="Lake Rainier Pass", description="A narrow trail near Lake Rainier.")
    assert TerrainTag.LAKE not in tags
    assert TerrainTag.ROAD in tags


def test_named_lake_is_a_lake():
    assert TerrainTag.LAKE in classify(name="Crystal Lake", description="A still lake.")


@pytest.mark.parametrize(
    "name,description",
    [
        ("Mill Pond", "Ducks paddle about."),
        ("Lake Rainier", "Cold and deep."),
        ("Lake of Shadows", "Black water laps at the stones."),
        ("Lakeside Inn", "A warm common room."),
        ("Fishing Spot", "You cast a line into the lake."),
        ("Boat", "A skiff drifts in the middle of the lake."),
        ("Shoreline", "Reeds ring a pond to the east."),
    ],
)
def test_lake_rules(name, description):
    assert TerrainTag.LAKE in classify(name, description)


def test_lake_word_alone_in_description_does_not_tag():
    assert TerrainTag.LAKE not in classify("Ridge", "You can see lakeside cabins below.")


def test_matching_is_case_insensitive():
    tags = classify("OLD CASTLE", "Ancient WALLS above the RIVER")
    assert {TerrainTag.CASTLE, TerrainTag.RUINS, TerrainTag.RIVER} <= tags


def test_name_and_description_both_count():
    tags = classify("Misty Forest", "A quiet clearing.")
    assert TerrainTag.FOREST in tags
    assert TerrainTag.GRASS in tags


def test_substring_matching_is_literal():
    # "way" is a ROAD keyword, so "always" matches too
    assert TerrainTag.ROAD in classify("Hall", "It is always dark here.")


def test_empty_text_has_no_tags():
    assert classify("", "") == frozenset()


@pytest.mark.parametrize("tag", [tag for tag in TERRAIN_KEYWORDS])
def test_every_keyword_list_hits_its_tag(tag):
    for keyword in TERRAIN_KEYWORDS[tag]:
        assert tag in classify("", f"there is a {keyword} here")


def test_generic_water_is_tagged():
    tags = classify("Plaza", "A fountain splashes.")
    assert TerrainTag.WATER in tags
    assert TerrainTag.LAKE not in tags
