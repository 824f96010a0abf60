"""Location records supplied by the data-access layer."""
from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from rpg_atlas.models.layout import GridCoordinate


class ExitDirection(str, Enum):
    NORTH = "NORTH"
    NORTHEAST = "NORTHEAST"
    EAST = "EAST"
    SOUTHEAST = "SOUTHEAST"
    SOUTH = "SOUTH"
    SOUTHWEST = "SOUTHWEST"
    WEST = "WEST"
    NORTHWEST = "NORTHWEST"
    UP = "UP"
    DOWN = "DOWN"
    ENTER = "ENTER"
    UNKNOWN = "UNKNOWN"


_SHORT_DIRECTIONS = {
    "N": ExitDirection.NORTH,
    "NE": ExitDirection.NORTHEAST,
    "E": ExitDirection.EAST,
    "SE": ExitDirection.SOUTHEAST,
    "S": ExitDirection.SOUTH,
    "SW": ExitDirection.SOUTHWEST,
    "W": ExitDirection.WEST,
    "NW": ExitDirection.NORTHWEST,
}


class Exit(BaseModel):
    """Directed edge to another location."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    direction: ExitDirection = ExitDirection.UNKNOWN
    target_location_id: str = Field(
        ...,
        validation_alias=AliasChoices("target_location_id", "targetLocationId", "locationId"),
    )

    @field_validator("direction", mode="before")
    @classmethod
    def _normalize_direction(cls, value):
        if value is None:
            return ExitDirection.UNKNOWN
        if isinstance(value, ExitDirection):
            return value
        token = str(value).strip().upper().replace("-", "").replace("_", "").replace(" ", "")
        if token in _SHORT_DIRECTIONS:
            return _SHORT_DIRECTIONS[token]
        try:
            return ExitDirection(token)
        except ValueError:
            return ExitDirection.UNKNOWN


class Location(BaseModel):
    """One map tile as stored by the game server."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    id: str
    name: str = ""
    description: str = Field("", alias="desc")
    grid_x: Optional[int] = Field(None, alias="gridX")
    grid_y: Optional[int] = Field(None, alias="gridY")
    grid_z: Optional[int] = Field(None, alias="gridZ")
    exits: List[Exit] = Field(default_factory=list)

    @field_validator("name", "description", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return "" if value is None else value

    @property
    def stored_coordinate(self) -> Optional[GridCoordinate]:
        if self.grid_x is None or self.grid_y is None:
            return None
        return GridCoordinate(self.grid_x, self.grid_y)

    def exit_toward(self, direction: ExitDirection) -> Optional[Exit]:
        for exit_ in self.exits:
            if exit_.direction == direction:
                return exit_
        return None

    def to_dict(self) -> dict:
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: dict) -> "Location":
        return cls.model_validate(data)
