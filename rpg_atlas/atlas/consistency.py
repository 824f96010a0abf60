"""Non-fatal checks on location lists before they are laid out."""
from __future__ import annotations

from typing import Any, Dict, List, Sequence

from rpg_atlas.models.layout import GridCoordinate
from rpg_atlas.models.location import ExitDirection, Location


def find_layout_issues(locations: Sequence[Location]) -> List[Dict[str, Any]]:
    issues: List[Dict[str, Any]] = []
    ids = {loc.id for loc in locations}

    seen_ids = set()
    for loc in locations:
        if loc.id in seen_ids:
            issues.append({"kind": "duplicate_id", "location_id": loc.id, "detail": "location id appears twice"})
        seen_ids.add(loc.id)

    stored_at: Dict[GridCoordinate, str] = {}
    for loc in locations:
        seen_directions = set()
        for exit_ in loc.exits:
            if exit_.target_location_id not in ids:
                issues.append(
                    {
                        "kind": "dangling_exit",
                        "location_id": loc.id,
                        "detail": f"{exit_.direction.value} -> {exit_.target_location_id}",
                    }
                )
            if exit_.direction != ExitDirection.UNKNOWN and exit_.direction in seen_directions:
                issues.append(
                    {
                        "kind": "duplicate_direction",
                        "location_id": loc.id,
                        "detail": exit_.direction.value,
                    }
                )
            seen_directions.add(exit_.direction)

        cell = loc.stored_coordinate
        if cell is None:
            continue
        other = stored_at.get(cell)
        if other is not None and other != loc.id:
            issues.append(
                {
                    "kind": "shared_coordinate",
                    "location_id": loc.id,
                    "detail": f"({cell.x}, {cell.y}) also stored by {other}",
                }
            )
        else:
            stored_at[cell] = loc.id
    return issues
