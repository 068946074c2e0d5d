"""Key and exit placement.

The key goes in a room far from the spawn room's immediate ring, the
exit in the room of its candidate pool farthest from the key. Rules
are tried in priority order:

1. Alcove key (only on a 30% roll when alcoves exist); exit from the
   cardinal-plus, cardinal and radial rooms.
2. Cardinal-plus key; exit from the cardinal-plus, cardinal and radial rooms.
3. Cardinal key; exit from the cardinal and radial rooms.
4. Radial key with at least two radials; exit from the other radials.
5. Fallback: the two mutually farthest non-spawn rooms.

Rules 1-3 fall back to "any other non-spawn room" when their exit pool
is empty.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from dungeon_builder.config import GeneratorSettings
from dungeon_builder.models.floor import Floor
from dungeon_builder.models.spaces import Space, SpaceClass

logger = logging.getLogger(__name__)


class PlacementRule(str, Enum):
    """Which rule chose the key room."""

    ALCOVE = "alcove"
    CARDINAL_PLUS = "cardinal_plus"
    CARDINAL = "cardinal"
    RADIAL = "radial"
    FARTHEST_PAIR = "farthest_pair"


class ObjectivePlacementError(Exception):
    """No valid key/exit room pair exists on the floor."""


@dataclass
class ObjectivePlacement:
    """Result of key/exit placement."""

    key_room: Space
    exit_room: Space
    rule: PlacementRule


def find_farthest_room(origin: Space, candidates: Sequence[Space]) -> Space | None:
    """Candidate whose center is farthest from ``origin``'s center.

    Ties keep the earliest candidate. Returns None for an empty pool.
    """
    if not candidates:
        return None
    best = candidates[0]
    best_distance = 0.0
    for candidate in candidates:
        distance = origin.distance_to(candidate)
        if distance > best_distance:
            best, best_distance = candidate, distance
    return best


def find_farthest_pair(rooms: Sequence[Space]) -> tuple[Space, Space] | None:
    """The two rooms with the greatest center distance, in list order."""
    if len(rooms) < 2:
        return None
    best = (rooms[0], rooms[1])
    best_distance = 0.0
    for i, a in enumerate(rooms):
        for b in rooms[i + 1:]:
            distance = a.distance_to(b)
            if distance > best_distance:
                best, best_distance = (a, b), distance
    return best


def _exclude(rooms: Sequence[Space], *excluded: Space | None) -> list[Space]:
    tags = {r.tag for r in excluded if r is not None}
    return [r for r in rooms if r.tag not in tags]


def choose_key_and_exit(
    rooms: Sequence[Space],
    rng: random.Random,
    alcove_key_chance: float = 0.3,
) -> ObjectivePlacement:
    """Pick the key and exit rooms. Raises ObjectivePlacementError."""
    if len(rooms) < 2:
        raise ObjectivePlacementError(
            f"Not enough rooms to place key and exit (found {len(rooms)})"
        )

    def of(cls: SpaceClass) -> list[Space]:
        return [r for r in rooms if r.classification == cls]

    spawn = next((r for r in rooms if r.classification == SpaceClass.SPAWN), None)
    radial = of(SpaceClass.RADIAL)
    cardinal = of(SpaceClass.CARDINAL)
    cardinal_plus = of(SpaceClass.CARDINAL_PLUS)
    alcoves = of(SpaceClass.ALCOVE)

    def with_pool(key: Space, pool: list[Space], rule: PlacementRule,
                  fallback: list[Space]) -> ObjectivePlacement:
        pool = _exclude(pool, key)
        if not pool:
            pool = _exclude(fallback, key, spawn)
        exit_room = find_farthest_room(key, pool)
        if exit_room is None:
            raise ObjectivePlacementError(
                f"No exit room available for key in {key.tag} ({rule.value} rule)"
            )
        return ObjectivePlacement(key, exit_room, rule)

    if alcoves and rng.random() < alcove_key_chance:
        key = rng.choice(alcoves)
        non_alcove = [r for r in rooms if r.classification != SpaceClass.ALCOVE]
        return with_pool(key, cardinal_plus + cardinal + radial, PlacementRule.ALCOVE, non_alcove)
    if cardinal_plus:
        key = rng.choice(cardinal_plus)
        return with_pool(key, cardinal_plus + cardinal + radial, PlacementRule.CARDINAL_PLUS, list(rooms))
    if cardinal:
        key = rng.choice(cardinal)
        return with_pool(key, cardinal + radial, PlacementRule.CARDINAL, list(rooms))
    if len(radial) >= 2:
        key = rng.choice(radial)
        return with_pool(key, radial, PlacementRule.RADIAL, [])

    pair = find_farthest_pair(_exclude(rooms, spawn))
    if pair is None:
        raise ObjectivePlacementError(
            "Not enough non-spawn rooms to place key and exit"
        )
    return ObjectivePlacement(pair[0], pair[1], PlacementRule.FARTHEST_PAIR)


def place_key_and_exit(
    floor: Floor, settings: GeneratorSettings, rng: random.Random
) -> ObjectivePlacement:
    """Choose the rooms and write key/exit positions onto the floor."""
    placement = choose_key_and_exit(floor.get_rooms(), rng, settings.alcove_key_chance)
    if placement.key_room.tag == placement.exit_room.tag:
        raise ObjectivePlacementError(
            f"Key and exit both landed in {placement.key_room.tag}"
        )
    floor.place_key(placement.key_room, settings.key_float_height)
    floor.place_exit(placement.exit_room)
    logger.info(
        "Key in %s, exit in %s (%s rule, %.1f apart)",
        placement.key_room.tag,
        placement.exit_room.tag,
        placement.rule.value,
        placement.key_room.distance_to(placement.exit_room),
    )
    return placement


def set_spawn_position(floor: Floor, settings: GeneratorSettings) -> None:
    """Put the player above the spawn room's center, or at the default spot."""
    spawn = floor.spawn_room
    if spawn is None:
        default = floor.get_player_spawn_position()
        logger.warning("No spawn room on floor %d; using default spawn", floor.floor_index)
        floor.set_player_spawn_position(default.x, default.y, default.z)
        return
    floor.set_player_spawn_position(
        spawn.center_x, spawn.floor_elevation + settings.spawn_height, spawn.center_z
    )
