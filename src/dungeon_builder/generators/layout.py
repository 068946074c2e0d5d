"""Radial room layout.

Places the spawn room at the map centroid and up to twelve satellite
rooms around it:

```
              northPlus
                  |
   northwest - north - northeast
                  |
   westPlus - west - SPAWN - east - eastPlus
                  |
   southwest - south - southeast
                  |
              southPlus
```

Radial rooms (N/E/S/W) hang off the spawn room. Cardinal rooms (the
diagonals) and cardinal-plus rooms (twice as far along a radial axis)
hang off one radial room each and only exist if that radial room does.
Each satellite is joined to its parent with an L-shaped corridor.
Afterwards, unconnected room edges may grow an alcove, and every space
is flattened to elevation 0.
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass

from dungeon_builder.config import GeneratorSettings, SizeTemplate
from dungeon_builder.enclosure.doorways import has_opening
from dungeon_builder.generators.corridor import connect_l_shaped, connect_straight
from dungeon_builder.models.floor import Floor
from dungeon_builder.models.geometry import Direction
from dungeon_builder.models.spaces import Space, SpaceClass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Placement:
    """A candidate satellite position."""

    name: str
    dir_x: int
    dir_z: int
    classification: SpaceClass
    tier: int  # spacing multiplier: 1 radial, 2 cardinal, 3 cardinal-plus
    parent: str | None = None  # radial placement this one hangs off


# Evaluation order matters: radials must be rolled before their dependents.
PLACEMENTS: tuple[Placement, ...] = (
    Placement("north", 0, -1, SpaceClass.RADIAL, 1),
    Placement("east", 1, 0, SpaceClass.RADIAL, 1),
    Placement("south", 0, 1, SpaceClass.RADIAL, 1),
    Placement("west", -1, 0, SpaceClass.RADIAL, 1),
    Placement("northeast", 1, -1, SpaceClass.CARDINAL, 2, parent="north"),
    Placement("southeast", 1, 1, SpaceClass.CARDINAL, 2, parent="east"),
    Placement("southwest", -1, 1, SpaceClass.CARDINAL, 2, parent="south"),
    Placement("northwest", -1, -1, SpaceClass.CARDINAL, 2, parent="west"),
    Placement("northPlus", 0, -2, SpaceClass.CARDINAL_PLUS, 3, parent="north"),
    Placement("eastPlus", 2, 0, SpaceClass.CARDINAL_PLUS, 3, parent="east"),
    Placement("southPlus", 0, 2, SpaceClass.CARDINAL_PLUS, 3, parent="south"),
    Placement("westPlus", -2, 0, SpaceClass.CARDINAL_PLUS, 3, parent="west"),
)

RADIAL_NAMES = tuple(p.name for p in PLACEMENTS if p.classification == SpaceClass.RADIAL)
_BY_NAME = {p.name: p for p in PLACEMENTS}

# Alcoves are rolled per side in this order
_ALCOVE_SIDES = (Direction.NORTH, Direction.EAST, Direction.SOUTH, Direction.WEST)


def _sample(low: int, high: int, rng: random.Random) -> int:
    """Integer in [low, high)."""
    return math.floor(low + rng.random() * (high - low))


class RadialLayoutGenerator:
    """Builds the room and corridor graph of one floor.

    All randomness comes from the injected ``rng`` so a seed reproduces
    the whole layout.
    """

    def __init__(self, floor: Floor, settings: GeneratorSettings, rng: random.Random):
        self.floor = floor
        self.settings = settings
        self.rng = rng
        self.placed: dict[str, Space] = {}
        self.center_room: Space | None = None

    def generate(self) -> Space:
        """Run the full layout. Returns the spawn room."""
        center = self.place_center_room()
        self.place_satellites(center)
        self.add_alcoves()
        flatten_elevations(self.floor)
        logger.info(
            "Layout: %d rooms, %d corridors (%s)",
            len(self.floor.rooms),
            len(self.floor.corridors),
            ", ".join(sorted(self.placed)) or "no satellites",
        )
        return center

    # ── Primary placement ─────────────────────────────────────────────

    def place_center_room(self) -> Space:
        size = self.settings.center_room_size
        cx = self.floor.size.width / 2
        cz = self.floor.size.depth / 2
        center = Space(
            x=cx - size / 2,
            z=cz - size / 2,
            width=size,
            depth=size,
            classification=SpaceClass.SPAWN,
        )
        self.center_room = self.floor.add_room(center)
        return center

    def _template(self, classification: SpaceClass) -> SizeTemplate:
        if classification == SpaceClass.RADIAL:
            return self.settings.radial_size
        if classification == SpaceClass.CARDINAL:
            return self.settings.cardinal_size
        return self.settings.cardinal_plus_size

    def _chance(self, classification: SpaceClass) -> float:
        if classification == SpaceClass.RADIAL:
            return self.settings.radial_chance
        if classification == SpaceClass.CARDINAL:
            return self.settings.cardinal_chance
        return self.settings.cardinal_plus_chance

    def _should_spawn(self, placement: Placement) -> bool:
        if placement.parent is not None and placement.parent not in self.placed:
            return False
        return self.rng.random() < self._chance(placement.classification)

    def place_satellites(self, center: Space) -> None:
        """Roll every placement in order, then force a radial room if none spawned."""
        for placement in PLACEMENTS:
            if self._should_spawn(placement):
                self.spawn(placement, center)

        if not any(name in self.placed for name in RADIAL_NAMES):
            forced = _BY_NAME[self.rng.choice(RADIAL_NAMES)]
            logger.info("No radial room sampled; forcing '%s'", forced.name)
            self.spawn(forced, center)

    def spawn(self, placement: Placement, center: Space) -> Space:
        """Create the room for a placement and connect it to its parent."""
        template = self._template(placement.classification)
        width = _sample(template.min_width, template.max_width, self.rng)
        depth = _sample(template.min_depth, template.max_depth, self.rng)

        ring = center.width / 2 + self.settings.room_spacing * placement.tier
        offset_x = placement.dir_x * (ring + width / 2)
        offset_z = placement.dir_z * (ring + depth / 2)
        room = Space(
            x=center.center_x + offset_x - width / 2,
            z=center.center_z + offset_z - depth / 2,
            width=width,
            depth=depth,
            classification=placement.classification,
        )
        self.floor.add_room(room)
        self.placed[placement.name] = room

        parent = center if placement.parent is None else self.placed[placement.parent]
        connect_l_shaped(self.floor, parent, room, self.settings.corridor_width, self.rng)
        return room

    # ── Alcoves ───────────────────────────────────────────────────────

    def add_alcoves(self) -> None:
        """Grow alcoves off the primary rooms' unconnected edges."""
        primary = list(self.floor.rooms)
        for room in primary:
            for side in _ALCOVE_SIDES:
                if has_opening(
                    room, side, self.floor.corridors, self.settings.adjacency_tolerance
                ):
                    continue
                if self.rng.random() < self.settings.alcove_chance:
                    alcove = self.floor.add_room(self.make_alcove(room, side))
                    connect_straight(self.floor, room, alcove, self.settings.corridor_width)

    def make_alcove(self, room: Space, side: Direction) -> Space:
        """An alcove flush against one side of a room, jutting outward.

        Length (along the side) and depth (outward) are fractions of the
        room's longest edge; the alcove slides to a random offset along
        the side without passing its start.
        """
        longest = room.longest_edge
        low, high = self.settings.alcove_length_range
        length = max(1, math.floor(longest * (low + self.rng.random() * (high - low))))
        low, high = self.settings.alcove_depth_range
        depth = max(1, math.floor(longest * (low + self.rng.random() * (high - low))))

        edge_length = room.edge_length(side)
        slack = edge_length - length
        offset = max(0, min(slack, math.floor(self.rng.random() * slack)))

        if side == Direction.NORTH:
            x, z, w, d = room.x + offset, room.z - depth, length, depth
        elif side == Direction.SOUTH:
            x, z, w, d = room.x + offset, room.max_z, length, depth
        elif side == Direction.EAST:
            x, z, w, d = room.max_x, room.z + offset, depth, length
        else:
            x, z, w, d = room.x - depth, room.z + offset, depth, length

        return Space(x=x, z=z, width=w, depth=d, classification=SpaceClass.ALCOVE)


def flatten_elevations(floor: Floor) -> None:
    """Force every room and corridor to elevation 0, no slopes."""
    for room in floor.rooms:
        room.set_floor_elevation(0.0)
    for corridor in floor.corridors:
        corridor.set_floor_elevation(0.0)
        corridor.is_sloped = False


def generate_layout(floor: Floor, settings: GeneratorSettings, rng: random.Random) -> Space:
    """Generate rooms and corridors on an empty floor. Returns the spawn room."""
    return RadialLayoutGenerator(floor, settings, rng).generate()
