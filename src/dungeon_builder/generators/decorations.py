"""Cosmetic decoration scatter.

Props are positions only; the renderer builds the meshes. Small rooms
get nothing, larger ones one prop per ``decoration_area_per_item``
square units plus one, kept ``decoration_margin`` away from the walls.
"""

from __future__ import annotations

import logging
import random

from dungeon_builder.config import GeneratorSettings
from dungeon_builder.generators.themes import Theme
from dungeon_builder.models.elements import Decoration
from dungeon_builder.models.floor import Floor
from dungeon_builder.models.geometry import Point3D
from dungeon_builder.models.spaces import Space

logger = logging.getLogger(__name__)


def decoration_count(room: Space, settings: GeneratorSettings) -> int:
    """How many props a room gets (0 for rooms below the minimum size)."""
    min_size = settings.decoration_min_room_size
    if room.width < min_size or room.depth < min_size:
        return 0
    return int(room.area // settings.decoration_area_per_item) + 1


def decorate_room(
    room: Space, theme: Theme, settings: GeneratorSettings, rng: random.Random
) -> list[Decoration]:
    margin = settings.decoration_margin
    decorations = []
    for _ in range(decoration_count(room, settings)):
        x = room.x + margin + rng.random() * (room.width - margin * 2)
        z = room.z + margin + rng.random() * (room.depth - margin * 2)
        decorations.append(Decoration(
            kind=rng.choice(theme.decorations),
            room=room.tag,
            position=Point3D(x=x, y=room.floor_elevation, z=z),
        ))
    return decorations


def add_decorations(
    floor: Floor, theme: Theme, settings: GeneratorSettings, rng: random.Random
) -> int:
    """Scatter theme props over every room. Returns how many were placed."""
    placed = []
    for room in floor.get_rooms():
        placed.extend(decorate_room(room, theme, settings, rng))
    floor.decorations.extend(placed)
    logger.debug("Placed %d %s decorations", len(placed), theme.key)
    return len(placed)
