"""Floor and ceiling slabs, and the full enclosure pass."""

from __future__ import annotations

import logging

from dungeon_builder.config import GeneratorSettings
from dungeon_builder.enclosure.doorways import Doorway
from dungeon_builder.enclosure.walls import synthesize_walls
from dungeon_builder.models.elements import Slab, SlabType
from dungeon_builder.models.floor import Floor
from dungeon_builder.models.spaces import Space

logger = logging.getLogger(__name__)


def build_slabs(space: Space, settings: GeneratorSettings) -> list[Slab]:
    """A floor slab under the space and a ceiling slab at wall height."""
    common = dict(
        owner=space.tag,
        x=space.x,
        z=space.z,
        width=space.width,
        depth=space.depth,
        thickness=settings.slab_thickness,
    )
    return [
        Slab(slab_type=SlabType.FLOOR, elevation=space.floor_elevation, **common),
        Slab(
            slab_type=SlabType.CEILING,
            elevation=space.floor_elevation + settings.wall_height,
            **common,
        ),
    ]


def synthesize_enclosure(floor: Floor, settings: GeneratorSettings) -> list[Doorway]:
    """Walls, pillars and slabs for every space on the floor.

    Returns the doorways found along the way.
    """
    doorways = synthesize_walls(floor, settings)
    floor.slabs = [slab for space in floor.all_spaces() for slab in build_slabs(space, settings)]
    logger.info(
        "Enclosure: %d walls, %d pillars, %d slabs (%d colliders)",
        len(floor.walls),
        len(floor.pillars),
        len(floor.slabs),
        len(floor.get_colliders()),
    )
    return doorways
