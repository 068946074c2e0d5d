"""Corridor carving between two spaces.

Corridors are rectangular Space segments of a fixed width. Every
segment extends half a corridor width past both centers it joins, so
consecutive segments of an L overlap in a square at the bend.

```
   room A             segment 1 runs at A's center z,
   +-----+            segment 2 runs at B's center x
   |  A  |=======+
   +-----+       ‖
                 ‖
              +--‖--+
              |  B  |
              +-----+
```
"""

from __future__ import annotations

import random

from dungeon_builder.models.floor import Floor
from dungeon_builder.models.spaces import Space, SpaceClass


def horizontal_segment(x1: float, x2: float, z: float, width: float) -> Space:
    """Corridor along x from x1 to x2, centered on z."""
    min_x, max_x = min(x1, x2), max(x1, x2)
    return Space(
        x=min_x - width / 2,
        z=z - width / 2,
        width=max_x - min_x + width,
        depth=width,
        is_corridor=True,
        classification=SpaceClass.CORRIDOR,
    )


def vertical_segment(z1: float, z2: float, x: float, width: float) -> Space:
    """Corridor along z from z1 to z2, centered on x."""
    min_z, max_z = min(z1, z2), max(z1, z2)
    return Space(
        x=x - width / 2,
        z=min_z - width / 2,
        width=width,
        depth=max_z - min_z + width,
        is_corridor=True,
        classification=SpaceClass.CORRIDOR,
    )


def connect_l_shaped(
    floor: Floor,
    room_a: Space,
    room_b: Space,
    width: float,
    rng: random.Random,
) -> list[Space]:
    """Join two rooms with a two-segment L-shaped corridor.

    A coin flip picks which leg is laid first. Horizontal-first runs the
    x leg at A's center z and the z leg at B's center x; vertical-first
    runs the z leg at A's center x and the x leg at B's center z.

    Returns the corridor segments added to the floor.
    """
    ax, az = room_a.center_x, room_a.center_z
    bx, bz = room_b.center_x, room_b.center_z

    if rng.random() < 0.5:
        segments = [
            horizontal_segment(ax, bx, az, width),
            vertical_segment(az, bz, bx, width),
        ]
    else:
        segments = [
            vertical_segment(az, bz, ax, width),
            horizontal_segment(ax, bx, bz, width),
        ]
    return [floor.add_corridor(s) for s in segments]


def _shared_band(a: tuple[float, float], b: tuple[float, float]) -> tuple[float, float] | None:
    start, end = max(a[0], b[0]), min(a[1], b[1])
    if end - start <= 0:
        return None
    return start, end


def connect_straight(floor: Floor, room: Space, alcove: Space, width: float) -> Space:
    """Join a room to an attached alcove with a single straight segment.

    The segment runs along whichever axis separates the two centers more.
    Its centerline sits in the middle of the band both spaces share on
    the other axis, narrowed to that band if needed, so it always
    reaches into both spaces. If the spaces share no band across the
    chosen axis, the other axis is used.
    """
    dx = abs(room.center_x - alcove.center_x)
    dz = abs(room.center_z - alcove.center_z)
    z_band = _shared_band((room.z, room.max_z), (alcove.z, alcove.max_z))
    x_band = _shared_band((room.x, room.max_x), (alcove.x, alcove.max_x))

    horizontal = dx > dz
    if horizontal and z_band is None and x_band is not None:
        horizontal = False
    elif not horizontal and x_band is None and z_band is not None:
        horizontal = True

    if horizontal:
        band = z_band
        if band is None:
            z, seg_width = room.center_z, width
        else:
            z, seg_width = (band[0] + band[1]) / 2, min(width, band[1] - band[0])
        segment = horizontal_segment(room.center_x, alcove.center_x, z, seg_width)
    else:
        band = x_band
        if band is None:
            x, seg_width = room.center_x, width
        else:
            x, seg_width = (band[0] + band[1]) / 2, min(width, band[1] - band[0])
        segment = vertical_segment(room.center_z, alcove.center_z, x, seg_width)
    return floor.add_corridor(segment)
