"""Dungeon floor data models."""

from dungeon_builder.models.geometry import Bounds3D, Corner, Direction, Point2D, Point3D
from dungeon_builder.models.spaces import Space, SpaceClass
from dungeon_builder.models.elements import (
    CornerPillar,
    Decoration,
    Slab,
    SlabType,
    WallSegment,
)
from dungeon_builder.models.floor import Floor, SizeParameters

__all__ = [
    "Bounds3D",
    "Corner",
    "Direction",
    "Point2D",
    "Point3D",
    "Space",
    "SpaceClass",
    "CornerPillar",
    "Decoration",
    "Slab",
    "SlabType",
    "WallSegment",
    "Floor",
    "SizeParameters",
]
