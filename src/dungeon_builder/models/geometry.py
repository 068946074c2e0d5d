"""Geometric primitives for dungeon floors.

Coordinates follow the 3D convention used by downstream consumers:
x and z are horizontal, y is up. North is -z, south is +z,
west is -x, east is +x.
"""

from __future__ import annotations

import math
from enum import Enum

from pydantic import BaseModel, model_validator


class Point2D(BaseModel):
    """2D point on the horizontal (XZ) plane."""

    x: float
    z: float

    def distance_to(self, other: Point2D) -> float:
        """Euclidean distance to another point."""
        return math.sqrt((self.x - other.x) ** 2 + (self.z - other.z) ** 2)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Point2D):
            return NotImplemented
        return math.isclose(self.x, other.x, abs_tol=1e-6) and math.isclose(
            self.z, other.z, abs_tol=1e-6
        )

    def __hash__(self) -> int:
        return hash((round(self.x, 6), round(self.z, 6)))


class Point3D(BaseModel):
    """3D point (y is up)."""

    x: float
    y: float
    z: float

    def distance_to(self, other: Point3D) -> float:
        """Euclidean distance to another point."""
        return math.sqrt(
            (self.x - other.x) ** 2
            + (self.y - other.y) ** 2
            + (self.z - other.z) ** 2
        )

    def horizontal_distance_to(self, other: Point3D) -> float:
        """Distance on the XZ plane, ignoring height."""
        return math.sqrt((self.x - other.x) ** 2 + (self.z - other.z) ** 2)

    def to_2d(self) -> Point2D:
        return Point2D(x=self.x, z=self.z)


class Bounds3D(BaseModel):
    """Axis-aligned bounding volume, the collider shape handed to physics."""

    min: Point3D
    max: Point3D

    @model_validator(mode="after")
    def min_not_above_max(self) -> Bounds3D:
        if self.min.x > self.max.x or self.min.y > self.max.y or self.min.z > self.max.z:
            raise ValueError(
                f"Bounds min {self.min} must not exceed max {self.max}"
            )
        return self

    @classmethod
    def from_box(
        cls,
        x: float,
        y: float,
        z: float,
        width: float,
        height: float,
        depth: float,
    ) -> Bounds3D:
        """Build bounds from a min corner and an extent along each axis."""
        return cls(
            min=Point3D(x=x, y=y, z=z),
            max=Point3D(x=x + width, y=y + height, z=z + depth),
        )

    @property
    def size(self) -> tuple[float, float, float]:
        return (
            self.max.x - self.min.x,
            self.max.y - self.min.y,
            self.max.z - self.min.z,
        )

    @property
    def center(self) -> Point3D:
        return Point3D(
            x=(self.min.x + self.max.x) / 2,
            y=(self.min.y + self.max.y) / 2,
            z=(self.min.z + self.max.z) / 2,
        )

    def contains_point(self, point: Point3D) -> bool:
        return (
            self.min.x <= point.x <= self.max.x
            and self.min.y <= point.y <= self.max.y
            and self.min.z <= point.z <= self.max.z
        )

    def intersects(self, other: Bounds3D) -> bool:
        """True if the two volumes overlap with positive volume."""
        return (
            self.min.x < other.max.x
            and other.min.x < self.max.x
            and self.min.y < other.max.y
            and other.min.y < self.max.y
            and self.min.z < other.max.z
            and other.min.z < self.max.z
        )


class Direction(str, Enum):
    """Compass side of a rectangular space.

    NORTH/SOUTH edges run along x (their fixed coordinate is z),
    EAST/WEST edges run along z (their fixed coordinate is x).
    """

    NORTH = "north"
    EAST = "east"
    SOUTH = "south"
    WEST = "west"

    @property
    def runs_along_x(self) -> bool:
        """True for edges parallel to the x axis."""
        return self in (Direction.NORTH, Direction.SOUTH)

    @property
    def outward(self) -> int:
        """Sign of the outward normal along the edge's fixed axis."""
        return -1 if self in (Direction.NORTH, Direction.WEST) else 1

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]


_OPPOSITES = {
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
    Direction.EAST: Direction.WEST,
    Direction.WEST: Direction.EAST,
}


class Corner(str, Enum):
    """Corner of a rectangular space, named by its two edges."""

    NORTH_WEST = "north_west"
    NORTH_EAST = "north_east"
    SOUTH_EAST = "south_east"
    SOUTH_WEST = "south_west"

    @property
    def edges(self) -> tuple[Direction, Direction]:
        """The (x-running, z-running) edges that meet at this corner."""
        ns, ew = self.value.split("_")
        return Direction(ns), Direction(ew)
