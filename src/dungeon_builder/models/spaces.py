"""Space models: rooms, corridor segments and their classification.

A Space is an axis-aligned rectangle on the XZ plane. Rooms and
corridors share the same model; corridors are flagged with
``is_corridor`` and classified as ``SpaceClass.CORRIDOR``.

Bounds are fixed at construction. Only the floor elevation (and the
sloped flag of corridors) may be normalized afterwards.
"""

from __future__ import annotations

import math
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from dungeon_builder.models.geometry import Corner, Direction, Point2D, Point3D


class SpaceClass(str, Enum):
    """Role of a space in the radial layout.

    SPAWN: the center room the player starts in
    RADIAL: first ring, attached directly to the spawn room
    CARDINAL: diagonal rooms attached to a radial room
    CARDINAL_PLUS: outer rooms further along a radial axis
    ALCOVE: small dead-end room off an unconnected room edge
    CORRIDOR: corridor segment
    NORMAL: unclassified room
    """

    SPAWN = "spawn"
    RADIAL = "radial"
    CARDINAL = "cardinal"
    CARDINAL_PLUS = "cardinal_plus"
    ALCOVE = "alcove"
    CORRIDOR = "corridor"
    NORMAL = "normal"


_FIXED_BOUNDS = frozenset({"x", "z", "width", "depth"})


class Space(BaseModel):
    """A rectangular room or corridor segment.

    (x, z) is the north-west corner; the space covers
    [x, x + width] × [z, z + depth].
    """

    model_config = ConfigDict(validate_assignment=True)

    tag: str = Field(default="", description="Short label, e.g. 'R1' or 'C3'")
    x: float
    z: float
    width: float = Field(gt=0, description="Extent along x")
    depth: float = Field(gt=0, description="Extent along z")
    floor_elevation: float = 0.0
    is_corridor: bool = False
    is_sloped: bool = False
    classification: SpaceClass = SpaceClass.NORMAL

    @model_validator(mode="after")
    def corridor_flag_matches_class(self) -> Space:
        if self.is_corridor != (self.classification == SpaceClass.CORRIDOR):
            raise ValueError(
                "is_corridor must be set exactly for CORRIDOR spaces "
                f"(got is_corridor={self.is_corridor}, "
                f"classification={self.classification.value})"
            )
        if self.is_sloped and not self.is_corridor:
            raise ValueError("Only corridors can be sloped")
        return self

    def __setattr__(self, name: str, value: object) -> None:
        if name in _FIXED_BOUNDS:
            raise AttributeError(f"Space bounds are immutable ('{name}')")
        super().__setattr__(name, value)

    # ── Derived geometry ──────────────────────────────────────────────

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def max_z(self) -> float:
        return self.z + self.depth

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def center_z(self) -> float:
        return self.z + self.depth / 2

    @property
    def center(self) -> Point3D:
        """Horizontal center at floor level."""
        return Point3D(x=self.center_x, y=self.floor_elevation, z=self.center_z)

    @property
    def area(self) -> float:
        return self.width * self.depth

    @property
    def longest_edge(self) -> float:
        return max(self.width, self.depth)

    def distance_to(self, other: Space) -> float:
        """Center-to-center distance on the XZ plane."""
        return math.sqrt(
            (self.center_x - other.center_x) ** 2
            + (self.center_z - other.center_z) ** 2
        )

    def contains_point(self, x: float, z: float) -> bool:
        """Half-open containment: west/north edges inclusive."""
        return self.x <= x < self.max_x and self.z <= z < self.max_z

    def overlaps(self, other: Space) -> bool:
        """True if the rectangles share a region of positive area."""
        return (
            self.x < other.max_x
            and other.x < self.max_x
            and self.z < other.max_z
            and other.z < self.max_z
        )

    def edge_line(self, direction: Direction) -> float:
        """Fixed coordinate of an edge (z for north/south, x for east/west)."""
        if direction == Direction.NORTH:
            return self.z
        if direction == Direction.SOUTH:
            return self.max_z
        if direction == Direction.WEST:
            return self.x
        return self.max_x

    def edge_range(self, direction: Direction) -> tuple[float, float]:
        """(start, end) of an edge along its running axis."""
        if direction.runs_along_x:
            return (self.x, self.max_x)
        return (self.z, self.max_z)

    def cross_range(self, direction: Direction) -> tuple[float, float]:
        """Extent of the space perpendicular to an edge."""
        if direction.runs_along_x:
            return (self.z, self.max_z)
        return (self.x, self.max_x)

    def edge_length(self, direction: Direction) -> float:
        start, end = self.edge_range(direction)
        return end - start

    def corner_point(self, corner: Corner) -> Point2D:
        ns, ew = corner.edges
        return Point2D(x=self.edge_line(ew), z=self.edge_line(ns))

    def set_floor_elevation(self, elevation: float) -> None:
        self.floor_elevation = elevation
