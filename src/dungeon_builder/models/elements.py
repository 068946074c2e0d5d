"""Enclosure elements: wall segments, corner pillars, slabs, decorations.

Every element references its owning space by tag and knows its own
axis-aligned bounding volume, which is what the physics collaborator
consumes. Walls and pillars sit on the inner side of the edge/corner
they close.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, model_validator

from dungeon_builder.models.geometry import (
    Bounds3D,
    Corner,
    Direction,
    Point2D,
    Point3D,
)


class WallSegment(BaseModel):
    """A straight wall piece along one edge of a space.

    ``start`` and ``end`` lie on the edge line, ordered along the
    edge's running axis.
    """

    owner: str = Field(description="Tag of the space this wall encloses")
    direction: Direction = Field(description="Edge of the owner the wall sits on")
    start: Point2D
    end: Point2D
    thickness: float = Field(gt=0)
    height: float = Field(gt=0)
    base_elevation: float = 0.0

    @model_validator(mode="after")
    def start_and_end_differ(self) -> WallSegment:
        if self.start == self.end:
            raise ValueError("Wall segment start and end points must be different")
        return self

    @property
    def length(self) -> float:
        return self.start.distance_to(self.end)

    @property
    def bounds(self) -> Bounds3D:
        t = self.thickness
        if self.direction.runs_along_x:
            x0, x1 = sorted((self.start.x, self.end.x))
            line = self.start.z
            z0 = line if self.direction == Direction.NORTH else line - t
            return Bounds3D.from_box(x0, self.base_elevation, z0, x1 - x0, self.height, t)
        z0, z1 = sorted((self.start.z, self.end.z))
        line = self.start.x
        x0 = line if self.direction == Direction.WEST else line - t
        return Bounds3D.from_box(x0, self.base_elevation, z0, t, self.height, z1 - z0)


class CornerPillar(BaseModel):
    """Square infill at a corner no doorway comes near."""

    owner: str
    corner: Corner
    position: Point2D = Field(description="The space corner the pillar fills")
    size: float = Field(gt=0, description="Side length (wall thickness)")
    height: float = Field(gt=0)
    base_elevation: float = 0.0

    @property
    def bounds(self) -> Bounds3D:
        ns, ew = self.corner.edges
        # Pillar grows inward: away from the corner's outward normals
        x0 = self.position.x if ew == Direction.WEST else self.position.x - self.size
        z0 = self.position.z if ns == Direction.NORTH else self.position.z - self.size
        return Bounds3D.from_box(x0, self.base_elevation, z0, self.size, self.height, self.size)


class SlabType(str, Enum):
    """Horizontal slab function."""

    FLOOR = "FLOOR"
    CEILING = "CEILING"


class Slab(BaseModel):
    """Floor or ceiling slab covering one space."""

    owner: str
    slab_type: SlabType = SlabType.FLOOR
    x: float
    z: float
    width: float = Field(gt=0)
    depth: float = Field(gt=0)
    elevation: float = Field(description="Top of a floor slab, bottom of a ceiling slab")
    thickness: float = Field(gt=0)

    @property
    def bounds(self) -> Bounds3D:
        y0 = self.elevation - self.thickness if self.slab_type == SlabType.FLOOR else self.elevation
        return Bounds3D.from_box(self.x, y0, self.z, self.width, self.thickness, self.depth)


class Decoration(BaseModel):
    """A cosmetic prop position. Meshes are built by the renderer."""

    kind: str
    room: str = Field(description="Tag of the room the prop stands in")
    position: Point3D
