"""Top-level floor model: the generated dungeon floor description.

A Floor owns every Space it contains. It is populated monotonically
during generation (spaces are only ever added), then sealed and handed
to consumers (renderer, enemy spawner, chest spawner) as read-mostly;
after sealing only the key-collected flag changes.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, model_validator

from dungeon_builder.models.elements import CornerPillar, Decoration, Slab, WallSegment
from dungeon_builder.models.geometry import Bounds3D, Point3D
from dungeon_builder.models.spaces import Space, SpaceClass

DEFAULT_SPAWN = Point3D(x=0.0, y=0.5, z=0.0)
EXIT_RADIUS = 2.0


class SealedList(list):
    """List that rejects in-place changes once its floor is sealed."""

    def _sealed(self, *args, **kwargs):
        raise ValueError("Floor is sealed; its room and corridor lists are read-only")

    append = extend = insert = remove = pop = clear = _sealed
    sort = reverse = __setitem__ = __delitem__ = __iadd__ = __imul__ = _sealed

    def __reduce__(self):
        return (SealedList, (list(self),))


class SizeParameters(BaseModel):
    """Floor size tier: target room count and map extent."""

    room_count: int = Field(gt=0)
    width: float = Field(gt=0, description="Map extent along x")
    depth: float = Field(gt=0, description="Map extent along z")


class Floor(BaseModel):
    """One generated dungeon floor."""

    floor_index: int = Field(ge=1)
    size: SizeParameters
    theme: str = ""
    rooms: list[Space] = Field(default_factory=list)
    corridors: list[Space] = Field(default_factory=list)
    walls: list[WallSegment] = Field(default_factory=list)
    pillars: list[CornerPillar] = Field(default_factory=list)
    slabs: list[Slab] = Field(default_factory=list)
    decorations: list[Decoration] = Field(default_factory=list)
    key_position: Point3D | None = None
    exit_position: Point3D | None = None
    player_spawn_position: Point3D | None = None
    key_room: str | None = Field(default=None, description="Tag of the key room")
    exit_room: str | None = Field(default=None, description="Tag of the exit room")
    exit_radius: float = Field(default=EXIT_RADIUS, gt=0)
    key_collected: bool = False
    sealed: bool = False

    @model_validator(mode="after")
    def freeze_if_sealed(self) -> Floor:
        if self.sealed:
            self._freeze()
        return self

    # ── File I/O ──────────────────────────────────────────────────────

    @classmethod
    def load(cls, path: str | Path) -> Floor:
        """Load a floor from a JSON file."""
        path = Path(path)
        return cls.model_validate_json(path.read_text())

    def save(self, path: str | Path) -> Path:
        """Save the floor to a JSON file. Creates parent dirs if needed."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.model_dump_json(indent=2))
        return path

    # ── Population (generation only) ──────────────────────────────────

    def _require_open(self) -> None:
        if self.sealed:
            raise ValueError(
                f"Floor {self.floor_index} is sealed; its spaces can no longer change"
            )

    def add_room(self, room: Space) -> Space:
        """Append a room, tagging it R1, R2... if it has no tag."""
        self._require_open()
        if room.is_corridor:
            raise ValueError("Corridor spaces belong in add_corridor()")
        if not room.tag:
            room.tag = f"R{len(self.rooms) + 1}"
        self._require_unique_tag(room.tag)
        self.rooms.append(room)
        return room

    def add_corridor(self, corridor: Space) -> Space:
        """Append a corridor segment, tagging it C1, C2... if it has no tag."""
        self._require_open()
        if not corridor.is_corridor:
            raise ValueError("Only corridor spaces can be added as corridors")
        if not corridor.tag:
            corridor.tag = f"C{len(self.corridors) + 1}"
        self._require_unique_tag(corridor.tag)
        self.corridors.append(corridor)
        return corridor

    def _require_unique_tag(self, tag: str) -> None:
        if self.get_space(tag) is not None:
            raise ValueError(f"Space tag '{tag}' already exists on this floor")

    def place_key(self, room: Space, float_height: float = 1.0) -> Point3D:
        """Place the key at the room's center, floating above its floor."""
        self._require_open()
        self.key_position = Point3D(
            x=room.center_x, y=room.floor_elevation + float_height, z=room.center_z
        )
        self.key_room = room.tag
        return self.key_position

    def place_exit(self, room: Space) -> Point3D:
        """Place the exit at the room's center, at floor level."""
        self._require_open()
        self.exit_position = Point3D(
            x=room.center_x, y=room.floor_elevation, z=room.center_z
        )
        self.exit_room = room.tag
        return self.exit_position

    def set_player_spawn_position(self, x: float, y: float, z: float) -> None:
        self._require_open()
        self.player_spawn_position = Point3D(x=x, y=y, z=z)

    def seal(self) -> None:
        """Freeze the room/corridor lists. Called when generation finishes."""
        self.sealed = True
        self._freeze()

    def _freeze(self) -> None:
        self.rooms = SealedList(self.rooms)
        self.corridors = SealedList(self.corridors)

    # ── Read-only views ───────────────────────────────────────────────

    def get_rooms(self) -> tuple[Space, ...]:
        return tuple(self.rooms)

    def get_corridors(self) -> tuple[Space, ...]:
        return tuple(self.corridors)

    def all_spaces(self) -> list[Space]:
        """Rooms followed by corridors."""
        return [*self.rooms, *self.corridors]

    def get_space(self, tag: str) -> Space | None:
        """Find a room or corridor by tag."""
        return next((s for s in self.all_spaces() if s.tag == tag), None)

    def rooms_of(self, classification: SpaceClass) -> list[Space]:
        """All rooms with the given classification, in placement order."""
        return [r for r in self.rooms if r.classification == classification]

    @property
    def spawn_room(self) -> Space | None:
        return next(
            (r for r in self.rooms if r.classification == SpaceClass.SPAWN), None
        )

    def get_player_spawn_position(self) -> Point3D:
        return self.player_spawn_position or DEFAULT_SPAWN.model_copy()

    # ── Physics contract ──────────────────────────────────────────────

    def get_colliders(self) -> list[Bounds3D]:
        """One bounding volume per wall segment, corner pillar and slab."""
        return (
            [w.bounds for w in self.walls]
            + [p.bounds for p in self.pillars]
            + [s.bounds for s in self.slabs]
        )

    def get_key_collider(self) -> Bounds3D | None:
        if self.key_position is None or self.key_collected:
            return None
        k = self.key_position
        return Bounds3D.from_box(k.x - 0.5, k.y, k.z - 0.5, 1.0, 1.0, 1.0)

    def get_exit_collider(self) -> Bounds3D | None:
        if self.exit_position is None:
            return None
        e = self.exit_position
        return Bounds3D.from_box(e.x - 1.0, e.y, e.z - 1.0, 2.0, 2.0, 2.0)

    # ── Gameplay state ────────────────────────────────────────────────

    def is_player_at_exit(self, position: Point3D, radius: float | None = None) -> bool:
        """True if the position is within ``radius`` of the exit (XZ plane).

        ``radius`` defaults to the floor's ``exit_radius``.
        """
        if self.exit_position is None:
            return False
        if radius is None:
            radius = self.exit_radius
        return position.horizontal_distance_to(self.exit_position) < radius

    def collect_key(self) -> bool:
        """Mark the key as collected. Returns False if no key was placed."""
        if self.key_position is None:
            return False
        self.key_collected = True
        return True

    def is_key_collected(self) -> bool:
        return self.key_collected

    # ── Summary ───────────────────────────────────────────────────────

    def summary(self) -> dict:
        """Counts and placements, for CLI output and logs."""
        by_class: dict[str, int] = {}
        for room in self.rooms:
            by_class[room.classification.value] = by_class.get(room.classification.value, 0) + 1
        return {
            "floor": self.floor_index,
            "theme": self.theme,
            "map_size": [self.size.width, self.size.depth],
            "rooms": len(self.rooms),
            "rooms_by_class": by_class,
            "corridors": len(self.corridors),
            "walls": len(self.walls),
            "pillars": len(self.pillars),
            "slabs": len(self.slabs),
            "colliders": len(self.get_colliders()),
            "decorations": len(self.decorations),
            "key_room": self.key_room,
            "exit_room": self.exit_room,
        }
