"""Tests for the Floor model and enclosure elements."""

import pytest

from dungeon_builder.models import (
    CornerPillar,
    Corner,
    Direction,
    Floor,
    Point2D,
    Point3D,
    SizeParameters,
    Slab,
    SlabType,
    Space,
    SpaceClass,
    WallSegment,
)
from dungeon_builder.models.floor import DEFAULT_SPAWN


@pytest.fixture
def floor() -> Floor:
    return Floor(floor_index=1, size=SizeParameters(room_count=5, width=200, depth=200))


def _corridor(**kw) -> Space:
    return Space(is_corridor=True, classification=SpaceClass.CORRIDOR, **kw)


class TestFloorPopulation:
    def test_room_tags_assigned(self, floor: Floor):
        r1 = floor.add_room(Space(x=0, z=0, width=10, depth=10))
        r2 = floor.add_room(Space(x=20, z=0, width=10, depth=10))
        c1 = floor.add_corridor(_corridor(x=10, z=2, width=10, depth=6))
        assert (r1.tag, r2.tag, c1.tag) == ("R1", "R2", "C1")

    def test_duplicate_tag_rejected(self, floor: Floor):
        floor.add_room(Space(tag="A", x=0, z=0, width=10, depth=10))
        with pytest.raises(ValueError, match="already exists"):
            floor.add_room(Space(tag="A", x=20, z=0, width=10, depth=10))

    def test_corridor_not_a_room(self, floor: Floor):
        with pytest.raises(ValueError, match="add_corridor"):
            floor.add_room(_corridor(x=0, z=0, width=6, depth=6))
        with pytest.raises(ValueError, match="Only corridor"):
            floor.add_corridor(Space(x=0, z=0, width=6, depth=6))

    def test_sealed_floor_rejects_changes(self, floor: Floor):
        room = floor.add_room(Space(x=0, z=0, width=10, depth=10))
        floor.seal()
        with pytest.raises(ValueError, match="sealed"):
            floor.add_room(Space(x=20, z=0, width=10, depth=10))
        with pytest.raises(ValueError, match="sealed"):
            floor.place_key(room)

    def test_sealed_lists_are_read_only(self, floor: Floor):
        floor.add_room(Space(x=0, z=0, width=10, depth=10))
        floor.add_corridor(_corridor(x=10, z=2, width=8, depth=6))
        floor.seal()
        with pytest.raises(ValueError, match="sealed"):
            floor.rooms.append(Space(x=20, z=0, width=10, depth=10))
        with pytest.raises(ValueError, match="sealed"):
            floor.corridors.clear()
        with pytest.raises(ValueError, match="sealed"):
            floor.rooms[0] = Space(x=50, z=0, width=10, depth=10)
        assert len(floor.rooms) == 1
        assert len(floor.corridors) == 1

    def test_loaded_sealed_floor_stays_read_only(self, floor: Floor, tmp_path):
        floor.add_room(Space(x=0, z=0, width=10, depth=10))
        floor.seal()
        loaded = Floor.load(floor.save(tmp_path / "floor.json"))
        assert loaded.model_dump() == floor.model_dump()
        with pytest.raises(ValueError, match="sealed"):
            loaded.corridors.append(_corridor(x=10, z=2, width=8, depth=6))

    def test_views_are_tuples(self, floor: Floor):
        floor.add_room(Space(x=0, z=0, width=10, depth=10))
        rooms = floor.get_rooms()
        assert isinstance(rooms, tuple)
        assert len(rooms) == 1
        assert floor.get_corridors() == ()

    def test_get_space_and_rooms_of(self, floor: Floor):
        floor.add_room(Space(x=0, z=0, width=10, depth=10, classification=SpaceClass.SPAWN))
        floor.add_room(Space(x=20, z=0, width=10, depth=10, classification=SpaceClass.RADIAL))
        assert floor.get_space("R2").classification == SpaceClass.RADIAL
        assert floor.get_space("R9") is None
        assert [r.tag for r in floor.rooms_of(SpaceClass.RADIAL)] == ["R2"]
        assert floor.spawn_room.tag == "R1"


class TestObjectives:
    def test_place_key_floats_above_room_center(self, floor: Floor):
        room = floor.add_room(Space(x=0, z=0, width=10, depth=20))
        pos = floor.place_key(room)
        assert (pos.x, pos.y, pos.z) == (5, 1.0, 10)
        assert floor.key_room == "R1"

    def test_place_exit_at_floor_level(self, floor: Floor):
        room = floor.add_room(Space(x=0, z=0, width=10, depth=20))
        pos = floor.place_exit(room)
        assert (pos.x, pos.y, pos.z) == (5, 0, 10)
        assert floor.exit_room == "R1"

    def test_default_spawn(self, floor: Floor):
        assert floor.get_player_spawn_position() == DEFAULT_SPAWN
        floor.get_player_spawn_position().x = 99
        assert DEFAULT_SPAWN.x == 0.0
        assert floor.get_player_spawn_position() == DEFAULT_SPAWN
        floor.set_player_spawn_position(3, 1, 4)
        assert floor.get_player_spawn_position() == Point3D(x=3, y=1, z=4)

    def test_player_at_exit_uses_horizontal_distance(self, floor: Floor):
        room = floor.add_room(Space(x=0, z=0, width=10, depth=10))
        floor.place_exit(room)
        assert floor.is_player_at_exit(Point3D(x=6, y=50, z=5))
        assert not floor.is_player_at_exit(Point3D(x=7, y=0, z=5))

    def test_exit_radius_is_configurable(self):
        floor = Floor(
            floor_index=1,
            size=SizeParameters(room_count=5, width=200, depth=200),
            exit_radius=10.0,
        )
        room = floor.add_room(Space(x=0, z=0, width=10, depth=10))
        floor.place_exit(room)
        assert floor.is_player_at_exit(Point3D(x=10, y=0, z=5))
        assert not floor.is_player_at_exit(Point3D(x=10, y=0, z=5), radius=2.0)

    def test_no_exit_means_never_at_exit(self, floor: Floor):
        assert not floor.is_player_at_exit(Point3D(x=0, y=0, z=0))

    def test_collect_key(self, floor: Floor):
        assert floor.collect_key() is False
        room = floor.add_room(Space(x=0, z=0, width=10, depth=10))
        floor.place_key(room)
        assert floor.get_key_collider() is not None
        assert floor.collect_key() is True
        assert floor.is_key_collected()
        assert floor.get_key_collider() is None

    def test_collect_key_after_seal(self, floor: Floor):
        room = floor.add_room(Space(x=0, z=0, width=10, depth=10))
        floor.place_key(room)
        floor.seal()
        assert floor.collect_key() is True

    def test_objective_colliders(self, floor: Floor):
        room = floor.add_room(Space(x=0, z=0, width=10, depth=10))
        floor.place_key(room)
        floor.place_exit(room)
        assert floor.get_key_collider().size == (1.0, 1.0, 1.0)
        exit_box = floor.get_exit_collider()
        assert exit_box.size == (2.0, 2.0, 2.0)
        assert exit_box.center == Point3D(x=5, y=1, z=5)


class TestElements:
    def test_wall_zero_length_rejected(self):
        with pytest.raises(ValueError, match="must be different"):
            WallSegment(
                owner="R1", direction=Direction.NORTH,
                start=Point2D(x=1, z=1), end=Point2D(x=1, z=1),
                thickness=0.5, height=3,
            )

    def test_north_wall_sits_inside(self):
        wall = WallSegment(
            owner="R1", direction=Direction.NORTH,
            start=Point2D(x=0, z=10), end=Point2D(x=4, z=10),
            thickness=0.5, height=3,
        )
        b = wall.bounds
        assert (b.min.x, b.min.z, b.max.x, b.max.z) == (0, 10, 4, 10.5)
        assert (b.min.y, b.max.y) == (0, 3)
        assert wall.length == 4

    def test_east_wall_sits_inside(self):
        wall = WallSegment(
            owner="R1", direction=Direction.EAST,
            start=Point2D(x=8, z=0), end=Point2D(x=8, z=6),
            thickness=0.5, height=3,
        )
        b = wall.bounds
        assert (b.min.x, b.min.z, b.max.x, b.max.z) == (7.5, 0, 8, 6)

    def test_pillar_grows_inward(self):
        pillar = CornerPillar(
            owner="R1", corner=Corner.SOUTH_EAST,
            position=Point2D(x=10, z=10), size=0.5, height=3,
        )
        b = pillar.bounds
        assert (b.min.x, b.min.z, b.max.x, b.max.z) == (9.5, 9.5, 10, 10)

    def test_slab_bounds(self):
        floor_slab = Slab(owner="R1", x=0, z=0, width=4, depth=4, elevation=0, thickness=0.2)
        ceiling = Slab(
            owner="R1", slab_type=SlabType.CEILING,
            x=0, z=0, width=4, depth=4, elevation=3, thickness=0.2,
        )
        assert (floor_slab.bounds.min.y, floor_slab.bounds.max.y) == (-0.2, 0)
        assert ceiling.bounds.min.y == 3
        assert ceiling.bounds.max.y == pytest.approx(3.2)


class TestFloorIO:
    def test_save_and_load(self, floor: Floor, tmp_path):
        room = floor.add_room(Space(x=0, z=0, width=10, depth=10, classification=SpaceClass.SPAWN))
        floor.add_corridor(_corridor(x=8, z=2, width=10, depth=6))
        floor.place_key(room)
        path = floor.save(tmp_path / "a" / "floor.json")
        assert path.exists()

        loaded = Floor.load(path)
        assert loaded.floor_index == 1
        assert [s.tag for s in loaded.all_spaces()] == ["R1", "C1"]
        assert loaded.corridors[0].is_corridor
        assert loaded.key_position == floor.key_position

    def test_summary(self, floor: Floor):
        floor.add_room(Space(x=0, z=0, width=10, depth=10, classification=SpaceClass.SPAWN))
        summary = floor.summary()
        assert summary["rooms"] == 1
        assert summary["rooms_by_class"] == {"spawn": 1}
        assert summary["colliders"] == 0
