"""Tests for key and exit placement."""

import random

import pytest

from dungeon_builder.config import GeneratorSettings
from dungeon_builder.generators.objectives import (
    ObjectivePlacementError,
    PlacementRule,
    choose_key_and_exit,
    find_farthest_pair,
    find_farthest_room,
    place_key_and_exit,
    set_spawn_position,
)
from dungeon_builder.models import Floor, Point3D, SizeParameters, Space, SpaceClass


class FixedRandom(random.Random):
    """Random whose random() always returns the same value."""

    def __init__(self, value: float):
        super().__init__(0)
        self.value = value

    def random(self) -> float:
        return self.value


def _room(tag: str, cx: float, cz: float, cls: SpaceClass, size: float = 10) -> Space:
    return Space(
        tag=tag, x=cx - size / 2, z=cz - size / 2,
        width=size, depth=size, classification=cls,
    )


@pytest.fixture
def spawn() -> Space:
    return _room("S", 0, 0, SpaceClass.SPAWN, 30)


class TestFarthest:
    def test_farthest_room(self, spawn: Space):
        near = _room("A", 20, 0, SpaceClass.RADIAL)
        far = _room("B", 0, -80, SpaceClass.RADIAL)
        assert find_farthest_room(spawn, [near, far]).tag == "B"

    def test_ties_keep_first(self, spawn: Space):
        a = _room("A", 40, 0, SpaceClass.RADIAL)
        b = _room("B", -40, 0, SpaceClass.RADIAL)
        assert find_farthest_room(spawn, [a, b]).tag == "A"

    def test_empty_pool(self, spawn: Space):
        assert find_farthest_room(spawn, []) is None

    def test_farthest_pair(self):
        rooms = [
            _room("A", 0, 0, SpaceClass.RADIAL),
            _room("B", 10, 0, SpaceClass.RADIAL),
            _room("C", 0, 50, SpaceClass.ALCOVE),
            _room("D", 60, 50, SpaceClass.ALCOVE),
        ]
        a, b = find_farthest_pair(rooms)
        assert (a.tag, b.tag) == ("A", "D")

    def test_farthest_pair_needs_two(self):
        assert find_farthest_pair([_room("A", 0, 0, SpaceClass.RADIAL)]) is None


class TestRules:
    def test_alcove_rule(self, spawn: Space):
        rooms = [
            spawn,
            _room("N", 0, -40, SpaceClass.RADIAL),
            _room("E", 40, 0, SpaceClass.RADIAL),
            _room("NP", 0, -120, SpaceClass.CARDINAL_PLUS),
            _room("AL", 50, 10, SpaceClass.ALCOVE),
        ]
        # 0.0 passes the 30% alcove roll
        placement = choose_key_and_exit(rooms, FixedRandom(0.0))
        assert placement.rule == PlacementRule.ALCOVE
        assert placement.key_room.tag == "AL"
        assert placement.exit_room.tag == "NP"

    def test_cardinal_plus_rule(self, spawn: Space):
        rooms = [
            spawn,
            _room("N", 0, -40, SpaceClass.RADIAL),
            _room("SO", 0, 40, SpaceClass.RADIAL),
            _room("NE", 60, -60, SpaceClass.CARDINAL),
            _room("NP", 0, -120, SpaceClass.CARDINAL_PLUS),
            _room("AL", 50, 10, SpaceClass.ALCOVE),
        ]
        # 0.9 fails the alcove roll
        placement = choose_key_and_exit(rooms, FixedRandom(0.9))
        assert placement.rule == PlacementRule.CARDINAL_PLUS
        assert placement.key_room.tag == "NP"
        assert placement.exit_room.tag == "SO"

    def test_cardinal_rule(self, spawn: Space):
        rooms = [
            spawn,
            _room("N", 0, -40, SpaceClass.RADIAL),
            _room("W", -40, 0, SpaceClass.RADIAL),
            _room("NE", 60, -60, SpaceClass.CARDINAL),
        ]
        placement = choose_key_and_exit(rooms, FixedRandom(0.9))
        assert placement.rule == PlacementRule.CARDINAL
        assert placement.key_room.tag == "NE"
        assert placement.exit_room.tag == "W"

    def test_cardinal_key_with_empty_pool_falls_back(self, spawn: Space):
        rooms = [
            spawn,
            _room("NE", 60, -60, SpaceClass.CARDINAL),
            _room("AL", -50, 10, SpaceClass.ALCOVE),
        ]
        placement = choose_key_and_exit(rooms, FixedRandom(0.9))
        assert placement.rule == PlacementRule.CARDINAL
        # Spawn is never the exit
        assert placement.exit_room.tag == "AL"

    def test_radial_rule(self, spawn: Space):
        rooms = [
            spawn,
            _room("N", 0, -40, SpaceClass.RADIAL),
            _room("SO", 0, 40, SpaceClass.RADIAL),
        ]
        placement = choose_key_and_exit(rooms, random.Random(1))
        assert placement.rule == PlacementRule.RADIAL
        assert {placement.key_room.tag, placement.exit_room.tag} == {"N", "SO"}

    def test_farthest_pair_fallback(self, spawn: Space):
        rooms = [
            spawn,
            _room("N", 0, -40, SpaceClass.RADIAL),
            _room("AL", 0, -60, SpaceClass.ALCOVE),
            _room("AL2", 30, 30, SpaceClass.ALCOVE),
        ]
        placement = choose_key_and_exit(rooms, FixedRandom(0.9))
        assert placement.rule == PlacementRule.FARTHEST_PAIR
        assert {placement.key_room.tag, placement.exit_room.tag} == {"AL", "AL2"}

    def test_single_room_fails(self, spawn: Space):
        with pytest.raises(ObjectivePlacementError, match="Not enough rooms"):
            choose_key_and_exit([spawn], random.Random(0))

    def test_spawn_plus_one_fails(self, spawn: Space):
        rooms = [spawn, _room("N", 0, -40, SpaceClass.RADIAL)]
        with pytest.raises(ObjectivePlacementError, match="non-spawn"):
            choose_key_and_exit(rooms, FixedRandom(0.9))

    @pytest.mark.parametrize("seed", range(10))
    def test_key_and_exit_never_share_a_room(self, spawn: Space, seed):
        rooms = [
            spawn,
            _room("N", 0, -40, SpaceClass.RADIAL),
            _room("E", 40, 0, SpaceClass.RADIAL),
            _room("NE", 60, -60, SpaceClass.CARDINAL),
            _room("AL", 50, 10, SpaceClass.ALCOVE),
            _room("AL2", -20, 30, SpaceClass.ALCOVE),
        ]
        placement = choose_key_and_exit(rooms, random.Random(seed))
        assert placement.key_room.tag != placement.exit_room.tag
        assert placement.exit_room.tag != "S"


class TestFloorPlacement:
    @pytest.fixture
    def floor(self, spawn: Space) -> Floor:
        floor = Floor(floor_index=1, size=SizeParameters(room_count=5, width=200, depth=200))
        floor.add_room(spawn)
        floor.add_room(_room("N", 0, -40, SpaceClass.RADIAL))
        floor.add_room(_room("SO", 0, 40, SpaceClass.RADIAL))
        return floor

    def test_positions_written(self, floor: Floor):
        placement = place_key_and_exit(floor, GeneratorSettings(), random.Random(0))
        key_room = floor.get_space(floor.key_room)
        exit_room = floor.get_space(floor.exit_room)
        assert placement.key_room is key_room
        assert floor.key_position == Point3D(x=key_room.center_x, y=1.0, z=key_room.center_z)
        assert floor.exit_position == Point3D(x=exit_room.center_x, y=0.0, z=exit_room.center_z)

    def test_spawn_position(self, floor: Floor):
        set_spawn_position(floor, GeneratorSettings())
        assert floor.get_player_spawn_position() == Point3D(x=0, y=1.0, z=0)

    def test_spawn_position_without_spawn_room(self):
        floor = Floor(floor_index=1, size=SizeParameters(room_count=5, width=200, depth=200))
        set_spawn_position(floor, GeneratorSettings())
        assert floor.get_player_spawn_position() == Point3D(x=0, y=0.5, z=0)
