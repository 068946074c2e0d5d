"""Tests for sizing, themes, corridors and decorations."""

import random

import pytest

from dungeon_builder.config import GeneratorSettings
from dungeon_builder.generators.corridor import (
    connect_l_shaped,
    connect_straight,
    horizontal_segment,
    vertical_segment,
)
from dungeon_builder.generators.decorations import add_decorations, decoration_count
from dungeon_builder.generators.sizing import determine_dungeon_size, size_tier
from dungeon_builder.generators.themes import (
    THEMES,
    get_all_themes,
    get_dungeon_theme,
    get_theme_by_name,
)
from dungeon_builder.models import Floor, SizeParameters, Space, SpaceClass


class FixedRandom(random.Random):
    """Random whose random() always returns the same value."""

    def __init__(self, value: float):
        super().__init__(0)
        self.value = value

    def random(self) -> float:
        return self.value


@pytest.fixture
def floor() -> Floor:
    return Floor(floor_index=1, size=SizeParameters(room_count=5, width=200, depth=200))


# ── Sizing ────────────────────────────────────────────────────────


class TestSizing:
    @pytest.mark.parametrize("floor_index, rooms, extent", [
        (1, (5, 7), 200),
        (3, (5, 7), 200),
        (4, (8, 11), 280),
        (7, (8, 11), 280),
        (8, (12, 20), 400),
        (50, (12, 20), 400),
    ])
    def test_tiers(self, floor_index, rooms, extent):
        tier = size_tier(floor_index)
        assert (tier.min_rooms, tier.max_rooms) == rooms
        assert tier.extent == extent

    def test_room_count_within_tier(self):
        rng = random.Random(3)
        for _ in range(50):
            size = determine_dungeon_size(5, rng)
            assert 8 <= size.room_count <= 11
            assert size.width == size.depth == 280

    def test_invalid_floor_index(self):
        with pytest.raises(ValueError, match=">= 1"):
            size_tier(0)


# ── Themes ────────────────────────────────────────────────────────


class TestThemes:
    @pytest.mark.parametrize("floor_index, key", [
        (1, "stone"), (3, "stone"), (4, "cave"), (6, "cave"),
        (7, "ruins"), (9, "ruins"), (10, "crypt"), (12, "crypt"),
        (13, "forest"), (99, "forest"),
    ])
    def test_theme_by_floor(self, floor_index, key):
        assert get_dungeon_theme(floor_index).key == key

    def test_lookup_falls_back_to_stone(self):
        assert get_theme_by_name("crypt").name == "Dark Crypt"
        assert get_theme_by_name("lava").key == "stone"

    def test_every_theme_has_decorations(self):
        assert len(get_all_themes()) == len(THEMES) == 5
        assert all(theme.decorations for theme in get_all_themes())


# ── Corridors ─────────────────────────────────────────────────────


class TestCorridorSegments:
    def test_horizontal_extends_past_both_ends(self):
        seg = horizontal_segment(40, 10, 5, 6)
        assert (seg.x, seg.z, seg.width, seg.depth) == (7, 2, 36, 6)
        assert seg.is_corridor
        assert seg.classification == SpaceClass.CORRIDOR

    def test_vertical_extends_past_both_ends(self):
        seg = vertical_segment(0, 20, 10, 6)
        assert (seg.x, seg.z, seg.width, seg.depth) == (7, -3, 6, 26)

    def test_zero_length_is_a_square(self):
        seg = horizontal_segment(10, 10, 10, 6)
        assert (seg.width, seg.depth) == (6, 6)


class TestLShapedCorridor:
    def _rooms(self, floor):
        a = floor.add_room(Space(x=0, z=0, width=20, depth=20))
        b = floor.add_room(Space(x=60, z=60, width=20, depth=20))
        return a, b

    def test_horizontal_first(self, floor: Floor):
        a, b = self._rooms(floor)
        first, second = connect_l_shaped(floor, a, b, 6, FixedRandom(0.1))
        # x leg at A's center z, z leg at B's center x
        assert (first.center_z, first.depth) == (10, 6)
        assert (first.x, first.max_x) == (7, 73)
        assert (second.center_x, second.width) == (70, 6)
        assert (second.z, second.max_z) == (7, 73)
        assert floor.get_corridors() == (first, second)

    def test_vertical_first(self, floor: Floor):
        a, b = self._rooms(floor)
        first, second = connect_l_shaped(floor, a, b, 6, FixedRandom(0.9))
        assert (first.center_x, first.width) == (10, 6)
        assert (second.center_z, second.depth) == (70, 6)

    def test_legs_overlap_at_bend(self, floor: Floor):
        a, b = self._rooms(floor)
        first, second = connect_l_shaped(floor, a, b, 6, FixedRandom(0.1))
        assert first.overlaps(second)
        assert first.overlaps(a)
        assert second.overlaps(b)


class TestStraightCorridor:
    def test_north_alcove(self, floor: Floor):
        room = floor.add_room(Space(x=0, z=0, width=30, depth=30))
        alcove = floor.add_room(
            Space(x=4, z=-6, width=12, depth=6, classification=SpaceClass.ALCOVE)
        )
        seg = connect_straight(floor, room, alcove, 6)
        assert seg.width == 6
        assert seg.center_x == 10
        assert seg.overlaps(room)
        assert seg.overlaps(alcove)

    def test_narrow_band_narrows_corridor(self, floor: Floor):
        room = floor.add_room(Space(x=0, z=0, width=30, depth=30))
        alcove = floor.add_room(
            Space(x=30, z=26, width=5, depth=12, classification=SpaceClass.ALCOVE)
        )
        seg = connect_straight(floor, room, alcove, 6)
        # Shared z band is [26, 30]
        assert seg.depth == 4
        assert seg.center_z == 28
        assert seg.overlaps(room)
        assert seg.overlaps(alcove)

    def test_switches_axis_without_shared_band(self, floor: Floor):
        room = floor.add_room(Space(x=0, z=0, width=30, depth=4))
        # Far off to the side along x, but only shares an x band
        alcove = floor.add_room(
            Space(x=28, z=-3, width=10, depth=3, classification=SpaceClass.ALCOVE)
        )
        seg = connect_straight(floor, room, alcove, 6)
        assert seg.width == 2
        assert seg.overlaps(room)
        assert seg.overlaps(alcove)


# ── Decorations ───────────────────────────────────────────────────


class TestDecorations:
    def test_count(self):
        settings = GeneratorSettings()
        assert decoration_count(Space(x=0, z=0, width=7, depth=30), settings) == 0
        assert decoration_count(Space(x=0, z=0, width=8, depth=8), settings) == 2
        assert decoration_count(Space(x=0, z=0, width=20, depth=20), settings) == 11

    def test_placed_inside_margins(self, floor: Floor):
        room = floor.add_room(Space(x=10, z=10, width=20, depth=20))
        placed = add_decorations(floor, THEMES["crypt"], GeneratorSettings(), random.Random(4))
        assert placed == 11
        for deco in floor.decorations:
            assert deco.room == room.tag
            assert deco.kind in THEMES["crypt"].decorations
            assert 11.5 <= deco.position.x <= 28.5
            assert 11.5 <= deco.position.z <= 28.5
            assert deco.position.y == 0
