"""Floor generators: sizing, themes, layout, corridors, objectives, decorations."""

from dungeon_builder.generators.sizing import SIZE_TIERS, SizeTier, determine_dungeon_size, size_tier
from dungeon_builder.generators.themes import (
    THEMES,
    Theme,
    get_all_themes,
    get_dungeon_theme,
    get_theme_by_name,
)
from dungeon_builder.generators.corridor import connect_l_shaped, connect_straight
from dungeon_builder.generators.layout import (
    PLACEMENTS,
    Placement,
    RadialLayoutGenerator,
    flatten_elevations,
    generate_layout,
)
from dungeon_builder.generators.objectives import (
    ObjectivePlacement,
    ObjectivePlacementError,
    PlacementRule,
    choose_key_and_exit,
    find_farthest_pair,
    find_farthest_room,
    place_key_and_exit,
    set_spawn_position,
)
from dungeon_builder.generators.decorations import add_decorations, decoration_count

__all__ = [
    "SIZE_TIERS",
    "SizeTier",
    "determine_dungeon_size",
    "size_tier",
    "THEMES",
    "Theme",
    "get_all_themes",
    "get_dungeon_theme",
    "get_theme_by_name",
    "connect_l_shaped",
    "connect_straight",
    "PLACEMENTS",
    "Placement",
    "RadialLayoutGenerator",
    "flatten_elevations",
    "generate_layout",
    "ObjectivePlacement",
    "ObjectivePlacementError",
    "PlacementRule",
    "choose_key_and_exit",
    "find_farthest_pair",
    "find_farthest_room",
    "place_key_and_exit",
    "set_spawn_position",
    "add_decorations",
    "decoration_count",
]
