"""Connectivity synthesis: doorways, walls, corner pillars and slabs."""

from dungeon_builder.enclosure.doorways import (
    Doorway,
    Span,
    doorways_between,
    doorways_by_space,
    find_doorways,
    has_opening,
    opening_span,
)
from dungeon_builder.enclosure.walls import (
    build_corner_pillars,
    build_space_walls,
    merge_spans,
    split_edge,
    synthesize_walls,
)
from dungeon_builder.enclosure.colliders import build_slabs, synthesize_enclosure

__all__ = [
    "Doorway",
    "Span",
    "doorways_between",
    "doorways_by_space",
    "find_doorways",
    "has_opening",
    "opening_span",
    "build_corner_pillars",
    "build_space_walls",
    "merge_spans",
    "split_edge",
    "synthesize_walls",
    "build_slabs",
    "synthesize_enclosure",
]
