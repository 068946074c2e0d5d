"""Wall-segment splitting and corner-pillar infill.

Each edge of each space is walled along its full length minus the
doorway spans that touch it. Each corner with no doorway nearby also
gets a square pillar so that two walls meeting there leave no crack.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable

from dungeon_builder.config import GeneratorSettings
from dungeon_builder.enclosure.doorways import (
    ALL_DIRECTIONS,
    Doorway,
    Span,
    doorways_by_space,
    find_doorways,
)
from dungeon_builder.models.elements import CornerPillar, WallSegment
from dungeon_builder.models.floor import Floor
from dungeon_builder.models.geometry import Corner, Direction, Point2D
from dungeon_builder.models.spaces import Space

logger = logging.getLogger(__name__)


def merge_spans(spans: Iterable[Span]) -> list[Span]:
    """Sort spans and fuse overlapping or touching ones."""
    merged: list[Span] = []
    for span in sorted(spans, key=lambda s: (s.start, s.end)):
        if merged and span.start <= merged[-1].end:
            last = merged[-1]
            merged[-1] = Span(last.start, max(last.end, span.end))
        else:
            merged.append(span)
    return merged


def split_edge(
    edge_start: float,
    edge_end: float,
    openings: Iterable[Span],
    min_width: float = 0.1,
) -> list[Span]:
    """Pieces of [edge_start, edge_end] not covered by any opening.

    Pieces narrower than ``min_width`` are dropped.
    """
    pieces: list[Span] = []
    cursor = edge_start
    for opening in merge_spans(openings):
        start = max(opening.start, edge_start)
        end = min(opening.end, edge_end)
        if end <= start:
            continue
        if start - cursor >= min_width:
            pieces.append(Span(cursor, start))
        cursor = max(cursor, end)
    if edge_end - cursor >= min_width:
        pieces.append(Span(cursor, edge_end))
    return pieces


def _edge_point(space: Space, direction: Direction, along: float) -> Point2D:
    line = space.edge_line(direction)
    if direction.runs_along_x:
        return Point2D(x=along, z=line)
    return Point2D(x=line, z=along)


def build_space_walls(
    space: Space,
    doorways: Iterable[Doorway],
    settings: GeneratorSettings,
) -> list[WallSegment]:
    """Wall segments enclosing one space, broken at its doorways."""
    doorways = list(doorways)
    walls: list[WallSegment] = []
    for direction in ALL_DIRECTIONS:
        openings = [d.span for d in doorways if d.direction == direction]
        start, end = space.edge_range(direction)
        for piece in split_edge(start, end, openings, settings.min_segment_width):
            walls.append(WallSegment(
                owner=space.tag,
                direction=direction,
                start=_edge_point(space, direction, piece.start),
                end=_edge_point(space, direction, piece.end),
                thickness=settings.wall_thickness,
                height=settings.wall_height,
                base_elevation=space.floor_elevation,
            ))
    return walls


def _point_to_segment_distance(
    px: float, pz: float, x1: float, z1: float, x2: float, z2: float
) -> float:
    """Distance from point (px,pz) to line segment (x1,z1)-(x2,z2)."""
    dx = x2 - x1
    dz = z2 - z1
    length_sq = dx * dx + dz * dz
    if length_sq < 1e-12:
        return math.sqrt((px - x1) ** 2 + (pz - z1) ** 2)
    t = max(0.0, min(1.0, ((px - x1) * dx + (pz - z1) * dz) / length_sq))
    proj_x = x1 + t * dx
    proj_z = z1 + t * dz
    return math.sqrt((px - proj_x) ** 2 + (pz - proj_z) ** 2)


def doorway_distance(space: Space, doorway: Doorway, point: Point2D) -> float:
    """Distance from a point to a doorway's span on the space's edge."""
    a = _edge_point(space, doorway.direction, doorway.span.start)
    b = _edge_point(space, doorway.direction, doorway.span.end)
    return _point_to_segment_distance(point.x, point.z, a.x, a.z, b.x, b.z)


def build_corner_pillars(
    space: Space,
    doorways: Iterable[Doorway],
    settings: GeneratorSettings,
) -> list[CornerPillar]:
    """Pillars at every corner no doorway comes within the clearance of."""
    doorways = list(doorways)
    clearance = settings.corner_clearance
    pillars: list[CornerPillar] = []
    for corner in Corner:
        point = space.corner_point(corner)
        if any(doorway_distance(space, d, point) <= clearance for d in doorways):
            continue
        pillars.append(CornerPillar(
            owner=space.tag,
            corner=corner,
            position=point,
            size=settings.wall_thickness,
            height=settings.wall_height,
            base_elevation=space.floor_elevation,
        ))
    return pillars


def synthesize_walls(
    floor: Floor, settings: GeneratorSettings
) -> list[Doorway]:
    """Replace the floor's walls and pillars with a fresh enclosure.

    Returns the doorways the enclosure was cut around. They are not
    stored on the floor.
    """
    doorways = find_doorways(floor.rooms, floor.corridors, settings.adjacency_tolerance)
    grouped = doorways_by_space(doorways)

    walls: list[WallSegment] = []
    pillars: list[CornerPillar] = []
    for space in floor.all_spaces():
        own = grouped.get(space.tag, [])
        walls.extend(build_space_walls(space, own, settings))
        pillars.extend(build_corner_pillars(space, own, settings))

    floor.walls = walls
    floor.pillars = pillars
    logger.debug(
        "Enclosure: %d doorways, %d wall segments, %d pillars",
        len(doorways), len(walls), len(pillars),
    )
    return doorways
