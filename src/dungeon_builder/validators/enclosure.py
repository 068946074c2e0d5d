"""Enclosure and doorway validation.

Every edge of every space must be covered by wall segments, doorway
spans and corner pillars, with no uncovered stretch longer than the
minimum wall segment width. Every doorway must join two spaces whose
boundaries actually meet.

Error codes:
    E020: Uncovered gap along a space edge
    E040: Doorway between spaces whose boundaries do not meet
"""

from __future__ import annotations

from collections.abc import Iterable

from dungeon_builder.enclosure.doorways import (
    ALL_DIRECTIONS,
    EPSILON,
    Doorway,
    Span,
    find_doorways,
)
from dungeon_builder.enclosure.walls import split_edge
from dungeon_builder.models.floor import Floor
from dungeon_builder.models.geometry import Direction
from dungeon_builder.models.spaces import Space
from dungeon_builder.validators.structural import ValidationError


def edge_coverage(
    floor: Floor,
    space: Space,
    direction: Direction,
    doorways: Iterable[Doorway],
) -> list[Span]:
    """Spans of one edge closed by walls or pillars, or opened by doorways."""
    covered: list[Span] = []
    for wall in floor.walls:
        if wall.owner == space.tag and wall.direction == direction:
            if direction.runs_along_x:
                a, b = wall.start.x, wall.end.x
            else:
                a, b = wall.start.z, wall.end.z
            covered.append(Span(min(a, b), max(a, b)))

    for pillar in floor.pillars:
        if pillar.owner != space.tag:
            continue
        ns, ew = pillar.corner.edges
        if direction == ns:
            # x-running edge; pillar width lies along x from the ew side
            anchor, grows_positive = pillar.position.x, ew == Direction.WEST
        elif direction == ew:
            anchor, grows_positive = pillar.position.z, ns == Direction.NORTH
        else:
            continue
        if grows_positive:
            covered.append(Span(anchor, anchor + pillar.size))
        else:
            covered.append(Span(anchor - pillar.size, anchor))

    covered.extend(
        d.span for d in doorways if d.owner == space.tag and d.direction == direction
    )
    return covered


def validate_enclosure(
    floor: Floor,
    doorways: list[Doorway] | None = None,
    tolerance: float = 1.0,
    max_gap: float = 0.1,
) -> list[ValidationError]:
    """E020: no edge may have an uncovered stretch longer than ``max_gap``."""
    if doorways is None:
        doorways = find_doorways(floor.rooms, floor.corridors, tolerance)

    errors: list[ValidationError] = []
    for space in floor.all_spaces():
        for direction in ALL_DIRECTIONS:
            start, end = space.edge_range(direction)
            coverage = edge_coverage(floor, space, direction, doorways)
            gaps = [
                gap for gap in split_edge(start, end, coverage, max_gap)
                if gap.length > max_gap + EPSILON
            ]
            for gap in gaps:
                errors.append(ValidationError(
                    severity="error",
                    element_type="Corridor" if space.is_corridor else "Room",
                    element_id=space.tag,
                    message=(
                        f"E020: {direction.value} edge of '{space.tag}' is open "
                        f"from {gap.start:.2f} to {gap.end:.2f} ({gap.length:.2f} wide)"
                    ),
                ))
    return errors


def _meets(owner: Space, doorway: Doorway, other: Space, tolerance: float) -> bool:
    line = owner.edge_line(doorway.direction)
    near, far = other.cross_range(doorway.direction)
    if near - tolerance > line or far + tolerance < line:
        return False
    span = doorway.span
    if span.length <= EPSILON:
        return False
    for space in (owner, other):
        low, high = space.edge_range(doorway.direction)
        if span.start < low - EPSILON or span.end > high + EPSILON:
            return False
    return True


def validate_doorways(
    floor: Floor,
    doorways: list[Doorway] | None = None,
    tolerance: float = 1.0,
) -> list[ValidationError]:
    """E040: each doorway's two spaces exist and their boundaries meet."""
    if doorways is None:
        doorways = find_doorways(floor.rooms, floor.corridors, tolerance)

    errors: list[ValidationError] = []
    for doorway in doorways:
        owner = floor.get_space(doorway.owner)
        other = floor.get_space(doorway.connecting)
        if owner is None or other is None or not _meets(owner, doorway, other, tolerance):
            errors.append(ValidationError(
                severity="error",
                element_type="Doorway",
                element_id=f"{doorway.owner}/{doorway.connecting}",
                message=(
                    f"E040: Doorway on the {doorway.direction.value} edge of "
                    f"'{doorway.owner}' toward '{doorway.connecting}' joins "
                    f"spaces that do not meet"
                ),
            ))
    return errors
