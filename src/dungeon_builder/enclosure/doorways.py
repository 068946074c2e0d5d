"""Doorway detection between adjacent or overlapping spaces.

A doorway is the stretch of one space's edge that another space passes
through, so no wall should stand there. Space B opens A's edge E when:

1. B extends strictly past E's line on A's outer side,
2. B reaches E's line (overlapping it, or stopping within the
   adjacency tolerance short of it), and
3. B and E overlap by a positive length along E's running axis.

The doorway span is that overlap. Requiring B to stick out past the
line keeps collinear edges closed: two rooms sharing only the line of
an L-bend's outer corner never open into each other.

```
        B
     +-----+
  ===|=====|=====  A's north edge: only [B.x, B.max_x] opens
     |  A  |
```
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from dungeon_builder.models.geometry import Direction
from dungeon_builder.models.spaces import Space

EPSILON = 1e-6

ALL_DIRECTIONS = (Direction.NORTH, Direction.EAST, Direction.SOUTH, Direction.WEST)


@dataclass(frozen=True)
class Span:
    """Closed interval along an edge's running axis."""

    start: float
    end: float

    @property
    def length(self) -> float:
        return self.end - self.start


@dataclass(frozen=True)
class Doorway:
    """An opening in ``owner``'s edge caused by ``connecting``."""

    owner: str
    direction: Direction
    connecting: str
    span: Span


def opening_span(
    owner: Space,
    direction: Direction,
    other: Space,
    tolerance: float = 1.0,
) -> Span | None:
    """Stretch of ``owner``'s edge that ``other`` opens, if any."""
    line = owner.edge_line(direction)
    near, far = other.cross_range(direction)

    if direction.outward < 0:
        # Outer side is toward smaller coordinates
        if not (near < line - EPSILON and far >= line - tolerance):
            return None
    else:
        if not (far > line + EPSILON and near <= line + tolerance):
            return None

    own_start, own_end = owner.edge_range(direction)
    other_start, other_end = other.edge_range(direction)
    start, end = max(own_start, other_start), min(own_end, other_end)
    if end - start <= EPSILON:
        return None
    return Span(start, end)


def has_opening(
    space: Space,
    direction: Direction,
    others: Iterable[Space],
    tolerance: float = 1.0,
) -> bool:
    """True if any of ``others`` opens the given edge of ``space``."""
    return any(
        opening_span(space, direction, other, tolerance) is not None
        for other in others
        if other.tag != space.tag
    )


def doorways_between(
    owner: Space, other: Space, tolerance: float = 1.0
) -> list[Doorway]:
    """All doorways ``other`` cuts into ``owner``'s four edges."""
    doorways = []
    for direction in ALL_DIRECTIONS:
        span = opening_span(owner, direction, other, tolerance)
        if span is not None:
            doorways.append(Doorway(owner.tag, direction, other.tag, span))
    return doorways


def find_doorways(
    rooms: Iterable[Space],
    corridors: Iterable[Space],
    tolerance: float = 1.0,
) -> list[Doorway]:
    """Detect every doorway on a floor.

    Corridors are the only connectors: rooms never open into each other
    directly. For each corridor C and each other space S, C opens S's
    edges, and if S is a room it opens C's edges too. Corridor pairs are
    visited in both orders, so each side of a corridor junction is found
    once.
    """
    rooms = list(rooms)
    corridors = list(corridors)
    doorways: list[Doorway] = []
    for corridor in corridors:
        for room in rooms:
            doorways.extend(doorways_between(room, corridor, tolerance))
            doorways.extend(doorways_between(corridor, room, tolerance))
        for other in corridors:
            if other.tag == corridor.tag:
                continue
            doorways.extend(doorways_between(other, corridor, tolerance))
    return doorways


def doorways_by_space(doorways: Iterable[Doorway]) -> dict[str, list[Doorway]]:
    """Group doorways by the space whose edge they open."""
    grouped: dict[str, list[Doorway]] = {}
    for doorway in doorways:
        grouped.setdefault(doorway.owner, []).append(doorway)
    return grouped
