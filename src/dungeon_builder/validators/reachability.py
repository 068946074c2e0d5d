"""Reachability validator using the connectivity graph.

Error codes:
    E010: Room cannot be reached from the spawn room → ERROR
    W010: Floor has no spawn room → WARNING (every room is then E010)
"""

from __future__ import annotations

from dungeon_builder.models.floor import Floor
from dungeon_builder.queries.connectivity import (
    ConnectivityGraph,
    build_connectivity_graph,
    unreachable_rooms,
)
from dungeon_builder.validators.structural import ValidationError


def validate_reachability(
    floor: Floor,
    graph: ConnectivityGraph | None = None,
    tolerance: float = 1.0,
) -> list[ValidationError]:
    """Every room must be reachable from the spawn room.

    Args:
        floor: The floor to validate.
        graph: Pre-built connectivity graph (built if not provided).
        tolerance: Adjacency tolerance used when building the graph.
    """
    if graph is None:
        graph = build_connectivity_graph(floor, tolerance)

    errors: list[ValidationError] = []
    if floor.spawn_room is None:
        errors.append(ValidationError(
            severity="warning",
            element_type="Floor",
            element_id=str(floor.floor_index),
            message=f"W010: Floor {floor.floor_index} has no spawn room",
        ))

    for tag in unreachable_rooms(floor, graph):
        room = floor.get_space(tag)
        errors.append(ValidationError(
            severity="error",
            element_type="Room",
            element_id=tag,
            message=(
                f"E010: Room '{tag}' ({room.classification.value}) "
                f"is not reachable from the spawn room"
            ),
        ))
    return errors
