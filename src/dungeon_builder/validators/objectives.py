"""Key and exit placement validation.

Error codes:
    E030: Key or exit not placed
    E031: Key and exit in the same room
    E032: Key or exit position outside the room it is assigned to
"""

from __future__ import annotations

from dungeon_builder.models.floor import Floor
from dungeon_builder.models.geometry import Point3D
from dungeon_builder.validators.structural import ValidationError


def _inside(floor: Floor, tag: str | None, position: Point3D) -> bool:
    space = floor.get_space(tag) if tag else None
    if space is None:
        return False
    return space.x <= position.x <= space.max_x and space.z <= position.z <= space.max_z


def validate_objectives(floor: Floor) -> list[ValidationError]:
    """Key and exit are placed, apart, and inside their rooms."""
    errors: list[ValidationError] = []
    placed = {
        "Key": (floor.key_position, floor.key_room),
        "Exit": (floor.exit_position, floor.exit_room),
    }

    for name, (position, room) in placed.items():
        if position is None or room is None:
            errors.append(ValidationError(
                severity="error",
                element_type=name,
                element_id=str(floor.floor_index),
                message=f"E030: {name} is not placed on floor {floor.floor_index}",
            ))
        elif not _inside(floor, room, position):
            errors.append(ValidationError(
                severity="error",
                element_type=name,
                element_id=room,
                message=(
                    f"E032: {name} at ({position.x:.1f}, {position.z:.1f}) "
                    f"is outside its room '{room}'"
                ),
            ))

    if floor.key_room is not None and floor.key_room == floor.exit_room:
        errors.append(ValidationError(
            severity="error",
            element_type="Key",
            element_id=floor.key_room,
            message=f"E031: Key and exit are both in room '{floor.key_room}'",
        ))
    return errors
