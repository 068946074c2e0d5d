"""Per-space structural validation.

Checks what the pydantic validators on Space cannot see once a floor is
assembled (or loaded from JSON built elsewhere).

Error codes:
    E001: Space has non-positive or non-finite dimensions, or a duplicate tag
    E002: Space is not at elevation 0, or a corridor is sloped
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from dungeon_builder.models.floor import Floor


@dataclass
class ValidationError:
    """A single validation issue."""

    severity: str  # "error" | "warning"
    element_type: str
    element_id: str
    message: str


def validate_spaces(floor: Floor) -> list[ValidationError]:
    """E001: dimensions and tags of every room and corridor."""
    errors: list[ValidationError] = []
    seen: set[str] = set()
    for space in floor.all_spaces():
        kind = "Corridor" if space.is_corridor else "Room"
        values = (space.x, space.z, space.width, space.depth)
        if not all(math.isfinite(v) for v in values) or space.width <= 0 or space.depth <= 0:
            errors.append(ValidationError(
                severity="error",
                element_type=kind,
                element_id=space.tag,
                message=(
                    f"E001: {kind} '{space.tag}' has invalid bounds "
                    f"({space.width} × {space.depth} at {space.x}, {space.z})"
                ),
            ))
        if space.tag in seen:
            errors.append(ValidationError(
                severity="error",
                element_type=kind,
                element_id=space.tag,
                message=f"E001: Duplicate space tag '{space.tag}'",
            ))
        seen.add(space.tag)
    return errors


def validate_flatness(floor: Floor) -> list[ValidationError]:
    """E002: every space sits at elevation 0 and nothing is sloped."""
    errors: list[ValidationError] = []
    for space in floor.all_spaces():
        kind = "Corridor" if space.is_corridor else "Room"
        if space.floor_elevation != 0:
            errors.append(ValidationError(
                severity="error",
                element_type=kind,
                element_id=space.tag,
                message=(
                    f"E002: {kind} '{space.tag}' is at elevation "
                    f"{space.floor_elevation}, expected 0"
                ),
            ))
        if space.is_sloped:
            errors.append(ValidationError(
                severity="error",
                element_type=kind,
                element_id=space.tag,
                message=f"E002: {kind} '{space.tag}' is sloped",
            ))
    return errors
