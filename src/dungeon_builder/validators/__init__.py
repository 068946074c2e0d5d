"""Post-generation validation for dungeon floors.

- structural: space dimensions, tags, flatness (E001, E002)
- reachability: every room reachable from spawn (E010)
- enclosure: edges fully closed, doorways genuine (E020, E040)
- objectives: key and exit placement (E030-E032)
"""

from __future__ import annotations

from dungeon_builder.config import GeneratorSettings
from dungeon_builder.enclosure.doorways import find_doorways
from dungeon_builder.models.floor import Floor
from dungeon_builder.queries.connectivity import graph_from_doorways
from dungeon_builder.validators.enclosure import validate_doorways, validate_enclosure
from dungeon_builder.validators.objectives import validate_objectives
from dungeon_builder.validators.reachability import validate_reachability
from dungeon_builder.validators.structural import (
    ValidationError,
    validate_flatness,
    validate_spaces,
)


def validate_floor(
    floor: Floor, settings: GeneratorSettings | None = None
) -> list[ValidationError]:
    """Run every validator against a floor."""
    settings = settings or GeneratorSettings()
    tolerance = settings.adjacency_tolerance
    doorways = find_doorways(floor.rooms, floor.corridors, tolerance)
    graph = graph_from_doorways(floor, doorways)

    errors: list[ValidationError] = []
    errors.extend(validate_spaces(floor))
    errors.extend(validate_flatness(floor))
    errors.extend(validate_reachability(floor, graph))
    errors.extend(validate_enclosure(floor, doorways, tolerance, settings.min_segment_width))
    errors.extend(validate_doorways(floor, doorways, tolerance))
    errors.extend(validate_objectives(floor))
    return errors


__all__ = [
    "ValidationError",
    "validate_floor",
    "validate_spaces",
    "validate_flatness",
    "validate_reachability",
    "validate_enclosure",
    "validate_doorways",
    "validate_objectives",
]
