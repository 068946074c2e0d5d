"""Generation pipeline: state machine, error taxonomy and entry point."""

from dungeon_builder.pipeline.states import (
    NON_CRITICAL,
    PIPELINE_ORDER,
    GenerationState,
    InvalidTransition,
    next_state,
    transition,
)
from dungeon_builder.pipeline.errors import (
    GenerationError,
    GenerationInProgressError,
    GeometryFailure,
    InitializationFailure,
    PlacementFailure,
    RoomGenerationFailure,
)
from dungeon_builder.pipeline.loader import (
    FloorLoader,
    GenerationResult,
    PopulationHook,
    generate,
)

__all__ = [
    "NON_CRITICAL",
    "PIPELINE_ORDER",
    "GenerationState",
    "InvalidTransition",
    "next_state",
    "transition",
    "GenerationError",
    "GenerationInProgressError",
    "GeometryFailure",
    "InitializationFailure",
    "PlacementFailure",
    "RoomGenerationFailure",
    "FloorLoader",
    "GenerationResult",
    "PopulationHook",
    "generate",
]
