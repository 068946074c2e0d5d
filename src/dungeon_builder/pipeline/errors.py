"""Generation error taxonomy.

Every fatal failure carries the state it happened in. Non-critical
steps never raise these.
"""

from __future__ import annotations

from dungeon_builder.pipeline.states import GenerationState


class GenerationError(Exception):
    """Base class for fatal generation failures."""

    label = "Generation"

    def __init__(self, message: str, stage: GenerationState | None = None):
        super().__init__(message)
        self.message = message
        self.stage = stage

    def describe(self) -> str:
        """One line for the aggregated failure message."""
        return f"{self.label} error: {self.message}"


class InitializationFailure(GenerationError):
    """Invalid floor index, size parameters or settings."""

    label = "Initialization"


class RoomGenerationFailure(GenerationError):
    """Layout produced no rooms, or the layout step raised."""

    label = "Room generation"


class PlacementFailure(GenerationError):
    """Fewer than two eligible rooms for key and exit."""

    label = "Key/exit placement"


class GeometryFailure(GenerationError):
    """Enclosure synthesis produced no colliders."""

    label = "Geometry"


class GenerationInProgressError(GenerationError):
    """A second generation was requested while one is running."""

    label = "Re-entrancy"
