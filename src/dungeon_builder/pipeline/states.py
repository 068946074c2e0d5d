"""Generation states and the transition function.

The pipeline walks these states strictly in order. Any state before
``FINALIZED`` may drop to ``FAILED``; both terminal states go nowhere.

```
INITIALIZED → OLD_FLOOR_CLEARED → THEME_SELECTED → ROOMS_GENERATED
  → KEY_AND_EXIT_PLACED → SPAWN_POSITION_SET → GEOMETRY_SYNTHESIZED
  → DECORATIONS_PLACED → POPULATION_SPAWNED → FINALIZED
```
"""

from __future__ import annotations

from enum import Enum


class GenerationState(str, Enum):
    """Where a generation attempt stands."""

    INITIALIZED = "Initialized"
    OLD_FLOOR_CLEARED = "OldFloorCleared"
    THEME_SELECTED = "ThemeSelected"
    ROOMS_GENERATED = "RoomsGenerated"
    KEY_AND_EXIT_PLACED = "KeyAndExitPlaced"
    SPAWN_POSITION_SET = "SpawnPositionSet"
    GEOMETRY_SYNTHESIZED = "GeometrySynthesized"
    DECORATIONS_PLACED = "DecorationsPlaced"
    POPULATION_SPAWNED = "PopulationSpawned"
    FINALIZED = "Finalized"
    FAILED = "Failed"

    @property
    def is_terminal(self) -> bool:
        return self in (GenerationState.FINALIZED, GenerationState.FAILED)

    @property
    def step_number(self) -> int:
        """1-based position in the pipeline (0 for FAILED)."""
        if self == GenerationState.FAILED:
            return 0
        return PIPELINE_ORDER.index(self) + 1


PIPELINE_ORDER: tuple[GenerationState, ...] = (
    GenerationState.INITIALIZED,
    GenerationState.OLD_FLOOR_CLEARED,
    GenerationState.THEME_SELECTED,
    GenerationState.ROOMS_GENERATED,
    GenerationState.KEY_AND_EXIT_PLACED,
    GenerationState.SPAWN_POSITION_SET,
    GenerationState.GEOMETRY_SYNTHESIZED,
    GenerationState.DECORATIONS_PLACED,
    GenerationState.POPULATION_SPAWNED,
    GenerationState.FINALIZED,
)

TOTAL_STEPS = len(PIPELINE_ORDER)

# Failures in these steps are logged and ignored
NON_CRITICAL = frozenset({
    GenerationState.DECORATIONS_PLACED,
    GenerationState.POPULATION_SPAWNED,
})


class InvalidTransition(Exception):
    """A state change the pipeline does not allow."""


def next_state(current: GenerationState | None, succeeded: bool) -> GenerationState:
    """State after the step that produces the next state ran.

    ``current`` is None before the first step. On success the pipeline
    advances one state; on failure it enters FAILED.
    """
    if current is not None and current.is_terminal:
        raise InvalidTransition(f"No transition out of terminal state {current.value}")
    if not succeeded:
        return GenerationState.FAILED
    if current is None:
        return PIPELINE_ORDER[0]
    return PIPELINE_ORDER[PIPELINE_ORDER.index(current) + 1]


def transition(current: GenerationState | None, target: GenerationState) -> GenerationState:
    """Validate a requested state change and return the new state."""
    allowed = {next_state(current, True), GenerationState.FAILED}
    if target not in allowed:
        start = current.value if current is not None else "start"
        raise InvalidTransition(f"Cannot move from {start} to {target.value}")
    return target
