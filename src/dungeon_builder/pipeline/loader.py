"""Staged floor generation.

FloorLoader drives one generation attempt through the fixed sequence of
states in ``states.PIPELINE_ORDER``. Each step mutates the in-progress
floor and either succeeds (advance) or raises (enter FAILED, discard
the floor, report one aggregated message). Decoration and population
are non-critical: their exceptions are logged and recorded as warnings.

Usage:
    result = generate(floor_index=4, seed=1234)
    floor = result.unwrap()
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from pydantic import ValidationError as PydanticValidationError

from dungeon_builder.config import GeneratorSettings
from dungeon_builder.enclosure.colliders import synthesize_enclosure
from dungeon_builder.generators.decorations import add_decorations
from dungeon_builder.generators.layout import generate_layout
from dungeon_builder.generators.objectives import (
    ObjectivePlacementError,
    place_key_and_exit,
    set_spawn_position,
)
from dungeon_builder.generators.sizing import determine_dungeon_size
from dungeon_builder.generators.themes import Theme, get_dungeon_theme
from dungeon_builder.models.floor import Floor, SizeParameters
from dungeon_builder.pipeline.errors import (
    GenerationError,
    GenerationInProgressError,
    GeometryFailure,
    InitializationFailure,
    PlacementFailure,
    RoomGenerationFailure,
)
from dungeon_builder.pipeline.states import (
    NON_CRITICAL,
    PIPELINE_ORDER,
    TOTAL_STEPS,
    GenerationState,
    transition,
)

logger = logging.getLogger(__name__)

PopulationHook = Callable[[Floor, random.Random], None]


@dataclass
class GenerationResult:
    """Outcome of one generation attempt."""

    floor_index: int
    ok: bool
    state: GenerationState
    floor: Floor | None = None
    error: GenerationError | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def error_message(self) -> str | None:
        """Aggregated, user-facing failure text (None on success)."""
        if self.ok:
            return None
        lines = "\n".join(f"- {e}" for e in self.errors)
        return f"Failed to generate floor {self.floor_index}:\n{lines}"

    def unwrap(self) -> Floor:
        """The generated floor, or raise the recorded error."""
        if self.ok and self.floor is not None:
            return self.floor
        if self.error is not None:
            raise self.error
        raise GenerationError(self.error_message or "Generation did not complete")


@dataclass
class _Attempt:
    """Working state of one generation attempt."""

    floor_index: int
    rng: random.Random
    size: SizeParameters | dict | None
    settings: GeneratorSettings | None = None
    floor: Floor | None = None
    theme: Theme | None = None
    warnings: list[str] = field(default_factory=list)


@dataclass
class _DeferredHook:
    floor: Floor
    hook: PopulationHook
    rng: random.Random


class FloorLoader:
    """Generates floors one at a time and holds the current one.

    Args:
        settings: Generator tunables (defaults if omitted).
        hooks: Population callables ``hook(floor, rng)`` run in the
            PopulationSpawned step, e.g. chest or enemy spawners.
        defer_population: Queue the hooks instead of running them;
            call ``run_deferred()`` once the caller is ready.
    """

    def __init__(
        self,
        settings: GeneratorSettings | None = None,
        hooks: Iterable[PopulationHook] = (),
        defer_population: bool = False,
    ):
        self.settings = settings or GeneratorSettings()
        self.hooks: list[PopulationHook] = list(hooks)
        self.defer_population = defer_population
        self.current_floor: Floor | None = None
        self.state: GenerationState | None = None
        self.is_generating = False
        self._deferred: list[_DeferredHook] = []

        self._steps: dict[GenerationState, tuple[str, type[GenerationError], Callable[[_Attempt], None]]] = {
            GenerationState.INITIALIZED: ("Initializing", InitializationFailure, self._initialize),
            GenerationState.OLD_FLOOR_CLEARED: ("Clearing old floor", InitializationFailure, self._clear_old_floor),
            GenerationState.THEME_SELECTED: ("Selecting theme", InitializationFailure, self._select_theme),
            GenerationState.ROOMS_GENERATED: ("Generating rooms", RoomGenerationFailure, self._generate_rooms),
            GenerationState.KEY_AND_EXIT_PLACED: ("Placing key and exit", PlacementFailure, self._place_key_and_exit),
            GenerationState.SPAWN_POSITION_SET: ("Setting player spawn", PlacementFailure, self._set_spawn),
            GenerationState.GEOMETRY_SYNTHESIZED: ("Building walls and colliders", GeometryFailure, self._synthesize_geometry),
            GenerationState.DECORATIONS_PLACED: ("Adding decorations", GenerationError, self._place_decorations),
            GenerationState.POPULATION_SPAWNED: ("Spawning population", GenerationError, self._spawn_population),
            GenerationState.FINALIZED: ("Finalizing", GenerationError, self._finalize),
        }

    @property
    def pending_hooks(self) -> int:
        """Number of queued population hooks."""
        return len(self._deferred)

    # ── Entry point ───────────────────────────────────────────────────

    def generate(
        self,
        floor_index: int,
        size_parameters: SizeParameters | dict | None = None,
        rng: random.Random | None = None,
        seed: int | None = None,
    ) -> GenerationResult:
        """Run one generation attempt.

        Raises GenerationInProgressError if this loader is already
        generating. Every other failure is reported in the result.
        """
        if self.is_generating:
            raise GenerationInProgressError(
                f"Floor {floor_index} requested while another floor is being generated",
                self.state,
            )
        self.is_generating = True
        try:
            attempt = _Attempt(
                floor_index=floor_index,
                rng=rng if rng is not None else random.Random(seed),
                size=size_parameters,
            )
            return self._run(attempt)
        finally:
            self.is_generating = False

    def _run(self, attempt: _Attempt) -> GenerationResult:
        logger.info("Generating floor %s", attempt.floor_index)
        self.state = None
        for target in PIPELINE_ORDER:
            description, failure_cls, step = self._steps[target]
            logger.info("[Step %d/%d] %s", target.step_number, TOTAL_STEPS, description)

            if target in NON_CRITICAL:
                self._run_non_critical(description, step, attempt)
                self.state = transition(self.state, target)
                continue

            try:
                step(attempt)
            except GenerationError as exc:
                exc.stage = exc.stage or target
                return self._fail(attempt, exc)
            except Exception as exc:
                error = failure_cls(str(exc) or type(exc).__name__, target)
                error.__cause__ = exc
                return self._fail(attempt, error)
            self.state = transition(self.state, target)

        logger.info("Floor %d generated", attempt.floor_index)
        return GenerationResult(
            floor_index=attempt.floor_index,
            ok=True,
            state=self.state,
            floor=attempt.floor,
            warnings=attempt.warnings,
        )

    def _run_non_critical(
        self, description: str, step: Callable[[_Attempt], None], attempt: _Attempt
    ) -> None:
        try:
            step(attempt)
        except Exception as exc:
            logger.warning("%s failed (continuing): %s", description, exc, exc_info=True)
            attempt.warnings.append(f"{description}: {exc}")

    def _fail(self, attempt: _Attempt, error: GenerationError) -> GenerationResult:
        self.state = transition(self.state, GenerationState.FAILED)
        logger.error(
            "Floor %s generation failed at %s: %s",
            attempt.floor_index,
            error.stage.value if error.stage else "start",
            error.message,
            exc_info=error.__cause__ is not None,
        )
        # The half-built floor is dropped
        attempt.floor = None
        return GenerationResult(
            floor_index=attempt.floor_index,
            ok=False,
            state=self.state,
            error=error,
            errors=[error.describe()],
            warnings=attempt.warnings,
        )

    # ── Critical steps ────────────────────────────────────────────────

    def _initialize(self, attempt: _Attempt) -> None:
        if not isinstance(attempt.floor_index, int) or attempt.floor_index < 1:
            raise InitializationFailure(
                f"Floor index must be a positive integer, got {attempt.floor_index!r}"
            )
        try:
            attempt.settings = GeneratorSettings.model_validate(self.settings.model_dump())
            if attempt.size is None:
                size = determine_dungeon_size(attempt.floor_index, attempt.rng)
            elif isinstance(attempt.size, SizeParameters):
                size = SizeParameters.model_validate(attempt.size.model_dump())
            else:
                size = SizeParameters.model_validate(attempt.size)
        except PydanticValidationError as exc:
            raise InitializationFailure(f"Invalid size template: {exc}") from exc
        attempt.floor = Floor(
            floor_index=attempt.floor_index,
            size=size,
            exit_radius=attempt.settings.exit_radius,
        )
        logger.debug(
            "Size: %d rooms targeted, %.0f × %.0f map",
            size.room_count, size.width, size.depth,
        )

    def _clear_old_floor(self, attempt: _Attempt) -> None:
        if self.current_floor is not None:
            logger.debug("Discarding floor %d", self.current_floor.floor_index)
        self.current_floor = None
        if self._deferred:
            logger.debug("Dropping %d queued population hooks", len(self._deferred))
        self._deferred.clear()

    def _select_theme(self, attempt: _Attempt) -> None:
        attempt.theme = get_dungeon_theme(attempt.floor_index)
        attempt.floor.theme = attempt.theme.key
        logger.info("Theme: %s", attempt.theme.name)

    def _generate_rooms(self, attempt: _Attempt) -> None:
        generate_layout(attempt.floor, attempt.settings, attempt.rng)
        if not attempt.floor.rooms:
            raise RoomGenerationFailure("No rooms were generated")

    def _place_key_and_exit(self, attempt: _Attempt) -> None:
        try:
            place_key_and_exit(attempt.floor, attempt.settings, attempt.rng)
        except ObjectivePlacementError as exc:
            raise PlacementFailure(str(exc)) from exc

    def _set_spawn(self, attempt: _Attempt) -> None:
        set_spawn_position(attempt.floor, attempt.settings)

    def _synthesize_geometry(self, attempt: _Attempt) -> None:
        synthesize_enclosure(attempt.floor, attempt.settings)
        if not attempt.floor.get_colliders():
            raise GeometryFailure("Enclosure synthesis produced no colliders")

    # ── Non-critical steps ────────────────────────────────────────────

    def _place_decorations(self, attempt: _Attempt) -> None:
        add_decorations(attempt.floor, attempt.theme, attempt.settings, attempt.rng)

    def _spawn_population(self, attempt: _Attempt) -> None:
        if self.defer_population:
            self._deferred.extend(
                _DeferredHook(attempt.floor, hook, attempt.rng) for hook in self.hooks
            )
            logger.debug("Queued %d population hooks", len(self.hooks))
            return
        for hook in self.hooks:
            self._run_hook(hook, attempt.floor, attempt.rng, attempt.warnings)

    def _finalize(self, attempt: _Attempt) -> None:
        attempt.floor.seal()
        self.current_floor = attempt.floor

    # ── Population ────────────────────────────────────────────────────

    @staticmethod
    def _run_hook(
        hook: PopulationHook, floor: Floor, rng: random.Random, warnings: list[str]
    ) -> None:
        name = getattr(hook, "__name__", type(hook).__name__)
        try:
            hook(floor, rng)
        except Exception as exc:
            logger.warning("Population hook %s failed: %s", name, exc, exc_info=True)
            warnings.append(f"Population hook {name}: {exc}")

    def run_deferred(self) -> list[str]:
        """Run queued population hooks. Returns warnings from failed hooks."""
        warnings: list[str] = []
        queued, self._deferred = self._deferred, []
        for item in queued:
            self._run_hook(item.hook, item.floor, item.rng, warnings)
        return warnings


def generate(
    floor_index: int,
    size_parameters: SizeParameters | dict | None = None,
    settings: GeneratorSettings | None = None,
    rng: random.Random | None = None,
    seed: int | None = None,
    hooks: Iterable[PopulationHook] = (),
) -> GenerationResult:
    """Generate one floor with a throwaway loader."""
    loader = FloorLoader(settings=settings, hooks=hooks)
    return loader.generate(floor_index, size_parameters, rng=rng, seed=seed)
