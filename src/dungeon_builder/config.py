"""Generator settings.

Every tunable constant of the floor generator lives here, with defaults
matching the shipped game. Settings are plain pydantic models so they
can be loaded from / saved to JSON and validated up front.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, model_validator


class SizeTemplate(BaseModel):
    """Size range for one room tier. Sampled per axis as integers in [min, max)."""

    min_width: int = Field(gt=0)
    max_width: int = Field(gt=0)
    min_depth: int = Field(gt=0)
    max_depth: int = Field(gt=0)

    @model_validator(mode="after")
    def min_below_max(self) -> SizeTemplate:
        if self.min_width >= self.max_width:
            raise ValueError(
                f"min_width ({self.min_width}) must be below max_width ({self.max_width})"
            )
        if self.min_depth >= self.max_depth:
            raise ValueError(
                f"min_depth ({self.min_depth}) must be below max_depth ({self.max_depth})"
            )
        return self


class GeneratorSettings(BaseModel):
    """Tunables for layout, placement and enclosure synthesis."""

    # Layout
    center_room_size: int = Field(default=30, gt=0)
    radial_size: SizeTemplate = Field(
        default_factory=lambda: SizeTemplate(min_width=20, max_width=40, min_depth=20, max_depth=40)
    )
    cardinal_size: SizeTemplate = Field(
        default_factory=lambda: SizeTemplate(min_width=25, max_width=45, min_depth=25, max_depth=45)
    )
    cardinal_plus_size: SizeTemplate = Field(
        default_factory=lambda: SizeTemplate(min_width=30, max_width=60, min_depth=30, max_depth=60)
    )
    room_spacing: float = Field(default=16.0, gt=0, description="Base gap between rings")
    corridor_width: float = Field(default=6.0, gt=0)
    radial_chance: float = Field(default=0.8, ge=0, le=1)
    cardinal_chance: float = Field(default=0.5, ge=0, le=1)
    cardinal_plus_chance: float = Field(default=0.4, ge=0, le=1)

    # Alcoves
    alcove_chance: float = Field(default=0.7, ge=0, le=1)
    alcove_length_range: tuple[float, float] = Field(
        default=(0.4, 0.8), description="Fraction of the room's longest edge"
    )
    alcove_depth_range: tuple[float, float] = Field(
        default=(0.2, 0.3), description="Fraction of the room's longest edge"
    )

    # Objectives
    alcove_key_chance: float = Field(default=0.3, ge=0, le=1)
    key_float_height: float = Field(default=1.0, ge=0)
    spawn_height: float = Field(default=1.0, ge=0)
    exit_radius: float = Field(default=2.0, gt=0)

    # Enclosure
    adjacency_tolerance: float = Field(default=1.0, ge=0)
    wall_thickness: float = Field(default=0.5, gt=0)
    wall_height: float = Field(default=3.0, gt=0)
    min_segment_width: float = Field(default=0.1, gt=0)
    corner_clearance_factor: float = Field(
        default=1.5, ge=0, description="Multiple of wall thickness"
    )
    slab_thickness: float = Field(default=0.2, gt=0)

    # Decorations
    decoration_margin: float = Field(default=1.5, ge=0)
    decoration_area_per_item: float = Field(default=40.0, gt=0)
    decoration_min_room_size: float = Field(default=8.0, gt=0)

    @model_validator(mode="after")
    def ranges_ordered(self) -> GeneratorSettings:
        for name in ("alcove_length_range", "alcove_depth_range"):
            low, high = getattr(self, name)
            if not 0 < low <= high <= 1:
                raise ValueError(f"{name} must satisfy 0 < low <= high <= 1, got {(low, high)}")
        return self

    @property
    def corner_clearance(self) -> float:
        """Distance from a corner within which a doorway suppresses the pillar."""
        return self.corner_clearance_factor * self.wall_thickness

    # ── File I/O ──────────────────────────────────────────────────────

    @classmethod
    def load(cls, path: str | Path) -> GeneratorSettings:
        """Load settings from a JSON file."""
        path = Path(path)
        return cls.model_validate_json(path.read_text())

    def save(self, path: str | Path) -> Path:
        """Save settings to a JSON file. Creates parent dirs if needed."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.model_dump_json(indent=2))
        return path
