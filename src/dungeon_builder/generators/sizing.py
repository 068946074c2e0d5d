"""Floor size tiers.

Deeper floors are larger: the floor index picks a tier, the tier fixes
the map extent and the range the target room count is drawn from.
"""

from __future__ import annotations

import random
from dataclasses import dataclass

from dungeon_builder.models.floor import SizeParameters


@dataclass(frozen=True)
class SizeTier:
    """One row of the size table."""

    max_floor: int | None  # last floor index of this tier, None = unbounded
    min_rooms: int
    max_rooms: int  # inclusive
    extent: float


SIZE_TIERS: tuple[SizeTier, ...] = (
    SizeTier(max_floor=3, min_rooms=5, max_rooms=7, extent=200.0),
    SizeTier(max_floor=7, min_rooms=8, max_rooms=11, extent=280.0),
    SizeTier(max_floor=None, min_rooms=12, max_rooms=20, extent=400.0),
)


def size_tier(floor_index: int) -> SizeTier:
    """Tier for a floor index (1-based)."""
    if floor_index < 1:
        raise ValueError(f"Floor index must be >= 1, got {floor_index}")
    for tier in SIZE_TIERS:
        if tier.max_floor is None or floor_index <= tier.max_floor:
            return tier
    raise AssertionError("size table has no unbounded tier")


def determine_dungeon_size(floor_index: int, rng: random.Random) -> SizeParameters:
    """Size parameters for a floor: room count drawn from the tier range."""
    tier = size_tier(floor_index)
    return SizeParameters(
        room_count=rng.randint(tier.min_rooms, tier.max_rooms),
        width=tier.extent,
        depth=tier.extent,
    )
