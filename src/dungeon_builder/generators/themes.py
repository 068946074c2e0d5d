"""Dungeon themes.

A theme names the look of a floor band and lists the decoration kinds
that may be scattered in its rooms. Colors, textures and fog belong to
the renderer and are not part of the floor description.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class Theme(BaseModel):
    key: str
    name: str
    decorations: list[str] = Field(min_length=1)


THEMES: dict[str, Theme] = {
    "stone": Theme(key="stone", name="Stone Dungeon", decorations=["torch", "barrel", "crate", "rock"]),
    "cave": Theme(key="cave", name="Natural Cave", decorations=["rock", "torch", "stalagmite"]),
    "ruins": Theme(key="ruins", name="Ancient Ruins", decorations=["pillar", "statue", "rubble", "torch"]),
    "crypt": Theme(key="crypt", name="Dark Crypt", decorations=["tombstone", "bones", "cobweb", "torch"]),
    "forest": Theme(key="forest", name="Overgrown Forest", decorations=["bush", "mushroom", "stump", "vine"]),
}

# (last floor index, theme key); floors beyond the table use the forest theme
_THEME_BANDS = ((3, "stone"), (6, "cave"), (9, "ruins"), (12, "crypt"))


def get_dungeon_theme(floor_index: int) -> Theme:
    """Theme for a floor index."""
    for last_floor, key in _THEME_BANDS:
        if floor_index <= last_floor:
            return THEMES[key]
    return THEMES["forest"]


def get_theme_by_name(name: str) -> Theme:
    """Theme by key; unknown keys fall back to stone."""
    return THEMES.get(name, THEMES["stone"])


def get_all_themes() -> list[Theme]:
    return list(THEMES.values())
