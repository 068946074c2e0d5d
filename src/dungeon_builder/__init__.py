"""Dungeon Builder: procedural dungeon floor generation."""

__version__ = "0.1.0"
