"""Dungeon Builder CLI.

Usage:
    python -m dungeon_builder <command> [options]

Every command prints one JSON document on stdout and exits 1 on
failure. Logs go to stderr.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError as PydanticValidationError

from dungeon_builder.config import GeneratorSettings
from dungeon_builder.generators.sizing import size_tier
from dungeon_builder.generators.themes import get_dungeon_theme
from dungeon_builder.models.floor import Floor
from dungeon_builder.pipeline.loader import generate as generate_floor
from dungeon_builder.queries.connectivity import build_connectivity_graph, unreachable_rooms
from dungeon_builder.queries.mermaid import graph_to_mermaid
from dungeon_builder.validators import validate_floor

app = typer.Typer(
    name="dungeon_builder",
    help="Dungeon Builder: procedural dungeon floor generation and validation.",
    no_args_is_help=True,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _output(data: dict) -> None:
    """Print JSON output to stdout."""
    typer.echo(json.dumps(data, indent=2, ensure_ascii=False))


def _fail(message: str) -> None:
    _output({"ok": False, "error": message})
    raise typer.Exit(1)


def _load_floor(path: Path) -> Floor:
    if not path.exists():
        _fail(f"Floor file not found: {path}")
    try:
        return Floor.load(path)
    except PydanticValidationError as exc:
        _fail(f"Invalid floor file {path}: {exc}")


def _load_settings(path: Optional[Path]) -> GeneratorSettings:
    if path is None:
        return GeneratorSettings()
    if not path.exists():
        _fail(f"Settings file not found: {path}")
    try:
        return GeneratorSettings.load(path)
    except PydanticValidationError as exc:
        _fail(f"Invalid settings file {path}: {exc}")


def _validate_json(floor: Floor, settings: GeneratorSettings) -> dict:
    """Run all validators and return structured results."""
    errors = validate_floor(floor, settings)
    return {
        "errors": sum(1 for e in errors if e.severity == "error"),
        "warnings": sum(1 for e in errors if e.severity == "warning"),
        "details": [
            {"severity": e.severity, "element_type": e.element_type, "message": e.message}
            for e in errors
        ],
    }


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log pipeline steps to stderr"),
):
    """Configure logging for every command."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

@app.command()
def generate(
    floor: int = typer.Argument(..., help="Floor index (1-based)"),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the floor JSON here"),
    settings_path: Optional[Path] = typer.Option(None, "--settings", help="Generator settings JSON"),
):
    """Generate one floor and report its summary and validation."""
    settings = _load_settings(settings_path)
    result = generate_floor(floor, settings=settings, seed=seed)
    if not result.ok:
        _output({
            "ok": False,
            "error": result.error_message,
            "stage": result.error.stage.value if result.error and result.error.stage else None,
        })
        raise typer.Exit(1)

    data = {
        "ok": True,
        "seed": seed,
        "summary": result.floor.summary(),
        "warnings": result.warnings,
        "validation": _validate_json(result.floor, settings),
    }
    if output is not None:
        data["path"] = str(result.floor.save(output))
    _output(data)


@app.command()
def validate(
    path: Path = typer.Argument(..., help="Floor JSON file"),
    settings_path: Optional[Path] = typer.Option(None, "--settings", help="Generator settings JSON"),
):
    """Run all validators on a saved floor."""
    floor = _load_floor(path)
    validation = _validate_json(floor, _load_settings(settings_path))
    _output({"ok": validation["errors"] == 0, "validation": validation})
    if validation["errors"]:
        raise typer.Exit(1)


@app.command()
def graph(
    path: Path = typer.Argument(..., help="Floor JSON file"),
    direction: str = typer.Option("LR", "--direction", "-d", help="Mermaid flowchart direction"),
):
    """Connectivity graph of a saved floor, with a Mermaid rendering."""
    floor = _load_floor(path)
    g = build_connectivity_graph(floor)
    _output({
        "ok": True,
        "nodes": len(g.nodes),
        "edges": [
            {"from": e.from_node, "to": e.to_node, "width": round(e.width, 2)}
            for e in g.edges
        ],
        "unreachable": unreachable_rooms(floor, g),
        "mermaid": graph_to_mermaid(
            g, direction=direction, key_room=floor.key_room, exit_room=floor.exit_room
        ),
    })


@app.command()
def sizes(floor: int = typer.Argument(..., help="Floor index (1-based)")):
    """Size tier and theme for a floor index."""
    if floor < 1:
        _fail(f"Floor index must be >= 1, got {floor}")
    tier = size_tier(floor)
    theme = get_dungeon_theme(floor)
    _output({
        "ok": True,
        "floor": floor,
        "room_count": [tier.min_rooms, tier.max_rooms],
        "map_size": [tier.extent, tier.extent],
        "theme": theme.key,
        "theme_name": theme.name,
        "decorations": theme.decorations,
    })


@app.command()
def version() -> None:
    """Show version."""
    from dungeon_builder import __version__

    _output({"ok": True, "version": __version__})


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    app()
