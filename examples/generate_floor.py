"""Generate a short run of floors, the way a game session would.

Floors 1-5 with a chest spawner hooked into the population step:
- each floor is generated, validated and saved to examples/output/
- the connectivity graph of the last floor is written as Mermaid
- the key is collected and the exit reached on every floor

   N (-z)
   ↑
   |
   +--- E (+x)
"""

import random
from pathlib import Path

from dungeon_builder.config import GeneratorSettings
from dungeon_builder.models import Floor, SpaceClass
from dungeon_builder.pipeline import FloorLoader
from dungeon_builder.queries import build_connectivity_graph, graph_to_mermaid
from dungeon_builder.validators import validate_floor

SEED = 2024
FLOORS = range(1, 6)

output = Path(__file__).parent / "output"
output.mkdir(exist_ok=True)

chests: dict[int, list[str]] = {}


# --- Population hook: one chest in every alcove ---
def chest_spawner(floor: Floor, rng: random.Random) -> None:
    chests[floor.floor_index] = [r.tag for r in floor.rooms_of(SpaceClass.ALCOVE)]


settings = GeneratorSettings()
loader = FloorLoader(settings, hooks=[chest_spawner])

for floor_index in FLOORS:
    result = loader.generate(floor_index, seed=SEED + floor_index)
    if not result.ok:
        print(f"❌ {result.error_message}")
        continue
    floor = result.unwrap()

    # --- Validate ---
    errors = validate_floor(floor, settings)
    if errors:
        print(f"⚠️  Floor {floor_index} validation errors:")
        for e in errors:
            print(f"  [{e.severity}] {e.element_type}: {e.message}")
    else:
        print(f"✅ Floor {floor_index} validation passed")

    # --- Play through ---
    floor.collect_key()
    assert floor.is_player_at_exit(floor.exit_position)

    path = floor.save(output / f"floor_{floor_index}.json")
    summary = floor.summary()
    print(f"📁 Saved to: {path}")
    print(f"   Theme: {summary['theme']}")
    print(f"   Rooms: {summary['rooms']} {summary['rooms_by_class']}")
    print(f"   Corridors: {summary['corridors']}")
    print(f"   Colliders: {summary['colliders']}")
    print(f"   Key: {summary['key_room']}  Exit: {summary['exit_room']}")
    print(f"   Chests: {', '.join(chests.get(floor_index, [])) or 'none'}")
    for warning in result.warnings:
        print(f"   ⚠️  {warning}")

# --- Graph of the last floor ---
if loader.current_floor is not None:
    last = loader.current_floor
    graph = build_connectivity_graph(last)
    mermaid = graph_to_mermaid(graph, key_room=last.key_room, exit_room=last.exit_room)
    graph_file = output / f"floor_{last.floor_index}.mmd"
    graph_file.write_text(mermaid + "\n")
    print(f"📁 Graph written to: {graph_file}")
