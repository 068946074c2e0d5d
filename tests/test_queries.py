"""Tests for the Mermaid export of the connectivity graph."""

import pytest

from dungeon_builder.models import Floor, SizeParameters, Space, SpaceClass
from dungeon_builder.queries import build_connectivity_graph, graph_to_mermaid


@pytest.fixture
def floor() -> Floor:
    f = Floor(floor_index=2, size=SizeParameters(room_count=5, width=200, depth=200))
    f.add_room(Space(x=0, z=0, width=30, depth=30, classification=SpaceClass.SPAWN))
    f.add_room(Space(x=50, z=5, width=20, depth=20, classification=SpaceClass.RADIAL))
    f.add_corridor(Space(
        x=12, z=12, width=48, depth=6,
        is_corridor=True, classification=SpaceClass.CORRIDOR,
    ))
    f.key_room, f.exit_room = "R2", "R1"
    return f


class TestMermaid:
    def test_header_and_direction(self, floor: Floor):
        text = graph_to_mermaid(build_connectivity_graph(floor), direction="TB")
        assert text.splitlines()[0] == "flowchart TB"

    def test_node_shapes(self, floor: Floor):
        text = graph_to_mermaid(build_connectivity_graph(floor))
        assert 'R1(("R1 spawn' in text
        assert 'C1[["C1 corridor' in text
        assert 'R2["R2 radial' in text

    def test_edges_listed(self, floor: Floor):
        text = graph_to_mermaid(build_connectivity_graph(floor))
        edge_lines = [line for line in text.splitlines() if "---" in line]
        assert len(edge_lines) == 2
        assert all("C1" in line for line in edge_lines)

    def test_objectives_marked(self, floor: Floor):
        text = graph_to_mermaid(
            build_connectivity_graph(floor),
            key_room=floor.key_room, exit_room=floor.exit_room,
        )
        assert "R2 radial KEY" in text
        assert "R1 spawn EXIT" in text

    def test_area_optional(self, floor: Floor):
        text = graph_to_mermaid(build_connectivity_graph(floor), show_area=False)
        assert "u²" not in text
