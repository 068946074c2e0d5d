"""Tests for the space connectivity graph."""

import pytest

from dungeon_builder.models import Floor, SizeParameters, Space, SpaceClass
from dungeon_builder.queries.connectivity import (
    ConnectivityGraph,
    build_connectivity_graph,
    unreachable_rooms,
)


def _corridor(x: float, z: float, width: float, depth: float) -> Space:
    return Space(
        x=x, z=z, width=width, depth=depth,
        is_corridor=True, classification=SpaceClass.CORRIDOR,
    )


# ── Fixtures ──────────────────────────────────────────────────────


@pytest.fixture
def chain() -> Floor:
    """Spawn → corridor → radial → corridor → cardinal, plus an isolated room."""
    f = Floor(floor_index=1, size=SizeParameters(room_count=5, width=200, depth=200))
    f.add_room(Space(x=0, z=0, width=30, depth=30, classification=SpaceClass.SPAWN))       # R1
    f.add_room(Space(x=50, z=5, width=20, depth=20, classification=SpaceClass.RADIAL))     # R2
    f.add_room(Space(x=50, z=60, width=20, depth=20, classification=SpaceClass.CARDINAL))  # R3
    f.add_room(Space(x=150, z=150, width=10, depth=10, classification=SpaceClass.ALCOVE))  # R4
    f.add_corridor(_corridor(12, 12, 48, 6))   # C1: R1 ↔ R2
    f.add_corridor(_corridor(57, 12, 6, 58))   # C2: R2 ↔ R3
    return f


# ── Graph tests ───────────────────────────────────────────────────


class TestGraph:
    def test_nodes(self, chain: Floor):
        graph = build_connectivity_graph(chain)
        assert set(graph.nodes) == {"R1", "R2", "R3", "R4", "C1", "C2"}
        assert graph.nodes["R1"].node_type == "spawn"
        assert graph.nodes["C1"].node_type == "corridor"
        assert graph.nodes["R1"].area == 900

    def test_one_edge_per_pair(self, chain: Floor):
        graph = build_connectivity_graph(chain)
        pairs = [tuple(sorted((e.from_node, e.to_node))) for e in graph.edges]
        assert len(pairs) == len(set(pairs))
        assert set(pairs) == {("C1", "R1"), ("C1", "R2"), ("C2", "R2"), ("C2", "R3"), ("C1", "C2")}

    def test_neighbors(self, chain: Floor):
        graph = build_connectivity_graph(chain)
        assert {n for n, _ in graph.neighbors("R2")} == {"C1", "C2"}
        assert graph.neighbors("R4") == []

    def test_has_path(self, chain: Floor):
        graph = build_connectivity_graph(chain)
        assert graph.has_path("R1", "R3")
        assert not graph.has_path("R1", "R4")
        assert not graph.has_path("R1", "missing")

    def test_reachable_from(self, chain: Floor):
        graph = build_connectivity_graph(chain)
        assert graph.reachable_from("R1") == {"R1", "R2", "R3", "C1", "C2"}
        assert graph.reachable_from("missing") == set()

    def test_shortest_path(self, chain: Floor):
        graph = build_connectivity_graph(chain)
        path = graph.shortest_path("R1", "R3")
        assert path[0] == "R1" and path[-1] == "R3"
        assert len(path) == 4  # R1 → C1 → C2 → R3
        assert graph.shortest_path("R1", "R4") == []

    def test_unreachable_rooms(self, chain: Floor):
        assert unreachable_rooms(chain) == ["R4"]

    def test_no_spawn_means_nothing_reachable(self):
        f = Floor(floor_index=1, size=SizeParameters(room_count=5, width=100, depth=100))
        f.add_room(Space(x=0, z=0, width=10, depth=10))
        assert unreachable_rooms(f) == ["R1"]

    def test_empty_graph(self):
        graph = ConnectivityGraph(floor_index=1)
        assert graph.reachable_from("R1") == set()
