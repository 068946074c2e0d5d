"""Space connectivity graph builder.

Builds a graph where nodes = rooms and corridor segments, edges =
doorways. Reachability from the spawn room over this graph is the
central correctness property of a generated floor.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from dungeon_builder.enclosure.doorways import Doorway, find_doorways
from dungeon_builder.models.floor import Floor


# ── Graph data structures ────────────────────────────────────────────


@dataclass
class GraphNode:
    """A node in the connectivity graph (a room or corridor segment)."""

    name: str
    node_type: str  # space classification: 'spawn', 'radial', ..., 'corridor'
    area: float


@dataclass
class GraphEdge:
    """An edge in the connectivity graph (an opening between two spaces)."""

    from_node: str
    to_node: str
    width: float  # widest doorway span between the two
    direction: str  # edge of from_node the opening is on


@dataclass
class ConnectivityGraph:
    """Space connectivity graph for one floor.

    The graph is undirected; each pair of spaces has at most one edge.
    """

    floor_index: int
    nodes: dict[str, GraphNode] = field(default_factory=dict)
    edges: list[GraphEdge] = field(default_factory=list)

    def neighbors(self, node_name: str) -> list[tuple[str, GraphEdge]]:
        """Get all neighbors of a node with their connecting edges."""
        result = []
        for edge in self.edges:
            if edge.from_node == node_name:
                result.append((edge.to_node, edge))
            elif edge.to_node == node_name:
                result.append((edge.from_node, edge))
        return result

    def has_path(self, start: str, end: str) -> bool:
        """Check if a path exists between two nodes (BFS)."""
        if start not in self.nodes or end not in self.nodes:
            return False
        return end in self.reachable_from(start)

    def reachable_from(self, start: str) -> set[str]:
        """Get all nodes reachable from a starting node (BFS)."""
        if start not in self.nodes:
            return set()
        visited = {start}
        queue = [start]
        while queue:
            current = queue.pop(0)
            for neighbor, _ in self.neighbors(current):
                if neighbor not in visited:
                    visited.add(neighbor)
                    queue.append(neighbor)
        return visited

    def shortest_path(self, start: str, end: str) -> list[str]:
        """Node names along a shortest path, or [] if unreachable."""
        if start not in self.nodes or end not in self.nodes:
            return []
        previous: dict[str, str | None] = {start: None}
        queue = [start]
        while queue:
            current = queue.pop(0)
            if current == end:
                break
            for neighbor, _ in self.neighbors(current):
                if neighbor not in previous:
                    previous[neighbor] = current
                    queue.append(neighbor)
        if end not in previous:
            return []
        path = [end]
        while previous[path[-1]] is not None:
            path.append(previous[path[-1]])
        return path[::-1]


# ── Main graph builder ───────────────────────────────────────────────


def graph_from_doorways(floor: Floor, doorways: list[Doorway]) -> ConnectivityGraph:
    """Build the graph for a floor from already-detected doorways."""
    graph = ConnectivityGraph(floor_index=floor.floor_index)
    for space in floor.all_spaces():
        graph.nodes[space.tag] = GraphNode(
            name=space.tag,
            node_type=space.classification.value,
            area=space.area,
        )

    by_pair: dict[tuple[str, str], GraphEdge] = {}
    for doorway in doorways:
        key = tuple(sorted((doorway.owner, doorway.connecting)))
        edge = by_pair.get(key)
        if edge is None:
            by_pair[key] = GraphEdge(
                from_node=doorway.owner,
                to_node=doorway.connecting,
                width=doorway.span.length,
                direction=doorway.direction.value,
            )
        elif doorway.span.length > edge.width:
            edge.width = doorway.span.length
    graph.edges = list(by_pair.values())
    return graph


def build_connectivity_graph(floor: Floor, tolerance: float = 1.0) -> ConnectivityGraph:
    """Build a connectivity graph for a floor.

    Nodes = rooms and corridor segments.
    Edges = pairs of spaces joined by at least one doorway.
    """
    doorways = find_doorways(floor.rooms, floor.corridors, tolerance)
    return graph_from_doorways(floor, doorways)


def unreachable_rooms(floor: Floor, graph: ConnectivityGraph | None = None) -> list[str]:
    """Tags of rooms that cannot be reached from the spawn room.

    Every room counts as unreachable when the floor has no spawn room.
    """
    if graph is None:
        graph = build_connectivity_graph(floor)
    spawn = floor.spawn_room
    reached = graph.reachable_from(spawn.tag) if spawn is not None else set()
    return [room.tag for room in floor.rooms if room.tag not in reached]
