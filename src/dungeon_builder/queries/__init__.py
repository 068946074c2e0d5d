"""Floor queries: connectivity graph and Mermaid export."""

from dungeon_builder.queries.connectivity import (
    ConnectivityGraph,
    GraphEdge,
    GraphNode,
    build_connectivity_graph,
    graph_from_doorways,
    unreachable_rooms,
)
from dungeon_builder.queries.mermaid import graph_to_mermaid

__all__ = [
    "ConnectivityGraph",
    "GraphEdge",
    "GraphNode",
    "build_connectivity_graph",
    "graph_from_doorways",
    "unreachable_rooms",
    "graph_to_mermaid",
]
