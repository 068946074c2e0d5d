"""Mermaid diagram export for connectivity graphs.

Converts a ConnectivityGraph to Mermaid flowchart syntax, renderable
to SVG/PNG by any Mermaid-compatible tool.
"""

from __future__ import annotations

from dungeon_builder.queries.connectivity import ConnectivityGraph


# Node shape by space classification
_NODE_SHAPES = {
    "spawn": ("((", "))"),        # circle
    "corridor": ("[[", "]]"),     # subroutine shape
    "alcove": ("(", ")"),         # rounded
    "cardinal_plus": ("{{", "}}"),  # hexagon
}
_DEFAULT_SHAPE = ("[", "]")


def _sanitize_id(name: str) -> str:
    """Convert a space tag to a valid Mermaid node ID."""
    return name.replace(" ", "_").replace("-", "_").replace(".", "_")


def graph_to_mermaid(
    graph: ConnectivityGraph,
    direction: str = "LR",
    show_area: bool = True,
    key_room: str | None = None,
    exit_room: str | None = None,
) -> str:
    """Convert a connectivity graph to Mermaid flowchart syntax.

    Args:
        graph: The connectivity graph to export.
        direction: Flowchart direction (LR, TB, RL, BT).
        show_area: Include area in node labels.
        key_room: Tag of the key room, marked in its label.
        exit_room: Tag of the exit room, marked in its label.
    """
    lines = [f"flowchart {direction}"]

    for name, node in sorted(graph.nodes.items()):
        node_id = _sanitize_id(name)
        label = f"{name} {node.node_type}"
        if name == key_room:
            label += " KEY"
        if name == exit_room:
            label += " EXIT"
        if show_area and node.area > 0:
            label += f"\\n{node.area:.0f}u²"

        left, right = _NODE_SHAPES.get(node.node_type, _DEFAULT_SHAPE)
        lines.append(f"    {node_id}{left}\"{label}\"{right}")

    lines.append("")
    for edge in graph.edges:
        from_id = _sanitize_id(edge.from_node)
        to_id = _sanitize_id(edge.to_node)
        lines.append(f"    {from_id} ---|\"{edge.width:.1f}\"| {to_id}")

    return "\n".join(lines)
