"""Per-element visual and simulation state carried alongside topology."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ..geometry import Point
from .types import Color, NodeId, NodeKey


@dataclass
class Node:
    """Visual state of a graph vertex."""

    payload: Any = None
    location: Point = (0.0, 0.0)
    label: Optional[str] = None
    selected: bool = False
    # a dragged node follows the pointer; layouts must not move it
    dragged: bool = False
    color: Optional[Color] = None
    key: Optional[NodeKey] = None

    def display_label(self, node_id: NodeId) -> str:
        if self.label is not None:
            return self.label
        return str(node_id.index)


@dataclass
class Edge:
    """Visual state of a graph arc.

    ``order`` is maintained by :class:`~layoutgraph.graph.model.Graph` and is
    the rank of this edge among the edges joining the same pair of nodes.
    """

    payload: Any = None
    label: Optional[str] = None
    selected: bool = False
    color: Optional[Color] = None
    order: int = 0


__all__ = ["Edge", "Node"]
