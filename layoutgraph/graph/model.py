"""Graph model: stable-identity multigraph augmented with visual state."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List, Optional, Tuple

from ..geometry import Point, Rect, as_point, bounding_rect, is_finite_point
from .arena import StableArena
from .elements import Edge, Node
from .types import Color, Direction, EdgeId, GraphConsistencyError, NodeId, NodeKey, pair_key

logger = logging.getLogger(__name__)

PairKey = Tuple[NodeId, NodeId]


class Graph:
    """Directed or undirected multigraph whose elements carry layout state.

    Node and edge identities survive removal of other elements. Every mutation
    either succeeds completely or raises :class:`GraphConsistencyError` and
    leaves the graph untouched.
    """

    def __init__(self, directed: bool = True) -> None:
        self._directed = bool(directed)
        self._nodes: StableArena[NodeId, Node] = StableArena(NodeId)
        self._edges: StableArena[EdgeId, Edge] = StableArena(EdgeId)
        self._endpoints: Dict[EdgeId, Tuple[NodeId, NodeId]] = {}
        self._outgoing: Dict[NodeId, List[EdgeId]] = {}
        self._incoming: Dict[NodeId, List[EdgeId]] = {}
        self._pairs: Dict[PairKey, List[EdgeId]] = {}
        self._keys: Dict[NodeKey, NodeId] = {}

    def __repr__(self) -> str:
        kind = "directed" if self._directed else "undirected"
        return f"Graph({kind}, nodes={len(self._nodes)}, edges={len(self._edges)})"

    # --------------------------
    # Read access
    # --------------------------
    def is_directed(self) -> bool:
        return self._directed

    def node_count(self) -> int:
        return len(self._nodes)

    def edge_count(self) -> int:
        return len(self._edges)

    def node(self, node_id: NodeId) -> Optional[Node]:
        return self._nodes.get(node_id)

    def edge(self, edge_id: EdgeId) -> Optional[Edge]:
        return self._edges.get(edge_id)

    def contains_node(self, node_id: NodeId) -> bool:
        return node_id in self._nodes

    def contains_edge(self, edge_id: EdgeId) -> bool:
        return edge_id in self._edges

    def node_ids(self) -> List[NodeId]:
        return self._nodes.ids()

    def edge_ids(self) -> List[EdgeId]:
        return self._edges.ids()

    def nodes_iter(self) -> Iterator[Tuple[NodeId, Node]]:
        return iter(self._nodes)

    def edges_iter(self) -> Iterator[Tuple[EdgeId, Edge]]:
        return iter(self._edges)

    def edge_endpoints(self, edge_id: EdgeId) -> Optional[Tuple[NodeId, NodeId]]:
        if edge_id not in self._edges:
            return None
        return self._endpoints[edge_id]

    def node_id_by_key(self, key: NodeKey) -> Optional[NodeId]:
        return self._keys.get(key)

    def degree(self, node_id: NodeId) -> int:
        """Number of incident edge ends; a loop counts twice."""

        self._require_node(node_id)
        return len(self._outgoing[node_id]) + len(self._incoming[node_id])

    def edges_directed(self, node_id: NodeId, direction: Direction) -> List[EdgeId]:
        self._require_node(node_id)
        if direction not in ("outgoing", "incoming"):
            raise ValueError(f"unknown edge direction {direction!r}")
        if not self._directed:
            return self.incident_edges(node_id)
        if direction == "outgoing":
            return list(self._outgoing[node_id])
        return list(self._incoming[node_id])

    def incident_edges(self, node_id: NodeId) -> List[EdgeId]:
        self._require_node(node_id)
        seen = set()
        result: List[EdgeId] = []
        for edge_id in self._outgoing[node_id] + self._incoming[node_id]:
            if edge_id not in seen:
                seen.add(edge_id)
                result.append(edge_id)
        return result

    def neighbors(self, node_id: NodeId) -> List[NodeId]:
        result: List[NodeId] = []
        seen = set()
        for edge_id in self.incident_edges(node_id):
            source, target = self._endpoints[edge_id]
            other = target if source == node_id else source
            if other not in seen:
                seen.add(other)
                result.append(other)
        return result

    def parallel_edges(self, a: NodeId, b: NodeId) -> List[EdgeId]:
        """Edges joining ``a`` and ``b`` in either direction, ordered by order index."""

        return list(self._pairs.get(pair_key(a, b), []))

    def edge_groups(self) -> Dict[PairKey, List[EdgeId]]:
        return {key: list(ids) for key, ids in self._pairs.items()}

    def positions(self) -> Dict[NodeId, Point]:
        return {node_id: node.location for node_id, node in self._nodes}

    def bounds(self) -> Optional[Rect]:
        return bounding_rect(node.location for _, node in self._nodes)

    def selected_nodes(self) -> List[NodeId]:
        return [node_id for node_id, node in self._nodes if node.selected]

    def selected_edges(self) -> List[EdgeId]:
        return [edge_id for edge_id, edge in self._edges if edge.selected]

    def dragged_nodes(self) -> List[NodeId]:
        return [node_id for node_id, node in self._nodes if node.dragged]

    # --------------------------
    # Mutation
    # --------------------------
    def add_node(
        self,
        payload: Any = None,
        *,
        location: Optional[Point] = None,
        label: Optional[str] = None,
        key: Optional[NodeKey] = None,
        color: Optional[Color] = None,
    ) -> NodeId:
        if key is not None and key in self._keys:
            raise GraphConsistencyError(f"duplicate node key {key!r}")
        if location is None:
            location = (0.0, 0.0)
        elif not is_finite_point(location):
            raise GraphConsistencyError(f"node location must be a finite (x, y) pair, got {location!r}")
        node = Node(payload=payload, location=as_point(location), label=label, color=color, key=key)
        node_id = self._nodes.insert(node)
        self._outgoing[node_id] = []
        self._incoming[node_id] = []
        if key is not None:
            self._keys[key] = node_id
        return node_id

    def remove_node(self, node_id: NodeId) -> Node:
        self._require_node(node_id)
        incident = self.incident_edges(node_id)
        for edge_id in incident:
            self.remove_edge(edge_id)
        node = self._nodes.remove(node_id)
        logger.debug("Removed node %r together with %d incident edges", node_id, len(incident))
        del self._outgoing[node_id]
        del self._incoming[node_id]
        if node.key is not None:
            self._keys.pop(node.key, None)
        return node

    def add_edge(
        self,
        source: NodeId,
        target: NodeId,
        payload: Any = None,
        *,
        label: Optional[str] = None,
        color: Optional[Color] = None,
    ) -> EdgeId:
        for endpoint in (source, target):
            if endpoint not in self._nodes:
                raise GraphConsistencyError(f"cannot connect edge to absent node {endpoint!r}")
        siblings = self._pairs.setdefault(pair_key(source, target), [])
        edge = Edge(payload=payload, label=label, color=color, order=len(siblings))
        edge_id = self._edges.insert(edge)
        siblings.append(edge_id)
        self._endpoints[edge_id] = (source, target)
        self._outgoing[source].append(edge_id)
        self._incoming[target].append(edge_id)
        return edge_id

    def remove_edge(self, edge_id: EdgeId) -> Edge:
        if edge_id not in self._edges:
            raise GraphConsistencyError(f"unknown or stale edge {edge_id!r}")
        source, target = self._endpoints.pop(edge_id)
        self._outgoing[source].remove(edge_id)
        self._incoming[target].remove(edge_id)
        key = pair_key(source, target)
        siblings = self._pairs[key]
        siblings.remove(edge_id)
        if siblings:
            self._renumber(siblings)
        else:
            del self._pairs[key]
        return self._edges.remove(edge_id)

    def _renumber(self, siblings: List[EdgeId]) -> None:
        for order, sibling in enumerate(siblings):
            self._edges.get(sibling).order = order

    def set_location(self, node_id: NodeId, location: Point) -> None:
        node = self._require_node(node_id)
        if not is_finite_point(location):
            raise GraphConsistencyError(f"node location must be a finite (x, y) pair, got {location!r}")
        node.location = as_point(location)

    def set_selected(self, node_id: NodeId, selected: bool) -> None:
        self._require_node(node_id).selected = bool(selected)

    def set_dragged(self, node_id: NodeId, dragged: bool) -> None:
        self._require_node(node_id).dragged = bool(dragged)

    def set_label(self, node_id: NodeId, label: Optional[str]) -> None:
        self._require_node(node_id).label = label

    def set_color(self, node_id: NodeId, color: Optional[Color]) -> None:
        self._require_node(node_id).color = color

    def set_edge_selected(self, edge_id: EdgeId, selected: bool) -> None:
        self._require_edge(edge_id).selected = bool(selected)

    def set_edge_label(self, edge_id: EdgeId, label: Optional[str]) -> None:
        self._require_edge(edge_id).label = label

    def clear_selection(self) -> None:
        for _, node in self._nodes:
            node.selected = False
        for _, edge in self._edges:
            edge.selected = False

    def _require_node(self, node_id: NodeId) -> Node:
        node = self._nodes.get(node_id)
        if node is None:
            raise GraphConsistencyError(f"unknown or stale node {node_id!r}")
        return node

    def _require_edge(self, edge_id: EdgeId) -> Edge:
        edge = self._edges.get(edge_id)
        if edge is None:
            raise GraphConsistencyError(f"unknown or stale edge {edge_id!r}")
        return edge


__all__ = ["Graph", "PairKey"]
