"""Conversion between :class:`Graph` and networkx graphs."""

from __future__ import annotations

import logging
from typing import Any, Dict, Hashable

import networkx as nx

from ..geometry import is_finite_point
from .model import Graph
from .types import NodeId

logger = logging.getLogger(__name__)

_NODE_ATTRS = ("pos", "label", "color")
_EDGE_ATTRS = ("label", "color")


def _split(data: Dict[str, Any], reserved) -> Dict[str, Any]:
    return {key: value for key, value in data.items() if key not in reserved}


def from_networkx(source: nx.Graph) -> Graph:
    """Build a :class:`Graph` from any networkx graph.

    Node keys become :attr:`Node.key`; ``pos``, ``label`` and ``color``
    attributes seed the visual state and the remaining attributes are kept as
    payload. Multigraph edge keys are kept as parallel edges.
    """

    graph = Graph(directed=source.is_directed())
    ids: Dict[Hashable, NodeId] = {}
    for key, data in source.nodes(data=True):
        pos = data.get("pos")
        if pos is not None and not is_finite_point(pos):
            logger.warning("Ignoring non-finite position %r for node %r", pos, key)
            pos = None
        ids[key] = graph.add_node(
            _split(data, _NODE_ATTRS) or None,
            location=tuple(pos) if pos is not None else None,
            label=data.get("label"),
            color=data.get("color"),
            key=key,
        )

    if source.is_multigraph():
        edge_iter = ((u, v, data) for u, v, _, data in source.edges(keys=True, data=True))
    else:
        edge_iter = source.edges(data=True)
    for u, v, data in edge_iter:
        graph.add_edge(
            ids[u],
            ids[v],
            _split(data, _EDGE_ATTRS) or None,
            label=data.get("label"),
            color=data.get("color"),
        )

    logger.info(
        "Converted networkx graph with %d nodes and %d edges", graph.node_count(), graph.edge_count()
    )
    return graph


def to_networkx(graph: Graph) -> nx.MultiGraph:
    """Export topology and visual state as a networkx multigraph."""

    target = nx.MultiDiGraph() if graph.is_directed() else nx.MultiGraph()
    names: Dict[NodeId, Hashable] = {}
    for node_id, node in graph.nodes_iter():
        name = node.key if node.key is not None else node_id
        names[node_id] = name
        target.add_node(
            name,
            pos=node.location,
            label=node.display_label(node_id),
            selected=node.selected,
            payload=node.payload,
        )
    for edge_id, edge in graph.edges_iter():
        source, dest = graph.edge_endpoints(edge_id)
        target.add_edge(
            names[source],
            names[dest],
            label=edge.label,
            selected=edge.selected,
            order=edge.order,
            payload=edge.payload,
        )
    return target


__all__ = ["from_networkx", "to_networkx"]
