"""Graph model with stable identities and per-element visual state."""

from .arena import StableArena
from .elements import Edge, Node
from .model import Graph
from .transform import from_networkx, to_networkx
from .types import Direction, EdgeId, GraphConsistencyError, NodeId, pair_key

__all__ = [
    "Direction",
    "Edge",
    "EdgeId",
    "Graph",
    "GraphConsistencyError",
    "Node",
    "NodeId",
    "StableArena",
    "from_networkx",
    "pair_key",
    "to_networkx",
]
