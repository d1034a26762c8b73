from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable, Literal, Tuple

Direction = Literal["outgoing", "incoming"]
Color = Tuple[int, int, int, int]


class GraphConsistencyError(ValueError):
    """Raised when a mutation would break graph consistency; the graph is left unchanged."""


@dataclass(frozen=True, order=True)
class SlotId:
    """Arena slot index paired with the generation it was issued at."""

    index: int
    generation: int = 0

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.index}v{self.generation})"


class NodeId(SlotId):
    """Stable identity of a node."""


class EdgeId(SlotId):
    """Stable identity of an edge."""


def pair_key(a: NodeId, b: NodeId) -> Tuple[NodeId, NodeId]:
    """Unordered endpoint key shared by all parallel edges between ``a`` and ``b``."""

    return (a, b) if a <= b else (b, a)


NodeKey = Hashable


__all__ = [
    "Color",
    "Direction",
    "EdgeId",
    "GraphConsistencyError",
    "NodeId",
    "NodeKey",
    "SlotId",
    "pair_key",
]
