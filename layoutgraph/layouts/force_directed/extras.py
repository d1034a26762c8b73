"""Composable force contributions for the force-directed layout.

Extras run after the core repulsion and attraction, in the order they are
declared, and each one adds into the same per-node accumulator. An extra that
inspects the accumulator (such as :class:`ForceCap`) therefore sees every
contribution declared before it and none declared after it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, Sequence

import numpy as np

if TYPE_CHECKING:  # pragma: no cover - imported for type checking only
    from ...geometry import Rect
    from ...graph import Graph, NodeId


class Extra(Protocol):
    """Protocol implemented by additional force contributors.

    ``disp`` is an ``(n, 2)`` array aligned with ``node_ids``. Implementations
    may read any graph state but write only into ``disp``.
    """

    enabled: bool

    def apply(
        self,
        graph: "Graph",
        node_ids: Sequence["NodeId"],
        disp: np.ndarray,
        area: "Rect",
        k: float,
    ) -> None:
        ...


def node_positions(graph: "Graph", node_ids: Sequence["NodeId"]) -> np.ndarray:
    """Current locations of ``node_ids`` as an ``(n, 2)`` array."""

    out = np.empty((len(node_ids), 2), dtype=float)
    for row, node_id in enumerate(node_ids):
        out[row] = graph.node(node_id).location
    return out


@dataclass
class CenterGravity:
    """Pull every node towards the centre of the drawing area.

    The pull grows linearly with the distance to the centre, scaled by ``c``.
    """

    c: float = 0.1
    enabled: bool = True

    def apply(self, graph, node_ids, disp, area, k) -> None:
        if not node_ids:
            return
        center = np.asarray(area.center, dtype=float)
        disp += self.c * (center - node_positions(graph, node_ids))


@dataclass
class ForceCap:
    """Clamp each accumulated force vector to ``max_force`` in magnitude."""

    max_force: float = 1000.0
    enabled: bool = True

    def apply(self, graph, node_ids, disp, area, k) -> None:
        if disp.size == 0:
            return
        norms = np.hypot(disp[:, 0], disp[:, 1])
        over = norms > self.max_force
        if np.any(over):
            disp[over] *= (self.max_force / norms[over])[:, None]


def apply_extras(
    extras: Sequence[Extra],
    graph: "Graph",
    node_ids: Sequence["NodeId"],
    disp: np.ndarray,
    area: "Rect",
    k: float,
) -> int:
    """Run the enabled ``extras`` in order; return how many ran."""

    applied = 0
    for extra in extras:
        if not extra.enabled:
            continue
        extra.apply(graph, node_ids, disp, area, k)
        applied += 1
    return applied


__all__ = ["CenterGravity", "Extra", "ForceCap", "apply_extras", "node_positions"]
