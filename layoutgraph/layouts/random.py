"""One-shot random scatter layout."""

from __future__ import annotations

import copy
import logging
import math
from dataclasses import dataclass
from typing import Literal, Optional

import numpy as np
from scipy.stats import qmc

from ..geometry import Rect
from ..graph import Graph

logger = logging.getLogger(__name__)

ScatterMethod = Literal["uniform", "sobol"]

DEFAULT_SPAN = 100.0


@dataclass
class RandomState:
    """``triggered`` flips to ``True`` once the scatter has been applied."""

    triggered: bool = False
    seed: Optional[int] = None
    method: ScatterMethod = "uniform"

    def __post_init__(self) -> None:
        if self.method not in ("uniform", "sobol"):
            raise ValueError(f"unknown scatter method {self.method!r}")


def _unit_samples(n: int, method: ScatterMethod, seed: Optional[int]) -> np.ndarray:
    if method == "sobol":
        engine = qmc.Sobol(d=2, scramble=True, seed=seed)
        # power-of-two draws keep the sequence balanced
        return engine.random_base2(m=max(0, math.ceil(math.log2(n))))[:n]
    rng = np.random.default_rng(seed)
    return rng.random((n, 2))


def scatter_area(area: Rect) -> Rect:
    if area.is_degenerate():
        return Rect(0.0, 0.0, DEFAULT_SPAN, DEFAULT_SPAN)
    return area


class RandomLayout:
    """Scatter every node once inside the drawing area, then stay idle.

    Dragged nodes keep their location. Reset the stored state to scatter again.
    """

    def __init__(self, state: RandomState) -> None:
        self.state = state

    @classmethod
    def default_state(cls) -> RandomState:
        return RandomState()

    @classmethod
    def from_state(cls, state: RandomState) -> "RandomLayout":
        return cls(copy.deepcopy(state))

    def export_state(self) -> RandomState:
        return copy.deepcopy(self.state)

    def step(self, graph: Graph, area: Rect) -> None:
        if self.state.triggered:
            return
        node_ids = [node_id for node_id, node in graph.nodes_iter() if not node.dragged]
        if node_ids:
            box = scatter_area(area)
            unit = _unit_samples(len(node_ids), self.state.method, self.state.seed)
            points = qmc.scale(unit, list(box.min), list(box.max))
            for node_id, (x, y) in zip(node_ids, points):
                graph.node(node_id).location = (float(x), float(y))
        self.state.triggered = True
        logger.info(
            "Scattered %d nodes with method=%s seed=%s", len(node_ids), self.state.method, self.state.seed
        )


__all__ = ["DEFAULT_SPAN", "RandomLayout", "RandomState", "ScatterMethod", "scatter_area"]
