"""Fruchterman-Reingold force-directed layout."""

from __future__ import annotations

import copy
import logging
import math
from typing import Dict, Optional, Sequence, Tuple, Type

import numpy as np

from ...geometry import Rect
from ...graph import Graph, NodeId
from ...logging_utils import apply_debug_logging
from .config import get_force_directed_defaults
from .extras import Extra, apply_extras, node_positions
from .state import FruchtermanReingoldState

logger = logging.getLogger(__name__)

_MIN_AREA = 1.0
_COINCIDENT_EPS = 1e-12
_GOLDEN = 0.6180339887498949


def ideal_edge_length(area: Rect, n: int, k_scale: float = 1.0) -> float:
    """``k = k_scale * sqrt(area / n)``, the distance at which an edge is at rest."""

    return k_scale * math.sqrt(max(area.area, _MIN_AREA) / max(n, 1))


def _read_positions(graph: Graph, node_ids: Sequence[NodeId]) -> np.ndarray:
    pos = node_positions(graph, node_ids)
    finite = np.isfinite(pos)
    if not finite.all():
        logger.warning(
            "Replacing %d non-finite coordinates before force-directed step", int((~finite).sum())
        )
        pos = np.nan_to_num(pos, nan=0.0, posinf=0.0, neginf=0.0)
    return pos


def _pairwise_deltas(pos: np.ndarray, epsilon: float) -> Tuple[np.ndarray, np.ndarray]:
    """Return ``delta[i, j] = pos[i] - pos[j]`` and the matching distances.

    Coincident pairs get an antisymmetric offset of length ``epsilon`` whose
    direction depends only on the pair's rows, so repeated runs agree.
    """

    delta = pos[:, None, :] - pos[None, :, :]
    dist = np.hypot(delta[..., 0], delta[..., 1])
    rows_i, rows_j = np.triu_indices(len(pos), k=1)
    coincident = dist[rows_i, rows_j] <= _COINCIDENT_EPS
    if np.any(coincident):
        ci = rows_i[coincident]
        cj = rows_j[coincident]
        angle = 2.0 * math.pi * np.mod((ci + 1) * (cj + 1) * _GOLDEN, 1.0)
        offset = epsilon * np.stack([np.cos(angle), np.sin(angle)], axis=1)
        delta[ci, cj] = offset
        delta[cj, ci] = -offset
        dist[ci, cj] = epsilon
        dist[cj, ci] = epsilon
        logger.debug("Perturbed %d coincident node pairs", int(coincident.sum()))
    return delta, dist


def repulsive_forces(pos: np.ndarray, k: float, c_repulse: float, epsilon: float) -> np.ndarray:
    """Pairwise repulsion ``c * k^2 / max(d, epsilon)`` pushing every node away from every other."""

    delta, dist = _pairwise_deltas(pos, epsilon)
    # magnitude saturates at c * k^2 / epsilon, direction comes from the true delta
    scale = c_repulse * k * k / (np.maximum(dist, epsilon) * np.maximum(dist, _COINCIDENT_EPS))
    np.fill_diagonal(scale, 0.0)
    return (scale[..., None] * delta).sum(axis=1)


def attractive_forces(
    pos: np.ndarray, sources: np.ndarray, targets: np.ndarray, k: float, c_attract: float
) -> np.ndarray:
    """Edge attraction ``c * d^2 / k`` pulling both endpoints together."""

    forces = np.zeros_like(pos)
    if sources.size == 0:
        return forces
    delta = pos[sources] - pos[targets]
    dist = np.hypot(delta[:, 0], delta[:, 1])
    pull = delta * (c_attract * dist / k)[:, None]
    np.subtract.at(forces, sources, pull)
    np.add.at(forces, targets, pull)
    return forces


def cap_displacement(moves: np.ndarray, temperature: float) -> np.ndarray:
    norms = np.hypot(moves[:, 0], moves[:, 1])
    scale = np.ones_like(norms)
    over = norms > temperature
    scale[over] = temperature / norms[over]
    return moves * scale[:, None]


def _edge_rows(graph: Graph, rows: Dict[NodeId, int]) -> Tuple[np.ndarray, np.ndarray]:
    sources = []
    targets = []
    for edge_id in graph.edge_ids():
        source, target = graph.edge_endpoints(edge_id)
        if source == target:
            continue
        sources.append(rows[source])
        targets.append(rows[target])
    return np.asarray(sources, dtype=int), np.asarray(targets, dtype=int)


def _finite_or_zero(moves: np.ndarray) -> np.ndarray:
    finite = np.isfinite(moves)
    if finite.all():
        return moves
    logger.warning("Discarding %d non-finite displacement components", int((~finite).sum()))
    return np.where(finite, moves, 0.0)


class FruchtermanReingold:
    """Force-directed layout advancing one simulation step per frame.

    Subclasses built with :meth:`compose` carry their own default extras and
    therefore their own slot in a :class:`~layoutgraph.layouts.store.LayoutStateStore`.
    """

    DEFAULT_EXTRAS: Tuple[Extra, ...] = ()

    def __init__(self, state: FruchtermanReingoldState) -> None:
        self.state = state

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(running={self.state.running}, "
            f"temperature={self.state.temperature:.4g}, iterations={self.state.iterations})"
        )

    @classmethod
    def default_state(cls) -> FruchtermanReingoldState:
        state = get_force_directed_defaults()
        state.extras = copy.deepcopy(tuple(cls.DEFAULT_EXTRAS))
        return state

    @classmethod
    def from_state(cls, state: FruchtermanReingoldState) -> "FruchtermanReingold":
        return cls(copy.deepcopy(state))

    @classmethod
    def compose(cls, *extras: Extra, name: Optional[str] = None) -> Type["FruchtermanReingold"]:
        """Return a subclass whose default state runs ``extras`` in the given order."""

        if name is None:
            name = cls.__name__ + "With" + "".join(type(extra).__name__ for extra in extras)
        return type(name, (cls,), {"DEFAULT_EXTRAS": tuple(extras), "__module__": cls.__module__})

    def export_state(self) -> FruchtermanReingoldState:
        return copy.deepcopy(self.state)

    def step(self, graph: Graph, area: Rect) -> None:
        state = self.state
        if not state.running:
            return
        node_ids = graph.node_ids()
        n = len(node_ids)
        if n < 2:
            return

        if state.temperature <= 0.0:
            state.reheat()
            logger.info("Force-directed layout heated to temperature=%.4g", state.temperature)

        k = ideal_edge_length(area, n, state.k_scale)
        pos = _read_positions(graph, node_ids)
        rows = {node_id: row for row, node_id in enumerate(node_ids)}
        sources, targets = _edge_rows(graph, rows)

        disp = repulsive_forces(pos, k, state.c_repulse, state.epsilon)
        disp += attractive_forces(pos, sources, targets, k, state.c_attract)
        apply_extras(state.extras, graph, node_ids, disp, area, k)

        moves = cap_displacement(state.dt * disp, state.temperature)
        pinned = np.fromiter((graph.node(node_id).dragged for node_id in node_ids), dtype=bool, count=n)
        moves[pinned] = 0.0
        moves = _finite_or_zero(moves)

        # every displacement is computed before any location is written
        updated = pos + moves
        for row, node_id in enumerate(node_ids):
            if pinned[row]:
                continue
            graph.node(node_id).location = (float(updated[row, 0]), float(updated[row, 1]))

        free = ~pinned
        if free.any():
            avg = float(np.hypot(moves[free, 0], moves[free, 1]).mean())
        else:
            avg = 0.0
        state.last_avg_displacement = avg
        state.iterations += 1
        state.temperature = max(state.min_temperature, state.temperature * state.cooling)
        logger.debug(
            "Force-directed step %d: nodes=%d k=%.4g temperature=%.4g avg_displacement=%.4g",
            state.iterations,
            n,
            k,
            state.temperature,
            avg,
        )

        # a fully pinned graph never auto-stops
        if free.any() and state.auto_stop_threshold is not None and avg < state.auto_stop_threshold:
            state.running = False
            logger.info(
                "Force-directed layout stopped after %d iterations (avg displacement %.4g < %.4g)",
                state.iterations,
                avg,
                state.auto_stop_threshold,
            )


apply_debug_logging(globals(), logger=logger)
