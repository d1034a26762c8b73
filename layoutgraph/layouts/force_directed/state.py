"""Persisted simulation state for the force-directed layout."""

from __future__ import annotations

import copy
import dataclasses
from dataclasses import dataclass
from typing import Optional, Tuple

from .extras import Extra


@dataclass
class FruchtermanReingoldState:
    """Simulation variables and tunables carried between frames.

    ``temperature`` caps the per-node displacement of a step. A non-positive
    temperature means the simulation is cold; the next running step reheats it
    to ``initial_temperature``. After each step the temperature is multiplied
    by ``cooling`` and floored at ``min_temperature``, so a running layout keeps
    reacting to graph edits and drags.
    """

    running: bool = False
    temperature: float = 0.0
    iterations: int = 0
    last_avg_displacement: Optional[float] = None

    dt: float = 0.05
    k_scale: float = 1.0
    c_repulse: float = 1.0
    c_attract: float = 1.0
    epsilon: float = 1e-3

    initial_temperature: float = 10.0
    cooling: float = 0.98
    min_temperature: float = 1.0
    auto_stop_threshold: Optional[float] = None

    extras: Tuple[Extra, ...] = ()

    def __post_init__(self) -> None:
        self.extras = tuple(self.extras)
        if self.epsilon <= 0.0:
            raise ValueError("epsilon must be positive")
        if not 0.0 < self.cooling <= 1.0:
            raise ValueError("cooling must lie in (0, 1]")
        if self.min_temperature < 0.0 or self.initial_temperature < self.min_temperature:
            raise ValueError("temperatures must satisfy 0 <= min_temperature <= initial_temperature")

    def start(self) -> None:
        self.running = True

    def stop(self) -> None:
        self.running = False

    def reheat(self) -> None:
        self.temperature = self.initial_temperature


def set_extra_enabled(
    state: FruchtermanReingoldState, index: int, enabled: bool
) -> FruchtermanReingoldState:
    """Return a copy of ``state`` with the extra at ``index`` toggled.

    The extra keeps its position in the sequence either way.
    """

    updated = copy.deepcopy(state)
    extras = list(updated.extras)
    extras[index] = dataclasses.replace(extras[index], enabled=bool(enabled))
    updated.extras = tuple(extras)
    return updated


__all__ = ["FruchtermanReingoldState", "set_extra_enabled"]
