"""Process-wide default parameters for the force-directed layout."""

from __future__ import annotations

import copy

from .state import FruchtermanReingoldState

_FORCE_DIRECTED_DEFAULTS = FruchtermanReingoldState()


def get_force_directed_defaults() -> FruchtermanReingoldState:
    return copy.deepcopy(_FORCE_DIRECTED_DEFAULTS)


def set_force_directed_defaults(state: FruchtermanReingoldState) -> None:
    global _FORCE_DIRECTED_DEFAULTS
    _FORCE_DIRECTED_DEFAULTS = copy.deepcopy(state)


__all__ = ["get_force_directed_defaults", "set_force_directed_defaults"]
