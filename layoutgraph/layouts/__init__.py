"""Pluggable layout algorithms and the host-side state plumbing that drives them."""

from .base import Layout
from .force_directed import (
    CenterGravity,
    Extra,
    ForceCap,
    FruchtermanReingold,
    FruchtermanReingoldState,
    FruchtermanReingoldWithCenterGravity,
    get_force_directed_defaults,
    ideal_edge_length,
    set_extra_enabled,
    set_force_directed_defaults,
)
from .random import RandomLayout, RandomState
from .store import LayoutEngine, LayoutStateStore, step_layout

__all__ = [
    "CenterGravity",
    "Extra",
    "ForceCap",
    "FruchtermanReingold",
    "FruchtermanReingoldState",
    "FruchtermanReingoldWithCenterGravity",
    "Layout",
    "LayoutEngine",
    "LayoutStateStore",
    "RandomLayout",
    "RandomState",
    "get_force_directed_defaults",
    "ideal_edge_length",
    "set_extra_enabled",
    "set_force_directed_defaults",
    "step_layout",
]
