"""Force-directed layout with composable extra forces."""

from .algorithm import (
    FruchtermanReingold,
    attractive_forces,
    cap_displacement,
    ideal_edge_length,
    repulsive_forces,
)
from .config import get_force_directed_defaults, set_force_directed_defaults
from .extras import CenterGravity, Extra, ForceCap, apply_extras
from .state import FruchtermanReingoldState, set_extra_enabled

FruchtermanReingoldWithCenterGravity = FruchtermanReingold.compose(CenterGravity())

__all__ = [
    "CenterGravity",
    "Extra",
    "ForceCap",
    "FruchtermanReingold",
    "FruchtermanReingoldState",
    "FruchtermanReingoldWithCenterGravity",
    "apply_extras",
    "attractive_forces",
    "cap_displacement",
    "get_force_directed_defaults",
    "ideal_edge_length",
    "repulsive_forces",
    "set_extra_enabled",
    "set_force_directed_defaults",
]
