from .geometry import Point, Rect
from .graph import (
    Edge,
    EdgeId,
    Graph,
    GraphConsistencyError,
    Node,
    NodeId,
    from_networkx,
    to_networkx,
)
from .layouts import (
    CenterGravity,
    Extra,
    ForceCap,
    FruchtermanReingold,
    FruchtermanReingoldState,
    FruchtermanReingoldWithCenterGravity,
    Layout,
    LayoutEngine,
    LayoutStateStore,
    RandomLayout,
    RandomState,
    get_force_directed_defaults,
    set_extra_enabled,
    set_force_directed_defaults,
    step_layout,
)

__all__ = [
    'CenterGravity',
    'Edge',
    'EdgeId',
    'Extra',
    'ForceCap',
    'FruchtermanReingold',
    'FruchtermanReingoldState',
    'FruchtermanReingoldWithCenterGravity',
    'Graph',
    'GraphConsistencyError',
    'Layout',
    'LayoutEngine',
    'LayoutStateStore',
    'Node',
    'NodeId',
    'Point',
    'RandomLayout',
    'RandomState',
    'Rect',
    'from_networkx',
    'get_force_directed_defaults',
    'set_extra_enabled',
    'set_force_directed_defaults',
    'step_layout',
    'to_networkx',
]
