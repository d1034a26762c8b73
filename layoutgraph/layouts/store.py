"""Host-side storage of layout state and the per-frame driver."""

from __future__ import annotations

import copy
import logging
from typing import Any, Dict, Optional, Type

from ..geometry import Rect
from ..graph import Graph
from .base import Layout

logger = logging.getLogger(__name__)

LayoutType = Type[Layout[Any]]


class LayoutStateStore:
    """Per-layout-type state values with create-on-first-use semantics.

    Values go in and come out as deep copies, so nothing stored here aliases a
    live layout instance.
    """

    def __init__(self) -> None:
        self._states: Dict[LayoutType, Any] = {}

    def __contains__(self, layout_cls: object) -> bool:
        return layout_cls in self._states

    def __len__(self) -> int:
        return len(self._states)

    def load(self, layout_cls: LayoutType) -> Any:
        if layout_cls not in self._states:
            logger.info("Creating default state for layout %s", layout_cls.__name__)
            self._states[layout_cls] = layout_cls.default_state()
        return copy.deepcopy(self._states[layout_cls])

    def save(self, layout_cls: LayoutType, state: Any) -> None:
        self._states[layout_cls] = copy.deepcopy(state)

    def reset(self, layout_cls: Optional[LayoutType] = None) -> None:
        if layout_cls is None:
            logger.info("Clearing all stored layout state (%d entries)", len(self._states))
            self._states.clear()
            return
        if self._states.pop(layout_cls, None) is not None:
            logger.info("Cleared stored state for layout %s", layout_cls.__name__)


class LayoutEngine:
    """Drives one layout type per frame against a :class:`LayoutStateStore`."""

    def __init__(self, layout_cls: LayoutType, store: Optional[LayoutStateStore] = None) -> None:
        self.layout_cls = layout_cls
        self.store = store if store is not None else LayoutStateStore()

    @property
    def state(self) -> Any:
        return self.store.load(self.layout_cls)

    def set_state(self, state: Any) -> None:
        self.store.save(self.layout_cls, state)

    def step(self, graph: Graph, area: Rect) -> None:
        layout = self.layout_cls.from_state(self.store.load(self.layout_cls))
        layout.step(graph, area)
        self.store.save(self.layout_cls, layout.export_state())

    def switch(self, layout_cls: LayoutType, *, reset: bool = True) -> None:
        logger.info(
            "Switching layout %s -> %s (reset=%s)",
            self.layout_cls.__name__,
            layout_cls.__name__,
            reset,
        )
        if reset:
            self.store.reset()
        self.layout_cls = layout_cls

    def reset(self) -> None:
        self.store.reset(self.layout_cls)


def step_layout(
    graph: Graph, area: Rect, store: LayoutStateStore, layout_cls: LayoutType
) -> Any:
    """Run one frame of ``layout_cls`` and return the state it exported."""

    engine = LayoutEngine(layout_cls, store)
    engine.step(graph, area)
    return store.load(layout_cls)


__all__ = ["LayoutEngine", "LayoutStateStore", "LayoutType", "step_layout"]
