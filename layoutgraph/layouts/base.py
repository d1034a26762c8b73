"""Contract implemented by every layout algorithm."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, TypeVar

if TYPE_CHECKING:  # pragma: no cover - imported for type checking only
    from ..geometry import Rect
    from ..graph import Graph

S = TypeVar("S")


class Layout(Protocol[S]):
    """Protocol implemented by layout algorithms.

    A layout is rebuilt from its persisted state every frame, advanced by one
    :meth:`step`, and its state is exported again for the next frame. The
    state value is owned by the host (see :class:`~layoutgraph.layouts.store.LayoutStateStore`).
    """

    @classmethod
    def default_state(cls) -> S:
        """Return the state used when the host has none stored yet."""

    @classmethod
    def from_state(cls, state: S) -> "Layout[S]":
        """Build an instance from a previously exported (or default) state."""

    def step(self, graph: "Graph", area: "Rect") -> None:
        """Advance one frame, updating node locations of ``graph`` in place."""

    def export_state(self) -> S:
        """Return the state to persist for the next :meth:`from_state` call."""


__all__ = ["Layout"]
