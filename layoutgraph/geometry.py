"""Plain value types for positions and drawing areas."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

Point = Tuple[float, float]


def is_finite_point(value: object) -> bool:
    """Return ``True`` when *value* is an ``(x, y)`` pair of finite numbers."""

    if isinstance(value, (str, bytes)):
        return False
    try:
        x, y = value  # type: ignore[misc]
        x, y = float(x), float(y)
    except (TypeError, ValueError):
        return False
    return math.isfinite(x) and math.isfinite(y)


def as_point(value: Iterable[float]) -> Point:
    x, y = value
    return (float(x), float(y))


def distance(a: Point, b: Point) -> float:
    return math.hypot(b[0] - a[0], b[1] - a[1])


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle given by its origin (min corner) and extent."""

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    def __post_init__(self) -> None:
        for name in ("x", "y", "width", "height"):
            value = float(getattr(self, name))
            if not math.isfinite(value):
                raise ValueError(f"Rect.{name} must be finite, got {value!r}")
            object.__setattr__(self, name, value)
        if self.width < 0.0 or self.height < 0.0:
            raise ValueError(f"Rect extent must be non-negative, got {self.width}x{self.height}")

    @classmethod
    def from_min_max(cls, min_point: Point, max_point: Point) -> "Rect":
        return cls(
            min_point[0],
            min_point[1],
            max_point[0] - min_point[0],
            max_point[1] - min_point[1],
        )

    @property
    def min(self) -> Point:
        return (self.x, self.y)

    @property
    def max(self) -> Point:
        return (self.x + self.width, self.y + self.height)

    @property
    def center(self) -> Point:
        return (self.x + 0.5 * self.width, self.y + 0.5 * self.height)

    @property
    def area(self) -> float:
        return self.width * self.height

    def is_degenerate(self) -> bool:
        return self.width <= 0.0 or self.height <= 0.0

    def contains(self, point: Point, tol: float = 0.0) -> bool:
        return (
            self.x - tol <= point[0] <= self.x + self.width + tol
            and self.y - tol <= point[1] <= self.y + self.height + tol
        )


def bounding_rect(points: Iterable[Point]) -> Optional[Rect]:
    xs = []
    ys = []
    for x, y in points:
        xs.append(x)
        ys.append(y)
    if not xs:
        return None
    return Rect.from_min_max((min(xs), min(ys)), (max(xs), max(ys)))


__all__ = ["Point", "Rect", "as_point", "bounding_rect", "distance", "is_finite_point"]
