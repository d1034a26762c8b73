"""Slot arena handing out generation-checked identities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Iterator, List, Optional, Tuple, Type, TypeVar

from .types import SlotId

T = TypeVar("T")
I = TypeVar("I", bound=SlotId)


@dataclass
class _Slot(Generic[T]):
    generation: int
    value: Optional[T] = None
    occupied: bool = False


class StableArena(Generic[I, T]):
    """Container whose identities stay valid across removal of other entries.

    Removing an entry frees its slot and bumps the slot generation, so an id
    issued before the removal no longer resolves even after the slot is reused.
    """

    def __init__(self, id_type: Type[I]) -> None:
        self._id_type = id_type
        self._slots: List[_Slot[T]] = []
        self._free: List[int] = []
        self._len = 0

    def __len__(self) -> int:
        return self._len

    def __iter__(self) -> Iterator[Tuple[I, T]]:
        for index, slot in enumerate(self._slots):
            if slot.occupied:
                yield self._id_type(index, slot.generation), slot.value  # type: ignore[misc]

    def __contains__(self, ident: object) -> bool:
        return self._resolve(ident) is not None

    def _resolve(self, ident: object) -> Optional[_Slot[T]]:
        if not isinstance(ident, self._id_type):
            return None
        if not 0 <= ident.index < len(self._slots):
            return None
        slot = self._slots[ident.index]
        if not slot.occupied or slot.generation != ident.generation:
            return None
        return slot

    def insert(self, value: T) -> I:
        if self._free:
            # lowest free slot first keeps iteration order compact
            self._free.sort()
            index = self._free.pop(0)
            slot = self._slots[index]
            slot.value = value
            slot.occupied = True
        else:
            index = len(self._slots)
            slot = _Slot(generation=0, value=value, occupied=True)
            self._slots.append(slot)
        self._len += 1
        return self._id_type(index, slot.generation)

    def get(self, ident: I) -> Optional[T]:
        slot = self._resolve(ident)
        return slot.value if slot is not None else None

    def remove(self, ident: I) -> Optional[T]:
        slot = self._resolve(ident)
        if slot is None:
            return None
        value = slot.value
        slot.value = None
        slot.occupied = False
        slot.generation += 1
        self._free.append(ident.index)
        self._len -= 1
        return value

    def ids(self) -> List[I]:
        return [ident for ident, _ in self]

    def values(self) -> List[T]:
        return [value for _, value in self]


__all__ = ["StableArena"]
