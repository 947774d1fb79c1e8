"""An append-only arena whose items can be deleted by marking them dead."""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Generic, Iterator, TypeVar

T = TypeVar("T")

_arena_counter = itertools.count()


@dataclass(frozen=True, order=True)
class Id:
    """Identifier of an item allocated in a particular arena."""

    index: int
    arena: int = 0

    def __repr__(self) -> str:
        return f"Id({self.index}, arena={self.arena})"


class Tombstone:
    """Mixin for items that release resources when deleted from an arena.

    This does not turn the item into a tombstone; the item must stay usable
    after ``on_delete`` has run. Subclasses name the attributes to reset in
    ``_cleared_on_delete``, mapping each to a factory for its empty value.
    """

    _cleared_on_delete: ClassVar[dict[str, Callable[[], Any]]] = {}

    def on_delete(self) -> None:
        """Reset the attributes listed in ``_cleared_on_delete``."""
        for name, factory in self._cleared_on_delete.items():
            setattr(self, name, factory())


class TombstoneArena(Generic[T]):
    """An arena of items where deleted items are remembered as dead ids."""

    def __init__(self) -> None:
        self._arena = next(_arena_counter)
        self._items: list[T] = []
        self._dead: set[Id] = set()

    def _owns(self, id: Id) -> bool:
        return id.arena == self._arena and 0 <= id.index < len(self._items)

    def alloc(self, val: T) -> Id:
        """Store ``val`` and return its new id."""
        id = self.next_id()
        self._items.append(val)
        return id

    def alloc_with_id(self, f: Callable[[Id], T]) -> Id:
        """Store the value built by ``f`` from the id it will receive."""
        return self.alloc(f(self.next_id()))

    def get(self, id: Id) -> T | None:
        """Return the item for ``id``, or None if it is dead or unknown."""
        if id in self._dead or not self._owns(id):
            return None
        return self._items[id.index]

    def delete(self, id: Id) -> None:
        """Mark the item as dead and let it release its resources."""
        if not self.contains(id):
            raise KeyError(id)
        self._dead.add(id)
        on_delete: Any = getattr(self._items[id.index], "on_delete", None)
        if callable(on_delete):
            on_delete()

    def next_id(self) -> Id:
        """Return the id the next allocation will receive."""
        return Id(len(self._items), self._arena)

    def contains(self, id: Id) -> bool:
        """Whether ``id`` names a live item of this arena."""
        return self._owns(id) and id not in self._dead

    def items(self) -> Iterator[tuple[Id, T]]:
        """Yield ``(id, item)`` pairs of live items in allocation order."""
        for index, item in enumerate(self._items):
            id = Id(index, self._arena)
            if id not in self._dead:
                yield id, item

    def __len__(self) -> int:
        return len(self._items) - len(self._dead)

    def __iter__(self) -> Iterator[T]:
        return (item for _, item in self.items())

    def __getitem__(self, id: Id) -> T:
        if not self.contains(id):
            raise KeyError(id)
        return self._items[id.index]