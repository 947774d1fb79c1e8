"""Mapping from indices in a parsed binary to arena ids."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field

from wasmir.binary import WasmError
from wasmir.tombstone_arena import Id


def _push(items: list[Id], id: Id) -> int:
    items.append(id)
    return len(items) - 1


def _get(items: list[Id], index: int, what: str) -> Id:
    if 0 <= index < len(items):
        return items[index]
    raise WasmError(f"index `{index}` is out of bounds for {what}")


@dataclass
class IndicesToIds:
    """Maps old indices in a parsed binary to ids.

    Items created after parsing have no old index.
    """

    tables: list[Id] = field(default_factory=list)
    types: list[Id] = field(default_factory=list)
    funcs: list[Id] = field(default_factory=list)
    globals: list[Id] = field(default_factory=list)
    memories: list[Id] = field(default_factory=list)
    elements: list[Id] = field(default_factory=list)
    data: list[Id] = field(default_factory=list)
    locals: defaultdict[Id, list[Id]] = field(default_factory=lambda: defaultdict(list))

    def push_table(self, id: Id) -> int:
        """Map the next table index to ``id`` and return that index."""
        return _push(self.tables, id)

    def get_table(self, index: int) -> Id:
        """Return the table id for an original index."""
        return _get(self.tables, index, "tables")

    def push_type(self, id: Id) -> int:
        """Map the next type index to ``id`` and return that index."""
        return _push(self.types, id)

    def get_type(self, index: int) -> Id:
        """Return the type id for an original index."""
        return _get(self.types, index, "types")

    def push_func(self, id: Id) -> int:
        """Map the next function index to ``id`` and return that index."""
        return _push(self.funcs, id)

    def get_func(self, index: int) -> Id:
        """Return the function id for an original index."""
        return _get(self.funcs, index, "funcs")

    def push_global(self, id: Id) -> int:
        """Map the next global index to ``id`` and return that index."""
        return _push(self.globals, id)

    def get_global(self, index: int) -> Id:
        """Return the global id for an original index."""
        return _get(self.globals, index, "globals")

    def push_memory(self, id: Id) -> int:
        """Map the next memory index to ``id`` and return that index."""
        return _push(self.memories, id)

    def get_memory(self, index: int) -> Id:
        """Return the memory id for an original index."""
        return _get(self.memories, index, "memories")

    def push_element(self, id: Id) -> int:
        """Map the next element index to ``id`` and return that index."""
        return _push(self.elements, id)

    def get_element(self, index: int) -> Id:
        """Return the element id for an original index."""
        return _get(self.elements, index, "elements")

    def push_data(self, id: Id) -> int:
        """Map the next data index to ``id`` and return that index."""
        return _push(self.data, id)

    def get_data(self, index: int) -> Id:
        """Return the data id for an original index."""
        return _get(self.data, index, "data")

    def push_local(self, function: Id, id: Id) -> int:
        """Map the next local index of ``function`` to ``id``."""
        return _push(self.locals[function], id)

    def get_local(self, function: Id, index: int) -> Id:
        """Return the local id for an original index within ``function``."""
        locals_ = self.locals.get(function)
        if locals_ is None:
            raise WasmError(
                f"function index `{function.index}` is out of bounds for local"
            )
        if 0 <= index < len(locals_):
            return locals_[index]
        raise WasmError(
            f"index `{index}` in function `{function.index}` is out of bounds for local"
        )