"""Memories used in a module."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator

from wasmir.binary import (
    Reader,
    WasmError,
    encode_section,
    encode_u32,
    encode_u64,
    encode_vector,
)
from wasmir.parse import IndicesToIds
from wasmir.tombstone_arena import Id, Tombstone, TombstoneArena

_MEMORY_SECTION_ID = 5
_HAS_MAX = 0x01
_SHARED = 0x02
_MEMORY64 = 0x04
_PAGE_SIZE = 0x08


@dataclass(eq=False)
class Memory(Tombstone):
    """A memory in the module."""

    id: Id
    shared: bool
    memory64: bool
    initial: int
    maximum: int | None
    page_size_log2: int | None = None
    import_id: Any = None
    data_segments: set[Id] = field(default_factory=set)
    name: str | None = None

    def on_delete(self) -> None:
        """Forget the active data segments."""
        self.data_segments = set()


class ModuleMemories:
    """The set of memories in a module."""

    def __init__(self) -> None:
        self._arena: TombstoneArena[Memory] = TombstoneArena()

    def add_import(
        self,
        shared: bool,
        memory64: bool,
        initial: int,
        maximum: int | None,
        page_size_log2: int | None,
        import_id: Any,
    ) -> Id:
        """Add an imported memory."""
        return self._arena.alloc_with_id(
            lambda id: Memory(
                id, shared, memory64, initial, maximum, page_size_log2, import_id
            )
        )

    def add_local(
        self,
        shared: bool,
        memory64: bool,
        initial: int,
        maximum: int | None,
        page_size_log2: int | None,
    ) -> Id:
        """Add a memory defined by this module."""
        return self._arena.alloc_with_id(
            lambda id: Memory(id, shared, memory64, initial, maximum, page_size_log2)
        )

    def get(self, id: Id) -> Memory:
        """Return the memory with the given id."""
        return self._arena[id]

    def delete(self, id: Id) -> None:
        """Remove a memory; references to it elsewhere are the caller's concern."""
        self._arena.delete(id)

    def __iter__(self) -> Iterator[Memory]:
        return iter(self._arena)

    def __len__(self) -> int:
        return len(self._arena)

    def is_empty(self) -> bool:
        """Whether the module has no memories."""
        return len(self._arena) == 0

    def parse_section(self, data: bytes, ids: IndicesToIds) -> None:
        """Read a memory section payload, recording each memory's original index."""
        reader = Reader(data)
        for _ in range(reader.read_u32()):
            flags = reader.read_byte()
            if flags & ~(_HAS_MAX | _SHARED | _MEMORY64 | _PAGE_SIZE):
                raise WasmError(f"invalid memory limits flags 0x{flags:02x}")
            memory64 = bool(flags & _MEMORY64)
            read = reader.read_u64 if memory64 else reader.read_u32
            initial = read()
            maximum = read() if flags & _HAS_MAX else None
            page_size_log2 = reader.read_u32() if flags & _PAGE_SIZE else None
            id = self.add_local(
                bool(flags & _SHARED), memory64, initial, maximum, page_size_log2
            )
            ids.push_memory(id)
        if not reader.at_end():
            raise WasmError("trailing data in memory section")

    def emit(self) -> tuple[bytes, list[Id]]:
        """Encode the memory section, leaving out imported memories.

        Returns the section bytes (empty if there is nothing to emit) and the
        emitted memory ids in index order.
        """
        memories = [m for m in self if m.import_id is None]
        if not memories:
            return b"", []
        entries = []
        for memory in memories:
            flags = (
                (_HAS_MAX if memory.maximum is not None else 0)
                | (_SHARED if memory.shared else 0)
                | (_MEMORY64 if memory.memory64 else 0)
                | (_PAGE_SIZE if memory.page_size_log2 is not None else 0)
            )
            entry = bytes([flags]) + encode_u64(memory.initial)
            if memory.maximum is not None:
                entry += encode_u64(memory.maximum)
            if memory.page_size_log2 is not None:
                entry += encode_u32(memory.page_size_log2)
            entries.append(entry)
        return (
            encode_section(_MEMORY_SECTION_ID, encode_vector(entries)),
            [m.id for m in memories],
        )