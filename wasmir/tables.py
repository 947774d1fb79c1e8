"""Tables within a module."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator

from wasmir.binary import Reader, WasmError, encode_section, encode_u64, encode_vector
from wasmir.parse import IndicesToIds
from wasmir.tombstone_arena import Id, Tombstone, TombstoneArena
from wasmir.ty import RefType

_TABLE_SECTION_ID = 4
_HAS_MAX = 0x01
_TABLE64 = 0x04
_TABLE_WITH_INIT = 0x40


@dataclass(eq=False)
class Table(Tombstone):
    """A table in the module."""

    id: Id
    table64: bool
    initial: int
    maximum: int | None
    element_ty: RefType
    import_id: Any = None
    elem_segments: set[Id] = field(default_factory=set)
    name: str | None = None


class ModuleTables:
    """The set of tables in a module."""

    def __init__(self) -> None:
        self._arena: TombstoneArena[Table] = TombstoneArena()

    def add_import(
        self,
        table64: bool,
        initial: int,
        maximum: int | None,
        element_ty: RefType,
        import_id: Any,
    ) -> Id:
        """Add an imported table."""
        return self._arena.alloc_with_id(
            lambda id: Table(id, table64, initial, maximum, element_ty, import_id)
        )

    def add_local(
        self, table64: bool, initial: int, maximum: int | None, element_ty: RefType
    ) -> Id:
        """Add a table defined by this module."""
        return self._arena.alloc_with_id(
            lambda id: Table(id, table64, initial, maximum, element_ty)
        )

    def get(self, id: Id) -> Table:
        """Return the table with the given id."""
        return self._arena[id]

    def delete(self, id: Id) -> None:
        """Remove a table; references to it elsewhere are the caller's concern."""
        self._arena.delete(id)

    def __iter__(self) -> Iterator[Table]:
        return iter(self._arena)

    def __len__(self) -> int:
        return len(self._arena)

    def main_function_table(self) -> Id | None:
        """Return the module's only funcref table, or None if it has none.

        Raises WasmError if there is more than one.
        """
        funcref_tables = [t.id for t in self if t.element_ty is RefType.FUNCREF]
        if len(funcref_tables) > 1:
            raise WasmError("module contains more than one function table")
        return funcref_tables[0] if funcref_tables else None

    def parse_section(self, data: bytes, ids: IndicesToIds) -> None:
        """Read a table section payload, recording each table's original index."""
        reader = Reader(data)
        for _ in range(reader.read_u32()):
            first = reader.read_byte()
            if first == _TABLE_WITH_INIT:
                raise WasmError("tables with initializer expressions are not supported")
            element_ty = RefType.from_byte(first)
            flags = reader.read_byte()
            if flags & ~(_HAS_MAX | _TABLE64):
                raise WasmError(f"invalid table limits flags 0x{flags:02x}")
            table64 = bool(flags & _TABLE64)
            read = reader.read_u64 if table64 else reader.read_u32
            initial = read()
            maximum = read() if flags & _HAS_MAX else None
            ids.push_table(self.add_local(table64, initial, maximum, element_ty))
        if not reader.at_end():
            raise WasmError("trailing data in table section")

    def emit(self) -> tuple[bytes, list[Id]]:
        """Encode the table section, leaving out imported tables.

        Returns the section bytes (empty if there is nothing to emit) and the
        emitted table ids in index order.
        """
        tables = [t for t in self if t.import_id is None]
        if not tables:
            return b"", []
        entries = []
        for table in tables:
            flags = (_HAS_MAX if table.maximum is not None else 0) | (
                _TABLE64 if table.table64 else 0
            )
            entry = bytes([table.element_ty.to_byte(), flags]) + encode_u64(table.initial)
            if table.maximum is not None:
                entry += encode_u64(table.maximum)
            entries.append(entry)
        return (
            encode_section(_TABLE_SECTION_ID, encode_vector(entries)),
            [t.id for t in tables],
        )