"""The de-duplicated set of function types within a module."""

from __future__ import annotations

from typing import Iterable, Iterator

from wasmir.binary import Reader, WasmError, encode_section, encode_vector
from wasmir.parse import IndicesToIds
from wasmir.tombstone_arena import Id, TombstoneArena
from wasmir.ty import Type, ValType

_TYPE_SECTION_ID = 1
_FUNC_FORM = 0x60


def _encode_valtypes(types: Iterable[ValType]) -> bytes:
    return encode_vector(bytes([ty.to_byte()]) for ty in types)


class ModuleTypes:
    """The set of de-duplicated types within a module."""

    def __init__(self) -> None:
        self._arena: TombstoneArena[Type] = TombstoneArena()
        self._ids: dict[Type, Id] = {}

    def _insert(self, ty: Type) -> Id:
        existing = self._ids.get(ty)
        if existing is not None:
            return existing
        id = self._arena.alloc(ty)
        self._ids[ty] = id
        return id

    def get(self, id: Id) -> Type:
        """Return the type with the given id."""
        return self._arena[id]

    def params_results(self, id: Id) -> tuple[tuple[ValType, ...], tuple[ValType, ...]]:
        """Return the parameters and results of the given type."""
        ty = self.get(id)
        return ty.params, ty.results

    def params(self, id: Id) -> tuple[ValType, ...]:
        """Return the parameters of the given type."""
        return self.get(id).params

    def results(self, id: Id) -> tuple[ValType, ...]:
        """Return the results of the given type."""
        return self.get(id).results

    def by_name(self, name: str) -> Id | None:
        """Return the id of the first type with the given name, if any."""
        return next((id for id, ty in self._arena.items() if ty.name == name), None)

    def __iter__(self) -> Iterator[Type]:
        return iter(self._arena)

    def __len__(self) -> int:
        return len(self._arena)

    def delete(self, id: Id) -> None:
        """Remove a type; references to it elsewhere are the caller's concern."""
        ty = self._arena[id]
        if self._ids.get(ty) == id:
            del self._ids[ty]
        self._arena.delete(id)

    def add(self, params: Iterable[ValType], results: Iterable[ValType]) -> Id:
        """Add a function type, returning the existing id if already present."""
        return self._insert(Type(self._arena.next_id(), tuple(params), tuple(results)))

    def add_entry_ty(self, results: Iterable[ValType]) -> Id:
        """Add an internal type for a multi-value function entry block."""
        return self._insert(
            Type(self._arena.next_id(), (), tuple(results), is_for_function_entry=True)
        )

    def find(self, params: Iterable[ValType], results: Iterable[ValType]) -> Id | None:
        """Find the existing function type with these parameters and results."""
        params, results = tuple(params), tuple(results)
        return next(
            (
                id
                for id, ty in self._arena.items()
                if not ty.is_for_function_entry
                and ty.params == params
                and ty.results == results
            ),
            None,
        )

    def find_for_function_entry(self, results: Iterable[ValType]) -> Id | None:
        """Find the existing function-entry type with these results."""
        results = tuple(results)
        return next(
            (
                id
                for id, ty in self._arena.items()
                if ty.is_for_function_entry and not ty.params and ty.results == results
            ),
            None,
        )

    def parse_section(self, data: bytes, ids: IndicesToIds) -> None:
        """Read a type section payload, recording each type's original index."""
        reader = Reader(data)
        for _ in range(reader.read_u32()):
            form = reader.read_byte()
            if form != _FUNC_FORM:
                raise WasmError(f"unsupported type form 0x{form:02x}")
            params = tuple(
                ValType.from_byte(reader.read_byte()) for _ in range(reader.read_u32())
            )
            results = tuple(
                ValType.from_byte(reader.read_byte()) for _ in range(reader.read_u32())
            )
            ids.push_type(self._insert(Type(self._arena.next_id(), params, results)))
        if not reader.at_end():
            raise WasmError("trailing data in type section")

    def emit(self) -> tuple[bytes, list[Id]]:
        """Encode the type section.

        Returns the section bytes (empty if there is nothing to emit) and the
        emitted type ids in index order.
        """
        tys = sorted(
            ((id, ty) for id, ty in self._arena.items() if not ty.is_for_function_entry),
            key=lambda pair: pair[1],
        )
        if not tys:
            return b"", []
        entries = (
            bytes([_FUNC_FORM]) + _encode_valtypes(ty.params) + _encode_valtypes(ty.results)
            for _, ty in tys
        )
        return encode_section(_TYPE_SECTION_ID, encode_vector(entries)), [id for id, _ in tys]