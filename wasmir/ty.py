"""WebAssembly function and value types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import total_ordering

from wasmir.binary import WasmError
from wasmir.tombstone_arena import Id, Tombstone


class RefType(Enum):
    """A reference type."""

    FUNCREF = 0x70
    EXTERNREF = 0x6F

    @classmethod
    def from_byte(cls, code: int) -> RefType:
        """Decode a reference type from its binary code."""
        try:
            return cls(code)
        except ValueError:
            raise WasmError(f"unsupported ref type 0x{code:02x}") from None

    def to_byte(self) -> int:
        """Return the binary code of this reference type."""
        return self.value


@total_ordering
class ValType(Enum):
    """A value type; members are ordered as declared."""

    I32 = 0x7F
    I64 = 0x7E
    F32 = 0x7D
    F64 = 0x7C
    V128 = 0x7B
    FUNCREF = 0x70
    EXTERNREF = 0x6F

    @classmethod
    def from_byte(cls, code: int) -> ValType:
        """Decode a value type from its binary code."""
        try:
            return cls(code)
        except ValueError:
            raise WasmError(f"unsupported value type 0x{code:02x}") from None

    def to_byte(self) -> int:
        """Return the binary code of this value type."""
        return self.value

    @property
    def ref_type(self) -> RefType | None:
        """The reference type this value type holds, if it is a reference."""
        if self in (ValType.FUNCREF, ValType.EXTERNREF):
            return RefType(self.value)
        return None

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ValType):
            return NotImplemented
        return _ORDER[self] < _ORDER[other]

    def __str__(self) -> str:
        return self.name.lower()


_ORDER = {member: position for position, member in enumerate(ValType)}


@dataclass(eq=False)
class Type(Tombstone):
    """A function type; equality and hashing ignore its id and name."""

    id: Id
    params: tuple[ValType, ...] = ()
    results: tuple[ValType, ...] = ()
    is_for_function_entry: bool = False
    name: str | None = None

    def __post_init__(self) -> None:
        self.params = tuple(self.params)
        self.results = tuple(self.results)

    def _key(self) -> tuple:
        return (self.params, self.results, self.is_for_function_entry)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Type):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Type):
            return NotImplemented
        return (self.params, self.results) < (other.params, other.results)

    def on_delete(self) -> None:
        """Drop the parameter and result lists."""
        self.params = ()
        self.results = ()