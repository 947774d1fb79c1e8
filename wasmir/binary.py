"""Low-level helpers for the WebAssembly binary encoding."""

from __future__ import annotations

from typing import Iterable


class WasmError(ValueError):
    """Raised for malformed or unsupported WebAssembly data."""


def _encode_unsigned(value: int, bits: int) -> bytes:
    if not 0 <= value < (1 << bits):
        raise WasmError(f"value {value} does not fit in u{bits}")
    out = bytearray()
    while True:
        byte = value & 0x7F
        value >>= 7
        if value:
            out.append(byte | 0x80)
        else:
            out.append(byte)
            return bytes(out)


def encode_u32(value: int) -> bytes:
    """Encode an unsigned 32-bit integer as LEB128."""
    return _encode_unsigned(value, 32)


def encode_u64(value: int) -> bytes:
    """Encode an unsigned 64-bit integer as LEB128."""
    return _encode_unsigned(value, 64)


def encode_name(name: str) -> bytes:
    """Encode a UTF-8 name prefixed with its byte length."""
    raw = name.encode("utf-8")
    return encode_u32(len(raw)) + raw


def encode_vector(items: Iterable[bytes]) -> bytes:
    """Encode already-encoded items as a vector prefixed with its count."""
    parts = list(items)
    return encode_u32(len(parts)) + b"".join(parts)


def encode_section(section_id: int, payload: bytes) -> bytes:
    """Frame a section payload with its id and size."""
    if not 0 <= section_id <= 0xFF:
        raise WasmError(f"invalid section id {section_id}")
    return bytes([section_id]) + encode_u32(len(payload)) + payload


class Reader:
    """Sequential reader over WebAssembly binary data."""

    def __init__(self, data: bytes) -> None:
        self.data = bytes(data)
        self.position = 0

    def at_end(self) -> bool:
        """Whether all data has been consumed."""
        return self.position >= len(self.data)

    def read_byte(self) -> int:
        """Read a single byte."""
        if self.at_end():
            raise WasmError(f"unexpected end of data at offset {self.position}")
        byte = self.data[self.position]
        self.position += 1
        return byte

    def read_bytes(self, n: int) -> bytes:
        """Read exactly ``n`` bytes."""
        end = self.position + n
        if n < 0 or end > len(self.data):
            raise WasmError(f"unexpected end of data at offset {self.position}")
        chunk = self.data[self.position:end]
        self.position = end
        return chunk

    def _read_unsigned(self, bits: int) -> int:
        result = 0
        shift = 0
        for _ in range((bits + 6) // 7):
            byte = self.read_byte()
            result |= (byte & 0x7F) << shift
            if not byte & 0x80:
                if result >> bits:
                    raise WasmError(f"integer too large for u{bits}")
                return result
            shift += 7
        raise WasmError(f"integer representation too long for u{bits}")

    def read_u32(self) -> int:
        """Read an unsigned 32-bit LEB128 integer."""
        return self._read_unsigned(32)

    def read_u64(self) -> int:
        """Read an unsigned 64-bit LEB128 integer."""
        return self._read_unsigned(64)

    def read_name(self) -> str:
        """Read a length-prefixed UTF-8 name."""
        raw = self.read_bytes(self.read_u32())
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise WasmError("malformed UTF-8 name") from exc