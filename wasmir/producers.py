"""The ``producers`` custom section."""

from __future__ import annotations

from dataclasses import dataclass, field

from wasmir.binary import Reader, WasmError, encode_name, encode_section, encode_vector

_CUSTOM_SECTION_ID = 0
_SECTION_NAME = "producers"


@dataclass
class _Value:
    name: str
    version: str


@dataclass
class _Field:
    name: str
    values: list[_Value] = field(default_factory=list)


class ModuleProducers:
    """Contents of the ``producers`` custom section."""

    def __init__(self) -> None:
        self._fields: list[_Field] = []

    def add_language(self, language: str, version: str) -> None:
        """Record a source language and its version."""
        self._set("language", language, version)

    def add_processed_by(self, tool: str, version: str) -> None:
        """Record a tool that processed the module and its version."""
        self._set("processed-by", tool, version)

    def add_sdk(self, sdk: str, version: str) -> None:
        """Record an SDK and its version."""
        self._set("sdk", sdk, version)

    def _set(self, field_name: str, name: str, version: str) -> None:
        new_value = _Value(name, version)
        for entry in self._fields:
            if entry.name != field_name:
                continue
            for position, value in enumerate(entry.values):
                if value.name == name:
                    entry.values[position] = new_value
                    return
            entry.values.append(new_value)
            return
        self._fields.append(_Field(field_name, [new_value]))

    def clear(self) -> None:
        """Remove all fields."""
        self._fields.clear()

    def entries(self) -> list[tuple[str, list[tuple[str, str]]]]:
        """Return each field name with its ``(name, version)`` pairs, in order."""
        return [
            (entry.name, [(value.name, value.version) for value in entry.values])
            for entry in self._fields
        ]

    def parse_section(self, data: bytes) -> None:
        """Read the payload of a ``producers`` section, after its name."""
        reader = Reader(data)
        for _ in range(reader.read_u32()):
            name = reader.read_name()
            values = [
                _Value(reader.read_name(), reader.read_name())
                for _ in range(reader.read_u32())
            ]
            self._fields.append(_Field(name, values))
        if not reader.at_end():
            raise WasmError("trailing data in producers section")

    def emit(self) -> bytes:
        """Encode the whole custom section, or return b"" if it is empty."""
        if not self._fields:
            return b""
        payload = encode_vector(
            encode_name(entry.name)
            + encode_vector(
                encode_name(value.name) + encode_name(value.version)
                for value in entry.values
            )
            for entry in self._fields
        )
        return encode_section(_CUSTOM_SECTION_ID, encode_name(_SECTION_NAME) + payload)