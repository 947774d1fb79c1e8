import pytest

from wasmir.binary import Reader, WasmError
from wasmir.producers import ModuleProducers


def _split(section: bytes) -> tuple[int, str, bytes]:
    reader = Reader(section)
    section_id = reader.read_byte()
    size = reader.read_u32()
    assert size == len(section) - reader.position
    name = reader.read_name()
    return section_id, name, reader.read_bytes(len(section) - reader.position)


def test_fields_are_grouped_in_insertion_order():
    producers = ModuleProducers()
    producers.add_language("Rust", "1.0")
    producers.add_processed_by("walrus", "0.1")
    producers.add_language("C", "99")
    producers.add_sdk("emscripten", "3.1")
    assert producers.entries() == [
        ("language", [("Rust", "1.0"), ("C", "99")]),
        ("processed-by", [("walrus", "0.1")]),
        ("sdk", [("emscripten", "3.1")]),
    ]


def test_same_name_replaces_version():
    producers = ModuleProducers()
    producers.add_processed_by("walrus", "0.1")
    producers.add_processed_by("walrus", "0.2")
    assert producers.entries() == [("processed-by", [("walrus", "0.2")])]


def test_clear():
    producers = ModuleProducers()
    producers.add_sdk("emscripten", "3.1")
    producers.clear()
    assert producers.entries() == []
    assert producers.emit() == b""


def test_emit_empty():
    assert ModuleProducers().emit() == b""


def test_round_trip():
    producers = ModuleProducers()
    producers.add_language("Rust", "1.0")
    producers.add_processed_by("walrus", "0.1")
    section_id, name, payload = _split(producers.emit())
    assert section_id == 0
    assert name == "producers"

    parsed = ModuleProducers()
    parsed.parse_section(payload)
    assert parsed.entries() == producers.entries()
    assert parsed.emit() == producers.emit()


def test_parse_appends_fields():
    producers = ModuleProducers()
    producers.add_language("Rust", "1.0")
    _, _, payload = _split(producers.emit())
    parsed = ModuleProducers()
    parsed.parse_section(payload)
    parsed.parse_section(payload)
    assert parsed.entries() == producers.entries() * 2


def test_parse_truncated_raises():
    producers = ModuleProducers()
    producers.add_language("Rust", "1.0")
    _, _, payload = _split(producers.emit())
    with pytest.raises(WasmError):
        ModuleProducers().parse_section(payload[:-1])