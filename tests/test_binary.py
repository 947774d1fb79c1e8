import pytest

from wasmir.binary import (
    Reader,
    WasmError,
    encode_name,
    encode_section,
    encode_u32,
    encode_u64,
    encode_vector,
)


def test_leb128_worked_example():
    assert encode_u32(624485) == bytes([0xE5, 0x8E, 0x26])


def test_single_byte_values_encode_as_themselves():
    for value in range(128):
        assert encode_u32(value) == bytes([value])


@pytest.mark.parametrize("value", [0, 1, 127, 128, 300, 624485, 2**32 - 1])
def test_u32_round_trip(value):
    reader = Reader(encode_u32(value))
    assert reader.read_u32() == value
    assert reader.at_end()


@pytest.mark.parametrize("value", [0, 2**32, 2**63, 2**64 - 1])
def test_u64_round_trip(value):
    reader = Reader(encode_u64(value))
    assert reader.read_u64() == value
    assert reader.at_end()


@pytest.mark.parametrize("value", [-1, 2**32])
def test_encode_u32_out_of_range(value):
    with pytest.raises(WasmError):
        encode_u32(value)


def test_read_u32_too_large():
    with pytest.raises(WasmError):
        Reader(encode_u64(2**32)).read_u32()


def test_read_u32_too_long():
    with pytest.raises(WasmError):
        Reader(b"\x80\x80\x80\x80\x80\x00").read_u32()


def test_read_past_end():
    reader = Reader(b"\x80")
    with pytest.raises(WasmError):
        reader.read_u32()
    with pytest.raises(WasmError):
        Reader(b"ab").read_bytes(3)


@pytest.mark.parametrize("name", ["", "memory", "naïve", "日本"])
def test_name_round_trip(name):
    reader = Reader(encode_name(name))
    assert reader.read_name() == name
    assert reader.at_end()


def test_name_invalid_utf8():
    with pytest.raises(WasmError):
        Reader(b"\x02\xff\xfe").read_name()


def test_vector_prefix_and_contents():
    items = [encode_u32(1), encode_u32(200), encode_name("x")]
    reader = Reader(encode_vector(items))
    assert reader.read_u32() == 3
    assert reader.read_u32() == 1
    assert reader.read_u32() == 200
    assert reader.read_name() == "x"
    assert reader.at_end()


def test_empty_section():
    assert encode_section(1, b"") == b"\x01\x00"


def test_section_framing():
    payload = b"abc"
    reader = Reader(encode_section(5, payload))
    assert reader.read_byte() == 5
    assert reader.read_bytes(reader.read_u32()) == payload
    assert reader.at_end()


def test_section_invalid_id():
    with pytest.raises(WasmError):
        encode_section(256, b"")