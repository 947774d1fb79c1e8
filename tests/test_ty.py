import pytest

from wasmir.binary import WasmError
from wasmir.tombstone_arena import Id
from wasmir.ty import RefType, Type, ValType


@pytest.mark.parametrize(
    "val, text",
    [
        (ValType.I32, "i32"),
        (ValType.I64, "i64"),
        (ValType.F32, "f32"),
        (ValType.F64, "f64"),
        (ValType.V128, "v128"),
        (ValType.EXTERNREF, "externref"),
        (ValType.FUNCREF, "funcref"),
    ],
)
def test_display(val, text):
    assert str(val) == text


def test_i32_code():
    assert ValType.I32.to_byte() == 0x7F


@pytest.mark.parametrize("val", list(ValType))
def test_valtype_byte_round_trip(val):
    assert ValType.from_byte(val.to_byte()) is val


@pytest.mark.parametrize("ref", list(RefType))
def test_reftype_byte_round_trip(ref):
    assert RefType.from_byte(ref.to_byte()) is ref
    assert ValType.from_byte(ref.to_byte()).ref_type is ref


def test_unknown_codes_raise():
    with pytest.raises(WasmError):
        ValType.from_byte(0x00)
    with pytest.raises(WasmError):
        RefType.from_byte(ValType.I32.to_byte())


def test_numeric_types_have_no_ref_type():
    assert ValType.from_byte(0x7E) is ValType.I64
    assert ValType.from_byte(0x7E).ref_type is None


def test_valtype_order_follows_declaration():
    decoded = [ValType.from_byte(v.to_byte()) for v in reversed(list(ValType))]
    assert sorted(decoded) == list(ValType)
    assert (
        ValType.from_byte(0x7F)
        < ValType.from_byte(0x7E)
        < ValType.from_byte(0x7B)
        < ValType.from_byte(0x70)
    )


def test_type_equality_ignores_id_and_name():
    a = Type(Id(0), [ValType.I32], [ValType.I64], name="a")
    b = Type(Id(7), (ValType.I32,), (ValType.I64,), name="b")
    assert a == b
    assert hash(a) == hash(b)
    assert a.params == (ValType.I32,)


def test_type_equality_considers_entry_flag():
    plain = Type(Id(0), (), (ValType.I32,))
    entry = Type(Id(1), (), (ValType.I32,), is_for_function_entry=True)
    assert plain != entry


def test_type_ordering():
    t1 = Type(Id(0), (ValType.I64,), ())
    t2 = Type(Id(1), (ValType.I32,), (ValType.F32,))
    t3 = Type(Id(2), (ValType.I32,), ())
    assert sorted([t1, t2, t3]) == [t3, t2, t1]


def test_type_on_delete_clears_signature():
    ty = Type(Id(0), (ValType.I32,), (ValType.F64,))
    ty.on_delete()
    assert ty.params == ()
    assert ty.results == ()