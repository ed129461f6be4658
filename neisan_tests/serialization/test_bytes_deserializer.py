import pytest

from neisan.serialization import Deserializer, OutOfDataError, Serializer


def test_read_past_end() -> None:
    de = Deserializer.build_bytes_deserializer(b'abc')
    with pytest.raises(OutOfDataError):
        de.read_bytes(4)
    # a failed read does not consume anything
    assert bytes(de.read_bytes(3)) == b'abc'
    assert de.is_empty()
    with pytest.raises(OutOfDataError):
        de.read_byte()


def test_inexact_read() -> None:
    de = Deserializer.build_bytes_deserializer(b'abc')
    assert bytes(de.read_bytes(5, exact=False)) == b'abc'
    assert de.is_empty()


def test_peek_does_not_consume() -> None:
    de = Deserializer.build_bytes_deserializer(b'\x01\x02')
    assert de.peek_byte() == 1
    assert bytes(de.peek_bytes(2)) == b'\x01\x02'
    assert de.read_byte() == 1
    assert de.read_byte() == 2
    de.finalize()


def test_negative_length() -> None:
    de = Deserializer.build_bytes_deserializer(b'abc')
    with pytest.raises(ValueError):
        de.read_bytes(-1)


def test_finalize_with_trailing_data() -> None:
    de = Deserializer.build_bytes_deserializer(b'abc')
    de.read_byte()
    with pytest.raises(ValueError):
        de.finalize()


def test_struct_round_trip() -> None:
    se = Serializer.build_bytes_serializer()
    se.write_struct((1, -2), '<Ih')
    assert se.cur_pos() == 6
    de = Deserializer.build_bytes_deserializer(bytes(se.finalize()))
    assert de.read_struct('<Ih') == (1, -2)
    de.finalize()


def test_write_byte_range() -> None:
    se = Serializer.build_bytes_serializer()
    with pytest.raises(OverflowError):
        se.write_byte(256)
