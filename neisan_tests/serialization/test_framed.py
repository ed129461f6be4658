import pytest

from neisan.serialization import Deserializer, OutOfDataError, Serializer, TooLongError
from neisan.serialization.compound_encoding.framed import (
    MAX_ELEMENT_LENGTH,
    decode_element,
    decode_framed,
    encode_element,
    encode_framed,
)
from neisan.serialization.encoding.bytes import LENGTH_PREFIX_SIZE, decode_bytes, encode_bytes
from neisan.serialization.encoding.utf8 import decode_utf8, encode_utf8


def _encode_framed_bytes(values: list[bytes]) -> bytes:
    se = Serializer.build_bytes_serializer()
    encode_framed(se, values, encode_bytes)
    return bytes(se.finalize())


def test_empty_frame() -> None:
    assert _encode_framed_bytes([]).hex() == '00000000'
    de = Deserializer.build_bytes_deserializer(bytes.fromhex('00000000'))
    assert decode_framed(de, decode_bytes, list) == []
    de.finalize()


def test_element_at_max_length() -> None:
    data = b'x' * (MAX_ELEMENT_LENGTH - LENGTH_PREFIX_SIZE)
    encoded = _encode_framed_bytes([data])
    assert encoded[4:6] == b'\xff\xff'
    de = Deserializer.build_bytes_deserializer(encoded)
    assert decode_framed(de, decode_bytes, list) == [data]
    de.finalize()


def test_element_over_max_length() -> None:
    data = b'x' * (MAX_ELEMENT_LENGTH - LENGTH_PREFIX_SIZE + 1)
    se = Serializer.build_bytes_serializer()
    with pytest.raises(TooLongError):
        encode_element(se, data, encode_bytes)
    # nothing is written when the element does not fit
    assert se.cur_pos() == 0


def test_unread_element_bytes_are_skipped() -> None:
    # the element holds 'ab' followed by two extra bytes that the utf-8 decoder does not read
    de = Deserializer.build_bytes_deserializer(bytes.fromhex('08000200000061627a7a') + b'rest')
    assert decode_element(de, decode_utf8) == 'ab'
    assert bytes(de.read_all()) == b'rest'


def test_decoder_only_sees_its_element() -> None:
    # the element claims a 5-byte string but its frame only has 2 bytes of it
    de = Deserializer.build_bytes_deserializer(bytes.fromhex('01000000060005000000616263646566'))
    with pytest.raises(OutOfDataError):
        decode_framed(de, decode_utf8, list)


@pytest.mark.parametrize('data', [
    '',
    '010000',
    '01000000',
    '0100000006',
    '01000000060002000000',
])
def test_truncated_frame(data: str) -> None:
    de = Deserializer.build_bytes_deserializer(bytes.fromhex(data))
    with pytest.raises(OutOfDataError):
        decode_framed(de, decode_utf8, list)


def test_nested_frames() -> None:
    def encode_inner(serializer: Serializer, values: list[str]) -> None:
        encode_framed(serializer, values, encode_utf8)

    def decode_inner(deserializer: Deserializer) -> list[str]:
        return decode_framed(deserializer, decode_utf8, list)

    se = Serializer.build_bytes_serializer()
    encode_framed(se, [['a'], [], ['b', 'c']], encode_inner)
    de = Deserializer.build_bytes_deserializer(bytes(se.finalize()))
    assert decode_framed(de, decode_inner, list) == [['a'], [], ['b', 'c']]
    de.finalize()
