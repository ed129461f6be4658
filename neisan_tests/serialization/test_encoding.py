import pytest

from neisan.serialization import BadDataError, Deserializer, SerializationError
from neisan.serialization.encoding.bool import decode_bool
from neisan.serialization.encoding.utf8 import decode_utf8


def test_bool_rejects_other_bytes() -> None:
    for byte in (0x02, 0x80, 0xff):
        de = Deserializer.build_bytes_deserializer(bytes([byte]))
        with pytest.raises(BadDataError):
            decode_bool(de)


def test_utf8_rejects_invalid_bytes() -> None:
    # length 2, then a lone continuation byte followed by an ascii byte
    de = Deserializer.build_bytes_deserializer(b'\x02\x00\x00\x00\x80a')
    with pytest.raises(BadDataError) as exc_info:
        decode_utf8(de)
    assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)


def test_bad_data_is_a_serialization_error() -> None:
    assert issubclass(BadDataError, SerializationError)
    assert not issubclass(BadDataError, ValueError)
