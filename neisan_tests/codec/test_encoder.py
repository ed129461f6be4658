import re
from fractions import Fraction

from structlog.testing import capture_logs

from neisan.codec import (
    UNDEFINED,
    FieldTooLarge,
    InvalidCustomCodec,
    Record,
    UnknownType,
    UnsupportedType,
    ValueOutOfRange,
)
from neisan.codec.tags import BIGINT_MAX, BIGINT_MIN, MAX_ELEMENT_LENGTH
from neisan.conf import CodecSettings
from neisan_tests import unittest

# ['a', 1] as a 2-element array, the shape of map entries and object fields
ENTRY_A_1 = '06' '02000000' '0600' '010100000061' '0900' '030100000000000000'


class BuiltinLayoutTest(unittest.TestCase):
    def test_boolean(self) -> None:
        self.assertEncodesTo(True, '0001')
        self.assertEncodesTo(False, '0000')

    def test_string(self) -> None:
        self.assertEncodesTo('ab', '01' '02000000' '6162')
        self.assertEncodesTo('', '01' '00000000')
        self.assertEncodesTo('π', '01' '02000000' 'cf80')

    def test_number(self) -> None:
        self.assertEncodesTo(1.5, '02' '000000000000f83f')
        self.assertEncodesTo(Fraction(1, 2), '02' '000000000000e03f')

    def test_bigint(self) -> None:
        self.assertEncodesTo(5, '03' '0500000000000000')
        self.assertEncodesTo(-1, '03' 'ffffffffffffffff')
        self.assertEncodesTo(BIGINT_MAX, '03' 'ffffffffffffff7f')
        self.assertEncodesTo(BIGINT_MIN, '03' '0000000000000080')

    def test_null_and_undefined(self) -> None:
        self.assertEncodesTo(None, '04')
        self.assertEncodesTo(UNDEFINED, '05')

    def test_array(self) -> None:
        self.assertEncodesTo([], '06' '00000000')
        self.assertEncodesTo([None], '06' '01000000' '0100' '04')
        self.assertEncodesTo([True, UNDEFINED], '06' '02000000' '0200' '0001' '0100' '05')
        # tuples are arrays too
        self.assertEqual(self.codec.encode((True, UNDEFINED)), self.codec.encode([True, UNDEFINED]))

    def test_map(self) -> None:
        self.assertEncodesTo({}, '07' '00000000')
        self.assertEncodesTo({'a': 1}, '07' '01000000' '1800' + ENTRY_A_1)

    def test_set(self) -> None:
        self.assertEncodesTo({1}, '08' '01000000' '0900' '030100000000000000')
        self.assertEqual(self.codec.encode(frozenset([1])), self.codec.encode({1}))

    def test_regex(self) -> None:
        # [source, flags] as an array, str patterns always have the unicode flag
        inner = '06' '02000000' '0600' '010100000061' '0600' '010100000075'
        self.assertEncodesTo(re.compile('a'), '09' '15000000' + inner)

    def test_object(self) -> None:
        self.assertEncodesTo(Record(a=1), '0a' '01000000' '1800' + ENTRY_A_1)

        class Plain:
            def __init__(self) -> None:
                self.a = 1

        self.assertEncodesTo(Plain(), '0a' '01000000' '1800' + ENTRY_A_1)

    def test_registered(self) -> None:
        class Plain:
            def __init__(self) -> None:
                self.a = 1

        self.codec.register(Plain)
        self.assertEncodesTo(Plain(), '0b' '01000000' '1800' + ENTRY_A_1)

    def test_registered_with_pair(self) -> None:
        class Pair:
            def __init__(self, left: int, right: int) -> None:
                self.left = left
                self.right = right

        self.codec.register(Pair, (lambda pair: [pair.left, pair.right], lambda fields: Pair(*fields)))
        self.assertEncodesTo(
            Pair(1, 2),
            '0b' '02000000' '0900' '030100000000000000' '0900' '030200000000000000',
        )


class EncoderTest(unittest.TestCase):
    def test_bigint_wraps(self) -> None:
        with capture_logs() as logs:
            wrapped = self.codec.encode(BIGINT_MAX + 1)
        self.assertEqual(wrapped, self.codec.encode(BIGINT_MIN))
        self.assertEqual(self.codec.decode(self.codec.encode(2 ** 64 + 7)), 7)
        self.assertEqual(len(logs), 1)
        self.assertEqual(logs[0]['event'], 'bigint out of range, wrapping')
        self.assertEqual(logs[0]['log_level'], 'warning')
        self.assertEqual(logs[0]['wrapped'], BIGINT_MIN)

    def test_bigint_strict(self) -> None:
        codec = self.create_codec(CodecSettings(STRICT_BIGINT_RANGE=True))
        with self.assertRaises(ValueOutOfRange):
            codec.encode([BIGINT_MIN - 1])
        with self.assertRaises(ValueError):
            codec.encode(BIGINT_MAX + 1)
        self.assertEqual(codec.decode(codec.encode(BIGINT_MAX)), BIGINT_MAX)

    def test_field_too_large(self) -> None:
        # a string element takes 5 bytes more than its characters: the tag and the length prefix
        largest = 'x' * (MAX_ELEMENT_LENGTH - 5)
        self.assertEqual(self.round_trip([largest]), [largest])
        with self.assertRaises(FieldTooLarge):
            self.codec.encode([largest + 'x'])
        with self.assertRaises(FieldTooLarge):
            self.codec.encode({'key': largest + 'x'})
        with self.assertRaises(FieldTooLarge):
            self.codec.encode(re.compile(largest + 'x'))
        # the root value is not framed, only nested elements are limited
        self.assertEqual(self.round_trip(largest * 2), largest * 2)

    def test_unsupported(self) -> None:
        for value in [len, lambda: None, int, re, b'bytes', object(), re.compile(b'a')]:
            with self.subTest(value=value):
                with self.assertRaises(UnsupportedType):
                    self.codec.encode(value)
                with self.assertRaises(TypeError):
                    self.codec.encode([value])

    def test_unknown_type(self) -> None:
        class Elsewhere:
            pass

        other = self.create_codec()
        other.register(Elsewhere)
        self.assertEqual(other.decode(other.encode(Elsewhere())).to_dict(), {})
        with self.assertRaises(UnknownType):
            self.codec.encode(Elsewhere())
        with self.assertRaises(UnknownType):
            self.codec.encode({'nested': [Elsewhere()]})

    def test_helper_must_return_fields(self) -> None:
        class Bad:
            pass

        self.codec.register(Bad, (lambda value: None, lambda fields: Bad()))
        with self.assertRaises(InvalidCustomCodec):
            self.codec.encode(Bad())

    def test_field_order(self) -> None:
        class Ordered:
            __slots__ = ('b', 'a', 'unset')

            def __init__(self) -> None:
                self.b = 2
                self.a = 1

        decoded = self.round_trip(Ordered())
        self.assertEqual(list(decoded.items()), [('b', 2), ('a', 1)])
