# Copyright 2025 Hathor Labs
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Recursive encoding of a value graph into the self-describing buffer format.

Every value is written as a 1-byte tag followed by its payload:

- boolean: 1 byte, 0x01 or 0x00
- string: u32 byte length and the UTF-8 bytes
- number: 8-byte IEEE-754 double
- bigint: 8-byte signed integer
- null, undefined: no payload
- array, map, set, object and registered types: the array-like framing of `compound_encoding.framed`, where every
  element is itself a complete tagged buffer (map entries and object fields are 2-element arrays)
- regex: u32 byte length and a complete array buffer of `[source, flags]`

Multi-byte integers are little-endian.
"""

import re
from collections.abc import Collection, Iterable, Mapping
from typing import Any, Optional

from structlog import get_logger
from typing_extensions import assert_never

from neisan.codec.exceptions import FieldTooLarge, InvalidCustomCodec, UnknownType, UnsupportedType, ValueOutOfRange
from neisan.codec.kinds import ValueKind, classify
from neisan.codec.regex import flags_to_str
from neisan.codec.registry import TypeRegistry
from neisan.codec.tags import BIGINT_MAX, BIGINT_MIN, BIGINT_SIZE, BuiltinTag
from neisan.codec.values import field_entries, get_type_id
from neisan.conf.settings import CodecSettings
from neisan.serialization import Serializer, TooLongError
from neisan.serialization.compound_encoding.framed import encode_framed
from neisan.serialization.encoding.bool import encode_bool
from neisan.serialization.encoding.bytes import encode_bytes
from neisan.serialization.encoding.float import encode_float64
from neisan.serialization.encoding.int import encode_int
from neisan.serialization.encoding.utf8 import encode_utf8

logger = get_logger()

_BIGINT_MODULUS = 2 ** (8 * BIGINT_SIZE)


class ValueEncoder:
    """ Writes values using the tags of a registry.

    The encoder keeps no state between calls, it only reads the registry and the settings.
    """

    def __init__(self, registry: TypeRegistry, settings: CodecSettings) -> None:
        self.log = logger.new()
        self._registry = registry
        self._settings = settings

    def to_bytes(self, value: Any) -> bytes:
        serializer = Serializer.build_bytes_serializer()
        self.encode(serializer, value)
        return bytes(serializer.finalize())

    def encode(self, serializer: Serializer, value: Any) -> None:
        kind = classify(value)
        match kind:
            case ValueKind.NULL:
                serializer.write_byte(BuiltinTag.NULL)
            case ValueKind.UNDEFINED:
                serializer.write_byte(BuiltinTag.UNDEFINED)
            case ValueKind.BOOLEAN:
                serializer.write_byte(BuiltinTag.BOOLEAN)
                encode_bool(serializer, value)
            case ValueKind.STRING:
                serializer.write_byte(BuiltinTag.STRING)
                encode_utf8(serializer, value)
            case ValueKind.BIGINT:
                serializer.write_byte(BuiltinTag.BIGINT)
                encode_int(serializer, self._fit_bigint(int(value)), length=BIGINT_SIZE, signed=True)
            case ValueKind.NUMBER:
                serializer.write_byte(BuiltinTag.NUMBER)
                encode_float64(serializer, float(value))
            case ValueKind.REGEX:
                self._encode_regex(serializer, value)
            case ValueKind.ARRAY:
                self._encode_array_like(serializer, BuiltinTag.ARRAY, value)
            case ValueKind.MAP:
                self._encode_array_like(serializer, BuiltinTag.MAP, [[k, v] for k, v in value.items()])
            case ValueKind.SET:
                self._encode_array_like(serializer, BuiltinTag.SET, value)
            case ValueKind.REGISTERED:
                self._encode_registered(serializer, value)
            case ValueKind.OBJECT:
                self._encode_array_like(serializer, BuiltinTag.OBJECT, self._entries(value))
            case _:
                assert_never(kind)

    def _fit_bigint(self, value: int) -> int:
        if BIGINT_MIN <= value <= BIGINT_MAX:
            return value
        if self._settings.STRICT_BIGINT_RANGE:
            raise ValueOutOfRange(f'{value} does not fit a {BIGINT_SIZE}-byte bigint')
        wrapped = value % _BIGINT_MODULUS
        if wrapped > BIGINT_MAX:
            wrapped -= _BIGINT_MODULUS
        self.log.warning('bigint out of range, wrapping', value=value, wrapped=wrapped)
        return wrapped

    def _encode_array_like(self, serializer: Serializer, tag: int, values: Collection[Any]) -> None:
        serializer.write_byte(tag)
        try:
            encode_framed(serializer, values, self.encode)
        except TooLongError as e:
            raise FieldTooLarge(str(e)) from e

    def _encode_regex(self, serializer: Serializer, pattern: re.Pattern) -> None:
        if not isinstance(pattern.pattern, str):
            raise UnsupportedType('cannot encode a pattern over bytes')
        # the payload is a complete array buffer with its own length prefix
        inner = Serializer.build_bytes_serializer()
        self._encode_array_like(inner, BuiltinTag.ARRAY, [pattern.pattern, flags_to_str(pattern.flags)])
        serializer.write_byte(BuiltinTag.REGEX)
        encode_bytes(serializer, bytes(inner.finalize()))

    def _encode_registered(self, serializer: Serializer, value: Any) -> None:
        type_id = get_type_id(value)
        assert type_id is not None
        tag = self._registry.get_tag(type_id)
        if tag is None:
            raise UnknownType(f'{type_id} is not registered with this codec')
        helper = self._registry.encode_helper_for(tag)
        fields: Collection[Any]
        if helper is None:
            fields = self._entries(value)
        elif not callable(helper):
            raise InvalidCustomCodec(f'encode helper of {type_id} is not callable')
        else:
            fields = self._helper_fields(type_id, helper(value))
        self._encode_array_like(serializer, tag, fields)

    def _entries(self, value: Any) -> list[list[Any]]:
        entries = []
        for name, field in field_entries(value):
            if not isinstance(name, str):
                raise UnsupportedType(f'field names must be strings, got {name!r}')
            entries.append([name, field])
        return entries

    def _helper_fields(self, type_id: str, fields: Optional[Iterable[Any]]) -> list[Any]:
        if fields is None or isinstance(fields, (str, bytes, Mapping)):
            raise InvalidCustomCodec(f'encode helper of {type_id} must return a sequence of fields, got {fields!r}')
        return list(fields)
