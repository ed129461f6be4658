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

import re
from typing import Any, Callable

from structlog import get_logger

from neisan.codec.exceptions import MalformedBuffer
from neisan.codec.regex import flags_from_str
from neisan.codec.registry import TypeRegistry
from neisan.codec.tags import BIGINT_SIZE, BuiltinTag
from neisan.codec.values import UNDEFINED, Record, entries_from_pairs
from neisan.conf.settings import CodecSettings
from neisan.serialization import Deserializer, SerializationError
from neisan.serialization.compound_encoding.framed import decode_framed
from neisan.serialization.encoding.bool import decode_bool
from neisan.serialization.encoding.bytes import decode_bytes
from neisan.serialization.encoding.float import decode_float64
from neisan.serialization.encoding.int import decode_int
from neisan.serialization.encoding.utf8 import decode_utf8

logger = get_logger()


def make_hashable(value: Any) -> Any:
    """ Convert decoded arrays to tuples and sets to frozensets, recursively, so they can be set members or map keys.

    >>> make_hashable([1, [2, 3], {4}])
    (1, (2, 3), frozenset({4}))
    >>> make_hashable('abc')
    'abc'
    """
    if isinstance(value, list):
        return tuple(make_hashable(item) for item in value)
    if isinstance(value, set):
        return frozenset(make_hashable(item) for item in value)
    return value


class ValueDecoder:
    """ Reads values written by `ValueEncoder` with a registry that has the same registrations.

    Built-in tags are handled by a fixed rule table, every other tag is looked up in the registry's decoder table. A
    tag that is in neither decodes to `UNDEFINED` without consuming its payload, unless `STRICT_UNKNOWN_TAGS` is set.

    Bytes left after a value are never read, both after the root value and inside a framed element.
    """

    def __init__(self, registry: TypeRegistry, settings: CodecSettings) -> None:
        self.log = logger.new()
        self._registry = registry
        self._settings = settings
        self._rules: dict[int, Callable[[Deserializer], Any]] = {
            BuiltinTag.BOOLEAN: decode_bool,
            BuiltinTag.STRING: decode_utf8,
            BuiltinTag.NUMBER: decode_float64,
            BuiltinTag.BIGINT: self._decode_bigint,
            BuiltinTag.NULL: lambda _: None,
            BuiltinTag.UNDEFINED: lambda _: UNDEFINED,
            BuiltinTag.ARRAY: self._decode_array,
            BuiltinTag.MAP: self._decode_map,
            BuiltinTag.SET: self._decode_set,
            BuiltinTag.REGEX: self._decode_regex,
            BuiltinTag.OBJECT: self._decode_object,
        }

    def from_bytes(self, data: bytes) -> Any:
        if not data:
            raise MalformedBuffer('cannot decode an empty buffer')
        return self.decode(Deserializer.build_bytes_deserializer(data))

    def decode(self, deserializer: Deserializer) -> Any:
        """ Decode one value, any error from the serialization layer, like a short read or an invalid boolean
        byte, is raised as `MalformedBuffer`.
        """
        try:
            return self._decode(deserializer)
        except SerializationError as e:
            raise MalformedBuffer(f'truncated or invalid buffer: {e}') from e

    def _decode(self, deserializer: Deserializer) -> Any:
        tag = deserializer.read_byte()
        rule = self._rules.get(tag)
        if rule is not None:
            return rule(deserializer)
        type_decoder = self._registry.decoder_for(tag)
        if type_decoder is None:
            if self._settings.STRICT_UNKNOWN_TAGS:
                raise MalformedBuffer(f'unknown tag {tag}')
            self.log.debug('unknown tag, decoding as undefined', tag=tag)
            return UNDEFINED
        fields = decode_framed(deserializer, self._decode, list)
        return type_decoder.build(fields)

    def _decode_bigint(self, deserializer: Deserializer) -> int:
        return decode_int(deserializer, length=BIGINT_SIZE, signed=True)

    def _decode_array(self, deserializer: Deserializer) -> list[Any]:
        return decode_framed(deserializer, self._decode, list)

    def _decode_map(self, deserializer: Deserializer) -> dict[Any, Any]:
        result: dict[Any, Any] = {}
        for entry in decode_framed(deserializer, self._decode, list):
            if not isinstance(entry, list) or len(entry) != 2:
                raise MalformedBuffer(f'map entry must be a 2-element array, got {entry!r}')
            key, value = entry
            try:
                result[make_hashable(key)] = value
            except TypeError as e:
                raise MalformedBuffer(f'map key is not hashable: {key!r}') from e
        return result

    def _decode_set(self, deserializer: Deserializer) -> set[Any]:
        members = decode_framed(deserializer, self._decode, list)
        try:
            return {make_hashable(member) for member in members}
        except TypeError as e:
            raise MalformedBuffer('set member is not hashable') from e

    def _decode_regex(self, deserializer: Deserializer) -> re.Pattern:
        data = decode_bytes(deserializer)
        if not data:
            raise MalformedBuffer('empty regex payload')
        parts = self._decode(Deserializer.build_bytes_deserializer(data))
        if not isinstance(parts, list) or len(parts) != 2 or not all(isinstance(part, str) for part in parts):
            raise MalformedBuffer(f'regex payload must be [source, flags], got {parts!r}')
        source, flags = parts
        try:
            return re.compile(source, flags_from_str(flags))
        except (re.error, ValueError) as e:
            raise MalformedBuffer(f'invalid regex {source!r}: {e}') from e

    def _decode_object(self, deserializer: Deserializer) -> Record:
        return Record(entries_from_pairs(decode_framed(deserializer, self._decode, list)))
