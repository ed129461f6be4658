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

r"""
The payload of the boolean tag: a single byte that is either 0x01 (true) or 0x00 (false).

>>> se = Serializer.build_bytes_serializer()
>>> encode_bool(se, True)
>>> encode_bool(se, False)
>>> bytes(se.finalize())
b'\x01\x00'

>>> de = Deserializer.build_bytes_deserializer(b'\x01\x00')
>>> decode_bool(de), decode_bool(de)
(True, False)
>>> de.finalize()

Decoding is strict, a byte that is neither 0x00 nor 0x01 is not read as false:

>>> decode_bool(Deserializer.build_bytes_deserializer(b'\xff'))
Traceback (most recent call last):
...
neisan.serialization.exceptions.BadDataError: b'\xff' is not a valid boolean
"""

from neisan.serialization import BadDataError, Deserializer, Serializer

_TRUE = 0x01
_FALSE = 0x00


def encode_bool(serializer: Serializer, value: bool) -> None:
    assert isinstance(value, bool)
    serializer.write_byte(_TRUE if value else _FALSE)


def decode_bool(deserializer: Deserializer) -> bool:
    byte = deserializer.read_byte()
    if byte not in (_TRUE, _FALSE):
        raise BadDataError(f'{bytes([byte])!r} is not a valid boolean')
    return byte == _TRUE
