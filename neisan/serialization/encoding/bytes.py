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
This module implements encoding a byte sequence with a length prefix.

Layout: [N: u32 little-endian][byte_0]...[byte_N]

>>> se = Serializer.build_bytes_serializer()
>>> encode_bytes(se, b'test')  # writes 04000000 74657374
>>> encode_bytes(se, b'')  # writes 00000000
>>> bytes(se.finalize()).hex()
'040000007465737400000000'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('040000007465737400000000'))
>>> decode_bytes(de)
b'test'
>>> decode_bytes(de)
b''
>>> de.finalize()

A length prefix that claims more bytes than available fails before anything is sliced:

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0500000074657374'))
>>> decode_bytes(de)
Traceback (most recent call last):
...
neisan.serialization.exceptions.OutOfDataError: not enough bytes to read
"""

from neisan.serialization import Deserializer, Serializer, TooLongError

from .int import decode_int, encode_int

LENGTH_PREFIX_SIZE = 4
MAX_LENGTH = 2 ** (8 * LENGTH_PREFIX_SIZE) - 1


def encode_bytes(serializer: Serializer, data: bytes) -> None:
    """ Encodes a byte-sequence adding a u32 length prefix.

    This modules's docstring has more details and examples.
    """
    if len(data) > MAX_LENGTH:
        raise TooLongError(f'{len(data)} bytes do not fit a {LENGTH_PREFIX_SIZE}-byte length prefix')
    encode_int(serializer, len(data), length=LENGTH_PREFIX_SIZE, signed=False)
    serializer.write_bytes(data)


def decode_bytes(deserializer: Deserializer) -> bytes:
    """ Decodes a byte-sequence with a u32 length prefix.

    This modules's docstring has more details and examples.
    """
    size = decode_int(deserializer, length=LENGTH_PREFIX_SIZE, signed=False)
    return bytes(deserializer.read_bytes(size))
