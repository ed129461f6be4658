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
The "array-like" framing: a known number of elements where every element is a self-contained byte sequence.

Layout: [N: u32 little-endian][L_0: u16 little-endian][element_0: L_0 bytes]...[L_N][element_N]

Each element is encoded on its own serializer first, so its byte length is known before it is written. Because the
length prefix is 2 bytes wide no single element can take more than 65535 bytes, a bigger element raises `TooLongError`
instead of being truncated.

>>> from neisan.serialization.encoding.utf8 import encode_utf8, decode_utf8
>>> se = Serializer.build_bytes_serializer()
>>> encode_framed(se, ['ab', ''], encode_utf8)
>>> bytes(se.finalize()).hex()
'020000000600020000006162040000000000'

Breakdown of the result:

    02000000: 2 elements
    0600: the first element takes 6 bytes
    020000006162: 'ab' (with its own length prefix)
    0400: the second element takes 4 bytes
    00000000: '' (with its own length prefix)

When decoding, the builder can be any compatible collection, it only matters that it can be initialized with an
`Iterable[T]`. Each element decoder only sees the bytes of its own element.

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('020000000600020000006162040000000000'))
>>> decode_framed(de, decode_utf8, tuple)
('ab', '')
>>> de.finalize()

An element length that points past the end of the data is detected before the element is sliced:

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('010000000900020000006162'))
>>> decode_framed(de, decode_utf8, list)
Traceback (most recent call last):
...
neisan.serialization.exceptions.OutOfDataError: not enough bytes to read
"""

from collections.abc import Collection, Iterable
from typing import Callable, TypeVar

from neisan.serialization import Deserializer, Serializer, TooLongError
from neisan.serialization.encoding.int import decode_int, encode_int

from . import Decoder, Encoder

T = TypeVar('T')
R = TypeVar('R', bound=Collection)

COUNT_SIZE = 4
ELEMENT_LENGTH_SIZE = 2
MAX_ELEMENT_LENGTH = 2 ** (8 * ELEMENT_LENGTH_SIZE) - 1


def encode_element(serializer: Serializer, value: T, encoder: Encoder[T]) -> None:
    """ Encodes a single element with its u16 length prefix.
    """
    element_serializer = Serializer.build_bytes_serializer()
    encoder(element_serializer, value)
    data = element_serializer.finalize()
    if len(data) > MAX_ELEMENT_LENGTH:
        raise TooLongError(f'element takes {len(data)} bytes, at most {MAX_ELEMENT_LENGTH} fit a frame')
    encode_int(serializer, len(data), length=ELEMENT_LENGTH_SIZE, signed=False)
    serializer.write_bytes(data)


def decode_element(deserializer: Deserializer, decoder: Decoder[T]) -> T:
    """ Decodes a single element from the bytes delimited by its u16 length prefix.

    Bytes of the element that the decoder leaves unread are skipped.
    """
    length = decode_int(deserializer, length=ELEMENT_LENGTH_SIZE, signed=False)
    data = deserializer.read_bytes(length)
    return decoder(Deserializer.build_bytes_deserializer(data))


def encode_framed(serializer: Serializer, values: Collection[T], encoder: Encoder[T]) -> None:
    encode_int(serializer, len(values), length=COUNT_SIZE, signed=False)
    for value in values:
        encode_element(serializer, value, encoder)


def decode_framed(
    deserializer: Deserializer,
    decoder: Decoder[T],
    builder: Callable[[Iterable[T]], R],
) -> R:
    count = decode_int(deserializer, length=COUNT_SIZE, signed=False)
    return builder(decode_element(deserializer, decoder) for _ in range(count))
