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
This module implements encoding of a float as an 8-byte little-endian IEEE-754 double.

Every real number is written with the same width, there is no narrower variant for values that would fit in a
single precision float.

>>> se = Serializer.build_bytes_serializer()
>>> encode_float64(se, 1.5)  # writes 000000000000f83f
>>> encode_float64(se, -2.0)  # writes 00000000000000c0
>>> bytes(se.finalize()).hex()
'000000000000f83f00000000000000c0'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('000000000000f83f00000000000000c0'))
>>> decode_float64(de)
1.5
>>> decode_float64(de)
-2.0
>>> de.finalize()
"""

from neisan.serialization import Deserializer, Serializer

_FLOAT64_FORMAT = '<d'


def encode_float64(serializer: Serializer, value: float) -> None:
    assert isinstance(value, float)
    serializer.write_struct((value,), _FLOAT64_FORMAT)


def decode_float64(deserializer: Deserializer) -> float:
    value, = deserializer.read_struct(_FLOAT64_FORMAT)
    return value
