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
Encodings that are parametrized by another encoding.

A compound encoding only knows its own layout (counts, length prefixes) and calls the given `Encoder` or `Decoder`
for the elements. The codec passes its own recursive `encode`/`decode` methods, which is how a single framing rule
serves arrays, maps, sets, objects and registered types alike.

Submodules follow the same `encode_x`/`decode_x` convention as `neisan.serialization.encoding`, with the element
encoder or decoder as an extra parameter.
"""

from typing import Protocol, TypeVar

from neisan.serialization.deserializer import Deserializer
from neisan.serialization.serializer import Serializer

T_co = TypeVar('T_co', covariant=True)
T_contra = TypeVar('T_contra', contravariant=True)


class Decoder(Protocol[T_co]):
    def __call__(self, deserializer: Deserializer, /) -> T_co:
        ...


class Encoder(Protocol[T_contra]):
    def __call__(self, serializer: Serializer, value: T_contra, /) -> None:
        ...
