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

from neisan.codec.codec import Codec
from neisan.codec.exceptions import (
    CodecError,
    DuplicateRegistration,
    FieldTooLarge,
    InvalidCustomCodec,
    MalformedBuffer,
    RegistrationError,
    UnknownType,
    UnsupportedType,
    ValueOutOfRange,
)
from neisan.codec.registry import CustomCodecPair, TypeDescriptor, TypeRegistry
from neisan.codec.tags import FIRST_CUSTOM_TAG, BuiltinTag
from neisan.codec.values import UNDEFINED, Record, TaggedRecord, get_type_id

__all__ = [
    'Codec',
    'CodecError',
    'DuplicateRegistration',
    'FieldTooLarge',
    'InvalidCustomCodec',
    'MalformedBuffer',
    'RegistrationError',
    'UnknownType',
    'UnsupportedType',
    'ValueOutOfRange',
    'CustomCodecPair',
    'TypeDescriptor',
    'TypeRegistry',
    'FIRST_CUSTOM_TAG',
    'BuiltinTag',
    'UNDEFINED',
    'Record',
    'TaggedRecord',
    'get_type_id',
]
