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

from enum import IntEnum

from neisan.serialization.compound_encoding.framed import MAX_ELEMENT_LENGTH


class BuiltinTag(IntEnum):
    """Tags reserved for the built-in value shapes, fixed for every registry."""
    BOOLEAN = 0
    STRING = 1
    NUMBER = 2
    BIGINT = 3
    NULL = 4
    UNDEFINED = 5
    ARRAY = 6
    MAP = 7
    SET = 8
    REGEX = 9
    OBJECT = 10

    @property
    def type_id(self) -> str:
        """Canonical identifier of a built-in tag in the registry, e.g. 'boolean'."""
        return self.name.lower()


# registered types get tags from here on, in registration order
FIRST_CUSTOM_TAG: int = len(BuiltinTag)

# the tag is a single byte
MAX_TAG: int = 0xFF

BIGINT_SIZE: int = 8
BIGINT_MIN: int = -(2 ** (8 * BIGINT_SIZE - 1))
BIGINT_MAX: int = 2 ** (8 * BIGINT_SIZE - 1) - 1

__all__ = [
    'BIGINT_MAX',
    'BIGINT_MIN',
    'BIGINT_SIZE',
    'BuiltinTag',
    'FIRST_CUSTOM_TAG',
    'MAX_ELEMENT_LENGTH',
    'MAX_TAG',
]
