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
Classification of Python values into the shapes the codec knows how to encode.

Every value maps to exactly one `ValueKind`, and the encoder has one rule per kind. The order of the checks in
`classify` is significant: `bool` is a subclass of `int` and must be seen first, and the registered-type marker wins over
the collection shapes, so a registered subclass of `dict` is encoded by its own codec pair and not as a map.
"""

import numbers
import re
import types
from collections.abc import Mapping
from enum import Enum, auto
from typing import Any

from neisan.codec.exceptions import UnsupportedType
from neisan.codec.values import UNDEFINED, Record, get_type_id

_UNSUPPORTED_TYPES = (
    type,
    types.BuiltinFunctionType,
    types.FunctionType,
    types.MethodType,
    types.ModuleType,
)


class ValueKind(Enum):
    NULL = auto()
    UNDEFINED = auto()
    BOOLEAN = auto()
    STRING = auto()
    BIGINT = auto()
    NUMBER = auto()
    REGEX = auto()
    ARRAY = auto()
    MAP = auto()
    SET = auto()
    REGISTERED = auto()
    OBJECT = auto()


def classify(value: Any) -> ValueKind:
    """ Decide which encoding rule applies to a value.

    Raises `UnsupportedType` for callables, classes and modules, which have no encoding.
    """
    if value is None:
        return ValueKind.NULL
    if value is UNDEFINED:
        return ValueKind.UNDEFINED
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, numbers.Integral):
        return ValueKind.BIGINT
    if isinstance(value, numbers.Real):
        return ValueKind.NUMBER
    if isinstance(value, re.Pattern):
        return ValueKind.REGEX
    if isinstance(value, _UNSUPPORTED_TYPES):
        raise UnsupportedType(f'cannot encode value of type {type(value).__name__}')
    if get_type_id(value) is not None:
        return ValueKind.REGISTERED
    if isinstance(value, (list, tuple)):
        return ValueKind.ARRAY
    if isinstance(value, Mapping) and not isinstance(value, Record):
        return ValueKind.MAP
    if isinstance(value, (set, frozenset)):
        return ValueKind.SET
    return ValueKind.OBJECT
