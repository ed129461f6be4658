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
Python-side shapes that the codec produces or needs to recognize.

- `UNDEFINED` is the value of the "undefined" tag, it is distinct from `None` (the "null" tag). It is also what an
  unknown tag decodes to.
- `Record` is an immutable mapping of field name to value, it is what the "object" tag decodes to.
- `TaggedRecord` is a `Record` that also carries the identifier of a registered type, it is what a registered type
  without a custom reviver decodes to. Encoding it again gives the same bytes.

Registered classes are recognized by the `MARKER_ATTR` class attribute that the registry sets on them, `get_type_id`
is the only place that reads it.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Iterator, Mapping
from typing import Any, Final, Optional, Union

from neisan.codec.exceptions import MalformedBuffer, UnsupportedType

MARKER_ATTR: Final[str] = '__neisan_type_id__'


class _Undefined:
    __slots__ = ()

    _instance: Optional[_Undefined] = None

    def __new__(cls) -> _Undefined:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'UNDEFINED'

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return 'UNDEFINED'


UNDEFINED: Final = _Undefined()


class Record(Mapping[str, Any]):
    """ Immutable, ordered collection of named fields.

    Fields are reachable both as items (`record['email']`) and as attributes (`record.email`), names starting with an
    underscore are only reachable as items. A field named like a `Mapping` method (`items`, `keys`, `values`, `get`)
    is shadowed by that method as an attribute, item access always reaches the field.

    Two records are equal when they have the same fields and values (in any order) and the same type identifier, if
    any. Records are hashable even when their fields hold lists, sets or dicts, so a decoded object can be a map key or
    a set member.
    """

    __slots__ = ('_fields',)

    _fields: dict[str, Any]

    def __init__(self, fields: Union[Mapping[str, Any], Iterable[tuple[str, Any]]] = (), /, **kwargs: Any) -> None:
        object.__setattr__(self, '_fields', dict(fields, **kwargs))

    def __getitem__(self, key: str) -> Any:
        return self._fields[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __getattr__(self, name: str) -> Any:
        if name.startswith('_'):
            raise AttributeError(name)
        try:
            return self._fields[name]
        except KeyError:
            raise AttributeError(f'{type(self).__name__} has no field {name!r}') from None

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f'{type(self).__name__} is immutable')

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f'{type(self).__name__} is immutable')

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mapping):
            return NotImplemented
        if get_type_id(self) != get_type_id(other):
            return False
        return self._fields == dict(other.items())

    def __hash__(self) -> int:
        # fields may hold arrays, sets and maps, they are hashed through a frozen copy
        return hash(_frozen(self))

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self._fields!r})'

    def to_dict(self) -> dict[str, Any]:
        return dict(self._fields)


def _frozen(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return tuple(_frozen(item) for item in value)
    if isinstance(value, (set, frozenset)):
        return frozenset(_frozen(item) for item in value)
    if isinstance(value, Mapping):
        # same shape for records and plain maps, they compare equal when their fields do
        return get_type_id(value), frozenset((_frozen(key), _frozen(item)) for key, item in value.items())
    return value


class TaggedRecord(Record):
    """ A record that remembers which registered type it was decoded from.
    """

    __slots__ = ('_type_id',)

    _type_id: str

    def __init__(self, type_id: str, fields: Union[Mapping[str, Any], Iterable[tuple[str, Any]]] = (), /) -> None:
        super().__init__(fields)
        object.__setattr__(self, '_type_id', type_id)

    @property
    def __neisan_type_id__(self) -> str:
        return self._type_id

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self._type_id!r}, {self._fields!r})'


def get_type_id(value: Any) -> Optional[str]:
    """ Return the registered type identifier a value carries, or None for values of unregistered types.
    """
    if isinstance(value, type):
        # the class of a registered type carries the marker too, but a class is not an instance of itself
        return None
    type_id = getattr(value, MARKER_ATTR, None)
    return type_id if isinstance(type_id, str) else None


def _slot_names(cls: type) -> list[str]:
    names: list[str] = []
    for klass in reversed(cls.__mro__):
        slots = vars(klass).get('__slots__', ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name not in ('__dict__', '__weakref__') and name not in names:
                names.append(name)
    return names


def field_entries(value: Any) -> list[tuple[str, Any]]:
    """ The (name, value) pairs that make up an object, in definition order.

    Records give their fields, dataclasses their public fields, other objects give the contents of their `__dict__` or,
    when they have none, the slots that are set.
    """
    if isinstance(value, Record):
        return list(value.items())
    if dataclasses.is_dataclass(value):
        return [
            (field.name, getattr(value, field.name))
            for field in dataclasses.fields(value)
            if not field.name.startswith('_')
        ]
    instance_dict = getattr(value, '__dict__', None)
    if isinstance(instance_dict, dict):
        return list(instance_dict.items())
    slots = _slot_names(type(value))
    if slots:
        return [(name, getattr(value, name)) for name in slots if hasattr(value, name)]
    raise UnsupportedType(f'cannot encode value of type {type(value).__name__}')


def entries_from_pairs(pairs: Iterable[Any]) -> list[tuple[str, Any]]:
    """ Validate decoded [name, value] pairs and turn them into field entries.
    """
    entries: list[tuple[str, Any]] = []
    for pair in pairs:
        if not isinstance(pair, list) or len(pair) != 2:
            raise MalformedBuffer(f'field entry must be a 2-element array, got {pair!r}')
        name, value = pair
        if not isinstance(name, str):
            raise MalformedBuffer(f'field name must be a string, got {name!r}')
        entries.append((name, value))
    return entries
