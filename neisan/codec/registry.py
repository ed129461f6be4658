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

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Callable, NamedTuple, Optional

from structlog import get_logger
from typing_extensions import override

from neisan.codec.exceptions import DuplicateRegistration, InvalidCustomCodec, RegistrationError, UnknownType
from neisan.codec.tags import FIRST_CUSTOM_TAG, MAX_TAG, BuiltinTag
from neisan.codec.values import MARKER_ATTR, Record, TaggedRecord, entries_from_pairs

logger = get_logger()

TYPE_ID_PREFIX = '$$'

_COLLECTION_TYPES = (list, tuple, set, frozenset, Mapping)

EncodeHelper = Callable[[Any], Sequence[Any]]
Reviver = Callable[[list[Any]], Any]


class CustomCodecPair(NamedTuple):
    """ How a registered type decomposes into ordered fields and how it is rebuilt from them.

    `encode` maps an instance to a sequence of encodable values, `revive` receives the decoded values as a list in the
    same order and must return the rebuilt instance.
    """
    encode: EncodeHelper
    revive: Reviver

    def validate(self) -> None:
        if not callable(self.encode):
            raise InvalidCustomCodec(f'encode helper is not callable: {self.encode!r}')
        if not callable(self.revive):
            raise InvalidCustomCodec(f'reviver is not callable: {self.revive!r}')


@dataclass(frozen=True)
class TypeDescriptor:
    """ What the registry needs to know about a type: its declared name, the class to mark, and a factory.

    The factory is only used by `Codec.materialize` to build a real instance from a decoded `TaggedRecord`, it is
    called with the record fields as keyword arguments and defaults to the class itself.
    """
    name: str
    type_: type
    factory: Optional[Callable[..., Any]] = None

    @property
    def type_id(self) -> str:
        return f'{TYPE_ID_PREFIX}{self.name}'

    def build(self, **fields: Any) -> Any:
        factory = self.factory if self.factory is not None else self.type_
        return factory(**fields)

    @classmethod
    def from_class(
        cls,
        type_: type,
        *,
        name: Optional[str] = None,
        factory: Optional[Callable[..., Any]] = None,
    ) -> TypeDescriptor:
        return cls(name=name if name is not None else type_.__name__, type_=type_, factory=factory)


class TypeDecoder(ABC):
    """ Turns the decoded fields of a registered type back into a value.

    The framing of the fields is read by the value decoder, a type decoder only sees the list of decoded fields.
    """

    __slots__ = ('type_id',)

    def __init__(self, type_id: str) -> None:
        self.type_id = type_id

    @abstractmethod
    def build(self, fields: list[Any]) -> Any:
        raise NotImplementedError


class RevivingTypeDecoder(TypeDecoder):
    """ Delegates to the reviver of a custom codec pair.
    """

    __slots__ = ('_revive',)

    def __init__(self, type_id: str, revive: Reviver) -> None:
        super().__init__(type_id)
        self._revive = revive

    @override
    def build(self, fields: list[Any]) -> Any:
        if not callable(self._revive):
            raise InvalidCustomCodec(f'reviver of {self.type_id} is not callable')
        instance = self._revive(fields)
        if instance is None:
            raise InvalidCustomCodec(f'reviver of {self.type_id} returned None')
        return instance


class RecordTypeDecoder(TypeDecoder):
    """ Builds a `TaggedRecord` from [name, value] field pairs, for types registered without a custom codec pair.
    """

    __slots__ = ()

    @override
    def build(self, fields: list[Any]) -> TaggedRecord:
        return TaggedRecord(self.type_id, entries_from_pairs(fields))


class TypeRegistry:
    """ Bidirectional mapping between type identifiers and tags, plus the per-tag custom behavior.

    Built-in tags are always present. Registered types get tags from `FIRST_CUSTOM_TAG` upwards, in registration
    order, and registrations are never removed. Encode helpers and decoders are kept in separate tables: a tag only has
    an encode helper when it was registered with a custom codec pair, but every registered tag has a decoder.

    Registration mutates the registry and is not thread-safe, encoding and decoding only read from it.
    """

    def __init__(self) -> None:
        self.log = logger.new()
        self._tags: dict[str, int] = {tag.type_id: int(tag) for tag in BuiltinTag}
        self._descriptors: dict[int, TypeDescriptor] = {}
        self._encode_helpers: dict[int, EncodeHelper] = {}
        self._decoders: dict[int, TypeDecoder] = {}
        self._next_tag: int = FIRST_CUSTOM_TAG

    def __len__(self) -> int:
        return len(self._tags)

    def __contains__(self, type_id: object) -> bool:
        return type_id in self._tags

    def register(self, descriptor: TypeDescriptor, pair: Optional[CustomCodecPair] = None) -> int:
        """ Register a type and return the tag allocated for it.

        The registry is left untouched when the registration fails.
        """
        if not isinstance(descriptor.type_, type):
            raise RegistrationError(f'only classes can be registered, got {descriptor.type_!r}')
        type_id = descriptor.type_id
        if type_id in self._tags:
            raise DuplicateRegistration(f'{type_id} is already registered with tag {self._tags[type_id]}')
        if pair is not None:
            pair.validate()
        elif issubclass(descriptor.type_, _COLLECTION_TYPES) and not issubclass(descriptor.type_, Record):
            # their items are not attributes, the generic fallback would encode them as an empty object
            raise RegistrationError(f'{descriptor.type_.__qualname__} is a collection, it needs a custom codec pair')
        if self._next_tag > MAX_TAG:
            raise RegistrationError(f'no tags left to register {type_id}')

        # only the class' own attribute matters, a subclass of a registered class gets its own marker
        current_type_id = vars(descriptor.type_).get(MARKER_ATTR)
        if current_type_id is not None and current_type_id != type_id:
            raise RegistrationError(f'{descriptor.type_.__qualname__} is already registered as {current_type_id}')
        try:
            setattr(descriptor.type_, MARKER_ATTR, type_id)
        except (AttributeError, TypeError) as e:
            raise RegistrationError(f'cannot mark {descriptor.type_.__qualname__} as {type_id}') from e

        tag = self._next_tag
        self._next_tag += 1
        self._tags[type_id] = tag
        self._descriptors[tag] = descriptor
        if pair is not None:
            self._encode_helpers[tag] = pair.encode
            self._decoders[tag] = RevivingTypeDecoder(type_id, pair.revive)
        else:
            self._decoders[tag] = RecordTypeDecoder(type_id)
        self.log.debug('type registered', type_id=type_id, tag=tag, custom_codec=pair is not None)
        return tag

    def get_tag(self, type_id: str) -> Optional[int]:
        return self._tags.get(type_id)

    def has_type_id(self, type_id: str) -> bool:
        return type_id in self._tags

    def tag_for(self, type_id: str) -> int:
        """ Like `get_tag` but raises `UnknownType` for identifiers that were never registered.
        """
        tag = self._tags.get(type_id)
        if tag is None:
            raise UnknownType(f'{type_id} is not registered')
        return tag

    def descriptor_for_tag(self, tag: int) -> Optional[TypeDescriptor]:
        """ The descriptor of a registered tag, None for built-in and unallocated tags.
        """
        return self._descriptors.get(tag)

    def descriptor_for(self, type_id: str) -> TypeDescriptor:
        descriptor = self._descriptors.get(self.tag_for(type_id))
        if descriptor is None:
            raise UnknownType(f'{type_id} is a built-in type')
        return descriptor

    def encode_helper_for(self, tag: int) -> Optional[EncodeHelper]:
        return self._encode_helpers.get(tag)

    def decoder_for(self, tag: int) -> Optional[TypeDecoder]:
        return self._decoders.get(tag)

    def registered_tags(self) -> dict[str, int]:
        """ Identifier to tag of every registered (non built-in) type, in registration order.
        """
        return {descriptor.type_id: tag for tag, descriptor in self._descriptors.items()}
