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

from typing import Any, Callable, Optional, TypeVar, Union

from neisan.codec.decoder import ValueDecoder
from neisan.codec.encoder import ValueEncoder
from neisan.codec.exceptions import InvalidCustomCodec, RegistrationError, UnsupportedType
from neisan.codec.registry import CustomCodecPair, EncodeHelper, Reviver, TypeDescriptor, TypeRegistry
from neisan.codec.values import Record, get_type_id
from neisan.conf import CodecSettings, get_settings

T = TypeVar('T', bound=type)

PairLike = Union[CustomCodecPair, tuple[EncodeHelper, Reviver]]


class Codec:
    """ Entry point of the library: a type registry together with the encoder and decoder that use it.

    Each codec owns its registry, so the tags of registered types depend on the order in which they were registered on
    that codec. Bytes are only decodable by a codec with the same registrations, in the same order.

    >>> codec = Codec()
    >>> codec.decode(codec.encode({'a': [1, 2.5, None]}))
    {'a': [1, 2.5, None]}
    """

    def __init__(self, settings: Optional[CodecSettings] = None) -> None:
        self.settings = settings if settings is not None else get_settings()
        self._registry = TypeRegistry()
        self._encoder = ValueEncoder(self._registry, self.settings)
        self._decoder = ValueDecoder(self._registry, self.settings)

    @property
    def registry(self) -> TypeRegistry:
        return self._registry

    def register(
        self,
        type_: type,
        pair: Optional[PairLike] = None,
        *,
        name: Optional[str] = None,
        factory: Optional[Callable[..., Any]] = None,
    ) -> int:
        """ Register a type and return its tag.

        Without a custom codec pair, instances are encoded as their fields and decode to a `TaggedRecord`, which can be
        turned into an instance with `materialize`.
        """
        if not isinstance(type_, type):
            raise RegistrationError(f'only classes can be registered, got {type_!r}')
        descriptor = TypeDescriptor.from_class(type_, name=name, factory=factory)
        return self._registry.register(descriptor, self._as_pair(pair))

    def encodable(
        self,
        pair: Optional[PairLike] = None,
        *,
        encode: Optional[EncodeHelper] = None,
        revive: Optional[Reviver] = None,
        name: Optional[str] = None,
        factory: Optional[Callable[..., Any]] = None,
    ) -> Callable[[T], T]:
        """ Class decorator version of `register`, the class is returned unchanged apart from its type marker.

        The custom codec pair can be given either as `pair` or as the `encode` and `revive` keywords.
        """
        if encode is not None or revive is not None:
            if pair is not None:
                raise InvalidCustomCodec('give either a pair or encode/revive, not both')
            if encode is None or revive is None:
                raise InvalidCustomCodec('encode and revive must be given together')
            pair = CustomCodecPair(encode, revive)

        def decorator(cls: T) -> T:
            self.register(cls, pair, name=name, factory=factory)
            return cls
        return decorator

    def encode(self, value: Any) -> bytes:
        return self._encoder.to_bytes(value)

    def decode(self, data: bytes) -> Any:
        return self._decoder.from_bytes(data)

    def materialize(self, record: Record) -> Any:
        """ Build an instance of the registered type a `TaggedRecord` was decoded from.

        The fields are passed as keyword arguments to the factory of the type, which is the class itself unless another
        one was given at registration. Nested records are passed as they are.
        """
        type_id = get_type_id(record)
        if type_id is None:
            raise UnsupportedType(f'{type(record).__name__} does not carry a registered type identifier')
        descriptor = self._registry.descriptor_for(type_id)
        return descriptor.build(**record)

    @staticmethod
    def _as_pair(pair: Optional[PairLike]) -> Optional[CustomCodecPair]:
        if pair is None or isinstance(pair, CustomCodecPair):
            return pair
        try:
            encode, revive = pair
        except (TypeError, ValueError) as e:
            raise InvalidCustomCodec(f'expected an (encode, revive) pair, got {pair!r}') from e
        return CustomCodecPair(encode, revive)
