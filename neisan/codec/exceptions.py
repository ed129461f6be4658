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


class CodecError(Exception):
    """Base class for errors raised by the codec."""


class RegistrationError(CodecError):
    """A type could not be registered."""


class DuplicateRegistration(RegistrationError):
    """The type identifier is already present in the registry."""


class UnknownType(CodecError):
    """A value carries a type identifier that this registry does not know.

    It usually means the value was produced by (or its type registered on) a different codec instance.
    """


class InvalidCustomCodec(CodecError):
    """A custom encode helper or reviver is missing, not callable, or returned something unusable."""


class UnsupportedType(CodecError, TypeError):
    """The value has no encoding: it is neither a built-in shape, a registered type, nor an object with fields."""


class ValueOutOfRange(CodecError, ValueError):
    """An integer does not fit the 64-bit bigint payload and truncation is disabled."""


class FieldTooLarge(CodecError):
    """A nested element encodes to more bytes than its 16-bit length prefix can describe."""


class MalformedBuffer(CodecError):
    """The encoded bytes are truncated or structurally invalid."""
