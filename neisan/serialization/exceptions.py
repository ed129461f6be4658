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


class SerializationError(Exception):
    """Base class for errors raised while reading or writing raw bytes."""


class OutOfDataError(SerializationError):
    """A read asked for more bytes than the buffer holds."""


class TooLongError(SerializationError):
    """A length does not fit the field that has to hold it."""


class BadDataError(SerializationError):
    """The bytes were read but do not form a valid value."""
