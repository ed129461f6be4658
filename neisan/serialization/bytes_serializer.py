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

from typing_extensions import override

from .serializer import Serializer
from .types import Buffer


class BytesSerializer(Serializer):
    """In-memory Serializer that appends every write to a single growing `bytearray`.

    Nested values are encoded on their own serializer before being copied into the parent frame, so most instances are
    short-lived and small. `finalize` returns a read-only view of the buffer, nothing can be written after it.
    """

    def __init__(self) -> None:
        self._buffer = bytearray()

    @override
    def finalize(self) -> memoryview:
        view = memoryview(self._buffer).toreadonly()
        del self._buffer
        return view

    @override
    def cur_pos(self) -> int:
        return len(self._buffer)

    @override
    def write_byte(self, data: int) -> None:
        # int.to_bytes checks for correct range
        self._buffer += int.to_bytes(data, 1, 'little')

    @override
    def write_bytes(self, data: Buffer) -> None:
        self._buffer += data
