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
Fixed-layout encodings of single values, the building blocks of every tag payload.

Each submodule `x` handles one kind of value with a pair of functions:

    def encode_x(serializer: Serializer, value: ValueType, ...layout params...) -> None:
        ...

    def decode_x(deserializer: Deserializer, ...layout params...) -> ValueType:
        ...

None of them writes a tag, tags are the codec's concern. Multi-byte integers and floats are little-endian and
variable-length values carry a u32 length prefix.
"""
