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

from pathlib import Path
from typing import Union

from neisan.utils.pydantic import BaseModel
from neisan.utils.yaml import dict_from_yaml


class CodecSettings(BaseModel):
    # Integers outside the signed 64-bit range are wrapped modulo 2**64 when encoded as bigint. When this is set the
    # encoder raises ValueOutOfRange instead.
    STRICT_BIGINT_RANGE: bool = False

    # Tags that are neither built-in nor registered decode to UNDEFINED. When this is set the decoder raises
    # MalformedBuffer instead.
    STRICT_UNKNOWN_TAGS: bool = False

    @classmethod
    def from_yaml(cls, *, filepath: Union[Path, str]) -> 'CodecSettings':
        """Takes a filepath to a yaml file and returns a validated CodecSettings instance."""
        settings_dict = dict_from_yaml(filepath=filepath)
        return cls.model_validate(settings_dict)
