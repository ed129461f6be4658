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
Conversion between compiled pattern flags and the flag string carried on the wire.

The flag string uses the same letters as inline flags in a pattern (`(?aiLmsux)`). Letters without a Python meaning,
such as the `g`, `y` or `d` flags that other regex dialects use, are ignored on decode.

>>> import re
>>> flags_to_str(re.compile('a+', re.IGNORECASE | re.MULTILINE).flags)
'imu'
>>> flags_from_str('imu') == re.IGNORECASE | re.MULTILINE | re.UNICODE
True
"""

import re

from structlog import get_logger

logger = get_logger()

_FLAG_LETTERS: dict[str, re.RegexFlag] = {
    'a': re.ASCII,
    'i': re.IGNORECASE,
    'L': re.LOCALE,
    'm': re.MULTILINE,
    's': re.DOTALL,
    'u': re.UNICODE,
    'x': re.VERBOSE,
}


def flags_to_str(flags: int) -> str:
    return ''.join(letter for letter, flag in _FLAG_LETTERS.items() if flags & flag)


def flags_from_str(letters: str) -> int:
    flags = 0
    for letter in letters:
        flag = _FLAG_LETTERS.get(letter)
        if flag is None:
            logger.debug('ignoring unsupported regex flag', flag=letter)
            continue
        flags |= flag
    return flags
