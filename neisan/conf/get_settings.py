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

import os
from typing import NamedTuple, Optional

from structlog import get_logger

from neisan.conf.settings import CodecSettings

logger = get_logger()

CONFIG_YAML_ENV_VAR = 'NEISAN_CONFIG_YAML'


class _SettingsMetadata(NamedTuple):
    source: Optional[str]
    settings: CodecSettings


_settings_singleton: Optional[_SettingsMetadata] = None


def get_settings() -> CodecSettings:
    """
    Returns the settings used by codecs created without explicit settings.

    The settings are loaded from the yaml filepath in the 'NEISAN_CONFIG_YAML' env var, if it is set, or are the
    defaults otherwise. They are loaded once, later calls return the same instance.
    """
    global _settings_singleton

    source = os.environ.get(CONFIG_YAML_ENV_VAR)
    if _settings_singleton is not None:
        if _settings_singleton.source != source:
            raise Exception('loading config twice with a different file')
        return _settings_singleton.settings

    if source is None:
        settings = CodecSettings()
    else:
        logger.new().debug('loading settings', filepath=source)
        settings = CodecSettings.from_yaml(filepath=source)

    _settings_singleton = _SettingsMetadata(source=source, settings=settings)
    return settings


def _reset_settings() -> None:
    """Forget the loaded settings, only meant for tests."""
    global _settings_singleton
    _settings_singleton = None
