import unittest
from typing import Any, Optional
from unittest import main as ut_main

from structlog import get_logger

from neisan.codec import Codec
from neisan.conf import CodecSettings

logger = get_logger()
main = ut_main


class TestCase(unittest.TestCase):
    settings: Optional[CodecSettings] = None

    def setUp(self) -> None:
        self.log = logger.new()
        self.codec = self.create_codec()

    def create_codec(self, settings: Optional[CodecSettings] = None) -> Codec:
        if settings is None:
            settings = self.settings if self.settings is not None else CodecSettings()
        return Codec(settings)

    def round_trip(self, value: Any, codec: Optional[Codec] = None) -> Any:
        codec = codec or self.codec
        return codec.decode(codec.encode(value))

    def assertEncodesTo(self, value: Any, expected_hex: str) -> None:
        self.assertEqual(self.codec.encode(value).hex(), expected_hex)
