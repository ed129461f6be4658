import logging

import pytest
import structlog

from neisan.codec import Codec
from neisan.conf import CodecSettings
from neisan.logging import LoggingOutput, setup_logging


@pytest.fixture
def restore_logging():
    yield
    setup_logging(logging_output=LoggingOutput.NULL, debug=True)


@pytest.mark.parametrize('logging_output', list(LoggingOutput))
def test_setup_logging(restore_logging, logging_output: LoggingOutput, capsys) -> None:
    setup_logging(logging_output=logging_output)
    assert logging.getLogger().level == logging.INFO
    # the wrapped bigint warning reaches the handlers
    Codec(CodecSettings()).encode(2 ** 64)
    captured = capsys.readouterr()
    if logging_output is LoggingOutput.NULL:
        assert 'bigint out of range' not in captured.err
    else:
        assert 'bigint out of range' in captured.err


def test_debug_level(restore_logging) -> None:
    setup_logging(logging_output=LoggingOutput.JSON, debug=True)
    assert logging.getLogger().level == logging.DEBUG
    assert structlog.is_configured()
