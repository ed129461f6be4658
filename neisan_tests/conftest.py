import os

from neisan.logging import LoggingOutput, setup_logging

# tests never read settings from the environment, codecs get explicit settings
os.environ.pop('NEISAN_CONFIG_YAML', None)

setup_logging(logging_output=LoggingOutput.NULL, debug=True)
