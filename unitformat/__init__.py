import logging

PROGRAM = "unitformat"
DESCRIPTION = "Unit prefix selecting number formatter and parser"

# Get package version.
try:
    from ._version import version as __version__
except ImportError:
    # Packaging resources are not installed.
    __version__ = '?.?.?'

from .config import UnitFormatConfig
# Get config.
CONF = UnitFormatConfig()

# Make main classes available from main package.
# This is placed here because dependent imports need the code above.
from .prefixes import PrefixSet, ChoiceTable, PrefixError
from .numbers import NumberFormat, LocaleNumberFormat
from .grammar import TemplateError
from .format import UnitFormat, ParseResult, UnitParseError

# Suppress warnings when the user code does not include a handler.
logging.getLogger().addHandler(logging.NullHandler())

def add_log_handler(logger, handler=None, format_str="{levelname}: {message} ({name})"):
    if handler is None:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(format_str, style="{"))
    logger.addHandler(handler)

# Create base logger.
LOGGER = logging.getLogger(__name__)
add_log_handler(LOGGER)

def set_log_verbosity(level, logger=None):
    """Enable logging to stdout with a certain level"""
    if logger is None:
        logger = LOGGER
    logger.setLevel(level)
