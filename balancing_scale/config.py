"""
Configuration
=============
Global constants for parsing, output and logging.

Exports:
    COMMENT_PREFIX (str): First character of a line that is ignored.
    FIELD_SEPARATOR (str): Separator accepted between fields besides whitespace.
    OUTPUT_SEPARATOR (str): Separator used when printing results.
    MAX_MASS (int): Largest mass a pan may hold (unsigned 64-bit range).
    DEFAULT_LOG_LEVEL (str): Log level used when neither a CLI flag nor the
        environment sets one.
"""
import logging
import os
from typing import Mapping, Optional

COMMENT_PREFIX: str = "#"
FIELD_SEPARATOR: str = ","
OUTPUT_SEPARATOR: str = ","

MAX_MASS: int = 2 ** 64 - 1

LOG_LEVEL_ENV_VAR: str = "BALANCING_SCALE_LOG_LEVEL"
DEFAULT_LOG_LEVEL: str = "WARNING"


def get_log_level(environ: Optional[Mapping[str, str]] = None) -> str:
    """
    Log level named by BALANCING_SCALE_LOG_LEVEL.

    Unknown level names fall back to DEFAULT_LOG_LEVEL.
    """
    if environ is None:
        environ = os.environ
    level = environ.get(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL).strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        return DEFAULT_LOG_LEVEL
    return level
