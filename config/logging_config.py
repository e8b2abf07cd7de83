"""Process-wide logging setup."""

import logging

from config.defaults import LOG_FORMAT, LOG_LEVEL


def configure_logging(level: str = LOG_LEVEL):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )
