"""Logging setup for the command line tool."""

from __future__ import annotations

import logging
import os
import sys

ENV_VAR = "BRIGHTR_LOG"


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Configure the ``brightr`` logger.

    Logs go to stderr; stdout carries command output that scripts parse.
    The level is WARNING, DEBUG with ``verbose``, and BRIGHTR_LOG (a level
    name such as ``info``) overrides both.
    """

    level = logging.DEBUG if verbose else logging.WARNING
    env_level = os.environ.get(ENV_VAR)
    if env_level:
        named = logging.getLevelName(env_level.strip().upper())
        if isinstance(named, int):
            level = named

    logger = logging.getLogger("brightr")
    logger.setLevel(level)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    if level <= logging.DEBUG:
        fmt = "%(name)s: %(levelname)s: %(message)s"
    else:
        fmt = "brightr: %(levelname)s: %(message)s"
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)
    return logger
