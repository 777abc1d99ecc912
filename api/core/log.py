"""
Process-wide logging setup.

Modules log through `logging.getLogger(__name__)`; this only installs the
root handler and level once.
"""

from __future__ import annotations

import logging

from . import config

_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging() -> None:
    root = logging.getLogger()
    level = logging.getLevelName(config.log_level())
    if not isinstance(level, int):
        level = logging.INFO

    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        root.addHandler(handler)
    root.setLevel(level)
