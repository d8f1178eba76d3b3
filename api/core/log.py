"""
Process-wide logging setup.
"""

from __future__ import annotations

import logging

from . import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging() -> None:
    level = getattr(logging, settings.log_level(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    # asyncpg is chatty on DEBUG; keep it at our level or above.
    logging.getLogger("asyncpg").setLevel(max(level, logging.INFO))
