"""Logging setup for processes embedding the eligibility engine."""

import logging
import sys
from typing import Optional

from eligibility.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging for the process.

    Args:
        level: Log level name; defaults to ``settings.LOG_LEVEL``
    """
    level_name = (level or settings.LOG_LEVEL).upper()
    log_level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(format=LOG_FORMAT, stream=sys.stdout, level=log_level)
    logging.getLogger("eligibility").setLevel(log_level)
