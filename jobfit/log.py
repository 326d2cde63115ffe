"""Logging setup for jobfit: one stdout handler, level from JOBFIT_LOG_LEVEL."""
from __future__ import annotations

import logging
import sys

_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
_DATE_FMT = "%Y-%m-%d %H:%M:%S"
_ROOT = "jobfit"


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the jobfit namespace; configures it on first call."""
    root = logging.getLogger(_ROOT)
    if not root.handlers:
        _configure(root)
    return logging.getLogger(name)


def _configure(root: logging.Logger) -> None:
    from jobfit import config

    level = getattr(logging, config.JOBFIT_LOG_LEVEL, logging.INFO)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FMT))
    root.addHandler(handler)
    root.setLevel(level)
