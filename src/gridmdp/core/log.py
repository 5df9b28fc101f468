from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from .io import ensure_dir

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"


def get_logger(
    name: str = "gridmdp",
    level: str = "INFO",
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    Configure the package logger with a console handler and an optional file handler.

    Child loggers (``gridmdp.rl``, ``gridmdp.timer``) propagate here, so calling this
    once from a script is enough. Repeated calls only adjust the level.
    """
    log = logging.getLogger(name)
    lvl = getattr(logging, level.upper(), logging.INFO)
    log.setLevel(lvl)
    # Avoid adding multiple handlers on repeated runs
    if not log.handlers:
        fmt = logging.Formatter(LOG_FORMAT)
        ch = logging.StreamHandler()
        ch.setLevel(lvl)
        ch.setFormatter(fmt)
        log.addHandler(ch)
        if log_file:
            ensure_dir(Path(log_file).parent)
            fh = logging.FileHandler(log_file)
            fh.setLevel(lvl)
            fh.setFormatter(fmt)
            log.addHandler(fh)
    else:
        for h in log.handlers:
            h.setLevel(lvl)
    return log
