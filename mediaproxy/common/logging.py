# mediaproxy/common/logging.py
from __future__ import annotations

import logging
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _coerce_level(level: Union[int, str, None]) -> Optional[int]:
    if level is None:
        return None
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def get_logger(name: str = "mediaproxy", level: Union[int, str, None] = None) -> logging.Logger:
    """
    Return a package logger.
    If no handlers are set anywhere yet, we add a basicConfig once.
    """
    logger = logging.getLogger(name)
    lvl = _coerce_level(level)
    if not logging.getLogger().handlers and not logger.handlers:
        logging.basicConfig(level=lvl or logging.INFO, format=LOG_FORMAT)
    if lvl is not None:
        logger.setLevel(lvl)
    return logger
