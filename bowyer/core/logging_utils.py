"""Logging utilities for bowyer.

Provides a consistent logger hierarchy and formatting without modifying the
process root logger. All bowyer code should obtain loggers via get_logger().
"""
from __future__ import annotations

import logging
import sys
from typing import Optional, Union

_FORMAT = logging.Formatter('%(levelname)s %(name)s: %(message)s')
_ROOT_NAME = 'bowyer'


def _ensure_bowyer_root() -> logging.Logger:
    """Ensure the 'bowyer' logger has a single stream handler and is isolated
    from the process root logger. Returns the 'bowyer' logger.
    """
    root = logging.getLogger(_ROOT_NAME)
    # Only NullHandlers (added by package __init__) -> replace with a StreamHandler
    has_non_null = any(not isinstance(h, logging.NullHandler) for h in root.handlers)
    if not has_non_null:
        for h in list(root.handlers):
            root.removeHandler(h)
        handler = logging.StreamHandler(stream=sys.stdout)
        handler.setFormatter(_FORMAT)
        root.addHandler(handler)
    root.propagate = False
    return root


def _to_level(level: Union[str, int, None], default: int = logging.INFO) -> int:
    if level is None:
        return default
    if isinstance(level, int):
        return level
    value = getattr(logging, str(level).upper(), None)
    return value if isinstance(value, int) else default


def configure_logging(level: Union[str, int] = 'INFO', mute_external: bool = True) -> None:
    """Configure the 'bowyer' logger family level and optional external noise suppression.

    This does NOT modify the process root logger.
    """
    root = _ensure_bowyer_root()
    lvl = _to_level(level)
    root.setLevel(lvl)
    # scipy's qhull wrapper is the only chatty dependency at DEBUG
    if mute_external and lvl <= logging.DEBUG:
        logging.getLogger('scipy').setLevel(logging.INFO)


def get_logger(name: str, level: Optional[Union[str, int]] = None) -> logging.Logger:
    """Return a logger under the 'bowyer' namespace.

    Unlike configure_logging() this never attaches handlers: library code
    stays silent (NullHandler from the package __init__) until the
    application opts in. Without a level the logger inherits from 'bowyer'.
    """
    if name != _ROOT_NAME and not name.startswith(_ROOT_NAME + '.'):
        name = f'{_ROOT_NAME}.{name}'
    log = logging.getLogger(name)
    log.setLevel(_to_level(level) if level is not None else logging.NOTSET)
    return log


__all__ = ['get_logger', 'configure_logging']
