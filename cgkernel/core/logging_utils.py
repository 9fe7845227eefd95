"""Logging utilities for cgkernel.

Provides a consistent logger hierarchy and formatting without modifying the
process root logger. All kernel code should obtain loggers via get_logger().
"""
from __future__ import annotations

import logging
import sys
from typing import Optional, Union

_ROOT_NAME = 'cgkernel'
_FORMAT = logging.Formatter('%(levelname)s %(name)s: %(message)s')


def _ensure_kernel_root() -> logging.Logger:
    """Ensure the 'cgkernel' logger has a single stream handler and is isolated
    from the process root logger. Returns the 'cgkernel' logger.
    """
    root = logging.getLogger(_ROOT_NAME)
    # The package __init__ only attaches a NullHandler; swap it for a real one
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


def configure_logging(level: Union[str, int] = 'INFO') -> None:
    """Configure the 'cgkernel' logger family level.

    This does NOT modify the process root logger.
    """
    root = _ensure_kernel_root()
    root.setLevel(_to_level(level))


def get_logger(name: str, level: Optional[Union[str, int]] = None) -> logging.Logger:
    """Return a logger under the 'cgkernel' namespace.

    Unlike configure_logging(), this never attaches handlers: library modules
    call it at import time and must stay silent until the application opts in.
    If a level is provided it is set on the logger; otherwise the logger is
    left at NOTSET so it inherits from the 'cgkernel' parent.
    """
    if name != _ROOT_NAME and not name.startswith(_ROOT_NAME + '.'):
        name = f'{_ROOT_NAME}.{name}'
    log = logging.getLogger(name)
    log.setLevel(_to_level(level) if level is not None else logging.NOTSET)
    return log


__all__ = ['get_logger', 'configure_logging']
