"""Logging utilities for hsdlp.

Provides package-scoped loggers plus the fixed-width row format used for the
solver's per-iteration trace.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, Union

from .core import Indicators

_DEFAULT_LEVEL = logging.WARNING
_FORMAT = "[%(levelname)s] %(name)s: %(message)s"

_loggers: dict[str, logging.Logger] = {}

_COLUMNS = (
    "Primal Feasibility",
    "Dual Feasibility",
    "Duality Gap",
    "Step",
    "Path Parameter",
    "Objective",
)
_WIDTH = 20


def _coerce_level(level: Union[int, str]) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.WARNING)
    return level


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get or create a logger under the ``hsdlp`` namespace.

    Loggers are cached so repeated calls never stack handlers.

    Args:
        name: Logger name, typically ``__name__``. ``None`` returns the
            package logger.

    Example:
        >>> from hsdlp.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.debug("factorized normal equations")
    """
    if name is None:
        name = "hsdlp"
    logger_name = name if name == "hsdlp" or name.startswith("hsdlp.") else f"hsdlp.{name}"

    if logger_name in _loggers:
        return _loggers[logger_name]

    logger = logging.getLogger(logger_name)
    if not logger.handlers:
        logger.setLevel(_DEFAULT_LEVEL)
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(_DEFAULT_LEVEL)
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False

    _loggers[logger_name] = logger
    return logger


def set_log_level(level: Union[int, str]) -> None:
    """Set the level of every hsdlp logger, including ones created later.

    Args:
        level: ``logging.DEBUG``-style constant or its name (``"DEBUG"``).
    """
    global _DEFAULT_LEVEL
    level = _coerce_level(level)
    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)
    _DEFAULT_LEVEL = level


def configure_logging(
    level: Union[int, str] = logging.WARNING,
    format_string: Optional[str] = None,
    stream: Optional[object] = None,
) -> None:
    """Replace the handlers of all hsdlp loggers.

    Args:
        level: Logging level (default: WARNING).
        format_string: Custom format string. If None, uses the default.
        stream: Output stream (default: sys.stderr).
    """
    global _DEFAULT_LEVEL
    level = _coerce_level(level)
    formatter = logging.Formatter(format_string or _FORMAT)
    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    _DEFAULT_LEVEL = level


def format_iteration_header() -> str:
    """Column titles matching :func:`format_iteration`."""
    return "".join(title.ljust(_WIDTH) for title in _COLUMNS).rstrip()


def format_iteration(ind: Indicators, alpha: Optional[float] = None) -> str:
    """Format one row of the iteration trace.

    ``alpha`` is ``None`` for the starting point, which has no step.
    """
    step = "-" if alpha is None else f"{alpha:011.5E}"
    cells = (
        f"{ind.rho_p:011.5E}",
        f"{ind.rho_d:011.5E}",
        f"{ind.rho_g:011.5E}",
        step,
        f"{ind.rho_mu:011.5E}",
        f"{ind.obj:011.5E}",
    )
    return "".join(cell.ljust(_WIDTH) for cell in cells).rstrip()


__all__ = [
    "get_logger",
    "set_log_level",
    "configure_logging",
    "format_iteration_header",
    "format_iteration",
]
