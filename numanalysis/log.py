"""Logging for the numerical routines."""

import logging
import sys

_FORMAT = "[%(levelname)s] %(name)s: %(message)s"
_DEFAULT_LEVEL = logging.WARNING

_loggers: dict[str, logging.Logger] = {}


def get_logger(name: str = None) -> logging.Logger:
    """Get the package logger for a module.

    :param name: The module name, typically ``__name__``. Names outside the
        package are prefixed with ``numanalysis.``.

    :returns: The cached logger.
    """
    if name is None:
        name = "numanalysis"
    if not name.startswith("numanalysis"):
        name = f"numanalysis.{name}"

    if name in _loggers:
        return _loggers[name]

    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(_DEFAULT_LEVEL)
        logger.propagate = False

    _loggers[name] = logger
    return logger


def set_log_level(level: int | str) -> None:
    """Set the level of every package logger, including ones created later.

    :param level: A :mod:`logging` level or its name, e.g. ``"DEBUG"``.
    """
    global _DEFAULT_LEVEL

    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)

    for logger in _loggers.values():
        logger.setLevel(level)

    _DEFAULT_LEVEL = level
