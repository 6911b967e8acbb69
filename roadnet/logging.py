"""Logging for roadnet.

Every module logs through a child of the ``roadnet`` logger obtained with
``get_logger(__name__)``. Algorithms report problem sizes and counts at DEBUG,
the tour solver reports infeasible networks at INFO and the planner reports
failed plans at WARNING. Nothing logs at ERROR for an expected outcome.

The initial level can be set with the ``ROADNET_LOG_LEVEL`` environment
variable (a level name such as ``DEBUG`` or a number).
"""

import logging
import os
import sys
import time
from contextlib import contextmanager
from typing import Iterator, Optional, Union

ROOT_LOGGER_NAME = "roadnet"
LOG_LEVEL_ENV = "ROADNET_LOG_LEVEL"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

LevelLike = Union[int, str]

_ROOT_LOGGER_CONFIGURED = False


def _coerce_level(level: LevelLike) -> int:
    """Return ``level`` as a numeric logging level.

    Raises:
        ValueError: If ``level`` is not a known level name or number.
    """
    if isinstance(level, int):
        return level
    text = str(level).strip()
    if text.isdigit():
        return int(text)
    value = logging.getLevelName(text.upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level {level!r}")
    return value


def _level_from_env(default: int) -> int:
    raw = os.getenv(LOG_LEVEL_ENV)
    if not raw:
        return default
    try:
        return _coerce_level(raw)
    except ValueError:
        return default


def setup_root_logger(
    level: Optional[LevelLike] = None,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> logging.Logger:
    """Attach a single handler to the ``roadnet`` logger.

    Only the first call has an effect until ``reset_logging`` runs.

    Args:
        level: Level for the package. Defaults to ``ROADNET_LOG_LEVEL`` or INFO.
        format_string: Record format. Defaults to ``DEFAULT_FORMAT``.
        handler: Destination. Defaults to a stdout ``StreamHandler``.

    Returns:
        The ``roadnet`` logger.
    """
    global _ROOT_LOGGER_CONFIGURED

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    if _ROOT_LOGGER_CONFIGURED:
        return root_logger

    if level is None:
        level = _level_from_env(logging.INFO)
    root_logger.setLevel(_coerce_level(level))
    root_logger.handlers.clear()

    handler = handler or logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
    root_logger.addHandler(handler)
    # pytest's caplog listens on the stdlib root logger
    root_logger.propagate = True

    _ROOT_LOGGER_CONFIGURED = True
    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``roadnet`` hierarchy.

    Names outside the package (``"tour"``, ``"__main__"``) are nested under
    ``roadnet`` so their records reach the package handler.
    """
    setup_root_logger()
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    return logger


def set_global_log_level(level: LevelLike) -> None:
    """Set the level of the ``roadnet`` logger and its handlers.

    Accepts a level number or a name such as ``"debug"``.
    """
    value = _coerce_level(level)
    root_logger = setup_root_logger()
    root_logger.setLevel(value)
    for handler in root_logger.handlers:
        handler.setLevel(value)


def enable_debug_logging() -> None:
    """Show the DEBUG size and count records of every algorithm."""
    set_global_log_level(logging.DEBUG)


def disable_debug_logging() -> None:
    set_global_log_level(logging.INFO)


@contextmanager
def log_level(
    level: LevelLike, name: str = ROOT_LOGGER_NAME
) -> Iterator[logging.Logger]:
    """Temporarily set the level of one roadnet logger.

    >>> with log_level("DEBUG", "roadnet.tour"):
    ...     pass
    """
    logger = get_logger(name)
    previous = logger.level
    logger.setLevel(_coerce_level(level))
    try:
        yield logger
    finally:
        logger.setLevel(previous)


@contextmanager
def timed(logger: logging.Logger, operation: str, **sizes: int) -> Iterator[None]:
    """Log the wall time of ``operation`` at DEBUG together with its sizes.

    Nothing is measured when DEBUG is disabled for ``logger``.
    """
    if not logger.isEnabledFor(logging.DEBUG):
        yield
        return
    detail = ", ".join(f"{key}={value}" for key, value in sizes.items())
    started = time.perf_counter()
    try:
        yield
    finally:
        elapsed = time.perf_counter() - started
        logger.debug("%s (%s) took %.4f s", operation, detail, elapsed)


def reset_logging() -> None:
    """Drop handlers and levels so the next ``get_logger`` reconfigures."""
    global _ROOT_LOGGER_CONFIGURED
    _ROOT_LOGGER_CONFIGURED = False

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)


setup_root_logger()
