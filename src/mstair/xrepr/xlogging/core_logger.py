# File: src/mstair/xrepr/xlogging/core_logger.py
"""
Structured logging with environment-driven levels and bounded argument rendering.

Example:
    >>> from mstair.xrepr.xlogging.logger_factory import create_logger
    >>> LOG = create_logger(__name__)
    >>> LOG.warning("Rejected payload %s", {"id": 7, "items": list(range(1000))})
    # ... Rejected payload ["id" => 7, "items" => [0, 1, 2, <+997>]]

Features:
- Custom TRACE level below DEBUG
- Per-logger levels from LOG_LEVELS / LOG_LEVEL_<NAME> (see logger_util)
- Non-primitive arguments are rendered with xrepr(), so one log call cannot
  dump an unbounded structure

Design:
- Only the root logger owns handlers/formatters; CoreLogger instances propagate.
- initialize_root() is the only supported entry point for root setup.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from typing import Any, TextIO

from mstair.xrepr.base.types import PRIMITIVE_TYPES
from mstair.xrepr.repr_api import xrepr
from mstair.xrepr.xlogging.logger_constants import TRACE, initialize_logger_constants
from mstair.xrepr.xlogging.logger_formatter import CoreFormatter
from mstair.xrepr.xlogging.logger_util import LogLevelConfig, level_from_text


__all__: list[str] = [
    "CoreLogger",
    "initialize_root",
]

_LOG_ROOT_ATTR_NAME = "_xrepr_corelogger_initialized"


class CoreLogger(logging.Logger):
    """
    Application logger that extends logging.Logger with:

    - A TRACE level and `trace()` method.
    - Level resolution from environment variables via LogLevelConfig.
    - Bounded rendering of non-primitive args with the default Generator.

    Handlers are not attached directly; all CoreLogger instances propagate
    to the root logger, which holds a single stderr handler per initialize_root().
    """

    def __init__(
        self,
        name: str,
        level: int | str = logging.NOTSET,
    ) -> None:
        """
        :param name: The name of the logger, typically the module name.
        :param level: The initial log level. NOTSET resolves it from the environment.
        """
        initialize_logger_constants()
        if level in {logging.NOTSET, "NOTSET", ""}:
            level = LogLevelConfig.get_instance().get_effective_level(name)
        super().__init__(name, level)

    def __repr__(self) -> str:
        level = self.getEffectiveLevel()
        return f"<{type(self).__name__} '{self.name}' {logging.getLevelName(level)}={level}>"

    def _log(  # type: ignore[override]
        self,
        level: int,
        msg: object,
        args: Any,
        exc_info: Any = None,
        extra: Any = None,
        stack_info: bool = False,
        stacklevel: int = 1,
    ) -> None:
        if isinstance(args, tuple) and not _is_mapping_style(msg, args):
            args = _render_args(args)
        super()._log(
            level,
            msg,
            args,
            exc_info=exc_info,
            extra=extra,
            stack_info=stack_info,
            stacklevel=stacklevel + 1,
        )

    def trace(self, msg: object, *args: Any, **kwargs: Any) -> None:
        """Log a message at TRACE level (below DEBUG)."""
        if self.isEnabledFor(TRACE):
            kwargs.setdefault("stacklevel", 1)
            kwargs["stacklevel"] += 1
            self.log(TRACE, msg, *args, **kwargs)


def _is_mapping_style(msg: object, args: tuple[Any, ...]) -> bool:
    """Check for logging's `%(key)s` form, where a single mapping arg supplies the values."""
    return len(args) == 1 and isinstance(args[0], Mapping) and "%(" in str(msg)


def _render_args(args: tuple[Any, ...]) -> tuple[Any, ...]:
    """Replace non-primitive format args with their xrepr() text."""
    return tuple(arg if isinstance(arg, PRIMITIVE_TYPES) else xrepr(arg) for arg in args)


def initialize_root(
    fmt: str | None = None,
    datefmt: str | None = None,
    level: int | str | None = None,
    force: bool = False,
    stream: TextIO | None = None,
) -> None:
    """
    Idempotently configure the root logger for CoreLogger.

    Behavior:
    - Ensures exactly one StreamHandler with CoreFormatter exists for the target stream.
    - If `force=True`, removes and recreates that handler.
    - Sets root level to `level` if provided, otherwise uses WARNING if NOTSET.
    - Does not modify other handlers owned by the host application.

    :param fmt: Format string, see CoreFormatter.
    :param datefmt: Date format, see CoreFormatter.
    :param level: Root logger level (int or name). If None and root is NOTSET, WARNING is used.
    :param force: Reinitialize even if already initialized.
    :param stream: Stream to write to (default: sys.stderr).
    """
    root: logging.Logger = logging.getLogger()
    if getattr(root, _LOG_ROOT_ATTR_NAME, False) and not force:
        return
    setattr(root, _LOG_ROOT_ATTR_NAME, True)
    initialize_logger_constants()

    target = stream or sys.stderr
    root.handlers = [
        h
        for h in root.handlers
        if not (isinstance(h, logging.StreamHandler) and h.stream is target and force)
    ]
    if not any(
        isinstance(h, logging.StreamHandler)
        and h.stream is target
        and isinstance(h.formatter, CoreFormatter)
        for h in root.handlers
    ):
        handler = logging.StreamHandler(target)
        handler.setFormatter(CoreFormatter(fmt, datefmt))
        root.addHandler(handler)

    if level is not None:
        resolved = level_from_text(level) if isinstance(level, str) else level
        root.setLevel(logging.WARNING if resolved is None else resolved)
    elif root.level == logging.NOTSET:
        root.setLevel(logging.WARNING)


# End of file: src/mstair/xrepr/xlogging/core_logger.py
