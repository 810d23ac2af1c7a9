# File: src/mstair/xrepr/xlogging/logger_formatter.py

import logging
import os
from datetime import datetime, tzinfo
from typing import Any, Literal

import pytz
from colorama import Fore, Style

from mstair.xrepr.base import config as cfg
from mstair.xrepr.xlogging.logger_constants import K_COLOR


__all__ = ["CoreFormatter", "DEFAULT_FORMAT", "get_color_code"]


FormatStyle = Literal["%", "{", "$"]

DEFAULT_FORMAT = "%(levelName)s %(asctime)s %(name)s:%(lineno)d %(message)s"
DEFAULT_DATEFMT = "%H:%M:%S"

COLOR_MAP: dict[str | None, str] = {
    "TRACE": Fore.MAGENTA,
    "DEBUG": Style.DIM,
    "INFO": Fore.CYAN,
    "WARNING": Fore.YELLOW,
    "ERROR": Fore.LIGHTRED_EX,
    "CRITICAL": Fore.RED + Style.BRIGHT,
    None: Style.RESET_ALL,
}


def get_color_code(key: Any = None) -> str:
    """
    Return the ANSI color code for a level name or colorama color name.

    Colors are only emitted in desktop mode; otherwise the empty string is returned.
    """
    if not cfg.in_desktop_mode():
        return ""
    if key in {"", "RESET"} or key is None:
        return Style.RESET_ALL
    if key in COLOR_MAP:
        return COLOR_MAP[key]
    if isinstance(key, str):
        _clean_key = key.upper().replace("BRIGHT", "LIGHT").removesuffix("_EX").replace("_", "")
        if _clean_key.startswith("LIGHT"):
            _clean_key += "_EX"
        if _clean_key in dir(Fore):
            return getattr(Fore, _clean_key)
    return Style.RESET_ALL


class CoreFormatter(logging.Formatter):
    """
    Formatter for CoreLogger output.

    Adds a `levelName` field colored per level (or per the record's `color` extra),
    and formats timestamps in the zone named by LOG_TIMEZONE (default UTC).
    """

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        style: FormatStyle = "%",
        validate: bool = True,
        *,
        timezone: str | None = None,
    ) -> None:
        """
        :param fmt: The format string for log messages (default DEFAULT_FORMAT).
        :param datefmt: The strftime format for timestamps (default DEFAULT_DATEFMT).
        :param style: The style for the format string (default is "%").
        :param validate: Whether to validate the format strings.
        :param timezone: IANA zone name; overrides LOG_TIMEZONE.
        :raises pytz.UnknownTimeZoneError: If the zone name is unknown.
        """
        super().__init__(
            fmt=fmt or DEFAULT_FORMAT,
            datefmt=datefmt or DEFAULT_DATEFMT,
            style=style,
            validate=validate,
        )
        self.tz: tzinfo = pytz.timezone(timezone or os.environ.get("LOG_TIMEZONE") or "UTC")

    def format(self, record: logging.LogRecord) -> str:
        color_key = getattr(record, K_COLOR, record.levelname)
        record.levelName = get_color_code(color_key) + record.levelname + get_color_code()
        return super().format(record)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        _datetime = datetime.fromtimestamp(record.created, self.tz)
        if datefmt:
            return _datetime.strftime(datefmt)
        return _datetime.isoformat()


# End of file: src/mstair/xrepr/xlogging/logger_formatter.py
