# File: src/mstair/xrepr/xlogging/logger_util.py
"""
Environment variable-driven log level configuration.

Two sources are supported:
- Pattern-based DSL strings in LOG_LEVELS, e.g. ``mstair.*:DEBUG;urllib3:WARNING``
  (a bare level such as ``INFO`` sets the default)
- Per-logger overrides in variables like LOG_LEVEL_MSTAIR_XREPR=DEBUG
  (``_`` separates name parts, ``__`` stands for a literal underscore)

Precedence for a logger name: exact > ancestor > glob > default > fallback.
"""

from __future__ import annotations

import fnmatch
import logging
import os
import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Final, NamedTuple

from mstair.xrepr.base.fs_helpers import fs_load_dotenv
from mstair.xrepr.xlogging.logger_constants import initialize_logger_constants


__all__ = ["LogLevelConfig", "LogPatternLevel"]

_FRAGMENT_SEPARATOR_RX: Final[re.Pattern[str]] = re.compile(r"[;, ]+")
_ASSIGNMENT_OPERATOR_RX: Final[re.Pattern[str]] = re.compile(r"[:=]+")
_PER_LOGGER_VAR_RX: Final[re.Pattern[str]] = re.compile(r"^LOG_LEVEL_(?P<SUFFIX>[A-Z][A-Z0-9_]*)$")

_log_level_config_instance: LogLevelConfig | None = None


class LogPatternLevel(NamedTuple):
    """Mapping from a logger name pattern to an integer log level."""

    pattern: str
    level: int


@dataclass(slots=True)
class LogLevelConfig:
    """
    Resolve log levels for logger names from environment variables.

    The empty pattern holds the default level.
    """

    pattern_to_level: dict[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.pattern_to_level:
            self.update_from_environment()

    @classmethod
    def get_instance(cls) -> LogLevelConfig:
        """Return the shared LogLevelConfig, creating it from the environment if needed."""
        global _log_level_config_instance
        if _log_level_config_instance is None:
            initialize_logger_constants()
            _log_level_config_instance = cls()
        return _log_level_config_instance

    @classmethod
    def reset_instance(cls) -> None:
        """Forget the shared instance so the next get_instance() re-reads the environment."""
        global _log_level_config_instance
        _log_level_config_instance = None

    def update_from_environment(self) -> None:
        """Rebuild the pattern->level mapping from the current environment."""
        fs_load_dotenv()
        self.pattern_to_level.clear()
        for entry in parse_levels_dsl(os.environ.get("LOG_LEVELS", "")):
            self.pattern_to_level[entry.pattern] = entry.level
        for name, value in sorted(os.environ.items()):
            match = _PER_LOGGER_VAR_RX.match(name)
            if match is None:
                continue
            level = level_from_text(value)
            if level is not None:
                self.pattern_to_level[_logger_name_from_suffix(match["SUFFIX"])] = level

    def get_effective_level(self, logger_name: str, *, default: int = logging.WARNING) -> int:
        """Return the configured level for a logger name."""
        name_lc = logger_name.lower()
        lc_map: dict[str, int] = {k.lower(): v for k, v in self.pattern_to_level.items() if k}

        # 1) Exact
        if name_lc in lc_map:
            return lc_map[name_lc]

        # 2) Ancestor
        parts = name_lc.split(".")
        while len(parts) > 1:
            parts = parts[:-1]
            ancestor = ".".join(parts)
            if ancestor in lc_map:
                return lc_map[ancestor]

        # 3) Best glob, longest fixed prefix wins
        best: tuple[int, int] | None = None
        for pattern, level in lc_map.items():
            if not any(ch in pattern for ch in "*?[") or not fnmatch.fnmatch(name_lc, pattern):
                continue
            score = min((i for i, ch in enumerate(pattern) if ch in "*?["), default=len(pattern))
            if best is None or score > best[0]:
                best = (score, level)
        if best is not None:
            return best[1]

        # 4) Default, then fallback
        return self.pattern_to_level.get("", default)


def level_from_text(text: str) -> int | None:
    """Return a numeric level from a level name or a decimal string, else None."""
    initialize_logger_constants()
    s = text.strip().strip("\"'")
    if not s:
        return None
    if s.isdigit():
        return int(s)
    level = logging.getLevelNamesMapping().get(s.upper())
    if isinstance(level, int) and level != logging.NOTSET:
        return level
    return None


def parse_levels_dsl(dsl: str) -> Iterator[LogPatternLevel]:
    """
    Parse a LOG_LEVELS value into pattern/level entries.

    Unknown level names are skipped. The pattern ``root`` is treated as the default.
    """
    for fragment in _FRAGMENT_SEPARATOR_RX.split(dsl):
        part = fragment.strip()
        if not part:
            continue
        segments = _ASSIGNMENT_OPERATOR_RX.split(part, maxsplit=1)
        if len(segments) == 2:
            pattern, level_text = segments[0].strip().strip("'\""), segments[1]
        else:
            pattern, level_text = "", segments[0]
        if pattern.lower() == "root":
            pattern = ""
        level = level_from_text(level_text)
        if level is not None:
            yield LogPatternLevel(pattern, level)


def _logger_name_from_suffix(suffix: str) -> str:
    if suffix == "ROOT":
        return ""
    return suffix.replace("__", "\0").replace("_", ".").replace("\0", "_").lower()


# End of file: src/mstair/xrepr/xlogging/logger_util.py
