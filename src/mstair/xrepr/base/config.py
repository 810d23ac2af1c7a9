# File: src/mstair/xrepr/base/config.py
"""
Environment-driven configuration and execution context detection.

This module owns the two kinds of configuration the package reads from its
environment:

- Representation limits (`ReprLimits`) used to build the default Generator,
  read from `XREPR_MAXIMUM_LENGTH`, `XREPR_MAXIMUM_DEPTH` and
  `XREPR_MAXIMUM_ELEMENTS` (optionally via a `.env` file).
- Context flags (`in_test_mode()`, `in_desktop_mode()`) that adjust log output.
  Overrides are stored in thread-local storage so they stay isolated per thread.

Exports:
- ReprLimits: immutable bundle of the three rendering limits.
- load_repr_limits(): read limits from the environment.
- in_test_mode(): check or override whether code is in test mode.
- in_desktop_mode(): check or override whether output goes to an interactive terminal.
"""

from __future__ import annotations

import dataclasses
import logging
import os
import sys
import threading
from dataclasses import dataclass
from typing import Any, Final

from mstair.xrepr.base.fs_helpers import fs_load_dotenv
from mstair.xrepr.base.types import int_from_string


__all__ = [
    "DEFAULT_MAXIMUM_DEPTH",
    "DEFAULT_MAXIMUM_ELEMENTS",
    "DEFAULT_MAXIMUM_LENGTH",
    "ENV_MAXIMUM_DEPTH",
    "ENV_MAXIMUM_ELEMENTS",
    "ENV_MAXIMUM_LENGTH",
    "ReprLimits",
    "in_desktop_mode",
    "in_test_mode",
    "load_repr_limits",
]

DEFAULT_MAXIMUM_LENGTH: Final[int] = 50
DEFAULT_MAXIMUM_DEPTH: Final[int] = 3
DEFAULT_MAXIMUM_ELEMENTS: Final[int] = 3

ENV_MAXIMUM_LENGTH: Final[str] = "XREPR_MAXIMUM_LENGTH"
ENV_MAXIMUM_DEPTH: Final[str] = "XREPR_MAXIMUM_DEPTH"
ENV_MAXIMUM_ELEMENTS: Final[str] = "XREPR_MAXIMUM_ELEMENTS"

_tls = threading.local()


@dataclass(frozen=True, slots=True)
class ReprLimits:
    """The three limits that bound a rendered representation."""

    maximum_length: int = DEFAULT_MAXIMUM_LENGTH
    """Maximum number of characters (or bytes) shown for a piece of text."""

    maximum_depth: int = DEFAULT_MAXIMUM_DEPTH
    """Container nesting depth at which containers are summarized as `[<N>]`."""

    maximum_elements: int = DEFAULT_MAXIMUM_ELEMENTS
    """Number of container entries shown before the `<+K>` marker."""

    def replace(self, **changes: Any) -> ReprLimits:
        """Return a copy with the given fields replaced."""
        return dataclasses.replace(self, **changes)


def load_repr_limits() -> ReprLimits:
    """
    Read representation limits from the environment.

    A `.env` file is loaded first (existing variables win). Missing or empty
    variables use the defaults; malformed or negative values are reported as
    warnings and replaced by the defaults.

    :return ReprLimits: The resolved limits.
    """
    fs_load_dotenv()
    return ReprLimits(
        maximum_length=_limit_from_environment(ENV_MAXIMUM_LENGTH, DEFAULT_MAXIMUM_LENGTH),
        maximum_depth=_limit_from_environment(ENV_MAXIMUM_DEPTH, DEFAULT_MAXIMUM_DEPTH),
        maximum_elements=_limit_from_environment(ENV_MAXIMUM_ELEMENTS, DEFAULT_MAXIMUM_ELEMENTS),
    )


def _limit_from_environment(name: str, default: int) -> int:
    raw = os.environ.get(name)
    try:
        value = int_from_string(raw, default)
    except ValueError:
        logging.getLogger(__name__).warning(
            "Ignoring %s=%r: not an integer, using %d", name, raw, default
        )
        return default
    if value < 0:
        logging.getLogger(__name__).warning(
            "Ignoring %s=%r: must not be negative, using %d", name, raw, default
        )
        return default
    return value


@dataclass
class TLSAttrs:
    """Thread-local flags for environment context."""

    in_test_mode_override: bool | None = None
    in_desktop_mode_override: bool | None = None


def _get_tls() -> TLSAttrs:
    """Return the current thread's TLSAttrs instance, initializing if needed."""
    try:
        return _tls.state
    except AttributeError:
        _tls.state = TLSAttrs()
        return _tls.state


def in_test_mode(
    *,
    unset_override: bool = False,
    override: bool | None = None,
) -> bool:
    """
    Check if running in test mode, with optional override.

    Detection order:
      1. Explicit override (thread-local).
      2. Presence of pytest/unittest in sys.modules.
      3. Known environment variables (e.g. PYTEST_CURRENT_TEST, CI).

    :param unset_override: If True, clears any prior override for this thread.
    :param override: If True or False, sets the override for this thread.
    :return: True if test mode is active, False otherwise.
    """
    tls = _get_tls()
    if unset_override:
        tls.in_test_mode_override = None
    if override is not None:
        tls.in_test_mode_override = override
        return override
    if tls.in_test_mode_override is not None:
        return tls.in_test_mode_override
    if "pytest" in sys.modules or "unittest" in sys.modules:
        return True

    env = os.environ
    return bool(env.get("PYTEST_CURRENT_TEST")) or env.get("CI") == "true"


def in_desktop_mode(
    *,
    unset_override: bool = False,
    override: bool | None = None,
) -> bool:
    """
    Determine if log output should be decorated for an interactive terminal.

    Rules:
      - Explicit override wins.
      - NO_COLOR in the environment disables it.
      - Returns False in test mode, so captured output stays plain.
      - Otherwise True when stderr is a terminal.

    :param unset_override: If True, clears any prior override for this thread.
    :param override: If True or False, sets the override for this thread.
    :return: True if desktop mode is active, False otherwise.
    """
    tls = _get_tls()
    if unset_override:
        tls.in_desktop_mode_override = None
    if override is not None:
        tls.in_desktop_mode_override = override
        return override
    if tls.in_desktop_mode_override is not None:
        return tls.in_desktop_mode_override

    if os.environ.get("NO_COLOR"):
        return False
    if in_test_mode():
        return False
    stderr = sys.stderr
    return bool(stderr is not None and hasattr(stderr, "isatty") and stderr.isatty())


# End of file: src/mstair/xrepr/base/config.py
