# File: src/mstair/xrepr/repr_api.py
"""
Process-wide convenience access to a default Generator.

`xrepr()` renders a value with a shared Generator that is created lazily, exactly
once, from `load_repr_limits()` (50/3/3 unless the environment says otherwise).
Code that needs different limits should construct its own Generator and pass it
along; this module exists for call sites such as log statements and exception
messages where threading a Generator through is impractical.

Example:
    >>> from mstair.xrepr.repr_api import xrepr, repr_limits_override
    >>> xrepr({"user": "alice", "roles": ["admin", "ops"]})
    '["user" => "alice", "roles" => ["admin", "ops"]]'
    >>> with repr_limits_override(maximum_elements=1):
    ...     xrepr([1, 2, 3])
    '[1, <+2>]'
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from mstair.xrepr.base.config import load_repr_limits
from mstair.xrepr.generator import Generator


__all__ = [
    "default_generator",
    "install",
    "repr_limits_override",
    "reset_default_generator",
    "xrepr",
]

_default_lock = threading.Lock()
_default: Generator | None = None
_tls = threading.local()


def xrepr(value: Any) -> str:
    """
    Render a short, bounded representation of any value with the default Generator.

    Inside `repr_limits_override()`, the overridden limits are used instead.

    :param value: The value to render.
    :return str: The representation.
    """
    overrides: list[Generator] = getattr(_tls, "overrides", [])
    generator = overrides[-1] if overrides else default_generator()
    return generator.generate(value)


def default_generator() -> Generator:
    """Return the shared Generator, creating it from environment limits on first use."""
    global _default
    generator = _default
    if generator is not None:
        return generator
    with _default_lock:
        if _default is None:
            _default = Generator.from_limits(load_repr_limits())
            logging.getLogger(__name__).debug("Created default generator: %r", _default)
        return _default


def install(generator: Generator) -> None:
    """
    Replace the shared Generator.

    :param generator: The Generator to use for subsequent `xrepr()` calls.
    :raises TypeError: If generator is not a Generator.
    """
    global _default
    if not isinstance(generator, Generator):
        raise TypeError(f"Expected a Generator, got {type(generator).__name__}")
    with _default_lock:
        _default = generator


def reset_default_generator() -> None:
    """
    Drop the shared Generator so the next `xrepr()` recreates it from the environment.

    Intended for tests that change `XREPR_*` variables or call `install()`.
    """
    global _default
    with _default_lock:
        _default = None


@contextmanager
def repr_limits_override(**limits: int) -> Iterator[Generator]:
    """
    Temporarily render `xrepr()` output on this thread with different limits.

    Limits not given are taken from the innermost active override, or from the shared
    Generator. The shared Generator itself is left untouched. Nested contexts are
    supported.

    :param limits: Any of maximum_length, maximum_depth, maximum_elements.
    :yields Generator: The Generator in effect inside the context.
    :raises TypeError: On unknown limit names or non-int values.
    :raises ValueError: On negative values.
    """
    overrides: list[Generator] = _tls.__dict__.setdefault("overrides", [])
    base = overrides[-1] if overrides else default_generator()
    generator = Generator.from_limits(base.limits.replace(**limits))
    overrides.append(generator)
    try:
        yield generator
    finally:
        overrides.pop()


# End of file: src/mstair/xrepr/repr_api.py
