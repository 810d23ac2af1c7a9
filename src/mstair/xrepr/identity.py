# File: src/mstair/xrepr/identity.py
"""
Stable per-instance identity tokens for composite and handle representations.

Tokens are small integers issued in order of first request and kept for as long
as the instance lives. When the instance is collected its entry is dropped, so a
token is unique among live instances but may be reused by nothing else while
the instance exists. Objects that cannot be weakly referenced (for example bare
`object()` instances or classes using `__slots__` without `__weakref__`) fall
back to their `id()`, which carries the same lifetime guarantee.
"""

from __future__ import annotations

import itertools
import threading
import weakref
from typing import Any


__all__ = [
    "identity_number",
    "identity_token",
]

_lock = threading.RLock()
_counter = itertools.count(1)
_numbers_by_id: dict[int, int] = {}


def _forget(object_id: int) -> None:
    with _lock:
        _numbers_by_id.pop(object_id, None)


def _registered_number(obj: Any) -> int | None:
    """Return the registry number for obj, issuing one if needed; None if obj is not weakly referenceable."""
    object_id = id(obj)
    with _lock:
        number = _numbers_by_id.get(object_id)
        if number is not None:
            return number
        try:
            weakref.finalize(obj, _forget, object_id)
        except TypeError:
            return None
        number = next(_counter)
        _numbers_by_id[object_id] = number
        return number


def identity_token(obj: Any) -> str:
    """
    Return an opaque token identifying obj among currently live objects.

    :param obj: Any object.
    :return str: A decimal token such as "17", or "0x7f3a..." for objects without weakref support.
    """
    number = _registered_number(obj)
    if number is None:
        return f"0x{id(obj):x}"
    return str(number)


def identity_number(obj: Any) -> int:
    """
    Return the numeric form of `identity_token()`.

    :param obj: Any object.
    :return int: The registry number, or `id(obj)` for objects without weakref support.
    """
    number = _registered_number(obj)
    return id(obj) if number is None else number


# End of file: src/mstair/xrepr/identity.py
