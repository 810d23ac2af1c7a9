# File: src/mstair/xrepr/test_identity.py
"""
Tests for per-instance identity tokens.
"""

from __future__ import annotations

import gc
import threading

import pytest

from mstair.xrepr import identity
from mstair.xrepr.identity import identity_number, identity_token


class Thing:
    pass


class Slotted:
    __slots__ = ("value",)


@pytest.mark.unit
def test_token_is_stable_for_an_instance() -> None:
    obj = Thing()
    assert identity_token(obj) == identity_token(obj)
    assert identity_token(obj) == str(identity_number(obj))


@pytest.mark.unit
def test_live_instances_get_distinct_tokens() -> None:
    things = [Thing() for _ in range(5)]
    assert len({identity_token(t) for t in things}) == 5


@pytest.mark.unit
def test_tokens_increase_in_request_order() -> None:
    first, second = Thing(), Thing()
    assert identity_number(first) < identity_number(second)


@pytest.mark.unit
def test_entry_is_dropped_when_instance_dies() -> None:
    obj = Thing()
    object_id = id(obj)
    identity_token(obj)
    assert object_id in identity._numbers_by_id
    del obj
    gc.collect()
    assert object_id not in identity._numbers_by_id


@pytest.mark.unit
@pytest.mark.parametrize("factory", [object, Slotted])
def test_fallback_for_objects_without_weakref(factory: type) -> None:
    obj = factory()
    assert identity_token(obj) == f"0x{id(obj):x}"
    assert identity_number(obj) == id(obj)


@pytest.mark.unit
def test_concurrent_requests_share_one_number() -> None:
    obj = Thing()
    results: list[int] = []
    lock = threading.Lock()

    def worker() -> None:
        number = identity_number(obj)
        with lock:
            results.append(number)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(set(results)) == 1


# End of file: src/mstair/xrepr/test_identity.py
