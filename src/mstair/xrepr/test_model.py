# File: src/mstair/xrepr/test_model.py
"""
Tests for value classification and the Representable capability.
"""

from __future__ import annotations

import io
import socket
from collections import OrderedDict, deque
from decimal import Decimal
from fractions import Fraction
from typing import Any

import pytest

from mstair.xrepr.model import Kind, KindT, classify, is_representable, is_vector_like


class WithHook:
    def string_representation(self, generator: Any, current_depth: int = 0) -> str:
        return "hook"


class HookedDict(dict[str, Any]):
    def string_representation(self, generator: Any, current_depth: int = 0) -> str:
        return "hooked"


class Record:
    pass


@pytest.mark.unit
@pytest.mark.parametrize(
    ("value", "kind"),
    [
        ("text", Kind.TEXT),
        (b"raw", Kind.TEXT),
        (bytearray(b"raw"), Kind.TEXT),
        ([1], Kind.CONTAINER),
        ((1,), Kind.CONTAINER),
        ({"a": 1}, Kind.CONTAINER),
        (OrderedDict(), Kind.CONTAINER),
        ({1}, Kind.CONTAINER),
        (frozenset(), Kind.CONTAINER),
        (deque(), Kind.CONTAINER),
        (range(3), Kind.CONTAINER),
        (io.StringIO(), Kind.HANDLE),
        (1.5, Kind.FLOAT),
        (True, Kind.OTHER),
        (3, Kind.OTHER),
        (2j, Kind.OTHER),
        (Decimal("1"), Kind.OTHER),
        (Fraction(1, 2), Kind.OTHER),
        (None, Kind.OTHER),
        (..., Kind.OTHER),
        (Record(), Kind.COMPOSITE),
        (ValueError("x"), Kind.COMPOSITE),
        (Record, Kind.COMPOSITE),
        (WithHook(), Kind.COMPOSITE),
        (HookedDict(), Kind.COMPOSITE),
    ],
)
def test_classify(value: Any, kind: KindT) -> None:
    assert classify(value) == kind


@pytest.mark.unit
def test_classify_socket_is_handle() -> None:
    with socket.socket() as sock:
        assert classify(sock) == Kind.HANDLE


@pytest.mark.unit
def test_kind_all_in_dispatch_order() -> None:
    kinds = Kind.all()
    assert [k.name for k in kinds] == ["CONTAINER", "COMPOSITE", "HANDLE", "TEXT", "FLOAT", "OTHER"]
    assert len(set(kinds)) == len(kinds)


@pytest.mark.unit
def test_kind_identity_and_display() -> None:
    assert Kind.TEXT == KindT("TEXT", 4)
    assert Kind.TEXT != Kind.FLOAT
    assert str(Kind.HANDLE) == "HANDLE"
    assert len({*Kind.all(), Kind.TEXT}) == 6


@pytest.mark.unit
def test_is_representable_ignores_classes() -> None:
    assert is_representable(WithHook())
    assert not is_representable(WithHook)
    assert not is_representable(Record())


@pytest.mark.unit
@pytest.mark.parametrize(
    ("container", "expected"),
    [
        ([3, 2, 1], True),
        ({"b", "a"}, True),
        ({}, True),
        ({0: "a", 1: "b", 2: "c"}, True),
        ({1: "b", 0: "a"}, False),
        ({0: "a", 2: "c"}, False),
        ({1: "a"}, False),
        ({"0": "a"}, False),
        ({False: "a", True: "b"}, False),
    ],
)
def test_is_vector_like(container: Any, expected: bool) -> None:
    assert is_vector_like(container) is expected


# End of file: src/mstair/xrepr/test_model.py
