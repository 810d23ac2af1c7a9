# File: src/mstair/xrepr/model.py
"""
Value kinds and classification for representation rendering.

Every value handed to the Generator is classified exactly once per recursion
step into one of six kinds. The Generator then dispatches on the kind instead
of re-inspecting the value's type in each renderer.
"""

from __future__ import annotations

import io
import mmap
import socket
from collections.abc import Mapping, Sequence, Set
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from mstair.xrepr.base.types import SCALAR_TYPES, TEXT_TYPES


if TYPE_CHECKING:
    from mstair.xrepr.generator import Generator


__all__ = [
    "HANDLE_TYPES",
    "Kind",
    "KindT",
    "Representable",
    "classify",
    "is_representable",
    "is_vector_like",
]

HANDLE_TYPES: tuple[type, ...] = (io.IOBase, socket.socket, mmap.mmap)
"""Runtime handles to external resources; rendered from metadata, never traversed."""


@runtime_checkable
class Representable(Protocol):
    """
    Capability of a value that produces its own representation.

    When a value implements this, the Generator delegates to it entirely and adds
    no formatting of its own. Implementations that render children should call
    `generator.generate(child, current_depth + 1)` so depth limits keep applying.
    """

    def string_representation(self, generator: Generator, current_depth: int = 0) -> str:
        """
        Generate this object's representation.

        :param generator: The Generator producing the representation.
        :param current_depth: The current depth in the value hierarchy.
        :return str: The representation of self.
        """
        ...


def is_representable(value: Any) -> bool:
    """Check if value is an instance implementing Representable (classes themselves do not count)."""
    return not isinstance(value, type) and isinstance(value, Representable)


class KindT:
    """One of the closed set of value kinds."""

    _order: int
    """Unique identifier used for equality and hashing."""

    name: str
    """Name of the kind, used for debugging and display."""

    def __init__(self, name: str, order: int) -> None:
        self.name = name
        self._order = order

    def __eq__(self, other: object) -> bool:
        return isinstance(other, KindT) and self._order == other._order

    def __hash__(self) -> int:
        return hash(self._order)

    def __repr__(self) -> str:
        return self.name

    def __str__(self) -> str:
        return self.name


class Kind:
    """Static namespace for all defined KindT value categories."""

    CONTAINER = KindT("CONTAINER", 1)
    COMPOSITE = KindT("COMPOSITE", 2)
    HANDLE = KindT("HANDLE", 3)
    TEXT = KindT("TEXT", 4)
    FLOAT = KindT("FLOAT", 5)
    OTHER = KindT("OTHER", 6)

    @classmethod
    def all(cls) -> list[KindT]:
        """
        Return all KindT constants defined on the class, in declaration order.
        """
        return [
            v
            for k, v in vars(cls).items()
            if isinstance(v, KindT) and not k.startswith("_") and k.isupper()
        ]


def classify(value: Any) -> KindT:
    """
    Decide the kind of a value.

    Precedence, most specific first:

    - Representable instances are COMPOSITE, even when they are also containers.
    - str/bytes/bytearray are TEXT (never containers).
    - Mappings, sequences and sets are CONTAINER.
    - Files, streams, sockets and memory maps are HANDLE.
    - floats are FLOAT.
    - None, bool, int, complex, Decimal, Fraction, Ellipsis, NotImplemented are OTHER.
    - Everything else is COMPOSITE.

    :param value: Any value.
    :return KindT: One of the `Kind` constants.
    """
    if is_representable(value):
        return Kind.COMPOSITE
    if isinstance(value, TEXT_TYPES):
        return Kind.TEXT
    if isinstance(value, (Mapping, Sequence, Set)):
        return Kind.CONTAINER
    if isinstance(value, HANDLE_TYPES):
        return Kind.HANDLE
    if isinstance(value, float):
        return Kind.FLOAT
    if isinstance(value, SCALAR_TYPES):
        return Kind.OTHER
    return Kind.COMPOSITE


def is_vector_like(container: Mapping[Any, Any] | Sequence[Any] | Set[Any]) -> bool:
    """
    Check if a container is positionally indexed.

    Sequences and sets are always vector-like. A mapping is vector-like only when its
    keys, in iteration order, are exactly 0, 1, ..., len - 1. Bools are not accepted
    as integer keys.
    """
    if not isinstance(container, Mapping):
        return True
    for expected, key in enumerate(container):
        if type(key) is bool or not isinstance(key, int) or key != expected:
            return False
    return True


# End of file: src/mstair/xrepr/model.py
