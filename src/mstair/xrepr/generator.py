# File: src/mstair/xrepr/generator.py
"""
Generate short, bounded string representations of arbitrary values.

Output is meant for logs, error messages and debugging, not for parsing back.
A Generator holds three limits:

- `maximum_length`: text longer than this is cut and closed with `...`.
- `maximum_depth`: containers at this nesting depth collapse to `[<N>]`.
- `maximum_elements`: containers show this many entries, then `<+K>`.

Example:
    >>> g = Generator(maximum_length=10, maximum_depth=1, maximum_elements=2)
    >>> g.generate([1, 2.0, "a very long string", None])
    '[1, 2.0, <+2>]'
    >>> g.generate({"x": [1, 2]})
    '["x" => [<2>]]'
"""

from __future__ import annotations

import io
import logging
import math
import mmap
import socket
from collections.abc import Callable, Iterable, Mapping, Sequence, Set, Sized, ValuesView
from itertools import islice
from typing import Any, Final, TypeAlias

from mstair.xrepr import model
from mstair.xrepr.base.config import (
    DEFAULT_MAXIMUM_DEPTH,
    DEFAULT_MAXIMUM_ELEMENTS,
    DEFAULT_MAXIMUM_LENGTH,
    ReprLimits,
)
from mstair.xrepr.base.types import TextTypes
from mstair.xrepr.identity import identity_number, identity_token


__all__ = [
    "Generator",
]

_RendererFunction: TypeAlias = Callable[[Any, int], str]

_TEXT_ESCAPES: Final[dict[str, str]] = {
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "\x1b": "\\e",
    "\f": "\\f",
    "\\": "\\\\",
    "$": "\\$",
    '"': '\\"',
}

_WHOLE_FLOAT_LIMIT: Final[float] = 1e16
"""Whole floats at or above this magnitude keep their exponent form."""


class Generator:
    """
    Renders any value as a short human-readable string, bounded by configurable limits.

    A Generator keeps no state besides its limits, so one instance can be shared by
    unrelated callers. Limits may be changed between calls; changing them while
    another thread is rendering is the caller's responsibility to avoid.
    """

    _maximum_length: int
    _maximum_depth: int
    _maximum_elements: int

    def __init__(
        self,
        maximum_length: int = DEFAULT_MAXIMUM_LENGTH,
        maximum_depth: int = DEFAULT_MAXIMUM_DEPTH,
        maximum_elements: int = DEFAULT_MAXIMUM_ELEMENTS,
    ) -> None:
        """
        :param maximum_length: The maximum number of characters to display when representing text.
        :param maximum_depth: The maximum depth to represent for nested containers.
        :param maximum_elements: The maximum number of entries to include for containers.
        :raises TypeError: If a limit is not an int.
        :raises ValueError: If a limit is negative.
        """
        self.maximum_length = maximum_length
        self.maximum_depth = maximum_depth
        self.maximum_elements = maximum_elements

        # One renderer per kind, in Kind.all() order.
        renderers: tuple[_RendererFunction, ...] = (
            self._render_container,
            self._render_composite,
            self._render_handle,
            self._render_text,
            self._render_float,
            self._render_other,
        )
        self._renderers: dict[model.KindT, _RendererFunction] = dict(
            zip(model.Kind.all(), renderers, strict=True)
        )

    @classmethod
    def from_limits(cls, limits: ReprLimits) -> Generator:
        """Create a Generator from a ReprLimits bundle."""
        return cls(
            maximum_length=limits.maximum_length,
            maximum_depth=limits.maximum_depth,
            maximum_elements=limits.maximum_elements,
        )

    def __repr__(self) -> str:
        return (
            f"<{type(self).__name__} maximum_length={self._maximum_length}"
            f" maximum_depth={self._maximum_depth}"
            f" maximum_elements={self._maximum_elements}>"
        )

    @property
    def limits(self) -> ReprLimits:
        """The current limits as a ReprLimits bundle."""
        return ReprLimits(
            maximum_length=self._maximum_length,
            maximum_depth=self._maximum_depth,
            maximum_elements=self._maximum_elements,
        )

    @property
    def maximum_length(self) -> int:
        """The maximum number of characters to display when representing text."""
        return self._maximum_length

    @maximum_length.setter
    def maximum_length(self, maximum: int) -> None:
        self._maximum_length = _validated_limit("maximum_length", maximum)

    @property
    def maximum_depth(self) -> int:
        """The maximum depth to represent for nested containers."""
        return self._maximum_depth

    @maximum_depth.setter
    def maximum_depth(self, maximum: int) -> None:
        self._maximum_depth = _validated_limit("maximum_depth", maximum)

    @property
    def maximum_elements(self) -> int:
        """The maximum number of entries to include in representations of containers."""
        return self._maximum_elements

    @maximum_elements.setter
    def maximum_elements(self, maximum: int) -> None:
        self._maximum_elements = _validated_limit("maximum_elements", maximum)

    def generate(self, value: Any, current_depth: int = 0) -> str:
        """
        Generate a string representation of an arbitrary value.

        :param value: The value to represent.
        :param current_depth: The current depth in the representation.
        :return str: A short human-readable representation of the value.
        """
        return self._renderers[model.classify(value)](value, current_depth)

    def render_value_list(
        self,
        values: Iterable[Any],
        current_depth: int = 0,
        separator: str = ", ",
    ) -> str:
        """
        Render a list of values.

        Each value is generated at `current_depth` as given; callers rendering the
        children of a container pass `current_depth + 1`.

        :param values: The values to render.
        :param current_depth: The depth to render each value at.
        :param separator: The separator to use between values.
        """
        return separator.join(self.generate(element, current_depth) for element in values)

    def render_key_value_list(
        self,
        pairs: Mapping[Any, Any] | Iterable[tuple[Any, Any]],
        current_depth: int = 0,
        separator: str = ", ",
        key_separator: str = " => ",
    ) -> str:
        """
        Render a list of keys and values.

        :param pairs: A mapping, or an iterable of (key, value) pairs.
        :param current_depth: The depth to render each key and value at.
        :param separator: The separator to use between entries.
        :param key_separator: The separator to use between key and value.
        """
        items: Iterable[tuple[Any, Any]] = (
            pairs.items() if isinstance(pairs, Mapping) else pairs
        )
        return separator.join(
            self.generate(key, current_depth) + key_separator + self.generate(element, current_depth)
            for key, element in items
        )

    def _render_container(
        self,
        value: Mapping[Any, Any] | Sequence[Any] | Set[Any],
        current_depth: int = 0,
    ) -> str:
        size = _container_size(value)
        if size is None:
            return "[<?>]"
        if size == 0:
            return "[]"
        if current_depth >= self._maximum_depth:
            return f"[<{_count_text(size)}>]"

        shown = min(size, self._maximum_elements)
        if not model.is_vector_like(value):
            elements = self.render_key_value_list(
                islice(value.items(), shown),  # type: ignore[union-attr]
                current_depth + 1,
            )
        elif isinstance(value, Mapping):
            elements = self.render_value_list(islice(value.values(), shown), current_depth + 1)
        else:
            elements = self.render_value_list(islice(value, shown), current_depth + 1)

        entries = [elements] if shown else []
        if size > shown:
            entries.append(f"<+{_count_text(size - shown)}>")
        return "[" + ", ".join(entries) + "]"

    def _render_composite(self, value: Any, current_depth: int = 0) -> str:
        if model.is_representable(value):
            return value.string_representation(self, current_depth)

        text = _default_text(value)
        rendered = "" if text is None else " " + self._render_text(text, current_depth)
        return f"<{_type_name(value)}{rendered} @ {identity_token(value)}>"

    def _render_handle(
        self,
        value: io.IOBase | socket.socket | mmap.mmap,
        current_depth: int = 0,
    ) -> str:
        mode: str | None = None
        if isinstance(value, socket.socket):
            subtype = "socket"
        elif isinstance(value, mmap.mmap):
            subtype = "mmap"
        elif _is_closed(value):
            subtype = "closed"
        else:
            subtype = "stream"
            mode = _stream_mode(value)

        info = "" if mode is None else " " + mode
        return f"<resource: {subtype} #{_handle_number(value)}{info}>"

    def _render_text(self, value: TextTypes, current_depth: int = 0) -> str:
        close = '"'
        if len(value) > self._maximum_length:
            close = "..."
            value = value[: self._maximum_length]

        if isinstance(value, str):
            body = "".join(_escape_character(ch) for ch in value)
        else:
            body = "".join(_escape_byte(b) for b in value)
        return '"' + body + close

    def _render_float(self, value: float, current_depth: int = 0) -> str:
        if (
            math.isfinite(value)
            and abs(value) < _WHOLE_FLOAT_LIMIT
            and math.fmod(value, 1.0) == 0.0
        ):
            return f"{value:.0f}.0"
        return repr(float(value))

    def _render_other(self, value: Any, current_depth: int = 0) -> str:
        try:
            return repr(value).lower()
        except ValueError as e:
            # Ints beyond sys.get_int_max_str_digits() refuse conversion to text.
            logging.getLogger(__name__).debug(
                "Summarizing %s: %s: %s", _type_name(value), type(e).__name__, e
            )
        if isinstance(value, int):
            return f"<int: {value.bit_length()} bits>"
        return f"<{_type_name(value)}: too large>"


def _validated_limit(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{name} must not be negative: {value!r}")
    return value


def _escape_character(ch: str) -> str:
    escaped = _TEXT_ESCAPES.get(ch)
    if escaped is not None:
        return escaped
    if ch.isprintable():
        return ch
    return "".join(f"\\x{b:02x}" for b in ch.encode("utf-8", "surrogatepass"))


def _escape_byte(b: int) -> str:
    escaped = _TEXT_ESCAPES.get(chr(b))
    if escaped is not None:
        return escaped
    if 0x20 <= b < 0x7F:
        return chr(b)
    return f"\\x{b:02x}"


def _type_name(value: Any) -> str:
    cls = type(value)
    if cls.__module__ == "builtins":
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"


def _container_size(value: Sized) -> int | None:
    """Return len(value), computing huge range lengths directly; None if the length is unavailable."""
    try:
        return len(value)
    except OverflowError as e:
        if isinstance(value, range):
            step = value.step
            return max(0, (value.stop - value.start + step - (1 if step > 0 else -1)) // step)
        logging.getLogger(__name__).debug(
            "Omitting size of %s: %s: %s", _type_name(value), type(e).__name__, e
        )
        return None


def _count_text(count: int) -> str:
    try:
        return str(count)
    except ValueError:
        return f"2^{count.bit_length() - 1}+"


def _default_text(value: Any) -> str | None:
    """
    Return str() or repr() of value when its type customizes them, else None.

    Dict value views are skipped: their repr() walks every value before truncation.
    """
    cls = type(value)
    if isinstance(value, ValuesView):
        return None
    try:
        if cls.__str__ is not object.__str__:
            return str(value)
        if cls.__repr__ is not object.__repr__:
            return repr(value)
    except Exception as e:
        logging.getLogger(__name__).debug(
            "Omitting text for %s: %s: %s", _type_name(value), type(e).__name__, e
        )
    return None


def _is_closed(stream: io.IOBase) -> bool:
    try:
        return bool(stream.closed)
    except ValueError as e:
        # Detached wrappers refuse every query, closed included.
        logging.getLogger(__name__).debug("Treating stream as closed: %s: %s", type(e).__name__, e)
        return True


def _stream_mode(stream: io.IOBase) -> str | None:
    mode = getattr(stream, "mode", None)
    if isinstance(mode, str):
        return mode
    try:
        readable, writable = stream.readable(), stream.writable()
    except (OSError, ValueError) as e:
        logging.getLogger(__name__).debug("Omitting stream mode: %s: %s", type(e).__name__, e)
        return None
    if readable and writable:
        return "r+"
    if readable:
        return "r"
    if writable:
        return "w"
    return None


def _handle_number(handle: io.IOBase | socket.socket | mmap.mmap) -> int:
    fileno = getattr(handle, "fileno", None)
    if callable(fileno):
        try:
            number = fileno()
        except (OSError, ValueError):
            pass
        else:
            if isinstance(number, int) and number >= 0:
                return number
    return identity_number(handle)


# End of file: src/mstair/xrepr/generator.py
