# File: src/mstair/xrepr/base/types.py

from decimal import Decimal
from fractions import Fraction
from typing import Final, TypeAlias


# ---------- Static typing aliases (for annotations) ----------

TextTypes: TypeAlias = str | bytes | bytearray

# ---------- Runtime tuples (for isinstance/issubclass) ----------

PRIMITIVE_NON_STRING_TYPES: Final[tuple[type, ...]] = (
    int,
    float,
    complex,
    bool,
    Decimal,
    Fraction,
    type(None),
)
PRIMITIVE_TYPES: Final[tuple[type, ...]] = (*PRIMITIVE_NON_STRING_TYPES, str)
TEXT_TYPES: Final[tuple[type, ...]] = (str, bytes, bytearray)
SCALAR_TYPES: Final[tuple[type, ...]] = (
    bool,
    int,
    complex,
    Decimal,
    Fraction,
    type(None),
    type(Ellipsis),
    type(NotImplemented),
)
"""Values rendered as lowercased literals (floats are handled separately)."""


def int_from_string(value: str | None, default: int = 0) -> int:
    """
    Convert a string to an integer, returning a default value if the string is None or empty.

    :param value: The string to convert.
    :param default: The default integer to return if the string is None or empty.
    :return: An integer.
    :raises ValueError: If the string is not empty and not an integer.
    """
    if value is None or not value.strip():
        return default
    return int(value.strip())


# End of file: src/mstair/xrepr/base/types.py
