"""Runtime values.

FinnLang values are represented with plain Python objects:

    int     -> ``int`` (restricted to the signed 64-bit range)
    double  -> ``float``
    bool    -> ``bool``
    string  -> ``str``
    array   -> ``list`` of values

``bool`` is a subclass of ``int`` in Python, so every check in this module
tests for ``bool`` before ``int``. ``None`` stands for the absent result of a
function that finished without returning a value.


File: values.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import math
from decimal import Decimal

INT_MIN = -(2 ** 63)
INT_MAX = 2 ** 63 - 1

# Names accepted in type annotations.
TYPE_NAMES = frozenset({'int', 'bool', 'string', 'double', 'array'})


def kind_of(value) -> str:
    """
    Return the FinnLang kind name of a runtime value.
    """
    if value is None:
        return 'nothing'
    if isinstance(value, bool):
        return 'bool'
    if isinstance(value, int):
        return 'int'
    if isinstance(value, float):
        return 'double'
    if isinstance(value, str):
        return 'string'
    if isinstance(value, list):
        return 'array'
    return type(value).__name__


def is_int(value) -> bool:
    """Return ``True`` for integers, excluding booleans."""
    return isinstance(value, int) and not isinstance(value, bool)


def is_number(value) -> bool:
    """Return ``True`` for integers and doubles, excluding booleans."""
    return is_int(value) or isinstance(value, float)


def fits_int64(value: int) -> bool:
    """Return ``True`` if ``value`` lies in the signed 64-bit range."""
    return INT_MIN <= value <= INT_MAX


def _render_float(value: float) -> str:
    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return 'inf' if value > 0 else '-inf'
    if value.is_integer():
        if value == 0 and math.copysign(1.0, value) < 0:
            return '-0'
        return str(int(value))
    # Shortest round-trip digits, written out without an exponent.
    return format(Decimal(repr(value)), 'f')


def render(value) -> str:
    """
    Convert a runtime value to the text printed by ``woof``.

    Parameters:
        value: A runtime value.

    Returns:
        str: Integers and doubles in decimal, booleans as ``true``/``false``,
        strings without quotes and arrays as ``[a, b, c]``.
    """
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _render_float(value)
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        return '[' + ', '.join(render(item) for item in value) + ']'
    raise TypeError(f"Cannot render value of kind {kind_of(value)}")


def values_equal(lhs, rhs) -> bool:
    """
    Structural equality between two runtime values.

    Integers and doubles compare numerically. Arrays compare element-wise.
    Values of different kinds are never equal.
    """
    if is_number(lhs) and is_number(rhs):
        if is_int(lhs) and is_int(rhs):
            return lhs == rhs
        return float(lhs) == float(rhs)
    if kind_of(lhs) != kind_of(rhs):
        return False
    if isinstance(lhs, list):
        return len(lhs) == len(rhs) and all(
            values_equal(a, b) for a, b in zip(lhs, rhs)
        )
    return lhs == rhs


def comparable(lhs, rhs) -> bool:
    """Return ``True`` if ``==``/``!=`` may be applied to the two values."""
    if is_number(lhs) and is_number(rhs):
        return True
    return lhs is not None and kind_of(lhs) == kind_of(rhs)
