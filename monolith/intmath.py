"""32-bit signed integer helpers.

Python ints are unbounded and `%` / `//` floor toward negative infinity.
The run arithmetic is defined on wrapping 32-bit integers with remainder and
division truncated toward zero, so every stored value goes through these.
"""

from __future__ import annotations

_INT32_SPAN = 1 << 32
_INT32_MIN = -(1 << 31)


def wrap32(value: int) -> int:
    """Wrap an int into the signed 32-bit range (two's complement).

    >>> wrap32(2**31)
    -2147483648
    """
    return (value - _INT32_MIN) % _INT32_SPAN + _INT32_MIN


def cmod(a: int, b: int) -> int:
    """Remainder whose sign follows the dividend: cmod(-3, 7) == -3."""
    r = abs(a) % abs(b)
    return -r if a < 0 else r


def cdiv(a: int, b: int) -> int:
    """Integer division truncated toward zero: cdiv(-7, 2) == -3."""
    q = abs(a) // abs(b)
    return -q if (a < 0) != (b < 0) else q
