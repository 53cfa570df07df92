"""Lenient number recognition and parsing for JSON tokens."""

from __future__ import annotations

import math
from decimal import Decimal
from typing import Optional

_MANTISSA_MAX = (1 << 52) - 1
_EXPONENT_MAX = 308
_END = "\0"


def _at(s: str, pos: int) -> str:
    return s[pos] if pos < len(s) else _END


def is_digit(c: str) -> bool:
    return len(c) == 1 and "0" <= c <= "9"


def is_sign(c: str) -> bool:
    return c in ("-", "+")


def _skip_digits(s: str, pos: int) -> int:
    while is_digit(_at(s, pos)):
        pos += 1
    return pos


def is_float(s: Optional[str]) -> bool:
    """Tell whether ``s`` looks like a floating-point literal."""
    if s is None:
        return False
    if s == "NaN":
        return True
    pos = 1 if is_sign(_at(s, 0)) else 0
    if s[pos:] == "Infinity":
        return True
    if pos >= len(s):
        return False

    pos = _skip_digits(s, pos)
    if _at(s, pos) == ".":
        pos = _skip_digits(s, pos + 1)

    if _at(s, pos) in ("e", "E"):
        pos += 1
        if is_sign(_at(s, pos)):
            pos += 1
        if not is_digit(_at(s, pos)):
            return False
        pos = _skip_digits(s, pos)

    return pos == len(s)


def is_integer(s: Optional[str]) -> bool:
    """Tell whether ``s`` is an optional sign followed by digits only."""
    if s is None:
        return False
    pos = 1 if is_sign(_at(s, 0)) else 0
    return _skip_digits(s, pos) == len(s)


def is_nan(x: float) -> bool:
    return x != x


def is_infinity(x: float) -> bool:
    return x != 0.0 and x * 2 == x


def _make_float(mantissa: int, exponent: int) -> float:
    return float(Decimal(mantissa).scaleb(exponent))


def parse_float(s: Optional[str]) -> float:
    """Parse the leading number of ``s``; ``"true"`` gives 1, ``None`` gives 0."""
    if s is None:
        return 0.0

    pos = 0
    negative = False
    if _at(s, pos) == "-":
        negative = True
        pos += 1
    elif _at(s, pos) == "+":
        pos += 1

    c = _at(s, pos)
    if c == "t":
        return 1.0
    if c in ("n", "N"):
        return math.nan
    if c in ("i", "I"):
        return -math.inf if negative else math.inf

    mantissa = 0
    exponent_offset = 0
    while is_digit(_at(s, pos)):
        if mantissa < _MANTISSA_MAX // 10:
            mantissa = mantissa * 10 + int(s[pos])
        else:
            exponent_offset += 1
        pos += 1

    if _at(s, pos) == ".":
        pos += 1
        while is_digit(_at(s, pos)):
            if mantissa < _MANTISSA_MAX // 10:
                mantissa = mantissa * 10 + int(s[pos])
                exponent_offset -= 1
            pos += 1

    exponent = 0
    if _at(s, pos) in ("e", "E"):
        pos += 1
        negative_exponent = False
        if _at(s, pos) == "-":
            negative_exponent = True
            pos += 1
        elif _at(s, pos) == "+":
            pos += 1
        while is_digit(_at(s, pos)):
            exponent = exponent * 10 + int(s[pos])
            if exponent + exponent_offset > _EXPONENT_MAX:
                if negative_exponent:
                    return -0.0 if negative else 0.0
                return -math.inf if negative else math.inf
            pos += 1
        if negative_exponent:
            exponent = -exponent
    exponent += exponent_offset

    result = _make_float(mantissa, exponent)
    return -result if negative else result


def parse_integer(s: Optional[str]) -> int:
    """Parse the leading integer of ``s``; ``"true"`` gives 1, ``None`` gives 0."""
    if s is None:
        return 0
    if _at(s, 0) == "t":
        return 1

    pos = 0
    negative = False
    if _at(s, pos) == "-":
        negative = True
        pos += 1
    elif _at(s, pos) == "+":
        pos += 1

    end = _skip_digits(s, pos)
    result = int(s[pos:end]) if end > pos else 0
    return -result if negative else result