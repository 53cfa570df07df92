"""Low-level JSON token writer onto a text sink."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Optional, Protocol, Tuple

from .numbers import is_infinity, is_nan

POSITIVE_EXPONENTIATION_THRESHOLD = 1e7
NEGATIVE_EXPONENTIATION_THRESHOLD = 1e-5
_SIGNIFICANT_DECIMALS = 9

_ESCAPES = {
    '"': '"',
    "\\": "\\",
    "\b": "b",
    "\f": "f",
    "\n": "n",
    "\r": "r",
    "\t": "t",
}
_UNESCAPES = {"b": "\b", "f": "\f", "n": "\n", "r": "\r", "t": "\t"}


class TextSink(Protocol):
    def write(self, s: str) -> object: ...


def escape_char(c: str) -> Optional[str]:
    """The letter that follows a backslash for ``c``, or None if ``c`` needs none."""
    return _ESCAPES.get(c)


def unescape_char(c: str) -> str:
    """The character that a backslash followed by ``c`` stands for."""
    return _UNESCAPES.get(c, c)


def _float_parts(value: float) -> Tuple[int, int, int, int]:
    """Split a positive finite value into integral, decimal, decimal places, exponent."""
    exponent = 0
    with localcontext() as ctx:
        ctx.prec = 60
        exact = Decimal(value)
        if value >= POSITIVE_EXPONENTIATION_THRESHOLD or (
            0 < value <= NEGATIVE_EXPONENTIATION_THRESHOLD
        ):
            exponent = exact.adjusted()
            exact = exact.scaleb(-exponent)
        integral = int(exact)
        places = _SIGNIFICANT_DECIMALS - (len(str(integral)) - 1)
        limit = 10**places
        decimal = int(((exact - integral) * limit).to_integral_value(rounding=ROUND_HALF_UP))

    if decimal >= limit:
        decimal = 0
        integral += 1
        if exponent and integral >= 10:
            exponent += 1
            integral = 1

    while places > 0 and decimal % 10 == 0:
        decimal //= 10
        places -= 1
    return integral, decimal, places, exponent


class JsonWriter:
    """Writes JSON tokens to ``sink`` and counts the characters written."""

    def __init__(self, sink: TextSink) -> None:
        self._sink = sink
        self._length = 0

    def bytes_written(self) -> int:
        return self._length

    def begin_array(self) -> None:
        self.write_raw("[")

    def end_array(self) -> None:
        self.write_raw("]")

    def begin_object(self) -> None:
        self.write_raw("{")

    def end_object(self) -> None:
        self.write_raw("}")

    def write_colon(self) -> None:
        self.write_raw(":")

    def write_comma(self) -> None:
        self.write_raw(",")

    def write_boolean(self, value: bool) -> None:
        self.write_raw("true" if value else "false")

    def write_string(self, value: Optional[str]) -> None:
        """Write a quoted, escaped string, or ``null`` for None."""
        if value is None:
            self.write_raw("null")
            return
        self.write_raw('"')
        for c in value:
            self.write_char(c)
        self.write_raw('"')

    def write_char(self, c: str) -> None:
        special = escape_char(c)
        if special:
            self.write_raw("\\")
            self.write_raw(special)
        else:
            self.write_raw(c)

    def write_float(self, value: float) -> None:
        """Write a number with up to nine significant decimals, using exponents at the extremes."""
        if is_nan(value):
            self.write_raw("NaN")
            return
        if value < 0.0:
            self.write_raw("-")
            value = -value
        if is_infinity(value):
            self.write_raw("Infinity")
            return

        integral, decimal, places, exponent = _float_parts(value)
        self.write_integer(integral)
        if places:
            self.write_decimals(decimal, places)
        if exponent < 0:
            self.write_raw("e-")
            self.write_integer(-exponent)
        elif exponent > 0:
            self.write_raw("e")
            self.write_integer(exponent)

    def write_integer(self, value: int) -> None:
        if value < 0:
            raise ValueError("write_integer takes a non-negative value")
        self.write_raw(str(int(value)))

    def write_decimals(self, value: int, width: int) -> None:
        """Write a dot then the lowest ``width`` digits of ``value``, zero-padded."""
        digits = str(value % 10**width).zfill(width) if width > 0 else ""
        self.write_raw("." + digits)

    def write_raw(self, s: str) -> None:
        self._sink.write(s)
        self._length += len(s)