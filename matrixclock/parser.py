"""Lenient JSON parser that builds values inside a JsonBuffer.

Besides strict JSON it accepts single-quoted strings, unquoted tokens
(kept as raw text and converted on demand), and C and C++ style comments.
A NUL character, like the end of the text, terminates the input.
"""

from __future__ import annotations

from typing import Optional

from .values import JsonArray, JsonBuffer, JsonObject, JsonVariant, RawJson
from .writer import unescape_char

DEFAULT_NESTING_LIMIT = 50

_END = "\0"
_SPACES = " \t\r\n"
_QUOTES = "'\""


def _at(text: str, pos: int) -> str:
    return text[pos] if pos < len(text) else _END


def skip_spaces_and_comments(text: str, pos: int) -> int:
    """Return the position of the first character at or after ``pos`` that is
    neither white space nor part of a comment."""
    while True:
        c = _at(text, pos)
        if c in _SPACES and c != _END:
            pos += 1
            continue
        if c != "/":
            return pos

        following = _at(text, pos + 1)
        if following == "*":
            pos += 1  # skip '/'; the '*' is skipped by the first step below
            while True:
                pos += 1
                if _at(text, pos) == _END:
                    return pos
                if _at(text, pos) == "*" and _at(text, pos + 1) == "/":
                    pos += 2
                    break
        elif following == "/":
            while True:
                pos += 1
                if _at(text, pos) == _END:
                    return pos
                if _at(text, pos) == "\n":
                    break
        else:
            return pos


def _can_be_in_non_quoted_string(c: str) -> bool:
    return (
        "0" <= c <= "9"
        or "_" <= c <= "z"
        or "A" <= c <= "Z"
        or c in "+-."
    ) and c != _END


class JsonParser:
    """Reads one JSON value from ``text``, allocating containers in ``buffer``."""

    def __init__(
        self,
        buffer: JsonBuffer,
        text: str,
        nesting_limit: int = DEFAULT_NESTING_LIMIT,
    ) -> None:
        if nesting_limit < 0:
            raise ValueError("nesting limit must not be negative")
        self._buffer = buffer
        self._text = text
        self._pos = 0
        self._nesting_limit = nesting_limit

    def _current(self) -> str:
        return _at(self._text, self._pos)

    def _skip(self) -> None:
        self._pos = skip_spaces_and_comments(self._text, self._pos)

    def _eat(self, expected: str) -> bool:
        self._skip()
        if self._current() != expected:
            return False
        self._pos += 1
        return True

    def parse_array(self) -> JsonArray:
        """Parse an array; the invalid array on any error or lack of room."""
        array = self._buffer.create_array()
        if not self._eat("["):
            return JsonArray.invalid()
        if self._eat("]"):
            return array
        while True:
            value = self._parse_anything()
            if value is None or not array.add(value):
                return JsonArray.invalid()
            if self._eat("]"):
                return array
            if not self._eat(","):
                return JsonArray.invalid()

    def parse_object(self) -> JsonObject:
        """Parse an object; the invalid object on any error or lack of room."""
        obj = self._buffer.create_object()
        if not self._eat("{"):
            return JsonObject.invalid()
        if self._eat("}"):
            return obj
        while True:
            key = self._parse_string()
            if key is None or not self._eat(":"):
                return JsonObject.invalid()
            value = self._parse_anything()
            if value is None or not obj.set(key, value):
                return JsonObject.invalid()
            if self._eat("}"):
                return obj
            if not self._eat(","):
                return JsonObject.invalid()

    def parse_variant(self) -> JsonVariant:
        """Parse any value; an undefined variant when parsing fails."""
        value = self._parse_anything()
        return value if value is not None else JsonVariant()

    def _parse_anything(self) -> Optional[JsonVariant]:
        if self._nesting_limit == 0:
            return None
        self._nesting_limit -= 1
        try:
            return self._parse_anything_unsafe()
        finally:
            self._nesting_limit += 1

    def _parse_anything_unsafe(self) -> Optional[JsonVariant]:
        self._skip()
        c = self._current()
        if c == "[":
            array = self.parse_array()
            return JsonVariant(array) if array.success() else None
        if c == "{":
            obj = self.parse_object()
            return JsonVariant(obj) if obj.success() else None
        has_quotes = c in _QUOTES and c != _END
        text = self._parse_string()
        if text is None:
            return None
        return JsonVariant(text if has_quotes else RawJson(text))

    def _parse_string(self) -> Optional[str]:
        self._skip()
        chars = []
        c = self._current()
        if c in _QUOTES and c != _END:
            stop = c
            self._pos += 1
            while True:
                c = self._current()
                if c == _END:
                    break
                self._pos += 1
                if c == stop:
                    break
                if c == "\\":
                    c = unescape_char(self._current())
                    if c == _END:
                        break
                    self._pos += 1
                chars.append(c)
        else:
            while _can_be_in_non_quoted_string(c):
                self._pos += 1
                chars.append(c)
                c = self._current()
        return "".join(chars)


def parse(text: str, nesting_limit: int = DEFAULT_NESTING_LIMIT) -> JsonVariant:
    """Parse any JSON value from ``text`` into a new unlimited buffer."""
    return JsonParser(JsonBuffer(), text, nesting_limit).parse_variant()


def parse_array(text: str, nesting_limit: int = DEFAULT_NESTING_LIMIT) -> JsonArray:
    """Parse a JSON array from ``text`` into a new unlimited buffer."""
    return JsonParser(JsonBuffer(), text, nesting_limit).parse_array()


def parse_object(text: str, nesting_limit: int = DEFAULT_NESTING_LIMIT) -> JsonObject:
    """Parse a JSON object from ``text`` into a new unlimited buffer."""
    return JsonParser(JsonBuffer(), text, nesting_limit).parse_object()