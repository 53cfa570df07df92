"""JSON values: variants, arrays and objects allocated from a buffer."""

from __future__ import annotations

import io
import math
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, ClassVar, Dict, ItemsView, Iterator, List, Optional, Tuple

from .arena import Arena
from .numbers import is_float, is_integer, parse_float, parse_integer
from .writer import JsonWriter

COLLECTION_SIZE = 16
ARRAY_NODE_SIZE = 24
OBJECT_NODE_SIZE = 32


@dataclass(frozen=True)
class RawJson:
    """Text that is kept unparsed and written as it is, without quotes."""

    text: str


class _Kind(Enum):
    UNDEFINED = auto()
    UNPARSED = auto()
    STRING = auto()
    BOOLEAN = auto()
    INTEGER = auto()
    FLOAT = auto()
    ARRAY = auto()
    OBJECT = auto()


_UNSET = object()


def _classify(value: Any) -> Tuple[_Kind, Any]:
    if value is _UNSET:
        return _Kind.UNDEFINED, None
    if isinstance(value, JsonVariant):
        return value._kind, value._content
    if isinstance(value, RawJson):
        return _Kind.UNPARSED, value.text
    if value is None or isinstance(value, str):
        return _Kind.STRING, value
    if isinstance(value, bool):
        return _Kind.BOOLEAN, value
    if isinstance(value, int):
        return _Kind.INTEGER, value
    if isinstance(value, float):
        return _Kind.FLOAT, value
    if isinstance(value, JsonArray):
        return (_Kind.ARRAY, value) if value.success() else (_Kind.UNDEFINED, None)
    if isinstance(value, JsonObject):
        return (_Kind.OBJECT, value) if value.success() else (_Kind.UNDEFINED, None)
    raise TypeError(f"cannot store a {type(value).__name__} in a JSON value")


def _dump(value: Any) -> str:
    sink = io.StringIO()
    value._write(JsonWriter(sink))
    return sink.getvalue()


class JsonVariant:
    """A single JSON value of any kind, converted leniently on request."""

    __slots__ = ("_kind", "_content")

    def __init__(self, value: Any = _UNSET) -> None:
        self._kind, self._content = _classify(value)

    def success(self) -> bool:
        """False for an undefined value, such as a missing key or index."""
        return self._kind is not _Kind.UNDEFINED

    def as_integer(self) -> int:
        kind, content = self._kind, self._content
        if kind in (_Kind.INTEGER, _Kind.BOOLEAN):
            return int(content)
        if kind in (_Kind.STRING, _Kind.UNPARSED):
            return parse_integer(content)
        if kind is _Kind.FLOAT:
            return int(content) if math.isfinite(content) else 0
        return 0

    def as_float(self) -> float:
        kind, content = self._kind, self._content
        if kind in (_Kind.INTEGER, _Kind.BOOLEAN, _Kind.FLOAT):
            return float(content)
        if kind in (_Kind.STRING, _Kind.UNPARSED):
            return parse_float(content)
        return 0.0

    def as_bool(self) -> bool:
        return self.as_integer() != 0

    def as_string(self) -> Optional[str]:
        """The stored text, or None when the value is not a string."""
        if self._kind is _Kind.UNPARSED and self._content == "null":
            return None
        if self._kind in (_Kind.STRING, _Kind.UNPARSED):
            return self._content
        return None

    def as_array(self) -> JsonArray:
        return self._content if self._kind is _Kind.ARRAY else JsonArray.invalid()

    def as_object(self) -> JsonObject:
        return self._content if self._kind is _Kind.OBJECT else JsonObject.invalid()

    def is_boolean(self) -> bool:
        if self._kind is _Kind.BOOLEAN:
            return True
        return self._kind is _Kind.UNPARSED and self._content in ("true", "false")

    def is_integer(self) -> bool:
        return self._kind is _Kind.INTEGER or (
            self._kind is _Kind.UNPARSED and is_integer(self._content)
        )

    def is_float(self) -> bool:
        return self._kind in (_Kind.FLOAT, _Kind.INTEGER) or (
            self._kind is _Kind.UNPARSED and is_float(self._content)
        )

    def is_string(self) -> bool:
        return self._kind is _Kind.STRING or (
            self._kind is _Kind.UNPARSED and self._content == "null"
        )

    def is_array(self) -> bool:
        return self._kind is _Kind.ARRAY

    def is_object(self) -> bool:
        return self._kind is _Kind.OBJECT

    def to_json(self) -> str:
        return _dump(self)

    def _write(self, writer: JsonWriter) -> None:
        kind, content = self._kind, self._content
        if kind is _Kind.STRING:
            writer.write_string(content)
        elif kind is _Kind.UNPARSED:
            if content is not None:
                writer.write_raw(content)
        elif kind is _Kind.INTEGER:
            if content < 0:
                writer.write_raw("-")
            writer.write_integer(abs(content))
        elif kind is _Kind.FLOAT:
            writer.write_float(content)
        elif kind is _Kind.BOOLEAN:
            writer.write_boolean(content)
        elif kind in (_Kind.ARRAY, _Kind.OBJECT):
            content._write(writer)

    def __str__(self) -> str:
        text = self.as_string()
        return text if text is not None else self.to_json()

    def __repr__(self) -> str:
        return f"JsonVariant({self.to_json()})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, JsonVariant):
            return self._kind is other._kind and self._content == other._content
        if isinstance(other, bool):
            return self.as_bool() == other
        if isinstance(other, int):
            return self.as_integer() == other
        if isinstance(other, float):
            return self.as_float() == other
        if isinstance(other, str):
            return self.as_string() == other
        if isinstance(other, JsonArray):
            return self.as_array() is other
        if isinstance(other, JsonObject):
            return self.as_object() is other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]


class JsonBuffer:
    """Where arrays and objects are allocated; unlimited when no capacity is given."""

    def __init__(self, capacity: Optional[int] = None) -> None:
        self._arena = Arena(capacity) if capacity is not None else None

    def _reserve(self, nbytes: int) -> bool:
        if self._arena is None:
            return True
        try:
            self._arena.alloc(nbytes)
        except MemoryError:
            return False
        return True

    def create_array(self) -> JsonArray:
        """A new empty array, or the invalid array when there is no room."""
        return JsonArray(self) if self._reserve(COLLECTION_SIZE) else JsonArray.invalid()

    def create_object(self) -> JsonObject:
        """A new empty object, or the invalid object when there is no room."""
        return JsonObject(self) if self._reserve(COLLECTION_SIZE) else JsonObject.invalid()


class JsonArray:
    """An ordered list of JSON values."""

    _INVALID: ClassVar[Optional[JsonArray]] = None

    def __init__(self, buffer: Optional[JsonBuffer]) -> None:
        self._buffer = buffer
        self._items: List[JsonVariant] = []

    @classmethod
    def invalid(cls) -> JsonArray:
        """The shared array standing for a failed allocation or parse."""
        if cls._INVALID is None:
            cls._INVALID = cls(None)
        return cls._INVALID

    def success(self) -> bool:
        return self._buffer is not None

    def add(self, value: Any) -> bool:
        """Append a value; False when the array is invalid or the buffer is full."""
        variant = JsonVariant(value)
        if self._buffer is None or not self._buffer._reserve(ARRAY_NODE_SIZE):
            return False
        self._items.append(variant)
        return True

    def _in_range(self, index: int) -> bool:
        return 0 <= index < len(self._items)

    def set(self, index: int, value: Any) -> bool:
        """Replace the value at ``index``; False when there is none."""
        variant = JsonVariant(value)
        if not self._in_range(index):
            return False
        self._items[index] = variant
        return True

    def get(self, index: int) -> JsonVariant:
        """The value at ``index``, or an undefined value when out of range."""
        return self._items[index] if self._in_range(index) else JsonVariant()

    def remove(self, index: int) -> None:
        if self._in_range(index):
            del self._items[index]

    def create_nested_array(self) -> JsonArray:
        if self._buffer is None:
            return JsonArray.invalid()
        array = self._buffer.create_array()
        self.add(array)
        return array

    def create_nested_object(self) -> JsonObject:
        if self._buffer is None:
            return JsonObject.invalid()
        obj = self._buffer.create_object()
        self.add(obj)
        return obj

    def to_json(self) -> str:
        return _dump(self)

    def _write(self, writer: JsonWriter) -> None:
        writer.begin_array()
        for position, item in enumerate(self._items):
            if position:
                writer.write_comma()
            item._write(writer)
        writer.end_array()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[JsonVariant]:
        return iter(self._items)

    def __getitem__(self, index: int) -> JsonVariant:
        return self.get(index)

    def __setitem__(self, index: int, value: Any) -> None:
        self.set(index, value)

    def __repr__(self) -> str:
        return f"JsonArray({self.to_json()})"


class JsonObject:
    """An ordered mapping of string keys to JSON values."""

    _INVALID: ClassVar[Optional[JsonObject]] = None

    def __init__(self, buffer: Optional[JsonBuffer]) -> None:
        self._buffer = buffer
        self._pairs: Dict[str, JsonVariant] = {}

    @classmethod
    def invalid(cls) -> JsonObject:
        """The shared object standing for a failed allocation or parse."""
        if cls._INVALID is None:
            cls._INVALID = cls(None)
        return cls._INVALID

    def success(self) -> bool:
        return self._buffer is not None

    def set(self, key: str, value: Any) -> bool:
        """Set or replace a value; False when the object is invalid or the buffer is full."""
        variant = JsonVariant(value)
        if key not in self._pairs:
            if self._buffer is None or not self._buffer._reserve(OBJECT_NODE_SIZE):
                return False
        self._pairs[key] = variant
        return True

    def get(self, key: str) -> JsonVariant:
        """The value for ``key``, or an undefined value when it is missing."""
        return self._pairs.get(key, JsonVariant())

    def contains_key(self, key: str) -> bool:
        return key in self._pairs

    def remove(self, key: str) -> None:
        self._pairs.pop(key, None)

    def create_nested_array(self, key: str) -> JsonArray:
        if self._buffer is None:
            return JsonArray.invalid()
        array = self._buffer.create_array()
        self.set(key, array)
        return array

    def create_nested_object(self, key: str) -> JsonObject:
        if self._buffer is None:
            return JsonObject.invalid()
        obj = self._buffer.create_object()
        self.set(key, obj)
        return obj

    def items(self) -> ItemsView[str, JsonVariant]:
        return self._pairs.items()

    def to_json(self) -> str:
        return _dump(self)

    def _write(self, writer: JsonWriter) -> None:
        writer.begin_object()
        for position, (key, value) in enumerate(self._pairs.items()):
            if position:
                writer.write_comma()
            writer.write_string(key)
            writer.write_colon()
            value._write(writer)
        writer.end_object()

    def __len__(self) -> int:
        return len(self._pairs)

    def __iter__(self) -> Iterator[str]:
        return iter(self._pairs)

    def __contains__(self, key: object) -> bool:
        return key in self._pairs

    def __getitem__(self, key: str) -> JsonVariant:
        return self.get(key)

    def __setitem__(self, key: str, value: Any) -> None:
        self.set(key, value)

    def __repr__(self) -> str:
        return f"JsonObject({self.to_json()})"