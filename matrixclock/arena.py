"""Fixed-capacity byte arena with aligned allocations and in-place strings."""

from __future__ import annotations

from typing import Optional

ALIGNMENT = 8


def _round_up(n: int) -> int:
    return (n + ALIGNMENT - 1) // ALIGNMENT * ALIGNMENT


class Arena:
    """A buffer of ``capacity`` bytes handed out front to back."""

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        self._data = bytearray(capacity)
        self._size = 0

    def capacity(self) -> int:
        return len(self._data)

    def size(self) -> int:
        """Bytes in use, including alignment padding."""
        return self._size

    def alloc(self, nbytes: int) -> memoryview:
        """Reserve ``nbytes`` at the next aligned position.

        Raises MemoryError when the arena has no room left.
        """
        self._size = _round_up(self._size)
        if not self._can_alloc(nbytes):
            raise MemoryError(f"arena of {len(self._data)} bytes cannot hold {nbytes} more")
        return self._do_alloc(nbytes)

    def clear(self) -> None:
        """Forget every allocation; earlier views must no longer be used."""
        self._size = 0

    def start_string(self) -> ArenaString:
        return ArenaString(self)

    def _can_alloc(self, nbytes: int) -> bool:
        return self._size + nbytes <= len(self._data)

    def _do_alloc(self, nbytes: int) -> memoryview:
        start = self._size
        self._size += nbytes
        return memoryview(self._data)[start:start + nbytes]

    def _read_terminated(self, start: int) -> str:
        end = self._data.index(0, start)
        return self._data[start:end].decode("latin-1")


class ArenaString:
    """A string built one character at a time at the end of an arena."""

    def __init__(self, arena: Arena) -> None:
        self._arena = arena
        self._start = arena.size()

    def append(self, c: str) -> None:
        """Append one character; it is dropped silently when the arena is full."""
        code = ord(c)
        if code > 0xFF:
            raise ValueError(f"character {c!r} does not fit in one byte")
        if self._arena._can_alloc(1):
            self._arena._do_alloc(1)[0] = code

    def c_str(self) -> Optional[str]:
        """Terminate the string and return it, or None if there is no room to."""
        if not self._arena._can_alloc(1):
            return None
        self._arena._do_alloc(1)[0] = 0
        return self._arena._read_terminated(self._start)