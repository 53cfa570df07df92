import pytest

from matrixclock.arena import ALIGNMENT, Arena


def test_new_arena_is_empty():
    arena = Arena(64)
    assert arena.capacity() == 64
    assert arena.size() == 0


def test_alloc_grows_size():
    arena = Arena(64)
    view = arena.alloc(1)
    assert len(view) == 1
    assert arena.size() >= 1
    arena.alloc(1)
    assert arena.size() >= 2


def test_allocations_are_aligned_and_distinct():
    arena = Arena(64)
    arena.alloc(1)
    before = arena.size()
    second = arena.alloc(3)
    second[:] = b"abc"
    assert (arena.size() - 3) % ALIGNMENT == 0
    assert arena.size() - 3 >= before
    first_again = arena.alloc(2)
    first_again[:] = b"zz"
    assert bytes(second) == b"abc"


def test_clear_resets_size():
    arena = Arena(16)
    arena.alloc(5)
    arena.clear()
    assert arena.size() == 0
    assert len(arena.alloc(16)) == 16


def test_alloc_beyond_capacity_raises():
    arena = Arena(4)
    with pytest.raises(MemoryError):
        arena.alloc(5)


def test_negative_capacity_rejected():
    with pytest.raises(ValueError):
        Arena(-1)


def test_string_when_big_enough():
    arena = Arena(6)
    s = arena.start_string()
    for c in "hello":
        s.append(c)
    assert s.c_str() == "hello"


def test_string_size_increases():
    arena = Arena(5)
    s = arena.start_string()
    assert arena.size() == 0
    s.append("h")
    assert arena.size() == 1
    s.c_str()
    assert arena.size() == 2


def test_string_too_small_returns_none():
    arena = Arena(5)
    s = arena.start_string()
    for c in "hello":
        s.append(c)
    assert s.c_str() is None
    assert arena.size() == arena.capacity()


def test_string_without_room_returns_none():
    arena = Arena(0)
    s = arena.start_string()
    s.append("!")
    assert s.c_str() is None


def test_string_rejects_wide_character():
    s = Arena(8).start_string()
    with pytest.raises(ValueError):
        s.append("\u20ac")