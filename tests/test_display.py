import pytest

from matrixclock.display import Command, Max7219


def test_send_cmd_only_addresses_one_device():
    m = Max7219(3)
    m.send_cmd(1, Command.INTENSITY, 5)
    assert m.frames == [bytes([0, 0, Command.INTENSITY, 5, 0, 0])]


def test_send_cmd_all_repeats_pair():
    m = Max7219(2)
    m.send_cmd_all(Command.SCAN_LIMIT, 7)
    assert m.frames == [bytes([Command.SCAN_LIMIT, 7, Command.SCAN_LIMIT, 7])]


def test_sink_receives_frames():
    received = []
    m = Max7219(1, sink=received.append)
    m.send_cmd_all(Command.SHUTDOWN, 1)
    assert received == [bytes([Command.SHUTDOWN, 1])]
    assert m.frames == []


def test_command_values_on_the_wire():
    m = Max7219(1)
    m.send_cmd_all(Command.DIGIT0, 1)
    m.send_cmd_all(Command.DIGIT7, 2)
    m.send_cmd_all(Command.DISPLAY_TEST, 3)
    assert m.frames == [bytes([1, 1]), bytes([8, 2]), bytes([15, 3])]


def test_invalid_rotation():
    with pytest.raises(ValueError):
        Max7219(1, rotate=45)


def test_invalid_device_count():
    with pytest.raises(ValueError):
        Max7219(0)


def test_initialize_sequence():
    m = Max7219(2)
    m.buffer[3] = 0xFF
    m.initialize()
    assert len(m.frames) == 5 + 8
    assert m.frames[0] == bytes([Command.DISPLAY_TEST, 0] * 2)
    assert m.frames[1] == bytes([Command.SCAN_LIMIT, 7] * 2)
    assert m.frames[4] == bytes([Command.SHUTDOWN, 0] * 2)
    for digit, frame in enumerate(m.frames[5:]):
        assert frame == bytes([Command.DIGIT0 + digit, 0] * 2)


def test_refresh_sends_rows_of_device():
    m = Max7219(2, rotate=0)
    m.buffer[8:16] = bytes(range(10, 18))
    m.refresh(1)
    assert len(m.frames) == 8
    for digit, frame in enumerate(m.frames):
        assert frame[:2] == bytes([Command.DIGIT0 + digit, 10 + digit])
        assert frame[2:] == bytes([0, 0])


def test_refresh_all_unrotated():
    m = Max7219(2, rotate=0)
    m.buffer[3] = 0xA5
    m.buffer[8 + 3] = 0x5A
    m.refresh_all()
    frame = m.frames[3]
    assert frame == bytes([Command.DIGIT0 + 3, 0x5A, Command.DIGIT0 + 3, 0xA5])


def test_refresh_all_rotate_90_single_pixel():
    m = Max7219(1, rotate=90)
    m.buffer[0] = 0x80
    m.refresh_all()
    assert m.frames[0] == bytes([Command.DIGIT0, 0x01])
    assert all(frame[1] == 0 for frame in m.frames[1:])


def test_refresh_all_rotate_270_single_pixel():
    m = Max7219(1, rotate=270)
    m.buffer[0] = 0x01
    m.refresh_all()
    assert m.frames[0] == bytes([Command.DIGIT0, 0x80])
    assert all(frame[1] == 0 for frame in m.frames[1:])


@pytest.mark.parametrize("rotate", [0, 90, 270])
def test_full_screen_stays_full(rotate):
    m = Max7219(2, rotate=rotate)
    m.buffer[:16] = bytes([0xFF] * 16)
    m.refresh_all()
    for digit, frame in enumerate(m.frames):
        assert frame == bytes([Command.DIGIT0 + digit, 0xFF] * 2)


def test_invert_twice_restores():
    m = Max7219(2)
    m.buffer[:] = bytes(range(len(m.buffer)))
    original = bytes(m.buffer)
    m.invert()
    assert m.buffer[0] == 0xFF
    assert m.buffer[16:] == original[16:]
    m.invert()
    assert bytes(m.buffer) == original


def test_clear_keeps_scroll_area():
    m = Max7219(1)
    m.buffer[:] = bytes([0x33] * 16)
    m.clear()
    assert bytes(m.buffer[:8]) == bytes(8)
    assert bytes(m.buffer[8:]) == bytes([0x33] * 8)


def test_scroll_left_moves_columns():
    m = Max7219(1)
    m.buffer[:] = bytes(range(1, 17))
    m.scroll_left()
    assert bytes(m.buffer[:15]) == bytes(range(2, 17))
    assert m.buffer[15] == 16