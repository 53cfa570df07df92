"""Frame buffer and command frames for a chain of MAX7219 LED matrix drivers."""

from __future__ import annotations

from enum import IntEnum
from typing import Callable, Iterable, Optional, Tuple

ROTATIONS = (0, 90, 270)
ROWS_PER_DEVICE = 8


class Command(IntEnum):
    """MAX7219 register addresses."""

    NOOP = 0
    DIGIT0 = 1
    DIGIT1 = 2
    DIGIT2 = 3
    DIGIT3 = 4
    DIGIT4 = 5
    DIGIT5 = 6
    DIGIT6 = 7
    DIGIT7 = 8
    DECODE_MODE = 9
    INTENSITY = 10
    SCAN_LIMIT = 11
    SHUTDOWN = 12
    DISPLAY_TEST = 15


class Max7219:
    """A chain of MAX7219 drivers with an 8-rows-per-device frame buffer.

    Every latched transfer (chip select low to high) is handed to ``sink`` as
    one ``bytes`` object, holding a command/data pair per device, farthest
    device first. Without a sink, transfers are collected in ``frames``.
    """

    def __init__(
        self,
        num_devices: int,
        sink: Optional[Callable[[bytes], None]] = None,
        rotate: int = 90,
    ) -> None:
        if num_devices < 1:
            raise ValueError("at least one device is required")
        if rotate not in ROTATIONS:
            raise ValueError(f"rotation must be one of {ROTATIONS}, not {rotate}")
        self.num_devices = num_devices
        self.rotate = rotate
        self.frames: list[bytes] = []
        self._sink = sink if sink is not None else self.frames.append
        # Eight extra bytes hold a character being scrolled in.
        self.buffer = bytearray(num_devices * ROWS_PER_DEVICE + ROWS_PER_DEVICE)

    @property
    def _visible(self) -> int:
        return self.num_devices * ROWS_PER_DEVICE

    def _devices_far_first(self) -> range:
        return range(self.num_devices - 1, -1, -1)

    def _transfer(self, pairs: Iterable[Tuple[int, int]]) -> None:
        self._sink(bytes(byte for pair in pairs for byte in pair))

    def send_cmd(self, addr: int, cmd: int, data: int) -> None:
        """Send a command to one device; the others receive no-ops."""
        self._transfer(
            (cmd, data) if device == addr else (Command.NOOP, 0)
            for device in self._devices_far_first()
        )

    def send_cmd_all(self, cmd: int, data: int) -> None:
        """Send the same command to every device."""
        self._transfer((cmd, data) for _ in self._devices_far_first())

    def refresh(self, addr: int) -> None:
        """Push the unrotated rows of one device."""
        start = addr * ROWS_PER_DEVICE
        rows = self.buffer[start:start + ROWS_PER_DEVICE]
        for digit, row in enumerate(rows):
            self.send_cmd(addr, Command.DIGIT0 + digit, row)

    def _device_byte(self, device: int, digit: int) -> int:
        start = device * ROWS_PER_DEVICE
        rows = self.buffer[start:start + ROWS_PER_DEVICE]
        if self.rotate == 270:
            mask = 1 << digit
            return sum(0x80 >> b for b, row in enumerate(rows) if row & mask)
        if self.rotate == 90:
            mask = 0x80 >> digit
            return sum(1 << b for b, row in enumerate(rows) if row & mask)
        return rows[digit]

    def refresh_all(self) -> None:
        """Push the whole frame buffer, rotated as configured."""
        for digit in range(ROWS_PER_DEVICE):
            self._transfer(
                (Command.DIGIT0 + digit, self._device_byte(device, digit))
                for device in self._devices_far_first()
            )

    def clear(self) -> None:
        """Blank the visible part of the frame buffer."""
        self.buffer[:self._visible] = bytes(self._visible)

    def scroll_left(self) -> None:
        """Shift the buffer, including the scroll area, one column left."""
        end = self._visible + ROWS_PER_DEVICE - 1
        self.buffer[:end] = self.buffer[1:end + 1]

    def invert(self) -> None:
        """Invert every visible pixel."""
        visible = self._visible
        self.buffer[:visible] = bytes(~b & 0xFF for b in self.buffer[:visible])

    def initialize(self) -> None:
        """Configure all devices at minimum brightness and blank them."""
        self.send_cmd_all(Command.DISPLAY_TEST, 0)
        self.send_cmd_all(Command.SCAN_LIMIT, 7)
        self.send_cmd_all(Command.DECODE_MODE, 0)
        self.send_cmd_all(Command.INTENSITY, 0)
        self.send_cmd_all(Command.SHUTDOWN, 0)
        self.clear()
        self.refresh_all()