"""Command and display-RAM messages for the two LED matrix driver chips."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from .animation import Frame

# Pins.
CS_BLUE = 7
CS_RED = 8
DATA_PIN = 9
CLK_PIN = 10

CS_ACTIVE = 0
CS_INACTIVE = 1

# Message framing.
CMD_MODE = 4  # 100
CMD_LEN = 9  # CCCC-CCCC-X
SET_WRITE_MODE = 0x0280  # 101 AAAAAAA
SET_WRITE_LEN = 10
WRITE_LEN = 4

# Commands: the 8 most significant bits of a 9-bit command word.
SYS_DIS = 0x00
COM_OPTION = 0x24
SET_SLAVE = 0x10
SET_MASTER = 0x18
SYS_ON = 0x01
LED_ON = 0x03
LED_OFF = 0x02
PWM_DUTY = 0xA0

RAM_ROWS = 24
SETUP_BYTES = 8
COMMAND_BYTES = 2
RAM_BYTES = 50
RAM_BITS = SET_WRITE_LEN + RAM_ROWS * 4 * WRITE_LEN

_RED_MAP = (
    ("green", 2), ("red", 3), ("green", 3), ("green", 4), ("red", 5), ("green", 1),
    ("red", 1), ("red", 0), ("green", 5), ("red", 6), ("green", 6), ("green", 7),
    ("red", 8), ("red", 9), ("green", 9), ("red", 10), ("red", 11), ("green", 11),
    ("red", 12), ("green", 12), ("green", 13), ("green", 15), ("green", 14), ("red", 15),
)

_BLUE_MAP = (
    ("green", 10), ("blue", 11), ("blue", 12), ("red", 13), ("blue", 13), ("red", 14),
    ("blue", 14), ("blue", 15), ("blue", 10), ("blue", 9), ("green", 8), ("blue", 8),
    ("blue", 7), ("red", 7), ("blue", 6), ("blue", 5), ("red", 4), ("blue", 4),
    ("blue", 3), ("red", 2), ("blue", 2), ("green", 0), ("blue", 1), ("blue", 0),
)


class SpiWriter(Protocol):
    def write(self, buffer: Sequence[int], num_bits: int) -> None: ...


def insert_bits_msb(buffer: bytearray, index: int, data: int, num_bits: int) -> int:
    """OR the low ``num_bits`` of ``data`` into the buffer from bit ``index`` downwards.

    Bit ``index`` is counted from bit 0 of byte 0; the buffer's most significant
    bit is the top bit of its last byte. Returns the next free bit index.
    """
    if index < 0:
        raise IndexError(f"bit index {index} is outside the buffer")
    data &= 0xFF
    byte_index, bit_in_byte = divmod(index, 8)
    free = bit_in_byte + 1
    if num_bits < free:
        buffer[byte_index] |= (data << (free - num_bits)) & 0xFF
    else:
        buffer[byte_index] |= data >> (num_bits - free)
        remaining = num_bits - free
        if remaining:
            if byte_index == 0:
                raise IndexError("data runs past the start of the buffer")
            buffer[byte_index - 1] |= (data << (8 - remaining)) & 0xFF
    return index - num_bits


def add_payload(buffer: bytearray, index: int, payload: int, num_bits: int) -> int:
    """Insert a payload of up to 16 bits, most significant bit first."""
    high = (payload >> 8) & 0xFF
    low = payload & 0xFF
    if num_bits <= 8:
        return insert_bits_msb(buffer, index, low, num_bits)
    index = insert_bits_msb(buffer, index, high, num_bits - 8)
    return insert_bits_msb(buffer, index, low, 8)


def setup_message(master: bool) -> tuple[bytes, int]:
    """Return the boot command sequence for a master or slave chip and its bit count."""
    buffer = bytearray(SETUP_BYTES)
    index = add_payload(buffer, SETUP_BYTES * 8 - 1, CMD_MODE, 3)
    commands = (SYS_DIS, COM_OPTION, SET_MASTER if master else SET_SLAVE, SYS_ON, PWM_DUTY, LED_ON)
    for command in commands:
        index = add_payload(buffer, index, command << 1, CMD_LEN)
    return bytes(buffer), 3 + len(commands) * CMD_LEN


def single_command(cmd: int) -> tuple[bytes, int]:
    """Return a one-command message and its bit count."""
    buffer = bytearray(COMMAND_BYTES)
    index = add_payload(buffer, COMMAND_BYTES * 8 - 1, CMD_MODE, 3)
    add_payload(buffer, index, (cmd & 0xFF) << 1, CMD_LEN)
    return bytes(buffer), 3 + CMD_LEN


def ram_message(ram: Sequence[int]) -> tuple[bytes, int]:
    """Return the message writing 24 rows of 16 bits into display RAM."""
    if len(ram) != RAM_ROWS:
        raise ValueError(f"display RAM has {RAM_ROWS} rows, got {len(ram)}")
    buffer = bytearray(RAM_BYTES)
    index = add_payload(buffer, RAM_BYTES * 8 - 1, SET_WRITE_MODE, SET_WRITE_LEN)
    for row in ram:
        for shift in (12, 8, 4, 0):
            index = insert_bits_msb(buffer, index, (row >> shift) & 0xF, WRITE_LEN)
    return bytes(buffer), RAM_BITS


def clear_message() -> tuple[bytes, int]:
    """Return the message that writes zeros over the whole display RAM."""
    buffer = bytearray(RAM_BYTES)
    add_payload(buffer, RAM_BYTES * 8 - 1, SET_WRITE_MODE, SET_WRITE_LEN)
    return bytes(buffer), RAM_BITS


def _translate(frame: Frame, mapping: tuple[tuple[str, int], ...]) -> list[int]:
    return [getattr(frame, plane)[row] for plane, row in mapping]


def translate_red(frame: Frame) -> list[int]:
    """Return the RAM rows of the chip wired to the red chip-select."""
    return _translate(frame, _RED_MAP)


def translate_blue(frame: Frame) -> list[int]:
    """Return the RAM rows of the chip wired to the blue chip-select."""
    return _translate(frame, _BLUE_MAP)


class LedDriver:
    """The pair of driver chips behind the 16x16 RGB matrix."""

    def __init__(self, red: SpiWriter, blue: SpiWriter) -> None:
        self.red = red
        self.blue = blue

    def _both(self, message: tuple[bytes, int]) -> None:
        for device in (self.red, self.blue):
            device.write(*message)

    def setup(self) -> None:
        """Send the boot commands: the red chip is master, the blue chip slave."""
        self.red.write(*setup_message(True))
        self.blue.write(*setup_message(False))

    def update_ram(self, frame: Frame) -> None:
        """Write a frame into both chips' display RAM."""
        self.red.write(*ram_message(translate_red(frame)))
        self.blue.write(*ram_message(translate_blue(frame)))

    def clear_ram(self) -> None:
        self._both(clear_message())

    def set_brightness(self, level: int) -> None:
        """Set PWM duty from 0 (dimmest, still on) to 15 (brightest)."""
        self._both(single_command(PWM_DUTY | (level & 0xF)))

    def toggle(self, on: int) -> None:
        """Turn the LEDs on when ``on`` is 1, off otherwise."""
        self._both(single_command(LED_ON if on == 1 else LED_OFF))