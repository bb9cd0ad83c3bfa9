"""Bit framing for the serial link to the LED driver chips."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

SPI_MODE = 3
SPI_CLOCK_SPEED_HZ = 1000

# Bit-bang timing and levels.
MS_DELAY_DATA = 1
CLK_LO = 0
CLK_HI = 1
DATA_LO = 0
DATA_HI = 1


def _byte_count(num_bits: int, available: int) -> int:
    if num_bits < 0:
        raise ValueError(f"bit count must not be negative, got {num_bits}")
    count = (num_bits + 7) // 8
    if count > available:
        raise ValueError(f"{num_bits} bits need {count} bytes, buffer holds {available}")
    return count


def reverse_bytes(buffer: Sequence[int], num_bits: int) -> bytes:
    """Return the bytes holding ``num_bits`` in wire order: last buffer byte first."""
    count = _byte_count(num_bits, len(buffer))
    return bytes(reversed(bytes(buffer[:count])))


def bitbang_levels(buffer: Sequence[int], num_bits: int) -> list[int]:
    """Return the data line levels, one per clock, sent when bit-banging the buffer.

    Whole bytes are clocked out, starting with the last byte of the buffer and
    its most significant bit.
    """
    return [(byte >> bit) & 1 for byte in reverse_bytes(buffer, num_bits) for bit in range(7, -1, -1)]


@dataclass
class SpiDevice:
    """One chip on the SPI bus, selected by its own chip-select pin."""

    transmit: Callable[[bytes, int], None]
    cs_pin: int
    mode: int = SPI_MODE
    clock_speed_hz: int = SPI_CLOCK_SPEED_HZ

    def write(self, buffer: Sequence[int], num_bits: int) -> None:
        """Send the first ``num_bits`` of a buffer whose most significant bit is at its end."""
        self.transmit(reverse_bytes(buffer, num_bits), num_bits)