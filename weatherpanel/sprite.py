"""Small bitmap sprites drawn onto the 16x16 colour planes."""

from __future__ import annotations

from collections.abc import MutableSequence, Sequence
from dataclasses import dataclass
from enum import IntEnum

from .animation import Frame

ROW_MASK = 0xFFFF
NULL_VALUE = 200

# Each digit is 3 columns wide and 5 rows tall.
SMALL_DIGITS: tuple[tuple[int, ...], ...] = (
    (7, 5, 5, 5, 7),
    (1, 1, 1, 1, 1),
    (7, 1, 7, 4, 7),
    (7, 1, 3, 1, 7),
    (5, 5, 7, 1, 1),
    (7, 4, 7, 1, 7),
    (7, 4, 7, 5, 7),
    (7, 1, 2, 4, 4),
    (7, 5, 7, 5, 7),
    (7, 5, 7, 1, 7),
)

UP_ARROW = (4, 14, 21, 4, 4, 4)
DOWN_ARROW = (4, 4, 4, 21, 14, 4)
LETTER_J = (7, 2, 2, 10, 6)

# Sunday first.
DAY_LETTERS: tuple[tuple[int, ...], ...] = (
    (0x70, 0x40, 0x75, 0x15, 0x77),
    (0x22, 0x36, 0x2A, 0x22, 0x22),
    (0x38, 0x10, 0x15, 0x15, 0x17),
    (0x22, 0x22, 0x2A, 0x36, 0x22),
    (0x74, 0x24, 0x27, 0x25, 0x25),
    (0xE, 0x8, 0xC, 0x8, 0x8),
    (0x72, 0x45, 0x77, 0x15, 0x75),
)

HEART = (34, 85, 73, 34, 20, 8)
PRECIP_LINE = (42, 85)
MAX_TEMP_LINE = (127,)
ALMOST_FULL_MOON = (6, 7, 7, 6)
FULL_MOON = (6, 15, 15, 6)
VERT_LINE = (1, 1, 1, 1)


class Color(IntEnum):
    RED = 0
    GREEN = 1
    BLUE = 2
    YELLOW = 3
    CYAN = 4
    PURPLE = 5
    WHITE = 6


class SpriteKind(IntEnum):
    MAX_TEMP = 0
    CURRENT_TEMP = 1
    PRECIP = 2
    MOON = 3
    LETTER = 4
    CUSTOM = 5


@dataclass(frozen=True)
class Glyph:
    """A free-form sprite: one int per row, bit 0 at the right."""

    num_cols: int
    num_rows: int
    data: tuple[int, ...]


def _or_row(plane: MutableSequence[int], index: int, bits: int) -> None:
    if index < 0:
        raise IndexError(f"row {index} is outside the view")
    plane[index] = (plane[index] | bits) & ROW_MASK


def add_generic(plane: MutableSequence[int], row: int, col: int, rows: Sequence[int]) -> None:
    """OR each sprite row into the plane, starting at (row, col)."""
    for offset, bits in enumerate(rows):
        _or_row(plane, row + offset, bits << col)


def add_glyph(glyph: Glyph, row: int, col: int, plane: MutableSequence[int]) -> None:
    """Draw the first ``num_rows`` rows of a glyph at (row, col)."""
    add_generic(plane, row, col, glyph.data[: glyph.num_rows])
    if len(glyph.data) < glyph.num_rows:
        raise IndexError("glyph has fewer data rows than num_rows")


def add_null(plane: MutableSequence[int], row: int, col: int) -> None:
    """Draw the diagonal line that stands for a missing value."""
    for offset in range(len(SMALL_DIGITS[0])):
        _or_row(plane, row + offset, 1 << (offset + col + 1))


def add_double_digit(plane: MutableSequence[int], row: int, col: int, value: int) -> None:
    """Draw the last two decimal digits of ``value``; ``NULL_VALUE`` draws a null marker."""
    if value == NULL_VALUE:
        add_null(plane, row, col)
        return
    tens, ones = divmod(value % 100, 10)
    combined = [
        ((tens_row << 4) | ones_row) & 0xFF
        for tens_row, ones_row in zip(SMALL_DIGITS[tens], SMALL_DIGITS[ones])
    ]
    add_generic(plane, row, col, combined)


def _color_planes(color: Color, frame: Frame) -> tuple[MutableSequence[int], ...]:
    return {
        Color.RED: (frame.red,),
        Color.GREEN: (frame.green,),
        Color.BLUE: (frame.blue,),
        Color.YELLOW: (frame.red, frame.green),
        Color.CYAN: (frame.green, frame.blue),
        Color.PURPLE: (frame.blue, frame.red),
        Color.WHITE: (frame.blue, frame.red, frame.green),
    }[color]


def add_sprite(kind: SpriteKind, color: Color, value: int, frame: Frame) -> None:
    """Draw one of the weather sprites into ``frame``."""
    if not 0 <= value <= 0xFF:
        raise ValueError(f"sprite value {value} does not fit in a byte")
    kind = SpriteKind(kind)
    planes = _color_planes(Color(color), frame)
    # Colour sprites are drawn on one or two planes; white falls back to its first plane.
    targets = planes if len(planes) == 2 else planes[:1]

    if kind is SpriteKind.MAX_TEMP:
        for plane in targets:
            add_generic(plane, 0, 0, MAX_TEMP_LINE)
            add_double_digit(plane, 2, 0, value)
    elif kind is SpriteKind.CURRENT_TEMP:
        for plane in targets:
            add_double_digit(plane, 10, 0, value)
    elif kind is SpriteKind.PRECIP:
        for plane in targets:
            if value == 100:
                add_generic(plane, 4, 9, PRECIP_LINE)
                add_generic(plane, 7, 9, PRECIP_LINE)
            elif value < 100:
                add_double_digit(plane, 4, 9, value)
                add_generic(plane, 1, 9, PRECIP_LINE)
    elif kind is SpriteKind.MOON:
        moon = {2: FULL_MOON, 1: ALMOST_FULL_MOON}.get(value)
        if moon is not None:
            for plane in (frame.red, frame.green, frame.blue):
                add_generic(plane, 11, 10, moon)
    elif kind is SpriteKind.LETTER:
        if value < len(DAY_LETTERS):
            add_generic(frame.green, 10, 0, DAY_LETTERS[value])
    elif kind is SpriteKind.CUSTOM:
        add_generic(frame.red, 0, 0, VERT_LINE)
        add_generic(frame.green, 4, 0, VERT_LINE)
        add_generic(frame.blue, 8, 0, VERT_LINE)
        add_generic(frame.red, 12, 0, VERT_LINE)
        add_generic(frame.green, 12, 1, VERT_LINE)
        add_generic(frame.blue, 12, 2, VERT_LINE)