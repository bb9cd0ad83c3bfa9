import pytest

from weatherpanel.animation import ROWS, Frame
from weatherpanel.sprite import (
    DAY_LETTERS,
    FULL_MOON,
    MAX_TEMP_LINE,
    NULL_VALUE,
    PRECIP_LINE,
    ROW_MASK,
    SMALL_DIGITS,
    VERT_LINE,
    Color,
    Glyph,
    SpriteKind,
    add_double_digit,
    add_generic,
    add_glyph,
    add_null,
    add_sprite,
)


def blank():
    return [0] * ROWS


def test_double_digit_nibbles_hold_each_digit():
    plane = blank()
    add_double_digit(plane, 0, 0, 47)
    assert [row & 0xF for row in plane[:5]] == list(SMALL_DIGITS[7])
    assert [row >> 4 for row in plane[:5]] == list(SMALL_DIGITS[4])
    assert plane[5:] == [0] * (ROWS - 5)


def test_double_digit_uses_last_two_digits():
    low, high = blank(), blank()
    add_double_digit(low, 3, 2, 23)
    add_double_digit(high, 3, 2, 123)
    assert low == high


def test_double_digit_column_offset_is_a_shift():
    base, shifted = blank(), blank()
    add_double_digit(base, 0, 0, 58)
    add_double_digit(shifted, 0, 3, 58)
    assert shifted == [row << 3 for row in base]


def test_null_value_draws_null_marker():
    digits, marker = blank(), blank()
    add_double_digit(digits, 2, 1, NULL_VALUE)
    add_null(marker, 2, 1)
    assert digits == marker


def test_null_marker_is_a_diagonal():
    plane = blank()
    add_null(plane, 0, 0)
    drawn = plane[:5]
    assert all(bin(row).count("1") == 1 for row in drawn)
    widths = [row.bit_length() for row in drawn]
    assert widths == list(range(widths[0], widths[0] + 5))


def test_generic_is_idempotent_and_clipped():
    plane = blank()
    add_generic(plane, 0, 12, (0xFF,))
    once = list(plane)
    add_generic(plane, 0, 12, (0xFF,))
    assert plane == once
    assert plane[0] <= ROW_MASK


def test_generic_rejects_negative_row():
    with pytest.raises(IndexError):
        add_generic(blank(), -1, 0, (1,))


def test_glyph_is_drawn_row_by_row():
    glyph = Glyph(num_cols=4, num_rows=2, data=(9, 6, 15))
    plane = blank()
    add_glyph(glyph, 5, 1, plane)
    assert plane[5:7] == [9 << 1, 6 << 1]
    assert plane[7] == 0


def test_yellow_max_temp_draws_on_red_and_green():
    frame = Frame()
    add_sprite(SpriteKind.MAX_TEMP, Color.YELLOW, 64, frame)
    assert frame.red == frame.green
    assert frame.red[0] == MAX_TEMP_LINE[0]
    assert frame.blue == blank()


def test_white_temperature_uses_only_first_plane():
    frame = Frame()
    add_sprite(SpriteKind.CURRENT_TEMP, Color.WHITE, 31, frame)
    expected = blank()
    add_double_digit(expected, 10, 0, 31)
    assert frame.blue == expected
    assert frame.red == blank()
    assert frame.green == blank()


def test_precip_full_shows_two_line_pairs():
    frame = Frame()
    add_sprite(SpriteKind.PRECIP, Color.BLUE, 100, frame)
    lines = [p << 9 for p in PRECIP_LINE]
    assert frame.blue[4:6] == lines
    assert frame.blue[7:9] == lines


def test_precip_partial_and_out_of_range():
    partial = Frame()
    add_sprite(SpriteKind.PRECIP, Color.BLUE, 40, partial)
    assert partial.blue[1:3] == [p << 9 for p in PRECIP_LINE]
    above = Frame()
    add_sprite(SpriteKind.PRECIP, Color.BLUE, 150, above)
    assert above == Frame()


def test_full_moon_on_all_planes():
    frame = Frame()
    add_sprite(SpriteKind.MOON, Color.RED, 2, frame)
    moon = [m << 10 for m in FULL_MOON]
    assert frame.red[11:15] == moon
    assert frame.green == frame.red == frame.blue


def test_letters_for_each_day_and_invalid_day():
    for day, letter in enumerate(DAY_LETTERS):
        frame = Frame()
        add_sprite(SpriteKind.LETTER, Color.GREEN, day, frame)
        assert frame.green[10:15] == list(letter)
    invalid = Frame()
    add_sprite(SpriteKind.LETTER, Color.GREEN, len(DAY_LETTERS), invalid)
    assert invalid == Frame()


def test_custom_pattern():
    frame = Frame()
    add_sprite(SpriteKind.CUSTOM, Color.RED, 0, frame)
    assert frame.red[0:4] == list(VERT_LINE)
    assert frame.green[4:8] == list(VERT_LINE)
    assert frame.blue[8:12] == list(VERT_LINE)
    assert frame.green[12:16] == [v << 1 for v in VERT_LINE]
    assert frame.blue[12:16] == [v << 2 for v in VERT_LINE]


def test_value_must_fit_in_byte():
    with pytest.raises(ValueError):
        add_sprite(SpriteKind.MAX_TEMP, Color.RED, 256, Frame())