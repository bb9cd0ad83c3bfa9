"""A drawing view: move a cursor with the encoders and toggle pixels with buttons."""

from __future__ import annotations

from .animation import ROWS, Frame

SIZE = 16


class Etchsketch:
    """Canvas of three colour planes with a red cursor drawn on top."""

    def __init__(self) -> None:
        self.canvas = Frame()
        self.row = 0
        self.col = 0
        self.reset()

    def reset(self) -> None:
        """Clear the canvas and move the cursor to the origin."""
        self.canvas = Frame()
        self.row = 0
        self.col = 0

    def get_view(self) -> Frame:
        """Return the canvas with the cursor pixel set in red."""
        frame = self.canvas.copy()
        frame.red[self.row] |= 1 << self.col
        return frame

    def encoder_top(self, direction: int) -> None:
        """Move the cursor one column: direction 0 increases the column."""
        step = 1 if direction == 0 else -1
        self.col = (self.col + step) % SIZE

    def encoder_side(self, direction: int) -> None:
        """Move the cursor one row: direction 0 increases the row."""
        step = 1 if direction == 0 else -1
        self.row = (self.row + step) % ROWS

    def button(self, btn: int) -> None:
        """Toggle the pixel under the cursor: 1 red, 2 green, 3 blue."""
        plane = {1: self.canvas.red, 2: self.canvas.green, 3: self.canvas.blue}.get(btn)
        if plane is not None:
            plane[self.row] ^= 1 << self.col