"""Conway's Game of Life on the 16x16 panel, coloured by cell history."""

from __future__ import annotations

import random
from collections.abc import Callable
from enum import IntEnum
from typing import Optional, Protocol

from .animation import Frame

GRID_SIZE = 16
DEFAULT_REFRESH_MS = 1000
MIN_REFRESH_MS = 400
MAX_REFRESH_MS = 3000
REFRESH_STEP_MS = 200
STALE_LIMIT = 3


class Cell(IntEnum):
    """State of one cell after the last generation."""

    DEAD = 0
    DIED = 1
    ALIVE = 2
    BORN = 3

    @property
    def living(self) -> bool:
        return self >= Cell.ALIVE


class BitSource(Protocol):
    def getrandbits(self, k: int) -> int: ...


class Conway:
    """Game of Life view: red cells live on, green are just born, blue just died."""

    def __init__(
        self,
        change_brightness: Optional[Callable[[int], None]] = None,
        rng: Optional[BitSource] = None,
    ) -> None:
        self._change_brightness = change_brightness
        self._rng: BitSource = rng if rng is not None else random.Random()
        self._previous_red = [0] * GRID_SIZE
        self.grid: list[list[Cell]] = []
        self.refresh_rate = DEFAULT_REFRESH_MS
        self.same_frames = 0
        self.last_top_direction: Optional[int] = None
        self.restart()

    def restart(self) -> None:
        """Seed a fresh random grid and reset the refresh rate."""
        self.same_frames = 0
        self.refresh_rate = DEFAULT_REFRESH_MS
        self.grid = [
            [Cell.ALIVE if self._rng.getrandbits(1) else Cell.DEAD for _ in range(GRID_SIZE)]
            for _ in range(GRID_SIZE)
        ]

    def count_neighbors(self, row: int, col: int) -> int:
        """Count living cells around (row, col); the grid does not wrap."""
        return sum(
            1
            for r in range(row - 1, row + 2)
            for c in range(col - 1, col + 2)
            if 0 <= r < GRID_SIZE
            and 0 <= c < GRID_SIZE
            and (r, c) != (row, col)
            and self.grid[r][c].living
        )

    def step(self) -> None:
        """Advance the grid by one generation."""
        new_grid: list[list[Cell]] = []
        for row in range(GRID_SIZE):
            new_row = []
            for col in range(GRID_SIZE):
                neighbors = self.count_neighbors(row, col)
                if self.grid[row][col].living:
                    new_row.append(Cell.ALIVE if neighbors in (2, 3) else Cell.DIED)
                else:
                    new_row.append(Cell.BORN if neighbors == 3 else Cell.DEAD)
            new_grid.append(new_row)
        self.grid = new_grid

    def get_frame(self, frame: Frame) -> int:
        """Draw the grid into ``frame``, advance the game and return the refresh rate.

        When the living cells stay the same for three frames the grid is reseeded.
        """
        planes = {Cell.DIED: frame.blue, Cell.ALIVE: frame.red, Cell.BORN: frame.green}
        for row, cells in enumerate(self.grid):
            for col, cell in enumerate(cells):
                plane = planes.get(cell)
                if plane is not None:
                    plane[row] |= 1 << col

        if list(frame.red) == self._previous_red:
            self.same_frames += 1
        self._previous_red = list(frame.red)

        if self.same_frames < STALE_LIMIT:
            self.step()
        else:
            self.restart()
        return self.refresh_rate

    def encoder_top(self, direction: int) -> None:
        """Record the turn; the top encoder changes nothing on the grid in this view."""
        self.last_top_direction = direction

    def encoder_side(self, direction: int) -> None:
        """Dim on direction 0, brighten otherwise."""
        if self._change_brightness is not None:
            self._change_brightness(0 if direction == 0 else 1)

    def button(self, btn: int) -> None:
        """Button 1 reseeds; 2 speeds up; 3 slows down."""
        if btn == 1:
            self.restart()
        elif btn == 2:
            if self.refresh_rate > MIN_REFRESH_MS:
                self.refresh_rate -= REFRESH_STEP_MS
        elif btn == 3:
            if self.refresh_rate < MAX_REFRESH_MS:
                self.refresh_rate += REFRESH_STEP_MS