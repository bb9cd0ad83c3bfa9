"""Menu view: pick the active view by turning the top encoder."""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import IntEnum, IntFlag
from typing import Optional

from .animation import Frame

logger = logging.getLogger(__name__)

DEFAULT_REFRESH_RATE_MS = 60000


class ViewType(IntEnum):
    MENU = 0
    WEATHER = 1
    CONWAY = 2
    ETCHSKETCH = 3


NUM_MAIN_VIEWS = len(ViewType)


class UiEvent(IntFlag):
    """Bits of a user-interface event byte."""

    BTN1_PRESSED = 0x01
    BTN2_PRESSED = 0x02
    BTN3_PRESSED = 0x04
    BTN4_PRESSED = 0x08
    ENC1_CW = 0x10
    ENC1_CCW = 0x20
    ENC2_CW = 0x40
    ENC2_CCW = 0x80


def _pad(rows: tuple[int, ...]) -> list[int]:
    return list(rows) + [0] * (16 - len(rows))


_IMAGES: dict[ViewType, Frame] = {
    ViewType.WEATHER: Frame(
        red=[0x0000, 0x00C0, 0x0D20, 0x1210, 0x210C, 0x2012, 0x2002, 0x1804,
             0x200C, 0x400A, 0x3FF1, 0x0041, 0x0041, 0x0022, 0x001C, 0x0000],
        green=[0x0000, 0x00C0, 0x0D20, 0x1210, 0x210C, 0x2012, 0x2002, 0x1804,
               0x200C, 0x400A, 0x3FF1, 0x0041, 0x0041, 0x0022, 0x001C, 0x0000],
        blue=[0x0000, 0x00C0, 0x0D20, 0x1210, 0x210C, 0x2012, 0x2002, 0x1804,
              0x2008, 0x4008, 0x3FF0, 0x2A00, 0x5400, 0x2A00, 0x5400, 0x0000],
    ),
    ViewType.CONWAY: Frame(green=_pad((0x5A, 0x005A))),
    ViewType.ETCHSKETCH: Frame(
        red=[0x0000, 0x0000, 0x3FFC, 0x4002, 0x4002, 0x4002, 0x4002, 0x4002,
             0x4002, 0x4812, 0x542A, 0x4812, 0x4002, 0x3FFC, 0x0000, 0x0000],
        green=[0x0000, 0x0000, 0x0000, 0x0000, 0x0000, 0x0000, 0x0000, 0x0000,
               0x0000, 0x0810, 0x1428, 0x0810, 0x0000, 0x0000, 0x0000, 0x0000],
        blue=[0x0000, 0x0000, 0x0000, 0x0000, 0x0000, 0x0000, 0x0000, 0x0000,
              0x0000, 0x0810, 0x1428, 0x0810, 0x0000, 0x0000, 0x0000, 0x0000],
    ),
}


class Menu:
    """Shows an image of the selected view; the top encoder cycles through views."""

    def __init__(self, change_brightness: Optional[Callable[[int], None]] = None) -> None:
        self._change_brightness = change_brightness
        self.current_view = ViewType.WEATHER

    def get_view(self) -> Frame:
        """Return the preview image of the currently selected view."""
        image = _IMAGES.get(self.current_view)
        return image.copy() if image is not None else Frame()

    def encoder_top(self, direction: int) -> None:
        """Select the previous view on direction 0, the next otherwise, skipping the menu."""
        selectable = NUM_MAIN_VIEWS - ViewType.WEATHER
        offset = self.current_view - ViewType.WEATHER
        offset = (offset + (-1 if direction == 0 else 1)) % selectable
        self.current_view = ViewType(ViewType.WEATHER + offset)

    def encoder_side(self, direction: int) -> None:
        """Dim on direction 0, brighten otherwise."""
        if self._change_brightness is not None:
            self._change_brightness(0 if direction == 0 else 1)

    def button(self, btn: int) -> None:
        """Buttons 1 to 3 have no action in the menu; button 1 is noted in the log."""
        if btn == 1:
            logger.info("Menu: btn2")