"""Polling of the panel's four buttons and two rotary encoders."""

from __future__ import annotations

from collections.abc import Callable

from .menu import UiEvent

PRESSED = 1
NOT_PRESSED = 0

BTN_1 = 13
BTN_2 = 12
BTN_3 = 14
BTN_4 = 15
ENC_1_A = 2
ENC_1_B = 1
ENC_2_A = 3
ENC_2_B = 4

BTN_PINS = (BTN_1, BTN_2, BTN_3, BTN_4)
# Bit order of the packed encoder state: 2_B 2_A 1_B 1_A (LSB).
ENC_PINS = (ENC_1_A, ENC_1_B, ENC_2_A, ENC_2_B)

_DETENT = 3


class Ui:
    """Turns raw pin levels into button-press and encoder-step events."""

    def __init__(self, read_pin: Callable[[int], int], on_event: Callable[[int], None]) -> None:
        self._read_pin = read_pin
        self._on_event = on_event
        self.button_state = 0
        self.encoder_state = self._read_encoders()

    def _level(self, pin: int) -> int:
        return 1 if self._read_pin(pin) else 0

    def _read_encoders(self) -> int:
        return sum(self._level(pin) << bit for bit, pin in enumerate(ENC_PINS))

    def poll_buttons(self) -> None:
        """Report buttons that went from released to pressed since the last poll."""
        events = 0
        for bit, pin in enumerate(BTN_PINS):
            mask = 1 << bit
            was_pressed = bool(self.button_state & mask)
            now = self._level(pin)
            if not was_pressed:
                if now == PRESSED:
                    self.button_state |= mask
                    events |= mask
            elif now == NOT_PRESSED:
                self.button_state &= ~mask
        if events:
            self._on_event(events)

    def poll_encoders(self) -> None:
        """Report an encoder step when an encoder reaches its detent."""
        events = 0
        current = self._read_encoders()
        previous = self.encoder_state
        if current != previous:
            if current & 3 == _DETENT:
                if previous & 3 == 1:
                    events |= UiEvent.ENC1_CW
                elif previous & 3 == 2:
                    events |= UiEvent.ENC1_CCW
            if current >> 2 == _DETENT:
                if previous >> 2 == 1:
                    events |= UiEvent.ENC2_CW
                elif previous >> 2 == 2:
                    events |= UiEvent.ENC2_CCW
        self.encoder_state = current
        if events:
            self._on_event(int(events))