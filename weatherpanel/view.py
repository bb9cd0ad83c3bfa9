"""Switches between the panel's views and pushes the active one to the LEDs."""

from __future__ import annotations

from collections.abc import Callable
from typing import Optional, Protocol

from . import local_time
from .animation import Frame
from .conway import BitSource, Conway
from .etchsketch import Etchsketch
from .menu import DEFAULT_REFRESH_RATE_MS, Menu, UiEvent, ViewType
from .weather import Weather

BRIGHTNESS_MIN = 0
BRIGHTNESS_MAX = 15

UI_PENDING_BIT = 0x1
CONFIG_UPDATED_BIT = 0x2

_BUTTONS = (
    (UiEvent.BTN2_PRESSED, 1),
    (UiEvent.BTN3_PRESSED, 2),
    (UiEvent.BTN4_PRESSED, 3),
)


class Driver(Protocol):
    def update_ram(self, frame: Frame) -> None: ...

    def set_brightness(self, level: int) -> None: ...

    def toggle(self, on: int) -> None: ...


class _Handler(Protocol):
    def encoder_top(self, direction: int) -> None: ...

    def encoder_side(self, direction: int) -> None: ...

    def button(self, btn: int) -> None: ...


class ViewController:
    """Owns every view, routes user-interface events and tracks display state."""

    def __init__(
        self,
        driver: Driver,
        rng: Optional[BitSource] = None,
        day_of_week: Callable[[], int] = local_time.day_of_week,
    ) -> None:
        self.driver = driver
        self.current_view = ViewType.WEATHER
        self.refresh_rate_ms = DEFAULT_REFRESH_RATE_MS
        self.ui_event = 0
        self.display_on = True
        self.brightness = BRIGHTNESS_MIN
        self.config_updated = False
        self.ui_pending = False
        self.frame = Frame()

        self.menu = Menu(self.change_brightness)
        self.weather = Weather(self.change_brightness, self.request_update, day_of_week)
        self.conway = Conway(self.change_brightness, rng)
        self.etchsketch = Etchsketch()

        self._build()
        self.config_updated = True
        self.ui_pending = False

    @property
    def _handlers(self) -> dict[ViewType, _Handler]:
        return {
            ViewType.MENU: self.menu,
            ViewType.WEATHER: self.weather,
            ViewType.CONWAY: self.conway,
            ViewType.ETCHSKETCH: self.etchsketch,
        }

    def view_variables(self) -> int:
        """Bit 0: a UI event waits to be processed; bit 1: the view must be redrawn."""
        value = UI_PENDING_BIT if self.ui_pending else 0
        if self.config_updated:
            value |= CONFIG_UPDATED_BIT
        return value

    def request_update(self, view: ViewType) -> None:
        """Mark the display for redrawing if ``view`` is the one shown."""
        if view == self.current_view:
            self.config_updated = True

    def process_ui(self) -> None:
        """Apply the pending UI events to the current view and clear them."""
        event = self.ui_event
        if event & UiEvent.BTN1_PRESSED:
            if self.current_view is ViewType.MENU:
                self.current_view = self.menu.current_view
            else:
                self.current_view = ViewType.MENU
            self._build()

        handler = self._handlers.get(self.current_view)
        if handler is not None:
            for flag, btn in _BUTTONS:
                if event & flag:
                    handler.button(btn)
            if event & UiEvent.ENC1_CW:
                handler.encoder_top(0)
            elif event & UiEvent.ENC1_CCW:
                handler.encoder_top(1)
            if event & UiEvent.ENC2_CW:
                handler.encoder_side(0)
            elif event & UiEvent.ENC2_CCW:
                handler.encoder_side(1)

        self.config_updated = True
        self.ui_event = 0
        self.ui_pending = False

    def change_brightness(self, direction: int) -> None:
        """Dim on direction 0, brighten otherwise."""
        if direction == 0:
            self._decrease_brightness()
        else:
            self._increase_brightness()

    def update_views(self) -> None:
        """Redraw the current view and send it to the LED driver."""
        self._build()
        self.config_updated = False
        self.driver.update_ram(self.frame)

    def set_ui_event(self, event: int) -> None:
        """Record UI event bits to be handled by the next ``process_ui``."""
        self.ui_event |= event
        self.ui_pending = True

    def set_display_state(self, state: int) -> None:
        """Turn the display off with 0 or on with 1; nothing happens if already so."""
        if state == 0 and self.display_on:
            self.display_on = False
            self.driver.toggle(0)
        elif state == 1 and not self.display_on:
            self.display_on = True
            self.driver.toggle(1)

    def _build(self) -> None:
        view = self.current_view
        if view is ViewType.MENU:
            self.frame = self.menu.get_view()
        elif view is ViewType.WEATHER:
            self.refresh_rate_ms = DEFAULT_REFRESH_RATE_MS
            self.frame = self.weather.get_view()
        elif view is ViewType.CONWAY:
            frame = Frame()
            self.refresh_rate_ms = self.conway.get_frame(frame)
            self.frame = frame
        elif view is ViewType.ETCHSKETCH:
            self.refresh_rate_ms = DEFAULT_REFRESH_RATE_MS
            self.frame = self.etchsketch.get_view()
        else:
            self.frame = Frame()
        self.config_updated = True

    def _decrease_brightness(self) -> None:
        if self.brightness == BRIGHTNESS_MIN:
            self.display_on = False
            self.driver.toggle(0)
        else:
            self.brightness -= 1
            self.driver.set_brightness(self.brightness)

    def _increase_brightness(self) -> None:
        if not self.display_on:
            self.display_on = True
            self.driver.toggle(1)
        elif self.brightness < BRIGHTNESS_MAX:
            self.brightness += 1
            self.driver.set_brightness(self.brightness)