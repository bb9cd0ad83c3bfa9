"""Weather view: today's temperatures and a short forecast drawn with sprites."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

from . import local_time
from .animation import Frame
from .menu import ViewType
from .sprite import NULL_VALUE, Color, SpriteKind, add_sprite

FORECAST_DAYS = 3
FORECAST_PAYLOAD_LEN = 1 + 3 * FORECAST_DAYS


class WeatherPage(IntEnum):
    DAY0 = 0
    DAY1 = 1
    DAY2 = 2


@dataclass
class WeatherData:
    """Values for one day; 200 marks a value not yet received."""

    current_temp: int = 0
    max_temp: int = 0
    min_temp: int = 0
    precip: int = 0
    moon: int = 0
    sunset: int = 0


def _store(data: WeatherData, name: str, value: int) -> bool:
    if getattr(data, name) == value:
        return False
    setattr(data, name, value)
    return True


class Weather:
    """Holds received weather data and draws the page chosen with the top encoder."""

    def __init__(
        self,
        change_brightness: Optional[Callable[[int], None]] = None,
        request_update: Optional[Callable[[ViewType], None]] = None,
        day_of_week: Callable[[], int] = local_time.day_of_week,
    ) -> None:
        self._change_brightness = change_brightness
        self._request_update = request_update
        self._day_of_week = day_of_week
        self.page = WeatherPage.DAY0
        self.today = WeatherData(
            current_temp=NULL_VALUE, max_temp=NULL_VALUE, precip=NULL_VALUE, moon=NULL_VALUE
        )
        self.tomorrow = WeatherData()
        self.next_day = WeatherData()

    @property
    def days(self) -> tuple[WeatherData, WeatherData, WeatherData]:
        return self.today, self.tomorrow, self.next_day

    def update_values(self, api: int, payload: Sequence[int]) -> None:
        """Store a received message and ask for a redraw if anything changed.

        API 0 carries the current temperature; API 1 carries a day count followed
        by max temperature, precipitation and moon phase for three days.
        """
        changed = False
        if api == 0:
            if not payload:
                raise ValueError("current temperature message has no payload")
            changed = _store(self.today, "current_temp", payload[0])
            if self.today.current_temp > self.today.max_temp:
                self.today.max_temp = self.today.current_temp
                changed = True
        elif api == 1:
            if len(payload) < FORECAST_PAYLOAD_LEN:
                raise ValueError(
                    f"forecast payload needs {FORECAST_PAYLOAD_LEN} values, got {len(payload)}"
                )
            for offset, day in enumerate(self.days):
                start = 1 + 3 * offset
                values = payload[start:start + 3]
                for name, value in zip(("max_temp", "precip", "moon"), values):
                    changed |= _store(day, name, value)

        if changed and self._request_update is not None:
            self._request_update(ViewType.WEATHER)

    def get_view(self) -> Frame:
        """Draw the current page into a new frame."""
        frame = Frame()
        data = self.days[self.page]
        add_sprite(SpriteKind.MAX_TEMP, Color.RED, data.max_temp, frame)
        if self.page is WeatherPage.DAY0:
            add_sprite(SpriteKind.CURRENT_TEMP, Color.GREEN, data.current_temp, frame)
        else:
            today = self._day_of_week()
            if 0 <= today < 7:
                add_sprite(SpriteKind.LETTER, Color.GREEN, (today + self.page) % 7, frame)
        if data.precip > 0:
            add_sprite(SpriteKind.PRECIP, Color.BLUE, data.precip, frame)
        if data.moon > 0:
            add_sprite(SpriteKind.MOON, Color.WHITE, data.moon, frame)
        return frame

    def encoder_top(self, direction: int) -> None:
        """Show the previous forecast page on direction 0, the next otherwise."""
        step = -1 if direction == 0 else 1
        self.page = WeatherPage((self.page + step) % len(WeatherPage))

    def encoder_side(self, direction: int) -> None:
        """Dim on direction 0, brighten otherwise."""
        if self._change_brightness is not None:
            self._change_brightness(0 if direction == 0 else 1)

    def button(self, btn: int) -> None:
        """Buttons have no action on the weather view."""