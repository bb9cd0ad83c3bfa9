"""The station's main loop, sleep/wake schedule and command-line entry point."""

from __future__ import annotations

import argparse
import logging
import sys
import threading
import time
from collections.abc import Callable
from datetime import datetime
from typing import Optional, TextIO

from . import local_time
from .animation import Frame
from .local_time import Action, SleepEvent
from .mqtt import MQTT_BROKER_URL, MqttLink
from .view import CONFIG_UPDATED_BIT, UI_PENDING_BIT, ViewController

logger = logging.getLogger(__name__)

FREQUENCY_CHECK_VIEW_UPDATES_MS = 100
STARTUP_DELAY_S = 3.0

# Index: red bit | green bit << 1 | blue bit << 2.
_PIXELS = ".RGYBPCW"


def sleep_wake_message(event: SleepEvent) -> str:
    """Debug text announcing the next scheduled event; the delay keeps 3 digits."""
    delay = str(event.delay_min)[:3]
    if event.action is Action.SLEEP:
        return f"sleep: {delay}"
    if event.action is Action.WAKEUP:
        return f"wakeup: {delay}"
    return f"goof: {delay}"


class _ConsoleDriver:
    """Shows frames as text, one character per LED, while the display is on."""

    def __init__(self, stream: TextIO) -> None:
        self.stream = stream
        self.on = True
        self.brightness = 0

    def update_ram(self, frame: Frame) -> None:
        if not self.on:
            return
        for red, green, blue in zip(frame.red, frame.green, frame.blue):
            line = "".join(
                _PIXELS[((red >> col) & 1) | (((green >> col) & 1) << 1) | (((blue >> col) & 1) << 2)]
                for col in range(15, -1, -1)
            )
            print(line, file=self.stream)
        print(file=self.stream)
        self.stream.flush()

    def set_brightness(self, level: int) -> None:
        self.brightness = level

    def toggle(self, on: int) -> None:
        self.on = on == 1


class Station:
    """Runs the display loop and the sleep/wake schedule around a view controller."""

    def __init__(
        self,
        controller: ViewController,
        link: Optional[MqttLink] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.controller = controller
        self.link = link
        self.sleep = sleep

    def _debug(self, msg: str) -> None:
        if self.link is not None:
            self.link.send_debug(msg)

    def run_once(self) -> None:
        """Wait for a UI event or view change, at most one refresh period, then redraw."""
        max_count = self.controller.refresh_rate_ms // FREQUENCY_CHECK_VIEW_UPDATES_MS
        for _ in range(max_count):
            variables = self.controller.view_variables()
            if variables & UI_PENDING_BIT:
                self.controller.process_ui()
            if variables & CONFIG_UPDATED_BIT:
                break
            self.sleep(FREQUENCY_CHECK_VIEW_UPDATES_MS / 1000)
        self.controller.update_views()

    def run(self) -> None:
        """Run the display loop forever."""
        while True:
            self.run_once()

    def sleep_wake_once(self, now: Optional[datetime] = None) -> SleepEvent:
        """Wait for the next scheduled event, then turn the display off or on."""
        event = local_time.next_sleep_event(now)
        self._debug(sleep_wake_message(event))
        self.sleep(event.delay_min * 60)
        if event.action is Action.SLEEP:
            self._debug("sleep")
            self.controller.set_display_state(0)
        elif event.action is Action.WAKEUP:
            self._debug("wakeup")
            self.controller.set_display_state(1)
        return event


def _sleep_wake_loop(station: Station) -> None:
    while True:
        station.sleep_wake_once()


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="weatherpanel", description="Run the weather display.")
    parser.add_argument("--broker", default=MQTT_BROKER_URL, help="MQTT broker URL")
    parser.add_argument("--device", default="0", help="device number sent on boot")
    parser.add_argument("--no-mqtt", action="store_true", help="run without the network link")
    parser.add_argument("--frames", type=int, default=None, help="stop after this many redraws")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    logger.info("Starter up")

    controller = ViewController(_ConsoleDriver(sys.stdout))
    link: Optional[MqttLink] = None
    if not args.no_mqtt:
        link = MqttLink(controller.weather.update_values, args.broker)
        link.start()
        local_time.configure_timezone()
        time.sleep(STARTUP_DELAY_S)
        link.bootup(args.device)

    station = Station(controller, link)
    if link is not None:
        threading.Thread(target=_sleep_wake_loop, args=(station,), daemon=True).start()
        link.send_debug("Start up...")

    if args.frames is None:
        station.run()
    else:
        for _ in range(args.frames):
            station.run_once()
    return 0