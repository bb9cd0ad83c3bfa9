import random
from datetime import datetime

from weatherpanel import app
from weatherpanel.app import Station, main, sleep_wake_message
from weatherpanel.local_time import Action, SleepEvent
from weatherpanel.menu import ViewType
from weatherpanel.view import ViewController


class FakeDriver:
    def __init__(self):
        self.frames = []
        self.toggles = []
        self.levels = []

    def update_ram(self, frame):
        self.frames.append(frame.copy())

    def set_brightness(self, level):
        self.levels.append(level)

    def toggle(self, on):
        self.toggles.append(on)


class FakeLink:
    def __init__(self):
        self.messages = []

    def send_debug(self, msg):
        self.messages.append(msg)


def make_controller(driver):
    return ViewController(driver, random.Random(1), lambda: 1)


def test_sleep_wake_message_sleep():
    assert sleep_wake_message(SleepEvent(Action.SLEEP, 5)) == "sleep: 5"


def test_sleep_wake_message_truncates_delay():
    assert sleep_wake_message(SleepEvent(Action.WAKEUP, 1439)) == "wakeup: 143"


def test_sleep_wake_message_invalid():
    assert sleep_wake_message(SleepEvent(Action.INVALID, 12)) == "goof: 12"


def test_run_once_draws_immediately_after_start():
    driver = FakeDriver()
    sleeps = []
    station = Station(make_controller(driver), None, sleeps.append)
    station.run_once()
    assert sleeps == []
    assert len(driver.frames) == 1
    assert station.controller.view_variables() == 0


def test_run_once_waits_full_period_without_events():
    driver = FakeDriver()
    sleeps = []
    controller = make_controller(driver)
    station = Station(controller, None, sleeps.append)
    station.run_once()
    station.run_once()
    assert len(sleeps) == controller.refresh_rate_ms // app.FREQUENCY_CHECK_VIEW_UPDATES_MS
    assert len(driver.frames) == 2


def test_run_once_processes_ui_event():
    driver = FakeDriver()
    controller = make_controller(driver)
    sleeps = []

    def sleeper(seconds):
        if not sleeps:
            controller.set_ui_event(0x01)
        sleeps.append(seconds)

    station = Station(controller, None, sleeper)
    station.run_once()
    station.run_once()
    assert controller.current_view is ViewType.MENU
    assert sleeps == [0.1, 0.1]
    assert len(driver.frames) == 2


def test_sleep_wake_once_turns_display_off():
    driver = FakeDriver()
    link = FakeLink()
    sleeps = []
    controller = make_controller(driver)
    station = Station(controller, link, sleeps.append)
    event = station.sleep_wake_once(datetime(2024, 1, 1, 0, 0))
    assert event == SleepEvent(Action.SLEEP, 1)
    assert sleeps == [60]
    assert link.messages == ["sleep: 1", "sleep"]
    assert driver.toggles == [0]
    assert controller.display_on is False


def test_sleep_wake_once_turns_display_on():
    driver = FakeDriver()
    link = FakeLink()
    sleeps = []
    controller = make_controller(driver)
    controller.set_display_state(0)
    station = Station(controller, link, sleeps.append)
    event = station.sleep_wake_once(datetime(2024, 1, 1, 5, 0))
    assert event.action is Action.WAKEUP
    assert sleeps == [event.delay_min * 60]
    assert link.messages == [sleep_wake_message(event), "wakeup"]
    assert driver.toggles == [0, 1]
    assert controller.display_on is True


def test_sleep_wake_once_without_link():
    driver = FakeDriver()
    sleeps = []
    station = Station(make_controller(driver), None, sleeps.append)
    event = station.sleep_wake_once(datetime(2024, 1, 1, 12, 0))
    assert event.action is Action.WAKEUP
    assert driver.toggles == []


def test_main_draws_requested_frames(capsys):
    assert main(["--no-mqtt", "--frames", "1"]) == 0
    lines = [line for line in capsys.readouterr().out.splitlines() if line]
    assert len(lines) == 16
    assert all(len(line) == 16 and set(line) <= set(".RGYBPCW") for line in lines)
    assert any("R" in line for line in lines)