import random

import pytest

from weatherpanel.conway import DEFAULT_REFRESH_MS
from weatherpanel.menu import DEFAULT_REFRESH_RATE_MS, UiEvent, ViewType
from weatherpanel.view import BRIGHTNESS_MAX, ViewController


class FakeDriver:
    def __init__(self):
        self.calls = []

    def update_ram(self, frame):
        self.calls.append(("update_ram", frame))

    def set_brightness(self, level):
        self.calls.append(("set_brightness", level))

    def toggle(self, on):
        self.calls.append(("toggle", on))


@pytest.fixture
def driver():
    return FakeDriver()


@pytest.fixture
def controller(driver):
    return ViewController(driver, random.Random(0), lambda: 1)


def test_initial_state_requests_redraw(controller):
    assert controller.view_variables() == 2
    assert controller.current_view is ViewType.WEATHER
    assert controller.refresh_rate_ms == DEFAULT_REFRESH_RATE_MS


def test_set_ui_event_marks_pending(controller):
    controller.set_ui_event(UiEvent.BTN2_PRESSED)
    assert controller.view_variables() & 0x1
    controller.process_ui()
    assert controller.view_variables() & 0x1 == 0
    assert controller.ui_event == 0


def test_button_one_toggles_menu(controller):
    controller.set_ui_event(UiEvent.BTN1_PRESSED)
    controller.process_ui()
    assert controller.current_view is ViewType.MENU
    assert controller.frame == controller.menu.get_view()
    controller.set_ui_event(UiEvent.BTN1_PRESSED)
    controller.process_ui()
    assert controller.current_view is ViewType.WEATHER


def test_menu_selects_conway(controller):
    controller.set_ui_event(UiEvent.BTN1_PRESSED)
    controller.process_ui()
    controller.set_ui_event(UiEvent.ENC1_CCW)
    controller.process_ui()
    assert controller.menu.current_view is ViewType.CONWAY
    controller.set_ui_event(UiEvent.BTN1_PRESSED)
    controller.process_ui()
    assert controller.current_view is ViewType.CONWAY
    assert controller.refresh_rate_ms == DEFAULT_REFRESH_MS


def test_etchsketch_button_draws_green(controller):
    controller.set_ui_event(UiEvent.BTN1_PRESSED)
    controller.process_ui()
    controller.set_ui_event(UiEvent.ENC1_CW)
    controller.process_ui()
    assert controller.menu.current_view is ViewType.ETCHSKETCH
    controller.set_ui_event(UiEvent.BTN1_PRESSED)
    controller.process_ui()
    controller.set_ui_event(UiEvent.BTN3_PRESSED)
    controller.process_ui()
    controller.update_views()
    assert controller.frame.green[0] & 1 == 1


def test_brightness_up_and_down(controller, driver):
    controller.change_brightness(1)
    assert driver.calls[-1] == ("set_brightness", 1)
    controller.change_brightness(0)
    assert driver.calls[-1] == ("set_brightness", 0)
    controller.change_brightness(0)
    assert driver.calls[-1] == ("toggle", 0)
    assert controller.display_on is False
    controller.change_brightness(1)
    assert driver.calls[-1] == ("toggle", 1)
    assert controller.display_on is True


def test_brightness_stops_at_max(controller, driver):
    for _ in range(BRIGHTNESS_MAX + 5):
        controller.change_brightness(1)
    assert controller.brightness == BRIGHTNESS_MAX
    levels = [arg for name, arg in driver.calls if name == "set_brightness"]
    assert levels == list(range(1, BRIGHTNESS_MAX + 1))


def test_side_encoder_in_weather_changes_brightness(controller, driver):
    assert controller.brightness == 0
    controller.set_ui_event(UiEvent.ENC2_CCW)
    controller.process_ui()
    assert controller.brightness == 1
    assert controller.display_on is True
    assert driver.calls == [("set_brightness", 1)]


def test_display_state_toggles_only_on_change(controller, driver):
    controller.set_display_state(0)
    assert controller.display_on is False
    controller.set_display_state(0)
    assert controller.display_on is False
    controller.set_display_state(1)
    assert controller.display_on is True
    controller.set_display_state(1)
    assert controller.display_on is True
    assert driver.calls == [("toggle", 0), ("toggle", 1)]


def test_update_views_sends_frame_and_clears_flag(controller, driver):
    controller.update_views()
    assert controller.view_variables() & 0x2 == 0
    assert driver.calls == [("update_ram", controller.weather.get_view())]


def test_request_update_only_for_current_view(controller):
    controller.update_views()
    controller.request_update(ViewType.CONWAY)
    assert controller.view_variables() & 0x2 == 0
    controller.request_update(ViewType.WEATHER)
    assert controller.view_variables() & 0x2


def test_weather_update_requests_redraw(controller):
    controller.update_views()
    controller.weather.update_values(0, [55])
    assert controller.view_variables() & 0x2
    assert controller.weather.today.current_temp == 55