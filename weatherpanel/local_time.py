"""Local clock helpers and the daily sleep/wake schedule of the display."""

from __future__ import annotations

import os
import time
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

TIMEZONE = "EST5EDT,M3.2.0,M11.1.0"
MINUTES_PER_DAY = 24 * 60

# Minutes after midnight.
SLEEP_TIMES = (1, 10 * 60)
WAKEUP_TIMES = (6 * 60, 17 * 60)


class Action(Enum):
    SLEEP = 0
    WAKEUP = 1
    INVALID = 2


@dataclass(frozen=True)
class SleepEvent:
    """The next scheduled action and how many minutes away it is."""

    action: Action
    delay_min: int


def _scan(best: SleepEvent, now_minutes: int, increment: int) -> SleepEvent:
    for sleep_at, wake_at in zip(SLEEP_TIMES, WAKEUP_TIMES):
        for event_minutes, action in ((sleep_at, Action.SLEEP), (wake_at, Action.WAKEUP)):
            event_minutes += increment
            if event_minutes > now_minutes and event_minutes - now_minutes < best.delay_min:
                best = SleepEvent(action, event_minutes - now_minutes)
    return best


def find_next_event(now_minutes: int) -> SleepEvent:
    """Return the first event strictly after ``now_minutes``, wrapping into tomorrow."""
    best = _scan(SleepEvent(Action.INVALID, MINUTES_PER_DAY), now_minutes, 0)
    if best.action is Action.INVALID:
        best = _scan(best, now_minutes, MINUTES_PER_DAY)
    return best


def _now(now: datetime | None) -> datetime:
    return datetime.now() if now is None else now


def next_sleep_event(now: datetime | None = None) -> SleepEvent:
    """Return the next sleep/wake event after the given (or current) local time."""
    moment = _now(now)
    return find_next_event(60 * moment.hour + moment.minute)


def current_time_str(now: datetime | None = None) -> str:
    """Return the local time as HH:MM:SS."""
    return _now(now).strftime("%H:%M:%S")


def day_of_week(now: datetime | None = None) -> int:
    """Return the day of the week, 0 for Sunday through 6 for Saturday."""
    return _now(now).isoweekday() % 7


def configure_timezone() -> None:
    """Switch the process to the display's local timezone."""
    os.environ["TZ"] = TIMEZONE
    if hasattr(time, "tzset"):
        time.tzset()