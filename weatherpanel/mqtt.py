"""MQTT link: receives weather updates and publishes boot and debug messages."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any, Optional, Union
from urllib.parse import urlsplit

import paho.mqtt.client as paho

from . import local_time
from .http_rest import parse_int_prefix

logger = logging.getLogger(__name__)

FW_VERSION_NUM = 1

MQTT_BROKER_URL = "mqtt://10.0.0.120"

# Topics this client subscribes to.
MQTT_TOPIC_DATA_UPDATE = "weather49085"
MQTT_TOPIC_FW_VERSION = "version_to_0"
# Published on boot so the server sends recent data.
MQTT_TOPIC_DATA_BOOTUP = "dev_bootup"
# Topics this client publishes to.
MQTT_TOPIC_SUB_NOTIFY = "subsribe_from_0"
MQTT_TOPIC_DATA_TO_SERVER = "data_from_0"
MQTT_TOPIC_DEBUG = "debug"

MAX_NUM_PAYLOAD_BYTES = 3

DEBUG_TIME_WIDTH = 8
DEBUG_MESSAGE_LEN = 32

_DEFAULT_PORTS = {"mqtt": 1883, "tcp": 1883, "mqtts": 8883, "ssl": 8883}

WeatherCallback = Callable[[int, Sequence[int]], None]


def two_digit_value(first: str, second: str) -> int:
    """Read two characters as a number, as a byte.

    The digits are parsed with C ``strtol`` base-0 rules, so a leading ``0``
    makes the pair octal.
    """
    return parse_int_prefix(first + second) & 0xFF


def _digit(char: str) -> int:
    return (ord(char) - ord("0")) & 0xFF


def parse_weather_message(data: str) -> tuple[int, list[int]]:
    """Split a weather message into its API number and byte payload.

    API 0 is ``0TT`` (current temperature). API 1 is ``1N`` followed by N
    groups of ``TTPPM``: max temperature, precipitation and moon phase.
    The payload of API 1 starts with N. Other APIs carry no payload.
    """
    if not data:
        raise ValueError("empty weather message")
    api = two_digit_value("0", data[0])
    if api == 0:
        if len(data) < 3:
            raise ValueError(f"current temperature message too short: {data!r}")
        return api, [two_digit_value(data[1], data[2])]
    if api == 1:
        if len(data) < 2:
            raise ValueError(f"forecast message too short: {data!r}")
        num_days = _digit(data[1])
        needed = 2 + 5 * num_days
        if len(data) < needed:
            raise ValueError(f"forecast of {num_days} days needs {needed} characters, got {len(data)}")
        payload = [num_days]
        for start in range(2, needed, 5):
            chunk = data[start:start + 5]
            payload.extend(
                (
                    two_digit_value(chunk[0], chunk[1]),
                    two_digit_value(chunk[2], chunk[3]),
                    _digit(chunk[4]),
                )
            )
        return api, payload
    return api, []


def format_debug_message(time_str: str, msg: str) -> str:
    """Prefix ``msg`` with an 8-character timestamp and a space, capped at 32 characters."""
    stamp = time_str[:DEBUG_TIME_WIDTH].ljust(DEBUG_TIME_WIDTH)
    room = DEBUG_MESSAGE_LEN - DEBUG_TIME_WIDTH - 1
    return f"{stamp} {msg[:room]}"


def _broker_address(url: str) -> tuple[str, int]:
    parts = urlsplit(url if "://" in url else f"mqtt://{url}")
    if not parts.hostname:
        raise ValueError(f"broker URL has no host: {url!r}")
    port = parts.port or _DEFAULT_PORTS.get(parts.scheme, 1883)
    return parts.hostname, port


def _new_client() -> Any:
    version = getattr(paho, "CallbackAPIVersion", None)
    if version is not None:
        return paho.Client(version.VERSION2)
    return paho.Client()


class MqttLink:
    """Connection to the broker that feeds weather messages to a callback."""

    def __init__(
        self,
        on_weather: WeatherCallback,
        broker: str = MQTT_BROKER_URL,
        client: Optional[Any] = None,
    ) -> None:
        self.on_weather = on_weather
        self.broker = broker
        self.client = client if client is not None else _new_client()
        self.previous_message = "0"
        self.time_str: Callable[[], str] = local_time.current_time_str

    def start(self) -> None:
        """Connect to the broker in the background and subscribe once connected."""
        host, port = _broker_address(self.broker)
        self.previous_message = "0"
        self.client.on_connect = self._on_connect
        self.client.on_message = self._on_message
        self.client.connect_async(host, port)
        self.client.loop_start()

    def publish(self, topic: str, msg: str) -> None:
        self.client.publish(topic, msg, qos=1, retain=False)

    def subscribe(self, topic: str) -> None:
        self.client.subscribe(topic, 0)
        logger.info("Subscribed to %s", topic)

    def bootup(self, device: str) -> None:
        """Ask the server for fresh weather data, announcing this device number."""
        self.publish(MQTT_TOPIC_DATA_BOOTUP, device)

    def send_debug(self, msg: str) -> None:
        """Publish ``msg`` on the debug topic with the local time in front."""
        self.publish(MQTT_TOPIC_DEBUG, format_debug_message(self.time_str(), msg))

    def handle_message(self, topic: Union[str, bytes], data: Union[str, bytes]) -> None:
        """Act on an incoming message; repeated weather messages are ignored."""
        if isinstance(topic, bytes):
            topic = topic.decode("utf-8", errors="replace")
        if isinstance(data, bytes):
            data = data.decode("utf-8", errors="replace")
        if topic == MQTT_TOPIC_DATA_UPDATE:
            if data != self.previous_message:
                api, payload = parse_weather_message(data)
                self.on_weather(api, payload)
                self.previous_message = data
        elif topic == MQTT_TOPIC_FW_VERSION:
            if data and two_digit_value("0", data[0]) != FW_VERSION_NUM:
                logger.info("Server reports firmware version %s", data[0])

    def _on_connect(self, client: Any, userdata: Any, flags: Any, *rest: Any) -> None:
        logger.info("MQTT connected")
        self.subscribe(MQTT_TOPIC_DATA_UPDATE)

    def _on_message(self, client: Any, userdata: Any, message: Any) -> None:
        logger.info("TOPIC=%s DATA=%r", message.topic, message.payload)
        try:
            self.handle_message(message.topic, message.payload)
        except ValueError as exc:
            logger.warning("Ignoring malformed message: %s", exc)