# weatherpanel

`weatherpanel` is the controller logic for a 16x16 RGB LED panel driven by two
LED matrix driver chips. The panel shows one of several views, and the user
moves between them with four buttons and two rotary encoders:

- **Weather**: today's maximum and current temperature, the chance of rain
  and the moon phase. Two more pages show the forecast for tomorrow and for
  the day after, each with a letter for the day of the week.
- **Conway**: Conway's Game of Life. Surviving cells are red, cells that have
  just died are blue and new cells are green. The grid is reseeded at random
  once the living cells stop changing for three frames.
- **Etch-a-sketch**: move a cursor with the encoders and toggle red, green or
  blue pixels with the buttons.
- **Menu**: shows a picture of a view; pick one and switch to it.

Weather data arrives over MQTT. A daily schedule turns the display off at
00:01 and 10:00 and on again at 06:00 and 17:00 local time.

## Installation

```
pip install weatherpanel
```

To run the tests as well:

```
pip install "weatherpanel[test]"
pytest
```

## Running

```
weatherpanel
```

This starts the station. It connects to the MQTT broker, subscribes to the
weather topic, sets the process timezone to US Eastern time
(`EST5EDT,M3.2.0,M11.1.0`), publishes its boot-up message, starts the
sleep/wake schedule in a background thread and then redraws the current view
in a loop. Each redraw is printed to standard output as 16 lines of 16
characters, one per LED: `.` off, `R` red, `G` green, `B` blue, `Y` yellow,
`C` cyan, `P` purple, `W` white. Nothing is printed while the display is
switched off.

Options:

- `--broker URL`: MQTT broker URL (default `mqtt://10.0.0.120`).
- `--device N`: device number sent in the boot-up message (default `0`).
- `--no-mqtt`: run without the network link; no weather data and no
  sleep/wake schedule.
- `--frames N`: stop after N redraws instead of running forever.

## Controls

| Input          | Effect                                                            |
|----------------|-------------------------------------------------------------------|
| Button 1       | Switch between the menu and the view chosen in it                 |
| Buttons 2 to 4 | Conway: restart, faster, slower (200 ms steps, 400 to 3000 ms); etch-a-sketch: toggle red, green, blue at the cursor; no effect elsewhere |
| Top encoder    | Menu: choose a view; Weather: choose a forecast day; etch-a-sketch: move the cursor sideways; Conway: no effect |
| Side encoder   | Brightness in the menu, weather and Conway views; etch-a-sketch: move the cursor up and down |

Brightness runs from 0 to 15. Turning it down at the lowest level switches the
display off; turning it up again switches the display back on.

## Weather messages

Messages on the topic `weather49085` start with a digit that names their kind:

- `0TT`: the current temperature, as two characters.
- `1N` followed by N blocks of `TTPPM`: the forecast for N days. Each block
  holds the maximum temperature (two characters), the chance of rain in
  percent (two characters) and the moon phase (one digit: 1 almost full,
  2 full).

Two-character values are read like C's `strtol` with base 0, so a pair that
starts with `0` is read as octal. A message identical to the previous one is
ignored. A value of 200 means no data yet and is drawn as a diagonal line.

## Using the pieces

The modules can be used on their own:

- `weatherpanel.animation`: `Frame` (three 16-row bit planes) and `Scene`.
- `weatherpanel.sprite`: `add_sprite`, `add_double_digit` and friends draw
  digits and symbols into a `Frame`.
- `weatherpanel.led_driver`: `setup_message`, `single_command`, `ram_message`
  and `clear_message` build the bit streams the driver chips expect;
  `LedDriver` sends them through two writers such as `weatherpanel.spi.SpiDevice`.
- `weatherpanel.conway`, `weatherpanel.etchsketch`, `weatherpanel.menu` and
  `weatherpanel.weather` hold the views; `weatherpanel.view.ViewController`
  connects them and routes input events.
- `weatherpanel.ui.Ui` turns pin readings into button and encoder events.
- `weatherpanel.mqtt.MqttLink` handles the broker connection;
  `parse_weather_message` decodes weather messages.
- `weatherpanel.http_rest.fetch_temperature` fetches a number over HTTP.
- `weatherpanel.local_time.find_next_event` works out the next sleep or
  wake-up time.

## What it does not do

The package does not talk to real hardware. There is no GPIO or SPI access:
`SpiDevice` hands its bytes to a function you supply, `Ui` reads pins through
a function you supply, and the `weatherpanel` command only prints frames to
the terminal and never polls buttons or encoders. It does not set up a network
connection, synchronise the clock or install firmware updates; a firmware
version message is only logged. The command never calls `fetch_temperature`.