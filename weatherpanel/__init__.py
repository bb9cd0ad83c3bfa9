"""Controller for a 16x16 RGB LED weather panel: views, sprites, driver messages and MQTT link."""

__version__ = "0.1.0"