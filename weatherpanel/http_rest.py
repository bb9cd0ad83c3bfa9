"""Fetching the current temperature from a REST endpoint."""

from __future__ import annotations

import logging
import re

import requests

logger = logging.getLogger(__name__)

MAX_HTTP_OUTPUT_BUFFER = 2048
DEFAULT_TIMEOUT = 10.0

_INT_PREFIX = re.compile(
    r"[ \t\n\v\f\r]*([+-]?)(?:0[xX]([0-9a-fA-F]+)|(0[0-7]*)|([1-9][0-9]*))"
)


def parse_int_prefix(text: str) -> int:
    """Parse a leading integer the way C's strtol with base 0 does.

    Accepts leading whitespace, a sign, and hex (0x), octal (leading 0) or
    decimal digits; returns 0 when no number starts the text.
    """
    match = _INT_PREFIX.match(text)
    if match is None:
        return 0
    sign, hex_digits, octal_digits, decimal_digits = match.groups()
    if hex_digits is not None:
        value = int(hex_digits, 16)
    elif octal_digits is not None:
        value = int(octal_digits, 8)
    else:
        value = int(decimal_digits)
    return -value if sign == "-" else value


def fetch_temperature(url: str, timeout: float = DEFAULT_TIMEOUT) -> int:
    """GET ``url`` and return the number its body starts with, as a byte (0-255).

    Redirects are not followed. Network failures raise ``requests.RequestException``.
    """
    response = requests.get(url, timeout=timeout, allow_redirects=False)
    logger.info(
        "HTTP GET Status = %d, content_length = %s",
        response.status_code,
        response.headers.get("Content-Length"),
    )
    body = response.text[:MAX_HTTP_OUTPUT_BUFFER]
    return parse_int_prefix(body) & 0xFF