"""Parsing and validation of NMEA ``$GPRMC`` sentences."""

from __future__ import annotations

import math
import re
import struct

GPRMC_PREFIX = "$GPRMC,"
KNOTS_TO_MPS = 0.514444

_HEX_RE = re.compile(r"\s*([+-]?)(?:0[xX](?=[0-9a-fA-F]))?([0-9a-fA-F]*)")
_INT_RE = re.compile(r"\s*([+-]?\d+)")
_FLOAT_RE = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _f32(value: float) -> float:
    """Round ``value`` to single precision."""
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _c_string(sentence: str) -> str:
    return sentence.split("\0", 1)[0]


def _parse_hex(text: str) -> int:
    match = _HEX_RE.match(text)
    digits = match.group(2)
    if not digits:
        return 0
    value = int(digits, 16)
    return -value if match.group(1) == "-" else value


def _atol(text: str) -> int:
    match = _INT_RE.match(text)
    return int(match.group(1)) if match else 0


def _atof(text: str) -> float:
    match = _FLOAT_RE.match(text)
    return float(match.group(1)) if match else 0.0


def _trunc_divmod(a: int, b: int) -> tuple[int, int]:
    quotient = abs(a) // b
    if a < 0:
        quotient = -quotient
    return quotient, a - quotient * b


def _skip_fields(sentence: str, count: int) -> int:
    index = 0
    for _ in range(count):
        found = sentence.find(",", index)
        if found < 0:
            return len(sentence)
        index = found + 1
    return index


def _field(sentence: str, skip: int, limit: int) -> tuple[str, int]:
    start = _skip_fields(sentence, skip)
    end = sentence.find(",", start)
    if end < 0:
        end = len(sentence)
    end = min(end, start + limit)
    return sentence[start:end], end


def _indicator(sentence: str, end: int, default: str) -> str:
    if end < len(sentence) and sentence[end] == ",":
        return sentence[end + 1] if end + 1 < len(sentence) else ""
    return default


def validate_gprmc_string(sentence: str | None) -> bool:
    """Return True if ``sentence`` starts with ``$GPRMC,``."""
    if sentence is None:
        return False
    return _c_string(sentence).startswith(GPRMC_PREFIX)


def validate_gprmc_checksum(sentence: str | None) -> bool:
    """Return True if the XOR of the characters between ``$`` and ``*`` matches the hex checksum."""
    if sentence is None:
        return False
    sentence = _c_string(sentence)
    star = sentence.find("*")
    if star < 0 or len(sentence) - star < 3:
        return False
    calculated = 0
    for char in sentence[1:star]:
        calculated ^= ord(char)
    return _parse_hex(sentence[star + 1:]) == calculated


def is_gprmc_data_valid(sentence: str | None) -> bool:
    """Return True if the status field holds ``A`` (active)."""
    if sentence is None:
        return False
    sentence = _c_string(sentence)
    index = _skip_fields(sentence, 2)
    return sentence[index:index + 1] == "A"


def get_time(sentence: str) -> str:
    """Return the UTC time field formatted as ``HH:MM:SS``."""
    raw, _ = _field(_c_string(sentence), 1, 10)
    if not raw:
        return "00:00:00"
    value = _atol(raw)
    hours, rest = _trunc_divmod(value, 10000)
    minutes, _ = _trunc_divmod(rest, 100)
    _, seconds = _trunc_divmod(value, 100)
    return "%02d:%02d:%02d" % (hours, minutes, seconds)


def get_latitude(sentence: str) -> str:
    """Return the latitude in signed decimal degrees, formatted with 8 decimals."""
    sentence = _c_string(sentence)
    raw_text, end = _field(sentence, 3, 15)
    indicator = _indicator(sentence, end, "N")
    raw = _f32(_atof(raw_text))
    degrees = int(_f32(raw / 100))
    minutes = _f32(raw - degrees * 100)
    decimal = _f32(degrees + minutes / 60.0)
    if indicator == "S":
        decimal = -decimal
    return "%.8f" % decimal


def get_longitude(sentence: str) -> str:
    """Return the longitude in signed decimal degrees, formatted with 8 decimals."""
    sentence = _c_string(sentence)
    raw_text, end = _field(sentence, 5, 15)
    indicator = _indicator(sentence, end, "E")
    raw = _f32(_atof(raw_text))
    degrees = int(_f32(raw / 100))
    minutes = _f32(raw - degrees * 100)
    decimal = _f32(degrees + _f32(minutes / 60.0))
    if indicator == "W":
        decimal = -decimal
    return "%.8f" % decimal


def get_speed(sentence: str) -> str:
    """Return the ground speed converted from knots to m/s, formatted with 2 decimals."""
    raw_text, _ = _field(_c_string(sentence), 7, 9)
    speed = _f32(_atof(raw_text) * _f32(KNOTS_TO_MPS))
    return "%.2f" % speed