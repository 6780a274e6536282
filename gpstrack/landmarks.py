"""Landmarks, great-circle distances and nearest-landmark search."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

RADIUS_KM = 6371.0
PI = 3.14159265359


@dataclass(frozen=True)
class Landmark:
    name: str
    latitude: float
    longitude: float
    trigger_distance: float = 50.0


FACULTY_LANDMARKS: tuple[Landmark, ...] = (
    Landmark("Hall A", 30.06445885, -31.28033829, 50.0),
    Landmark("Luban Workshop", 30.06307030, -31.27904892, 50.0),
    Landmark("Civil", 30.06437302, -31.27773094, 50.0),
    Landmark("Fountain", 30.06564522, -31.27839088, 50.0),
    Landmark("Library", 30.06504440, -31.27994537, 50.0),
    Landmark("zeroerror", 0.0, 0.0, 0.0),
    Landmark("zeroerror", 0.0, 0.0, 0.0),
)


def to_radians(degrees: float) -> float:
    """Convert degrees to radians."""
    return degrees * (PI / 180.0)


def calc_distance(lon1: float, lat1: float, lon2: float, lat2: float) -> float:
    """Return the haversine distance in metres between two points."""
    dlat = to_radians(abs(lat2 - lat1))
    dlon = to_radians(abs(lon2 - lon1))
    a = (
        math.sin(dlat / 2) ** 2
        + math.cos(to_radians(lat1)) * math.cos(to_radians(lat2)) * math.sin(dlon / 2) ** 2
    )
    a = min(max(a, 0.0), 1.0)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return RADIUS_KM * c * 1000.0


def str_to_float(text: str) -> float:
    """Parse a leading decimal number; parsing stops at the first unexpected character."""
    text = text.lstrip()
    sign = 1.0
    if text[:1] == "-":
        sign = -1.0
        text = text[1:]
    elif text[:1] == "+":
        text = text[1:]
    result = 0.0
    factor = 0.1
    decimal_found = False
    for char in text:
        if char == ".":
            if decimal_found:
                break
            decimal_found = True
        elif char in "0123456789":
            digit = ord(char) - ord("0")
            if decimal_found:
                result += digit * factor
                factor *= 0.1
            else:
                result = result * 10.0 + digit
        else:
            break
    return sign * result


def find_nearest_landmark(
    lat: float, lon: float, landmarks: Sequence[Landmark] = FACULTY_LANDMARKS
) -> tuple[int, float]:
    """Return the index of the closest landmark and its distance in metres.

    The first landmark wins on ties.
    """
    if not landmarks:
        raise ValueError("no landmarks to search")
    best_index = 0
    best_distance = math.inf
    for index, landmark in enumerate(landmarks):
        distance = calc_distance(lat, lon, landmark.latitude, landmark.longitude)
        if distance < best_distance:
            best_distance = distance
            best_index = index
    return best_index, best_distance