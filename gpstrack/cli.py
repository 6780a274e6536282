"""Command that reads GPRMC sentences and reports speed and nearest landmark."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from typing import Iterator, Sequence, TextIO

from .landmarks import FACULTY_LANDMARKS, Landmark, find_nearest_landmark, str_to_float
from .nmea import (
    get_latitude,
    get_longitude,
    get_speed,
    validate_gprmc_checksum,
    validate_gprmc_string,
)

ALERT_LANDMARK = "Library"
BANNER = "GPS System"


@dataclass(frozen=True)
class Report:
    sentence: str
    latitude: float
    longitude: float
    speed: str
    index: int
    landmark: Landmark
    distance: float

    @property
    def alert(self) -> bool:
        """True when the nearest landmark is the one that triggers the buzzer."""
        return self.landmark.name == ALERT_LANDMARK

    @property
    def lines(self) -> tuple[str, str]:
        """The two display lines: speed and landmark name."""
        return "Speed: " + self.speed, self.landmark.name


def read_sentences(stream: TextIO, max_len: int = 100) -> Iterator[str]:
    """Yield chunks of at most ``max_len - 1`` characters, each ending after a newline."""
    if max_len < 2:
        raise ValueError("max_len must be at least 2")
    while True:
        chunk = stream.readline(max_len - 1)
        if not chunk:
            return
        yield chunk


def process_sentence(
    sentence: str, landmarks: Sequence[Landmark] = FACULTY_LANDMARKS
) -> Report | None:
    """Return a report for a valid GPRMC sentence, or None if it is rejected."""
    if not validate_gprmc_string(sentence) or not validate_gprmc_checksum(sentence):
        return None
    latitude = str_to_float(get_latitude(sentence))
    longitude = str_to_float(get_longitude(sentence)) * -1.0
    index, distance = find_nearest_landmark(latitude, longitude, landmarks)
    return Report(
        sentence=sentence,
        latitude=latitude,
        longitude=longitude,
        speed=get_speed(sentence),
        index=index,
        landmark=landmarks[index],
        distance=distance,
    )


def _run(stream: TextIO, max_len: int, echo: bool) -> None:
    print(BANNER)
    for sentence in read_sentences(stream, max_len):
        report = process_sentence(sentence)
        if report is None:
            continue
        if echo:
            print(sentence.rstrip("\r\n"))
        speed_line, place_line = report.lines
        line = f"{speed_line} | {place_line}"
        if report.alert:
            line += " | ALERT"
        print(line)


def main(argv: Sequence[str] | None = None) -> int:
    """Read sentences from a file or standard input and print one report per fix."""
    parser = argparse.ArgumentParser(prog="gpstrack", description=__doc__)
    parser.add_argument("input", nargs="?", default="-", help="file of NMEA sentences, '-' for stdin")
    parser.add_argument("--max-len", type=int, default=100, help="line buffer size")
    parser.add_argument("--echo", action="store_true", help="print each accepted sentence")
    args = parser.parse_args(argv)
    if args.max_len < 2:
        parser.error("--max-len must be at least 2")
    if args.input == "-":
        _run(sys.stdin, args.max_len, args.echo)
    else:
        with open(args.input, encoding="latin-1", newline="") as stream:
            _run(stream, args.max_len, args.echo)
    return 0


if __name__ == "__main__":
    sys.exit(main())