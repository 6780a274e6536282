# gpstrack

Tools for working with NMEA `$GPRMC` sentences from a GPS receiver:

- check a sentence's `$GPRMC,` prefix and its XOR checksum,
- pull out the time, latitude, longitude and speed,
- find the nearest named landmark by great-circle (haversine) distance,
- and model the GPIO and UART peripherals of a small microcontroller board
  on a plain in-memory register map.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Command line

`gpstrack` reads GPRMC sentences, one per line, from a file or from standard
input, and prints a report for each one it accepts.

```
gpstrack capture.nmea
gpstrack < capture.nmea
gpstrack --echo capture.nmea
```

- `input` — file of NMEA sentences; `-` or nothing reads standard input.
- `--max-len N` — line buffer size (default 100, at least 2). Each read takes
  at most `N - 1` characters, so a longer line is split into pieces.
- `--echo` — print each accepted sentence before its report.

The first line printed is `GPS System`. Each accepted sentence then gives one
line of the form

```
Speed: 11.52 | Library | ALERT
```

with the speed in m/s and the name of the nearest landmark; `| ALERT` is added
when that landmark is `Library`. Lines that do not start with `$GPRMC,` or
whose checksum does not match are skipped silently. The longitude of each fix
is negated before the search, to match the sign used in the built-in landmark
table.

## Library use

```python
from gpstrack.nmea import (
    validate_gprmc_string,
    validate_gprmc_checksum,
    is_gprmc_data_valid,
    get_time,
    get_latitude,
    get_longitude,
    get_speed,
)

sentence = "$GPRMC,123519,A,4807.038,N,01131.000,E,022.4,084.4,230394,003.1,W*6A"

if validate_gprmc_string(sentence) and validate_gprmc_checksum(sentence):
    print(is_gprmc_data_valid(sentence))  # True: status field is "A"
    print(get_time(sentence))             # "12:35:19"
    print(get_latitude(sentence))         # signed decimal degrees, 8 decimals
    print(get_longitude(sentence))
    print(get_speed(sentence))            # m/s, 2 decimals
```

All the `get_*` functions return text. Latitude and longitude are converted
from `ddmm.mmmm` to decimal degrees and made negative for `S` and `W`; the
speed is converted from knots to m/s.

`gpstrack.landmarks` holds:

- `Landmark` — a frozen dataclass with `name`, `latitude`, `longitude` and
  `trigger_distance`,
- `FACULTY_LANDMARKS` — the built-in table of landmarks,
- `calc_distance(lon1, lat1, lon2, lat2)` — haversine distance in metres,
- `to_radians(degrees)` and `str_to_float(text)`, a lenient parser that reads a
  leading decimal number and stops at the first unexpected character,
- `find_nearest_landmark(lat, lon, landmarks=FACULTY_LANDMARKS)` — returns a
  tuple `(index, distance_in_metres)` for the closest entry; the first one wins
  on ties, and an empty sequence raises `ValueError`.

`gpstrack.cli` puts this together: `read_sentences(stream, max_len=100)` yields
bounded chunks of a text stream, and `process_sentence(sentence, landmarks)`
returns a `Report` (with `speed`, `latitude`, `longitude`, `landmark`,
`distance`, the two display `lines` and the `alert` flag), or `None` for a
rejected sentence.

### Simulated peripherals

`gpstrack.bits` provides plain-integer bit helpers (`set_bit`, `clear_bit`,
`get_bit`, …) and `RegisterFile`, a sparse map of 32-bit registers that read 0
until written. `gpstrack.gpio.GpioController` and `gpstrack.uart.UartDevice`
configure that register file the way a board's drivers configure real
memory-mapped registers:

```python
from gpstrack.bits import RegisterFile
from gpstrack.gpio import GpioController, LedColor, Port
from gpstrack.uart import UartChannel, UartDevice

memory = RegisterFile()

gpio = GpioController(memory)
gpio.init_port(Port.PORTF)
gpio.rgb_activate(LedColor.RED)       # active-low LED: pin 1 of PORTF driven low
print(gpio.read_pin(Port.PORTF, 1))   # 0

uart = UartDevice(UartChannel.UART0, memory)
uart.init(9600)                        # IBRD/FBRD from baud_divisors(9600)
uart.send("hello world\n")
print(uart.transmitted())

uart.feed("$GPRMC,...\n")
print(uart.read_line(100))
```

`UartDevice.read_char` and `read_line` raise `EOFError` when nothing has been
fed into the receive FIFO.

## What it does not do

The package never touches real hardware or serial ports: the GPIO and UART
classes only change values in a `RegisterFile`, and received UART data is only
what you pass to `feed`. There is no character-display driver and no timed
delays; the command prints its two report lines to standard output instead of
showing them on a display, and it has no buzzer output beyond the `ALERT` marker.