"""GPRMC parsing, landmark lookup, a report command and simulated GPIO/UART peripherals."""

__version__ = "0.1.0"
__all__ = ["bits", "gpio", "uart", "nmea", "landmarks", "cli"]