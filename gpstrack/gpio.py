"""GPIO controller for the six APB GPIO ports, driven through a register file."""

from __future__ import annotations

from enum import IntEnum

from .bits import RegisterFile

SYSTEM_CLOCK = 80_000_000

RCGCGPIO = 0x400FE608
PRGPIO = 0x400FEA08

GPIO_LOCK_KEY = 0x4C4F434B

PIN_0, PIN_1, PIN_2, PIN_3, PIN_4, PIN_5, PIN_6, PIN_7 = range(8)


class Port(IntEnum):
    PORTA = 0
    PORTB = 1
    PORTC = 2
    PORTD = 3
    PORTE = 4
    PORTF = 5


class Mode(IntEnum):
    INPUT = 0
    OUTPUT = 1


class Level(IntEnum):
    CLEAR = 0
    SET = 1


class Polarity(IntEnum):
    # Value 0 selects the pull-up register and 1 the pull-down register.
    PULL_DOWN = 0
    PULL_UP = 1
    FLOATING = 2


class LedColor(IntEnum):
    RED = 1
    BLUE = 2
    GREEN = 3


BASE_ADDRESSES = {
    Port.PORTA: 0x40004000,
    Port.PORTB: 0x40005000,
    Port.PORTC: 0x40006000,
    Port.PORTD: 0x40007000,
    Port.PORTE: 0x40024000,
    Port.PORTF: 0x40025000,
}

REGISTER_OFFSETS = {
    "DATA": 0x3FC,
    "DIR": 0x400,
    "AFSEL": 0x420,
    "ODR": 0x50C,
    "PUR": 0x510,
    "PDR": 0x514,
    "DEN": 0x51C,
    "LOCK": 0x520,
    "CR": 0x524,
    "AMSEL": 0x528,
    "PCTL": 0x52C,
}

_LED_PINS = {
    LedColor.RED: PIN_1,
    LedColor.BLUE: PIN_2,
    LedColor.GREEN: PIN_3,
}


def _port(port: int) -> Port:
    try:
        return Port(port)
    except ValueError:
        raise ValueError(f"unknown GPIO port: {port!r}") from None


def _pin(pin: int) -> int:
    if not 0 <= pin <= 7:
        raise ValueError(f"GPIO pin out of range 0..7: {pin!r}")
    return pin


def register_address(port: int, offset: int) -> int:
    """Return the absolute address of a register at ``offset`` within ``port``."""
    return BASE_ADDRESSES[_port(port)] + offset


class GpioController:
    """Configures and drives GPIO pins through a :class:`RegisterFile`."""

    def __init__(self, memory: RegisterFile | None = None) -> None:
        self.memory = memory if memory is not None else RegisterFile()

    def _address(self, port: int, name: str) -> int:
        try:
            offset = REGISTER_OFFSETS[name]
        except KeyError:
            raise ValueError(f"unknown GPIO register: {name!r}") from None
        return register_address(port, offset)

    def register(self, port: int, name: str) -> int:
        """Return the current value of register ``name`` of ``port``."""
        return self.memory.read(self._address(port, name))

    def init_port(self, port: int) -> None:
        """Enable the clock to ``port``, wait until it is ready and unlock it."""
        port = _port(port)
        self.memory.set_bit(RCGCGPIO, port)
        # The simulated peripheral becomes ready as soon as its clock is on.
        self.memory.set_bit(PRGPIO, port)
        if not self.memory.get_bit(PRGPIO, port):
            raise RuntimeError(f"{port.name} did not become ready")
        self.memory.write(self._address(port, "LOCK"), GPIO_LOCK_KEY)

    def digital_init(self, port: int, pin: int) -> None:
        """Make ``pin`` a plain digital pin: no analog or alternate function."""
        port, pin = _port(port), _pin(pin)
        self.memory.set_bit(self._address(port, "CR"), pin)
        self.memory.clear_bit(self._address(port, "AMSEL"), pin)
        self.memory.clear_bit(self._address(port, "AFSEL"), pin)
        pctl = self._address(port, "PCTL")
        self.memory.write(pctl, self.memory.read(pctl) & ~(0xF << (pin * 4)))
        self.memory.set_bit(self._address(port, "DEN"), pin)

    def pin_mode(self, port: int, pin: int, mode: int, polarity: int) -> None:
        """Set the direction of ``pin`` and, for inputs, its pull resistor."""
        port, pin = _port(port), _pin(pin)
        direction = self._address(port, "DIR")
        if mode:
            self.memory.set_bit(direction, pin)
            return
        self.memory.clear_bit(direction, pin)
        pull_up = self._address(port, "PUR")
        pull_down = self._address(port, "PDR")
        if polarity == 0:
            self.memory.set_bit(pull_up, pin)
        elif polarity == 1:
            self.memory.set_bit(pull_down, pin)
        else:
            self.memory.clear_bit(pull_up, pin)
            self.memory.clear_bit(pull_down, pin)

    def write_pin(self, port: int, pin: int, level: int) -> None:
        """Drive ``pin`` high when ``level`` is truthy, low otherwise."""
        port, pin = _port(port), _pin(pin)
        data = self._address(port, "DATA")
        if level:
            self.memory.set_bit(data, pin)
        else:
            self.memory.clear_bit(data, pin)

    def read_pin(self, port: int, pin: int) -> int:
        """Return the logic level (0 or 1) of ``pin``."""
        port, pin = _port(port), _pin(pin)
        return self.memory.get_bit(self._address(port, "DATA"), pin)

    def rgb_activate(self, color: int) -> None:
        """Light one colour of the active-low RGB LED on PORTF."""
        for pin in _LED_PINS.values():
            self.write_pin(Port.PORTF, pin, Level.SET)
        try:
            pin = _LED_PINS[LedColor(color)]
        except ValueError:
            return
        self.digital_init(Port.PORTF, pin)
        self.pin_mode(Port.PORTF, pin, Mode.OUTPUT, Polarity.FLOATING)
        self.write_pin(Port.PORTF, pin, Level.CLEAR)