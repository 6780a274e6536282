"""UART peripherals simulated on top of a register file."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from enum import IntEnum

from .bits import RegisterFile
from .gpio import GpioController, Port, register_address

SYSCTL_RCGCUART = 0x400FE618
UART_CLK = 16_000_000
DEFAULT_BAUD = 9600

UART_CTL_UARTEN = 0x00000001
UART_CTL_TXE = 0x00000100
UART_CTL_RXE = 0x00000200

UART_FR_CTS = 0x00000001
UART_FR_BUSY = 0x00000008
UART_FR_RXFE = 0x00000010
UART_FR_TXFF = 0x00000020
UART_FR_RXFF = 0x00000040
UART_FR_TXFE = 0x00000080

UART_LCRH_BRK = 0x00000001
UART_LCRH_PEN = 0x00000002
UART_LCRH_EPS = 0x00000004
UART_LCRH_STP2 = 0x00000008
UART_LCRH_FEN = 0x00000010
UART_LCRH_WLEN_8 = 0x00000060
UART_LCRH_SPS = 0x00000080

UART_IBRD_MASK = 0x0000FFFF
UART_FBRD_MASK = 0x0000003F
UART_DATA_MASK = 0x000000FF


class UartChannel(IntEnum):
    UART0 = 0
    UART1 = 1
    UART2 = 2
    UART3 = 3
    UART4 = 4
    UART5 = 5
    UART6 = 6
    UART7 = 7


_UART_BASE = 0x4000C000
_UART_STRIDE = 0x1000

UART_REGISTER_OFFSETS = {
    "DR": 0x000,
    "RSR": 0x004,
    "ECR": 0x004,
    "FR": 0x018,
    "ILPR": 0x020,
    "IBRD": 0x024,
    "FBRD": 0x028,
    "LCRH": 0x02C,
    "CTL": 0x030,
    "IFLS": 0x034,
    "IM": 0x038,
    "RIS": 0x03C,
    "MIS": 0x040,
    "ICR": 0x044,
    "DMACTL": 0x048,
    "9BITADDR": 0x0A4,
    "9BITAMASK": 0x0A8,
    "PP": 0xFC0,
    "CC": 0xFC8,
}


@dataclass(frozen=True)
class _PinMap:
    port: Port
    rx: int
    tx: int

    @property
    def mask(self) -> int:
        return (1 << self.rx) | (1 << self.tx)


_PIN_MAPS = {
    UartChannel.UART0: _PinMap(Port.PORTA, 0, 1),
    UartChannel.UART1: _PinMap(Port.PORTB, 0, 1),
    UartChannel.UART2: _PinMap(Port.PORTD, 6, 7),
    UartChannel.UART3: _PinMap(Port.PORTC, 6, 7),
    UartChannel.UART4: _PinMap(Port.PORTC, 4, 5),
    UartChannel.UART5: _PinMap(Port.PORTE, 4, 5),
    UartChannel.UART6: _PinMap(Port.PORTD, 4, 5),
    UartChannel.UART7: _PinMap(Port.PORTE, 0, 1),
}


def _channel(channel: int) -> UartChannel:
    try:
        return UartChannel(channel)
    except ValueError:
        raise ValueError(f"unknown UART channel: {channel!r}") from None


def baud_divisors(baud: int, clock: int = UART_CLK) -> tuple[int, int]:
    """Return the integer and fractional baud-rate divisors (IBRD, FBRD)."""
    if baud <= 0 or clock <= 0:
        raise ValueError("baud rate and clock must be positive")
    divisor = 16 * baud
    ibrd, remainder = divmod(clock, divisor)
    # fractional part * 64, rounded to nearest
    fbrd = (remainder * 128 + divisor) // (2 * divisor)
    if fbrd > UART_FBRD_MASK:
        ibrd += 1
        fbrd = 0
    if not 1 <= ibrd <= UART_IBRD_MASK:
        raise ValueError(f"baud rate {baud} is not reachable from a {clock} Hz clock")
    return ibrd, fbrd


def uart_register_address(channel: int, name: str) -> int:
    """Return the absolute address of register ``name`` of a UART channel."""
    channel = _channel(channel)
    try:
        offset = UART_REGISTER_OFFSETS[name]
    except KeyError:
        raise ValueError(f"unknown UART register: {name!r}") from None
    return _UART_BASE + _UART_STRIDE * channel + offset


class UartDevice:
    """One UART channel: configuration, a transmit log and a receive FIFO."""

    def __init__(self, channel: int, memory: RegisterFile | None = None) -> None:
        self.channel = _channel(channel)
        self.memory = memory if memory is not None else RegisterFile()
        self._tx: list[str] = []
        self._rx: deque[int] = deque()
        self._sync_flags()

    def _address(self, name: str) -> int:
        return uart_register_address(self.channel, name)

    def _sync_flags(self) -> None:
        flags = UART_FR_TXFE
        if not self._rx:
            flags |= UART_FR_RXFE
        self.memory.write(self._address("FR"), flags)

    def init(self, baud: int = DEFAULT_BAUD) -> None:
        """Route the channel's pins to the UART and enable it at ``baud``, 8N1 with FIFOs."""
        ibrd, fbrd = baud_divisors(baud)
        pins = _PIN_MAPS[self.channel]
        memory = self.memory

        memory.set_bit(SYSCTL_RCGCUART, self.channel)
        GpioController(memory).init_port(pins.port)

        def gpio(name: str, offset: int) -> int:
            return register_address(pins.port, offset)

        cr = gpio("CR", 0x524)
        afsel = gpio("AFSEL", 0x420)
        pctl = gpio("PCTL", 0x52C)
        den = gpio("DEN", 0x51C)
        amsel = gpio("AMSEL", 0x528)

        memory.write(cr, memory.read(cr) | pins.mask)
        memory.write(afsel, memory.read(afsel) | pins.mask)
        pctl_value = memory.read(pctl)
        for pin in (pins.rx, pins.tx):
            pctl_value = (pctl_value & ~(0xF << (pin * 4))) | (0x1 << (pin * 4))
        memory.write(pctl, pctl_value)
        memory.write(den, memory.read(den) | pins.mask)
        memory.write(amsel, memory.read(amsel) & ~pins.mask)

        ctl = self._address("CTL")
        memory.write(ctl, memory.read(ctl) & ~UART_CTL_UARTEN)
        memory.write(self._address("CC"), 0)
        memory.write(self._address("IBRD"), ibrd)
        memory.write(self._address("FBRD"), fbrd)
        memory.write(self._address("LCRH"), UART_LCRH_WLEN_8 | UART_LCRH_FEN)
        memory.write(ctl, memory.read(ctl) | UART_CTL_UARTEN | UART_CTL_RXE | UART_CTL_TXE)
        self._sync_flags()

    def send(self, text: str | bytes) -> None:
        """Transmit every character of ``text``."""
        data = text.encode("latin-1") if isinstance(text, str) else bytes(text)
        dr = self._address("DR")
        for byte in data:
            self.memory.write(dr, byte)
            self._tx.append(chr(byte))
        self._sync_flags()

    def transmitted(self) -> str:
        """Return everything sent so far."""
        return "".join(self._tx)

    def feed(self, data: str | bytes) -> None:
        """Place ``data`` in the receive FIFO, as if it arrived on the RX line."""
        raw = data.encode("latin-1") if isinstance(data, str) else bytes(data)
        self._rx.extend(raw)
        self._sync_flags()

    def read_char(self) -> str:
        """Take one character from the receive FIFO; raise EOFError when it is empty."""
        if not self._rx:
            raise EOFError(f"{self.channel.name} receive FIFO is empty")
        dr = self._address("DR")
        self.memory.write(dr, self._rx.popleft())
        self._sync_flags()
        return chr(self.memory.read(dr) & UART_DATA_MASK)

    def read_line(self, max_len: int = 100) -> str:
        """Read up to ``max_len - 1`` characters, stopping after a newline.

        The newline is kept. Raises EOFError if no character is available at all.
        """
        if max_len <= 0:
            return ""
        chars: list[str] = []
        while len(chars) < max_len - 1:
            if not self._rx and chars:
                break
            char = self.read_char()
            chars.append(char)
            if char == "\n":
                break
        return "".join(chars)