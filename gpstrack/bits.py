"""Bit manipulation helpers and a simulated 32-bit register file."""

from __future__ import annotations

WORD_MASK = 0xFFFFFFFF


def _word(value: int) -> int:
    return value & WORD_MASK


def set_bits(reg: int, val: int) -> int:
    """Return ``reg`` with every bit of the mask ``val`` set."""
    return _word(reg | val)


def set_bit(reg: int, bit: int) -> int:
    """Return ``reg`` with the single bit ``bit`` set."""
    return _word(reg | (1 << bit))


def get_bit(reg: int, bit: int) -> int:
    """Return the value (0 or 1) of ``bit`` in ``reg``."""
    return (reg >> bit) & 1


def get_reg(reg: int) -> int:
    """Return the least significant byte of ``reg``."""
    return reg & 0xFF


def clear_bits(reg: int, val: int) -> int:
    """Return ``reg`` masked with ``val``: only bits present in ``val`` survive."""
    return _word(reg & val)


def clear_bit(reg: int, bit: int) -> int:
    """Return ``reg`` with the single bit ``bit`` cleared."""
    return _word(reg & ~(1 << bit))


def check_reg(reg1: int, reg2: int) -> int:
    """Return the bits of ``reg2`` that are also set in ``reg1``."""
    return reg1 & reg2


class RegisterFile:
    """A sparse map of 32-bit memory-mapped registers, all reading 0 until written."""

    def __init__(self) -> None:
        self._cells: dict[int, int] = {}

    def read(self, address: int) -> int:
        """Return the value stored at ``address``."""
        return self._cells.get(address, 0)

    def write(self, address: int, value: int) -> None:
        """Store ``value``, truncated to 32 bits, at ``address``."""
        self._cells[address] = _word(value)

    def set_bit(self, address: int, bit: int) -> None:
        """Set ``bit`` of the register at ``address``."""
        self.write(address, set_bit(self.read(address), bit))

    def clear_bit(self, address: int, bit: int) -> None:
        """Clear ``bit`` of the register at ``address``."""
        self.write(address, clear_bit(self.read(address), bit))

    def get_bit(self, address: int, bit: int) -> int:
        """Return ``bit`` of the register at ``address``."""
        return get_bit(self.read(address), bit)