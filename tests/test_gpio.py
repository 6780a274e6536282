import pytest

from gpstrack.bits import RegisterFile
from gpstrack.gpio import (
    GPIO_LOCK_KEY,
    PRGPIO,
    RCGCGPIO,
    GpioController,
    Level,
    LedColor,
    Mode,
    Polarity,
    Port,
    register_address,
)


@pytest.fixture
def controller():
    return GpioController(RegisterFile())


def test_register_address_uses_port_base():
    assert register_address(Port.PORTA, 0x400) == 0x40004000 + 0x400
    assert register_address(Port.PORTF, 0x3FC) == 0x40025000 + 0x3FC


def test_register_address_rejects_unknown_port():
    with pytest.raises(ValueError):
        register_address(6, 0x400)


@pytest.mark.parametrize("port", list(Port))
def test_init_port_enables_clock_and_unlocks(controller, port):
    controller.init_port(port)
    assert controller.memory.get_bit(RCGCGPIO, port) == 1
    assert controller.memory.get_bit(PRGPIO, port) == 1
    assert controller.register(port, "LOCK") == GPIO_LOCK_KEY


def test_init_port_keeps_other_clocks(controller):
    controller.init_port(Port.PORTA)
    controller.init_port(Port.PORTD)
    assert controller.memory.get_bit(RCGCGPIO, Port.PORTA) == 1
    assert controller.memory.get_bit(RCGCGPIO, Port.PORTD) == 1
    assert controller.memory.get_bit(RCGCGPIO, Port.PORTB) == 0


def test_digital_init_configures_pin(controller):
    memory = controller.memory
    memory.write(register_address(Port.PORTB, 0x528), 0xFF)
    memory.write(register_address(Port.PORTB, 0x420), 0xFF)
    memory.write(register_address(Port.PORTB, 0x52C), 0xFFFFFFFF)
    controller.digital_init(Port.PORTB, 3)
    assert (controller.register(Port.PORTB, "CR") >> 3) & 1 == 1
    assert (controller.register(Port.PORTB, "DEN") >> 3) & 1 == 1
    assert (controller.register(Port.PORTB, "AMSEL") >> 3) & 1 == 0
    assert (controller.register(Port.PORTB, "AFSEL") >> 3) & 1 == 0
    pctl = controller.register(Port.PORTB, "PCTL")
    assert (pctl >> 12) & 0xF == 0
    assert (pctl >> 8) & 0xF == 0xF
    assert (pctl >> 16) & 0xF == 0xF


def test_pin_mode_output_sets_direction(controller):
    controller.pin_mode(Port.PORTC, 5, Mode.OUTPUT, Polarity.FLOATING)
    assert (controller.register(Port.PORTC, "DIR") >> 5) & 1 == 1


def test_pin_mode_input_polarity_zero_sets_pull_up_register(controller):
    controller.pin_mode(Port.PORTE, 2, Mode.INPUT, 0)
    assert (controller.register(Port.PORTE, "PUR") >> 2) & 1 == 1
    assert (controller.register(Port.PORTE, "PDR") >> 2) & 1 == 0
    assert (controller.register(Port.PORTE, "DIR") >> 2) & 1 == 0


def test_pin_mode_input_polarity_one_sets_pull_down_register(controller):
    controller.pin_mode(Port.PORTE, 2, Mode.INPUT, 1)
    assert (controller.register(Port.PORTE, "PDR") >> 2) & 1 == 1
    assert (controller.register(Port.PORTE, "PUR") >> 2) & 1 == 0


def test_pin_mode_floating_clears_pulls(controller):
    controller.pin_mode(Port.PORTA, 4, Mode.INPUT, 0)
    controller.pin_mode(Port.PORTA, 4, Mode.INPUT, 1)
    controller.pin_mode(Port.PORTA, 4, Mode.INPUT, Polarity.FLOATING)
    assert (controller.register(Port.PORTA, "PUR") >> 4) & 1 == 0
    assert (controller.register(Port.PORTA, "PDR") >> 4) & 1 == 0


def test_pin_mode_input_clears_previous_output(controller):
    controller.pin_mode(Port.PORTD, 6, Mode.OUTPUT, Polarity.FLOATING)
    controller.pin_mode(Port.PORTD, 6, Mode.INPUT, Polarity.FLOATING)
    assert (controller.register(Port.PORTD, "DIR") >> 6) & 1 == 0


@pytest.mark.parametrize("port", list(Port))
@pytest.mark.parametrize("pin", range(8))
def test_write_read_round_trip(controller, port, pin):
    controller.write_pin(port, pin, Level.SET)
    assert controller.read_pin(port, pin) == 1
    controller.write_pin(port, pin, Level.CLEAR)
    assert controller.read_pin(port, pin) == 0


def test_write_pin_leaves_other_pins(controller):
    controller.write_pin(Port.PORTA, 2, Level.SET)
    controller.write_pin(Port.PORTA, 5, Level.SET)
    controller.write_pin(Port.PORTA, 2, Level.CLEAR)
    assert controller.read_pin(Port.PORTA, 5) == 1
    assert controller.read_pin(Port.PORTA, 2) == 0


def test_invalid_pin_rejected(controller):
    with pytest.raises(ValueError):
        controller.write_pin(Port.PORTA, 8, Level.SET)


def test_invalid_port_rejected(controller):
    with pytest.raises(ValueError):
        controller.read_pin(9, 0)


def test_unknown_register_name_rejected(controller):
    with pytest.raises(ValueError):
        controller.register(Port.PORTA, "NOPE")


@pytest.mark.parametrize(
    "color, lit, dark",
    [
        (LedColor.RED, 1, (2, 3)),
        (LedColor.BLUE, 2, (1, 3)),
        (LedColor.GREEN, 3, (1, 2)),
    ],
)
def test_rgb_activate_drives_one_pin_low(controller, color, lit, dark):
    controller.init_port(Port.PORTF)
    controller.rgb_activate(color)
    assert controller.read_pin(Port.PORTF, lit) == 0
    assert (controller.register(Port.PORTF, "DIR") >> lit) & 1 == 1
    assert (controller.register(Port.PORTF, "DEN") >> lit) & 1 == 1
    for pin in dark:
        assert controller.read_pin(Port.PORTF, pin) == 1


def test_rgb_switching_colors(controller):
    controller.init_port(Port.PORTF)
    controller.rgb_activate(LedColor.RED)
    controller.rgb_activate(LedColor.BLUE)
    assert controller.read_pin(Port.PORTF, 1) == 1
    assert controller.read_pin(Port.PORTF, 2) == 0


def test_rgb_unknown_color_turns_all_off(controller):
    controller.rgb_activate(LedColor.GREEN)
    controller.rgb_activate(0)
    assert [controller.read_pin(Port.PORTF, pin) for pin in (1, 2, 3)] == [1, 1, 1]