"""Seesaw register map.

Registers are addressed in two levels: a module base register selecting a
functional unit (GPIO, ADC, ...) and a sub-register selecting the
operation within it. Every frame on the wire starts with those two bytes.

Reference: https://github.com/adafruit/seesaw/blob/master/include/RegisterMap.h
"""

from enum import IntEnum

from .bitfield import NamedBitField


class Module(IntEnum):
    """Module base registers."""

    STATUS = 0x00
    GPIO = 0x01
    SERCOM0 = 0x02
    SERCOM1 = 0x03
    SERCOM2 = 0x04
    SERCOM3 = 0x05
    SERCOM4 = 0x06
    SERCOM5 = 0x07
    TIMER = 0x08
    ADC = 0x09
    DAC = 0x0A
    INTERRUPT = 0x0B
    DAP = 0x0C
    EEPROM = 0x0D
    NEOPIXEL = 0x0E
    TOUCH = 0x0F
    KEYPAD = 0x10
    ENCODER = 0x11


class Status(IntEnum):
    """STATUS module sub-registers."""

    HW_ID = 0x01
    VERSION = 0x02
    OPTIONS = 0x03
    SWRST = 0x7F


class Gpio(IntEnum):
    """GPIO module sub-registers.

    All of them take or return a 4-byte bulk value, one bit per pin.
    INTENSET/INTENCLR/INTFLAG are addressable but interrupts are not
    driven by this package.
    """

    DIRSET_BULK = 0x02
    DIRCLR_BULK = 0x03
    BULK = 0x04
    BULK_SET = 0x05
    BULK_CLR = 0x06
    BULK_TOGGLE = 0x07
    INTENSET = 0x08
    INTENCLR = 0x09
    INTFLAG = 0x0A
    PULLENSET = 0x0B
    PULLENCLR = 0x0C


class Adc(IntEnum):
    """ADC module sub-registers.

    Channel ``n`` is read at ``CHANNEL_OFFSET + n``.
    """

    STATUS = 0x00
    INTEN = 0x02
    INTENCLR = 0x03
    WINMODE = 0x04
    WINTHRESH = 0x05
    CHANNEL_OFFSET = 0x07


# Chip id reported by SAMD09 based boards
HW_ID_CODE = 0x55

# Byte written to STATUS/SWRST to trigger a software reset
SWRST_SENTINEL = 0xFF

# Bit order of the STATUS/OPTIONS register, one bit per compiled-in module
OPTIONS_KEYS = tuple(module.name for module in Module)

create_options_field = NamedBitField.factory(OPTIONS_KEYS)


def is_valid_address(value: int) -> bool:
    """Return True if value fits in a single register address byte."""
    return 0 <= value <= 0xFF
