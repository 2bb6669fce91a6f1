"""Seesaw chip simulator for testing without real hardware.

Emulates the byte-level I2C behaviour of a Seesaw chip: a write of at
least two bytes selects a (register, sub-register) pair and optionally
applies a payload; a following read returns the selected register's
value. Only the STATUS, GPIO and ADC modules are modelled; anything else
reads back as zeros.
"""

import logging

from .bitfield import BitField
from .hardware import encode_datecode
from .registers import (
    HW_ID_CODE,
    SWRST_SENTINEL,
    Adc,
    Gpio,
    Module,
    Status,
    create_options_field,
)

logger = logging.getLogger(__name__)

DEFAULT_SERIAL = 4991
DEFAULT_DATECODE = encode_datecode(23, 6, 14)
DEFAULT_MODULES = ("STATUS", "GPIO", "ADC", "TIMER", "NEOPIXEL", "EEPROM")


class SeesawSimulator:
    """Software model of a Seesaw chip.

    Attributes:
        chip_id: Value reported by STATUS/HW_ID
        serial: Value reported in the VERSION register
        datecode: Packed build date reported in the VERSION register
        options: Value of the STATUS/OPTIONS register
        direction: GPIO direction bits (1 = output)
        pull_enable: GPIO pull resistor enable bits
        gpio: GPIO pin state bits
        adc: ADC channel values by channel offset
        writes: Every frame written to the simulator, oldest first
    """

    def __init__(
        self,
        chip_id: int = HW_ID_CODE,
        serial: int = DEFAULT_SERIAL,
        datecode: int = DEFAULT_DATECODE,
        options: int | None = None,
    ):
        """Initialize simulator with power-on register values."""
        self.chip_id = chip_id
        self.serial = serial
        self.datecode = datecode
        if options is None:
            field = create_options_field()
            for name in DEFAULT_MODULES:
                field.set(name, 1)
            options = field.value
        self.options = options

        self.writes: list[bytes] = []
        self.adc: dict[int, int] = {}
        self.reset()

    def reset(self) -> None:
        """Return GPIO state and register selection to power-on defaults."""
        self.direction = 0
        self.pull_enable = 0
        self.gpio = 0
        self._selected: tuple[int, int] | None = None

    def set_adc(self, channel: int, value: int) -> None:
        """Set the value returned for an ADC channel offset."""
        self.adc[channel] = value

    async def process_write(self, data: bytes) -> None:
        """Handle a frame written to the chip.

        Args:
            data: Raw frame ``[register, sub_register, *payload]``
        """
        self.writes.append(bytes(data))

        if len(data) < 2:
            logger.warning(f"Simulator: Short frame {data.hex()}")
            return

        register, sub_register = data[0], data[1]
        payload = bytes(data[2:])
        self._selected = (register, sub_register)

        if not payload:
            logger.debug(f"Simulator: Select 0x{register:02X}/0x{sub_register:02X}")
            return

        if register == Module.STATUS and sub_register == Status.SWRST:
            if payload[0] == SWRST_SENTINEL:
                logger.info("Simulator: Software reset")
                self.reset()
            return

        if register == Module.GPIO:
            self._write_gpio(sub_register, BitField.from_bytes(payload[:4]).value)
            return

        logger.debug(
            f"Simulator: Ignored write 0x{register:02X}/0x{sub_register:02X} "
            f"{payload.hex()}"
        )

    def _write_gpio(self, sub_register: int, mask: int) -> None:
        if sub_register == Gpio.DIRSET_BULK:
            self.direction |= mask
        elif sub_register == Gpio.DIRCLR_BULK:
            self.direction &= ~mask
        elif sub_register == Gpio.BULK:
            self.gpio = mask
        elif sub_register == Gpio.BULK_SET:
            self.gpio |= mask
        elif sub_register == Gpio.BULK_CLR:
            self.gpio &= ~mask
        elif sub_register == Gpio.BULK_TOGGLE:
            self.gpio ^= mask
        elif sub_register == Gpio.PULLENSET:
            self.pull_enable |= mask
        elif sub_register == Gpio.PULLENCLR:
            self.pull_enable &= ~mask
        else:
            logger.debug(f"Simulator: Ignored GPIO write 0x{sub_register:02X}")
            return

        logger.debug(
            f"Simulator: GPIO dir={self.direction:08X} pull={self.pull_enable:08X} "
            f"state={self.gpio:08X}"
        )

    async def process_read(self, length: int) -> bytes:
        """Return ``length`` bytes of the currently selected register."""
        value = self._selected_value()
        logger.debug(f"Simulator: Read {value.hex()} (requested {length} bytes)")
        return value[:length].ljust(length, b"\x00")

    def _selected_value(self) -> bytes:
        if self._selected is None:
            return b""

        register, sub_register = self._selected

        if register == Module.STATUS:
            if sub_register == Status.HW_ID:
                return bytes([self.chip_id])
            if sub_register == Status.VERSION:
                return self.serial.to_bytes(
                    2, "big", signed=True
                ) + self.datecode.to_bytes(2, "big")
            if sub_register == Status.OPTIONS:
                return self.options.to_bytes(4, "big")

        if register == Module.GPIO and sub_register == Gpio.BULK:
            return (self.gpio & 0xFFFFFFFF).to_bytes(4, "big")

        if register == Module.ADC and sub_register >= Adc.CHANNEL_OFFSET:
            value = self.adc.get(sub_register - Adc.CHANNEL_OFFSET, 0)
            return value.to_bytes(2, "big", signed=True)

        return b""
