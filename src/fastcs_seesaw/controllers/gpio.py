"""GPIO sub-controller.

Exposes the 32-bit GPIO bulk register, one attribute per pin, and commands
acting on the pin selected by the ``pin`` setpoint.
"""

import asyncio
import logging

from fastcs.attributes import AttrRW
from fastcs.datatypes import Enum
from fastcs.methods import command

from fastcs_seesaw.attr_bit import AttrBit
from fastcs_seesaw.constants import FAST_UPDATE
from fastcs_seesaw.controllers.sub_controller import SeesawSubcontroller
from fastcs_seesaw.device import PinMode
from fastcs_seesaw.register_io import SeesawRegisterIO
from fastcs_seesaw.registers import Gpio, Module

logger = logging.getLogger(__name__)


class GpioController(SeesawSubcontroller):
    """Controller for the Seesaw GPIO bank.

    Attributes:
        bulk: Raw state of all pins (bit N = pin N)
        pin0..pin31: State of each pin, extracted from the bulk register
        pin: Pin number that the commands act on
        mode: Pin mode applied by the apply_mode command
    """

    count = 32  # Number of pins in the bulk register

    def __init__(self, register_io: SeesawRegisterIO):
        """Initialize GPIO controller.

        Args:
            register_io: Shared register IO handler
        """
        super().__init__(register_io)

        self.bulk = self.make_register(
            Module.GPIO, Gpio.BULK, update_period=FAST_UPDATE
        )

        # Pins are fed from the one bulk poll, never polled themselves
        for i in range(self.count):
            setattr(self, f"pin{i}", AttrBit(i, group="Pins"))
        self.bulk.add_on_update_callback(self._update_pins)

        self.pin = self.make_setpoint()
        self.mode = AttrRW(Enum(PinMode))

    async def _update_pins(self, value: int) -> None:
        await asyncio.gather(
            *(getattr(self, f"pin{i}").update(value) for i in range(self.count))
        )

    def _selected_pin(self) -> int:
        return int(self.pin.get())

    async def _refresh(self) -> None:
        device = self._check_connected()
        status = await device.read_gpio_bulk()
        await self.bulk.update(status.value)

    @command()
    async def set_high(self) -> None:
        """Drive the selected pin high."""
        device = self._check_connected()
        await device.digital_write(self._selected_pin(), True)
        await self._refresh()

    @command()
    async def set_low(self) -> None:
        """Drive the selected pin low."""
        device = self._check_connected()
        await device.digital_write(self._selected_pin(), False)
        await self._refresh()

    @command()
    async def toggle(self) -> None:
        """Invert the selected pin."""
        device = self._check_connected()
        await device.toggle(self._selected_pin())
        await self._refresh()

    @command()
    async def apply_mode(self) -> None:
        """Configure the selected pin with the selected mode."""
        device = self._check_connected()
        mode = PinMode(self.mode.get())
        await device.pin_mode(self._selected_pin(), mode)
        logger.info(f"Pin {self._selected_pin()} set to {mode.name}")
