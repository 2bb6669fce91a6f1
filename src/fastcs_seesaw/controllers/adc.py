"""ADC sub-controller.

Samples the ADC pin selected by the ``pin`` setpoint on demand. The set of
valid pins depends on the detected chip model.
"""

from fastcs.attributes import AttrR
from fastcs.datatypes import Float, Int, String
from fastcs.methods import command

from fastcs_seesaw.controllers.sub_controller import SeesawSubcontroller
from fastcs_seesaw.register_io import SeesawRegisterIO


class AdcController(SeesawSubcontroller):
    """Controller for the Seesaw ADC.

    Attributes:
        pin: Pin number to sample
        raw: Last raw ADC reading (0-1023)
        voltage: Last reading converted with the reference voltage
        pins: ADC capable pins of the detected chip
    """

    def __init__(self, register_io: SeesawRegisterIO):
        """Initialize ADC controller.

        Args:
            register_io: Shared register IO handler
        """
        super().__init__(register_io)

        self.pin = self.make_setpoint()
        self.raw = AttrR(Int())
        self.voltage = AttrR(Float())
        self.pins = AttrR(String())

    async def update_pins(self) -> None:
        """Publish the ADC pins of the connected chip's model."""
        device = self._check_connected()
        model = device.model
        await self.pins.update(
            "" if model is None else " ".join(str(pin) for pin in model.adc_pins)
        )

    @command()
    async def sample(self) -> None:
        """Read the selected pin."""
        device = self._check_connected()
        raw = await device.analog_read(int(self.pin.get()))
        await self.raw.update(raw)
        await self.voltage.update(device.to_voltage(raw))
