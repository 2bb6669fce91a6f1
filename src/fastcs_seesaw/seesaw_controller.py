"""FastCS controller for Seesaw hardware.

Provides EPICS PVs for controlling and monitoring a Seesaw I2C co-processor
through the register protocol layer:
- Hardware identification (chip id, model, serial, build date, options)
- GPIO bank (GpioController)
- ADC sampling (AdcController)
"""

import logging

from fastcs.attributes import AttrR
from fastcs.controllers import Controller
from fastcs.datatypes import Bool, Int, String
from fastcs.methods import command

from .attr_named import AttrNamedBits
from .constants import DEFAULT_ADC_REF_VOLTAGE, DEFAULT_ADDRESS, SLOW_UPDATE
from .controllers.adc import AdcController
from .controllers.gpio import GpioController
from .device import SeesawDevice
from .register_io import SeesawRegisterIO, SeesawRegisterIORef
from .registers import OPTIONS_KEYS, Module, Status
from .transport import SeesawTransport

logger = logging.getLogger(__name__)

__all__ = ["SeesawController", "SeesawRegisterIO", "SeesawRegisterIORef"]


class SeesawController(Controller):
    """Top-level controller for one Seesaw chip.

    Attributes:
        connected: Connection status
        chip_id: Detected HW_ID value
        chip_name: Name of the resolved chip model
        serial: Product serial from the VERSION register
        build_date: Firmware build date (YYYY-MM-DD)
        options: Raw OPTIONS register
        options_str: Names of the modules flagged in the OPTIONS register
        status_msg: Human-readable status message

    Sub-controllers:
        gpio: GPIO bank controller
        adc: ADC controller
    """

    def __init__(
        self,
        port: str,
        address: int = DEFAULT_ADDRESS,
        adc_ref_voltage: float = DEFAULT_ADC_REF_VOLTAGE,
    ):
        """Initialize Seesaw controller.

        Args:
            port: I2C adapter (e.g., '/dev/i2c-1', '1') or 'sim://name'
            address: 7-bit I2C address of the chip
            adc_ref_voltage: ADC reference voltage in volts
        """
        self._port = port
        self._address = address
        self._adc_ref_voltage = adc_ref_voltage
        self._transport: SeesawTransport | None = None
        self._device: SeesawDevice | None = None

        # Create IO handler (will be set to actual protocol after connect)
        self._register_io = SeesawRegisterIO(None)

        super().__init__(ios=[self._register_io])

        # Connection status (no IO, updated manually)
        self.connected = AttrR(Bool())

        # Identification, filled in by detect_hardware()
        self.chip_id = AttrR(Int())
        self.chip_name = AttrR(String())
        self.serial = AttrR(Int())
        self.build_date = AttrR(String())

        # Firmware modules (STATUS/OPTIONS)
        self.options_str = AttrR(String())
        self.options = AttrNamedBits(
            Int(),
            io_ref=SeesawRegisterIORef(
                register=Module.STATUS,
                sub_register=Status.OPTIONS,
                update_period=SLOW_UPDATE,
            ),
            keys=OPTIONS_KEYS,
            str_attr=self.options_str,
        )

        # Status message (no IO)
        self.status_msg = AttrR(String())

        self.gpio = GpioController(self._register_io)
        self.adc = AdcController(self._register_io)

    @property
    def device(self) -> SeesawDevice | None:
        return self._device

    async def connect(self) -> None:
        """Connect to the I2C bus and identify the chip."""
        try:
            self._transport = SeesawTransport(self._port)
            await self._transport.connect()
            self._device = SeesawDevice(
                self._transport,
                address=self._address,
                adc_ref_voltage=self._adc_ref_voltage,
            )

            self.gpio.set_device(self._device)
            self.adc.set_device(self._device)
            await self._identify()

            # Polling starts only once the chip is identified
            self._register_io.set_protocol(self._device.protocol)
            await self.connected.update(True)

            logger.info(f"Connected to Seesaw at {self._address:#04x} on {self._port}")
            await self.status_msg.update(f"Connected to {self._port}")

        except Exception as e:
            logger.error(f"Failed to connect: {e}")
            await self._release()
            await self.status_msg.update(f"Connection failed: {e}")
            raise

    async def disconnect(self) -> None:
        """Disconnect from the I2C bus."""
        await self._release()
        logger.info("Disconnected from Seesaw")
        await self.status_msg.update("Disconnected")

    async def _release(self) -> None:
        """Stop polling, detach the device and close the transport."""
        self._register_io.set_protocol(None)
        self.gpio.set_device(None)
        self.adc.set_device(None)
        self._device = None

        if self._transport:
            await self._transport.disconnect()
            self._transport = None

        await self.connected.update(False)

    def _check_connected(self) -> SeesawDevice:
        """Return the device, raising RuntimeError if not connected."""
        if self._device is None:
            raise RuntimeError("Not connected to Seesaw hardware")
        return self._device

    async def _identify(self) -> None:
        device = self._check_connected()
        hardware = await device.detect_hardware()

        await self.chip_id.update(hardware.chip_id)
        await self.chip_name.update(device.model.name)  # type: ignore[union-attr]
        await self.serial.update(hardware.serial)
        await self.build_date.update(hardware.build_date_str)
        await self.options.update(device.options.value)
        await self.adc.update_pins()

    # Commands

    @command()
    async def detect(self) -> None:
        """Re-read the chip identification registers."""
        await self._identify()
        await self.status_msg.update(f"Detected {self.chip_name.get()}")

    @command()
    async def reset(self) -> None:
        """Software reset the chip (waits for it to reboot)."""
        device = self._check_connected()
        await device.reset()
        logger.info("Seesaw reset")
        await self.status_msg.update("Reset")
