"""High level Seesaw device driver.

SeesawDevice turns pin-level operations (pin modes, digital writes, ADC
reads, hardware identification) into register transactions issued
through SeesawProtocol.

Chip specific operations need a resolved chip model, obtained either from
``detect_hardware()`` or from the ``model`` constructor argument. Until
then they raise CapabilityError.

The device performs no locking of its own beyond the per-transaction
serialization in SeesawProtocol. Read-modify-write operations such as
``toggle`` are not atomic; callers sharing one device must serialize
their use of it.

Example usage::

    async with SeesawTransport("/dev/i2c-1") as transport:
        seesaw = SeesawDevice(transport, address=0x49)
        await seesaw.detect_hardware()
        await seesaw.pin_mode(5, PinMode.OUTPUT)
        await seesaw.digital_write(5, True)
        volts = await seesaw.analog_read_voltage(2)
"""

import asyncio
import enum
import logging
from dataclasses import dataclass

from .bitfield import BitField, NamedBitField
from .constants import (
    ADC_FULL_SCALE,
    DEFAULT_ADC_REF_VOLTAGE,
    DEFAULT_ADDRESS,
    DIGITAL_WRITE_DELAY,
    READ_DELAY,
    RESET_DELAY,
)
from .errors import CapabilityError
from .hardware import HardwareInfo, decode_datecode
from .models import DEFAULT_REGISTRY, ChipCapabilities, ModelRegistry
from .protocol import SeesawProtocol, Sleep
from .registers import (
    SWRST_SENTINEL,
    Adc,
    Gpio,
    Module,
    Status,
    create_options_field,
)
from .transport import SeesawTransport

logger = logging.getLogger(__name__)


class PinMode(enum.IntEnum):
    """GPIO pin configuration."""

    OUTPUT = 0
    INPUT = 1
    INPUT_PULLUP = 2
    INPUT_PULLDOWN = 3


# Register writes issued for each pin mode, in order. Direction is always
# configured before pull enable, and the pull polarity is seeded through
# the bulk register only after pull enable is asserted.
PIN_MODE_SEQUENCES: dict[PinMode, tuple[Gpio, ...]] = {
    PinMode.OUTPUT: (Gpio.DIRSET_BULK,),
    PinMode.INPUT: (Gpio.DIRCLR_BULK, Gpio.PULLENCLR),
    PinMode.INPUT_PULLUP: (Gpio.DIRCLR_BULK, Gpio.PULLENSET, Gpio.BULK_SET),
    PinMode.INPUT_PULLDOWN: (Gpio.DIRCLR_BULK, Gpio.PULLENSET, Gpio.BULK_CLR),
}


@dataclass(frozen=True)
class SeesawTiming:
    """Settle delays in seconds.

    These are empirically observed minimums rather than protocol
    guarantees. Lengthen them if a chip under load returns stale data.

    Attributes:
        read: Delay between register select and data read
        digital_write: Delay after a GPIO set/clear for the pin to settle
        reset: Delay after a software reset for the chip to reboot
    """

    read: float = READ_DELAY
    digital_write: float = DIGITAL_WRITE_DELAY
    reset: float = RESET_DELAY


class SeesawDevice:
    """Driver for one Seesaw chip on an I2C bus.

    Attributes:
        protocol: Register protocol bound to this device's address
        hardware: Identity of the chip, None until identified
        model: Resolved chip capabilities, None until identified
        options: Modules compiled into the chip firmware
        adc_ref_voltage: Reference voltage for analog_read_voltage
    """

    def __init__(
        self,
        transport: SeesawTransport,
        address: int = DEFAULT_ADDRESS,
        model: ChipCapabilities | None = None,
        adc_ref_voltage: float = DEFAULT_ADC_REF_VOLTAGE,
        registry: ModelRegistry | None = None,
        timing: SeesawTiming = SeesawTiming(),
        sleep: Sleep = asyncio.sleep,
    ):
        """Initialize the device.

        Args:
            transport: Connected SeesawTransport instance
            address: 7-bit I2C address of the chip (default 0x49)
            model: Known chip model; skips the need for detect_hardware()
            adc_ref_voltage: ADC reference voltage in volts
            registry: Chip models used to resolve the detected chip id
                (default: the shared DEFAULT_REGISTRY)
            timing: Settle delays
            sleep: Coroutine function used for all settle delays
        """
        self.protocol = SeesawProtocol(
            transport, address, read_delay=timing.read, sleep=sleep
        )
        self.registry = DEFAULT_REGISTRY if registry is None else registry
        self.timing = timing
        self.adc_ref_voltage = adc_ref_voltage
        self.options: NamedBitField = create_options_field()
        self.hardware: HardwareInfo | None = None
        self.model: ChipCapabilities | None = None

        if model is not None:
            self.model = model
            self.hardware = HardwareInfo(chip_id=model.chip_ids[0])

    @property
    def address(self) -> int:
        return self.protocol.address

    @property
    def identified(self) -> bool:
        """True once chip capabilities are known."""
        return self.hardware is not None and self.model is not None

    def _ensure_identified(self) -> ChipCapabilities:
        if not self.identified:
            raise CapabilityError(
                "You must call detect_hardware() first, or pass model in constructor"
            )
        return self.model  # type: ignore[return-value]

    # Identification

    async def detect_hardware(self) -> HardwareInfo:
        """Identify the chip and resolve its capabilities.

        Reads the VERSION, HW_ID and OPTIONS status registers and looks
        the chip id up in the model registry.

        Returns:
            The decoded hardware information

        Raises:
            UnknownDeviceError: If the chip id is not in the registry
        """
        serial, build_date = await self.fetch_build_meta()
        chip_id = await self.fetch_chip_id()
        options = await self.fetch_options()

        model = self.registry.resolve(chip_id)

        self.hardware = HardwareInfo(
            chip_id=chip_id, serial=serial, build_date=build_date
        )
        self.options = options
        self.model = model

        logger.info(
            f"Detected {model.name} (chip id {chip_id:#04x}, serial {serial}, "
            f"built {self.hardware.build_date_str}) at {self.address:#04x}"
        )
        return self.hardware

    async def fetch_chip_id(self) -> int:
        """Read the 1-byte STATUS/HW_ID register.

        Decoded unsigned: ATtiny ids (0x84 and up) only match when the
        byte is not sign-extended.
        """
        return await self.protocol.read_int(Module.STATUS, Status.HW_ID, 1)

    async def fetch_build_meta(self) -> tuple[int, tuple[int, int, int]]:
        """Read the VERSION register.

        Returns:
            Tuple of (serial, (year, month, day))
        """
        data = await self.protocol.read(Module.STATUS, Status.VERSION, 4)
        serial = int.from_bytes(data[0:2], "big", signed=True)
        return serial, decode_datecode(int.from_bytes(data[2:4], "big"))

    async def fetch_options(self) -> NamedBitField:
        """Read the OPTIONS register listing the firmware's modules."""
        value = await self.protocol.read_int(Module.STATUS, Status.OPTIONS, 4)
        return create_options_field().set_number_value(value)

    # GPIO

    async def read_gpio_bulk(self) -> BitField:
        """Read the state of every GPIO pin."""
        data = await self.protocol.read(Module.GPIO, Gpio.BULK, 4)
        return BitField.from_bytes(data)

    async def digital_read(self, pin: int) -> bool:
        status = await self.read_gpio_bulk()
        return bool(status.read(pin))

    async def digital_write_bulk(self, pins: BitField, value: bool) -> None:
        """Drive every pin set in ``pins`` high (True) or low (False)."""
        sub_register = Gpio.BULK_SET if value else Gpio.BULK_CLR
        await self.protocol.write_field(Module.GPIO, sub_register, pins)
        await self.protocol.sleep(self.timing.digital_write)

    async def digital_write(self, pin: int, value: bool) -> None:
        """Drive one pin high (True) or low (False).

        Waits for the pin to settle before returning so a following read
        sees the new state.
        """
        await self.digital_write_bulk(BitField().set(pin, 1), value)

    async def toggle(self, pin: int) -> None:
        """Invert the state of one pin (read-modify-write, not atomic)."""
        status = await self.read_gpio_bulk()
        await self.digital_write(pin, not status.read(pin))

    async def pin_mode_bulk(self, pins: BitField, mode: PinMode) -> None:
        """Configure every pin set in ``pins``.

        Args:
            pins: One bit per pin to configure
            mode: Pin configuration
        """
        for sub_register in PIN_MODE_SEQUENCES[PinMode(mode)]:
            await self.protocol.write_field(Module.GPIO, sub_register, pins)

    async def pin_mode(self, pin: int, mode: PinMode) -> None:
        await self.pin_mode_bulk(BitField().set(pin, 1), mode)

    # Status

    async def reset(self) -> None:
        """Software reset the chip and wait for it to reboot.

        The reboot wait is a fixed delay; talking to the chip before it
        has elapsed gives undefined results.
        """
        logger.info(f"Resetting Seesaw at {self.address:#04x}")
        await self.protocol.write(Module.STATUS, Status.SWRST, bytes([SWRST_SENTINEL]))
        await self.protocol.sleep(self.timing.reset)

    # ADC

    async def analog_read(self, pin: int) -> int:
        """Read the raw ADC value of ``pin``.

        Raises:
            CapabilityError: If the chip model is not yet known
            SchemaError: If the pin has no ADC on this chip
        """
        model = self._ensure_identified()
        offset = model.adc_channel_offset(pin)
        return await self.protocol.read_int(
            Module.ADC, Adc.CHANNEL_OFFSET + offset, 2, signed=True
        )

    def to_voltage(self, raw: int) -> float:
        """Convert a raw ADC reading to volts using adc_ref_voltage."""
        return raw / ADC_FULL_SCALE * self.adc_ref_voltage

    async def analog_read_voltage(self, pin: int) -> float:
        return self.to_voltage(await self.analog_read(pin))
