"""Top level API.

This package provides an asyncio driver for Adafruit Seesaw I2C
co-processors (SAMD09, ATtiny8x7, ATtiny16x7) and a FastCS controller
exposing them over EPICS.

Layers, lowest first:
- BitField / NamedBitField: packing of register values
- SeesawTransport: raw I2C writes and reads (smbus2 or simulator)
- SeesawProtocol: register framing and the write-delay-read sequence
- ChipCapabilities / ModelRegistry: per-family pin tables
- SeesawDevice: GPIO, pin modes, ADC, identification and reset
- SeesawController: FastCS attributes and commands

Example usage::

    from fastcs_seesaw import PinMode, SeesawDevice, SeesawTransport

    async with SeesawTransport("/dev/i2c-1") as transport:
        seesaw = SeesawDevice(transport, address=0x49)
        info = await seesaw.detect_hardware()
        print(f"Chip {info.chip_id:#04x} built {info.build_date_str}")
        await seesaw.pin_mode(5, PinMode.INPUT_PULLUP)
        print(await seesaw.digital_read(5))

.. data:: __version__
    :type: str

    Version number as calculated by https://github.com/pypa/setuptools_scm
"""

from ._version import __version__
from .bitfield import BitField, NamedBitField, Payload
from .controllers import AdcController, GpioController
from .device import PIN_MODE_SEQUENCES, PinMode, SeesawDevice, SeesawTiming
from .errors import (
    CapabilityError,
    SchemaError,
    SeesawError,
    TransportError,
    UnknownDeviceError,
)
from .hardware import HardwareInfo, decode_datecode, encode_datecode
from .models import (
    ATTINY8X7,
    ATTINY16X7,
    DEFAULT_REGISTRY,
    SAMD09,
    AdcAddressing,
    ChipCapabilities,
    ModelRegistry,
)
from .protocol import SeesawProtocol
from .register_io import SeesawRegisterIO, SeesawRegisterIORef
from .registers import (
    HW_ID_CODE,
    OPTIONS_KEYS,
    Adc,
    Gpio,
    Module,
    Status,
    create_options_field,
)
from .seesaw_controller import SeesawController
from .simulator import SeesawSimulator
from .transport import SeesawTransport

__all__ = [
    "__version__",
    # Bit containers
    "BitField",
    "NamedBitField",
    "Payload",
    # Transport and Protocol
    "SeesawTransport",
    "SeesawProtocol",
    "SeesawSimulator",
    # Errors
    "SeesawError",
    "SchemaError",
    "CapabilityError",
    "UnknownDeviceError",
    "TransportError",
    # Chip models
    "ChipCapabilities",
    "ModelRegistry",
    "AdcAddressing",
    "SAMD09",
    "ATTINY8X7",
    "ATTINY16X7",
    "DEFAULT_REGISTRY",
    # Device
    "SeesawDevice",
    "SeesawTiming",
    "PinMode",
    "PIN_MODE_SEQUENCES",
    "HardwareInfo",
    "decode_datecode",
    "encode_datecode",
    # Register definitions
    "Module",
    "Status",
    "Gpio",
    "Adc",
    "HW_ID_CODE",
    "OPTIONS_KEYS",
    "create_options_field",
    # Controller
    "SeesawController",
    "GpioController",
    "AdcController",
    "SeesawRegisterIO",
    "SeesawRegisterIORef",
]
