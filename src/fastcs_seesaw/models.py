"""Seesaw chip models and the registry resolving chip ids to them.

Each chip family exposes a different set of ADC/DAC/touch/PWM pins and
addresses its ADC channels differently:

- SAMD09: channel = index of the pin within the declared ADC pins
- ATtiny8x7 / ATtiny16x7: channel = raw pin number

Example usage::

    from fastcs_seesaw.models import DEFAULT_REGISTRY

    model = DEFAULT_REGISTRY.resolve(0x55)
    model.adc_channel_offset(4)  # 2 on SAMD09
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum, auto

from .errors import SchemaError, UnknownDeviceError
from .registers import HW_ID_CODE


class AdcAddressing(Enum):
    """How a pin number maps onto an ADC channel register offset."""

    PIN = auto()  # Channel is the raw pin number
    INDEX = auto()  # Channel is the pin's position in adc_pins


@dataclass(frozen=True)
class ChipCapabilities:
    """Immutable pin capability table for one chip family.

    Attributes:
        name: Family name (e.g., 'samd09')
        chip_ids: HW_ID values reported by this family, first is canonical
        adc_pins: Pins usable with analog_read, in channel order
        dac_pins: Pins with a DAC output
        touch_pins: Pins with capacitive touch
        pwm_pins: Pins with PWM output
        pwm_width: PWM resolution in bits
        adc_addressing: ADC channel addressing policy of the family
    """

    name: str
    chip_ids: tuple[int, ...]
    adc_pins: tuple[int, ...] = ()
    dac_pins: tuple[int, ...] = ()
    touch_pins: tuple[int, ...] = ()
    pwm_pins: tuple[int, ...] = ()
    pwm_width: int = 8
    adc_addressing: AdcAddressing = AdcAddressing.PIN

    def __post_init__(self):
        """Validate the chip id set."""
        if not self.chip_ids:
            raise ValueError(f"Chip model {self.name!r} declares no chip ids")
        for chip_id in self.chip_ids:
            if not 0 <= chip_id <= 0xFF:
                raise ValueError(f"Chip id {chip_id:#04x} out of range [0x00-0xFF]")

    def is_chip(self, chip_id: int) -> bool:
        return chip_id in self.chip_ids

    def supports_adc(self, pin: int) -> bool:
        return pin in self.adc_pins

    def adc_channel_offset(self, pin: int) -> int:
        """Return the ADC channel offset for ``pin`` on this family.

        Raises:
            SchemaError: If the pin has no ADC on this chip
        """
        if not self.supports_adc(pin):
            raise SchemaError(f"Pin {pin} is not an ADC pin on {self.name}")
        if self.adc_addressing is AdcAddressing.INDEX:
            return self.adc_pins.index(pin)
        return pin


class ModelRegistry:
    """Table of known chip models, looked up by chip id.

    Chip id sets must be disjoint; an overlapping model is rejected when it
    is registered so that ``resolve`` always has a unique answer.
    """

    def __init__(self, models: Iterable[ChipCapabilities] = ()):
        self._models: list[ChipCapabilities] = []
        for model in models:
            self.register(model)

    def register(self, model: ChipCapabilities) -> None:
        """Add a model to the registry.

        Raises:
            ValueError: If any of its chip ids is already claimed
        """
        for existing in self._models:
            shared = set(existing.chip_ids) & set(model.chip_ids)
            if shared:
                ids = ", ".join(f"{chip_id:#04x}" for chip_id in sorted(shared))
                raise ValueError(
                    f"Chip model {model.name!r} reuses chip id(s) {ids} "
                    f"of {existing.name!r}"
                )
        self._models.append(model)

    def resolve(self, chip_id: int) -> ChipCapabilities:
        """Find the model reporting ``chip_id``.

        Raises:
            UnknownDeviceError: If no registered model claims the id
        """
        for model in self._models:
            if model.is_chip(chip_id):
                return model
        raise UnknownDeviceError(f"Unknown chip id {chip_id:#04x}")

    def by_name(self, name: str) -> ChipCapabilities:
        for model in self._models:
            if model.name == name:
                return model
        raise UnknownDeviceError(f"Unknown chip model {name!r}")

    def __contains__(self, chip_id: object) -> bool:
        return any(model.is_chip(chip_id) for model in self._models)  # type: ignore[arg-type]

    def __iter__(self) -> Iterator[ChipCapabilities]:
        return iter(self._models)

    def __len__(self) -> int:
        return len(self._models)


SAMD09 = ChipCapabilities(
    name="samd09",
    chip_ids=(HW_ID_CODE,),
    adc_pins=(2, 3, 4, 5),
    pwm_pins=(4, 5, 6, 7),
    pwm_width=8,
    adc_addressing=AdcAddressing.INDEX,
)

# PWM on pins 6, 7, 8 is 16 bit, the rest 8 bit
ATTINY8X7 = ChipCapabilities(
    name="attiny8x7",
    chip_ids=(0x84, 0x85, 0x86, 0x87),
    adc_pins=(0, 1, 2, 3, 6, 7, 18, 19, 20),
    pwm_pins=(0, 1, 9, 12, 13, 6, 7, 8),
    pwm_width=16,
)

# PWM on pins 4, 5, 6 is 16 bit, the rest 8 bit
ATTINY16X7 = ChipCapabilities(
    name="attiny16x7",
    chip_ids=(0x88, 0x89),
    adc_pins=(0, 1, 2, 3, 4, 5, 14, 15, 16),
    pwm_pins=(0, 1, 7, 11, 16, 4, 5, 6),
    pwm_width=16,
)

DEFAULT_REGISTRY = ModelRegistry([ATTINY8X7, ATTINY16X7, SAMD09])
