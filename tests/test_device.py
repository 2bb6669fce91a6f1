"""Unit tests for SeesawDevice.

The device runs against a recording bus backed by the chip simulator, so
tests can check both the exact register transactions and the resulting
chip state.
"""

import pytest
from conftest import RecordingBus

from fastcs_seesaw.bitfield import BitField
from fastcs_seesaw.device import PinMode, SeesawDevice, SeesawTiming
from fastcs_seesaw.errors import CapabilityError, SchemaError, UnknownDeviceError
from fastcs_seesaw.hardware import encode_datecode
from fastcs_seesaw.models import (
    ATTINY8X7,
    DEFAULT_REGISTRY,
    SAMD09,
    ChipCapabilities,
    ModelRegistry,
)
from fastcs_seesaw.simulator import SeesawSimulator


def make_device(bus: RecordingBus, **kwargs) -> SeesawDevice:
    return SeesawDevice(bus, sleep=bus.sleep, **kwargs)  # type: ignore[arg-type]


def pin_payload(pin: int) -> bytes:
    return (1 << pin).to_bytes(4, "big")


# =============================================================================
# Identification Tests
# =============================================================================


class TestIdentification:
    """Tests for hardware detection and capability resolution."""

    def test_starts_unidentified(self, bus):
        """Test that a device without a model has no capabilities."""
        device = make_device(bus)
        assert not device.identified
        assert device.hardware is None
        assert device.model is None
        assert device.options.value == 0

    def test_model_from_constructor(self, bus):
        """Test that a supplied model identifies the device immediately."""
        device = make_device(bus, model=ATTINY8X7)
        assert device.identified
        assert device.model is ATTINY8X7
        assert device.hardware.chip_id == 0x84  # type: ignore[union-attr]
        assert device.hardware.serial == 0  # type: ignore[union-attr]
        assert device.hardware.build_date == (0, 0, 0)  # type: ignore[union-attr]
        assert bus.events == []

    async def test_detect_hardware(self, bus):
        """Test detection decodes the status registers and resolves the model."""
        device = make_device(bus)
        info = await device.detect_hardware()

        assert device.identified
        assert device.model is SAMD09
        assert info.chip_id == 0x55
        assert info.serial == 4991
        assert info.build_date == (23, 6, 14)
        assert device.options.read("GPIO") == 1
        assert device.options.read("ADC") == 1
        assert device.options.read("TOUCH") == 0

    async def test_detect_reads_status_registers(self, bus):
        """Test the registers and lengths read during detection."""
        device = make_device(bus)
        await device.detect_hardware()

        reads = [
            (bus.events[i - 2][2], bus.events[i][2])
            for i, event in enumerate(bus.events)
            if event[0] == "read"
        ]
        assert reads == [(b"\x00\x02", 4), (b"\x00\x01", 1), (b"\x00\x03", 4)]

    async def test_detect_attiny(self):
        """Test detection of an ATtiny8x7 chip id."""
        bus = RecordingBus(SeesawSimulator(chip_id=0x87))
        device = make_device(bus)
        await device.detect_hardware()
        assert device.model is ATTINY8X7
        assert device.hardware.chip_id == 0x87  # type: ignore[union-attr]

    async def test_detect_unknown_chip(self):
        """Test that an unknown chip id fails and leaves the device unidentified."""
        bus = RecordingBus(SeesawSimulator(chip_id=0x42))
        device = make_device(bus)
        with pytest.raises(UnknownDeviceError):
            await device.detect_hardware()
        assert not device.identified

    def test_default_registry_is_shared(self, bus):
        """Test that devices without a registry use DEFAULT_REGISTRY."""
        assert make_device(bus).registry is DEFAULT_REGISTRY

    async def test_custom_registry(self):
        """Test that a private registry resolves ids the default one lacks."""
        custom = ChipCapabilities(name="custom", chip_ids=(0x42,), adc_pins=(1,))
        registry = ModelRegistry([custom])
        device = make_device(
            RecordingBus(SeesawSimulator(chip_id=0x42)), registry=registry
        )
        await device.detect_hardware()
        assert device.model is custom
        assert 0x42 not in DEFAULT_REGISTRY

    async def test_negative_serial(self):
        """Test that the serial is decoded as a signed 16-bit value."""
        simulator = SeesawSimulator(serial=-2, datecode=encode_datecode(1, 2, 3))
        device = make_device(RecordingBus(simulator))
        info = await device.detect_hardware()
        assert info.serial == -2
        assert info.build_date == (1, 2, 3)


# =============================================================================
# GPIO Tests
# =============================================================================


class TestPinMode:
    """Tests for the pin mode write sequences."""

    async def test_input_pullup_sequence(self, bus):
        """Test INPUT_PULLUP writes DIRCLR, PULLENSET, BULK_SET in order."""
        device = make_device(bus)
        await device.pin_mode(5, PinMode.INPUT_PULLUP)

        assert bus.writes() == [
            b"\x01\x03" + pin_payload(5),
            b"\x01\x0b" + pin_payload(5),
            b"\x01\x05" + pin_payload(5),
        ]
        assert bus.simulator.pull_enable == 1 << 5
        assert bus.simulator.gpio == 1 << 5

    async def test_input_pulldown_sequence(self, bus):
        """Test INPUT_PULLDOWN writes DIRCLR, PULLENSET, BULK_CLR in order."""
        device = make_device(bus)
        await device.pin_mode(3, PinMode.INPUT_PULLDOWN)
        assert bus.writes() == [
            b"\x01\x03" + pin_payload(3),
            b"\x01\x0b" + pin_payload(3),
            b"\x01\x06" + pin_payload(3),
        ]

    async def test_input_sequence(self, bus):
        """Test INPUT writes DIRCLR then PULLENCLR."""
        device = make_device(bus)
        await device.pin_mode(0, PinMode.INPUT)
        assert bus.writes() == [
            b"\x01\x03" + pin_payload(0),
            b"\x01\x0c" + pin_payload(0),
        ]

    async def test_output_sequence(self, bus):
        """Test OUTPUT writes DIRSET only."""
        device = make_device(bus)
        await device.pin_mode(31, PinMode.OUTPUT)
        assert bus.writes() == [b"\x01\x02" + pin_payload(31)]
        assert bus.simulator.direction == 1 << 31

    async def test_pin_mode_needs_no_model(self, bus):
        """Test that GPIO configuration works before identification."""
        device = make_device(bus)
        await device.pin_mode(1, PinMode.OUTPUT)
        assert len(bus.writes()) == 1

    async def test_pin_mode_bulk(self, bus):
        """Test configuring several pins in one sequence."""
        device = make_device(bus)
        pins = BitField().set(1, 1).set(2, 1)
        await device.pin_mode_bulk(pins, PinMode.OUTPUT)
        assert bus.writes() == [b"\x01\x02\x00\x00\x00\x06"]

    async def test_invalid_pin(self, bus):
        """Test that a pin outside the bank raises before any bus traffic."""
        device = make_device(bus)
        with pytest.raises(ValueError):
            await device.pin_mode(32, PinMode.OUTPUT)
        assert bus.events == []


class TestDigitalIO:
    """Tests for digital reads, writes and toggling."""

    async def test_write_high(self, bus):
        """Test a high write goes to BULK_SET followed by the settle delay."""
        device = make_device(bus)
        await device.digital_write(5, True)
        assert bus.events == [
            ("write", 0x49, b"\x01\x05" + pin_payload(5)),
            ("sleep", 0.010),
        ]

    async def test_write_low(self, bus):
        """Test a low write goes to BULK_CLR."""
        device = make_device(bus)
        await device.digital_write(5, False)
        assert bus.writes() == [b"\x01\x06" + pin_payload(5)]

    async def test_write_bulk(self, bus):
        """Test driving several pins at once."""
        device = make_device(bus)
        await device.digital_write_bulk(BitField(0x11), True)
        assert bus.simulator.gpio == 0x11

    async def test_custom_write_delay(self, bus):
        """Test that the settle delay comes from the timing settings."""
        device = make_device(bus, timing=SeesawTiming(digital_write=0.05))
        await device.digital_write(1, True)
        assert bus.events[-1] == ("sleep", 0.05)

    async def test_read_gpio_bulk(self, bus):
        """Test the bulk read returns a 4-byte BitField."""
        bus.simulator.gpio = 0x80000001
        device = make_device(bus)
        status = await device.read_gpio_bulk()
        assert isinstance(status, BitField)
        assert status.value == 0x80000001
        assert status.read(31) == 1
        assert bus.events[0] == ("write", 0x49, b"\x01\x04")
        assert bus.events[-1] == ("read", 0x49, 4)

    async def test_digital_read(self, bus):
        """Test reading a single pin."""
        bus.simulator.gpio = 1 << 7
        device = make_device(bus)
        assert await device.digital_read(7) is True
        assert await device.digital_read(6) is False

    async def test_toggle(self, bus):
        """Test toggle reads the bank then writes the inverse state."""
        device = make_device(bus)

        await device.toggle(4)
        assert bus.writes()[-1] == b"\x01\x05" + pin_payload(4)
        assert bus.simulator.gpio == 1 << 4

        await device.toggle(4)
        assert bus.writes()[-1] == b"\x01\x06" + pin_payload(4)
        assert bus.simulator.gpio == 0

    async def test_toggle_reads_before_writing(self, bus):
        """Test the order of the read-modify-write."""
        device = make_device(bus)
        await device.toggle(2)
        kinds = [event[0] for event in bus.events]
        assert kinds == ["write", "sleep", "read", "write", "sleep"]


# =============================================================================
# Reset Tests
# =============================================================================


class TestReset:
    """Tests for the software reset."""

    async def test_reset(self, bus):
        """Test the sentinel write followed by the reboot delay."""
        bus.simulator.gpio = 0xFF
        device = make_device(bus)
        await device.reset()
        assert bus.events == [
            ("write", 0x49, b"\x00\x7f\xff"),
            ("sleep", 0.100),
        ]
        assert bus.simulator.gpio == 0

    async def test_custom_reset_delay(self, bus):
        """Test that the reboot delay is configurable."""
        device = make_device(bus, timing=SeesawTiming(reset=0.5))
        await device.reset()
        assert bus.events[-1] == ("sleep", 0.5)


# =============================================================================
# ADC Tests
# =============================================================================


class TestAnalogRead:
    """Tests for ADC sampling and channel offset resolution."""

    async def test_requires_identification(self, bus):
        """Test analog_read before identification fails with no bus traffic."""
        device = make_device(bus)
        with pytest.raises(CapabilityError, match="detect_hardware"):
            await device.analog_read(2)
        assert bus.events == []

    async def test_samd09_offset_by_index(self, bus):
        """Test SAMD09 pin 4 reads channel 2 at ADC/0x07 + 2."""
        bus.simulator.set_adc(2, 512)
        device = make_device(bus, model=SAMD09)
        value = await device.analog_read(4)
        assert value == 512
        assert bus.events[0] == ("write", 0x49, b"\x09\x09")
        assert bus.events[-1] == ("read", 0x49, 2)

    async def test_attiny_offset_by_pin(self):
        """Test ATtiny pins are read at ADC/0x07 + pin."""
        bus = RecordingBus(SeesawSimulator(chip_id=0x84))
        bus.simulator.set_adc(18, 100)
        device = make_device(bus)
        await device.detect_hardware()
        bus.clear()

        assert await device.analog_read(18) == 100
        assert bus.events[0] == ("write", 0x49, b"\x09\x19")

    async def test_unsupported_pin(self, bus):
        """Test a non-ADC pin fails with SchemaError before any bus traffic."""
        device = make_device(bus, model=SAMD09)
        with pytest.raises(SchemaError):
            await device.analog_read(7)
        assert bus.events == []

    async def test_signed_value(self, bus):
        """Test the ADC value is decoded as signed 16-bit."""
        bus.simulator.set_adc(0, -1)
        device = make_device(bus, model=SAMD09)
        assert await device.analog_read(2) == -1

    async def test_voltage(self, bus):
        """Test conversion with the default 3.3 V reference."""
        bus.simulator.set_adc(3, 1023)
        device = make_device(bus, model=SAMD09)
        assert await device.analog_read_voltage(5) == pytest.approx(3.3)

    async def test_voltage_custom_reference(self, bus):
        """Test conversion with a configured reference voltage."""
        bus.simulator.set_adc(1, 512)
        device = make_device(bus, model=SAMD09, adc_ref_voltage=5.0)
        assert await device.analog_read_voltage(3) == pytest.approx(512 / 1023 * 5.0)

    def test_to_voltage(self, bus):
        """Test the raw to volts conversion shared by every ADC reader."""
        device = make_device(bus, adc_ref_voltage=5.0)
        assert device.to_voltage(0) == 0.0
        assert device.to_voltage(1023) == pytest.approx(5.0)
        assert device.to_voltage(512) == pytest.approx(512 / 1023 * 5.0)
