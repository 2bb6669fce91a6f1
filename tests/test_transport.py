"""Tests for SeesawTransport in simulation and (mocked) hardware modes."""

import pytest

from fastcs_seesaw import transport as transport_module
from fastcs_seesaw.device import PinMode, SeesawDevice
from fastcs_seesaw.errors import TransportError
from fastcs_seesaw.models import ATTINY16X7, SAMD09
from fastcs_seesaw.transport import SeesawTransport


class FakeSMBus:
    """smbus2.SMBus stand-in recording i2c_rdwr messages."""

    instances: list["FakeSMBus"] = []

    def __init__(self, adapter):
        self.adapter = adapter
        self.messages: list = []
        self.fail = False
        self.closed = False
        self.instances.append(self)

    def i2c_rdwr(self, *messages):
        if self.fail:
            raise OSError(121, "Remote I/O error")
        self.messages.extend(messages)

    def close(self):
        self.closed = True


class FakeMsg:
    """smbus2.i2c_msg stand-in."""

    @staticmethod
    def write(address, data):
        return ("write", address, bytes(data))

    @staticmethod
    def read(address, length):
        return [0xA0 + i for i in range(length)]


@pytest.fixture
def fake_smbus(monkeypatch):
    FakeSMBus.instances.clear()
    monkeypatch.setattr(transport_module, "SMBus", FakeSMBus)
    monkeypatch.setattr(transport_module, "i2c_msg", FakeMsg)
    return FakeSMBus


class TestSimulationMode:
    """Tests using the built-in simulator."""

    async def test_connect_disconnect(self):
        """Test connection state transitions."""
        transport = SeesawTransport("sim://test")
        assert not transport.connected

        await transport.connect()
        assert transport.connected
        assert transport.simulator is not None

        await transport.disconnect()
        assert not transport.connected
        assert transport.simulator is None

    async def test_context_manager(self):
        """Test async with connects and disconnects."""
        async with SeesawTransport("sim://test") as transport:
            assert transport.connected
        assert not transport.connected

    async def test_not_connected(self):
        """Test bus access before connect raises RuntimeError."""
        transport = SeesawTransport("sim://test")
        with pytest.raises(RuntimeError, match="Not connected"):
            await transport.i2c_write(0x49, b"\x00\x01")
        with pytest.raises(RuntimeError, match="Not connected"):
            await transport.i2c_read(0x49, 1)

    @pytest.mark.parametrize(
        "port, chip_id",
        [("sim://samd09", 0x55), ("sim://attiny16x7", 0x88), ("sim://other", 0x55)],
    )
    async def test_simulated_chip(self, port, chip_id):
        """Test the simulator name selects the reported chip id."""
        async with SeesawTransport(port) as transport:
            await transport.i2c_write(0x49, b"\x00\x01")
            assert await transport.i2c_read(0x49, 1) == bytes([chip_id])

    async def test_device_end_to_end(self):
        """Test a full device session against the simulator."""
        async with SeesawTransport("sim://attiny16x7") as transport:
            device = SeesawDevice(transport)
            await device.detect_hardware()
            assert device.model is ATTINY16X7

            await device.pin_mode(4, PinMode.OUTPUT)
            await device.digital_write(4, True)
            assert await device.digital_read(4) is True

            await device.toggle(4)
            assert await device.digital_read(4) is False

            transport.simulator.set_adc(14, 300)  # type: ignore[union-attr]
            assert await device.analog_read(14) == 300

    async def test_reset_end_to_end(self):
        """Test that a reset clears simulated GPIO state."""
        async with SeesawTransport("sim://samd09") as transport:
            device = SeesawDevice(transport, model=SAMD09)
            await device.digital_write(3, True)
            await device.reset()
            assert await device.digital_read(3) is False


class TestHardwareMode:
    """Tests of the smbus2 path with the bus mocked out."""

    async def test_adapter_number(self, fake_smbus):
        """Test numeric ports open the adapter by number."""
        async with SeesawTransport(1):
            pass
        assert fake_smbus.instances[0].adapter == 1
        assert fake_smbus.instances[0].closed

    async def test_adapter_path(self, fake_smbus):
        """Test device paths are passed through."""
        async with SeesawTransport("/dev/i2c-3"):
            pass
        assert fake_smbus.instances[0].adapter == "/dev/i2c-3"

    async def test_write_and_read(self, fake_smbus):
        """Test each call issues exactly one I2C message."""
        async with SeesawTransport("1") as transport:
            await transport.i2c_write(0x49, b"\x01\x04")
            data = await transport.i2c_read(0x49, 4)

        assert data == b"\xa0\xa1\xa2\xa3"
        assert fake_smbus.instances[0].messages[0] == ("write", 0x49, b"\x01\x04")
        assert len(fake_smbus.instances[0].messages) == 2

    async def test_write_failure(self, fake_smbus):
        """Test bus errors surface as TransportError."""
        async with SeesawTransport("1") as transport:
            fake_smbus.instances[0].fail = True
            with pytest.raises(TransportError, match="write to 0x49"):
                await transport.i2c_write(0x49, b"\x00\x01")

    async def test_read_failure(self, fake_smbus):
        """Test read errors surface as TransportError chained to OSError."""
        async with SeesawTransport("1") as transport:
            fake_smbus.instances[0].fail = True
            with pytest.raises(TransportError) as excinfo:
                await transport.i2c_read(0x49, 4)
        assert isinstance(excinfo.value.__cause__, OSError)

    def test_missing_smbus2(self, monkeypatch):
        """Test a helpful error when smbus2 is unavailable."""
        monkeypatch.setattr(transport_module, "SMBus", None)
        with pytest.raises(ImportError, match="smbus2"):
            SeesawTransport("1")
