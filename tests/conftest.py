"""Pytest configuration for fastcs-seesaw tests."""

import pytest

from fastcs_seesaw.errors import TransportError
from fastcs_seesaw.simulator import SeesawSimulator


def pytest_addoption(parser):
    """Add command line options for testing."""
    parser.addoption(
        "--port",
        action="store",
        default=None,
        help="I2C adapter with a Seesaw attached (e.g., /dev/i2c-1)",
    )


class RecordingBus:
    """Transport stand-in recording every bus transaction and settle delay.

    Transactions are answered by a SeesawSimulator, so register state
    behaves like a real chip.
    """

    def __init__(self, simulator: SeesawSimulator | None = None):
        self.simulator = simulator or SeesawSimulator()
        self.events: list[tuple] = []
        self.fail_reads = False

    async def i2c_write(self, address: int, data: bytes) -> None:
        self.events.append(("write", address, bytes(data)))
        await self.simulator.process_write(data)

    async def i2c_read(self, address: int, length: int) -> bytes:
        self.events.append(("read", address, length))
        if self.fail_reads:
            raise TransportError("simulated bus failure")
        return await self.simulator.process_read(length)

    async def sleep(self, seconds: float) -> None:
        self.events.append(("sleep", seconds))

    def writes(self) -> list[bytes]:
        return [event[2] for event in self.events if event[0] == "write"]

    def clear(self) -> None:
        self.events.clear()


@pytest.fixture
def bus():
    """A recording bus backed by a SAMD09 simulator."""
    return RecordingBus()


@pytest.fixture
def seesaw_port(request):
    """Get the I2C port from command line or use simulator."""
    port = request.config.getoption("--port", default=None)
    if port is None:
        return "sim://samd09"
    return port
