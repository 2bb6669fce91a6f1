"""Asyncio I2C transport for Seesaw hardware communication."""

import asyncio
import logging

try:
    from smbus2 import SMBus, i2c_msg
except ImportError:
    SMBus = None  # type: ignore[assignment,misc]
    i2c_msg = None  # type: ignore[assignment]

from .errors import TransportError

logger = logging.getLogger(__name__)


class SeesawTransport:
    """Asyncio-based I2C bus transport.

    Offers the two raw bus primitives the register protocol is built on:
    write N bytes to an address and read N bytes from an address. Each
    call is exactly one I2C message; the blocking Linux i2c-dev calls run
    in a worker thread so the event loop is never blocked.

    Supports simulation mode: Use port="sim://name" to use the software
    simulator instead of real hardware. ``name`` may be a chip model name
    (e.g. 'attiny8x7') to choose the simulated chip.

    Bus failures are raised as TransportError and never retried.
    """

    def __init__(self, port: int | str):
        """Initialize transport for given I2C adapter.

        Args:
            port: I2C adapter number (1, '1'), device path ('/dev/i2c-1')
                  or 'sim://name' for simulator
        """
        self.port = str(port)
        self._is_simulation = self.port.startswith("sim://")
        self._bus: SMBus | None = None  # type: ignore[valid-type]
        self._connected = False

        self._simulator = None

        if not self._is_simulation and SMBus is None:
            raise ImportError(
                "smbus2 is required for I2C communication. "
                "Install with: pip install smbus2"
            )

    @property
    def simulator(self):
        """The running SeesawSimulator, or None in hardware mode."""
        return self._simulator

    async def connect(self) -> None:
        """Open the I2C adapter or start the simulator.

        Raises:
            TransportError: If the adapter cannot be opened (hardware mode)
        """
        if self._connected:
            logger.warning(f"Already connected to {self.port}")
            return

        if self._is_simulation:
            # Import simulator locally to avoid dependency
            from .models import DEFAULT_REGISTRY
            from .simulator import SeesawSimulator

            name = self.port[len("sim://") :]
            logger.info(f"Starting Seesaw simulator for {self.port}")
            if name in {model.name for model in DEFAULT_REGISTRY}:
                chip_id = DEFAULT_REGISTRY.by_name(name).chip_ids[0]
                self._simulator = SeesawSimulator(chip_id=chip_id)
            else:
                self._simulator = SeesawSimulator()

            self._connected = True
            logger.info(f"Simulator ready for {self.port}")

        else:
            adapter: int | str = int(self.port) if self.port.isdigit() else self.port
            logger.info(f"Opening I2C adapter {adapter}")

            try:
                self._bus = await asyncio.to_thread(SMBus, adapter)  # type: ignore[misc]
            except OSError as e:
                raise TransportError(f"Cannot open I2C adapter {adapter}: {e}") from e

            self._connected = True
            logger.info(f"Connected to I2C adapter {adapter}")

    async def disconnect(self) -> None:
        """Close the I2C adapter or stop simulator."""
        if not self._connected:
            return

        logger.info(f"Disconnecting from {self.port}")

        if self._is_simulation:
            self._simulator = None
        else:
            if self._bus:
                self._bus.close()
                self._bus = None

        self._connected = False
        logger.info("Disconnected from I2C bus")

    @property
    def connected(self) -> bool:
        """Check if transport is connected."""
        if self._is_simulation:
            return self._connected and self._simulator is not None
        else:
            return self._connected and self._bus is not None

    async def i2c_write(self, address: int, data: bytes) -> None:
        """Write ``data`` to the device at ``address`` as one I2C message.

        Args:
            address: 7-bit I2C device address
            data: Bytes to send

        Raises:
            RuntimeError: If not connected
            TransportError: If the bus reports a failure
        """
        if not self.connected:
            raise RuntimeError("Not connected to I2C bus")

        logger.debug(f"TX @0x{address:02X}: {data.hex()}")

        if self._is_simulation:
            await self._simulator.process_write(data)  # type: ignore[union-attr]
            return

        message = i2c_msg.write(address, data)  # type: ignore[union-attr]
        try:
            await asyncio.to_thread(self._bus.i2c_rdwr, message)  # type: ignore[union-attr]
        except OSError as e:
            logger.error(f"I2C write to 0x{address:02X} failed: {e}")
            raise TransportError(f"I2C write to 0x{address:02X} failed: {e}") from e

    async def i2c_read(self, address: int, length: int) -> bytes:
        """Read ``length`` bytes from the device at ``address``.

        Args:
            address: 7-bit I2C device address
            length: Number of bytes to read

        Returns:
            Exactly ``length`` received bytes

        Raises:
            RuntimeError: If not connected
            TransportError: If the bus reports a failure
        """
        if not self.connected:
            raise RuntimeError("Not connected to I2C bus")

        if self._is_simulation:
            data = await self._simulator.process_read(length)  # type: ignore[union-attr]
        else:
            message = i2c_msg.read(address, length)  # type: ignore[union-attr]
            try:
                await asyncio.to_thread(self._bus.i2c_rdwr, message)  # type: ignore[union-attr]
            except OSError as e:
                logger.error(f"I2C read from 0x{address:02X} failed: {e}")
                raise TransportError(
                    f"I2C read from 0x{address:02X} failed: {e}"
                ) from e
            data = bytes(list(message))

        logger.debug(f"RX @0x{address:02X}: {data.hex()}")
        return data

    async def __aenter__(self):
        """Async context manager entry."""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.disconnect()
        return False
