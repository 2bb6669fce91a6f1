"""Seesaw register protocol implementation.

This module frames register transactions on top of the SeesawTransport
layer. It is the single place where frames are built; higher layers never
touch the bus directly.

Protocol format:
- Write: [REG, SUB, payload...] as one I2C write
- Read:  [REG, SUB] as one I2C write, settle delay, N-byte I2C read

Where:
- REG = module base register (e.g. 0x01 GPIO)
- SUB = sub-register within the module (e.g. 0x05 BULK_SET)
- every multi-byte integer is big-endian

The settle delay between the select write and the data read gives the
chip firmware time to fill its response buffer. It is a fixed wait, not a
handshake.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable

from .bitfield import Payload
from .constants import DEFAULT_ADDRESS, READ_DELAY
from .registers import is_valid_address
from .transport import SeesawTransport

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[object]]


class SeesawProtocol:
    """Seesaw register protocol handler.

    Provides register write and write-then-read operations for one device
    address. Transactions are serialized with a lock so that a read's
    select/delay/read sequence is never interleaved with another
    transaction issued through the same protocol object. Failed
    transactions are never retried.
    """

    def __init__(
        self,
        transport: SeesawTransport,
        address: int = DEFAULT_ADDRESS,
        read_delay: float = READ_DELAY,
        sleep: Sleep = asyncio.sleep,
    ):
        """Initialize protocol handler.

        Args:
            transport: Connected SeesawTransport instance
            address: 7-bit I2C address of the Seesaw device
            read_delay: Seconds to wait between register select and read
            sleep: Coroutine function used for all settle delays
        """
        if not 0 <= address <= 0x7F:
            raise ValueError(f"I2C address {address:#04x} out of range [0x00-0x7F]")
        self.transport = transport
        self.address = address
        self.read_delay = read_delay
        self.sleep = sleep
        self._lock = asyncio.Lock()

    @staticmethod
    def _check_register(register: int, sub_register: int) -> None:
        if not is_valid_address(register):
            raise ValueError(f"Register {register:#04x} out of range [0x00-0xFF]")
        if not is_valid_address(sub_register):
            raise ValueError(
                f"Sub-register {sub_register:#04x} out of range [0x00-0xFF]"
            )

    async def _write(self, register: int, sub_register: int, payload: bytes) -> None:
        frame = bytes([register, sub_register]) + payload
        await self.transport.i2c_write(self.address, frame)

    async def write(
        self, register: int, sub_register: int, payload: bytes = b""
    ) -> None:
        """Write a payload to a register.

        Args:
            register: Module base register (0x00-0xFF)
            sub_register: Sub-register (0x00-0xFF)
            payload: Raw bytes appended after the two address bytes

        Raises:
            ValueError: If register or sub-register out of range
            TransportError: If the bus write fails
        """
        self._check_register(register, sub_register)
        logger.debug(
            f"Writing {payload.hex() or '<select>'} to "
            f"0x{register:02X}/0x{sub_register:02X}"
        )
        async with self._lock:
            await self._write(register, sub_register, payload)

    async def write_field(
        self, register: int, sub_register: int, field: Payload
    ) -> None:
        """Write a bit container (BitField, NamedBitField) to a register."""
        await self.write(register, sub_register, field.to_bytes())

    async def read(self, register: int, sub_register: int, length: int) -> bytes:
        """Read ``length`` bytes from a register.

        Args:
            register: Module base register (0x00-0xFF)
            sub_register: Sub-register (0x00-0xFF)
            length: Number of bytes to read

        Returns:
            The bytes returned by the chip

        Raises:
            ValueError: If register, sub-register or length out of range
            TransportError: If the bus write or read fails
        """
        self._check_register(register, sub_register)
        if length < 1:
            raise ValueError(f"Read length must be positive, got {length}")

        async with self._lock:
            await self._write(register, sub_register, b"")
            await self.sleep(self.read_delay)
            data = await self.transport.i2c_read(self.address, length)

        logger.debug(
            f"Read {data.hex()} from 0x{register:02X}/0x{sub_register:02X}"
        )
        return data

    async def read_int(
        self, register: int, sub_register: int, length: int, signed: bool = False
    ) -> int:
        """Read a big-endian integer register."""
        data = await self.read(register, sub_register, length)
        return int.from_bytes(data, "big", signed=signed)
