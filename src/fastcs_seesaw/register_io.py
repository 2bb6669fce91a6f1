"""fastcs AttributeIO binding attributes to Seesaw registers.

Each attribute names a (register, sub-register) pair, a width and a
signedness through its SeesawRegisterIORef; each poll becomes one
SeesawProtocol read. Register attributes are read-only; writes go through
SeesawDevice commands. Kept apart from seesaw_controller so the
sub-controllers can import it.
"""

import logging
from dataclasses import dataclass
from typing import TypeVar

from fastcs.attributes import AttributeIO, AttributeIORef

from .constants import SLOW_UPDATE
from .protocol import SeesawProtocol

NumberT = TypeVar("NumberT", int, float)

logger = logging.getLogger(__name__)


@dataclass
class SeesawRegisterIORef(AttributeIORef):
    """Reference for Seesaw register IO operations.

    Attributes:
        register: Module base register (0x00-0xFF)
        sub_register: Sub-register within the module (0x00-0xFF)
        length: Register width in bytes
        signed: True if the register holds a signed integer
        update_period: Poll period in seconds (default 1.0)
    """

    register: int = 0
    sub_register: int = 0
    length: int = 4
    signed: bool = False
    update_period: float | None = SLOW_UPDATE


class SeesawRegisterIO(AttributeIO[NumberT, SeesawRegisterIORef]):
    """Polls Seesaw registers into read-only fastcs attributes.

    Read failures are logged and the attribute keeps its last value, so
    one bad transaction does not stop the scan loop.
    """

    def __init__(self, protocol: SeesawProtocol | None = None):
        """Initialize register IO handler.

        Args:
            protocol: SeesawProtocol instance (can be None initially)
        """
        super().__init__()
        self._protocol = protocol

    def set_protocol(self, protocol: SeesawProtocol | None) -> None:
        """Set the protocol instance for register I/O operations."""
        self._protocol = protocol

    async def update(self, attr):
        """Read value from Seesaw register and update attribute.

        Args:
            attr: The attribute to update
        """
        if not self._protocol:
            return

        ref = attr.io_ref
        try:
            value = await self._protocol.read_int(
                ref.register, ref.sub_register, ref.length, signed=ref.signed
            )
            await attr.update(attr.dtype(value))
        except Exception as e:
            logger.error(
                f"Error reading register 0x{ref.register:02X}/0x{ref.sub_register:02X}: {e}"
            )
