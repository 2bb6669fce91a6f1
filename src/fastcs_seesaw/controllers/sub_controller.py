"""
A base class for all Seesaw Subcontrollers.
"""

from fastcs.attributes import AttrR, AttrRW
from fastcs.controllers import Controller
from fastcs.datatypes import Int

from fastcs_seesaw.constants import SLOW_UPDATE
from fastcs_seesaw.device import SeesawDevice
from fastcs_seesaw.register_io import SeesawRegisterIO, SeesawRegisterIORef


class SeesawSubcontroller(Controller):
    """Base class for all Seesaw Subcontrollers.

    Register attributes are served by the shared SeesawRegisterIO; commands
    go through the SeesawDevice handed over once the parent connects.
    """

    def __init__(self, register_io: SeesawRegisterIO):
        """Initialize Seesaw subcontroller.

        Args:
            register_io: the SeesawRegisterIO instance used by this controller.
        """
        super().__init__(ios=[register_io])

        self._register_io = register_io
        self._device: SeesawDevice | None = None

    def set_device(self, device: SeesawDevice | None) -> None:
        """Attach (or detach with None) the connected device."""
        self._device = device

    def _check_connected(self) -> SeesawDevice:
        """Return the device, raising RuntimeError if not connected."""
        if self._device is None:
            raise RuntimeError("Not connected to Seesaw hardware")
        return self._device

    def make_register(
        self,
        register: int,
        sub_register: int,
        length: int = 4,
        update_period: float = SLOW_UPDATE,
    ) -> AttrR:
        """Helper to create a read-only integer attribute for a register"""
        io_ref = SeesawRegisterIORef(
            register=register,
            sub_register=sub_register,
            length=length,
            update_period=update_period,
        )
        return AttrR(Int(), io_ref=io_ref)

    def make_setpoint(self) -> AttrRW:
        """Helper to create a local integer setpoint with no register behind it"""
        return AttrRW(Int())
