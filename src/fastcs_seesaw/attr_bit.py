"""
Per-pin view of a packed GPIO register.
"""

from fastcs.attributes.attr_r import AttrR
from fastcs.datatypes import Int

from fastcs_seesaw.bitfield import BitField


class AttrBit(AttrR[int]):
    """Read-only 0/1 attribute mirroring one bit of a packed register value.

    Has no io_ref of its own: the owner polls the register once and feeds
    every AttrBit from an on-update callback of the register attribute.
    """

    def __init__(
        self,
        bit_index: int,
        size: int = 4,
        group: str | None = None,
        description: str | None = None,
    ):
        """
        Args:
            bit_index: Bit to mirror, 0 = least significant.
            size: Width of the packed register in bytes.
            group: fastcs attribute group.
            description: fastcs attribute description.

        Raises:
            ValueError: If bit_index does not fit the register width.
        """
        super().__init__(datatype=Int(), group=group, description=description)
        self._field = BitField(size=size)
        self._field.read(bit_index)
        self.bit_index = bit_index

    async def update(self, value: int) -> None:
        """Take the packed register value and keep this attribute's bit."""
        pin_state = self._field.set_number_value(value).read(self.bit_index)
        await super().update(pin_state)
