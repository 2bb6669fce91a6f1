"""
Defines a fastcs read-only attribute holding a packed register value, with a
related string attribute naming the bits that are set.

Used for the STATUS/OPTIONS register, whose bits flag the modules compiled
into the chip firmware.
"""

from collections.abc import Sequence

from fastcs.attributes import AttrR

from fastcs_seesaw.bitfield import NamedBitField


class AttrNamedBits(AttrR[int]):
    """A read-only integer attribute whose set bits are described by name in
    a separate AttrR[str].
    """

    def __init__(
        self, *args, keys: Sequence[str], str_attr: "AttrR[str]", **kwargs
    ):
        """
        Args:
            keys: Bit names in bit order.
            str_attr: The string attribute to update when this attribute changes.
            *args: Positional arguments for the base AttrR class.
            **kwargs: Keyword arguments for the base AttrR class.
        """
        super().__init__(*args, **kwargs)
        self._create_field = NamedBitField.factory(keys)
        self._str_attr = str_attr
        self.add_on_update_callback(self.update_str_attr)

    def describe(self, value: int) -> str:
        """Comma separated names of the bits set in ``value``."""
        field = self._create_field().set_number_value(value)
        return ", ".join(field.enabled())

    async def update_str_attr(self, value: int | None) -> None:
        """Update the derived string on init/change from the chip.

        Args:
            value: The integer value, or None if not yet initialized.
        """
        if value is None:
            await self._str_attr.update("")
        else:
            await self._str_attr.update(self.describe(value))
