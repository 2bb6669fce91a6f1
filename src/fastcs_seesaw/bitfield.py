"""Bit containers used to pack and unpack Seesaw register values.

Every multi-bit register on the chip (GPIO banks, the options register) is
exchanged as a fixed-width big-endian unsigned integer. Two containers wrap
that integer:

- BitField: bits addressed by numeric index (0 = least significant bit)
- NamedBitField: bits addressed by symbolic key, position in the key
  schema defines the bit index

Example usage::

    pins = BitField().set(5, 1).set(7, 1)
    pins.to_bytes()  # b"\\x00\\x00\\x00\\xa0"

    create_flags = NamedBitField.factory(("GPIO", "ADC"))
    flags = create_flags().set("ADC", 1)
    flags.view  # {"GPIO": 0, "ADC": 1}
"""

from collections.abc import Callable, Iterable
from typing import Protocol

from .errors import SchemaError


class Payload(Protocol):
    """Anything that can be serialized into a register write payload."""

    def to_bytes(self) -> bytes: ...


class BitField:
    """Index-addressed bit container over a fixed-width unsigned integer.

    Attributes:
        value: Current unsigned integer value
        size: Width in bytes used by ``to_bytes`` (default 4)
    """

    def __init__(self, value: int = 0, size: int = 4):
        """Initialize the bit field.

        Args:
            value: Initial unsigned value
            size: Byte width of the serialized form

        Raises:
            ValueError: If size is not positive or value does not fit
        """
        if size < 1:
            raise ValueError(f"Bit field size must be positive, got {size}")
        self.size = size
        self.value = 0
        self.set_number_value(value)

    @property
    def bits(self) -> int:
        """Number of addressable bits."""
        return self.size * 8

    @classmethod
    def from_bytes(cls, data: bytes) -> "BitField":
        """Decode a big-endian register value; the width is ``len(data)``."""
        return cls(int.from_bytes(data, "big"), size=len(data))

    def _check_index(self, index: int) -> None:
        if not 0 <= index < self.bits:
            raise ValueError(f"Bit index {index} out of range [0-{self.bits - 1}]")

    def set_number_value(self, value: int) -> "BitField":
        """Replace the whole value, e.g. after a register read."""
        if not 0 <= value < (1 << self.bits):
            raise ValueError(
                f"Value {value:#x} does not fit in {self.bits} unsigned bits"
            )
        self.value = value
        return self

    def set(self, index: int, bit: int | bool) -> "BitField":
        """Set or clear bit ``index``.

        Returns:
            This field, so calls can be chained
        """
        self._check_index(index)
        mask = 1 << index
        self.value = self.value | mask if bit else self.value & ~mask
        return self

    def read(self, index: int) -> int:
        """Return bit ``index`` (0 or 1) without modifying the field."""
        self._check_index(index)
        return (self.value >> index) & 1

    def to_bytes(self) -> bytes:
        return self.value.to_bytes(self.size, "big")

    def to_bin_string(self) -> str:
        return format(self.value, "b")

    def __int__(self) -> int:
        return self.value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BitField):
            return NotImplemented
        return self.value == other.value and self.size == other.size

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.value:#0{self.size * 2 + 2}x})"


class NamedBitField(BitField):
    """Bit container addressed by symbolic key instead of numeric index.

    The key schema is fixed at construction; the position of a key in the
    schema is its bit index. Using a key outside the schema raises
    SchemaError instead of silently doing nothing.

    Attributes:
        keys: Ordered, distinct bit names
        view: Mapping of key to bit value, rebuilt whenever ``value`` changes
    """

    def __init__(self, keys: Iterable[str], value: int = 0, size: int = 4):
        self.keys = tuple(keys)
        if len(set(self.keys)) != len(self.keys):
            raise ValueError(f"Duplicate keys in bit field schema: {self.keys}")
        if len(self.keys) > size * 8:
            raise ValueError(
                f"{len(self.keys)} keys do not fit in {size * 8} bits"
            )
        self._index = {key: i for i, key in enumerate(self.keys)}
        self.view: dict[str, int] = {}
        super().__init__(value, size)

    @classmethod
    def factory(
        cls, keys: Iterable[str], size: int = 4
    ) -> Callable[[], "NamedBitField"]:
        """Build a constructor of zeroed fields sharing one key schema."""
        schema = tuple(keys)
        return lambda: cls(schema, size=size)

    def index_of(self, key: str) -> int:
        """Resolve a key to its bit index.

        Raises:
            SchemaError: If key is not part of the schema
        """
        try:
            return self._index[key]
        except KeyError:
            raise SchemaError(f"Unknown bit field key {key!r}") from None

    def _update_view(self) -> None:
        self.view = {key: (self.value >> i) & 1 for i, key in enumerate(self.keys)}

    def set_number_value(self, value: int) -> "NamedBitField":
        super().set_number_value(value)
        self._update_view()
        return self

    def set(self, key: str, bit: int | bool) -> "NamedBitField":  # type: ignore[override]
        super().set(self.index_of(key), bit)
        self._update_view()
        return self

    def read(self, key: str) -> int:  # type: ignore[override]
        return super().read(self.index_of(key))

    def enabled(self) -> list[str]:
        """Keys whose bit is currently set, in schema order."""
        return [key for key, bit in self.view.items() if bit]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({', '.join(self.enabled())})"
