"""Hardware identification data and firmware build datecode packing.

The VERSION register returns 4 bytes: a signed 16-bit serial followed by a
16-bit datecode packed as::

    bits 0-4   day
    bits 5-8   month
    bits 9-15  year since 2000
"""

from dataclasses import dataclass

_DAY_MASK = 0x1F
_MONTH_MASK = 0x0F
_YEAR_MASK = 0x7F


def decode_datecode(code: int) -> tuple[int, int, int]:
    """Unpack a datecode into ``(year, month, day)``, year relative to 2000."""
    day = code & _DAY_MASK
    month = (code >> 5) & _MONTH_MASK
    year = (code >> 9) & _YEAR_MASK
    return year, month, day


def encode_datecode(year: int, month: int, day: int) -> int:
    """Pack ``(year, month, day)`` into a datecode.

    Args:
        year: Year since 2000 (0-99)
        month: Month (1-12)
        day: Day of month (1-31)

    Raises:
        ValueError: If any component is out of range
    """
    if not 0 <= year <= 99:
        raise ValueError(f"Year {year} out of range [0-99]")
    if not 1 <= month <= 12:
        raise ValueError(f"Month {month} out of range [1-12]")
    if not 1 <= day <= 31:
        raise ValueError(f"Day {day} out of range [1-31]")
    return (year << 9) | (month << 5) | day


@dataclass(frozen=True)
class HardwareInfo:
    """Identity of a detected Seesaw chip.

    Attributes:
        chip_id: Value of the STATUS/HW_ID register
        serial: Product serial from the VERSION register
        build_date: Firmware build date as (year since 2000, month, day)
    """

    chip_id: int
    serial: int = 0
    build_date: tuple[int, int, int] = (0, 0, 0)

    @property
    def build_date_str(self) -> str:
        year, month, day = self.build_date
        return f"{2000 + year:04d}-{month:02d}-{day:02d}"
