"""
MUS file trailer model.

The trailer is read backward from the end of the file. In file order a
5-field trailer is:

    0.0        start-of-trailer marker
    serial     program serial number (only when field_count > 4)
    version    program version that wrote the file
    unit       0.0 = inches, 1.0 = centimeters
    5.0        field_count
    -9999.0    sentinel

Future SCORE versions may grow field_count; the extra words sit between
the start marker and the serial and are kept as `reserved`.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from scoreconv.utils.validation import SENTINEL


class Unit(Enum):
    """Measurement unit recorded in the trailer."""

    INCHES = "inches"
    CENTIMETERS = "centimeters"
    UNKNOWN = "unknown"

    @classmethod
    def from_code(cls, code: float) -> "Unit":
        if code == 0.0:
            return cls.INCHES
        if code == 1.0:
            return cls.CENTIMETERS
        return cls.UNKNOWN

    @property
    def code(self) -> Optional[float]:
        return {Unit.INCHES: 0.0, Unit.CENTIMETERS: 1.0}.get(self)


@dataclass
class Trailer:
    """
    Metadata block at the end of a MUS file.

    Attributes:
        field_count: Number of trailer floats before the sentinel (4 or 5)
        unit: Measurement unit
        version: SCORE version that created the file
        serial: Program serial number, present iff field_count > 4
        sentinel: End marker, always -9999.0
        unit_code: Raw unit float (kept for unknown units)
        reserved: Extra words of trailers with field_count > 5
    """

    field_count: float = 5.0
    unit: Unit = Unit.INCHES
    version: float = 4.0
    serial: Optional[float] = 4000000.0
    sentinel: float = SENTINEL
    unit_code: Optional[float] = None
    reserved: List[float] = field(default_factory=list)

    def __post_init__(self):
        if self.unit_code is None:
            if self.unit.code is None:
                raise ValueError("unit_code is required for an unknown unit")
            self.unit_code = self.unit.code
        else:
            self.unit = Unit.from_code(self.unit_code)

        if not self.has_serial:
            self.serial = None
        elif self.serial is None:
            self.serial = 0.0

        slots = self.reserved_count
        if len(self.reserved) > slots:
            raise ValueError(
                f"trailer with {self.field_count:g} fields has room for "
                f"{slots} reserved words, got {len(self.reserved)}"
            )
        self.reserved = list(self.reserved) + [0.0] * (slots - len(self.reserved))

    @property
    def has_serial(self) -> bool:
        return self.field_count > 4.0

    @property
    def word_count(self) -> int:
        """Words occupied at the end of the file, start marker included."""
        return int(self.field_count) + 1

    @property
    def byte_size(self) -> int:
        return 4 * self.word_count

    @property
    def reserved_count(self) -> int:
        # marker, version, unit, field_count, sentinel, and the serial
        fixed = 6 if self.has_serial else 5
        return max(self.word_count - fixed, 0)
