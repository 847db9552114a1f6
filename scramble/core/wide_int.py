# scramble/core/wide_int.py
from dataclasses import dataclass

MASK64 = (1 << 64) - 1
MASK128 = (1 << 128) - 1


@dataclass(frozen=True)
class UInt128:
    """
    Unsigned 128-bit integer made of two 64-bit words.

    All arithmetic wraps modulo 2**128, the same way fixed-width machine
    integers do. Values are immutable; every operation returns a new UInt128.
    """
    high: int
    low: int

    def __post_init__(self):
        for name, word in (("high", self.high), ("low", self.low)):
            if not 0 <= word <= MASK64:
                raise ValueError(f"UInt128.{name} must fit in 64 bits, got {word!r}")

    @classmethod
    def from_int(cls, value: int) -> "UInt128":
        """Builds a value from any int, keeping its low 128 bits (two's complement for negatives)."""
        value &= MASK128
        return cls(high=value >> 64, low=value & MASK64)

    def __int__(self) -> int:
        return (self.high << 64) | self.low

    def __index__(self) -> int:
        return int(self)

    def __mul__(self, other: "UInt128 | int") -> "UInt128":
        # Only the low 128 bits of the product survive, so high*high drops out
        # and the cross terms only contribute their low words.
        if isinstance(other, int):
            other = UInt128.from_int(other)
        if not isinstance(other, UInt128):
            return NotImplemented
        product = self.low * other.low
        high = (product >> 64) + self.low * other.high + self.high * other.low
        return UInt128(high=high & MASK64, low=product & MASK64)

    __rmul__ = __mul__

    def __add__(self, other: "UInt128 | int") -> "UInt128":
        if isinstance(other, int):
            other = UInt128.from_int(other)
        if not isinstance(other, UInt128):
            return NotImplemented
        low = self.low + other.low
        carry = low >> 64
        return UInt128(high=(self.high + other.high + carry) & MASK64, low=low & MASK64)

    __radd__ = __add__

    @property
    def half(self) -> "UInt128":
        low = (self.low >> 1) | ((self.high & 1) << 63)
        return UInt128(high=self.high >> 1, low=low)

    @property
    def is_zero(self) -> bool:
        return self.low == 0 and self.high == 0

    @property
    def negated(self) -> "UInt128":
        return UInt128(high=self.high ^ MASK64, low=self.low ^ MASK64) + 1


ZERO = UInt128(high=0, low=0)
ONE = UInt128(high=0, low=1)
