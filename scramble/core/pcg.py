# scramble/core/pcg.py
# PCG-XSL-RR 128/64, single stream ("pcg64s" / pcg_oneseq_128_xsl_rr_64).
# http://www.pcg-random.org/pdf/toms-oneill-pcg-family.pdf
from typing import Union

from loguru import logger

from .wide_int import MASK64, ONE, ZERO, UInt128

MULTIPLIER = UInt128(high=2549297995355413924, low=4865540595714422341)
INCREMENT = UInt128(high=6364136223846793005, low=1442695040888963407)
DEFAULT_SEED = UInt128(high=123, low=456)

_TWO_64 = 1 << 64


def parse_seed(text: str) -> UInt128:
    """
    Parses a seed written as ``HIGH:LOW`` (two 64-bit words) or as one
    integer literal (decimal, ``0x`` hex, ...) taken as the full 128-bit value.
    """
    text = text.strip()
    try:
        if ":" in text:
            high_text, low_text = text.split(":", 1)
            return UInt128(high=int(high_text, 0), low=int(low_text, 0))
        value = int(text, 0)
    except ValueError as e:
        raise ValueError(f"Invalid seed {text!r}: {e}") from None
    if not 0 <= value < 1 << 128:
        raise ValueError(f"Invalid seed {text!r}: must fit in 128 unsigned bits")
    return UInt128.from_int(value)


def rotate_right(value: int, count: int) -> int:
    """Rotates a 64-bit word right by count (0-63) bits."""
    return ((value >> count) | (value << ((64 - count) & 63))) & MASK64


class PCG128:
    """
    Deterministic 64-bit generator over a 128-bit LCG state.

    Output for a seed never changes between runs or platforms, which is what
    lets a puzzle file be re-scrambled reproducibly.
    """

    def __init__(self, seed: UInt128 = DEFAULT_SEED):
        # A bare LCG started straight from the seed is weak: step once from
        # zero, mix the seed in, then step again.
        self.state = ZERO
        self.draws = 0
        self._step()
        self.state = self.state + seed
        self._step()
        logger.trace(f"PCG128 seeded with {int(seed):#034x}")

    @classmethod
    def from_state(cls, state: UInt128) -> "PCG128":
        """Builds a generator positioned exactly at a raw state, skipping the warm-up."""
        rng = cls.__new__(cls)
        rng.state = state
        rng.draws = 0
        return rng

    def _step(self) -> int:
        self.state = self.state * MULTIPLIER + INCREMENT
        return rotate_right(self.state.low ^ self.state.high, self.state.high >> 58)

    def next(self) -> int:
        """Returns the next 64-bit output."""
        self.draws += 1
        return self._step()

    def next_below(self, bound: int) -> int:
        """
        Returns a uniform integer in [0, bound) for 1 <= bound <= 2**64.

        Multiply-shift with rejection: the high word of ``draw * bound`` is the
        result, and draws whose low word lands in the biased zone are redrawn.
        """
        if not 0 < bound <= _TWO_64:
            raise ValueError(f"bound must be in 1..2**64, got {bound}")
        product = self.next() * bound
        if product & MASK64 < bound:
            threshold = (_TWO_64 - bound) % bound
            while product & MASK64 < threshold:
                product = self.next() * bound
        return product >> 64

    def advance(self, steps: Union[UInt128, int]) -> None:
        """
        Jumps the generator forward by ``steps`` outputs in O(log steps).

        Ints are taken modulo 2**128; the LCG has full period, so a negative
        count moves the generator backwards.
        """
        if isinstance(steps, int):
            steps = UInt128.from_int(steps)
        acc_mult, acc_add = ONE, ZERO
        cur_mult, cur_add = MULTIPLIER, INCREMENT
        remaining = steps
        while not remaining.is_zero:
            if remaining.low & 1:
                acc_mult = acc_mult * cur_mult
                acc_add = acc_add * cur_mult + cur_add
            cur_add = (cur_mult + 1) * cur_add
            cur_mult = cur_mult * cur_mult
            remaining = remaining.half
        self.state = acc_mult * self.state + acc_add
        self.draws += int(steps)
        logger.debug(f"PCG128 advanced by {int(steps)} steps")

    def __iter__(self):
        return self

    def __next__(self) -> int:
        return self.next()
