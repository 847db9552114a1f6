# scramble/core/shuffle.py
from typing import Dict, Hashable, List, Sequence, TypeVar

from .pcg import PCG128

T = TypeVar("T", bound=Hashable)


def _shuffled_hard(symbols: Sequence[T], rng: PCG128) -> List[T]:
    """Single pass that never places a symbol at its own index, except possibly the last one."""
    result: List[T] = []
    # dict as an insertion-ordered set: draws index into a stable order
    remaining: Dict[T, None] = dict.fromkeys(symbols)
    for c in symbols[:-1]:
        c_was_remaining = c in remaining
        if c_was_remaining:
            del remaining[c]
        pick = list(remaining)[rng.next_below(len(remaining))]
        result.append(pick)
        del remaining[pick]
        if c_was_remaining:
            remaining[c] = None
    result.extend(remaining)
    return result


def derange(symbols: Sequence[T], rng: PCG128) -> List[T]:
    """
    Permutes distinct symbols so that no symbol stays at its index, except the last.

    The final position is whatever is left over and may be a fixed point. If
    the whole result still equals the input (only possible for tiny inputs)
    the first two entries are swapped. Consumes len(symbols) - 1 draws plus
    any rejection redraws; a single symbol comes back unchanged.
    """
    values = _shuffled_hard(symbols, rng)
    if len(values) > 1 and values == list(symbols):
        values[0], values[1] = values[1], values[0]
    return values
