"""Seeded linear congruential generator.

Every stochastic decision in a generation run goes through one
``SeededRandom`` so that a seed reproduces the same map bit for bit. The
stdlib ``random`` module is only used to invent a seed when the caller did
not supply one.
"""

from __future__ import annotations

import random
from typing import List, MutableSequence, Optional, Sequence, TypeVar, Union

from .errors import EmptyCollectionError, InvalidRangeError

T = TypeVar("T")

# Numerical Recipes multiplier/increment over a 31-bit modulus.
LCG_MULTIPLIER = 1664525
LCG_INCREMENT = 1013904223
LCG_MODULUS = 2147483647


def hash_seed_string(text: str) -> int:
    """Rolling 32-bit string hash (``h = h * 31 + code_unit``) folded into [0, 2**31 - 1)."""
    h = 0
    raw = text.encode("utf-16-le")
    for i in range(0, len(raw), 2):
        code_unit = raw[i] | (raw[i + 1] << 8)
        h = ((h << 5) - h + code_unit) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return abs(h) % LCG_MODULUS


def generate_random_seed() -> str:
    return str(random.randrange(LCG_MODULUS))


class SeededRandom:
    def __init__(self, seed: Optional[Union[str, int]] = None):
        if seed is None:
            seed = generate_random_seed()
        if isinstance(seed, str):
            self._seed = hash_seed_string(seed)
        elif isinstance(seed, int) and not isinstance(seed, bool):
            self._seed = seed % LCG_MODULUS
        else:
            raise TypeError(f"seed must be str or int, got {type(seed).__name__}")
        self._state = self._seed

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def seed_string(self) -> str:
        return str(self._seed)

    def reset(self) -> None:
        self._state = self._seed

    def next(self) -> float:
        """Advance the generator; returns a float in [0, 1)."""
        self._state = (self._state * LCG_MULTIPLIER + LCG_INCREMENT) % LCG_MODULUS
        return self._state / LCG_MODULUS

    def next_int(self, lo: int, hi: int) -> int:
        """Integer in [lo, hi], both inclusive."""
        if lo > hi:
            raise InvalidRangeError(lo, hi)
        span = hi - lo + 1
        return int(self.next() * span) + lo

    def next_int_max(self, n: int) -> int:
        """Integer in [0, n)."""
        return int(self.next() * n)

    def choice(self, items: Sequence[T]) -> T:
        if len(items) == 0:
            raise EmptyCollectionError("cannot choose from an empty collection")
        return items[self.next_int_max(len(items))]

    def shuffle(self, items: MutableSequence[T]) -> MutableSequence[T]:
        """Fisher-Yates shuffle in place; returns ``items`` for chaining."""
        for i in range(len(items) - 1, 0, -1):
            j = self.next_int_max(i + 1)
            items[i], items[j] = items[j], items[i]
        return items

    def sample_indices(self, population: int, k: int) -> List[int]:
        """``k`` distinct indices from ``range(population)`` in ascending order."""
        indices = list(range(population))
        self.shuffle(indices)
        return sorted(indices[:k])

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"SeededRandom(seed={self._seed})"


__all__ = ["SeededRandom", "generate_random_seed", "hash_seed_string", "LCG_MODULUS"]
