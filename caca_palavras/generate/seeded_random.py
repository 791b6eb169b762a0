"""
Deterministic pseudo-random source shared by every generator component.

Park-Miller "minimal standard" Lehmer generator: multiplier 16807, modulus 2^31 - 1.
A single SeededRandom instance is created per board-generation run and passed
explicitly to the shuffler and the placer so the whole run is reproducible.
"""

from typing import List, Sequence, TypeVar

T = TypeVar("T")

MODULUS = 2147483647  # 2^31 - 1
MULTIPLIER = 16807


class SeededRandom:
    """Reproducible stream of floats in [0, 1) from an integer seed."""

    def __init__(self, seed: int):
        self.seed = seed
        current = seed % MODULUS
        if current <= 0:
            current += MODULUS - 1
        self._state = current

    def random(self) -> float:
        """Next float in [0, 1)."""
        self._state = (self._state * MULTIPLIER) % MODULUS
        return (self._state - 1) / (MODULUS - 1)

    def randbelow(self, n: int) -> int:
        """Integer in [0, n)."""
        return int(self.random() * n)

    def choice(self, items: Sequence[T]) -> T:
        if not items:
            raise IndexError("Cannot choose from an empty sequence")
        return items[self.randbelow(len(items))]

    def shuffled(self, items: Sequence[T]) -> List[T]:
        """Fisher-Yates shuffle of a copy of items."""
        result = list(items)
        for i in range(len(result) - 1, 0, -1):
            j = self.randbelow(i + 1)
            result[i], result[j] = result[j], result[i]
        return result

    def __repr__(self) -> str:
        return f"SeededRandom(seed={self.seed})"
