"""
Word-order shuffling with five level-dependent methods.

Each method trades randomness against structure: Fisher-Yates is a uniform
permutation, pattern-based follows fixed index patterns. Every method works on a
copy and returns the same multiset of items it was given.
"""

import logging
import math
from dataclasses import dataclass
from typing import Generic, List, Sequence, TypeVar

from .level_config import ShuffleMethod
from .seeded_random import SeededRandom

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Nominal entropy per method, reported for diagnostics only
METHOD_ENTROPY = {
    ShuffleMethod.FISHER_YATES: 0.95,
    ShuffleMethod.ROTATIONAL: 0.7,
    ShuffleMethod.SEGMENTED: 0.8,
    ShuffleMethod.WEIGHTED_RANDOM: 0.85,
    ShuffleMethod.PATTERN_BASED: 0.6,
}

PATTERNS = (
    (0, 2, 4, 1, 3),  # interleaved
    (2, 0, 3, 1, 4),  # center first
    (1, 3, 0, 4, 2),  # edges first
    (0, 4, 2, 1, 3),  # alternating
)


@dataclass
class ShuffleResult(Generic[T]):
    shuffled: List[T]
    method: ShuffleMethod
    entropy: float


class AdvancedShuffler:
    """
    Reorders sequences with the shuffle method selected by the level.

    The shuffler draws from the SeededRandom it is given, so the same seed and
    the same call sequence reproduce the same order.
    """

    def __init__(self, rng: SeededRandom):
        self.rng = rng

    def shuffle(self, items: Sequence[T], method) -> ShuffleResult[T]:
        """
        Shuffle a copy of items.

        Args:
            items: Sequence to reorder (left untouched)
            method: ShuffleMethod or its name; unknown names use fisher-yates

        Returns:
            ShuffleResult with the new order, the method used and its nominal entropy
        """
        method = ShuffleMethod.resolve(method)
        working = list(items)

        if method == ShuffleMethod.ROTATIONAL:
            shuffled = self._rotational(working)
        elif method == ShuffleMethod.SEGMENTED:
            shuffled = self._segmented(working)
        elif method == ShuffleMethod.WEIGHTED_RANDOM:
            shuffled = self._weighted_random(working)
        elif method == ShuffleMethod.PATTERN_BASED:
            shuffled = self._pattern_based(working)
        else:
            shuffled = self._fisher_yates(working)

        entropy = METHOD_ENTROPY[method]
        logger.debug(
            f"Shuffled {len(items)} items with {method.value} (entropy {entropy:.2f})"
        )
        return ShuffleResult(shuffled=shuffled, method=method, entropy=entropy)

    def _fisher_yates(self, items: List[T]) -> List[T]:
        for i in range(len(items) - 1, 0, -1):
            j = self.rng.randbelow(i + 1)
            items[i], items[j] = items[j], items[i]
        return items

    def _rotational(self, items: List[T]) -> List[T]:
        """Rotate each contiguous segment by a random offset."""
        if len(items) <= 1:
            return items

        segments = max(2, math.ceil(len(items) / 3))
        segment_size = math.ceil(len(items) / segments)

        for i in range(segments):
            start = i * segment_size
            end = min(start + segment_size, len(items))
            segment = items[start:end]
            rotation = self.rng.randbelow(len(segment))
            items[start:end] = segment[rotation:] + segment[:rotation]

        return items

    def _segmented(self, items: List[T]) -> List[T]:
        """Fisher-Yates inside 2-4 segments, keeping segment order."""
        if len(items) <= 2:
            return items

        num_segments = min(4, max(2, len(items) // 2))
        segment_size = math.ceil(len(items) / num_segments)
        result: List[T] = []

        for i in range(num_segments):
            start = i * segment_size
            result.extend(self._fisher_yates(items[start : start + segment_size]))

        return result

    def _weighted_random(self, items: List[T]) -> List[T]:
        """Longer words drift to the front; non-strings keep a positional bias."""
        keyed = []
        for index, item in enumerate(items):
            if isinstance(item, str):
                weight = len(item) ** 1.2 + self.rng.random() * 0.5
            else:
                weight = (len(items) - index) * 0.3 + self.rng.random() * 2
            keyed.append((weight + (self.rng.random() - 0.5) * 0.3, index, item))

        keyed.sort(key=lambda entry: (-entry[0], entry[1]))
        return [item for _, _, item in keyed]

    def _pattern_based(self, items: List[T]) -> List[T]:
        """Tile one of the fixed 5-index patterns across the sequence."""
        if len(items) <= 1:
            return items

        pattern = self.rng.choice(PATTERNS)
        used = [False] * len(items)
        result: List[T] = []

        for cycle in range(math.ceil(len(items) / len(pattern))):
            for offset in pattern:
                source = (cycle * len(pattern) + offset) % len(items)
                if not used[source]:
                    result.append(items[source])
                    used[source] = True

        # Leftover tail in original order
        result.extend(item for item, taken in zip(items, used) if not taken)
        return result
