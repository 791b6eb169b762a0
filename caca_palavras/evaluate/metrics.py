"""
Diagnostic metrics for generated boards and shuffled word orders.

These numbers are informational: they help compare levels and shuffle methods
but nothing in the generator depends on them.
"""

from typing import Any, Dict, Sequence

from ..core.base_puzzle import Direction, PlacedWord


def analyze_distribution(placed_words: Sequence[PlacedWord]) -> Dict[str, Any]:
    """
    Count placed words per direction.

    Args:
        placed_words: Words placed on a board

    Returns:
        Dict with per-direction counts, the total and percentage strings
    """
    counts = {direction.value: 0 for direction in Direction}
    for placed in placed_words:
        counts[placed.direction.value] += 1

    total = len(placed_words)
    percentages = {
        name: f"{(count / total * 100) if total else 0.0:.1f}%"
        for name, count in counts.items()
    }
    return {"counts": counts, "total": total, "percentages": percentages}


def calculate_diversity(first: Sequence, second: Sequence) -> float:
    """Fraction of positions holding different items; 1.0 if lengths differ."""
    if len(first) != len(second):
        return 1.0
    if not first:
        return 0.0

    differences = sum(1 for a, b in zip(first, second) if a != b)
    return differences / len(first)


def analyze_entropy(original: Sequence, shuffled: Sequence) -> float:
    """
    Measured disorder of a shuffle.

    Weighted mix of the share of items that moved (0.7) and the largest
    displacement relative to the sequence length (0.3).

    Args:
        original: Order before shuffling
        shuffled: Order after shuffling

    Returns:
        Score in [0, 1]; 0 when lengths differ or there is nothing to move
    """
    if len(original) != len(shuffled) or len(original) < 2:
        return 0.0

    positional_changes = 0
    max_distance = 0
    for index, item in enumerate(original):
        new_index = list(shuffled).index(item)
        if new_index != index:
            positional_changes += 1
            max_distance = max(max_distance, abs(new_index - index))

    change_ratio = positional_changes / len(original)
    distance_ratio = max_distance / (len(original) - 1)
    return change_ratio * 0.7 + distance_ratio * 0.3
