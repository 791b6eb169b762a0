"""
Strategic word placement with six level-dependent anchor strategies.

For one word the placer enumerates anchor cells in the order dictated by the
level's strategy, tries every direction at each anchor, keeps the in-bounds and
overlap-compatible candidates, scores them and returns the best one. Scoring
combines direction weights, center/border bias, separation from already placed
words and a seeded random term.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from ..core.base_puzzle import Direction, PlacedWord, Position, word_positions
from .level_config import DirectionWeights, PlacementStrategy, PositionBias
from .seeded_random import SeededRandom

logger = logging.getLogger(__name__)

DIRECTION_SCORE_WEIGHT = 40
POSITION_SCORE_WEIGHT = 30
SEPARATION_SCORE_WEIGHT = 20
RANDOM_SCORE_WEIGHT = 10

# Spiral turn sequence: right, down, left, up
SPIRAL_STEPS = ((0, 1), (1, 0), (0, -1), (-1, 0))


@dataclass
class PlacementCandidate:
    """Transient placement option for a single word."""

    row: int
    col: int
    direction: Direction
    positions: Tuple[Position, ...]
    score: float = 0.0


@dataclass
class PlacementContext:
    """Board shape and level parameters shared by every placement of a run."""

    board_height: int
    board_width: int
    strategy: PlacementStrategy
    direction_weights: DirectionWeights
    position_bias: PositionBias
    placed_words: List[PlacedWord] = field(default_factory=list)


class StrategicPlacer:
    """
    Finds the best placement for one word at a time.

    The context's placed_words list is read on every call, so the generator
    appends to it as words land on the board.
    """

    def __init__(self, context: PlacementContext, rng: SeededRandom):
        self.context = context
        self.rng = rng
        self.strategy = PlacementStrategy.resolve(context.strategy)

    @property
    def height(self) -> int:
        return self.context.board_height

    @property
    def width(self) -> int:
        return self.context.board_width

    def find_best_placement(self, word: str) -> Optional[PlacementCandidate]:
        """
        Pick the highest scoring placement for word.

        Ties keep the first candidate seen, which follows the strategy's anchor order.

        Args:
            word: Normalized word

        Returns:
            Best PlacementCandidate, or None when no valid placement exists
        """
        candidates = self.generate_candidates(word)

        if not candidates:
            logger.warning(
                f"No valid position for {word!r} with strategy {self.strategy.value}"
            )
            return None

        occupied = self._occupied_array()
        best = None
        for candidate in candidates:
            candidate.score = self.calculate_score(candidate, occupied)
            if best is None or candidate.score > best.score:
                best = candidate

        logger.debug(
            f"Best position for {word!r}: {best.direction.value} at "
            f"({best.row}, {best.col}) score {best.score:.2f}"
        )
        return best

    def generate_candidates(self, word: str) -> List[PlacementCandidate]:
        """All in-bounds, overlap-compatible placements in anchor order."""
        letters = self._occupied_letters()
        candidates = []

        for anchor in self.generate_anchor_positions():
            for direction in Direction:
                positions = word_positions(len(word), anchor.row, anchor.col, direction)
                if self._fits(positions) and self._compatible(word, positions, letters):
                    candidates.append(
                        PlacementCandidate(
                            row=anchor.row,
                            col=anchor.col,
                            direction=direction,
                            positions=positions,
                        )
                    )

        return candidates

    def generate_anchor_positions(self) -> List[Position]:
        """Anchor cells ordered by the active strategy."""
        if self.strategy == PlacementStrategy.CENTER_FIRST:
            return self._center_first()
        if self.strategy == PlacementStrategy.EDGES_FIRST:
            return self._edges_first()
        if self.strategy == PlacementStrategy.DIAGONAL_PRIORITY:
            return self._diagonal_priority()
        if self.strategy == PlacementStrategy.SPIRAL_OUT:
            return self._spiral_out()
        if self.strategy == PlacementStrategy.ZONE_BASED:
            return self._zone_based()
        return self._random_weighted()

    def calculate_score(
        self, candidate: PlacementCandidate, occupied: Optional[np.ndarray] = None
    ) -> float:
        """
        Weighted score of a candidate.

        Args:
            candidate: Candidate to score
            occupied: (n, 2) array of occupied cells, computed when omitted

        Returns:
            Score, higher is better
        """
        if occupied is None:
            occupied = self._occupied_array()

        bias = self.context.position_bias
        score = (
            self.context.direction_weights.for_direction(candidate.direction)
            * DIRECTION_SCORE_WEIGHT
        )

        normalized_distance = self._center_distance(candidate.row, candidate.col) / max(
            self.height, self.width
        )
        center_score = (1 - normalized_distance) * bias.center_weight
        border_score = normalized_distance * bias.border_weight
        score += (center_score + border_score) * POSITION_SCORE_WEIGHT

        score += self.separation_score(candidate.positions, occupied) * SEPARATION_SCORE_WEIGHT
        score += self.rng.random() * bias.random_factor * RANDOM_SCORE_WEIGHT

        return score

    @staticmethod
    def separation_score(
        positions: Sequence[Position], occupied: np.ndarray
    ) -> float:
        """
        Reward distance from letters already on the board.

        1.0 for the first word; otherwise (min distance - 1) / 3 clamped to [0, 1].
        """
        if occupied.size == 0:
            return 1.0

        new = np.array(positions, dtype=float)
        deltas = new[:, None, :] - occupied[None, :, :]
        min_distance = float(np.sqrt((deltas ** 2).sum(axis=2)).min())
        return min(1.0, max(0.0, (min_distance - 1) / 3))

    def _center_distance(self, row: int, col: int) -> float:
        return math.hypot(row - self.height / 2, col - self.width / 2)

    def _occupied_array(self) -> np.ndarray:
        cells = [pos for placed in self.context.placed_words for pos in placed.positions]
        if not cells:
            return np.empty((0, 2))
        return np.array(cells, dtype=float)

    def _occupied_letters(self) -> Dict[Position, str]:
        letters = {}
        for placed in self.context.placed_words:
            for letter, pos in zip(placed.word, placed.positions):
                letters[pos] = letter
        return letters

    def _in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def _fits(self, positions: Sequence[Position]) -> bool:
        return all(self._in_bounds(pos.row, pos.col) for pos in positions)

    @staticmethod
    def _compatible(
        word: str, positions: Sequence[Position], letters: Dict[Position, str]
    ) -> bool:
        # A shared cell must already hold the same letter
        return all(letters.get(pos, letter) == letter for letter, pos in zip(word, positions))

    def _all_cells(self) -> List[Position]:
        return [Position(r, c) for r in range(self.height) for c in range(self.width)]

    def _center_first(self) -> List[Position]:
        """Square rings expanding from the center cell."""
        center_row, center_col = self.height // 2, self.width // 2
        max_radius = max(
            center_row, self.height - 1 - center_row, center_col, self.width - 1 - center_col
        )
        positions = []

        for radius in range(max_radius + 1):
            for row in range(center_row - radius, center_row + radius + 1):
                for col in range(center_col - radius, center_col + radius + 1):
                    on_ring = max(abs(row - center_row), abs(col - center_col)) == radius
                    if on_ring and self._in_bounds(row, col):
                        positions.append(Position(row, col))

        return positions

    def _edges_first(self) -> List[Position]:
        """Outer ring first, then each inner ring, every ring shuffled."""
        positions: List[Position] = []
        seen = set()
        layer = 0

        while len(positions) < self.height * self.width:
            ring = []
            for row in range(layer, self.height - layer):
                for col in range(layer, self.width - layer):
                    on_ring = row in (layer, self.height - layer - 1) or col in (
                        layer,
                        self.width - layer - 1,
                    )
                    if on_ring and (row, col) not in seen:
                        seen.add((row, col))
                        ring.append(Position(row, col))
            positions.extend(self.rng.shuffled(ring))
            layer += 1

        return positions

    def _diagonal_priority(self) -> List[Position]:
        """Both main diagonals, then parallels of the main diagonal, then the rest."""
        positions: List[Position] = []
        seen = set()

        def add_group(cells):
            fresh = []
            for cell in cells:
                if cell not in seen:
                    seen.add(cell)
                    fresh.append(Position(*cell))
            positions.extend(self.rng.shuffled(fresh))

        main = []
        for i in range(min(self.height, self.width)):
            main.append((i, i))
            main.append((i, self.width - 1 - i))
        add_group(main)

        for offset in range(1, max(self.height, self.width)):
            parallel = []
            for row in range(self.height):
                if row + offset < self.width:
                    parallel.append((row, row + offset))
                if 0 <= row - offset < self.width:
                    parallel.append((row, row - offset))
            add_group(parallel)

        add_group((r, c) for r in range(self.height) for c in range(self.width))
        return positions

    def _spiral_out(self) -> List[Position]:
        """Deterministic outward spiral from the center."""
        row, col = self.height // 2, self.width // 2
        positions = [Position(row, col)]
        seen = {(row, col)}
        total = self.height * self.width
        direction_index = 0
        steps = 1

        while len(positions) < total:
            # Each step length is walked twice before growing
            for _ in range(2):
                d_row, d_col = SPIRAL_STEPS[direction_index]
                for _ in range(steps):
                    row += d_row
                    col += d_col
                    if self._in_bounds(row, col) and (row, col) not in seen:
                        seen.add((row, col))
                        positions.append(Position(row, col))
                direction_index = (direction_index + 1) % 4
            steps += 1

        return positions

    def _zone_based(self) -> List[Position]:
        """Quadrants in shuffled order, cells shuffled inside each quadrant."""
        mid_row, mid_col = self.height // 2, self.width // 2
        zones = [
            (0, mid_row, 0, mid_col),
            (0, mid_row, mid_col, self.width),
            (mid_row, self.height, 0, mid_col),
            (mid_row, self.height, mid_col, self.width),
        ]
        positions = []

        for start_row, end_row, start_col, end_col in self.rng.shuffled(zones):
            zone = [
                Position(r, c)
                for r in range(start_row, end_row)
                for c in range(start_col, end_col)
            ]
            positions.extend(self.rng.shuffled(zone))

        return positions

    def _random_weighted(self) -> List[Position]:
        return self.rng.shuffled(self._all_cells())
