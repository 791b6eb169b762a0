"""
Post-generation board validation.

Checks that requested words can actually be read off a finished grid along any
of the eight straight-line directions. Missing words are reported and logged as
warnings; partial placement is an accepted generator outcome, so validation
never raises for it.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from ..core.base_evaluator import BaseValidator
from ..core.base_puzzle import Position
from ..utils.unicode_utils import normalize_word

logger = logging.getLogger(__name__)

SEARCH_DIRECTIONS: Tuple[Tuple[int, int], ...] = (
    (0, 1),  # horizontal
    (1, 0),  # vertical
    (1, 1),  # diagonal
    (0, -1),  # horizontal reversed
    (-1, 0),  # vertical reversed
    (-1, -1),  # diagonal reversed
    (1, -1),  # anti-diagonal
    (-1, 1),  # anti-diagonal reversed
)


@dataclass
class ValidationReport:
    """Result of validating one board."""

    found: Dict[str, bool] = field(default_factory=dict)
    locations: Dict[str, List[Position]] = field(default_factory=dict)

    @property
    def missing(self) -> List[str]:
        return [word for word, was_found in self.found.items() if not was_found]

    @property
    def valid(self) -> bool:
        return all(self.found.values())


class BoardValidator(BaseValidator):
    """Finds words on a letter grid in all eight directions."""

    def validate(
        self, board: Sequence[Sequence[str]], words: Sequence[str]
    ) -> ValidationReport:
        """
        Look up every requested word on the board.

        Args:
            board: Grid of single-character strings
            words: Requested words (normalized before searching)

        Returns:
            ValidationReport with a found flag per word
        """
        grid = self._as_array(board)
        report = ValidationReport()

        for raw in words:
            word = normalize_word(raw)
            location = self.find_word(grid, word) if word else None
            report.found[raw] = location is not None
            if location is not None:
                report.locations[raw] = location

        if report.missing:
            logger.warning(
                f"Board validation: {len(report.missing)}/{len(report.found)} words "
                f"not found: {report.missing}"
            )
        else:
            logger.debug(f"Board validation passed for {len(report.found)} words")

        return report

    def validate_batch(self, boards: List) -> List[ValidationReport]:
        """Validate each BoardData against its own placed words."""
        return [
            self.validate(board.board, [placed.word for placed in board.placed_words])
            for board in boards
        ]

    def find_word(self, board, word: str) -> Optional[List[Position]]:
        """
        First straight-line occurrence of word on the board.

        Args:
            board: Grid (nested sequences or numpy array)
            word: Uppercase word

        Returns:
            Positions of the occurrence, or None if the word is not on the board
        """
        grid = self._as_array(board)
        if grid.size == 0 or not word:
            return None

        height, width = grid.shape
        starts = np.argwhere(grid == word[0])

        for row, col in starts:
            for d_row, d_col in SEARCH_DIRECTIONS:
                end_row = row + d_row * (len(word) - 1)
                end_col = col + d_col * (len(word) - 1)
                if not (0 <= end_row < height and 0 <= end_col < width):
                    continue
                if all(
                    grid[row + i * d_row, col + i * d_col] == letter
                    for i, letter in enumerate(word)
                ):
                    return [
                        Position(int(row + i * d_row), int(col + i * d_col))
                        for i in range(len(word))
                    ]

        return None

    @staticmethod
    def _as_array(board) -> np.ndarray:
        if isinstance(board, np.ndarray):
            return board
        rows = [list(row) for row in board]
        if not rows or not rows[0]:
            return np.empty((0, 0), dtype=object)
        if len({len(row) for row in rows}) != 1:
            raise ValueError("Board rows must all have the same length")
        return np.array(rows, dtype=object)


def validate_board_contains_words(
    board: Sequence[Sequence[str]], words: Sequence[str]
) -> bool:
    """Aggregate pass/fail: True when every word is on the board."""
    return BoardValidator().validate(board, words).valid
