"""
Minimal base puzzle interface and the word-search board data model.

This module provides the essential interface that all puzzle types implement,
plus the value types produced by the board generator: grid positions, placed
words, skipped words and the final board.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, NamedTuple, Optional, Tuple


class Direction(str, Enum):
    """Word placement directions. Diagonal always runs top-left to bottom-right."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    DIAGONAL = "diagonal"

    @property
    def delta(self) -> Tuple[int, int]:
        """(row, col) step between consecutive letters."""
        return _DIRECTION_DELTAS[self]


_DIRECTION_DELTAS = {
    Direction.HORIZONTAL: (0, 1),
    Direction.VERTICAL: (1, 0),
    Direction.DIAGONAL: (1, 1),
}


class Position(NamedTuple):
    """Zero-indexed grid coordinate."""

    row: int
    col: int

    def to_dict(self) -> Dict[str, int]:
        return {"row": self.row, "col": self.col}


def word_positions(
    length: int, row: int, col: int, direction: Direction
) -> Tuple[Position, ...]:
    """Positions covered by a word of the given length starting at (row, col)."""
    d_row, d_col = direction.delta
    return tuple(Position(row + i * d_row, col + i * d_col) for i in range(length))


@dataclass(frozen=True)
class PlacedWord:
    """
    A word successfully placed on the board.

    Attributes:
        word: Normalized (uppercase, diacritics-stripped) word
        start_row: Row of the first letter
        start_col: Column of the first letter
        direction: Placement direction
        positions: One Position per letter, in reading order
    """

    word: str
    start_row: int
    start_col: int
    direction: Direction
    positions: Tuple[Position, ...]

    def __post_init__(self):
        if len(self.positions) != len(self.word):
            raise ValueError(
                f"PlacedWord {self.word} has {len(self.positions)} positions "
                f"for {len(self.word)} letters"
            )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "word": self.word,
            "startRow": self.start_row,
            "startCol": self.start_col,
            "direction": self.direction.value,
            "positions": [pos.to_dict() for pos in self.positions],
        }


class SkipReason(str, Enum):
    """Why a requested word is missing from the board."""

    TOO_SHORT = "too_short"
    TOO_LONG = "too_long"
    INVALID = "invalid"
    DUPLICATE = "duplicate"
    NO_PLACEMENT = "no_placement"


@dataclass(frozen=True)
class SkippedWord:
    """A requested word that did not make it onto the board."""

    word: str
    reason: SkipReason

    def to_dict(self) -> Dict[str, str]:
        return {"word": self.word, "reason": self.reason.value}


@dataclass
class BasePuzzle(ABC):
    """
    Base class for all puzzle types.

    Provides the minimal interface needed by renderers and validators.
    """

    @abstractmethod
    def get_size(self) -> Tuple[int, int]:
        """Return puzzle dimensions."""
        pass

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """Convert puzzle to dictionary for serialization."""
        pass


@dataclass
class BoardData(BasePuzzle):
    """
    A generated word-search board.

    Attributes:
        board: Grid of single uppercase letters, height rows by width columns
        placed_words: Words placed on the grid with their positions
        skipped_words: Requested words that were filtered out or could not be placed
        level_config: LevelConfig used for the run (None for hand-built boards)
        shuffle_method: Shuffle method applied to the word order
        shuffle_entropy: Nominal entropy of that shuffle method
    """

    board: List[List[str]]
    placed_words: List[PlacedWord] = field(default_factory=list)
    skipped_words: List[SkippedWord] = field(default_factory=list)
    level_config: Optional[Any] = None
    shuffle_method: Optional[str] = None
    shuffle_entropy: float = 0.0

    @property
    def height(self) -> int:
        return len(self.board)

    @property
    def width(self) -> int:
        return len(self.board[0]) if self.board else 0

    @property
    def requested_count(self) -> int:
        return len(self.placed_words) + len(self.skipped_words)

    @property
    def placement_rate(self) -> float:
        """Fraction of requested words that were placed (1.0 when nothing was requested)."""
        requested = self.requested_count
        return len(self.placed_words) / requested if requested else 1.0

    def get_size(self) -> Tuple[int, int]:
        """
        Get board dimensions.

        Returns:
            Tuple of (rows, cols)
        """
        return (self.height, self.width)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "board": [row[:] for row in self.board],
            "placedWords": [word.to_dict() for word in self.placed_words],
            "skippedWords": [word.to_dict() for word in self.skipped_words],
            "levelConfig": self.level_config.to_dict()
            if self.level_config is not None
            else None,
            "shuffleMethod": self.shuffle_method,
            "shuffleEntropy": self.shuffle_entropy,
        }
