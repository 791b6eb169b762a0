"""
Board Generator - Orchestrator for word-search board generation

Runs the whole pipeline for one board: resolve the level config, normalize and
filter the words, shuffle them, place each with the strategic placer and fill the
remaining cells with filler letters. Words that cannot be used are reported in
BoardData.skipped_words; partial placement is an expected outcome, not an error.
"""

import logging
from datetime import date
from typing import List, Optional, Sequence, Tuple

from ..core.base_puzzle import BoardData, PlacedWord, SkippedWord, SkipReason
from ..evaluate.board_validator import BoardValidator
from ..evaluate.metrics import analyze_distribution
from ..utils.config_loader import get_config
from ..utils.unicode_utils import is_valid_game_word, normalize_word
from .level_config import LevelConfig, generate_level_config
from .seeded_random import SeededRandom
from .shuffler import AdvancedShuffler
from .strategic_placer import PlacementContext, StrategicPlacer

logger = logging.getLogger(__name__)

FILLER_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"


def _require_positive_int(name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError(f"{name} must be a positive integer, got {value!r}")


class BoardGenerator:
    """
    Generates word-search boards of a fixed shape.

    One SeededRandom, seeded from the level config, drives the shuffle, the
    placement search and the filler letters, so a run is fully reproducible
    for a given level and calendar day.
    """

    def __init__(self, height: int, width: int):
        """
        Initialize board generator.

        Args:
            height: Number of rows
            width: Number of columns

        Raises:
            ValueError: If either dimension is not a positive integer
        """
        _require_positive_int("height", height)
        _require_positive_int("width", width)

        self.height = height
        self.width = width
        self.config = get_config()
        self.generation_config = self.config.get_generation_config()
        self.min_word_length = self.generation_config["min_word_length"]

    @property
    def max_word_length(self) -> int:
        return min(self.height, self.width)

    def generate(
        self,
        words: Sequence[str],
        level: int = 1,
        today: Optional[date] = None,
        level_config: Optional[LevelConfig] = None,
    ) -> BoardData:
        """
        Generate a board for the given words and level.

        Args:
            words: Raw words from the word bank
            level: Level number (1-based), selects the placement config
            today: Calendar day folded into the seed, defaults to date.today()
            level_config: Explicit config, overrides level/today when given

        Returns:
            BoardData with the filled grid, placed words and skipped words

        Raises:
            ValueError: If words is None or level is not a positive integer
        """
        if words is None:
            raise ValueError("words must be a sequence of strings, got None")
        if isinstance(words, str):
            raise ValueError("words must be a sequence of strings, not a single string")
        _require_positive_int("level", level)

        if level_config is None:
            level_config = generate_level_config(level, today)

        logger.info(
            f"Generating {self.height}x{self.width} board for level {level_config.level}: "
            f"{len(words)} words, strategy={level_config.strategy.value}, "
            f"shuffle={level_config.shuffle_method.value}, seed={level_config.seed:x}"
        )

        rng = SeededRandom(level_config.seed)
        valid_words, skipped = self.filter_words(words)

        if not valid_words:
            logger.warning(
                f"No valid words for {self.height}x{self.width} board at level "
                f"{level_config.level}, returning filler-only board"
            )
            return BoardData(
                board=self._fill_grid(self._empty_grid(), rng),
                placed_words=[],
                skipped_words=skipped,
                level_config=level_config,
            )

        shuffle_result = AdvancedShuffler(rng).shuffle(
            valid_words, level_config.shuffle_method
        )
        logger.debug(
            f"Word order ({shuffle_result.method.value}, entropy "
            f"{shuffle_result.entropy:.2f}): {shuffle_result.shuffled}"
        )

        grid, placed, unplaced = self.distribute_words(
            shuffle_result.shuffled, level_config, rng
        )
        skipped.extend(SkippedWord(word, SkipReason.NO_PLACEMENT) for word in unplaced)

        board = BoardData(
            board=self._fill_grid(grid, rng),
            placed_words=placed,
            skipped_words=skipped,
            level_config=level_config,
            shuffle_method=shuffle_result.method.value,
            shuffle_entropy=shuffle_result.entropy,
        )
        self._report(board, len(valid_words))
        return board

    def filter_words(self, words: Sequence[str]) -> Tuple[List[str], List[SkippedWord]]:
        """
        Normalize words and drop the ones that cannot go on this board.

        Args:
            words: Raw words

        Returns:
            Tuple of (valid normalized words in input order, skipped words)
        """
        valid: List[str] = []
        skipped: List[SkippedWord] = []
        seen = set()

        for raw in words:
            word = normalize_word(raw) if isinstance(raw, str) else ""
            if is_valid_game_word(word, self.max_word_length, self.min_word_length):
                if word not in seen:
                    seen.add(word)
                    valid.append(word)
                    continue
                reason = SkipReason.DUPLICATE
            elif not word:
                reason = SkipReason.INVALID
                word = raw if isinstance(raw, str) else repr(raw)
            elif len(word) < self.min_word_length:
                reason = SkipReason.TOO_SHORT
            else:
                reason = SkipReason.TOO_LONG

            logger.warning(f"Word {word!r} rejected: {reason.value}")
            skipped.append(SkippedWord(word, reason))

        return valid, skipped

    def distribute_words(
        self, words: Sequence[str], level_config: LevelConfig, rng: SeededRandom
    ) -> Tuple[List[List[Optional[str]]], List[PlacedWord], List[str]]:
        """
        Place words one by one in the given order.

        A word without a valid placement is skipped, never retried.

        Args:
            words: Normalized words in processing order
            level_config: Strategy and weights for the placer
            rng: Random source of the run

        Returns:
            Tuple of (partial grid with None in empty cells, placed words, unplaced words)
        """
        grid = self._empty_grid()
        context = PlacementContext(
            board_height=self.height,
            board_width=self.width,
            strategy=level_config.strategy,
            direction_weights=level_config.direction_weights,
            position_bias=level_config.position_bias,
        )
        placer = StrategicPlacer(context, rng)
        unplaced: List[str] = []

        for word in words:
            candidate = placer.find_best_placement(word)
            if candidate is None:
                unplaced.append(word)
                continue

            placed = PlacedWord(
                word=word,
                start_row=candidate.row,
                start_col=candidate.col,
                direction=candidate.direction,
                positions=candidate.positions,
            )
            for letter, pos in zip(word, placed.positions):
                grid[pos.row][pos.col] = letter
            context.placed_words.append(placed)

        return grid, list(context.placed_words), unplaced

    def _empty_grid(self) -> List[List[Optional[str]]]:
        return [[None] * self.width for _ in range(self.height)]

    def _fill_grid(
        self, grid: List[List[Optional[str]]], rng: SeededRandom
    ) -> List[List[str]]:
        """Fill every empty cell with a uniformly drawn A-Z letter."""
        return [
            [cell if cell is not None else rng.choice(FILLER_ALPHABET) for cell in row]
            for row in grid
        ]

    def _report(self, board: BoardData, valid_count: int) -> None:
        placed_count = len(board.placed_words)
        if placed_count == 0:
            logger.error(
                f"No words placed on {self.height}x{self.width} board "
                f"(level {board.level_config.level})"
            )
            return

        success_rate = placed_count / valid_count
        logger.info(
            f"Board generated: {placed_count}/{valid_count} words placed "
            f"({success_rate:.1%}), distribution={analyze_distribution(board.placed_words)['counts']}"
        )
        if success_rate < self.generation_config["low_placement_rate_threshold"]:
            logger.warning(
                f"Low placement rate {success_rate:.1%} on {self.height}x{self.width} board"
            )

        if self.generation_config["validate_after_generation"]:
            BoardValidator().validate(board.board, [w.word for w in board.placed_words])


def generate_board(
    height: int,
    width: int,
    words: Sequence[str],
    level: int = 1,
    today: Optional[date] = None,
) -> BoardData:
    """
    Generate a word-search board.

    Args:
        height: Number of rows
        width: Number of columns
        words: Raw words from the word bank
        level: Level number (1-based)
        today: Calendar day folded into the seed, defaults to date.today()

    Returns:
        BoardData for the run
    """
    return BoardGenerator(height, width).generate(words, level, today=today)
