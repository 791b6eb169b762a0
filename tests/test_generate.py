"""
Comprehensive test suite for caca_palavras.generate module.
Tests the seeded random source, level configs, shuffling, strategic placement
and full board generation.
"""

import logging
from datetime import date

import numpy as np
import pytest

from caca_palavras.core.base_puzzle import (
    BoardData,
    Direction,
    PlacedWord,
    Position,
    SkipReason,
    word_positions,
)
from caca_palavras.generate.board_generator import BoardGenerator, generate_board
from caca_palavras.generate.level_config import (
    LEVEL_CYCLE,
    DirectionWeights,
    PlacementStrategy,
    PositionBias,
    ShuffleMethod,
    generate_level_config,
    generate_level_seed,
)
from caca_palavras.generate.seeded_random import MODULUS, SeededRandom
from caca_palavras.generate.shuffler import PATTERNS, AdvancedShuffler
from caca_palavras.generate.strategic_placer import PlacementContext, StrategicPlacer

TODAY = date(2024, 3, 15)
WORDS = ["GATO", "CASA", "SOL", "LUA", "MAR"]


def make_placer(height, width, strategy, seed=42, weights=None, bias=None, placed=None):
    context = PlacementContext(
        board_height=height,
        board_width=width,
        strategy=strategy,
        direction_weights=weights or DirectionWeights(0.4, 0.4, 0.2),
        position_bias=bias or PositionBias(0.5, 0.5, 0.1),
        placed_words=placed or [],
    )
    return StrategicPlacer(context, SeededRandom(seed))


def assert_board_consistent(board: BoardData, height: int, width: int):
    """Grid shape, letters, straight-line placements and overlap agreement."""
    assert len(board.board) == height
    assert all(len(row) == width for row in board.board)
    assert all(len(cell) == 1 and "A" <= cell <= "Z" for row in board.board for cell in row)

    cell_letters = {}
    for placed in board.placed_words:
        assert len(placed.positions) == len(placed.word)
        assert placed.positions == word_positions(
            len(placed.word), placed.start_row, placed.start_col, placed.direction
        )
        for letter, pos in zip(placed.word, placed.positions):
            assert 0 <= pos.row < height and 0 <= pos.col < width
            assert board.board[pos.row][pos.col] == letter
            assert cell_letters.setdefault(pos, letter) == letter


class TestSeededRandom:
    """Test the Park-Miller random source."""

    def test_first_value_for_seed_one(self):
        """Seed 1 produces 16807 as its first state."""
        rng = SeededRandom(1)
        assert rng.random() == 16806 / (MODULUS - 1)

    def test_same_seed_same_sequence(self):
        """Two sources with the same seed stay in lockstep."""
        first = SeededRandom(12345)
        second = SeededRandom(12345)
        assert [first.random() for _ in range(50)] == [second.random() for _ in range(50)]

    def test_non_positive_seeds_are_normalized(self):
        """Seed 0 maps into the valid range instead of sticking at zero."""
        zero = SeededRandom(0)
        top = SeededRandom(MODULUS - 1)
        values = [zero.random() for _ in range(10)]
        assert values == [top.random() for _ in range(10)]
        assert len(set(values)) == 10

    def test_values_in_unit_interval(self):
        """Every value lies in [0, 1)."""
        rng = SeededRandom(-987654)
        assert all(0 <= rng.random() < 1 for _ in range(1000))

    def test_shuffled_returns_permutation_copy(self):
        """shuffled() leaves the input alone and keeps every item."""
        items = list(range(20))
        result = SeededRandom(7).shuffled(items)
        assert items == list(range(20))
        assert sorted(result) == items

    def test_choice_on_empty_sequence(self):
        with pytest.raises(IndexError):
            SeededRandom(3).choice([])


class TestLevelConfig:
    """Test level number to LevelConfig resolution."""

    def test_seed_formula(self):
        """Level 1 on March 15th: 48 * 4200 + (15 + 3 * 32)."""
        assert generate_level_seed(1, TODAY) == 201711

    def test_seed_changes_with_day(self):
        assert generate_level_seed(5, date(2024, 3, 15)) != generate_level_seed(
            5, date(2024, 3, 16)
        )

    def test_config_is_deterministic_for_a_day(self):
        """Same level and day give identical configs."""
        assert generate_level_config(9, TODAY) == generate_level_config(9, TODAY)
        assert generate_level_config(9, TODAY).to_dict() == generate_level_config(
            9, TODAY
        ).to_dict()

    @pytest.mark.parametrize(
        "level,strategy,shuffle_method",
        [
            (1, PlacementStrategy.CENTER_FIRST, ShuffleMethod.FISHER_YATES),
            (2, PlacementStrategy.EDGES_FIRST, ShuffleMethod.FISHER_YATES),
            (5, PlacementStrategy.ZONE_BASED, ShuffleMethod.ROTATIONAL),
            (6, PlacementStrategy.RANDOM_WEIGHTED, ShuffleMethod.ROTATIONAL),
            (7, PlacementStrategy.CENTER_FIRST, ShuffleMethod.ROTATIONAL),
            (12, PlacementStrategy.RANDOM_WEIGHTED, ShuffleMethod.SEGMENTED),
            (15, PlacementStrategy.DIAGONAL_PRIORITY, ShuffleMethod.WEIGHTED_RANDOM),
            (20, PlacementStrategy.EDGES_FIRST, ShuffleMethod.PATTERN_BASED),
        ],
    )
    def test_level_table(self, level, strategy, shuffle_method):
        config = generate_level_config(level, TODAY)
        assert config.strategy == strategy
        assert config.shuffle_method == shuffle_method

    @pytest.mark.parametrize("level", range(1, LEVEL_CYCLE + 1))
    def test_levels_cycle_every_twenty(self, level):
        """Level L and L + 20 share strategy and shuffle method but not the seed."""
        config = generate_level_config(level, TODAY)
        next_cycle = generate_level_config(level + LEVEL_CYCLE, TODAY)
        assert config.strategy == next_cycle.strategy
        assert config.shuffle_method == next_cycle.shuffle_method
        assert config.seed != next_cycle.seed

    @pytest.mark.parametrize("level", [1, 3, 8, 14, 20, 57, 400])
    def test_weights_are_clamped_and_rounded(self, level):
        config = generate_level_config(level, TODAY)
        values = [
            config.direction_weights.horizontal,
            config.direction_weights.vertical,
            config.direction_weights.diagonal,
            config.position_bias.center_weight,
            config.position_bias.border_weight,
            config.position_bias.random_factor,
        ]
        for value in values:
            assert 0.0 <= value <= 1.0
            assert round(value, 2) == value

    def test_variation_stays_small(self):
        """Perturbation is at most ±10% on directions and ±7.5% on position."""
        config = generate_level_config(1, TODAY)
        assert abs(config.direction_weights.horizontal - 0.4) <= 0.105
        assert abs(config.direction_weights.diagonal - 0.2) <= 0.105
        assert abs(config.position_bias.center_weight - 0.8) <= 0.08
        assert abs(config.position_bias.random_factor - 0.1) <= 0.055

    def test_level_below_one_is_coerced(self):
        config = generate_level_config(0, TODAY)
        assert config.level == 1
        assert config.strategy == PlacementStrategy.CENTER_FIRST

    def test_non_integer_level_rejected(self):
        with pytest.raises(ValueError):
            generate_level_config("3", TODAY)

    def test_unknown_names_fall_back(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert PlacementStrategy.resolve("zigzag") == PlacementStrategy.RANDOM_WEIGHTED
            assert ShuffleMethod.resolve("riffle") == ShuffleMethod.FISHER_YATES
        assert "zigzag" in caplog.text


class TestAdvancedShuffler:
    """Test the five shuffle methods."""

    @pytest.mark.parametrize("method", list(ShuffleMethod))
    def test_multiset_preserved(self, method):
        """Every method returns exactly the input words."""
        result = AdvancedShuffler(SeededRandom(99)).shuffle(WORDS, method)
        assert sorted(result.shuffled) == sorted(WORDS)
        assert result.method == method

    @pytest.mark.parametrize("method", list(ShuffleMethod))
    @pytest.mark.parametrize("size", [0, 1, 2, 3, 7, 11, 16])
    def test_lengths_and_items_preserved(self, method, size):
        items = list(range(size))
        result = AdvancedShuffler(SeededRandom(5)).shuffle(items, method)
        assert sorted(result.shuffled) == items

    @pytest.mark.parametrize("method", list(ShuffleMethod))
    def test_input_not_mutated(self, method):
        words = list(WORDS)
        AdvancedShuffler(SeededRandom(1)).shuffle(words, method)
        assert words == WORDS

    @pytest.mark.parametrize("method", list(ShuffleMethod))
    def test_same_seed_same_order(self, method):
        first = AdvancedShuffler(SeededRandom(321)).shuffle(WORDS, method)
        second = AdvancedShuffler(SeededRandom(321)).shuffle(WORDS, method)
        assert first.shuffled == second.shuffled

    def test_entropy_constants(self):
        shuffler = AdvancedShuffler(SeededRandom(1))
        assert shuffler.shuffle(WORDS, ShuffleMethod.FISHER_YATES).entropy == 0.95
        assert shuffler.shuffle(WORDS, ShuffleMethod.ROTATIONAL).entropy == 0.7
        assert shuffler.shuffle(WORDS, ShuffleMethod.SEGMENTED).entropy == 0.8
        assert shuffler.shuffle(WORDS, ShuffleMethod.WEIGHTED_RANDOM).entropy == 0.85
        assert shuffler.shuffle(WORDS, ShuffleMethod.PATTERN_BASED).entropy == 0.6

    def test_unknown_method_uses_fisher_yates(self):
        result = AdvancedShuffler(SeededRandom(1)).shuffle(WORDS, "bogus")
        assert result.method == ShuffleMethod.FISHER_YATES
        assert result.entropy == 0.95

    def test_pattern_based_applies_a_fixed_pattern(self):
        """Five items map exactly onto one of the four index patterns."""
        result = AdvancedShuffler(SeededRandom(17)).shuffle(
            WORDS, ShuffleMethod.PATTERN_BASED
        )
        expected = [[WORDS[i] for i in pattern] for pattern in PATTERNS]
        assert result.shuffled in expected

    def test_segmented_keeps_segment_membership(self):
        """Eight items split into four pairs that only shuffle internally."""
        items = list("ABCDEFGH")
        result = AdvancedShuffler(SeededRandom(8)).shuffle(items, ShuffleMethod.SEGMENTED)
        for start in range(0, 8, 2):
            assert set(result.shuffled[start : start + 2]) == set(items[start : start + 2])

    def test_rotational_rotates_segments(self):
        """Six items split into two segments of three, each a rotation."""
        items = list("ABCDEF")
        result = AdvancedShuffler(SeededRandom(4)).shuffle(items, ShuffleMethod.ROTATIONAL)

        def rotations(segment):
            return [segment[i:] + segment[:i] for i in range(len(segment))]

        assert result.shuffled[:3] in rotations(items[:3])
        assert result.shuffled[3:] in rotations(items[3:])

    def test_weighted_random_front_loads_long_words(self):
        """Length differences dominate the jitter, so order follows length."""
        words = ["SOL", "PARALELEPIPEDO", "CASA", "ELEFANTE"]
        result = AdvancedShuffler(SeededRandom(11)).shuffle(
            words, ShuffleMethod.WEIGHTED_RANDOM
        )
        assert result.shuffled == ["PARALELEPIPEDO", "ELEFANTE", "CASA", "SOL"]


class TestStrategicPlacer:
    """Test anchor strategies, candidate filtering and scoring."""

    @pytest.mark.parametrize("strategy", list(PlacementStrategy))
    @pytest.mark.parametrize("shape", [(12, 8), (8, 12), (5, 5), (1, 4), (3, 7), (1, 1)])
    def test_anchors_cover_every_cell_once(self, strategy, shape):
        height, width = shape
        anchors = make_placer(height, width, strategy).generate_anchor_positions()
        assert len(anchors) == height * width
        assert set(anchors) == {
            Position(r, c) for r in range(height) for c in range(width)
        }

    def test_center_first_starts_at_center(self):
        anchors = make_placer(12, 8, PlacementStrategy.CENTER_FIRST).generate_anchor_positions()
        assert anchors[0] == Position(6, 4)
        # First ring around the center comes next
        assert all(max(abs(p.row - 6), abs(p.col - 4)) == 1 for p in anchors[1:9])

    def test_spiral_out_order(self):
        anchors = make_placer(5, 5, PlacementStrategy.SPIRAL_OUT).generate_anchor_positions()
        assert anchors[:5] == [
            Position(2, 2),
            Position(2, 3),
            Position(3, 3),
            Position(3, 2),
            Position(3, 1),
        ]

    def test_edges_first_starts_with_border(self):
        height, width = 6, 5
        anchors = make_placer(height, width, PlacementStrategy.EDGES_FIRST).generate_anchor_positions()
        border_count = 2 * (height + width) - 4
        for pos in anchors[:border_count]:
            assert pos.row in (0, height - 1) or pos.col in (0, width - 1)

    def test_diagonal_priority_starts_with_main_diagonals(self):
        anchors = make_placer(5, 5, PlacementStrategy.DIAGONAL_PRIORITY).generate_anchor_positions()
        main = {Position(i, i) for i in range(5)} | {Position(i, 4 - i) for i in range(5)}
        assert set(anchors[: len(main)]) == main

    def test_zone_based_keeps_quadrants_together(self):
        anchors = make_placer(6, 6, PlacementStrategy.ZONE_BASED).generate_anchor_positions()
        quadrants = [(p.row >= 3, p.col >= 3) for p in anchors]
        for start in range(0, 36, 9):
            assert len(set(quadrants[start : start + 9])) == 1

    @pytest.mark.parametrize("shape", [(12, 8), (8, 12), (9, 2)])
    def test_diagonal_priority_anchors_stay_on_board(self, shape):
        """Parallel diagonals are clipped to the board on non-square shapes."""
        height, width = shape
        placer = make_placer(height, width, PlacementStrategy.DIAGONAL_PRIORITY)
        anchors = placer.generate_anchor_positions()
        assert all(0 <= p.row < height and 0 <= p.col < width for p in anchors)
        assert len(anchors) == len(set(anchors)) == height * width

    def test_candidates_stay_in_bounds(self):
        placer = make_placer(8, 12, PlacementStrategy.RANDOM_WEIGHTED)
        candidates = placer.generate_candidates("ELEFANTE")
        assert candidates
        for candidate in candidates:
            assert all(0 <= p.row < 8 and 0 <= p.col < 12 for p in candidate.positions)

    def test_word_too_long_for_board(self, caplog):
        placer = make_placer(8, 12, PlacementStrategy.CENTER_FIRST)
        with caplog.at_level(logging.WARNING):
            assert placer.find_best_placement("A" * 13) is None
        assert "No valid position" in caplog.text

    def test_candidates_respect_existing_letters(self):
        gato = PlacedWord("GATO", 0, 0, Direction.HORIZONTAL, word_positions(4, 0, 0, Direction.HORIZONTAL))
        placer = make_placer(4, 4, PlacementStrategy.RANDOM_WEIGHTED, placed=[gato])
        occupied = dict(zip(gato.positions, gato.word))

        candidates = placer.generate_candidates("CASA")
        assert candidates
        for candidate in candidates:
            for letter, pos in zip("CASA", candidate.positions):
                assert occupied.get(pos, letter) == letter

    def test_overlap_on_matching_letter_allowed(self):
        """OSSO can cross GATO at the shared O."""
        gato = PlacedWord("GATO", 0, 0, Direction.HORIZONTAL, word_positions(4, 0, 0, Direction.HORIZONTAL))
        placer = make_placer(4, 4, PlacementStrategy.RANDOM_WEIGHTED, placed=[gato])
        candidates = placer.generate_candidates("OSSO")
        assert any(
            c.direction == Direction.VERTICAL and c.row == 0 and c.col == 3 for c in candidates
        )

    def test_separation_score(self):
        empty = np.empty((0, 2))
        assert StrategicPlacer.separation_score([Position(0, 0)], empty) == 1.0

        occupied = np.array([[0.0, 0.0]])
        assert StrategicPlacer.separation_score([Position(0, 1)], occupied) == 0.0
        assert StrategicPlacer.separation_score([Position(0, 4)], occupied) == 1.0
        assert StrategicPlacer.separation_score([Position(0, 2)], occupied) == pytest.approx(1 / 3)

    def test_direction_weights_drive_choice(self):
        """With only direction weights active the heaviest direction wins."""
        placer = make_placer(
            8,
            8,
            PlacementStrategy.RANDOM_WEIGHTED,
            weights=DirectionWeights(0.0, 0.0, 1.0),
            bias=PositionBias(0.0, 0.0, 0.0),
        )
        best = placer.find_best_placement("GATO")
        assert best.direction == Direction.DIAGONAL
        assert best.score == pytest.approx(60.0)

    def test_ties_keep_first_candidate(self):
        """Uniform scores leave the first anchor of the strategy in front."""
        placer = make_placer(
            5,
            5,
            PlacementStrategy.SPIRAL_OUT,
            weights=DirectionWeights(1.0, 1.0, 1.0),
            bias=PositionBias(0.0, 0.0, 0.0),
        )
        best = placer.find_best_placement("SOL")
        assert (best.row, best.col, best.direction) == (2, 2, Direction.HORIZONTAL)


class TestBoardGenerator:
    """Test full board generation."""

    def test_concrete_scenario(self):
        """12x8 board at level 1 places GATO, CASA and SOL."""
        board = generate_board(12, 8, ["GATO", "CASA", "SOL"], level=1, today=TODAY)
        assert board.get_size() == (12, 8)
        assert sorted(w.word for w in board.placed_words) == ["CASA", "GATO", "SOL"]
        assert board.skipped_words == []
        assert_board_consistent(board, 12, 8)

    @pytest.mark.parametrize("level", range(1, LEVEL_CYCLE + 1))
    def test_every_level_produces_consistent_board(self, level):
        board = generate_board(12, 8, WORDS, level=level, today=TODAY)
        assert len(board.placed_words) == len(WORDS)
        assert_board_consistent(board, 12, 8)

    @pytest.mark.parametrize("shape", [(8, 12), (10, 10), (5, 6), (4, 4)])
    def test_other_shapes(self, shape):
        height, width = shape
        board = generate_board(height, width, ["GATO", "SOL", "LUA", "MAR", "RIO"], level=4, today=TODAY)
        assert board.placed_words
        assert_board_consistent(board, height, width)

    def test_determinism(self):
        first = generate_board(12, 8, WORDS, level=7, today=TODAY)
        second = generate_board(12, 8, WORDS, level=7, today=TODAY)
        assert first.to_dict() == second.to_dict()

    def test_different_days_give_different_boards(self):
        first = generate_board(12, 8, WORDS, level=7, today=date(2024, 3, 15))
        second = generate_board(12, 8, WORDS, level=7, today=date(2024, 3, 16))
        assert first.board != second.board

    def test_word_longer_than_board_is_skipped(self):
        board = generate_board(12, 8, ["PARALELEPI", "GATO"], level=1, today=TODAY)
        assert [w.word for w in board.placed_words] == ["GATO"]
        assert board.skipped_words[0].word == "PARALELEPI"
        assert board.skipped_words[0].reason == SkipReason.TOO_LONG
        assert_board_consistent(board, 12, 8)

    def test_empty_word_list_gives_filler_board(self):
        board = generate_board(12, 8, [], level=3, today=TODAY)
        assert board.placed_words == []
        assert board.placement_rate == 1.0
        assert_board_consistent(board, 12, 8)

    def test_all_words_filtered_gives_filler_board(self, caplog):
        with caplog.at_level(logging.WARNING):
            board = generate_board(6, 6, ["EU", "TU", "ABACAXIZAL"], level=2, today=TODAY)
        assert board.placed_words == []
        assert [s.reason for s in board.skipped_words] == [
            SkipReason.TOO_SHORT,
            SkipReason.TOO_SHORT,
            SkipReason.TOO_LONG,
        ]
        assert "filler-only" in caplog.text
        assert_board_consistent(board, 6, 6)

    def test_words_are_normalized(self):
        board = generate_board(12, 8, ["Ação", "pé", "  coração "], level=1, today=TODAY)
        assert sorted(w.word for w in board.placed_words) == ["ACAO", "CORACAO"]
        assert board.skipped_words[0].word == "PE"
        assert board.skipped_words[0].reason == SkipReason.TOO_SHORT

    def test_duplicates_are_skipped(self):
        board = generate_board(12, 8, ["gato", "GATO", "Gato"], level=1, today=TODAY)
        assert [w.word for w in board.placed_words] == ["GATO"]
        assert [s.reason for s in board.skipped_words] == [SkipReason.DUPLICATE] * 2

    def test_non_letter_words_are_invalid(self):
        board = generate_board(12, 8, ["123", "GATO"], level=1, today=TODAY)
        assert board.skipped_words[0].reason == SkipReason.INVALID

    def test_crowded_board_skips_unplaceable_words(self):
        """A 3x3 grid holds at most three words with pairwise distinct letters."""
        words = ["AAA", "BBB", "CCC", "DDD", "EEE", "FFF", "GGG", "HHH"]
        board = generate_board(3, 3, words, level=6, today=TODAY)

        unplaced = [s for s in board.skipped_words if s.reason == SkipReason.NO_PLACEMENT]
        assert 1 <= len(board.placed_words) <= 3
        assert len(board.placed_words) + len(unplaced) == len(words)
        assert board.placement_rate < 1.0
        assert_board_consistent(board, 3, 3)

    def test_low_placement_rate_is_logged(self, caplog):
        words = ["AAA", "BBB", "CCC", "DDD", "EEE", "FFF", "GGG", "HHH"]
        with caplog.at_level(logging.WARNING):
            board = generate_board(3, 3, words, level=6, today=TODAY)

        assert board.placement_rate < 0.5
        assert "Low placement rate" in caplog.text

    def test_no_placement_at_all_is_logged_as_error(self, caplog, monkeypatch):
        monkeypatch.setattr(StrategicPlacer, "find_best_placement", lambda self, word: None)
        with caplog.at_level(logging.WARNING):
            board = generate_board(12, 8, WORDS, level=1, today=TODAY)

        assert board.placed_words == []
        assert [s.reason for s in board.skipped_words] == [SkipReason.NO_PLACEMENT] * len(WORDS)
        assert_board_consistent(board, 12, 8)
        errors = [r for r in caplog.records if r.levelname == "ERROR"]
        assert len(errors) == 1
        assert "No words placed" in errors[0].getMessage()

    def test_result_carries_diagnostics(self):
        board = generate_board(12, 8, WORDS, level=9, today=TODAY)
        assert board.level_config == generate_level_config(9, TODAY)
        assert board.shuffle_method == board.level_config.shuffle_method.value
        assert 0 < board.shuffle_entropy <= 1

        payload = board.to_dict()
        assert payload["levelConfig"]["level"] == 9
        assert set(payload["placedWords"][0]) == {
            "word",
            "startRow",
            "startCol",
            "direction",
            "positions",
        }

    def test_explicit_level_config(self):
        config = generate_level_config(13, TODAY)
        board = BoardGenerator(12, 8).generate(WORDS, level=1, level_config=config)
        assert board.level_config.level == 13

    @pytest.mark.parametrize(
        "height,width", [(0, 8), (12, 0), (-1, 8), (12.5, 8), ("12", 8), (True, 8)]
    )
    def test_invalid_dimensions_rejected(self, height, width):
        with pytest.raises(ValueError):
            generate_board(height, width, WORDS, level=1, today=TODAY)

    def test_none_words_rejected(self):
        with pytest.raises(ValueError):
            generate_board(12, 8, None, level=1, today=TODAY)

    def test_single_string_rejected(self):
        with pytest.raises(ValueError):
            generate_board(12, 8, "GATO", level=1, today=TODAY)

    @pytest.mark.parametrize("level", [0, -3])
    def test_non_positive_level_rejected(self, level):
        with pytest.raises(ValueError):
            generate_board(12, 8, WORDS, level=level, today=TODAY)
