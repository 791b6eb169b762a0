#!/usr/bin/env python3
"""
Caca-Palavras Board Generator

Developer tool for generating and inspecting word-search boards.

Features:
- Generate a board for any shape, level and word list
- Print the grid with the placed words highlighted, or the board as JSON
- Validate that every placed word can be found on the grid
- Inspect the level configs of the 20-level cycle

Usage Examples:
  # Use config defaults (minimal command)
  python run_board_generator.py generate

  # Override specific parameters
  python run_board_generator.py generate --height 12 --width 8 --level 3 --words gato casa sol
  python run_board_generator.py generate --level 7 --json

  # Inspect level configs
  python run_board_generator.py levels --levels 1 2 3 4 5
"""

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Optional

from caca_palavras.core.base_puzzle import BoardData
from caca_palavras.evaluate.board_validator import BoardValidator
from caca_palavras.evaluate.metrics import analyze_distribution
from caca_palavras.generate.board_generator import BoardGenerator
from caca_palavras.generate.level_config import (
    LEVEL_CYCLE,
    analyze_level_diversity,
    generate_level_config,
)
from caca_palavras.utils.config_loader import get_config


def setup_logging(verbose: bool = False, log_file: Optional[str] = None):
    """Setup logging configuration with optional file output."""
    level = logging.DEBUG if verbose else logging.INFO

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)

    detailed_formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(detailed_formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)  # Always detailed in file
        file_handler.setFormatter(detailed_formatter)
        root_logger.addHandler(file_handler)

    return log_file


def display_board(board: BoardData) -> None:
    """Print the grid, lowercasing filler letters so placed words stand out."""
    covered = {pos for placed in board.placed_words for pos in placed.positions}
    for row_index, row in enumerate(board.board):
        cells = []
        for col_index, letter in enumerate(row):
            cells.append(letter if (row_index, col_index) in covered else letter.lower())
        print(" ".join(cells))


def display_placements(board: BoardData) -> None:
    print(f"\nPlaced words ({len(board.placed_words)}):")
    for placed in board.placed_words:
        print(
            f"  {placed.word:<14} {placed.direction.value:<10} "
            f"start=({placed.start_row}, {placed.start_col})"
        )

    if board.skipped_words:
        print(f"\nSkipped words ({len(board.skipped_words)}):")
        for skipped in board.skipped_words:
            print(f"  {skipped.word:<14} {skipped.reason.value}")

    distribution = analyze_distribution(board.placed_words)
    print(f"\nDirections: {distribution['percentages']}")


def run_generate(args) -> bool:
    """Generate a single board and print it."""
    generator = BoardGenerator(args.height, args.width)
    board = generator.generate(args.words, args.level, today=args.date)

    report = BoardValidator().validate(
        board.board, [placed.word for placed in board.placed_words]
    )

    if args.json:
        print(json.dumps(board.to_dict(), ensure_ascii=False, indent=2))
    else:
        config = board.level_config
        print(f"🧩 Board {args.height}x{args.width} - level {config.level}")
        print(
            f"   strategy={config.strategy.value} shuffle={config.shuffle_method.value} "
            f"seed={config.seed:x}"
        )
        print("=" * 60)
        display_board(board)
        display_placements(board)
        print(f"\nValidation: {'✅ passed' if report.valid else '❌ failed'}")

    return report.valid


def run_levels(args) -> bool:
    """Print the resolved config for each requested level."""
    for level in args.levels:
        config = generate_level_config(level, args.date)
        weights = config.direction_weights
        bias = config.position_bias
        print(
            f"Level {config.level:>3}: {config.strategy.value:<18} "
            f"{config.shuffle_method.value:<16} seed={config.seed:<11} "
            f"dir=({weights.horizontal:.2f}, {weights.vertical:.2f}, {weights.diagonal:.2f}) "
            f"bias=({bias.center_weight:.2f}, {bias.border_weight:.2f}, {bias.random_factor:.2f})"
        )

    print("\nDiversity:")
    print(json.dumps(analyze_level_diversity(args.levels, args.date), indent=2))
    return True


def main():
    """Main CLI entry point."""
    defaults = get_config().get_cli_defaults()

    parser = argparse.ArgumentParser(
        description="Caca-Palavras word-search board generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    parser.add_argument("--log-file", help="Also write detailed logs to this file")
    parser.add_argument(
        "--date",
        type=date.fromisoformat,
        help="Calendar day used in the level seed (YYYY-MM-DD, default: today)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    generate_parser = subparsers.add_parser("generate", help="Generate one board")
    generate_parser.add_argument("--height", type=int, default=defaults["height"])
    generate_parser.add_argument("--width", type=int, default=defaults["width"])
    generate_parser.add_argument("--level", type=int, default=defaults["level"])
    generate_parser.add_argument(
        "--words", nargs="+", default=defaults["words"], help="Words to place"
    )
    generate_parser.add_argument(
        "--json", action="store_true", help="Print the board as JSON"
    )

    levels_parser = subparsers.add_parser("levels", help="Show level configs")
    levels_parser.add_argument(
        "--levels",
        nargs="+",
        type=int,
        default=list(range(1, LEVEL_CYCLE + 1)),
        help="Levels to resolve (default: one full cycle)",
    )

    args = parser.parse_args()
    setup_logging(args.verbose, args.log_file)

    if not args.command:
        parser.print_help()
        return False

    try:
        if args.command == "generate":
            return run_generate(args)
        return run_levels(args)
    except ValueError as e:
        print(f"❌ Invalid argument: {e}")
        return False


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
