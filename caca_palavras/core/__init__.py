"""
Core base interfaces and data model for the Caca-Palavras board generator.

Classes:
    BasePuzzle: Abstract base class for all puzzle types
    BaseValidator: Abstract base class for all board validators
    BoardData: Generated board with placed and skipped words
    PlacedWord: A word placed on the board with its positions
    SkippedWord: A requested word missing from the board, with the reason
    Position: Zero-indexed grid coordinate
    Direction: Placement direction (horizontal, vertical, diagonal)
"""

from .base_puzzle import (
    BasePuzzle,
    BoardData,
    Direction,
    PlacedWord,
    Position,
    SkippedWord,
    SkipReason,
    word_positions,
)
from .base_evaluator import BaseValidator

__all__ = [
    'BasePuzzle',
    'BaseValidator',
    'BoardData',
    'Direction',
    'PlacedWord',
    'Position',
    'SkippedWord',
    'SkipReason',
    'word_positions',
]
