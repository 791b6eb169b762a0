"""
Board evaluation for the Caca-Palavras generator.

Key Components:
- BoardValidator: Confirms requested words can be found on a finished grid
- metrics: Direction distribution, shuffle diversity and entropy diagnostics
"""

from .board_validator import BoardValidator, ValidationReport, validate_board_contains_words
from .metrics import analyze_distribution, analyze_entropy, calculate_diversity

__all__ = [
    'BoardValidator',
    'ValidationReport',
    'validate_board_contains_words',
    'analyze_distribution',
    'analyze_entropy',
    'calculate_diversity',
]
