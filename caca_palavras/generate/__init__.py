"""
Word-Search Board Generation Module

This module implements the level-driven board generation pipeline.

Architecture:
- seeded_random: Park-Miller generator shared by every component of a run
- level_config: Level number to LevelConfig (strategy, shuffle method, weights, seed)
- shuffler: Five word-order shuffle methods
- strategic_placer: Six anchor strategies and candidate scoring for one word
- board_generator: Orchestrates filtering, shuffling, placement and filler letters
"""

from .seeded_random import SeededRandom
from .level_config import (
    DirectionWeights,
    LevelConfig,
    PlacementStrategy,
    PositionBias,
    ShuffleMethod,
    analyze_level_diversity,
    generate_level_config,
)
from .shuffler import AdvancedShuffler, ShuffleResult
from .strategic_placer import PlacementCandidate, PlacementContext, StrategicPlacer
from .board_generator import BoardGenerator, generate_board


__all__ = [
    "SeededRandom",
    "DirectionWeights",
    "LevelConfig",
    "PlacementStrategy",
    "PositionBias",
    "ShuffleMethod",
    "analyze_level_diversity",
    "generate_level_config",
    "AdvancedShuffler",
    "ShuffleResult",
    "PlacementCandidate",
    "PlacementContext",
    "StrategicPlacer",
    "BoardGenerator",
    "generate_board",
]
