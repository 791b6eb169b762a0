"""
Level-based generation configuration.

Maps a level number to a deterministic LevelConfig so that boards look and feel
different across a repeating 20-level cycle. The seed folds in the calendar day,
so the same level yields the same board all day long and a new one the next day.
"""

import logging
from collections import Counter
from dataclasses import asdict, dataclass
from datetime import date
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterable, Optional

from .seeded_random import MODULUS, SeededRandom

logger = logging.getLogger(__name__)

LEVEL_CYCLE = 20


class PlacementStrategy(str, Enum):
    """Order in which candidate anchor cells are considered for a word."""

    CENTER_FIRST = "center-first"
    EDGES_FIRST = "edges-first"
    DIAGONAL_PRIORITY = "diagonal-priority"
    SPIRAL_OUT = "spiral-out"
    ZONE_BASED = "zone-based"
    RANDOM_WEIGHTED = "random-weighted"

    @classmethod
    def resolve(cls, value) -> "PlacementStrategy":
        """Map a strategy name to the enum, falling back to random-weighted."""
        try:
            return cls(value)
        except ValueError:
            logger.warning(f"Unknown placement strategy {value!r}, using random-weighted")
            return cls.RANDOM_WEIGHTED


class ShuffleMethod(str, Enum):
    """Order in which words are attempted."""

    FISHER_YATES = "fisher-yates"
    ROTATIONAL = "rotational"
    SEGMENTED = "segmented"
    WEIGHTED_RANDOM = "weighted-random"
    PATTERN_BASED = "pattern-based"

    @classmethod
    def resolve(cls, value) -> "ShuffleMethod":
        """Map a shuffle method name to the enum, falling back to fisher-yates."""
        try:
            return cls(value)
        except ValueError:
            logger.warning(f"Unknown shuffle method {value!r}, using fisher-yates")
            return cls.FISHER_YATES


@dataclass(frozen=True)
class DirectionWeights:
    horizontal: float
    vertical: float
    diagonal: float

    def for_direction(self, direction) -> float:
        return getattr(self, direction.value)


@dataclass(frozen=True)
class PositionBias:
    center_weight: float
    border_weight: float
    random_factor: float


@dataclass(frozen=True)
class LevelConfig:
    """
    Placement parameters for one board-generation run.

    Attributes:
        level: Level the config was derived from (1-based)
        seed: Seed for the run's SeededRandom
        strategy: Anchor-generation strategy of the placer
        shuffle_method: Word-order shuffle method
        direction_weights: Per-direction scoring weights in [0, 1]
        position_bias: Center / border / randomness weights in [0, 1]
    """

    level: int
    seed: int
    strategy: PlacementStrategy
    shuffle_method: ShuffleMethod
    direction_weights: DirectionWeights
    position_bias: PositionBias

    def to_dict(self) -> Dict[str, Any]:
        return {
            "level": self.level,
            "seed": self.seed,
            "strategy": self.strategy.value,
            "shuffleMethod": self.shuffle_method.value,
            "directionWeights": asdict(self.direction_weights),
            "positionBias": {
                "centerWeight": self.position_bias.center_weight,
                "borderWeight": self.position_bias.border_weight,
                "randomFactor": self.position_bias.random_factor,
            },
        }


STRATEGY_BASE_WEIGHTS = MappingProxyType(
    {
        PlacementStrategy.CENTER_FIRST: (
            DirectionWeights(0.4, 0.4, 0.2),
            PositionBias(0.8, 0.1, 0.1),
        ),
        PlacementStrategy.EDGES_FIRST: (
            DirectionWeights(0.5, 0.3, 0.2),
            PositionBias(0.1, 0.8, 0.1),
        ),
        PlacementStrategy.DIAGONAL_PRIORITY: (
            DirectionWeights(0.2, 0.2, 0.6),
            PositionBias(0.5, 0.3, 0.2),
        ),
        PlacementStrategy.SPIRAL_OUT: (
            DirectionWeights(0.3, 0.3, 0.4),
            PositionBias(0.9, 0.05, 0.05),
        ),
        PlacementStrategy.ZONE_BASED: (
            DirectionWeights(0.35, 0.35, 0.3),
            PositionBias(0.4, 0.4, 0.2),
        ),
        PlacementStrategy.RANDOM_WEIGHTED: (
            DirectionWeights(0.33, 0.33, 0.34),
            PositionBias(0.3, 0.3, 0.4),
        ),
    }
)

# One entry per level of the cycle; the six strategies repeat in order
LEVEL_STRATEGIES = tuple(
    list(PlacementStrategy) * 3 + [PlacementStrategy.CENTER_FIRST, PlacementStrategy.EDGES_FIRST]
)

# Advances every 4 levels of the cycle
SHUFFLE_METHODS = tuple(ShuffleMethod)


def normalize_level(level: int) -> int:
    """Position of level inside the cycle, 0-19."""
    return (max(1, level) - 1) % LEVEL_CYCLE


def generate_level_seed(level: int, today: Optional[date] = None) -> int:
    """
    Seed for a level on a given calendar day.

    Prime multipliers spread consecutive levels apart; the day/month factor
    rotates boards daily.

    Args:
        level: Level number (1-based)
        today: Calendar day, defaults to date.today()

    Returns:
        Seed in [0, 2^31 - 1)
    """
    today = today or date.today()
    base = level * 31 + 17
    variation = (level * 37 + 23) * (level * 41 + 29)
    day_factor = today.day + today.month * 32
    return (base * variation + day_factor) % MODULUS


def _round2(value: float) -> float:
    # Half-up rounding to 2 decimals
    return int(value * 100 + 0.5) / 100


def _apply_variation(base_value: float, variation: float) -> float:
    return _round2(max(0.0, min(1.0, base_value + variation)))


def generate_level_config(level: int, today: Optional[date] = None) -> LevelConfig:
    """
    Resolve the LevelConfig for a level.

    Levels below 1 are treated as level 1.

    Args:
        level: Level number (1-based)
        today: Calendar day folded into the seed, defaults to date.today()

    Returns:
        LevelConfig for the level
    """
    if isinstance(level, bool) or not isinstance(level, int):
        raise ValueError(f"Level must be an integer, got {level!r}")
    level = max(1, level)
    normalized = normalize_level(level)

    seed = generate_level_seed(level, today)
    strategy = LEVEL_STRATEGIES[normalized]
    shuffle_method = SHUFFLE_METHODS[normalized // 4]
    base_directions, base_bias = STRATEGY_BASE_WEIGHTS[strategy]

    rng = SeededRandom(seed + level)
    direction_factor = (rng.random() - 0.5) * 0.2
    position_factor = (rng.random() - 0.5) * 0.15
    randomness_factor = (rng.random() - 0.5) * 0.1

    config = LevelConfig(
        level=level,
        seed=seed,
        strategy=strategy,
        shuffle_method=shuffle_method,
        direction_weights=DirectionWeights(
            horizontal=_apply_variation(base_directions.horizontal, direction_factor),
            vertical=_apply_variation(base_directions.vertical, direction_factor),
            diagonal=_apply_variation(base_directions.diagonal, direction_factor),
        ),
        position_bias=PositionBias(
            center_weight=_apply_variation(base_bias.center_weight, position_factor),
            border_weight=_apply_variation(base_bias.border_weight, position_factor),
            random_factor=_apply_variation(base_bias.random_factor, randomness_factor),
        ),
    )

    logger.info(
        f"Level {level} config: strategy={strategy.value}, "
        f"shuffle={shuffle_method.value}, seed={seed:x}"
    )
    return config


def analyze_level_diversity(
    levels: Iterable[int], today: Optional[date] = None
) -> Dict[str, Any]:
    """
    Summarize how varied the configs of a set of levels are.

    Args:
        levels: Level numbers to resolve
        today: Calendar day used for every seed

    Returns:
        Dict with strategy and shuffle method distributions and the seed range
    """
    configs = [generate_level_config(level, today) for level in levels]
    if not configs:
        return {
            "total_levels": 0,
            "unique_strategies": 0,
            "unique_shuffle_methods": 0,
            "strategy_distribution": {},
            "shuffle_distribution": {},
            "seed_range": None,
        }

    strategy_distribution = Counter(config.strategy.value for config in configs)
    shuffle_distribution = Counter(config.shuffle_method.value for config in configs)
    seeds = [config.seed for config in configs]

    return {
        "total_levels": len(configs),
        "unique_strategies": len(strategy_distribution),
        "unique_shuffle_methods": len(shuffle_distribution),
        "strategy_distribution": dict(strategy_distribution),
        "shuffle_distribution": dict(shuffle_distribution),
        "seed_range": {"min": min(seeds), "max": max(seeds)},
    }
