"""
Configuration Management System for the Caca-Palavras board generator.

This module provides centralized configuration management for board generation.
It loads parameters from wordsearch_config.txt with type-safe parsing and
default values for every tunable the generator and the CLI read.

Key Features:
- Type-safe parameter parsing (string, int, float, bool)
- Hierarchical configuration: CLI args → Config file → Defaults
- Global config singleton via get_config()
- Automatic project root detection

The level table, placement strategies and shuffle methods are not configurable:
they are constants of the generate package. This file only covers thresholds,
word filtering and CLI defaults.
"""

import logging
from pathlib import Path
from typing import Dict, Any, List, Union

logger = logging.getLogger(__name__)

__all__ = ["ConfigLoader", "get_config", "reload_config"]


class ConfigLoader:
    """
    Loads and manages configuration parameters for board generation.

    Provides type-safe access to configuration values with defaults.
    """

    def __init__(self, config_file: str = "wordsearch_config.txt"):
        """
        Initialize configuration loader.

        Args:
            config_file: Path to configuration file relative to project root
        """
        self.config_file = config_file
        self.config: Dict[str, Any] = {}
        self._load_config()

    def _load_config(self):
        """Load configuration from file."""
        current_path = Path(__file__).parent
        config_path = None

        # Search up the directory tree
        for _ in range(5):
            potential_path = current_path / self.config_file
            if potential_path.exists():
                config_path = potential_path
                break
            current_path = current_path.parent

        if config_path is None:
            logger.warning(f"Config file {self.config_file} not found, using defaults")
            self._load_defaults()
            return

        logger.info(f"Loading configuration from {config_path}")

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                for line_num, line in enumerate(f, 1):
                    line = line.strip()

                    if not line or line.startswith("#"):
                        continue

                    if "=" not in line:
                        logger.warning(f"Invalid config line {line_num}: {line}")
                        continue

                    key, value = line.split("=", 1)
                    self.config[key.strip()] = self._parse_value(value.strip())

            logger.info(f"Loaded {len(self.config)} configuration parameters")

        except OSError as e:
            logger.error(f"Failed to load config: {e}")
            self._load_defaults()

    def _parse_value(self, value: str) -> Union[str, int, float, bool]:
        """Parse string value to appropriate Python type."""
        if value.lower() in ("true", "false"):
            return value.lower() == "true"

        if value.replace(".", "", 1).lstrip("-").isdigit():
            if "." in value:
                return float(value)
            return int(value)

        return value

    def _load_defaults(self):
        """Load default configuration values."""
        self.config = {
            # Word filtering
            "MIN_WORD_LENGTH": 3,
            # Generation diagnostics
            "LOW_PLACEMENT_RATE_THRESHOLD": 0.5,
            "VALIDATE_AFTER_GENERATION": True,
            # CLI defaults
            "DEFAULT_BOARD_HEIGHT": 12,
            "DEFAULT_BOARD_WIDTH": 8,
            "DEFAULT_LEVEL": 1,
            "DEFAULT_WORDS": "GATO,CASA,SOL,LUA,MAR",
        }

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key.

        Args:
            key: Configuration parameter name
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        return self.config.get(key, default)

    def get_int(self, key: str, default: int = 0) -> int:
        """Get integer configuration value."""
        value = self.get(key, default)
        try:
            return int(value)
        except (ValueError, TypeError):
            logger.warning(f"Invalid integer value for {key}: {value}")
            return default

    def get_float(self, key: str, default: float = 0.0) -> float:
        """Get float configuration value."""
        value = self.get(key, default)
        try:
            return float(value)
        except (ValueError, TypeError):
            logger.warning(f"Invalid float value for {key}: {value}")
            return default

    def get_bool(self, key: str, default: bool = False) -> bool:
        """Get boolean configuration value."""
        value = self.get(key, default)
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.lower() in ("true", "1", "yes", "on")
        return default

    def get_string(self, key: str, default: str = "") -> str:
        """Get string configuration value."""
        value = self.get(key, default)
        return str(value) if value is not None else default

    def get_list_of_strings(self, key: str, default: str = "") -> List[str]:
        """Get list of strings from comma-separated string configuration value."""
        value = self.get_string(key, default)
        return [item.strip() for item in value.split(",") if item.strip()]

    def get_generation_config(self) -> Dict[str, Any]:
        """Get board generation configuration parameters."""
        return {
            "min_word_length": self.get_int("MIN_WORD_LENGTH", 3),
            "low_placement_rate_threshold": self.get_float(
                "LOW_PLACEMENT_RATE_THRESHOLD", 0.5
            ),
            "validate_after_generation": self.get_bool(
                "VALIDATE_AFTER_GENERATION", True
            ),
        }

    def get_cli_defaults(self) -> Dict[str, Any]:
        """Get CLI default values."""
        return {
            "height": self.get_int("DEFAULT_BOARD_HEIGHT", 12),
            "width": self.get_int("DEFAULT_BOARD_WIDTH", 8),
            "level": self.get_int("DEFAULT_LEVEL", 1),
            "words": self.get_list_of_strings(
                "DEFAULT_WORDS", "GATO,CASA,SOL,LUA,MAR"
            ),
        }


# Global configuration instance
_config = None


def get_config() -> ConfigLoader:
    """Get global configuration instance."""
    global _config
    if _config is None:
        _config = ConfigLoader()
    return _config


def reload_config():
    """Reload configuration from file."""
    global _config
    _config = ConfigLoader()
    return _config
