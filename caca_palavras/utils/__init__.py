"""
Utilities package for the Caca-Palavras board generator.

This package provides word normalization and configuration management.
"""

from .unicode_utils import (
    clean_unicode_text,
    normalize_word,
    is_valid_game_word,
)
from .config_loader import ConfigLoader, get_config, reload_config

__all__ = [
    'clean_unicode_text', 'normalize_word',
    'is_valid_game_word', 'ConfigLoader', 'get_config', 'reload_config'
]
