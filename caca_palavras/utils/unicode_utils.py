"""
Unicode utility functions for the word-search board generator.

This module provides the Unicode-aware text processing used to turn raw word-bank
entries (Portuguese words with accents, cedillas and hyphens) into the plain
uppercase A-Z strings that are placed on the board.
"""

import re
import unicodedata
from typing import Optional

_GAME_WORD_RE = re.compile(r"^[A-Z]+$")


def clean_unicode_text(text: Optional[str]) -> Optional[str]:
    """
    Clean and normalize Unicode text before word processing.

    Args:
        text: Input text to clean

    Returns:
        Cleaned text or None if input is invalid
    """
    if not text or not isinstance(text, str):
        return None

    # NFC keeps accented characters in a single canonical form
    cleaned = unicodedata.normalize("NFC", text.strip())

    return cleaned if cleaned else None

def strip_diacritics(text: str) -> str:
    """Remove accents and other combining marks ("Ação" -> "Acao")."""
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(char for char in decomposed if unicodedata.category(char) != "Mn")

def normalize_word(text: Optional[str]) -> str:
    """
    Normalize a raw word into the form placed on the board.

    Strips diacritics, uppercases and drops everything that is not a letter
    (spaces, hyphens, digits, punctuation).

    Args:
        text: Raw word as it comes from the word bank

    Returns:
        Uppercase A-Z string, possibly empty
    """
    cleaned = clean_unicode_text(text)
    if cleaned is None:
        return ""

    stripped = strip_diacritics(cleaned).upper()
    return "".join(char for char in stripped if "A" <= char <= "Z")

def is_valid_game_word(word: str, max_length: int, min_length: int = 3) -> bool:
    """
    Check that a normalized word can be used on a board.

    Args:
        word: Normalized word (see normalize_word)
        max_length: Longest word that fits on the board
        min_length: Shortest word accepted by the game

    Returns:
        True if the word is plain A-Z and its length is within bounds
    """
    if not word or not _GAME_WORD_RE.match(word):
        return False
    return min_length <= len(word) <= max_length
