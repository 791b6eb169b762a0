"""
Minimal base validator interface for generated boards.

This module provides the essential validator contract without unnecessary complexity.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Sequence


class BaseValidator(ABC):
    """
    Base class for all board validators.

    Provides the minimal interface needed for post-generation checks.
    """

    @abstractmethod
    def validate(self, board: Sequence[Sequence[str]], words: Sequence[str]) -> Any:
        """
        Validate that the requested words can be found on a single board.

        Args:
            board: Grid of single-character strings
            words: Words that were requested for this board

        Returns:
            Validation report for the board
        """
        pass

    @abstractmethod
    def validate_batch(self, boards: List) -> List[Any]:
        """
        Validate multiple generated boards.

        Args:
            boards: List of BoardData objects

        Returns:
            One validation report per board
        """
        pass
