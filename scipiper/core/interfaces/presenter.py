"""
Presenter interface for user-facing messages.

Build progress and consistency warnings go to the user through a presenter,
separately from the diagnostic logger.
"""

from abc import ABC, abstractmethod


class IPresenter(ABC):
    """Interface for user-facing output."""

    @abstractmethod
    def print(self, message: str) -> None:
        """Print a progress message."""
        pass

    @abstractmethod
    def print_warning(self, message: str) -> None:
        """Print a warning message."""
        pass
