"""
Diagnostic logger interface.

Sync services log what they import, export, skip and download through an
ILogger. Messages for the person running the build go to IPresenter.
"""

from abc import ABC, abstractmethod
from typing import Any


class ILogger(ABC):
    """Leveled diagnostic sink; ``*args`` are %-style message arguments."""

    @abstractmethod
    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    @abstractmethod
    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    @abstractmethod
    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Non-fatal problems, such as status records that may be obsolete."""
        pass

    @abstractmethod
    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    @abstractmethod
    def set_level(self, level: str) -> None:
        """Change the threshold: ``debug``, ``info``, ``warning`` or ``error``."""
        pass
