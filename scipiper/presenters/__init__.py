"""
Presenters for user-facing output.
"""

from .console import ConsolePresenter

__all__ = ["ConsolePresenter"]
