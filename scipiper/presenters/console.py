"""
Console presenter.

Messages go to stderr so they never mix with data a recipe writes to stdout.
"""

import sys

from ..core.interfaces.presenter import IPresenter


class ConsolePresenter(IPresenter):
    """Plain or colored stderr output."""

    def __init__(self, use_color: bool = True, file=None) -> None:
        """
        Args:
            use_color: Whether to use ANSI color codes
            file: Output file (defaults to sys.stderr)
        """
        self._file = file or sys.stderr
        self._use_color = use_color and self._file.isatty()

    def print(self, message: str) -> None:
        print(message, file=self._file)

    def print_warning(self, message: str) -> None:
        if self._use_color:
            print(f"\033[93mWarning: {message}\033[0m", file=self._file)
        else:
            print(f"Warning: {message}", file=self._file)
