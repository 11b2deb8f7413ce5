"""
Artifact cache providers.
"""

from .local import LocalDirectoryCache

__all__ = ["LocalDirectoryCache"]
