"""
scipiper plugin architecture.

This package contains provider implementations for external collaborators:
- cache: Artifact caches that hold the data files behind indicators

Build engine adapters live in their own distributions and register through
the ``scipiper.engines`` entry-point group.
"""

from . import cache

__all__ = ["cache"]
