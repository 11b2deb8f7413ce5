"""
Interface definitions for scipiper services and external collaborators.
"""

from .cache import IArtifactCache
from .engine import EngineFactory, IBuildEngine, TargetKind
from .logger import ILogger
from .presenter import IPresenter
from .store import IStatusStore

__all__ = [
    "EngineFactory",
    "IArtifactCache",
    "IBuildEngine",
    "ILogger",
    "IPresenter",
    "IStatusStore",
    "TargetKind",
]
