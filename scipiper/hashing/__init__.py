"""
Hash algorithm strategies and registry for fingerprinting data files.
"""

from .registry import HashAlgorithmRegistry
from .strategies import (
    Blake3Strategy,
    HashStrategy,
    MD5Strategy,
    SHA256Strategy,
    SHA512Strategy,
)

__all__ = [
    "Blake3Strategy",
    "HashAlgorithmRegistry",
    "HashStrategy",
    "MD5Strategy",
    "SHA256Strategy",
    "SHA512Strategy",
]
