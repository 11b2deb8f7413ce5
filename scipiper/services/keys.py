"""
Key mangler for exported status records.

Target names can contain path separators or be bare object names, so each
exported record is stored under a url-safe base64 token of its target name:
``build/status/<token>.yml``. Tokens are the same ones storr-style key-value
stores use for their key files ('-' and '_' in place of '+' and '/').
"""

import base64
import binascii
import re
from collections.abc import Iterable

from ..core.exceptions import KeyManglingError

_TOKEN_RE = re.compile(r"^[A-Za-z0-9_-]+={0,2}$")


class KeyMangler:
    """
    Reversible, filesystem-safe encoding of target names.

    Usage:
        mangler = KeyMangler()
        token = mangler.mangle("out/B.rds.ind")   # 'b3V0L0IucmRzLmluZA=='
        mangler.demangle(token)                   # 'out/B.rds.ind'
    """

    def __init__(self, pad: bool = True):
        """
        Args:
            pad: Keep trailing '=' padding. Must match the setting used when
                the status directory was written.
        """
        self.pad = pad

    def mangle(self, target: str) -> str:
        token = base64.urlsafe_b64encode(target.encode("utf-8")).decode("ascii")
        return token if self.pad else token.rstrip("=")

    def demangle(self, token: str) -> str:
        """
        Recover the target name behind a token.

        Raises:
            KeyManglingError: If token was not produced by ``mangle`` with this
                mangler's settings
        """
        if not _TOKEN_RE.match(token):
            raise KeyManglingError("Not a mangled key", key=token)
        padded = token + "=" * (-len(token) % 4)
        try:
            target = base64.urlsafe_b64decode(padded).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as e:
            raise KeyManglingError("Mangled key could not be decoded", key=token, cause=e) from e
        if self.mangle(target) != token:
            raise KeyManglingError(
                "Mangled key does not round-trip",
                key=token,
                context={"pad": self.pad},
            )
        return target

    def mangle_all(self, targets: Iterable[str]) -> dict[str, str]:
        """
        Map each target to its token.

        Raises:
            KeyManglingError: If two distinct targets share a token
        """
        out: dict[str, str] = {}
        owners: dict[str, str] = {}
        for target in targets:
            token = self.mangle(target)
            previous = owners.get(token)
            if previous is not None and previous != target:
                raise KeyManglingError(
                    "Targets collide on one mangled key",
                    key=token,
                    targets=[previous, target],
                )
            owners[token] = target
            out[target] = token
        return out


def get_mangled_key(keys: str | Iterable[str], pad: bool = True) -> str | list[str]:
    """
    Convert target names into the mangled keys used for status record files.

    A single name gives a single key; any other iterable gives a list.
    """
    mangler = KeyMangler(pad=pad)
    if isinstance(keys, str):
        return mangler.mangle(keys)
    keys = list(keys)
    mapping = mangler.mangle_all(keys)
    return [mapping[k] for k in keys]
