"""Check integers for the private key record.

The private key record repeats a 32-bit value twice. A decryptor uses the
pair to confirm it derived the right key; with the ``none`` cipher it is a
structural marker only, but parsers still require it to be present and
duplicated.

A checkint source is any zero-argument callable returning such a value.
Callers inject the source; nothing here keeps state between calls.
"""

import secrets
from typing import Callable, Optional

from edkey.wire import UINT32_MAX

CheckintSource = Callable[[], int]


def random_checkint(rng=None) -> int:
    """
    Draw one checkint.

    Args:
        rng: Optional ``random.Random``-like object. The system CSPRNG is
            used when omitted.
    """
    if rng is None:
        return secrets.randbits(32)
    return rng.getrandbits(32)


class RandomCheckint:
    """Checkint source drawing from an optional injected generator."""

    def __init__(self, rng=None):
        self.rng = rng

    def __call__(self) -> int:
        return random_checkint(self.rng)


class FixedCheckint:
    """Checkint source that always returns the same value."""

    def __init__(self, value: int):
        if not 0 <= value <= UINT32_MAX:
            raise ValueError(f"Checkint {value} does not fit in 32 bits")
        self.value = value

    def __call__(self) -> int:
        return self.value

    def __repr__(self) -> str:
        return f"FixedCheckint({self.value})"


def resolve_source(source: Optional[CheckintSource]) -> CheckintSource:
    """Return ``source``, or a fresh random source when it is ``None``."""
    if source is None:
        return RandomCheckint()
    return source
