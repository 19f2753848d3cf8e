"""Platform-independent reduction of raw engine output to bounded values.

Only integer arithmetic on the raw 64-bit draw is used, never a library
distribution, so the mapping is identical on every host.
"""

from __future__ import annotations

from .engine import MT19937_64
from .errors import PreconditionError

MAX32 = 0xFFFFFFFF
_REAL_SCALE = 2.0 ** -53


def uniform_uint(engine: MT19937_64, bound: int) -> int:
    """Return ``raw % bound``, a value in [0, bound).

    The modulo bias for bounds that do not divide 2**64 is kept on purpose:
    changing the reduction would change every recorded sequence.
    """
    if bound <= 0:
        raise PreconditionError(f"bound must be positive, got {bound}")
    return engine.next() % bound


def uniform_real(engine: MT19937_64) -> float:
    """Return ``raw / 2**64`` truncated to 53 bits, a float in [0.0, 1.0)."""
    # Truncating first keeps rounding from ever reaching 1.0.
    return (engine.next() >> 11) * _REAL_SCALE


__all__ = ["MAX32", "uniform_real", "uniform_uint"]
