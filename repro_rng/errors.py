"""Exception types raised by repro_rng."""

from __future__ import annotations


class PreconditionError(AssertionError):
    """A caller broke an operation's precondition (programmer error).

    Raised explicitly rather than via ``assert`` so the check survives ``python -O``.
    """


class StateFormatError(ValueError):
    """Serialized generator state could not be parsed or validated."""


__all__ = ["PreconditionError", "StateFormatError"]
