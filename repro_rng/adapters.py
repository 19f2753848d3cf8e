"""Adapter giving a Generator the uniform-random-bit-source shape.

Generic algorithms written against that shape expect ``min()``, ``max()`` and a
zero-argument call; the Generator itself does not carry them.
"""

from __future__ import annotations

from .generator import Generator
from .reduction import MAX32


class UniformBitSource:
    """Yields ``get_uint32()`` draws, all within [min(), max()]."""

    def __init__(self, generator: Generator) -> None:
        self.generator = generator

    def __call__(self) -> int:
        return self.generator.get_uint32()

    @staticmethod
    def min() -> int:
        return 0

    @staticmethod
    def max() -> int:
        return MAX32 - 1


__all__ = ["UniformBitSource"]
