"""Hash fingerprints of draw sequences for cross-host comparison."""

from __future__ import annotations

import hashlib
import json
from typing import TYPE_CHECKING, Union

from .reduction import MAX32

if TYPE_CHECKING:
    from .generator import Generator

Draw = Union[int, float]


class SequenceDigest:
    """Accumulator over a run of draws; order sensitive."""

    def __init__(self) -> None:
        self._hasher = hashlib.sha256()
        self.count = 0

    def update(self, value: Draw) -> None:
        # json renders floats with repr, the shortest round-tripping form.
        self._hasher.update(json.dumps(value).encode("utf-8") + b"\n")
        self.count += 1

    def hexdigest(self) -> str:
        return self._hasher.hexdigest()


def sequence_digest(generator: "Generator", count: int, max: int = MAX32, *, real: bool = False) -> str:
    """Consume ``count`` draws from ``generator`` and return their digest."""
    digest = SequenceDigest()
    for _ in range(count):
        digest.update(generator.get_real64() if real else generator.get_uint32(max))
    return digest.hexdigest()


__all__ = ["SequenceDigest", "sequence_digest"]
