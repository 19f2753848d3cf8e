"""Generator state snapshots and their text encoding.

The encoding is canonical JSON, so it is byte-identical across runs and hosts:

    {"format":"repro-rng/1","index":312,"seed":42,"words":[...312 ints...]}
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Protocol, Tuple

from .engine import check_state
from .errors import StateFormatError
from .seedlog import _canonical_json

FORMAT_TAG = "repro-rng/1"
_FIELDS = frozenset({"format", "seed", "index", "words"})
_MASK64 = (1 << 64) - 1


class TextSink(Protocol):
    def write(self, text: str) -> Any: ...


class TextSource(Protocol):
    def read(self) -> str: ...


@dataclass(frozen=True)
class GeneratorState:
    """Seed plus engine buffer and read position."""

    seed: int
    words: Tuple[int, ...]
    index: int

    def to_ordered_dict(self) -> Dict[str, Any]:
        return {
            "format": FORMAT_TAG,
            "seed": self.seed,
            "index": self.index,
            "words": list(self.words),
        }


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def encode(state: GeneratorState) -> str:
    return _canonical_json(state.to_ordered_dict())


def decode(text: str) -> GeneratorState:
    """Parse and validate an encoded state; raise StateFormatError if malformed."""
    try:
        payload = json.loads(text)
    except ValueError as exc:
        raise StateFormatError(f"state is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise StateFormatError("state must be a JSON object")
    if set(payload) != _FIELDS:
        raise StateFormatError(f"state fields must be {sorted(_FIELDS)}, got {sorted(payload)}")
    if payload["format"] != FORMAT_TAG:
        raise StateFormatError(f"unsupported state format {payload['format']!r}")

    seed, index, words = payload["seed"], payload["index"], payload["words"]
    if not _is_int(seed) or not 0 <= seed <= _MASK64:
        raise StateFormatError(f"seed must be an integer in [0, 2**64), got {seed!r}")
    if not _is_int(index):
        raise StateFormatError(f"index must be an integer, got {index!r}")
    if not isinstance(words, list) or not all(_is_int(w) for w in words):
        raise StateFormatError("words must be a list of integers")
    try:
        check_state(words, index)
    except ValueError as exc:
        raise StateFormatError(str(exc)) from exc
    return GeneratorState(seed=seed, words=tuple(words), index=index)


def write_state(state: GeneratorState, sink: TextSink) -> None:
    sink.write(encode(state) + "\n")


def read_state(source: TextSource) -> GeneratorState:
    return decode(source.read())


__all__ = [
    "FORMAT_TAG",
    "GeneratorState",
    "decode",
    "encode",
    "read_state",
    "write_state",
]
