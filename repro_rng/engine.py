"""MT19937-64 bit engine: the single raw source of randomness."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

_N = 312
_M = 156
_MASK64 = (1 << 64) - 1
_INIT_MULTIPLIER = 6364136223846793005
DEFAULT_SEED = 5489

_ONE = np.uint64(1)
_MATRIX_A = np.uint64(0xB5026F5AA96619E9)
_UPPER_MASK = np.uint64(0xFFFFFFFF80000000)
_LOWER_MASK = np.uint64(0x7FFFFFFF)

# Tempering parameters (u, d), (s, b), (t, c), l.
_U, _D = np.uint64(29), np.uint64(0x5555555555555555)
_S, _B = np.uint64(17), np.uint64(0x71D67FFFEDA60000)
_T, _C = np.uint64(37), np.uint64(0xFFF7EEE000000000)
_L = np.uint64(43)


def _init_words(seed: int) -> List[int]:
    words = [seed]
    for i in range(1, _N):
        prev = words[-1]
        words.append((_INIT_MULTIPLIER * (prev ^ (prev >> 62)) + i) & _MASK64)
    return words


def _mix(upper: np.ndarray, lower: np.ndarray) -> np.ndarray:
    x = (upper & _UPPER_MASK) | (lower & _LOWER_MASK)
    return (x >> _ONE) ^ (_MATRIX_A * (x & _ONE))


def _twist(mt: np.ndarray) -> None:
    """Regenerate all 312 words in place.

    The reference loop runs in three segments whose inputs never overlap with
    their outputs, so each segment is a single vector expression.
    """
    mt[: _N - _M] = mt[_M:] ^ _mix(mt[: _N - _M], mt[1 : _N - _M + 1])
    mt[_N - _M : _N - 1] = mt[: _M - 1] ^ _mix(mt[_N - _M : _N - 1], mt[_N - _M + 1 :])
    mt[_N - 1 :] = mt[_M - 1 : _M] ^ _mix(mt[_N - 1 :], mt[:1])


def _temper(mt: np.ndarray) -> List[int]:
    y = mt.copy()
    y ^= (y >> _U) & _D
    y ^= (y << _S) & _B
    y ^= (y << _T) & _C
    y ^= y >> _L
    return y.tolist()


def check_state(words: Sequence[int], index: int) -> None:
    """Raise ValueError unless (words, index) is a usable engine state."""
    if len(words) != _N:
        raise ValueError(f"engine state must hold {_N} words, got {len(words)}")
    for word in words:
        if not 0 <= word <= _MASK64:
            raise ValueError(f"engine word out of 64-bit range: {word}")
    if not 0 <= index <= _N:
        raise ValueError(f"engine index must be in [0, {_N}], got {index}")
    if not any(words):
        raise ValueError("engine state must not be all zero")


class MT19937_64:
    """64-bit Mersenne Twister with a fully published output sequence."""

    N = _N
    MIN = 0
    MAX = _MASK64

    def __init__(self, seed: int = DEFAULT_SEED) -> None:
        if not 0 <= seed <= _MASK64:
            raise ValueError(f"seed must be in [0, 2**64), got {seed}")
        self._mt = np.array(_init_words(seed), dtype=np.uint64)
        self._index = _N
        self._block: Optional[List[int]] = None

    @classmethod
    def from_state(cls, words: Iterable[int], index: int) -> "MT19937_64":
        words = [int(w) for w in words]
        check_state(words, index)
        engine = cls.__new__(cls)
        engine._mt = np.array(words, dtype=np.uint64)
        engine._index = index
        engine._block = None
        return engine

    def next(self) -> int:
        """Return the next raw value in [0, 2**64)."""
        if self._index >= _N:
            _twist(self._mt)
            self._block = None
            self._index = 0
        if self._block is None:
            self._block = _temper(self._mt)
        value = self._block[self._index]
        self._index += 1
        return value

    def get_state(self) -> Tuple[Tuple[int, ...], int]:
        return tuple(self._mt.tolist()), self._index

    def copy(self) -> "MT19937_64":
        engine = MT19937_64.__new__(MT19937_64)
        engine._mt = self._mt.copy()
        engine._index = self._index
        engine._block = self._block
        return engine

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MT19937_64):
            return NotImplemented
        return self._index == other._index and np.array_equal(self._mt, other._mt)

    __hash__ = None  # type: ignore[assignment]


__all__ = ["DEFAULT_SEED", "MT19937_64", "check_state"]
