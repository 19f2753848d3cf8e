"""Shuffling and sampling on top of a bounded-integer source."""

from __future__ import annotations

from typing import Callable, List, MutableSequence, Sequence, TypeVar

T = TypeVar("T")

RandBelow = Callable[[int], int]


def shuffle(sequence: MutableSequence[T], randbelow: RandBelow) -> None:
    """Fisher-Yates shuffle in place; makes exactly ``len(sequence) - 1`` draws."""
    for i in range(len(sequence) - 1, 0, -1):
        j = randbelow(i + 1)
        sequence[i], sequence[j] = sequence[j], sequence[i]


def sample(population: Sequence[T], n_choices: int, randbelow: RandBelow) -> List[T]:
    """Return ``n_choices`` distinct positions of ``population`` in shuffled order.

    The population is copied, the copy shuffled and truncated; the input is
    never modified. Asking for zero choices draws nothing.
    """
    if n_choices < 0:
        raise ValueError(f"n_choices must be non-negative, got {n_choices}")
    if n_choices == 0:
        return []
    if n_choices > len(population):
        raise ValueError(
            f"population smaller than requested choice count: {len(population)} < {n_choices}"
        )
    pool = list(population)
    shuffle(pool, randbelow)
    del pool[n_choices:]
    return pool


__all__ = ["shuffle", "sample"]
