"""Seeded, reproducible random number generator.

Two generators built from the same seed yield the same sequence of
``get_uint32``/``get_real64``/``shuffle``/``sample`` results on every host.
A generator is not safe for concurrent use; give each thread its own.
"""

from __future__ import annotations

import numbers
from pathlib import Path
from typing import TYPE_CHECKING, List, MutableSequence, Optional, Sequence, TypeVar

from . import sampling
from .engine import MT19937_64
from .errors import PreconditionError
from .reduction import MAX32, uniform_real, uniform_uint
from .state import GeneratorState, TextSink, TextSource, read_state, write_state

if TYPE_CHECKING:
    from .seeding import SeedProvider

T = TypeVar("T")

_MASK64 = (1 << 64) - 1


def _as_int(value, name: str) -> int:
    """Normalise numpy and other integral values to a plain int."""
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise TypeError(f"{name} must be an integer, got {type(value).__name__}")
    return int(value)


class Generator:
    """Random source whose whole output is determined by its 64-bit seed.

    ``Generator(seed)`` uses the seed as given. ``Generator()`` (or a seed of 0)
    is self-seeded: the seed comes from ``seed_provider`` or, when none is
    passed, from the process-wide default provider.
    """

    MAX32 = MAX32

    def __init__(self, seed: Optional[int] = None, *, seed_provider: Optional["SeedProvider"] = None) -> None:
        if seed is not None:
            seed = _as_int(seed, "seed")
            if not 0 <= seed <= _MASK64:
                raise ValueError(f"seed must be in [0, 2**64), got {seed}")
        if not seed:
            if seed_provider is None:
                from .seeding import default_provider

                seed_provider = default_provider()
            seed = seed_provider.get_random_seed()
        self._seed = seed
        self._engine = MT19937_64(seed)

    @classmethod
    def from_state(cls, state: GeneratorState) -> "Generator":
        generator = cls.__new__(cls)
        generator.restore(state)
        return generator

    @property
    def seed(self) -> int:
        return self._seed

    def get_seed(self) -> int:
        """Seed this generator was built from; meant for logging and debugging."""
        return self._seed

    def get_uint32(self, max: int = MAX32) -> int:
        """Return an integer in [0, max); requires 0 < max <= MAX32."""
        max = _as_int(max, "max")
        if not 0 < max <= MAX32:
            raise PreconditionError(f"max must be in (0, {MAX32}], got {max}")
        return uniform_uint(self._engine, max)

    def get_real64(self) -> float:
        """Return a float in [0.0, 1.0)."""
        return uniform_real(self._engine)

    def __call__(self, n: int = MAX32) -> int:
        return self.get_uint32(n)

    def shuffle(self, sequence: MutableSequence[T]) -> None:
        sampling.shuffle(sequence, self.get_uint32)

    def sample(self, population: Sequence[T], n_choices: int) -> List[T]:
        """Pick ``n_choices`` elements without replacement, in random order.

        Raises ValueError when the population is smaller than ``n_choices``.
        """
        return sampling.sample(population, _as_int(n_choices, "n_choices"), self.get_uint32)

    # -- persistence -------------------------------------------------------

    def snapshot(self) -> GeneratorState:
        words, index = self._engine.get_state()
        return GeneratorState(seed=self._seed, words=words, index=index)

    def restore(self, state: GeneratorState) -> None:
        # Build the engine before touching self so a bad state changes nothing.
        engine = MT19937_64.from_state(state.words, state.index)
        self._seed = state.seed
        self._engine = engine

    def save(self, sink: TextSink) -> None:
        write_state(self.snapshot(), sink)

    def load(self, source: TextSource) -> None:
        self.restore(read_state(source))

    def save_to_file(self, path: str | Path) -> None:
        with Path(path).open("w", encoding="utf-8") as fh:
            self.save(fh)

    def load_from_file(self, path: str | Path) -> None:
        with Path(path).open("r", encoding="utf-8") as fh:
            self.load(fh)

    # -- comparison and copying ---------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Generator):
            return NotImplemented
        return self._seed == other._seed and self._engine == other._engine

    __hash__ = None  # type: ignore[assignment]

    def copy(self) -> "Generator":
        generator = Generator.__new__(Generator)
        generator._seed = self._seed
        generator._engine = self._engine.copy()
        return generator

    def __copy__(self) -> "Generator":
        return self.copy()

    def __deepcopy__(self, memo) -> "Generator":
        return self.copy()

    def __repr__(self) -> str:
        _, index = self._engine.get_state()
        return f"Generator(seed={self._seed}, index={index})"


__all__ = ["Generator"]
