"""Seed issuance for self-seeded generators.

A ``SeedProvider`` starts Unbound: seeds come from a private default generator
that is itself seeded once from OS entropy on first use. A hosting
environment may bind its own seeder exactly once, after which every seed is
delegated to it. There is no way back to Unbound.

The process-wide provider is created lazily; set ``REPRO_RNG_SEED_LOG`` to a
file path to have it log every seed it issues.
"""

from __future__ import annotations

import os
import secrets
from threading import Lock
from typing import TYPE_CHECKING, Callable, Optional

from .seedlog import SeedLog

if TYPE_CHECKING:
    from .generator import Generator

SEED_LOG_ENV = "REPRO_RNG_SEED_LOG"
_MASK32 = 0xFFFFFFFF
_MASK64 = (1 << 64) - 1

Seeder = Callable[[], int]


def entropy_seed() -> int:
    """Return a non-zero 64-bit seed from the OS entropy source."""
    return secrets.randbits(64) or 1


class SeedProvider:
    """Issues 32-bit seeds; default generator until a seeder is bound."""

    def __init__(self, entropy: Optional[Callable[[], int]] = None, seed_log: Optional[SeedLog] = None) -> None:
        self._entropy = entropy or entropy_seed
        self._seed_log = seed_log
        self._lock = Lock()
        self._default: Optional["Generator"] = None
        self._seeder: Optional[Seeder] = None
        self._issued = 0

    @property
    def bound(self) -> bool:
        return self._seeder is not None

    def bind(self, seeder: Seeder) -> None:
        """Install ``seeder`` as the seed source; allowed once per provider."""
        if not callable(seeder):
            raise TypeError("seeder must be callable")
        with self._lock:
            if self._seeder is not None:
                raise RuntimeError("a seeder is already bound to this provider")
            self._seeder = seeder
            if self._seed_log is not None:
                self._seed_log.seeder_bound(getattr(seeder, "__qualname__", repr(seeder)))

    def get_random_seed(self) -> int:
        seeder = self._seeder
        if seeder is not None:
            # Called outside the lock: a seeder may itself build generators.
            seed = seeder()
            if isinstance(seed, bool) or not isinstance(seed, int) or not 0 <= seed <= _MASK32:
                raise ValueError(f"bound seeder must return an int in [0, 2**32), got {seed!r}")
            with self._lock:
                self._record(seed, "bound")
            return seed
        with self._lock:
            if self._default is None:
                self._default = self._create_default()
            # The default generator only advances once the seed is logged.
            advanced = self._default.copy()
            seed = advanced.get_uint32()
            self._record(seed, "default")
            self._default = advanced
        return seed

    def _create_default(self) -> "Generator":
        from .generator import Generator

        seed = self._entropy() & _MASK64 or 1
        if self._seed_log is not None:
            self._seed_log.default_generator(seed)
        return Generator(seed)

    def _record(self, seed: int, source: str) -> None:
        # The counter only moves once the event is on disk.
        if self._seed_log is not None:
            self._seed_log.seed_issued(seed, source, self._issued + 1)
        self._issued += 1


_default_provider: Optional[SeedProvider] = None
_default_provider_lock = Lock()


def default_provider() -> SeedProvider:
    """Return the process-wide provider, creating it on first use."""
    global _default_provider
    if _default_provider is None:
        with _default_provider_lock:
            if _default_provider is None:
                log_path = os.environ.get(SEED_LOG_ENV)
                _default_provider = SeedProvider(seed_log=SeedLog(log_path) if log_path else None)
    return _default_provider


def get_random_seed() -> int:
    return default_provider().get_random_seed()


def set_random_seeder(seeder: Seeder) -> None:
    """Hook for hosting environments to replace the default seed source."""
    default_provider().bind(seeder)


__all__ = [
    "SEED_LOG_ENV",
    "SeedProvider",
    "default_provider",
    "entropy_seed",
    "get_random_seed",
    "set_random_seeder",
]
