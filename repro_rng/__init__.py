"""Deterministic, cross-platform random number generation."""

from .adapters import UniformBitSource
from .digest import SequenceDigest, sequence_digest
from .engine import MT19937_64
from .errors import PreconditionError, StateFormatError
from .generator import Generator
from .reduction import MAX32, uniform_real, uniform_uint
from .seeding import SeedProvider, default_provider, get_random_seed, set_random_seeder
from .seedlog import SeedEvent, SeedLog
from .state import GeneratorState, decode, encode

__all__ = [
    "MAX32",
    "MT19937_64",
    "Generator",
    "GeneratorState",
    "PreconditionError",
    "SeedEvent",
    "SeedLog",
    "SeedProvider",
    "SequenceDigest",
    "StateFormatError",
    "UniformBitSource",
    "decode",
    "default_provider",
    "encode",
    "get_random_seed",
    "sequence_digest",
    "set_random_seeder",
    "uniform_real",
    "uniform_uint",
]
