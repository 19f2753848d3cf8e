"""Seed event records and the append-only JSONL file they are kept in.

Each line is one ``SeedEvent`` in canonical JSON; replaying a failed run only
needs the ``seed`` of the matching ``seed_issued`` line.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, fields
from pathlib import Path
from typing import IO, Any, Dict, List, Mapping, Optional

SEED_ISSUED = "seed_issued"
DEFAULT_GENERATOR = "default_generator"
SEEDER_BOUND = "seeder_bound"


def _canonical_json(payload: Mapping[str, Any]) -> str:
    return json.dumps(payload, sort_keys=True, separators=(",", ":"))


@dataclass(frozen=True)
class SeedEvent:
    """One seed-provider event; unset fields are left out of the JSON line."""

    event: str
    seed: Optional[int] = None
    source: Optional[str] = None
    seq: Optional[int] = None
    seeder: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "SeedEvent":
        known = {f.name for f in fields(cls)}
        unknown = set(payload) - known
        if unknown or "event" not in payload:
            raise ValueError(f"not a seed event: {dict(payload)!r}")
        return cls(**payload)


class SeedLog:
    """Appends SeedEvents to ``path``; the file is opened on first write."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._fh: IO[str] | None = None

    def __enter__(self) -> "SeedLog":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def open(self) -> None:
        if self._fh is None:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._fh = self.path.open("a", encoding="utf-8")

    def close(self) -> None:
        if self._fh:
            self._fh.close()
            self._fh = None

    def write(self, event: SeedEvent) -> None:
        if self._fh is None:
            self.open()
        assert self._fh is not None  # for type checkers
        self._fh.write(_canonical_json(event.to_payload()) + "\n")
        self._fh.flush()

    def seed_issued(self, seed: int, source: str, seq: int) -> None:
        self.write(SeedEvent(SEED_ISSUED, seed=seed, source=source, seq=seq))

    def default_generator(self, seed: int) -> None:
        self.write(SeedEvent(DEFAULT_GENERATOR, seed=seed))

    def seeder_bound(self, seeder: str) -> None:
        self.write(SeedEvent(SEEDER_BOUND, seeder=seeder))


def read_events(path: str | Path) -> List[SeedEvent]:
    """Parse every event line from a seed log."""
    lines = Path(path).read_text(encoding="utf-8").splitlines()
    return [SeedEvent.from_payload(json.loads(line)) for line in lines if line.strip()]


def issued_seeds(path: str | Path) -> List[int]:
    """Seeds handed out, in issue order."""
    return [e.seed for e in read_events(path) if e.event == SEED_ISSUED and e.seed is not None]


__all__ = ["SeedEvent", "SeedLog", "_canonical_json", "issued_seeds", "read_events"]
