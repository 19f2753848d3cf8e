"""Command line access to reproducible draws and saved generator state."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .digest import sequence_digest
from .errors import PreconditionError, StateFormatError
from .generator import Generator
from .reduction import MAX32
from .seeding import get_random_seed
from .state import read_state

DEFAULT_COUNT = 10


def load_config(path: str | None) -> Dict[str, Any]:
    if not path:
        return {}
    try:
        config = json.loads(Path(path).read_text())
    except (OSError, ValueError) as exc:
        raise SystemExit(f"Could not read config {path}: {exc}")
    if not isinstance(config, dict):
        raise SystemExit(f"Config {path} must hold a JSON object")
    return config


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="repro-rng", description=__doc__)
    parser.add_argument("--config", type=str, help="Path to JSON file with seed/count/max defaults")
    sub = parser.add_subparsers(dest="command", required=True)

    def add_draw_options(p: argparse.ArgumentParser) -> None:
        p.add_argument("--seed", type=int, help="Generator seed (self-seeded when omitted)")
        p.add_argument("--count", type=int, help=f"Number of draws (default: {DEFAULT_COUNT})")
        p.add_argument("--max", type=int, help=f"Exclusive upper bound of integer draws (default: {MAX32})")
        p.add_argument("--real", action="store_true", help="Draw floats in [0, 1) instead of integers")

    add_draw_options(sub.add_parser("draw", help="Print a sequence of draws"))
    add_draw_options(sub.add_parser("fingerprint", help="Print the sha256 digest of a sequence of draws"))
    sub.add_parser("seed", help="Print a fresh seed from the process-wide provider")

    save = sub.add_parser("save", help="Advance a generator and write its state to a file")
    save.add_argument("--seed", type=int)
    save.add_argument("--skip", type=int, default=0, help="Draws to consume before saving")
    save.add_argument("--out", type=str, required=True)

    resume = sub.add_parser("resume", help="Load saved state and print the next draws")
    resume.add_argument("state", type=str)
    resume.add_argument("--count", type=int)
    resume.add_argument("--max", type=int)
    resume.add_argument("--real", action="store_true")
    return parser.parse_args(argv)


def _option(args: argparse.Namespace, config: Dict[str, Any], name: str, default: Any) -> Any:
    value = getattr(args, name, None)
    if value is not None:
        return value
    return config.get(name, default)


def draws(generator: Generator, count: int, max: int, real: bool) -> List[int | float]:
    if real:
        return [generator.get_real64() for _ in range(count)]
    return [generator.get_uint32(max) for _ in range(count)]


def _make_generator(seed: Optional[int]) -> Generator:
    try:
        generator = Generator(seed)
    except (TypeError, ValueError) as exc:
        raise SystemExit(f"Invalid seed: {exc}")
    if not seed:
        print(f"# seed {generator.seed}", file=sys.stderr)
    return generator


def run(args: argparse.Namespace) -> None:
    config = load_config(args.config)
    if args.command == "seed":
        print(get_random_seed())
        return

    count = _option(args, config, "count", DEFAULT_COUNT)
    max_ = _option(args, config, "max", MAX32)

    if args.command == "resume":
        try:
            with Path(args.state).open("r", encoding="utf-8") as fh:
                generator = Generator.from_state(read_state(fh))
        except (OSError, UnicodeDecodeError, StateFormatError) as exc:
            raise SystemExit(f"Could not load state from {args.state}: {exc}")
        for value in draws(generator, count, max_, args.real):
            print(value)
        return

    generator = _make_generator(_option(args, config, "seed", None))
    if args.command == "save":
        for _ in range(args.skip):
            generator.get_uint32()
        try:
            generator.save_to_file(args.out)
        except OSError as exc:
            raise SystemExit(f"Could not write state to {args.out}: {exc}")
        print(f"Wrote state of seed {generator.seed} after {args.skip} draws to {args.out}")
    elif args.command == "fingerprint":
        print(sequence_digest(generator, count, max_, real=args.real))
    else:
        for value in draws(generator, count, max_, args.real):
            print(value)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    try:
        run(args)
    except (PreconditionError, TypeError) as exc:
        raise SystemExit(f"Invalid option: {exc}")


if __name__ == "__main__":
    main()
