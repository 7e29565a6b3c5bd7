# -------------------------------------
# annals CLI entry point
# -------------------------------------
"""
CLI entry point.

Usage:
    python -m annals grammar.yml expression -n 5 --tag size=big --bind speaker=Bob
    python -m annals grammar.yml --expand "<(an animal)> appears"
    python -m annals grammar.yml --list
"""
import argparse
import logging
import random
import sys

from . import loader
from .context import Context
from .errors import AnnalsError
from .scribe import Scribe
from .state import DEFAULT_MAX_DEPTH


def _pairs(items: list[str], p: argparse.ArgumentParser, flag: str) -> dict[str, str]:
    out: dict[str, str] = {}
    for item in items:
        if "=" not in item:
            p.error(f"{flag} expects KEY=VALUE, got {item!r}")
        key, value = item.split("=", 1)
        out[key.strip()] = value
    return out


def _main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        prog="annals",
        description="Generate text from a YAML rule grammar.",
    )
    p.add_argument("grammar", help="Path to grammar YAML file")
    p.add_argument("name", nargs="?", help="Cognate to generate from")
    p.add_argument("--count", "-n", type=int, default=1, help="Number of lines to generate")
    p.add_argument("--seed", type=int, help="Seed for reproducible output")
    p.add_argument("--tag", "-t", action="append", default=[], metavar="KEY=VALUE", help="Initial context tag (repeatable)")
    p.add_argument("--bind", "-b", action="append", default=[], metavar="NAME=VALUE", help="Initial binding (repeatable)")
    p.add_argument("--expand", "-e", metavar="RULE", help="Expand an ad-hoc rule instead of a cognate")
    p.add_argument("--list", "-l", action="store_true", help="List cognate names and exit")
    p.add_argument("--check", action="store_true", help="Only load and validate the grammar")
    p.add_argument("--max-depth", type=int, default=DEFAULT_MAX_DEPTH, help="Maximum non-terminal nesting")
    p.add_argument("--verbose", "-v", action="store_true", help="Log rule selection to stderr")
    args = p.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    tags = _pairs(args.tag, p, "--tag")
    binds = _pairs(args.bind, p, "--bind")

    rng = random.Random(args.seed) if args.seed is not None else None
    scribe = Scribe(rng=rng, max_depth=args.max_depth)

    try:
        loader.load(args.grammar, scribe)

        if args.check:
            print(f"ok: {len(scribe)} cognates")
            return 0

        if args.list:
            for name in sorted(scribe.names()):
                cog = scribe.get(name)
                print(f"{name}\t{len(cog)} groups\t{cog.rule_count()} rules")
            return 0

        if args.name is None and args.expand is None:
            p.error("name is required unless --expand, --list or --check is given")

        for _ in range(args.count):
            ctx = Context(tags, binds)
            if args.expand is not None:
                print(scribe.expand_with(args.expand, ctx))
            else:
                print(scribe.generate_with(args.name, ctx))

    except (AnnalsError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(_main())
