#!/usr/bin/env python3
from __future__ import annotations

"""Command-line host for the hex world engine.

Reads one JSON request (or a list of requests, applied in order against the
same engine so store operations see each other) and prints the JSON
responses.
"""

import argparse
import json
import logging
import sys

from engine import HexWorldEngine
from modifiers import GenerationModifiers
from sim.records import RecordError

logger = logging.getLogger(__name__)


def load_modifiers(path: str | None) -> GenerationModifiers:
    if not path:
        return GenerationModifiers()
    with open(path, "r", encoding="utf-8") as f:
        return GenerationModifiers.from_dict(json.load(f))


def read_requests(path: str):
    if path == "-":
        return json.load(sys.stdin)
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def cmd_run(args) -> int:
    eng = HexWorldEngine(modifiers=load_modifiers(args.config))
    data = read_requests(args.requests)
    batch = isinstance(data, list)
    responses = [eng.handle(req) for req in (data if batch else [data])]
    text = json.dumps(responses if batch else responses[0], indent=args.indent)
    if args.out:
        with open(args.out, "w", encoding="utf-8") as f:
            f.write(text)
        print(f"Wrote {len(responses)} response(s) to {args.out}")
    else:
        print(text)
    return 0


def cmd_town(args) -> int:
    eng = HexWorldEngine(modifiers=load_modifiers(args.config))
    req = {"op": "generateTown", "maxLayer": args.layers,
           "center": {"q": args.center[0], "r": args.center[1]}}
    if args.roads is not None:
        req["roadCount"] = args.roads
    if args.buildings is not None:
        req["buildingCount"] = args.buildings
    result = eng.handle(req)
    print(json.dumps(result["stats"] if args.stats_only else result, indent=args.indent))
    return 0


def cmd_ops(args) -> int:
    for name in sorted(HexWorldEngine().operations):
        print(name)
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Hex world generation and query engine")
    p.add_argument("--config", help="JSON file of generation modifiers")
    p.add_argument("--log-level", default="WARNING",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    p.add_argument("--indent", type=int, default=None)
    sub = p.add_subparsers(dest="cmd", required=True)

    run = sub.add_parser("run", help="Run JSON request(s) from a file or stdin")
    run.add_argument("requests", help="request file, or - for stdin")
    run.add_argument("--out", help="write responses here instead of stdout")
    run.set_defaults(func=cmd_run)

    town = sub.add_parser("town", help="Generate regions, roads and buildings")
    town.add_argument("--layers", type=int, default=5)
    town.add_argument("--center", type=int, nargs=2, default=(0, 0), metavar=("Q", "R"))
    town.add_argument("--roads", type=int)
    town.add_argument("--buildings", type=int)
    town.add_argument("--stats-only", action="store_true")
    town.set_defaults(func=cmd_town)

    ops = sub.add_parser("ops", help="List available operations")
    ops.set_defaults(func=cmd_ops)
    return p


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(levelname)s %(name)s: %(message)s")
    try:
        return args.func(args)
    except (RecordError, ValueError, OSError) as e:
        logger.error("%s", e)
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
