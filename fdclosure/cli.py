"""
Command-line entry point.

Usage:
    fdclosure "A -> B" "B -> C"
    fdclosure --compact "AB->C" --ops trivial closure --json
    fdclosure --config closure.yaml --log-dir /tmp/fdclosure-logs -v "A -> B"
"""

import argparse
import json
import sys
from typing import List, Optional

from .config import OPERATIONS, ClosureConfig, load_config
from .model import FDError
from .notation import parse_attributes, parse_fds
from .runner import ClosureRunner


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fdclosure",
        description="Derive functional dependencies with Armstrong's axioms",
    )
    parser.add_argument(
        "fds",
        nargs="+",
        help="Functional dependencies, e.g. 'A, B -> C' (';' separates several in one argument)",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to a YAML configuration file",
    )
    parser.add_argument(
        "--ops",
        nargs="+",
        choices=OPERATIONS,
        default=None,
        help="Operations to run, in order (default: attributes trivial transitive closure)",
    )
    parser.add_argument(
        "--augment",
        type=str,
        default=None,
        help="Attributes to augment with, in the same notation as an FD side; adds 'augment' to the operations",
    )
    parser.add_argument(
        "--compact",
        action="store_true",
        default=None,
        help="Single-character attributes written without separators ('AB->C')",
    )
    parser.add_argument(
        "--max-attributes",
        type=int,
        default=None,
        help="Refuse inputs with more attributes than this (default: 5)",
    )
    parser.add_argument(
        "--hide-trivial",
        action="store_true",
        help="Leave trivial FDs out of the closure listing",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the run summary as JSON",
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default=None,
        help="Directory for per-run logs (run.log, result.json)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        default=None,
        help="Echo log messages to stderr",
    )
    return parser


def _config_from_args(args: argparse.Namespace) -> ClosureConfig:
    overrides = {
        "operations": args.ops,
        "compact_notation": args.compact,
        "max_attributes": args.max_attributes,
        "log_dir": args.log_dir,
        "verbose": args.verbose,
    }
    if args.hide_trivial:
        overrides["show_trivial_in_closure"] = False
    if args.config:
        config = load_config(args.config, **overrides)
    else:
        config = ClosureConfig(**{key: value for key, value in overrides.items() if value is not None})
    if args.augment is not None and "augment" not in config.operations:
        config.operations = list(config.operations) + ["augment"]
    return config


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        config = _config_from_args(args)
        fds = parse_fds(args.fds, compact=config.compact_notation)
        augment_with = None
        if args.augment is not None:
            augment_with = parse_attributes(args.augment, config.compact_notation)
        result = ClosureRunner(config).run(fds, augment_with=augment_with)
    except FDError as exc:
        print(f"error [{exc.code}]: {exc.message}", file=sys.stderr)
        if exc.details:
            print(f"  {json.dumps(exc.details, default=str)}", file=sys.stderr)
        return 2

    if args.json:
        print(json.dumps(result.to_dict(config.compact_notation), indent=2))
    else:
        print(result.render(config.compact_notation, config.show_trivial_in_closure))
    return 0


if __name__ == "__main__":
    sys.exit(main())
