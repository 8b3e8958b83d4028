#!/usr/bin/env python3
"""maskvm/main.py — CLI entry-point for maskvm.

Usage examples
--------------
    # Run both simulation passes and print their memory sums
    python -m maskvm run program.txt

    # Only the address-floating pass, refusing masks with > 12 floating bits
    python -m maskvm run program.txt --part 2 --max-floating-bits 12

    # Parse a program and print every command in canonical form
    python -m maskvm parse program.txt

    # Show version and exit
    python -m maskvm --version

Exit codes
----------
    0   Success.
    1   Malformed input line or simulation failure.
    2   Infrastructure failure (unreadable input, bad configuration).
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from maskvm import __version__
from maskvm.errors import ConfigError, InputError, MaskvmError
from maskvm.machine import SimulationConfig
from maskvm.mask import WORD_BITS
from maskvm.parser import parse_file
from maskvm.passes import PASSES, run_passes

_log = logging.getLogger("maskvm")

# Exit codes ----------------------------------------------------------------

EXIT_OK: int = 0
EXIT_ERROR: int = 1
EXIT_INFRA: int = 2


# ===========================================================================
# Utility helpers
# ===========================================================================

def _configure_logging(verbosity: int) -> None:
    """Set up the ``maskvm`` logger.

    Parameters
    ----------
    verbosity:
        0 → WARNING, 1 → INFO, 2+ → DEBUG.
    """
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)-5.5s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    root = logging.getLogger("maskvm")
    root.setLevel(level)
    # main() may run more than once per process; keep a single handler.
    for old in list(root.handlers):
        root.removeHandler(old)
    root.addHandler(handler)


def _report(exc: MaskvmError) -> None:
    print(str(exc), file=sys.stderr)


# ===========================================================================
# Sub-command implementations
# ===========================================================================

def cmd_run(args: argparse.Namespace) -> int:
    """Parse the input and print ``Part N = <sum>`` for each selected pass."""
    config = SimulationConfig(
        max_floating_bits=args.max_floating_bits,
        parts=(args.part,) if args.part else tuple(sorted(PASSES)),
    )
    problems = config.validate(known_parts=PASSES)
    if problems:
        for p in problems:
            _log.warning("SimulationConfig: %s", p)
        raise ConfigError(problems)

    commands = parse_file(args.input)
    results = run_passes(commands, config)
    for part, total in results.items():
        print(f"Part {part} = {total}")
    return EXIT_OK


def cmd_parse(args: argparse.Namespace) -> int:
    """Print every parsed command in canonical form."""
    for command in parse_file(args.input):
        print(command)
    return EXIT_OK


# ===========================================================================
# Argument parser
# ===========================================================================

def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="maskvm",
        description="Simulate a bitmask-driven memory machine.",
    )
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    ap.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v INFO, -vv DEBUG).",
    )
    sub = ap.add_subparsers(dest="command", metavar="<command>")
    sub.required = True

    p_run = sub.add_parser("run", help="Run the simulation passes.")
    p_run.add_argument("input", help="Path to a program file.")
    p_run.add_argument(
        "--part",
        type=int,
        choices=sorted(PASSES),
        default=None,
        help="Run only this part (default: all).",
    )
    p_run.add_argument(
        "--max-floating-bits",
        type=int,
        default=WORD_BITS,
        metavar="N",
        help=f"Reject masks floating more than N bits in part 2 (default: {WORD_BITS}).",
    )
    p_run.set_defaults(func=cmd_run)

    p_parse = sub.add_parser("parse", help="Parse a program and print it back.")
    p_parse.add_argument("input", help="Path to a program file.")
    p_parse.set_defaults(func=cmd_parse)

    return ap


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    try:
        return args.func(args)
    except (InputError, ConfigError) as exc:
        _report(exc)
        return EXIT_INFRA
    except MaskvmError as exc:
        _report(exc)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
