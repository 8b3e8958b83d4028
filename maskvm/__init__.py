"""maskvm — bitmask memory machine simulator.

Parses a program of ``mask = ...`` and ``mem[a] = v`` lines and runs it
under two masking semantics, reporting the sum of memory after each.

Submodules
----------
errors
    Exception hierarchy with structured ``MVM-XXXX`` error codes.

mask
    36-bit three-symbol masks: ``Masked``, ``parse_mask``, ``render_mask``.

commands
    The two command variants, ``SetMask`` and ``Assign``.

grammar / parser
    Parsimonious grammar for one command line and the visitor that turns
    it into commands; file reading.

machine
    ``Machine`` (mask + sparse memory) and ``SimulationConfig``.

passes
    Part 1 (value masking), part 2 (address floating), pass registry.

main
    CLI entry-point with subcommands ``run`` and ``parse``.

Usage
-----
Command-line::

    python -m maskvm run program.txt

Programmatic::

    from maskvm.parser import parse_file
    from maskvm.passes import run_value_masking, run_address_floating

    commands = parse_file("program.txt")
    print(run_value_masking(commands), run_address_floating(commands))
"""

from __future__ import annotations

__version__: str = "0.1.0"
__all__: list[str] = [
    "__version__",
    "errors",
    "mask",
    "commands",
    "grammar",
    "parser",
    "machine",
    "passes",
    "main",
]
