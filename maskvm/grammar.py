"""
grammar.py — PEG grammar for one maskvm command line (Parsimonious).

Two alternatives are tried in order; the whole line must be consumed:

    mask = XXXXXXXXXXXXXXXXXXXXXXXXXXXXX1XXXX0X
    mem[8] = 11

The mask body is accepted as free text here and validated by
:func:`maskvm.mask.parse_mask`, which reports the exact bad column.
"""

from __future__ import annotations

from parsimonious.grammar import Grammar

COMMAND_RULES = r'''
    command     = set_mask / assign

    set_mask    = "mask = " mask_body
    mask_body   = ~".*"

    assign      = "mem[" number "] = " number
    number      = ~"[0-9]+"
'''

COMMAND_GRAMMAR = Grammar(COMMAND_RULES)

# Offset of the mask body within a ``mask = ...`` line.
MASK_BODY_OFFSET = len("mask = ")
