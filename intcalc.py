#!/usr/bin/env python3
"""intcalc - top-level CLI wrapper for the integer calculator

Compatible with Python 3.8+.

Usage examples:
  ./intcalc.py "2 + 3 * 4"
  echo "(5 + 3) % 3" | ./intcalc.py
  ./intcalc.py --ast --bits 64 < expressions.txt
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Iterable, List, Optional, TextIO

from intcalc.ast_nodes import print_ast
from intcalc.calculator import Calculator
from intcalc.config import CalculatorConfig


def _lines(args: argparse.Namespace, stdin: TextIO) -> Iterable[str]:
    if args.expression:
        yield from args.expression
        return
    for raw in stdin:
        line = raw.rstrip("\r\n")
        # blank input lines are not expressions
        if not line.strip(" \t"):
            continue
        yield line


def main(argv: Optional[List[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    ap = argparse.ArgumentParser(prog="intcalc", description="Fixed-width integer calculator")
    ap.add_argument("expression", nargs="*", help="Expression(s) to evaluate; read stdin lines if omitted")
    ap.add_argument("--ast", action="store_true", help="Print the parsed tree before each value")
    ap.add_argument("--bits", type=int, default=None, help="Integer width in bits (default: $INTCALC_BITS or 32)")
    ap.add_argument("--max-depth", type=int, default=None, help="Nesting limit, at most 300 (default: $INTCALC_MAX_DEPTH or 200)")
    ap.add_argument("-v", "--verbose", action="store_true", help="Log each stage to stderr")
    args = ap.parse_args(argv)

    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s: %(message)s",
    )

    try:
        env = CalculatorConfig.from_env()
        config = CalculatorConfig(
            bits=args.bits if args.bits is not None else env.bits,
            max_depth=args.max_depth if args.max_depth is not None else env.max_depth,
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    calc = Calculator(config)
    failed = 0
    for line in _lines(args, sys.stdin):
        result = calc.calculate(line)
        if args.ast and result.ast is not None:
            sys.stdout.write("Parsed:\n" + print_ast(result.ast))
        if result.success:
            print(result.value)
        else:
            failed += 1
            print(f"Error: {result.error}", file=sys.stderr)
        sys.stdout.flush()

    return 1 if failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
