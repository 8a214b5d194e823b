"""Command line inspection of hoisted formulas.

    python -m formula "(+ a (* a b))"
    echo "(cell= (inc x))" | python -m formula --mode expand
"""

from __future__ import annotations

import argparse
import logging
import sys

from formula.compiler import Compiler
from formula.config import get_log_level
from formula.debug_utils.pprint import format_form
from formula.errors import FormulaError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="formula",
        description="Hoist the dependencies out of a formula expression.",
    )
    parser.add_argument("expr", nargs="?", help="expression to hoist (read from stdin when omitted)")
    parser.add_argument(
        "--mode",
        choices=("hoist", "cell", "expand"),
        default="hoist",
        help="print the closure and arguments, the formula cell call, or the macro expansion",
    )
    parser.add_argument(
        "--local",
        action="append",
        default=[],
        metavar="NAME",
        help="name bound by the surrounding code (repeatable)",
    )
    parser.add_argument("--color", action="store_true", help="colorize output")
    parser.add_argument("--verbose", "-v", action="store_true", help="log hoisting decisions")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else get_log_level(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    source = args.expr if args.expr is not None else sys.stdin.read()
    options = {"max_line_length": 80, "max_depth": 64, "color": args.color}
    compiler = Compiler(locals=args.local)

    try:
        if args.mode == "hoist":
            closure, arguments = compiler.hoist(source)
            print(format_form(closure, options=options))
            print(format_form(arguments, options=options) if arguments else "()")
        elif args.mode == "cell":
            print(format_form(compiler.cell(source), options=options))
        else:
            print(format_form(compiler.macroexpand(source), options=options))
    except FormulaError as ex:
        print(f"error: {ex}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
