"""
Command line interface for the RPN runtime.

Usage:
    rpncalc repl
    rpncalc rpn --input "(1 + 2) * 3"
    rpncalc run --input expression.txt
"""

import argparse
import logging
import os
import sys
from typing import Optional, Sequence, TextIO

from .config import get_settings
from .errors import RPNError
from .machine import Machine
from .tokens import render

logger = logging.getLogger(__name__)

EXIT_PROMPT = "exit"


def read_input(value: str) -> str:
    """Contents of the file at `value` if one exists there, else `value` itself"""
    if os.path.isfile(value):
        with open(value, "r", encoding="utf-8") as f:
            return f.read()
    return value


def repl_mode(machine: Machine, stdin: TextIO = None, stdout: TextIO = None) -> int:
    """Read-evaluate-print loop; 'exit' or end of input leaves"""
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    print("Enter REPL mode. Type 'exit' to leave.", file=stdout)
    while True:
        print("> ", end="", file=stdout, flush=True)
        line = stdin.readline()
        if not line:
            break
        line = line.strip()
        if line == EXIT_PROMPT:
            break
        if not line:
            continue
        try:
            print(render(machine.run(line)), file=stdout)
        except RPNError as e:
            print(f"Error: {e}", file=stdout)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rpncalc",
        description="Convert expressions to reverse polish notation and evaluate them.",
    )
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                        help="Logging level (default: RPN_LOG_LEVEL or WARNING)")
    parser.add_argument("--precision", type=int, help="Significant digits for decimal arithmetic")
    parser.add_argument("--strict", action="store_true", default=None,
                        help="Fail on unknown symbols and unbalanced parentheses")

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("repl", help="Enter the REPL mode to evaluate expressions interactively.")

    rpn_parser = subparsers.add_parser(
        "rpn", help="Convert infix, postfix, or prefix expressions to reverse polish notation.")
    rpn_parser.add_argument("-i", "--input", required=True, metavar="STRING_OR_FILE",
                            help="The expression string or path to a file containing the expression.")

    run_parser = subparsers.add_parser("run", help="Evaluate an expression.")
    run_parser.add_argument("-i", "--input", required=True, metavar="STRING_OR_FILE",
                            help="The expression string or path to a file containing the expression.")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()

    logging.basicConfig(
        level=args.log_level or settings.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    if args.precision is not None and args.precision <= 0:
        print("Error: --precision must be positive", file=sys.stderr)
        return 2

    keep_operators = settings.repl_keep_operators if args.command == "repl" else None
    machine = Machine(
        settings=settings,
        keep_operators=keep_operators,
        strict=args.strict,
        precision=args.precision,
    )

    if args.command == "repl":
        return repl_mode(machine)

    try:
        content = read_input(args.input)
    except OSError as e:
        print(f"Error reading input: {e}", file=sys.stderr)
        return 1

    try:
        if args.command == "rpn":
            print(machine.to_rpn(content))
        else:
            print(render(machine.run(content)))
    except RPNError as e:
        logger.debug(f"Evaluation failed with {e.code}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
