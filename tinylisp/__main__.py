"""Command-line driver: `python -m tinylisp [FILE ...]`."""
from __future__ import annotations

import argparse
import sys

from tinylisp import __version__
from tinylisp.config import get_log_level, get_recursion_limit
from tinylisp.errors import LispError
from tinylisp.interpreter import Interpreter
from tinylisp.logging_config import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tinylisp", description="Run tinylisp programs or a REPL.")
    parser.add_argument("files", nargs="*", help="files to evaluate in order")
    parser.add_argument("-i", "--interactive", action="store_true",
                        help="start the REPL after evaluating FILES")
    parser.add_argument("--prompt", default="", help="prompt shown before each REPL read")
    parser.add_argument("--log-level", default=None, help="logging level (default: $TINYLISP_LOG_LEVEL or WARNING)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level or get_log_level())
    sys.setrecursionlimit(max(sys.getrecursionlimit(), get_recursion_limit()))

    interp = Interpreter()
    for path in args.files:
        try:
            interp.load(path)
        except (LispError, OSError, UnicodeDecodeError) as e:
            print(f"Error: {path}: {e}", file=sys.stderr)
            return 1
    if args.interactive or not args.files:
        interp.repl(prompt=args.prompt)
    return 0


if __name__ == "__main__":
    sys.exit(main())
