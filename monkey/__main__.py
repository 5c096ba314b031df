"""Command line entry point: `monkey [FILE]` or `python -m monkey [FILE]`."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from monkey import __version__
from monkey.config import get_log_level, get_prelude_path
from monkey.errors import MacroExpansionError, MonkeyParseError
from monkey.interpreter import Interpreter
from monkey.repl import print_parser_errors, start
from monkey.types.objects import Error


def run_file(interp: Interpreter, path: Path) -> int:
    try:
        source = path.read_text(encoding="utf-8")
    except OSError as ex:
        print(f"Error: cannot read {path}: {ex}", file=sys.stderr)
        return 1
    try:
        result = interp.eval(source)
    except MonkeyParseError as ex:
        print_parser_errors(sys.stderr, ex.errors)
        return 1
    except MacroExpansionError as ex:
        print(f"macro expansion failed: {ex}", file=sys.stderr)
        return 1
    if isinstance(result, Error):
        print(result.inspect(), file=sys.stderr)
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="monkey", description="Monkey language interpreter")
    parser.add_argument("file", nargs="?", type=Path, help="Source file to run (omit for a REPL)")
    parser.add_argument("--prelude", type=Path, default=None,
                        help="Source file evaluated before anything else "
                             "(default: $MONKEY_PRELUDE_PATH)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    args = parser.parse_args(argv)

    # Configure logging from LOGLEVEL environment variable
    logging.basicConfig(level=get_log_level(), format="%(message)s", stream=sys.stderr)

    interp = Interpreter()
    prelude = args.prelude or get_prelude_path()
    if prelude is not None:
        status = run_file(interp, prelude)
        if status:
            return status

    if args.file is not None:
        return run_file(interp, args.file)

    print(f"Monkey {__version__}. Type in commands.")
    start(sys.stdin, sys.stdout, interp)
    return 0


if __name__ == "__main__":
    sys.exit(main())
