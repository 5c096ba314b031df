"""Line-based read-eval-print loop.

Each line is one session unit: definitions and macros persist across lines,
but parse errors or a failed macro expansion only discard the current line.
"""

from __future__ import annotations

import logging
from typing import TextIO

from monkey.config import get_prompt
from monkey.errors import MacroExpansionError
from monkey.interpreter import Interpreter, EvalResult

logger = logging.getLogger(__name__)


def print_parser_errors(out: TextIO, errors: list[str]) -> None:
    out.write("parser errors:\n")
    for msg in errors:
        out.write(f"\t{msg}\n")


def print_result(out: TextIO, result: EvalResult) -> None:
    if not result.ok:
        print_parser_errors(out, result.errors)
    elif result.value is not None and not result.silent:
        out.write(result.value.inspect())
        out.write("\n")


def start(in_stream: TextIO, out: TextIO, interpreter: Interpreter | None = None) -> None:
    interp = interpreter or Interpreter()
    prompt = get_prompt()
    while True:
        out.write(prompt)
        out.flush()
        line = in_stream.readline()
        if not line:
            return
        if not line.strip():
            continue
        try:
            result = interp.run(line)
        except MacroExpansionError as ex:
            logger.debug("macro expansion aborted: %s", ex)
            out.write(f"macro expansion failed: {ex}\n")
            continue
        print_result(out, result)
