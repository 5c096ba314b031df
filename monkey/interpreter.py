from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from typing import Optional

from monkey.config import get_recursion_limit
from monkey.errors import MonkeyParseError
from monkey.reader.lexer import Lexer
from monkey.reader.parser import Parser
from monkey.ast.nodes import Program, LetStatement
from monkey.types.environment import Environment
from monkey.types.objects import Object, Error
from monkey.evaluation.evaluator import evaluate
from monkey.evaluation.macro_expansion import define_macros, expand_macros

logger = logging.getLogger(__name__)


@dataclass
class EvalResult:
    value: Optional[Object] = None
    errors: list[str] = field(default_factory=list)
    # True when the unit ended in a `let`, which has nothing worth echoing
    silent: bool = False

    @property
    def ok(self) -> bool:
        return not self.errors


class Interpreter:
    """
    Runs Monkey source one unit at a time (one REPL line or one file).
    Maintains a value Environment and a macro Environment across calls.
    """

    def __init__(self, prelude: str | None = None):
        # Every Monkey call costs about a dozen Python frames
        limit = get_recursion_limit()
        if sys.getrecursionlimit() < limit:
            sys.setrecursionlimit(limit)
        self.env: Environment = Environment()
        self.macro_env: Environment = Environment()
        if prelude:
            self.eval(prelude)

    def parse(self, source: str) -> Program:
        parser = Parser(Lexer(source))
        program = parser.parse_program()
        if parser.errors:
            raise MonkeyParseError(parser.errors)
        return program

    def eval_program(self, program: Program) -> Object:
        define_macros(program, self.macro_env)
        expanded = expand_macros(program, self.macro_env)
        try:
            return evaluate(expanded, self.env)
        except RecursionError:
            logger.debug("evaluation exceeded the recursion limit of %d", sys.getrecursionlimit())
            return Error("stack overflow")

    def eval(self, source: str) -> Object:
        """Parse, expand macros and evaluate `source`.

        Raises MonkeyParseError without evaluating anything if the source has
        syntax errors, and MacroExpansionError if a macro breaks its contract.
        """
        logger.debug("evaluating %d character(s) of source", len(source))
        return self.eval_program(self.parse(source))

    def run(self, source: str) -> EvalResult:
        """Like eval, but parse errors are reported in the result instead of raised."""
        try:
            program = self.parse(source)
        except MonkeyParseError as ex:
            return EvalResult(errors=ex.errors)
        silent = bool(program.statements) and isinstance(program.statements[-1], LetStatement)
        return EvalResult(value=self.eval_program(program), silent=silent)
