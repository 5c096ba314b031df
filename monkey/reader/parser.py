"""
  Monkey Parser

- Precedence climbing over registered prefix/infix handler tables
- Two-token lookahead (`cur_token`, `peek_token`) drives every decision
- Never aborts on a local error: messages accumulate in `errors` and the
  offending construct degrades to a None placeholder, so several syntax
  errors surface in a single pass
"""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import Callable, NamedTuple, Optional

from monkey.token import Token, TokenType
from monkey.reader.lexer import Lexer
from monkey.ast.nodes import (
    Program,
    Statement,
    Expression,
    LetStatement,
    ReturnStatement,
    ExpressionStatement,
    BlockStatement,
    Identifier,
    IntegerLiteral,
    BooleanLiteral,
    StringLiteral,
    ArrayLiteral,
    HashLiteral,
    PrefixExpression,
    InfixExpression,
    IfExpression,
    FunctionLiteral,
    MacroLiteral,
    CallExpression,
    IndexExpression,
)

logger = logging.getLogger(__name__)


class Precedence(IntEnum):
    LOWEST = 1
    EQUALS = 2  # == !=
    COMPARISON = 3  # < >
    SUM = 4  # + -
    PRODUCT = 5  # * /
    PREFIX = 6  # -x !x
    CALL = 7  # fn(x)
    INDEX = 8  # arr[i]


PRECEDENCES: dict[TokenType, Precedence] = {
    TokenType.EQ: Precedence.EQUALS,
    TokenType.NOT_EQ: Precedence.EQUALS,
    TokenType.LT: Precedence.COMPARISON,
    TokenType.GT: Precedence.COMPARISON,
    TokenType.PLUS: Precedence.SUM,
    TokenType.MINUS: Precedence.SUM,
    TokenType.SLASH: Precedence.PRODUCT,
    TokenType.ASTERISK: Precedence.PRODUCT,
    TokenType.LPAREN: Precedence.CALL,
    TokenType.LBRACKET: Precedence.INDEX,
}

PrefixParseFn = Callable[[], Optional[Expression]]
InfixParseFn = Callable[[Optional[Expression]], Optional[Expression]]


class Diagnostic(NamedTuple):
    """A parse error with the position of the token it was reported at."""
    message: str
    line: int
    column: int


class Parser:
    def __init__(self, lexer: Lexer):
        self.lexer = lexer
        self.errors: list[str] = []
        self.diagnostics: list[Diagnostic] = []

        self.prefix_parse_fns: dict[TokenType, PrefixParseFn] = {}
        self.infix_parse_fns: dict[TokenType, InfixParseFn] = {}

        self.register_prefix(TokenType.IDENT, self.parse_identifier)
        self.register_prefix(TokenType.INT, self.parse_integer_literal)
        self.register_prefix(TokenType.STRING, self.parse_string_literal)
        self.register_prefix(TokenType.TRUE, self.parse_boolean)
        self.register_prefix(TokenType.FALSE, self.parse_boolean)
        self.register_prefix(TokenType.BANG, self.parse_prefix_expression)
        self.register_prefix(TokenType.MINUS, self.parse_prefix_expression)
        self.register_prefix(TokenType.LPAREN, self.parse_grouped_expression)
        self.register_prefix(TokenType.IF, self.parse_if_expression)
        self.register_prefix(TokenType.FUNCTION, self.parse_function_literal)
        self.register_prefix(TokenType.MACRO, self.parse_macro_literal)
        self.register_prefix(TokenType.LBRACKET, self.parse_array_literal)
        self.register_prefix(TokenType.LBRACE, self.parse_hash_literal)

        for tok_type in (
            TokenType.PLUS,
            TokenType.MINUS,
            TokenType.SLASH,
            TokenType.ASTERISK,
            TokenType.EQ,
            TokenType.NOT_EQ,
            TokenType.LT,
            TokenType.GT,
        ):
            self.register_infix(tok_type, self.parse_infix_expression)
        self.register_infix(TokenType.LPAREN, self.parse_call_expression)
        self.register_infix(TokenType.LBRACKET, self.parse_index_expression)

        # Read two tokens, so cur_token and peek_token are both set
        self.cur_token: Token = self.lexer.next_token()
        self.peek_token: Token = self.lexer.next_token()

    # --- Handler tables ---

    def register_prefix(self, tok_type: TokenType, fn: PrefixParseFn) -> None:
        self.prefix_parse_fns[tok_type] = fn

    def register_infix(self, tok_type: TokenType, fn: InfixParseFn) -> None:
        self.infix_parse_fns[tok_type] = fn

    # --- Token helpers ---

    def next_token(self) -> None:
        self.cur_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def cur_token_is(self, tok_type: TokenType) -> bool:
        return self.cur_token.type == tok_type

    def peek_token_is(self, tok_type: TokenType) -> bool:
        return self.peek_token.type == tok_type

    def expect_peek(self, tok_type: TokenType) -> bool:
        """Advance only if the next token has the expected type; else record an error."""
        if self.peek_token_is(tok_type):
            self.next_token()
            return True
        self.peek_error(tok_type)
        return False

    def peek_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.peek_token.type, Precedence.LOWEST)

    def cur_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.cur_token.type, Precedence.LOWEST)

    # --- Errors ---

    def _error(self, message: str, tok: Token) -> None:
        self.errors.append(message)
        self.diagnostics.append(Diagnostic(message, tok.line, tok.column))

    def peek_error(self, tok_type: TokenType) -> None:
        self._error(
            f"expected next token to be {tok_type}, got {self.peek_token.type} instead",
            self.peek_token,
        )

    def no_prefix_parse_fn_error(self, tok_type: TokenType) -> None:
        self._error(f"no prefix parse function for {tok_type} found", self.cur_token)

    # --- Statements ---

    def parse_program(self) -> Program:
        program = Program()
        while not self.cur_token_is(TokenType.EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                program.statements.append(stmt)
            self.next_token()
        if self.errors:
            logger.debug("parsed program with %d error(s)", len(self.errors))
        return program

    def parse_statement(self) -> Optional[Statement]:
        match self.cur_token.type:
            case TokenType.LET:
                return self.parse_let_statement()
            case TokenType.RETURN:
                return self.parse_return_statement()
            case _:
                return self.parse_expression_statement()

    def parse_let_statement(self) -> Optional[LetStatement]:
        tok = self.cur_token
        if not self.expect_peek(TokenType.IDENT):
            return None
        name = Identifier(self.cur_token.literal, token=self.cur_token)
        if not self.expect_peek(TokenType.ASSIGN):
            return None
        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)
        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()
        return LetStatement(name, value, token=tok)

    def parse_return_statement(self) -> ReturnStatement:
        tok = self.cur_token
        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)
        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()
        return ReturnStatement(value, token=tok)

    def parse_expression_statement(self) -> ExpressionStatement:
        tok = self.cur_token
        expression = self.parse_expression(Precedence.LOWEST)
        # The trailing semicolon is optional, so `5 + 5` works in the REPL
        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()
        return ExpressionStatement(expression, token=tok)

    def parse_block_statement(self) -> BlockStatement:
        block = BlockStatement(token=self.cur_token)
        self.next_token()
        while not self.cur_token_is(TokenType.RBRACE) and not self.cur_token_is(TokenType.EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                block.statements.append(stmt)
            self.next_token()
        if self.cur_token_is(TokenType.EOF):
            self._error("expected next token to be }, got EOF instead", self.cur_token)
        return block

    # --- Expressions ---

    def parse_expression(self, precedence: Precedence) -> Optional[Expression]:
        prefix = self.prefix_parse_fns.get(self.cur_token.type)
        if prefix is None:
            self.no_prefix_parse_fn_error(self.cur_token.type)
            return None
        left = prefix()

        while not self.peek_token_is(TokenType.SEMICOLON) and precedence < self.peek_precedence():
            infix = self.infix_parse_fns.get(self.peek_token.type)
            if infix is None:
                return left
            self.next_token()
            left = infix(left)

        return left

    def parse_identifier(self) -> Identifier:
        return Identifier(self.cur_token.literal, token=self.cur_token)

    def parse_integer_literal(self) -> Optional[IntegerLiteral]:
        tok = self.cur_token
        try:
            value = int(tok.literal)
        except ValueError:
            self._error(f"could not parse {tok.literal!r} as integer", tok)
            return None
        return IntegerLiteral(value, token=tok)

    def parse_string_literal(self) -> StringLiteral:
        return StringLiteral(self.cur_token.literal, token=self.cur_token)

    def parse_boolean(self) -> BooleanLiteral:
        return BooleanLiteral(self.cur_token_is(TokenType.TRUE), token=self.cur_token)

    def parse_prefix_expression(self) -> PrefixExpression:
        tok = self.cur_token
        self.next_token()
        right = self.parse_expression(Precedence.PREFIX)
        return PrefixExpression(tok.literal, right, token=tok)

    def parse_infix_expression(self, left: Optional[Expression]) -> InfixExpression:
        tok = self.cur_token
        precedence = self.cur_precedence()
        self.next_token()
        right = self.parse_expression(precedence)
        return InfixExpression(left, tok.literal, right, token=tok)

    def parse_grouped_expression(self) -> Optional[Expression]:
        self.next_token()
        expression = self.parse_expression(Precedence.LOWEST)
        if not self.expect_peek(TokenType.RPAREN):
            return None
        return expression

    def parse_if_expression(self) -> Optional[IfExpression]:
        tok = self.cur_token
        if not self.expect_peek(TokenType.LPAREN):
            return None
        self.next_token()
        condition = self.parse_expression(Precedence.LOWEST)
        if not self.expect_peek(TokenType.RPAREN):
            return None
        if not self.expect_peek(TokenType.LBRACE):
            return None
        consequence = self.parse_block_statement()

        alternative = None
        if self.peek_token_is(TokenType.ELSE):
            self.next_token()
            if not self.expect_peek(TokenType.LBRACE):
                return None
            alternative = self.parse_block_statement()

        return IfExpression(condition, consequence, alternative, token=tok)

    def parse_function_parameters(self) -> Optional[list[Identifier]]:
        identifiers: list[Identifier] = []
        if self.peek_token_is(TokenType.RPAREN):
            self.next_token()
            return identifiers

        if not self.expect_peek(TokenType.IDENT):
            return None
        identifiers.append(Identifier(self.cur_token.literal, token=self.cur_token))

        while self.peek_token_is(TokenType.COMMA):
            self.next_token()
            if not self.expect_peek(TokenType.IDENT):
                return None
            identifiers.append(Identifier(self.cur_token.literal, token=self.cur_token))

        if not self.expect_peek(TokenType.RPAREN):
            return None
        return identifiers

    def _parse_parameters_and_body(self) -> Optional[tuple[list[Identifier], BlockStatement]]:
        if not self.expect_peek(TokenType.LPAREN):
            return None
        parameters = self.parse_function_parameters()
        if parameters is None:
            return None
        if not self.expect_peek(TokenType.LBRACE):
            return None
        return parameters, self.parse_block_statement()

    def parse_function_literal(self) -> Optional[FunctionLiteral]:
        tok = self.cur_token
        parsed = self._parse_parameters_and_body()
        if parsed is None:
            return None
        parameters, body = parsed
        return FunctionLiteral(parameters, body, token=tok)

    def parse_macro_literal(self) -> Optional[MacroLiteral]:
        tok = self.cur_token
        parsed = self._parse_parameters_and_body()
        if parsed is None:
            return None
        parameters, body = parsed
        return MacroLiteral(parameters, body, token=tok)

    def parse_expression_list(self, end: TokenType) -> Optional[list[Expression]]:
        """Comma separated expressions up to `end`; shared by calls and arrays."""
        items: list[Expression] = []
        if self.peek_token_is(end):
            self.next_token()
            return items

        self.next_token()
        items.append(self.parse_expression(Precedence.LOWEST))
        while self.peek_token_is(TokenType.COMMA):
            self.next_token()
            self.next_token()
            items.append(self.parse_expression(Precedence.LOWEST))

        if not self.expect_peek(end):
            return None
        return items

    def parse_call_expression(self, function: Optional[Expression]) -> Optional[CallExpression]:
        tok = self.cur_token
        arguments = self.parse_expression_list(TokenType.RPAREN)
        if arguments is None:
            return None
        return CallExpression(function, arguments, token=tok)

    def parse_index_expression(self, left: Optional[Expression]) -> Optional[IndexExpression]:
        tok = self.cur_token
        self.next_token()
        index = self.parse_expression(Precedence.LOWEST)
        if not self.expect_peek(TokenType.RBRACKET):
            return None
        return IndexExpression(left, index, token=tok)

    def parse_array_literal(self) -> Optional[ArrayLiteral]:
        tok = self.cur_token
        elements = self.parse_expression_list(TokenType.RBRACKET)
        if elements is None:
            return None
        return ArrayLiteral(elements, token=tok)

    def parse_hash_literal(self) -> Optional[HashLiteral]:
        tok = self.cur_token
        pairs: list[tuple[Expression, Expression]] = []

        while not self.peek_token_is(TokenType.RBRACE):
            self.next_token()
            key = self.parse_expression(Precedence.LOWEST)
            if not self.expect_peek(TokenType.COLON):
                return None
            self.next_token()
            value = self.parse_expression(Precedence.LOWEST)
            pairs.append((key, value))
            if not self.peek_token_is(TokenType.RBRACE) and not self.expect_peek(TokenType.COMMA):
                return None

        if not self.expect_peek(TokenType.RBRACE):
            return None
        return HashLiteral(pairs, token=tok)


def parse(source: str) -> tuple[Program, list[str]]:
    """Parse `source` into a Program plus the accumulated syntax-error messages."""
    parser = Parser(Lexer(source))
    program = parser.parse_program()
    return program, parser.errors
