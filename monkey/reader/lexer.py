"""
  Monkey Lexer

- Streaming, lazy tokenizing: `lex` is a generator of Token records
- Always terminated by exactly one EOF token
- Never raises: unknown characters become ILLEGAL tokens and are reported
  later by the parser
- Positions are 1-based (line, column)
"""

from __future__ import annotations

import re
from typing import Iterator

from monkey.token import Token, TokenType, lookup_ident


TOKEN_RE = re.compile(
    r"(?P<newline>\n)"
    r"|(?P<space>[ \t\r]+)"
    r"|(?P<comment>//[^\n]*)"  # single-line comment
    r"|(?P<ident>[A-Za-z_][A-Za-z0-9_]*)"  # identifiers and keywords
    r"|(?P<int>[0-9]+)"
    r'|(?P<string>"(?P<sbody>(?:\\[\s\S]|[^\\"])*)"?)'  # double-quoted, possibly unterminated
    r"|(?P<op>==|!=|[=+\-!*/<>,;:(){}\[\]])"
)

OPERATORS: dict[str, TokenType] = {
    "=": TokenType.ASSIGN,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "!": TokenType.BANG,
    "*": TokenType.ASTERISK,
    "/": TokenType.SLASH,
    "<": TokenType.LT,
    ">": TokenType.GT,
    "==": TokenType.EQ,
    "!=": TokenType.NOT_EQ,
    ",": TokenType.COMMA,
    ";": TokenType.SEMICOLON,
    ":": TokenType.COLON,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
}

ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    '"': '"',
    "\\": "\\",
}


def _unescape(body: str) -> str:
    out: list[str] = []
    i = 0
    while i < len(body):
        ch = body[i]
        if ch == "\\" and i + 1 < len(body):
            nxt = body[i + 1]
            out.append(ESCAPES.get(nxt, "\\" + nxt))
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def lex(source: str) -> Iterator[Token]:
    """Token generator: yields Token records, ending with one EOF token."""
    pos = 0
    n = len(source)
    line = 1
    line_start = 0

    while pos < n:
        column = pos - line_start + 1
        m = TOKEN_RE.match(source, pos)
        if not m:
            yield Token(TokenType.ILLEGAL, source[pos], line, column)
            pos += 1
            continue

        kind = m.lastgroup
        text = m.group(kind)
        pos = m.end()

        if kind == "newline":
            line += 1
            line_start = pos
        elif kind in ("space", "comment"):
            continue
        elif kind == "ident":
            yield Token(lookup_ident(text), text, line, column)
        elif kind == "int":
            yield Token(TokenType.INT, text, line, column)
        elif kind == "string":
            yield Token(TokenType.STRING, _unescape(m.group("sbody")), line, column)
            # Strings may span lines; keep line accounting correct.
            newlines = text.count("\n")
            if newlines:
                line += newlines
                line_start = m.start() + text.rfind("\n") + 1
        else:
            yield Token(OPERATORS[text], text, line, column)

    yield Token(TokenType.EOF, "", line, pos - line_start + 1)


class Lexer:
    """Pull-style wrapper around `lex` for the parser's two-token lookahead."""

    def __init__(self, source: str):
        self.source = source
        self._tokens = lex(source)
        self._eof: Token | None = None

    def next_token(self) -> Token:
        if self._eof is not None:
            return self._eof
        tok = next(self._tokens)
        if tok.type == TokenType.EOF:
            self._eof = tok
        return tok

    def __iter__(self) -> Iterator[Token]:
        while True:
            tok = self.next_token()
            yield tok
            if tok.type == TokenType.EOF:
                return
