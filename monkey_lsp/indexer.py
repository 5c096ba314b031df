from __future__ import annotations

"""
Lightweight indexer for Monkey documents without evaluating code.

The document is run through the real parser, which never aborts on syntax
errors, so partial buffers still yield an index of:
- top-level definitions: `let name = fn(...)`, `let name = macro(...)`,
  and plain `let name = ...` variables
- parser diagnostics with 0-based positions for the editor
"""

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from monkey.ast.nodes import LetStatement, FunctionLiteral, MacroLiteral
from monkey.reader.lexer import Lexer
from monkey.reader.parser import Parser
from monkey.token import KEYWORDS

WORD_RE = re.compile(r"[A-Za-z0-9_]")


@dataclass
class SymbolDef:
    name: str
    kind: str  # "var" | "function" | "macro"
    line: int
    col: int
    detail: str = ""


@dataclass
class DiagnosticEntry:
    message: str
    line: int
    col: int


@dataclass
class DocumentIndex:
    symbols: Dict[str, SymbolDef] = field(default_factory=dict)
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)


def _kind_of(stmt: LetStatement) -> str:
    if isinstance(stmt.value, MacroLiteral):
        return "macro"
    if isinstance(stmt.value, FunctionLiteral):
        return "function"
    return "var"


def _detail_of(stmt: LetStatement, kind: str) -> str:
    if kind in ("function", "macro"):
        params = ", ".join(p.value for p in stmt.value.parameters)
        keyword = "fn" if kind == "function" else "macro"
        return f"{stmt.name.value} = {keyword}({params})"
    return f"let {stmt.name.value}"


def build_index(text: str) -> DocumentIndex:
    idx = DocumentIndex()
    parser = Parser(Lexer(text))
    program = parser.parse_program()

    for stmt in program.statements:
        if not isinstance(stmt, LetStatement):
            continue
        tok = stmt.name.token
        line, col = (tok.line - 1, tok.column - 1) if tok is not None else (0, 0)
        kind = _kind_of(stmt)
        idx.symbols[stmt.name.value] = SymbolDef(
            name=stmt.name.value,
            kind=kind,
            line=line,
            col=col,
            detail=_detail_of(stmt, kind),
        )

    for diag in parser.diagnostics:
        idx.diagnostics.append(
            DiagnosticEntry(message=diag.message, line=max(diag.line - 1, 0), col=max(diag.column - 1, 0))
        )
    return idx


def word_at(text: str, line: int, character: int) -> Optional[str]:
    """Identifier under a 0-based (line, character) position, if any."""
    lines = text.splitlines()
    if line >= len(lines):
        return None
    row = lines[line]
    start = min(character, len(row))
    while start > 0 and WORD_RE.match(row[start - 1]):
        start -= 1
    end = min(character, len(row))
    while end < len(row) and WORD_RE.match(row[end]):
        end += 1
    word = row[start:end]
    return word or None


def hover_text(idx: DocumentIndex, word: str) -> Optional[str]:
    if word in BUILTIN_SIGNATURES:
        return BUILTIN_SIGNATURES[word]
    sdef = idx.symbols.get(word)
    if sdef is not None:
        return f"{sdef.detail} ({sdef.kind}, defined at {sdef.line + 1}:{sdef.col + 1})"
    if word in KEYWORDS:
        return f"keyword {word}"
    return None


# Builtin signatures for quick hover/completion without eval
BUILTIN_SIGNATURES: Dict[str, str] = {
    "len": "len(value) -> length of a string or array",
    "first": "first(array) -> first element or null",
    "last": "last(array) -> last element or null",
    "rest": "rest(array) -> new array without the first element",
    "push": "push(array, value) -> new array with value appended",
    "puts": "puts(values...) -> print each value, returns null",
    "quote": "quote(expression) -> unevaluated AST fragment",
    "unquote": "unquote(expression) -> splice a value into a quote",
}
