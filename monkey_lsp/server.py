from __future__ import annotations

"""
A minimal pygls-based Language Server for Monkey.

Features:
- Text synchronization and document store
- Diagnostics: every parser error, at the token it was reported on
- Hover: builtin signatures, keywords and top-level definitions
- Completion: builtins, keywords and top-level definitions
- Document Symbols: from the indexer

Note: We never evaluate the buffer. We build a static index per document.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from pygls.server import LanguageServer
from lsprotocol.types import (
    TEXT_DOCUMENT_COMPLETION,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_CLOSE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DOCUMENT_SYMBOL,
    TEXT_DOCUMENT_HOVER,
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    CompletionOptions,
    CompletionParams,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    DidOpenTextDocumentParams,
    DocumentSymbol,
    DocumentSymbolParams,
    Hover,
    HoverParams,
    MarkupContent,
    MarkupKind,
    Position,
    Range,
    SymbolKind,
)

from monkey import __version__
from monkey.token import KEYWORDS
from monkey_lsp.indexer import (
    BUILTIN_SIGNATURES,
    DocumentIndex,
    build_index,
    hover_text,
    word_at,
)


@dataclass
class DocumentState:
    text: str
    index: DocumentIndex


class MonkeyLanguageServer(LanguageServer):
    CMD_NAME = "monkey-ls"

    def __init__(self):
        super().__init__(self.CMD_NAME, __version__)
        self.documents: Dict[str, DocumentState] = {}


ls = MonkeyLanguageServer()

SYMBOL_KINDS = {
    "function": SymbolKind.Function,
    "macro": SymbolKind.Operator,
    "var": SymbolKind.Variable,
}


# --- Text sync ---
def _update(uri: str, text: str) -> None:
    idx = build_index(text)
    ls.documents[uri] = DocumentState(text=text, index=idx)
    ls.publish_diagnostics(uri, to_diagnostics(idx))


@ls.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(params: DidOpenTextDocumentParams):
    _update(params.text_document.uri, params.text_document.text or "")


@ls.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(params: DidChangeTextDocumentParams):
    uri = params.text_document.uri
    # Re-read the synced document; pygls applies incremental edits for us
    text = ls.workspace.get_text_document(uri).source
    _update(uri, text)


@ls.feature(TEXT_DOCUMENT_DID_CLOSE)
def did_close(params: DidCloseTextDocumentParams):
    uri = params.text_document.uri
    ls.documents.pop(uri, None)
    ls.publish_diagnostics(uri, [])


# --- Diagnostics ---
def to_diagnostics(idx: DocumentIndex) -> List[Diagnostic]:
    diags: List[Diagnostic] = []
    for entry in idx.diagnostics:
        diags.append(
            Diagnostic(
                range=Range(
                    start=Position(line=entry.line, character=entry.col),
                    end=Position(line=entry.line, character=entry.col + 1),
                ),
                message=entry.message,
                severity=DiagnosticSeverity.Error,
                source=MonkeyLanguageServer.CMD_NAME,
            )
        )
    return diags


# --- Hover ---
@ls.feature(TEXT_DOCUMENT_HOVER)
def on_hover(params: HoverParams) -> Optional[Hover]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None
    word = word_at(state.text, params.position.line, params.position.character)
    if not word:
        return None
    contents = hover_text(state.index, word)
    if contents is None:
        return None
    return Hover(contents=MarkupContent(kind=MarkupKind.PlainText, value=contents))


# --- Completion ---
@ls.feature(TEXT_DOCUMENT_COMPLETION, CompletionOptions(resolve_provider=False))
def on_completion(params: CompletionParams) -> CompletionList:
    state = ls.documents.get(params.text_document.uri)
    items: List[CompletionItem] = []
    for name, sig in BUILTIN_SIGNATURES.items():
        items.append(CompletionItem(label=name, kind=CompletionItemKind.Function, detail=sig))
    for word in KEYWORDS:
        items.append(CompletionItem(label=word, kind=CompletionItemKind.Keyword))
    if state:
        for name, sdef in state.index.symbols.items():
            kind = CompletionItemKind.Function if sdef.kind != "var" else CompletionItemKind.Variable
            items.append(CompletionItem(label=name, kind=kind, detail=sdef.detail))
    return CompletionList(is_incomplete=False, items=items)


# --- Document Symbols ---
@ls.feature(TEXT_DOCUMENT_DOCUMENT_SYMBOL)
def on_document_symbols(params: DocumentSymbolParams) -> Optional[List[DocumentSymbol]]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None
    symbols: List[DocumentSymbol] = []
    for name, sdef in state.index.symbols.items():
        rng = Range(
            start=Position(line=sdef.line, character=sdef.col),
            end=Position(line=sdef.line, character=sdef.col + len(name)),
        )
        symbols.append(
            DocumentSymbol(
                name=name,
                detail=sdef.detail,
                kind=SYMBOL_KINDS[sdef.kind],
                range=rng,
                selection_range=rng,
            )
        )
    return symbols


def main() -> None:
    # Run the language server over stdio
    ls.start_io()


if __name__ == "__main__":
    main()
