"""Monkey Language Server and REPL integration package.

This package provides:
- A pygls-based Language Server for the Monkey language.
- A lightweight indexer that parses documents without evaluating them.
- A simple TCP REPL server to evaluate code via the Interpreter.
"""

__all__ = [
    "server",
    "indexer",
    "repl_server",
]
