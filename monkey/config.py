from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Optional


_DEFAULT_PROMPT = ">> "
_DEFAULT_REPL_HOST = "127.0.0.1"
_DEFAULT_REPL_PORT = 8765
_DEFAULT_RECURSION_LIMIT = 50_000


def get_prompt() -> str:
    return os.environ.get("MONKEY_PROMPT", _DEFAULT_PROMPT)


def get_prelude_path() -> Optional[Path]:
    raw = os.environ.get("MONKEY_PRELUDE_PATH", "").strip()
    if not raw:
        return None
    return Path(raw)


def get_log_level() -> int:
    """
    Determine log level from LOGLEVEL environment variable.
    Defaults to WARNING if not set.
    """
    loglevel_env = os.getenv("LOGLEVEL", "").upper()
    if loglevel_env:
        level = getattr(logging, loglevel_env, None)
        if isinstance(level, int):
            return level
    return logging.WARNING


def get_repl_address() -> tuple[str, int]:
    host = os.environ.get("MONKEY_REPL_HOST", _DEFAULT_REPL_HOST)
    port = os.environ.get("MONKEY_REPL_PORT")
    try:
        return host, int(port) if port else _DEFAULT_REPL_PORT
    except ValueError:
        return host, _DEFAULT_REPL_PORT


def get_recursion_limit() -> int:
    """Python recursion limit used while evaluating (MONKEY_RECURSION_LIMIT)."""
    raw = os.environ.get("MONKEY_RECURSION_LIMIT", "").strip()
    try:
        return int(raw) if raw else _DEFAULT_RECURSION_LIMIT
    except ValueError:
        return _DEFAULT_RECURSION_LIMIT
