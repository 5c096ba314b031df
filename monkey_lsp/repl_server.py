from __future__ import annotations

"""
Simple TCP REPL server for Monkey.

Protocol: JSON per line over TCP.
- Request: {"cmd": "eval", "code": "let x = 1; x + 1"}
- Response: {"ok": true, "result": <inspect string>} or {"ok": false, "error": <message>}

A single Interpreter is kept alive so definitions and macros persist across
requests. Requests are evaluated one at a time.
"""

import json
import logging
import socket
import threading
from typing import Any, Dict, Tuple

from monkey.config import get_repl_address
from monkey.errors import MacroExpansionError
from monkey.interpreter import Interpreter
from monkey.types.objects import Error

logger = logging.getLogger(__name__)


class ReplServer:
    def __init__(self, host: str | None = None, port: int | None = None):
        default_host, default_port = get_repl_address()
        self.host = host or default_host
        self.port = port or default_port
        # Keep a single interpreter to maintain session state
        self.interp = Interpreter(prelude=None)
        self._lock = threading.Lock()

    def evaluate(self, code: str) -> Dict[str, Any]:
        with self._lock:
            try:
                result = self.interp.run(code)
            except MacroExpansionError as ex:
                return {"ok": False, "error": f"macro expansion failed: {ex}"}
        if not result.ok:
            return {"ok": False, "error": "\n".join(result.errors)}
        if isinstance(result.value, Error):
            return {"ok": False, "error": result.value.message}
        return {"ok": True, "result": result.value.inspect()}

    def handle_request(self, line: bytes) -> Dict[str, Any]:
        try:
            req = json.loads(line.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as ex:
            return {"ok": False, "error": f"Invalid request: {ex}"}
        if not isinstance(req, dict):
            return {"ok": False, "error": "Invalid request: expected a JSON object"}
        if req.get("cmd") != "eval":
            return {"ok": False, "error": f"Unknown cmd: {req.get('cmd')}"}
        return self.evaluate(str(req.get("code", "")))

    def serve_forever(self):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            s.bind((self.host, self.port))
            s.listen(5)
            logger.info("monkey REPL server listening on %s:%d", self.host, self.port)
            while True:
                conn, addr = s.accept()
                threading.Thread(target=self._handle_client, args=(conn, addr), daemon=True).start()

    def _handle_client(self, conn: socket.socket, addr: Tuple[str, int]):
        logger.debug("client connected: %s:%d", *addr)
        with conn:
            buf = b""
            while True:
                data = conn.recv(4096)
                if not data:
                    break
                buf += data
                while b"\n" in buf:
                    line, buf = buf.split(b"\n", 1)
                    line = line.strip()
                    if not line:
                        continue
                    resp = self.handle_request(line)
                    conn.sendall((json.dumps(resp) + "\n").encode("utf-8"))


def main() -> None:
    from monkey.config import get_log_level
    logging.basicConfig(level=get_log_level(), format="%(message)s")
    ReplServer().serve_forever()


if __name__ == "__main__":
    main()
