"""Runtime environment for Monkey.

The Environment stores bindings of names to evaluated Monkey values and
supports nested scopes via an `outer` link. Functions and macros hold a
reference to the Environment they were defined in, which gives closures.
"""

from __future__ import annotations

from io import StringIO
from typing import Optional

from monkey import MonkeyValue


class Environment:
    """Hierarchical mapping from names to Monkey values."""

    __slots__ = ("store", "outer")

    def __init__(self, outer: Optional[Environment] = None):
        self.store: dict[str, MonkeyValue] = {}
        self.outer: Environment | None = outer

    def find(self, name: str) -> Optional[Environment]:
        """Find the nearest environment in the chain that binds `name`."""
        env: Optional[Environment] = self
        while env is not None:
            if name in env.store:
                return env
            env = env.outer
        return None

    def get(self, name: str) -> Optional[MonkeyValue]:
        """Look up `name` along the chain; None when it is not bound anywhere."""
        env = self.find(name)
        if env is None:
            return None
        return env.store[name]

    def set(self, name: str, value: MonkeyValue) -> MonkeyValue:
        """Bind `name` in this frame. Outer bindings are shadowed, never mutated."""
        self.store[name] = value
        return value

    def __contains__(self, name: str) -> bool:
        return self.find(name) is not None

    def _write_vars(self, buffer: StringIO) -> None:
        buffer.write("{")
        buffer.write(", ".join(f"{k}: {v.inspect()}" for k, v in self.store.items()))
        buffer.write("}")

    def __str__(self) -> str:
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")  # indicate parent exists
            return buffer.getvalue()

    def __repr__(self) -> str:
        with StringIO() as buffer:
            buffer.write("<Environment chain: ")
            chain = []
            env = self
            while env is not None:
                env_buf = StringIO()
                env._write_vars(env_buf)
                chain.append(env_buf.getvalue())
                env = env.outer
            buffer.write(" -> ".join(chain))
            buffer.write(">")
            return buffer.getvalue()


def new_environment() -> Environment:
    return Environment()


def new_enclosed_environment(outer: Environment) -> Environment:
    return Environment(outer=outer)
